"""Markdown note rendering."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from paravault.models import ClassificationRecord, Engagement, ResearchBundle, ResearchResult
from paravault.utils.text import slugify
from paravault.utils.yaml_util import to_yaml_string

NOTE_EXTENSION = ".md"
MAX_SLUG_LENGTH = 50
DEFAULT_CAPTURE_LINK = "00 - Inbox/📥 Quick Capture|Quick Capture"


def note_filename(title: str) -> str:
    """Derive a note file name from a title.

    >>> note_filename("Building RAG Systems: Claude!!")
    'building-rag-systems-claude.md'
    """
    slug = slugify(title, max_length=MAX_SLUG_LENGTH) or "untitled"
    return slug + NOTE_EXTENSION


def relevance_label(relevance: float) -> str:
    if relevance >= 0.8:
        return "High"
    if relevance >= 0.6:
        return "Medium"
    return "Low"


def _count(value: Optional[int]) -> str:
    return "-" if value is None else str(value)


def _engagement_line(engagement: Engagement) -> str:
    return (
        f"**Engagement:** {_count(engagement.likes)} ❤️ · "
        f"{_count(engagement.shares)} 🔄 · {_count(engagement.replies)} 💬"
    )


def _quote(text: str) -> str:
    lines = text.strip().splitlines() or [""]
    return "\n".join(f"> {line}".rstrip() for line in lines)


def _research_item(position: int, result: ResearchResult) -> str:
    relevance = result.relevance if result.relevance is not None else 0.0
    lines = [
        f"{position}. **[{result.title}]({result.url})**",
        f"   - {result.summary or result.snippet}",
        f"   - Relevance: {relevance_label(relevance)} ({relevance * 100:.0f}%)",
    ]
    if result.reason:
        lines.append(f"   - Why: {result.reason}")
    return "\n".join(lines)


class NoteFormatter:
    """Renders a classified post (and optional research) as an Obsidian note."""

    def __init__(self, *, source_tag: str = "twitter", capture_link: str = DEFAULT_CAPTURE_LINK) -> None:
        self.source_tag = source_tag
        self.capture_link = capture_link

    def frontmatter(self, record: ClassificationRecord, source_ref: str, created: date) -> str:
        metadata = {
            "created": created,
            "source": self.source_tag,
            "author": record.author,
            "author_name": record.author_name,
            "date": record.date or "unknown",
            "tags": list(record.tags),
            "category": record.category,
            "confidence": record.confidence,
            "screenshot": f"[[{source_ref}]]",
        }
        return "---\n" + to_yaml_string(metadata) + "---"

    def research_section(self, bundle: Optional[ResearchBundle]) -> Optional[str]:
        if bundle is None or not bundle.results:
            return None
        parts = ["## Auto-Research", f'**Search Query:** "{bundle.query}"']
        if not bundle.is_filtered:
            parts.append("_Relevance filtering was unavailable; results are unranked._")
        parts.append("### Related Resources")
        parts.extend(
            _research_item(position, result)
            for position, result in enumerate(bundle.results, start=1)
        )
        return "\n\n".join(parts)

    def format(
        self,
        record: ClassificationRecord,
        source_ref: str,
        bundle: Optional[ResearchBundle] = None,
        *,
        created: Optional[date] = None,
    ) -> str:
        created = created or date.today()

        header = [
            f"**Author:** {record.author_name} ({record.author})",
            f"**Date:** {record.date or 'Unknown'}",
        ]
        if not record.engagement.is_empty:
            header.append(_engagement_line(record.engagement))

        blocks: List[str] = [
            self.frontmatter(record, source_ref, created),
            f"# {record.title}",
            "\n".join(header),
            "## Post Content",
            _quote(record.text),
        ]
        if record.has_images:
            blocks.append(f"![[{source_ref}]]")
        blocks.extend(["## Key Insights", record.summary, "## Relevance", record.relevance])

        research = self.research_section(bundle)
        if research:
            blocks.append(research)

        blocks.extend(
            [
                "## Related Notes",
                "-",
                "---\n"
                f"**Captured from:** [[{self.capture_link}]]\n"
                f"**Screenshot:** [[{source_ref}]]",
            ]
        )
        return "\n\n".join(blocks) + "\n"
