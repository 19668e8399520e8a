"""Tests for the in-vault processing log."""

from __future__ import annotations

from datetime import datetime, timezone

from paravault.vault.run_log import DEFAULT_HEADER, SEPARATOR, RunLog, render_entry

LOG_FILE = "00 - Inbox/Xeet Processing Log.md"


def _stamp(day: int) -> datetime:
    return datetime(2025, 1, day, 9, 30, tzinfo=timezone.utc)


class TestRenderEntry:
    def test_fields(self, make_record, add_screenshot) -> None:
        item = add_screenshot("post.png")

        entry = render_entry(
            make_record(), item, "03 - Resources/X Insights/building-rag.md", _stamp(14)
        )

        assert entry.startswith("## 2025-01-14 - Building RAG Systems with Claude\n\n")
        assert "- **Author:** @swyx\n" in entry
        assert "- **Category:** resource\n" in entry
        assert "- **Tags:** ai, rag, claude, llm, documentation\n" in entry
        assert "- **Note:** [[building-rag]]\n" in entry
        assert "- **Screenshot:** [[Attachments/Xeets/post.png]]\n" in entry
        assert "- **Processed:** 2025-01-14T09:30:00+00:00\n" in entry


class TestRunLog:
    def test_creates_log_with_header(self, vault, make_record, add_screenshot) -> None:
        log = RunLog(vault, LOG_FILE)

        log.append(make_record(), add_screenshot("a.png"), "notes/a.md", timestamp=_stamp(1))

        content = vault.read_text(LOG_FILE)
        assert content.startswith(DEFAULT_HEADER)
        assert content.count("# Xeet Processing Log") == 1

    def test_newest_first(self, vault, make_record, add_screenshot) -> None:
        log = RunLog(vault, LOG_FILE)
        for day, title in [(1, "First"), (2, "Second"), (3, "Third")]:
            log.append(
                make_record(title=title), add_screenshot(f"{day}.png"), "n.md", timestamp=_stamp(day)
            )

        content = vault.read_text(LOG_FILE)
        assert content.count("# Xeet Processing Log") == 1
        positions = [content.index(f"- {title}\n") for title in ("Third", "Second", "First")]
        assert positions == sorted(positions)
        assert content.index(SEPARATOR) < positions[0]

    def test_existing_log_without_separator(self, vault, make_record, add_screenshot) -> None:
        vault.write_text(LOG_FILE, "# My Log\n\nHand-written notes.\n")
        log = RunLog(vault, LOG_FILE)

        log.append(make_record(), add_screenshot("a.png"), "n.md", timestamp=_stamp(5))

        content = vault.read_text(LOG_FILE)
        assert content.startswith("# My Log\n\nHand-written notes.\n\n---\n\n## 2025-01-05")

    def test_read_missing_returns_header(self, vault) -> None:
        assert RunLog(vault, LOG_FILE).read() == DEFAULT_HEADER

    def test_returns_updated_text(self, vault, make_record, add_screenshot) -> None:
        log = RunLog(vault, LOG_FILE)

        updated = log.append(make_record(), add_screenshot("a.png"), "n.md", timestamp=_stamp(1))

        assert updated == vault.read_text(LOG_FILE)
