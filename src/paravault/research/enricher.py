"""Auto-research: query generation, web search and relevance filtering."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from paravault.errors import (
    EnrichmentStepError,
    EnvelopeError,
    FilteringError,
    ModelError,
    QueryGenerationError,
)
from paravault.llm.backends import LanguageModel
from paravault.llm.envelope import unwrap_json
from paravault.llm.prompts import FILTER_PROMPT, QUERY_PROMPT
from paravault.models import BundleKind, ClassificationRecord, ResearchBundle, ResearchResult
from paravault.research.search import WebSearchClient
from paravault.utils.text import strip_quotes

LOGGER = logging.getLogger(__name__)

UNFILTERED_RELEVANCE = 0.5


class ResearchEnricher:
    """Chains three fallible external calls; ``research`` itself never raises."""

    def __init__(
        self,
        model: LanguageModel,
        search: WebSearchClient,
        *,
        max_results: int = 5,
        relevance_threshold: float = 0.6,
    ) -> None:
        self.model = model
        self.search = search
        self.max_results = max_results
        self.relevance_threshold = relevance_threshold

    def close(self) -> None:
        self.model.close()
        self.search.close()

    def research(self, record: ClassificationRecord) -> Optional[ResearchBundle]:
        try:
            query = self.generate_query(record)
        except EnrichmentStepError as exc:
            LOGGER.warning("Auto-research skipped, query generation failed: %s", exc)
            return None

        try:
            raw_results = self.search.search(query, limit=self.max_results)
        except EnrichmentStepError as exc:
            LOGGER.warning("Auto-research skipped, search failed: %s", exc)
            return None

        if not raw_results:
            return ResearchBundle(query=query, results=[], kind=BundleKind.FILTERED)

        try:
            results = self.filter_results(raw_results, record)
        except EnrichmentStepError as exc:
            LOGGER.warning("Error filtering results, keeping them unranked: %s", exc)
            return ResearchBundle(
                query=query, results=unfiltered(raw_results), kind=BundleKind.UNFILTERED
            )
        LOGGER.info("Filtered to %d relevant results", len(results))
        return ResearchBundle(query=query, results=results, kind=BundleKind.FILTERED)

    def generate_query(self, record: ClassificationRecord) -> str:
        prompt = QUERY_PROMPT.format(
            text=record.text, tags=", ".join(record.tags), category=record.category
        )
        try:
            reply = self.model.generate(prompt)
        except ModelError as exc:
            raise QueryGenerationError(str(exc)) from exc

        lines = [line for line in reply.strip().splitlines() if line.strip()]
        query = strip_quotes(lines[0]) if lines else ""
        if not query:
            raise QueryGenerationError("Model returned an empty search query")
        LOGGER.info("Search query: %r", query)
        return query

    def filter_results(
        self, results: Sequence[ResearchResult], record: ClassificationRecord
    ) -> List[ResearchResult]:
        """Score ``results`` with the model and keep those above the threshold, best first."""
        if not results:
            return []

        listing = "\n\n".join(
            f"{position}. {result.title}\n   {result.snippet}\n   {result.url}"
            for position, result in enumerate(results, start=1)
        )
        prompt = FILTER_PROMPT.format(
            text=record.text,
            tags=", ".join(record.tags),
            results=listing,
            threshold=self.relevance_threshold,
        )
        try:
            payload = unwrap_json(self.model.generate(prompt))
        except (ModelError, EnvelopeError) as exc:
            raise FilteringError(str(exc)) from exc

        scored = payload.get("results")
        if not isinstance(scored, list):
            raise FilteringError("Filter reply has no 'results' list")

        kept: List[ResearchResult] = []
        for entry in scored:
            try:
                index = int(entry["index"])
                relevance = float(entry["relevance"])
            except (KeyError, TypeError, ValueError):
                LOGGER.debug("Ignoring malformed filter entry: %r", entry)
                continue
            if not 1 <= index <= len(results) or relevance < self.relevance_threshold:
                continue
            original = results[index - 1]
            kept.append(
                ResearchResult(
                    title=original.title,
                    url=original.url,
                    snippet=original.snippet,
                    relevance=relevance,
                    reason=entry.get("reason") or None,
                    summary=entry.get("summary") or original.snippet,
                )
            )
        kept.sort(key=lambda result: result.relevance, reverse=True)
        return kept


def unfiltered(results: Sequence[ResearchResult]) -> List[ResearchResult]:
    """Passthrough used when relevance filtering is unavailable."""
    return [
        ResearchResult(
            title=result.title,
            url=result.url,
            snippet=result.snippet,
            relevance=UNFILTERED_RELEVANCE,
            reason=None,
            summary=result.snippet,
        )
        for result in results
    ]
