"""Screenshot processing pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import PurePosixPath
from typing import List, Optional, Set

from paravault.index.processed import ProcessedStore
from paravault.ingestion.scanner import SourceScanner
from paravault.llm.classifier import Classifier
from paravault.models import (
    CapturedItem,
    ClassificationRecord,
    ProcessedMarker,
    ResearchBundle,
)
from paravault.research.enricher import ResearchEnricher
from paravault.utils.files import compute_sha256
from paravault.vault.formatter import NOTE_EXTENSION, NoteFormatter, note_filename
from paravault.vault.router import Router
from paravault.vault.run_log import RunLog
from paravault.vault.store import VaultStore

LOGGER = logging.getLogger(__name__)

STATUS_PROCESSED = "processed"
STATUS_FAILED = "failed"


@dataclass(slots=True)
class ItemOutcome:
    item: CapturedItem
    status: str
    record: Optional[ClassificationRecord] = None
    destination: Optional[str] = None
    note_path: Optional[str] = None
    research: Optional[ResearchBundle] = None
    error: Optional[str] = None


@dataclass(slots=True)
class RunSummary:
    discovered: int = 0
    processed: int = 0
    failed: int = 0
    dry_run: bool = False
    outcomes: List[ItemOutcome] = field(default_factory=list)

    def increment(self, outcome: ItemOutcome) -> None:
        if outcome.status == STATUS_PROCESSED:
            self.processed += 1
        else:
            self.failed += 1
        self.outcomes.append(outcome)


class Orchestrator:
    """Runs every new screenshot through classify, research, route, write, log and mark.

    Items are handled one at a time. A failure is counted and the run moves on
    to the next item; research problems never fail an item.
    """

    def __init__(
        self,
        *,
        scanner: SourceScanner,
        classifier: Classifier,
        router: Router,
        formatter: NoteFormatter,
        run_log: RunLog,
        processed: ProcessedStore,
        vault: VaultStore,
        enricher: Optional[ResearchEnricher] = None,
        dry_run: bool = False,
    ) -> None:
        self.scanner = scanner
        self.classifier = classifier
        self.router = router
        self.formatter = formatter
        self.run_log = run_log
        self.processed = processed
        self.vault = vault
        self.enricher = enricher
        self.dry_run = dry_run
        self._claimed: Set[str] = set()

    def run(self) -> RunSummary:
        items = self.scanner.scan()
        summary = RunSummary(discovered=len(items), dry_run=self.dry_run)
        if not items:
            LOGGER.info("No new screenshots to process")
            return summary

        for item in items:
            LOGGER.info("Processing: %s", item.identifier)
            try:
                outcome = self.process_item(item)
            except Exception as exc:
                LOGGER.error("Failed to process %s: %s", item.identifier, exc)
                outcome = ItemOutcome(item=item, status=STATUS_FAILED, error=str(exc))
            summary.increment(outcome)

        return summary

    def process_item(self, item: CapturedItem) -> ItemOutcome:
        record = self.classifier.classify(item)
        LOGGER.info("Category: %s (confidence: %.2f)", record.category, record.confidence)
        if self.router.needs_review(record):
            LOGGER.info("Low confidence - routing to: %s", self.router.review_dir)

        bundle = self._research(record)
        destination = self.router.route(record)
        content = self.formatter.format(record, item.relative_path, bundle)
        note_path = self.note_path(destination, record, item)

        if self.dry_run:
            LOGGER.info("[DRY RUN] Would save to: %s", note_path)
        else:
            self.vault.write_text(note_path, content)
            LOGGER.info("Saved: %s", note_path)
            self.run_log.append(record, item, note_path)
            self.processed.record(
                item.identifier,
                ProcessedMarker(
                    processed_at=datetime.now(timezone.utc).isoformat(),
                    provider=self.classifier.provider,
                ),
            )
            self.processed.persist()

        return ItemOutcome(
            item=item,
            status=STATUS_PROCESSED,
            record=record,
            destination=destination,
            note_path=note_path,
            research=bundle,
        )

    def close(self) -> None:
        self.classifier.close()
        if self.enricher is not None:
            self.enricher.close()

    def _research(self, record: ClassificationRecord) -> Optional[ResearchBundle]:
        if self.enricher is None:
            return None
        try:
            return self.enricher.research(record)
        except Exception as exc:
            LOGGER.warning("Auto-research error: %s", exc)
            return None

    def note_path(self, destination: str, record: ClassificationRecord, item: CapturedItem) -> str:
        """Vault-relative note path that is neither on disk nor already used this run.

        Candidates are ``<slug>.md``, then ``<slug>-<hash8>.md`` (first 8 hex of the
        screenshot's sha256), then ``<slug>-<hash8>-2.md``, ``-3`` and so on.
        """
        filename = note_filename(record.title)
        relative = str(PurePosixPath(destination) / filename)
        if self._is_taken(relative):
            stem = f"{filename[: -len(NOTE_EXTENSION)]}-{compute_sha256(item.path)[:8]}"
            relative = str(PurePosixPath(destination) / f"{stem}{NOTE_EXTENSION}")
            counter = 2
            while self._is_taken(relative):
                relative = str(PurePosixPath(destination) / f"{stem}-{counter}{NOTE_EXTENSION}")
                counter += 1
        self._claimed.add(relative)
        return relative

    def _is_taken(self, relative: str) -> bool:
        return relative in self._claimed or self.vault.exists(relative)
