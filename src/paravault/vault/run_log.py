"""Newest-first processing log kept as a note inside the vault."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import PurePosixPath
from typing import Optional

from paravault.models import CapturedItem, ClassificationRecord
from paravault.vault.store import VaultStore

LOGGER = logging.getLogger(__name__)

SEPARATOR = "---\n\n"
DEFAULT_HEADER = (
    "# Xeet Processing Log\n\nAutomated processing log for post screenshots.\n\n" + SEPARATOR
)


def render_entry(
    record: ClassificationRecord, item: CapturedItem, note_path: str, timestamp: datetime
) -> str:
    stamp = timestamp.isoformat()
    return (
        f"## {timestamp.date().isoformat()} - {record.title}\n\n"
        f"- **Author:** {record.author}\n"
        f"- **Category:** {record.category}\n"
        f"- **Tags:** {', '.join(record.tags)}\n"
        f"- **Note:** [[{PurePosixPath(note_path).stem}]]\n"
        f"- **Screenshot:** [[{item.relative_path}]]\n"
        f"- **Processed:** {stamp}\n\n"
    )


class RunLog:
    """Inserts each entry directly below the header separator."""

    def __init__(self, vault: VaultStore, log_file: str, *, header: str = DEFAULT_HEADER) -> None:
        self.vault = vault
        self.log_file = log_file
        self.header = header

    def read(self) -> str:
        if self.vault.exists(self.log_file):
            return self.vault.read_text(self.log_file)
        return self.header

    def append(
        self,
        record: ClassificationRecord,
        item: CapturedItem,
        note_path: str,
        *,
        timestamp: Optional[datetime] = None,
    ) -> str:
        timestamp = timestamp or datetime.now(timezone.utc)
        content = self.read()
        entry = render_entry(record, item, note_path, timestamp)

        position = content.find(SEPARATOR)
        if position == -1:
            # Existing log without a separator: keep it all as the header.
            content = content.rstrip("\n") + "\n\n" + SEPARATOR
            position = content.find(SEPARATOR)
        head_end = position + len(SEPARATOR)
        updated = content[:head_end] + entry + content[head_end:]

        self.vault.write_text(self.log_file, updated)
        LOGGER.debug("Logged %s in %s", record.title, self.log_file)
        return updated
