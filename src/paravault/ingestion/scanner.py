"""Discovery of screenshots that still need processing."""

from __future__ import annotations

import logging
from pathlib import PurePosixPath
from typing import List

from paravault.index.processed import ProcessedStore
from paravault.models import CapturedItem
from paravault.utils.files import is_image_name
from paravault.vault.store import VaultStore

LOGGER = logging.getLogger(__name__)


class SourceScanner:
    """Lists images in the watched folder that have no processed marker."""

    def __init__(self, vault: VaultStore, watch_dir: str, processed: ProcessedStore) -> None:
        self.vault = vault
        self.watch_dir = watch_dir
        self.processed = processed

    def scan(self) -> List[CapturedItem]:
        if not self.vault.is_dir(self.watch_dir):
            LOGGER.info("Creating screenshots directory: %s", self.vault.resolve(self.watch_dir))
            self.vault.mkdir(self.watch_dir)
            return []

        items: List[CapturedItem] = []
        for name in self.vault.list_dir(self.watch_dir):
            if not is_image_name(name) or name in self.processed:
                continue
            relative = str(PurePosixPath(self.watch_dir) / name)
            path = self.vault.resolve(relative)
            if not path.is_file():
                continue
            items.append(
                CapturedItem(identifier=name, path=path.resolve(), relative_path=relative)
            )
        LOGGER.debug("Found %d new screenshots in %s", len(items), self.watch_dir)
        return items
