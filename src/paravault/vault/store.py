"""Filesystem-backed access to the vault's documents."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from strif import atomic_output_file

LOGGER = logging.getLogger(__name__)


class VaultStore:
    """Reads and writes text documents addressed by vault-relative paths."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def resolve(self, relative: str | Path) -> Path:
        return self.root / relative

    def exists(self, relative: str | Path) -> bool:
        return self.resolve(relative).exists()

    def is_dir(self, relative: str | Path) -> bool:
        return self.resolve(relative).is_dir()

    def mkdir(self, relative: str | Path) -> Path:
        path = self.resolve(relative)
        path.mkdir(parents=True, exist_ok=True)
        return path

    def read_text(self, relative: str | Path) -> str:
        return self.resolve(relative).read_text(encoding="utf-8")

    def write_text(self, relative: str | Path, content: str) -> Path:
        path = self.resolve(relative)
        with atomic_output_file(path, make_parents=True) as temp_output:
            with open(temp_output, "w", encoding="utf-8") as handle:
                handle.write(content)
        LOGGER.debug("Wrote %s (%d chars)", path, len(content))
        return path

    def list_dir(self, relative: str | Path) -> List[str]:
        """Entry names of a folder, in filesystem listing order."""
        return [entry.name for entry in self.resolve(relative).iterdir()]
