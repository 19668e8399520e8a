"""Utility helpers for working with files."""

from __future__ import annotations

import hashlib
from pathlib import Path

IMAGE_EXTENSIONS = frozenset({".png", ".jpg", ".jpeg"})


def is_image_name(name: str) -> bool:
    """True for file names with a supported screenshot extension (any case)."""
    return Path(name).suffix.lower() in IMAGE_EXTENSIONS


def compute_sha256(path: Path) -> str:
    """Compute SHA256 hash for a file."""
    sha = hashlib.sha256()
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(1 << 20), b""):
            sha.update(chunk)
    return sha.hexdigest()
