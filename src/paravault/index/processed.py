"""JSON-backed set of screenshots that have already been filed."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Iterator, Tuple

from strif import atomic_output_file

from paravault.models import ProcessedMarker

LOGGER = logging.getLogger(__name__)


class ProcessedStore:
    """Persistence layer for processed markers, keyed by screenshot file name.

    The whole mapping is loaded once and written back in full on ``persist``.
    Markers are never removed.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._markers: Dict[str, ProcessedMarker] = {}
        self._loaded = False

    def load(self) -> Dict[str, ProcessedMarker]:
        if self.path.exists():
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            self._markers = {
                str(identifier): ProcessedMarker.from_dict(payload or {})
                for identifier, payload in raw.items()
            }
            LOGGER.debug("Loaded %d processed markers from %s", len(self._markers), self.path)
        else:
            self._markers = {}
        self._loaded = True
        return dict(self._markers)

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    def contains(self, identifier: str) -> bool:
        self._ensure_loaded()
        return identifier in self._markers

    __contains__ = contains

    def __len__(self) -> int:
        self._ensure_loaded()
        return len(self._markers)

    def record(self, identifier: str, marker: ProcessedMarker) -> None:
        self._ensure_loaded()
        self._markers[identifier] = marker

    def markers(self) -> Iterator[Tuple[str, ProcessedMarker]]:
        self._ensure_loaded()
        return iter(list(self._markers.items()))

    def persist(self) -> None:
        self._ensure_loaded()
        payload = {identifier: marker.to_dict() for identifier, marker in self._markers.items()}
        with atomic_output_file(self.path, make_parents=True) as temp_output:
            with open(temp_output, "w", encoding="utf-8") as handle:
                json.dump(payload, handle, indent=2, ensure_ascii=False)
        LOGGER.debug("Saved %d processed markers to %s", len(self._markers), self.path)
