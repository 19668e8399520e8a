"""Shared fixtures for paravault tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import pytest

from paravault.index.processed import ProcessedStore
from paravault.llm.backends import ImageInput, LanguageModel
from paravault.models import CapturedItem, ClassificationRecord
from paravault.vault.store import VaultStore

SCREENSHOTS_DIR = "Attachments/Xeets"

# Smallest valid PNG header; the classifier only reads bytes.
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def record_payload(**overrides: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "author": "@swyx",
        "authorName": "Shawn Wang",
        "date": "2025-01-14",
        "text": "Just shipped a RAG system using Claude's 200K context window.",
        "hasImages": False,
        "hasThread": False,
        "engagement": {"likes": 1200, "retweets": 340, "replies": 56},
        "category": "resource",
        "confidence": 0.92,
        "tags": ["ai", "rag", "claude", "llm", "documentation"],
        "summary": "Long context windows make RAG over docs simpler.",
        "title": "Building RAG Systems with Claude",
        "relevance": "Directly applicable to the RAG chatbot project. Shows a simpler setup.",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_record() -> Callable[..., ClassificationRecord]:
    def _make(**overrides: Any) -> ClassificationRecord:
        return ClassificationRecord.model_validate(record_payload(**overrides))

    return _make


@pytest.fixture
def vault(tmp_path: Path) -> VaultStore:
    root = tmp_path / "vault"
    root.mkdir()
    return VaultStore(root)


@pytest.fixture
def processed(vault: VaultStore) -> ProcessedStore:
    store = ProcessedStore(vault.resolve(".processed-xeets.json"))
    store.load()
    return store


@pytest.fixture
def add_screenshot(vault: VaultStore) -> Callable[[str], CapturedItem]:
    def _add(name: str, data: bytes = PNG_BYTES) -> CapturedItem:
        folder = vault.mkdir(SCREENSHOTS_DIR)
        path = folder / name
        path.write_bytes(data)
        return CapturedItem(
            identifier=name, path=path.resolve(), relative_path=f"{SCREENSHOTS_DIR}/{name}"
        )

    return _add


class ScriptedModel(LanguageModel):
    """Language model stand-in returning queued replies (or raising queued errors)."""

    name = "scripted"

    def __init__(self, replies: Optional[List[Any]] = None) -> None:
        super().__init__(api_key="test", model="scripted")
        self.replies = list(replies or [])
        self.calls: List[Dict[str, Any]] = []

    def generate(self, prompt: str, image: Optional[ImageInput] = None) -> str:
        self.calls.append({"prompt": prompt, "image": image})
        if not self.replies:
            raise AssertionError("ScriptedModel ran out of replies")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply
