"""Tests for SourceScanner."""

from __future__ import annotations

from paravault.index.processed import ProcessedStore
from paravault.ingestion.scanner import SourceScanner
from paravault.models import ProcessedMarker
from paravault.vault.store import VaultStore

from conftest import SCREENSHOTS_DIR


def _scanner(vault: VaultStore, processed: ProcessedStore) -> SourceScanner:
    return SourceScanner(vault, SCREENSHOTS_DIR, processed)


class TestSourceScanner:
    def test_missing_directory_is_created(self, vault, processed) -> None:
        """First run bootstraps the watched folder and finds nothing."""
        assert not vault.exists(SCREENSHOTS_DIR)

        items = _scanner(vault, processed).scan()

        assert items == []
        assert vault.is_dir(SCREENSHOTS_DIR)

    def test_finds_images_only(self, vault, processed, add_screenshot) -> None:
        add_screenshot("one.png")
        add_screenshot("two.JPG")
        add_screenshot("three.jpeg")
        (vault.resolve(SCREENSHOTS_DIR) / "notes.md").write_text("not an image")
        (vault.resolve(SCREENSHOTS_DIR) / "clip.gif").write_bytes(b"GIF89a")

        items = _scanner(vault, processed).scan()

        assert sorted(item.identifier for item in items) == ["one.png", "three.jpeg", "two.JPG"]

    def test_item_locations(self, vault, processed, add_screenshot) -> None:
        add_screenshot("shot.png")

        (item,) = _scanner(vault, processed).scan()

        assert item.identifier == "shot.png"
        assert item.relative_path == "Attachments/Xeets/shot.png"
        assert item.path.is_absolute()
        assert item.path == vault.resolve("Attachments/Xeets/shot.png").resolve()

    def test_skips_directories_named_like_images(self, vault, processed, add_screenshot) -> None:
        add_screenshot("real.png")
        vault.mkdir(f"{SCREENSHOTS_DIR}/folder.png")

        items = _scanner(vault, processed).scan()

        assert [item.identifier for item in items] == ["real.png"]

    def test_excludes_processed(self, vault, processed, add_screenshot) -> None:
        add_screenshot("done.png")
        add_screenshot("new.png")
        processed.record("done.png", ProcessedMarker(processed_at="t", provider="gemini"))

        items = _scanner(vault, processed).scan()

        assert [item.identifier for item in items] == ["new.png"]

    def test_processed_item_never_reoffered(self, vault, processed, add_screenshot) -> None:
        """Repeated scans keep excluding an identifier once it is marked."""
        add_screenshot("x.png")
        scanner = _scanner(vault, processed)
        assert [item.identifier for item in scanner.scan()] == ["x.png"]

        processed.record("x.png", ProcessedMarker(processed_at="t", provider="gemini"))
        processed.persist()

        for _ in range(3):
            assert scanner.scan() == []

        reloaded = ProcessedStore(processed.path)
        assert _scanner(vault, reloaded).scan() == []
