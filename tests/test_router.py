"""Tests for destination routing."""

from __future__ import annotations

import pytest

from paravault.vault.router import Router


@pytest.fixture
def router() -> Router:
    return Router(
        resources_dir="03 - Resources/X Insights",
        projects_dir="01 - Projects/Ideas",
        review_dir="00 - Inbox/Xeets to Review",
        confidence_threshold=0.7,
    )


class TestRouter:
    @pytest.mark.parametrize(
        ("category", "confidence", "expected"),
        [
            ("resource", 0.92, "03 - Resources/X Insights"),
            ("project-idea", 0.85, "01 - Projects/Ideas"),
            ("resource", 0.7, "03 - Resources/X Insights"),
            ("project-idea", 0.7, "01 - Projects/Ideas"),
            ("resource", 0.69, "00 - Inbox/Xeets to Review"),
            ("project-idea", 0.55, "00 - Inbox/Xeets to Review"),
            ("resource", 0.0, "00 - Inbox/Xeets to Review"),
        ],
    )
    def test_routing_table(self, router, make_record, category, confidence, expected) -> None:
        record = make_record(category=category, confidence=confidence)

        assert router.route(record) == expected

    def test_confidence_checked_before_category(self, make_record) -> None:
        """A strict threshold sends even a clear resource to review."""
        router = Router(
            resources_dir="res", projects_dir="proj", review_dir="review", confidence_threshold=0.95
        )

        record = make_record(category="resource", confidence=0.92)

        assert router.needs_review(record) is True
        assert router.route(record) == "review"

    def test_zero_threshold_never_reviews(self, make_record) -> None:
        router = Router(
            resources_dir="res", projects_dir="proj", review_dir="review", confidence_threshold=0.0
        )

        assert router.route(make_record(confidence=0.0)) == "res"
