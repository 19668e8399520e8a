"""Destination folder selection."""

from __future__ import annotations

from paravault.models import CATEGORY_RESOURCE, ClassificationRecord


class Router:
    """Confidence gate first, then category.

    | confidence  | category     | destination |
    |-------------|--------------|-------------|
    | < threshold | any          | review      |
    | >= threshold| resource     | resources   |
    | >= threshold| project-idea | projects    |
    """

    def __init__(
        self,
        *,
        resources_dir: str,
        projects_dir: str,
        review_dir: str,
        confidence_threshold: float = 0.7,
    ) -> None:
        self.resources_dir = resources_dir
        self.projects_dir = projects_dir
        self.review_dir = review_dir
        self.confidence_threshold = confidence_threshold

    def needs_review(self, record: ClassificationRecord) -> bool:
        return record.confidence < self.confidence_threshold

    def route(self, record: ClassificationRecord) -> str:
        if self.needs_review(record):
            return self.review_dir
        if record.category == CATEGORY_RESOURCE:
            return self.resources_dir
        return self.projects_dir
