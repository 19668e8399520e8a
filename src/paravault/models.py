"""Core paravault data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

CATEGORY_RESOURCE = "resource"
CATEGORY_PROJECT_IDEA = "project-idea"


@dataclass(slots=True, frozen=True)
class CapturedItem:
    """Screenshot discovered in the watched folder."""

    identifier: str
    path: Path
    relative_path: str


class Engagement(BaseModel):
    """Like/share/reply counts read off the screenshot, when visible."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    likes: Optional[int] = None
    shares: Optional[int] = Field(default=None, alias="retweets")
    replies: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return self.likes is None and self.shares is None and self.replies is None


class ClassificationRecord(BaseModel):
    """Structured description of a post, as returned by the vision model.

    Field aliases match the JSON keys the classification prompt asks for.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    author: str = ""
    author_name: str = Field(default="", alias="authorName")
    date: Optional[str] = None
    text: str = ""
    has_images: bool = Field(default=False, alias="hasImages")
    has_thread: bool = Field(default=False, alias="hasThread")
    engagement: Engagement = Field(default_factory=Engagement)
    category: Literal["resource", "project-idea"]
    confidence: float
    tags: List[str] = Field(default_factory=list)
    summary: str = ""
    title: str
    relevance: str = ""

    @field_validator("author", "author_name", "text", "summary", "relevance", mode="before")
    @classmethod
    def _null_text(cls, value):
        # Display-only fields: the model sends null when nothing is visible.
        return "" if value is None else value

    @field_validator("tags", mode="before")
    @classmethod
    def _null_tags(cls, value):
        return [] if value is None else value

    @field_validator("engagement", mode="before")
    @classmethod
    def _null_engagement(cls, value):
        return {} if value is None else value


@dataclass(slots=True)
class ResearchResult:
    """Search hit, optionally enriched with a relevance judgement."""

    title: str
    url: str
    snippet: str = ""
    relevance: float | None = None
    reason: str | None = None
    summary: str | None = None


class BundleKind(str, Enum):
    FILTERED = "filtered"
    UNFILTERED = "unfiltered"


@dataclass(slots=True)
class ResearchBundle:
    """Query used for research plus the surviving results, best first."""

    query: str
    results: List[ResearchResult] = field(default_factory=list)
    kind: BundleKind = BundleKind.FILTERED

    @property
    def is_filtered(self) -> bool:
        return self.kind is BundleKind.FILTERED


@dataclass(slots=True)
class ProcessedMarker:
    processed_at: str
    provider: str

    def to_dict(self) -> dict:
        return {"processedAt": self.processed_at, "provider": self.provider}

    @classmethod
    def from_dict(cls, payload: dict) -> "ProcessedMarker":
        return cls(
            processed_at=str(payload.get("processedAt", "")),
            provider=str(payload.get("provider", "")),
        )
