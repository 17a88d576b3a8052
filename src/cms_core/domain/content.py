"""Content entities.

This module defines the closed set of content variants (Article, Video,
Image). They share identity, metadata, category/tag association and the
draft/published lifecycle through the Content base; each variant supplies
its own admission rule for publishing and its own text rendering.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any, ClassVar, FrozenSet, List, Optional
from uuid import uuid4

from .taxonomy import Category, Tag
from .value_objects import ContentStatus, ContentType

logger = logging.getLogger(__name__)

ARTICLE_MIN_BODY_LENGTH = 50


@dataclass(kw_only=True, eq=False)
class Content(ABC):
    """
    Base entity for every content variant.

    ``published_at`` is set exactly while the status is PUBLISHED. Category
    and tag counters only move while the item is live, i.e. while it belongs
    to a controller's collection; see ``attach_counters``.
    """

    content_type: ClassVar[ContentType]

    # Entity ID
    id: str = field(default_factory=lambda: str(uuid4()))

    # Core metadata
    title: str
    author: str
    category: Category

    # Timestamps
    created_at: datetime = field(default_factory=datetime.now)
    last_modified: datetime = field(default_factory=datetime.now)

    # Lifecycle
    status: ContentStatus = field(default=ContentStatus.DRAFT, init=False)
    published_at: Optional[datetime] = field(default=None, init=False)

    _tags: List[Tag] = field(default_factory=list, init=False, repr=False)
    _live: bool = field(default=False, init=False, repr=False)

    # Fields that update() may not touch directly
    _PROTECTED: ClassVar[FrozenSet[str]] = frozenset(
        {"id", "category", "created_at", "last_modified", "status", "published_at", "_tags", "_live"}
    )

    # Lifecycle

    @property
    def is_published(self) -> bool:
        return self.status is ContentStatus.PUBLISHED

    @abstractmethod
    def admission_error(self) -> Optional[str]:
        """Explain why this item may not be published, or None if it may."""
        ...

    def publish(self) -> bool:
        """Move DRAFT -> PUBLISHED when the admission rule holds.

        Returns whether the transition happened; otherwise nothing changes.
        """
        if self.is_published:
            return False
        reason = self.admission_error()
        if reason is not None:
            logger.debug(f"Publish refused for {self.id}: {reason}")
            return False
        self.status = ContentStatus.PUBLISHED
        self.published_at = datetime.now()
        return True

    def unpublish(self) -> None:
        """Return to DRAFT and clear the publish date."""
        self.status = ContentStatus.DRAFT
        self.published_at = None

    # Rendering

    @abstractmethod
    def display(self) -> str:
        """Multi-line human-readable rendering of every field."""
        ...

    def metadata_line(self) -> str:
        """One-line summary used in listings."""
        return (
            f"ID: {self.id[:8]} | Title: {self.title} | Author: {self.author} | "
            f"Status: {self.status.value} | Category: {self.category.name}"
        )

    # Category and tags

    @property
    def tags(self) -> List[Tag]:
        return list(self._tags)

    def has_tag(self, tag: Tag) -> bool:
        return tag in self._tags

    def add_tag(self, tag: Optional[Tag]) -> bool:
        """Append ``tag`` unless it (or a same-named tag) is already held."""
        if tag is None or tag in self._tags:
            return False
        self._tags.append(tag)
        if self._live:
            tag.increment_usage()
        self.touch()
        return True

    def remove_tag(self, tag: Tag) -> bool:
        for held in self._tags:
            if held == tag:
                self._tags.remove(held)
                if self._live:
                    held.decrement_usage()
                self.touch()
                return True
        return False

    def assign_category(self, category: Category) -> None:
        """Move this item to ``category``, shifting live counters."""
        if category is None:
            raise ValueError("Content requires a category")
        if self._live:
            self.category.decrement_content_count()
            category.increment_content_count()
        self.category = category
        self.touch()

    # Counter accounting, driven by the owning controller

    @property
    def is_live(self) -> bool:
        return self._live

    def attach_counters(self) -> None:
        """Count this item in its category and tags."""
        if self._live:
            return
        self.category.increment_content_count()
        self._live = True
        for tag in self._tags:
            tag.increment_usage()

    def release_counters(self) -> None:
        """Stop counting this item in its category and tags."""
        if not self._live:
            return
        self._live = False
        self.category.decrement_content_count()
        for tag in self._tags:
            tag.decrement_usage()

    # Editing

    def touch(self) -> None:
        self.last_modified = datetime.now()

    def update(self, **changes: Any) -> None:
        """Set plain fields (title, author, variant fields) in one step."""
        allowed = {f.name for f in fields(self)} - self._PROTECTED
        unknown = set(changes) - allowed
        if unknown:
            raise ValueError(f"Cannot update {', '.join(sorted(unknown))} on {self.content_type.value}")
        for name, value in changes.items():
            setattr(self, name, value)
        self.touch()

    def __str__(self) -> str:
        return f"[{self.content_type.value}] {self.title} - {self.status.value}"


@dataclass(kw_only=True, eq=False)
class Article(Content):
    """A written article; publishable once the body has some substance."""

    content_type: ClassVar[ContentType] = ContentType.ARTICLE

    body: str

    @property
    def word_count(self) -> int:
        text = (self.body or "").strip()
        return len(text.split()) if text else 0

    def reading_time_minutes(self) -> int:
        return max(1, self.word_count // 200)

    def admission_error(self) -> Optional[str]:
        length = len((self.body or "").strip())
        if length < ARTICLE_MIN_BODY_LENGTH:
            return f"Article body has {length} characters, at least {ARTICLE_MIN_BODY_LENGTH} required"
        return None

    def display(self) -> str:
        return "\n".join([
            "=== ARTICLE ===",
            f"Title: {self.title}",
            f"Author: {self.author}",
            f"Words: {self.word_count}",
            f"Category: {self.category.name}",
            "",
            "Body:",
            self.body or "",
        ])


@dataclass(kw_only=True, eq=False)
class Video(Content):
    """A hosted video."""

    content_type: ClassVar[ContentType] = ContentType.VIDEO

    url: str
    duration: int  # seconds
    resolution: str = ""

    def formatted_duration(self) -> str:
        """``H:MM:SS`` for an hour or more, ``M:SS`` otherwise."""
        total = max(0, int(self.duration or 0))
        hours, remainder = divmod(total, 3600)
        minutes, seconds = divmod(remainder, 60)
        if hours > 0:
            return f"{hours}:{minutes:02d}:{seconds:02d}"
        return f"{minutes}:{seconds:02d}"

    def thumbnail_url(self) -> str:
        return (self.url or "").replace(".mp4", "_thumbnail.jpg")

    def admission_error(self) -> Optional[str]:
        if not (self.url or "").strip():
            return "Video URL is missing"
        if not self.duration or self.duration <= 0:
            return "Video duration must be greater than zero"
        return None

    def display(self) -> str:
        return "\n".join([
            "=== VIDEO ===",
            f"Title: {self.title}",
            f"Author: {self.author}",
            f"Duration: {self.formatted_duration()}",
            f"Resolution: {self.resolution}",
            f"Category: {self.category.name}",
            f"URL: {self.url}",
        ])


@dataclass(kw_only=True, eq=False)
class Image(Content):
    """A still image. ``format`` is always stored upper-cased."""

    content_type: ClassVar[ContentType] = ContentType.IMAGE

    url: str
    dimensions: str = ""  # "WIDTHxHEIGHT"
    format: Optional[str] = None

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "format" and isinstance(value, str):
            value = value.upper()
        super().__setattr__(name, value)

    def parsed_dimensions(self) -> Optional[tuple[int, int]]:
        """(width, height) parsed from ``dimensions``, or None if malformed."""
        parts = (self.dimensions or "").lower().split("x")
        if len(parts) != 2:
            return None
        try:
            width, height = int(parts[0]), int(parts[1])
        except ValueError:
            return None
        if width < 0 or height < 0:
            return None
        return width, height

    def file_size(self) -> int:
        """Estimated size in bytes: 3 bytes per pixel at 50% compression."""
        parsed = self.parsed_dimensions()
        if parsed is None:
            return 0
        width, height = parsed
        return int(width * height * 3 * 0.5)

    def formatted_file_size(self) -> str:
        size = self.file_size()
        if size < 1024:
            return f"{size} B"
        if size < 1024 * 1024:
            return f"{size / 1024:.2f} KB"
        return f"{size / (1024 * 1024):.2f} MB"

    def admission_error(self) -> Optional[str]:
        if not (self.url or "").strip():
            return "Image URL is missing"
        if not (self.format or "").strip():
            return "Image format is missing"
        return None

    def display(self) -> str:
        return "\n".join([
            "=== IMAGE ===",
            f"Title: {self.title}",
            f"Author: {self.author}",
            f"Dimensions: {self.dimensions}",
            f"Format: {self.format}",
            f"Category: {self.category.name}",
            f"URL: {self.url}",
        ])
