"""
Domain value objects for the content core.

The vocabularies shared with the outer layers: permission tokens, lifecycle
status tokens, variant discriminants and export formats. All enums are
string-valued so a member compares equal to its token.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union


class Permission(str, Enum):
    """Actions gated on the acting user's role."""
    CREATE = "CREATE"
    EDIT = "EDIT"
    DELETE = "DELETE"
    PUBLISH = "PUBLISH"


class ContentStatus(str, Enum):
    """Lifecycle status of a content item."""
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"

    @classmethod
    def parse(cls, value: Union[str, "ContentStatus"]) -> "ContentStatus":
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().upper())


class ContentType(str, Enum):
    """Discriminant identifying a content variant.

    ALL is the sentinel meaning "no type filter".
    """
    ARTICLE = "Article"
    VIDEO = "Video"
    IMAGE = "Image"
    ALL = "All"

    @classmethod
    def variants(cls) -> tuple["ContentType", ...]:
        """The concrete variant discriminants, sentinel excluded."""
        return (cls.ARTICLE, cls.VIDEO, cls.IMAGE)

    @classmethod
    def parse(cls, value: Union[str, "ContentType", None]) -> "ContentType":
        """Resolve a member, a case-insensitive token, or None (-> ALL)."""
        if value is None:
            return cls.ALL
        if isinstance(value, cls):
            return value
        token = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == token:
                return member
        raise ValueError(f"Unknown content type: {value!r}")


class Role(str, Enum):
    """Role label carried by each user variant."""
    ADMINISTRATOR = "ADMINISTRATOR"
    EDITOR = "EDITOR"


class ExportFormat(str, Enum):
    """Report export formats."""
    CSV = "CSV"
    TEXT = "TEXT"

    @classmethod
    def parse(cls, value: Optional[Union[str, "ExportFormat"]]) -> "ExportFormat":
        """The CSV token selects CSV; anything else means plain text."""
        if isinstance(value, cls):
            return value
        if value is not None and str(value).strip().upper() == cls.CSV.value:
            return cls.CSV
        return cls.TEXT
