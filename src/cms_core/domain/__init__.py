"""
Domain Layer - Content Core

Entities and value objects for editorial content:
- Content variants (Article, Video, Image) and their publish lifecycle
- Category hierarchy and tag usage accounting
- User roles with fixed permission sets
- Reports
"""

from .value_objects import (
    Permission,
    ContentStatus,
    ContentType,
    Role,
    ExportFormat,
)
from .taxonomy import Category, Tag, Taxonomy
from .content import Content, Article, Video, Image
from .users import User, Administrator, Editor, create_user
from .report import Report
from .result import (
    Result,
    Success,
    Failure,
    DomainError,
    ValidationError,
    NotFoundError,
    DuplicateError,
    PermissionDeniedError,
    LifecycleError,
)

__all__ = [
    # Value objects
    "Permission",
    "ContentStatus",
    "ContentType",
    "Role",
    "ExportFormat",
    # Entities
    "Category",
    "Tag",
    "Taxonomy",
    "Content",
    "Article",
    "Video",
    "Image",
    "User",
    "Administrator",
    "Editor",
    "create_user",
    "Report",
    # Results and errors
    "Result",
    "Success",
    "Failure",
    "DomainError",
    "ValidationError",
    "NotFoundError",
    "DuplicateError",
    "PermissionDeniedError",
    "LifecycleError",
]
