"""Content Management Core

Tracks articles, videos and images through a draft/published lifecycle,
organizes them by category and tag, gates changes on user roles and
produces aggregate reports.
"""

__version__ = "0.1.0"

from .domain import (
    Article,
    Category,
    Content,
    ContentStatus,
    ContentType,
    Image,
    Permission,
    Report,
    Tag,
    Taxonomy,
    Video,
    Administrator,
    Editor,
    User,
)
from .application import ContentController, ReportController, UserController

__all__ = [
    # Controllers
    "ContentController",
    "ReportController",
    "UserController",

    # Entities
    "Content",
    "Article",
    "Video",
    "Image",
    "Category",
    "Tag",
    "Taxonomy",
    "Report",
    "User",
    "Administrator",
    "Editor",

    # Vocabularies
    "Permission",
    "ContentStatus",
    "ContentType",
]
