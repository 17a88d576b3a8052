"""
Application Layer - controllers over the content domain.

- ContentController: CRUD, lifecycle transitions, search and filters
- ReportController: read-only aggregation and report export text
- UserController: user directory and login session
"""

from .content_controller import ContentController
from .report_controller import ReportController, STATISTIC_LABELS
from .user_controller import UserController

__all__ = [
    "ContentController",
    "ReportController",
    "STATISTIC_LABELS",
    "UserController",
]
