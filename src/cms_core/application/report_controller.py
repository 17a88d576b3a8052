"""Report controller: read-only aggregation over a content controller."""

from __future__ import annotations

import logging
import threading
from typing import Dict, List, Optional, Union

from ..domain.content import Content
from ..domain.report import Report
from ..domain.taxonomy import Category
from ..domain.value_objects import ContentType, ExportFormat
from .content_controller import ContentController

logger = logging.getLogger(__name__)

TOTAL = "Total"
PUBLISHED = "Published"
DRAFTS = "Drafts"
TYPE_LABELS = {
    ContentType.ARTICLE: "Articles",
    ContentType.VIDEO: "Videos",
    ContentType.IMAGE: "Images",
}
STATISTIC_LABELS = (TOTAL, PUBLISHED, DRAFTS, *TYPE_LABELS.values())

GENERAL_REPORT = "General Content Report"
CATEGORY_REPORT = "Content by Category"
AUTHOR_REPORT = "Content by Author"


def _statistics(contents: List[Content]) -> Dict[str, int]:
    published = sum(1 for c in contents if c.is_published)
    stats = {
        TOTAL: len(contents),
        PUBLISHED: published,
        DRAFTS: len(contents) - published,
    }
    for content_type, label in TYPE_LABELS.items():
        stats[label] = sum(1 for c in contents if c.content_type is content_type)
    return stats


class ReportController:
    """Computes aggregates over the content collection and keeps a report history.

    It never mutates content, categories or tags; every figure is computed
    from a single snapshot of the collection.
    """

    def __init__(self, content_controller: ContentController):
        self.content_controller = content_controller
        self._reports: List[Report] = []
        self._lock = threading.Lock()

    def _record(self, report: Report) -> Report:
        with self._lock:
            self._reports.append(report)
        logger.info(f"Generated report {report.id} ({report.report_type})")
        return report

    def generate_content_report(self) -> Report:
        """Record totals, publish state and per-variant counts."""
        report = Report(GENERAL_REPORT)
        for label, value in _statistics(self.content_controller.get_all_content()).items():
            report.add_data(label, value)
        return self._record(report)

    def generate_category_report(self) -> Report:
        report = Report(CATEGORY_REPORT)
        for category, count in self.get_contents_by_category().items():
            # Same-named categories are distinct; keep both rows
            label = category.name
            if not report.add_data(label, count):
                report.add_data(f"{label} ({category.id[:8]})", count)
        return self._record(report)

    def generate_author_report(self) -> Report:
        report = Report(AUTHOR_REPORT)
        for author, count in self.get_contents_by_author().items():
            report.add_data(author, count)
        return self._record(report)

    def get_statistics(self) -> Dict[str, int]:
        """The general report's figures, without recording a report."""
        return _statistics(self.content_controller.get_all_content())

    def get_contents_by_category(self) -> Dict[Category, int]:
        """Item count per category, in order of first appearance."""
        counts: Dict[Category, int] = {}
        for content in self.content_controller.get_all_content():
            counts[content.category] = counts.get(content.category, 0) + 1
        return counts

    def get_contents_by_author(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for content in self.content_controller.get_all_content():
            counts[content.author] = counts.get(content.author, 0) + 1
        return counts

    def get_most_recent_content(self, limit: int) -> List[Content]:
        """Newest first by creation time; ties keep collection order."""
        if limit <= 0:
            return []
        contents = self.content_controller.get_all_content()
        return sorted(contents, key=lambda c: c.created_at, reverse=True)[:limit]

    def get_report(self, report_id: str) -> Optional[Report]:
        with self._lock:
            for report in self._reports:
                if report.id == report_id:
                    return report
        return None

    def export_report(self, report_id: str, export_format: Union[ExportFormat, str, None] = None) -> str:
        """CSV text for the CSV token, the plain summary otherwise.

        Returns an empty string for an unknown report id.
        """
        report = self.get_report(report_id)
        if report is None:
            logger.debug(f"Export requested for unknown report {report_id}")
            return ""
        if ExportFormat.parse(export_format) is ExportFormat.CSV:
            return report.export_to_csv()
        return report.generate_summary()

    def get_all_reports(self) -> List[Report]:
        with self._lock:
            return list(self._reports)
