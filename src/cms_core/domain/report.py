"""Report entity: an ordered set of labelled figures with text renderings."""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict
from uuid import uuid4

CSV_HEADER = ("key", "value")


@dataclass(eq=False)
class Report:
    """
    A generated report.

    Entries keep their insertion order. Once a label is recorded its value
    is fixed; new labels may still be appended.
    """

    report_type: str
    id: str = field(default_factory=lambda: str(uuid4()))
    generated_at: datetime = field(default_factory=datetime.now)
    _data: Dict[str, Any] = field(default_factory=dict, init=False, repr=False)

    @property
    def data(self) -> Dict[str, Any]:
        return dict(self._data)

    def add_data(self, key: str, value: Any) -> bool:
        """Append an entry; returns False if ``key`` is already recorded."""
        if key in self._data:
            return False
        self._data[key] = value
        return True

    def generate_summary(self) -> str:
        lines = [
            f"=== REPORT: {self.report_type} ===",
            f"Generated: {self.generated_at.isoformat(timespec='seconds')}",
            "",
        ]
        lines.extend(f"{key}: {value}" for key, value in self._data.items())
        return "\n".join(lines) + "\n"

    def export_to_csv(self) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for key, value in self._data.items():
            writer.writerow([key, value])
        return buffer.getvalue()
