# robots_scout/response.py
"""
Result container returned by the parse entry points.
"""
from __future__ import annotations

from dataclasses import dataclass

from robots_scout.collection import RobotsRecords


@dataclass(frozen=True, slots=True)
class ParseResponse:
    """Records plus the number of bytes that were read."""

    records: RobotsRecords
    size: int

    def comments(self) -> list:
        return self.records.comments()
