# od_simlog/hours.py
from __future__ import annotations

from dataclasses import dataclass

from .config import LogConfig


@dataclass(frozen=True)
class HourIndex:
    """
    Addressing offsets for one simulated hour.

    - current_hour: zero-based counter (hour - 1), the key used by the parser
    - row: spreadsheet row holding this hour's values
    """
    hour: int
    current_hour: int
    row: int

    @property
    def previous_row(self) -> int:
        return self.row - 1


def for_hour(hour: int, header_rows: int = LogConfig.header_rows) -> HourIndex:
    """Map a 1-based hour to its counter and workbook row."""
    return HourIndex(hour=hour, current_hour=hour - 1, row=hour + header_rows)
