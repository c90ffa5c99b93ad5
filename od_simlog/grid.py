# od_simlog/grid.py
from __future__ import annotations

from typing import Dict, Mapping, Protocol

from .errors import CellReadError


class GridSource(Protocol):
    """
    Read-only access to a named-sheet tabular document.

    The generator only ever asks for single cells, so this is the whole
    surface an implementation has to provide.
    """

    def get_cell(self, sheet: str, cell: str) -> str:
        """Return the displayed text of `sheet!cell`; raise CellReadError if unreadable."""
        ...


class MappingGridSource:
    """
    In-memory grid backed by `{sheet: {cell: text}}`.

    Unlike a workbook, a coordinate that was never set is an error rather than
    a blank cell, so tests notice when an extractor reads an unexpected cell.
    """

    def __init__(self, data: Mapping[str, Mapping[str, str]] | None = None) -> None:
        self.data: Dict[str, Dict[str, str]] = {
            sheet: dict(cells) for sheet, cells in (data or {}).items()
        }

    def set(self, sheet: str, cell: str, value: object) -> None:
        self.data.setdefault(sheet, {})[cell] = "" if value is None else str(value)

    def update(self, data: Mapping[str, Mapping[str, object]]) -> None:
        for sheet, cells in data.items():
            for cell, value in cells.items():
                self.set(sheet, cell, value)

    def get_cell(self, sheet: str, cell: str) -> str:
        try:
            return self.data[sheet][cell]
        except KeyError:
            raise CellReadError(sheet, cell, "cell is missing") from None
