# od_simlog/io_excel.py
from __future__ import annotations

import re
from datetime import date, datetime, time
from pathlib import Path
from typing import Dict, List

import pandas as pd
from openpyxl import Workbook, load_workbook
from openpyxl.cell.cell import Cell
from openpyxl.worksheet.worksheet import Worksheet

from .errors import CellReadError
from .utils import format_short_date, round_half_away


# Excel displays at most 15 significant digits.
EXCEL_PRECISION = 15

_LITERALS = re.compile(r'"[^"]*"|\[[^\]]*\]|\\.')


def _format_tokens(number_format: str) -> str:
    """First section of a number format, lower-cased, without quoted text or `[...]` tags."""
    return _LITERALS.sub("", number_format.split(";")[0]).lower()


def _is_integral_format(number_format: str) -> bool:
    """True for display formats without decimals, e.g. `0` or `#,##0`."""
    fmt = _format_tokens(number_format)
    return fmt != "general" and "0" in fmt and "." not in fmt


def _is_clock_format(number_format: str) -> bool:
    """True for time-only formats such as `h:mm` or `[$-409]h:mm AM/PM`."""
    fmt = _format_tokens(number_format)
    return any(c in fmt for c in "hms") and not any(c in fmt for c in "dy")


def _excel_round(v: float) -> float:
    return float(f"{v:.{EXCEL_PRECISION}g}")


def _render_general(v: float) -> str:
    """`5.000000000000001` -> `5`, `2.5` -> `2.5`."""
    text = f"{_excel_round(v):.{EXCEL_PRECISION}g}"
    return "0" if text == "-0" else text


def render_cell(cell: Cell) -> str:
    """
    Render a cell value as the workbook displays it.

    Behavior:
    - None -> ""
    - time, or a datetime with a time-only format -> `H:MM`
    - date/datetime -> `M/D/YYYY`
    - percent-formatted numbers -> `90%`
    - integral display formats -> no decimals, ties rounded away from zero
    - other numbers -> at most 15 significant digits, no trailing `.0`
    - everything else -> str(value), stripped
    """
    v = cell.value
    if v is None:
        return ""
    if isinstance(v, bool):
        return "1" if v else "0"
    number_format = cell.number_format or "General"
    if isinstance(v, time):
        return f"{v.hour}:{v.minute:02d}"
    if isinstance(v, datetime):
        # Excel stores clock-only values on day zero
        if _is_clock_format(number_format) or v.date() <= date(1900, 1, 1):
            return f"{v.hour}:{v.minute:02d}"
        return format_short_date(v.date())
    if isinstance(v, date):
        return format_short_date(v)
    if isinstance(v, int):
        return f"{v * 100}%" if "%" in number_format else str(v)
    if isinstance(v, float):
        if "%" in number_format:
            return f"{round_half_away(_excel_round(v * 100))}%"
        if _is_integral_format(number_format):
            return str(round_half_away(_excel_round(v)))
        return _render_general(v)
    return str(v).strip()


class WorkbookGridSource:
    """
    Grid source backed by an openpyxl workbook (.xlsx / .xlsm).

    Notes:
    - Opened with data_only=True so formula cells yield their cached values.
    - Cells outside the used range read as blank, like an empty cell in Excel.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = str(path)
        self.wb = load_workbook(self.path, data_only=True)

    def get_cell(self, sheet: str, cell: str) -> str:
        if sheet not in self.wb.sheetnames:
            raise CellReadError(sheet, cell, "sheet not found")
        ws: Worksheet = self.wb[sheet]
        try:
            return render_cell(ws[cell])
        except (ValueError, TypeError, IndexError) as err:
            raise CellReadError(sheet, cell, f"invalid coordinate ({err})") from err

    def close(self) -> None:
        self.wb.close()

    def __enter__(self) -> "WorkbookGridSource":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


# ------------------------------------------------------------------
# Writing tables
# ------------------------------------------------------------------

def write_df_to_sheet(ws: Worksheet, df: pd.DataFrame) -> None:
    """
    Overwrite worksheet with DataFrame content.

    Robustness:
    - Clears entire sheet (all rows)
    - Writes header + rows
    - Coerces numpy scalars to Python types for openpyxl compatibility
    """
    if ws.max_row and ws.max_row > 0:
        ws.delete_rows(1, ws.max_row)

    ws.append([str(c) for c in df.columns])

    for row in df.itertuples(index=False, name=None):
        out = []
        for v in row:
            if pd.isna(v):
                out.append(None)
            elif hasattr(v, "item"):
                out.append(v.item())
            else:
                out.append(v)
        ws.append(out)


def write_frames_to_workbook(output_xlsx: str | Path, dfs: Dict[str, pd.DataFrame]) -> None:
    """
    Write each DataFrame to its own sheet of a new workbook.

    Behavior:
    - Sheets are created in the order of `dfs`
    - An existing file at `output_xlsx` is replaced
    """
    wb = Workbook()
    default = wb.active
    sheets: List[str] = list(dfs.keys())
    if not sheets:
        raise ValueError("no DataFrames to write")

    for i, name in enumerate(sheets):
        ws = default if i == 0 else wb.create_sheet(name)
        ws.title = name
        df = dfs[name].copy()
        df.columns = [str(c).strip() for c in df.columns]
        write_df_to_sheet(ws, df)

    wb.save(str(output_xlsx))
