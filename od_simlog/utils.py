# od_simlog/utils.py
from __future__ import annotations

import math
from datetime import date, datetime, time
from typing import Sequence

# Arrow glyphs the sim prefixes to some carried-over values.
_TRIM_CHARS = "→ \t"

DATE_FORMATS: Sequence[str] = ("%m/%d/%Y", "%m-%d-%y", "%Y/%m/%d")
CLOCK_FORMAT = "%H:%M"


# ------------------------------------------------------------------
# Cell addressing
# ------------------------------------------------------------------

def cell_ref(col: str, row: int) -> str:
    """Build a spreadsheet coordinate such as `BY4`."""
    return f"{col}{row}"


# ------------------------------------------------------------------
# Numeric helpers
# ------------------------------------------------------------------

def round_half_away(x: float) -> int:
    """
    Round to the nearest integer, ties away from zero.

    Unlike round(), which sends ties to the even neighbour.
    """
    if x != x:  # NaN check
        raise ValueError("cannot round NaN")
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


def clean_number(text: str) -> str:
    """Strip arrow glyphs, surrounding whitespace and thousands separators."""
    return text.strip(_TRIM_CHARS).replace(",", "")


def parse_int(text: str) -> int:
    """
    Parse an integer cell value.

    Blank text is 0. Raises ValueError for anything that is not a whole number.
    """
    value = clean_number(text)
    if value == "":
        return 0
    return int(value)


def parse_float(text: str) -> float:
    """
    Parse a decimal cell value; blank text is 0.0.

    Raises ValueError for non-numeric text and for `nan` / `inf`.
    """
    value = clean_number(text)
    if value == "":
        return 0.0
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"not a finite number: {value!r}")
    return number


def format_items(items: Sequence[tuple[int, str]]) -> str:
    """Render `(amount, name)` pairs as `10 Spearman, 5 Archer`."""
    return ", ".join(f"{amount} {name}" for amount, name in items)


# ------------------------------------------------------------------
# Clock / date helpers
# ------------------------------------------------------------------

def parse_clock(text: str) -> time:
    """Parse `H:MM` (24-hour). Raises ValueError on mismatch."""
    return datetime.strptime(text.strip(), CLOCK_FORMAT).time()


def parse_date(text: str) -> date:
    """
    Parse a date using the accepted layouts in order.

    Accepted: `M/D/YYYY`, `M-D-YY`, `YYYY/MM/DD`. First success wins.
    Raises ValueError if every layout fails.
    """
    value = text.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"no accepted date layout matches {value!r}")


def format_clock_12h(t: time) -> str:
    """`18:00` -> `6:00:00 PM`; hours are not zero padded."""
    hour = t.hour % 12 or 12
    suffix = "AM" if t.hour < 12 else "PM"
    return f"{hour}:{t.minute:02d}:{t.second:02d} {suffix}"


def format_short_date(d: date) -> str:
    """`2024-05-18` -> `5/18/2024`."""
    return f"{d.month}/{d.day}/{d.year}"
