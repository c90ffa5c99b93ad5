# od_simlog/errors.py
from __future__ import annotations


class SimLogError(Exception):
    """Base class for every failure raised by the log generator and parser."""


# ------------------------------------------------------------------
# Forward pipeline (workbook -> narrative)
# ------------------------------------------------------------------

class CellReadError(SimLogError):
    """A sheet or coordinate could not be read from the grid source."""

    def __init__(self, sheet: str, cell: str, message: str = "error reading cell") -> None:
        self.sheet = sheet
        self.cell = cell
        super().__init__(f"{message}: {sheet}!{cell}")


class ValueFormatError(SimLogError):
    """Cell text could not be converted to the expected number."""

    def __init__(self, sheet: str, cell: str, value: str, message: str = "error parsing value") -> None:
        self.sheet = sheet
        self.cell = cell
        self.value = value
        super().__init__(f"{message}: {sheet}!{cell} = {value!r}")


class DateTimeParseError(SimLogError):
    """None of the accepted clock or date layouts matched."""

    def __init__(self, value: str, message: str = "error parsing date") -> None:
        self.value = value
        super().__init__(f"{message}: {value!r}")


class MissingConfigConstant(SimLogError):
    """
    A tunable multiplier on the Constants sheet is blank or unreadable.

    Callers recover from this locally by substituting a default multiplier.
    """

    def __init__(self, cell: str) -> None:
        self.cell = cell
        super().__init__(f"missing constant: Constants!{cell}")


class HourProcessingError(SimLogError):
    """An extractor failed; aborts the hour and, in batch mode, the whole run."""

    def __init__(self, hour: int, extractor: str, cause: Exception) -> None:
        self.hour = hour
        self.extractor = extractor
        self.cause = cause
        super().__init__(f"error on executing actions: hour {hour}: {extractor}: {cause}")


# ------------------------------------------------------------------
# Reverse pipeline (narrative -> records)
# ------------------------------------------------------------------

class OutOfOrderHourError(SimLogError):
    """A header line carried an hour that does not move the log forward."""

    def __init__(self, hour: int, current_hour: int) -> None:
        self.hour = hour
        self.current_hour = current_hour
        super().__init__(f"hour {hour} duplicate or out of order")


class LineParseError(SimLogError):
    """Wraps a parser failure with the position of the offending line."""

    def __init__(self, hour: int, line_number: int, line: str, cause: Exception) -> None:
        self.hour = hour
        self.line_number = line_number
        self.line = line
        self.cause = cause
        super().__init__(
            f"Error on executing action: {cause}: CurrentHour: {hour} Line {line_number}: {line}"
        )
