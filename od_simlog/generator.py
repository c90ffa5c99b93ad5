# od_simlog/generator.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence

from .config import LogConfig
from .errors import HourProcessingError, SimLogError
from .extractors import EXTRACTORS, Extractor, HourReader
from .grid import GridSource
from .hours import HourIndex, for_hour
from .io_excel import WorkbookGridSource

logger = logging.getLogger(__name__)

TIMELINE = "timeline"


@dataclass
class GenerationResult:
    """Report text accumulated by a run plus the error that stopped it, if any."""
    report: str
    error: SimLogError | None = None
    hours: List[int] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None


class GameLogGenerator:
    """
    Builds the narrative log from a sim workbook.

    Behavior:
    - Extractors run in registration order; each non-empty output ends with a newline.
    - An hour that produced nothing but its timeline header is dropped.
    - Batch mode is fail-fast: the first failing hour ends the run, and the
      text accumulated before it is still returned.
    """

    def __init__(
        self,
        grid: GridSource,
        config: LogConfig | None = None,
        extractors: Sequence[Extractor] = EXTRACTORS,
    ) -> None:
        self.grid = grid
        self.config = config or LogConfig()
        self.extractors = tuple(extractors)
        self.index: HourIndex = for_hour(1, self.config.header_rows)

    def set_current_hour(self, hour: int) -> HourIndex:
        self.index = for_hour(hour, self.config.header_rows)
        return self.index

    def execute_hour(self, hour: int) -> str:
        """Run every extractor for `hour`; raises HourProcessingError on the first failure."""
        reader = HourReader(self.grid, self.set_current_hour(hour), self.config)

        parts: List[str] = []
        events = 0
        for extractor in self.extractors:
            try:
                out = extractor(reader)
            except SimLogError as err:
                raise HourProcessingError(hour, extractor.name, err) from err
            if not out:
                continue
            if not out.endswith("\n"):
                out += "\n"
            parts.append(out)
            if extractor.name != TIMELINE:
                events += 1

        if events == 0:
            logger.debug("hour %d: no events", hour)
            return ""
        return "".join(parts)

    def run(self, hour: int | None = None) -> GenerationResult:
        """
        Generate the log for one hour, or for hours 1..last_hour when `hour` is None.

        Hours in batch mode are separated by a blank line.
        """
        if hour is not None and hour > 0:
            try:
                text = self.execute_hour(hour)
            except HourProcessingError as err:
                return GenerationResult(report="", error=err)
            return GenerationResult(report=text, hours=[hour] if text else [])

        chunks: List[str] = []
        hours: List[int] = []
        error: SimLogError | None = None
        for hr in range(1, self.config.last_hour + 1):
            try:
                text = self.execute_hour(hr)
            except HourProcessingError as err:
                error = err
                break
            if not text:
                continue
            chunks.append(text)
            chunks.append("\n")
            hours.append(hr)

        logger.info("generated %d hour(s) with events", len(hours))
        return GenerationResult(report="".join(chunks), error=error, hours=hours)


# ------------------------------------------------------------------
# Entry points
# ------------------------------------------------------------------

def generate_log(sim_path: str | Path, hour: int | None = None, config: LogConfig | None = None) -> GenerationResult:
    """Open a sim workbook and generate its narrative log."""
    with WorkbookGridSource(sim_path) as grid:
        return GameLogGenerator(grid, config).run(hour)


def write_report(report: str, result_path: str | Path | None = None) -> None:
    """Print the report, or write it to `result_path` unless that is empty or `std`."""
    if not result_path or str(result_path) == "std":
        print(report)
        return

    Path(result_path).write_text(report, encoding="utf-8")
    print(f"Successfully wrote result to {result_path}")
