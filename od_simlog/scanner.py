# od_simlog/scanner.py
from __future__ import annotations

from pathlib import Path
from typing import IO, Iterable, Iterator, Tuple


class LineScanner:
    """
    Yields `(line_number, text)` for every non-blank line of a text source.

    Line numbers count blank lines too, so they match what an editor shows.
    Text is stripped of surrounding whitespace. Read errors propagate.
    """

    def __init__(self, source: Iterable[str]) -> None:
        self.source = source
        self.line_number = 0

    def __iter__(self) -> Iterator[Tuple[int, str]]:
        for raw in self.source:
            self.line_number += 1
            text = raw.strip()
            if not text:
                continue
            yield self.line_number, text

    @classmethod
    def from_text(cls, text: str) -> "LineScanner":
        return cls(text.splitlines())


def open_log(path: str | Path) -> IO[str]:
    """Open a narrative log for scanning."""
    return open(path, "r", encoding="utf-8", errors="replace")
