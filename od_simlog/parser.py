# od_simlog/parser.py
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .aliases import canonical_name, record_key
from .config import ParserConfig
from .errors import LineParseError, OutOfOrderHourError, SimLogError
from .scanner import LineScanner, open_log

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Action kinds
# ------------------------------------------------------------------
BANK = "bank"
CONSTRUCTION = "construction"
DAILY = "daily"
DESTRUCTION = "destruction"
DRAFTRATE = "draftrate"
EXPLORE = "explore"
INVEST = "invest"
MAGIC = "magic"
RELEASE = "release"
REZONE = "rezone"
TRAIN = "train"

ACTION_KINDS = (
    BANK, CONSTRUCTION, DAILY, DESTRUCTION, DRAFTRATE, EXPLORE,
    INVEST, MAGIC, RELEASE, REZONE, TRAIN,
)


@dataclass
class ParsedAction:
    """One narrative sentence reduced to its kind and item amounts."""
    kind: str
    data: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, object]:
        return {"kind": self.kind, "data": dict(self.data)}


# ------------------------------------------------------------------
# Patterns
# ------------------------------------------------------------------
HOUR_PATTERN = re.compile(r"Protection Hour: (\d+)")

DRAFTRATE_PATTERN = re.compile(r"Draftrate changed to (\d+)%")
RELEASE_PATTERN = re.compile(r"You successfully released ([\w\s,]+)")
RELEASE_UNIT_PATTERN = re.compile(r"(\d+)\s+([\w\s]+)")
MAGIC_PATTERN = re.compile(r"Your wizards successfully cast (.+?) at a cost of (\d+) mana")
DAILY_PATTERN = re.compile(r"You have been awarded with (\d+) (.+?)\.?$")
BANK_PATTERN = re.compile(r"^(.+?) have been traded for (.+?)\.?$")
EXPLORE_PATTERN = re.compile(r"Exploration for (.+?) begun at a cost of")
DESTRUCTION_PATTERN = re.compile(r"Destruction of (.+?) is complete")
REZONE_PATTERN = re.compile(r"Rezoning begun at a cost of \d+ platinum\. The changes in land are as following: (.*?)\.?$")
CONSTRUCTION_PATTERN = re.compile(r"Construction of (.+?) started at a cost of")
TRAIN_PATTERN = re.compile(r"Training of (.+?) begun at a cost of")
INVEST_PATTERN = re.compile(r"You invested (\d+) (.+?) into (.+?)\.?$")

ITEM_PATTERN = re.compile(r"(-?\d+)\s+(.+)")

RELEASE_SUFFIX = " into the peasantry"


def parse_items(text: str, sep: str = ",") -> Dict[str, int]:
    """
    `10 Homes, 5 Lumber Yards` -> {"Homes": 10, "lumberyard": 5}.

    Names go through the alias table; a repeated name keeps the last amount.
    """
    items: Dict[str, int] = {}
    for part in text.split(sep):
        m = ITEM_PATTERN.fullmatch(part.strip())
        if m:
            items[record_key(m.group(2).strip())] = int(m.group(1))
    return items


# ------------------------------------------------------------------
# Record extractors
# ------------------------------------------------------------------

def _draftrate(m: re.Match[str]) -> List[ParsedAction]:
    return [ParsedAction(DRAFTRATE, {"value": int(m.group(1))})]


def _release(m: re.Match[str]) -> List[ParsedAction]:
    data: Dict[str, int] = {}
    for unit in RELEASE_UNIT_PATTERN.finditer(m.group(1)):
        name = unit.group(2).strip()
        if name.endswith(RELEASE_SUFFIX):
            name = name[: -len(RELEASE_SUFFIX)]
        data[record_key(name)] = int(unit.group(1))
    return [ParsedAction(RELEASE, data)] if data else []


def _magic(m: re.Match[str]) -> List[ParsedAction]:
    return [ParsedAction(MAGIC, {canonical_name(m.group(1).strip()): int(m.group(2))})]


def _daily(m: re.Match[str]) -> List[ParsedAction]:
    return [ParsedAction(DAILY, {record_key(m.group(2).strip()): int(m.group(1))})]


def _bank(m: re.Match[str]) -> List[ParsedAction]:
    data = {item: -amount for item, amount in parse_items(m.group(1), sep=" and ").items()}
    data.update(parse_items(m.group(2), sep=" and "))
    return [ParsedAction(BANK, data)] if data else []


def _items_of(kind: str) -> Callable[[re.Match[str]], List[ParsedAction]]:
    def handler(m: re.Match[str]) -> List[ParsedAction]:
        data = parse_items(m.group(1))
        return [ParsedAction(kind, data)] if data else []
    return handler


def _invest(m: re.Match[str]) -> List[ParsedAction]:
    return [ParsedAction(INVEST, {m.group(3).strip(): int(m.group(1))})]


@dataclass(frozen=True)
class RecordExtractor:
    """A sentence pattern and the handler that turns its match into actions."""
    kind: str
    pattern: re.Pattern[str]
    handler: Callable[[re.Match[str]], List[ParsedAction]]

    def __call__(self, text: str) -> List[ParsedAction]:
        m = self.pattern.search(text)
        if not m:
            return []
        return self.handler(m)


RECORD_EXTRACTORS: Tuple[RecordExtractor, ...] = (
    RecordExtractor(DRAFTRATE, DRAFTRATE_PATTERN, _draftrate),
    RecordExtractor(RELEASE, RELEASE_PATTERN, _release),
    RecordExtractor(MAGIC, MAGIC_PATTERN, _magic),
    RecordExtractor(DAILY, DAILY_PATTERN, _daily),
    RecordExtractor(BANK, BANK_PATTERN, _bank),
    RecordExtractor(EXPLORE, EXPLORE_PATTERN, _items_of(EXPLORE)),
    RecordExtractor(DESTRUCTION, DESTRUCTION_PATTERN, _items_of(DESTRUCTION)),
    RecordExtractor(REZONE, REZONE_PATTERN, _items_of(REZONE)),
    RecordExtractor(CONSTRUCTION, CONSTRUCTION_PATTERN, _items_of(CONSTRUCTION)),
    RecordExtractor(TRAIN, TRAIN_PATTERN, _items_of(TRAIN)),
    RecordExtractor(INVEST, INVEST_PATTERN, _invest),
)


# ------------------------------------------------------------------
# Parser
# ------------------------------------------------------------------

@dataclass
class ParseResult:
    """Records keyed by zero-based hour, plus the error that stopped parsing, if any."""
    records: Dict[int, List[ParsedAction]]
    error: Optional[LineParseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class NarrativeParser:
    """
    Stateful line processor for narrative logs.

    Conceptual role:
    - `current_hour` is 0 until the first header, then `hour - 1` of the last header.
    - Sentences are filed under the current hour in the order they appear.
    - A header that does not move the hour forward is fatal for the run.
    """

    def __init__(
        self,
        config: ParserConfig | None = None,
        extractors: Iterable[RecordExtractor] = RECORD_EXTRACTORS,
    ) -> None:
        self.config = config or ParserConfig()
        self.extractors = tuple(extractors)
        self.current_hour = 0
        self.records: Dict[int, List[ParsedAction]] = {}

    def _debug(self, msg: str, *args: object) -> None:
        if self.config.debug:
            logger.debug(msg, *args)

    def add_action(self, action: ParsedAction) -> None:
        self.records.setdefault(self.current_hour, []).append(action)
        self._debug("hour %d: %s %s", self.current_hour, action.kind, action.data)

    def feed(self, text: str) -> List[ParsedAction]:
        """
        Process one line; returns the actions it produced.

        Raises OutOfOrderHourError for a header that does not advance the hour.
        """
        self._debug("line: %s", text)

        m = HOUR_PATTERN.search(text)
        if m:
            hour = int(m.group(1))
            if hour <= self.current_hour:
                raise OutOfOrderHourError(hour, self.current_hour)
            self.current_hour = hour - 1
            return []

        actions: List[ParsedAction] = []
        for extractor in self.extractors:
            for action in extractor(text):
                self.add_action(action)
                actions.append(action)
        return actions

    def parse(self, lines: Iterable[Tuple[int, str]]) -> ParseResult:
        """
        Feed `(line_number, text)` pairs until input ends, the last hour is
        passed or a line fails.
        """
        for line_number, text in lines:
            try:
                self.feed(text)
            except SimLogError as err:
                wrapped = LineParseError(self.current_hour, line_number, text, err)
                if self.config.debug:
                    logger.debug("parse failure", exc_info=err)
                return ParseResult(records=self.records, error=wrapped)

            if self.current_hour > self.config.last_hour:
                break

        return ParseResult(records=self.records)


# ------------------------------------------------------------------
# Entry points
# ------------------------------------------------------------------

def parse_log(path: str | Path, config: ParserConfig | None = None) -> ParseResult:
    """Parse a narrative log file into per-hour records."""
    with open_log(path) as fh:
        return NarrativeParser(config).parse(LineScanner(fh))


def parse_text(text: str, config: ParserConfig | None = None) -> ParseResult:
    return NarrativeParser(config).parse(LineScanner.from_text(text))
