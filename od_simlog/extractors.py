# od_simlog/extractors.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple

from .config import LogConfig
from .errors import (
    CellReadError,
    DateTimeParseError,
    MissingConfigConstant,
    ValueFormatError,
)
from .grid import GridSource
from .hours import HourIndex
from .schema import (
    BUILDING_NAMES,
    CONSTRUCT_COLUMNS,
    DAILY_LAND_CELL,
    DATE_CELL,
    DESTROY_COLUMNS,
    EXPLORE_COLUMNS,
    IMPROVEMENT_SLOTS,
    RELEASE_COLUMNS,
    RELEASE_DRAFTEES_COLUMN,
    REZONE_COLUMNS,
    SHEETS,
    SPELLS,
    TRADE_COLUMNS,
    TRAIN_COLUMNS,
    TRAIN_SPIES_SLOT,
    TRAIN_WIZARDS_SLOT,
    UNIT_NAME_ROW,
)
from .utils import (
    cell_ref,
    format_clock_12h,
    format_items,
    format_short_date,
    parse_clock,
    parse_date,
    parse_float,
    parse_int,
    round_half_away,
)

logger = logging.getLogger(__name__)

HEADER_PREFIX = "====== Protection Hour: "
HEADER_SUFFIX = " ======\n"


# ------------------------------------------------------------------
# Cell access for one hour
# ------------------------------------------------------------------

class HourReader:
    """
    Typed cell reads addressed at one hour's row.

    Every extractor for an hour shares one reader, so they all see the same
    row. Read failures are re-raised with a description of what was read.
    """

    def __init__(self, grid: GridSource, index: HourIndex, config: LogConfig | None = None) -> None:
        self.grid = grid
        self.index = index
        self.config = config or LogConfig()

    def text(self, sheet: str, cell: str, what: str) -> str:
        try:
            return self.grid.get_cell(sheet, cell).strip()
        except CellReadError as err:
            raise CellReadError(sheet, cell, f"error reading {what}") from err

    def text_at(self, sheet: str, col: str, what: str, row: int | None = None) -> str:
        return self.text(sheet, cell_ref(col, self.index.row if row is None else row), what)

    def int_at(self, sheet: str, col: str, what: str, row: int | None = None) -> int:
        cell = cell_ref(col, self.index.row if row is None else row)
        value = self.text(sheet, cell, what)
        try:
            return parse_int(value)
        except ValueError as err:
            raise ValueFormatError(sheet, cell, value, f"error reading {what}") from err

    def float_at(self, sheet: str, cell: str, what: str) -> float:
        value = self.text(sheet, cell, what)
        try:
            return parse_float(value)
        except ValueError as err:
            raise ValueFormatError(sheet, cell, value, f"error reading {what}") from err

    def constant(self, cell: str) -> float:
        """Read a multiplier from the Constants sheet; blank counts as missing."""
        try:
            if self.text(SHEETS.constants, cell, "const") == "":
                raise MissingConfigConstant(cell)
            return self.float_at(SHEETS.constants, cell, "const")
        except (CellReadError, ValueFormatError) as err:
            raise MissingConfigConstant(cell) from err

    def counted(self, sheet: str, columns: Sequence[Tuple[str, str]], what: str) -> List[Tuple[int, str]]:
        """Non-zero `(amount, name)` pairs for `(name, column)` pairs, in column order."""
        items = []
        for name, col in columns:
            value = self.int_at(sheet, col, what)
            if value != 0:
                items.append((value, name))
        return items


# ------------------------------------------------------------------
# Extractor descriptors
# ------------------------------------------------------------------

@dataclass(frozen=True)
class Extractor:
    """A named event detector: returns one narrative sentence or ""."""
    name: str
    func: Callable[[HourReader], str]

    def __call__(self, reader: HourReader) -> str:
        return self.func(reader)


def timeline(r: HourReader) -> str:
    """Header sentence; never suppressed."""
    local_raw = r.text_at(SHEETS.imps, "BY", "local time")
    dom_raw = r.text_at(SHEETS.imps, "BZ", "dom time")
    date_raw = r.text(SHEETS.overview, DATE_CELL, "date")

    try:
        local_time = parse_clock(local_raw)
    except ValueError as err:
        raise DateTimeParseError(local_raw, "error parsing local time") from err
    try:
        dom_time = parse_clock(dom_raw)
    except ValueError as err:
        raise DateTimeParseError(dom_raw, "error parsing dom time") from err
    try:
        day = format_short_date(parse_date(date_raw))
    except ValueError as err:
        raise DateTimeParseError(date_raw, "error parsing date") from err

    return (
        f"{HEADER_PREFIX}{r.index.hour}"
        f" ( Local Time: {format_clock_12h(local_time)} {day} )"
        f" ( Domtime: {format_clock_12h(dom_time)} {day} )"
        f"{HEADER_SUFFIX}"
    )


def draft_rate(r: HourReader) -> str:
    current = r.text_at(SHEETS.military, "Y", "current draftrate")
    previous = r.text_at(SHEETS.military, "Z", "previous draftrate", row=r.index.previous_row)
    if current == "" or current == previous:
        return ""
    return f"Draftrate changed to {current}.\n"


def release_units(r: HourReader) -> str:
    out = ""
    items = []
    for col in RELEASE_COLUMNS:
        name = r.text_at(SHEETS.military, col, "unit name", row=UNIT_NAME_ROW)
        value = r.int_at(SHEETS.military, col, "unit value")
        if value != 0:
            items.append((value, name))
    if items:
        out += f"You successfully released {format_items(items)}.\n"

    draftees = r.int_at(SHEETS.military, RELEASE_DRAFTEES_COLUMN, "draftees value")
    if draftees > 0:
        out += f"You successfully released {draftees} draftees into the peasantry.\n"
    return out


def spell_multiplier(r: HourReader, cell: str) -> float:
    try:
        return r.constant(cell)
    except MissingConfigConstant as err:
        # TODO: confirm with the sim owners whether a missing multiplier should fail the hour.
        logger.warning("%s; using default multiplier %s", err, r.config.default_spell_multiplier)
        return r.config.default_spell_multiplier


def cast_spells(r: HourReader) -> str:
    """
    Spell casts with their mana cost.

    Cost = land * multiplier, with the daily land bonus acres excluded when
    the bonus was claimed this hour.
    """
    land_bonus = r.int_at(SHEETS.explore, "S", "land bonus")
    land_size = r.int_at(SHEETS.explore, "B", "land size")

    lines = []
    for spell in SPELLS:
        active = r.int_at(SHEETS.magic, spell.flag_col, "magic cell")
        if active == 0:
            continue
        mult = spell_multiplier(r, spell.multiplier_cell)
        land = land_size - r.config.land_bonus if land_bonus != 0 else land_size
        mana = round_half_away(land * mult)
        lines.append(f"Your wizards successfully cast {spell.name} at a cost of {mana} mana.\n")
    return "".join(lines)


def unlock_tech(r: HourReader) -> str:
    if r.int_at(SHEETS.techs, "K", "tech status") <= 0:
        return ""
    name = r.text_at(SHEETS.techs, "CA", "tech name")
    return f"You have unlocked {name}.\n"


def daily_platinum(r: HourReader) -> str:
    if r.int_at(SHEETS.production, "C", "platinum bonus") == 0:
        return ""
    peasants = r.int_at(SHEETS.population, "C", "population")
    return f"You have been awarded with {peasants * r.config.plat_awarded_mult} platinum.\n"


def trade_resources(r: HourReader) -> str:
    given: List[str] = []
    received: List[str] = []
    for item, col in TRADE_COLUMNS:
        amount = r.int_at(SHEETS.production, col, f"{item} value for trading")
        if amount < 0:
            given.append(f"{-amount} {item}")
        elif amount > 0:
            received.append(f"{amount} {item}")

    out = ""
    if given:
        out += " and ".join(given) + " have been traded for "
    if received:
        out += " and ".join(received) + ".\n"
    return out


def explore(r: HourReader) -> str:
    items = r.counted(SHEETS.explore, EXPLORE_COLUMNS, "land amount")
    if not items:
        return ""
    plat = r.int_at(SHEETS.explore, "AH", "explore plat cost")
    draftees = r.int_at(SHEETS.explore, "AI", "explore draftees cost")
    return f"Exploration for {format_items(items)} begun at a cost of {plat} platinum and {draftees} draftees.\n"


def daily_land(r: HourReader) -> str:
    if r.int_at(SHEETS.explore, "S", "land bonus value") == 0:
        return ""
    land_type = r.text(SHEETS.overview, DAILY_LAND_CELL, "land type")
    return f"You have been awarded with {r.config.land_bonus} {land_type}.\n"


def destroy_buildings(r: HourReader) -> str:
    items = r.counted(SHEETS.construction, list(zip(BUILDING_NAMES, DESTROY_COLUMNS)), "destroy value")
    if not items:
        return ""
    return f"Destruction of {format_items(items)} is complete.\n"


def rezone(r: HourReader) -> str:
    # gated on cost, not on the land changes
    plat = r.int_at(SHEETS.rezone, "Y", "rezone cost")
    if plat == 0:
        return ""
    items = r.counted(SHEETS.rezone, REZONE_COLUMNS, "rezone value")
    return (
        f"Rezoning begun at a cost of {plat} platinum. "
        f"The changes in land are as following: {format_items(items)}.\n"
    )


def construct_buildings(r: HourReader) -> str:
    items = r.counted(SHEETS.construction, list(zip(BUILDING_NAMES, CONSTRUCT_COLUMNS)), "construction value")
    if not items:
        return ""
    plat = r.int_at(SHEETS.construction, "AQ", "platinum cost")
    lumber = r.int_at(SHEETS.construction, "AR", "lumber cost")
    return f"Construction of {format_items(items)} started at a cost of {plat} platinum and {lumber} lumber.\n"


def train_units(r: HourReader) -> str:
    items = []
    draftees = spies = wizards = 0
    for slot, col in enumerate(TRAIN_COLUMNS):
        name = r.text_at(SHEETS.military, col, "unit name cell", row=UNIT_NAME_ROW)
        value = r.int_at(SHEETS.military, col, "unit value cell")
        if value == 0:
            continue
        if slot == TRAIN_SPIES_SLOT:
            spies += value
        elif slot == TRAIN_WIZARDS_SLOT:
            wizards += value
        else:
            draftees += value
        items.append((value, name))

    if not items:
        return ""
    plat = r.int_at(SHEETS.military, "AR", "platinum training cost")
    ore = r.int_at(SHEETS.military, "AS", "ore training cost")
    return (
        f"Training of {format_items(items)} begun at a cost of {plat} platinum, {ore} ore, "
        f"{draftees} draftees, {spies} spies, and {wizards} wizards.\n"
    )


def improvements(r: HourReader) -> str:
    lines = []
    for slot in IMPROVEMENT_SLOTS:
        amount = r.int_at(SHEETS.imps, slot.amount_col, "amount cell")
        if amount == 0:
            continue
        resource = r.text_at(SHEETS.imps, slot.resource_col, "resource cell")
        target = r.text_at(SHEETS.imps, slot.target_col, "improvement cell")
        lines.append(f"You invested {amount} {resource} into {target}.\n")
    return "".join(lines)


# Registration order is the order sentences appear within an hour.
EXTRACTORS: Tuple[Extractor, ...] = (
    Extractor("timeline", timeline),
    Extractor("draft_rate", draft_rate),
    Extractor("release_units", release_units),
    Extractor("cast_spells", cast_spells),
    Extractor("unlock_tech", unlock_tech),
    Extractor("daily_platinum", daily_platinum),
    Extractor("trade_resources", trade_resources),
    Extractor("explore", explore),
    Extractor("daily_land", daily_land),
    Extractor("destroy_buildings", destroy_buildings),
    Extractor("rezone", rezone),
    Extractor("construct_buildings", construct_buildings),
    Extractor("train_units", train_units),
    Extractor("improvements", improvements),
)


