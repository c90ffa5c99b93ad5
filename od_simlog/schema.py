# od_simlog/schema.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class SheetMap:
    """
    Names of the workbook sheets read by the log generator.

    Conceptual role:
    - Centralizes the mapping between extractor code and the sim workbook.
    - Prevents silent drift when a sheet is renamed in a new sim release.
    """

    # ------------------------------------------------------------------
    # Static setup
    # ------------------------------------------------------------------
    overview: str = "Overview"
    constants: str = "Constants"

    # ------------------------------------------------------------------
    # Per-hour panels (one row per hour)
    # ------------------------------------------------------------------
    population: str = "Population"
    production: str = "Production"
    construction: str = "Construction"
    explore: str = "Explore"
    rezone: str = "Rezone"
    military: str = "Military"
    magic: str = "Magic"
    techs: str = "Techs"
    imps: str = "Imps"


SHEETS = SheetMap()


@dataclass(frozen=True)
class SpellDef:
    """A castable spell: activation flag column on Magic, cost multiplier on Constants."""
    name: str
    flag_col: str
    multiplier_cell: str


@dataclass(frozen=True)
class ImprovementSlot:
    """One of the three investment slots on the Imps sheet."""
    amount_col: str
    resource_col: str
    target_col: str


# ------------------------------------------------------------------
# Buildings (same order on the construct and destroy blocks)
# ------------------------------------------------------------------
BUILDING_NAMES: Tuple[str, ...] = (
    "Homes", "Alchemies", "Farms", "Smithies", "Masonries", "Lumber Yards",
    "Ore Mines", "Gryphon Nests", "Factories", "Guard Towers", "Barracks",
    "Shrines", "Towers", "Temples", "Wizard Guilds", "Diamond Mines", "Schools", "Docks",
)

CONSTRUCT_COLUMNS: Tuple[str, ...] = (
    "O", "P", "Q", "R", "S", "T", "V", "W", "X", "Y",
    "Z", "AA", "AB", "AC", "AD", "AE", "AF", "AG",
)

DESTROY_COLUMNS: Tuple[str, ...] = (
    "BW", "BX", "BY", "BZ", "CA", "CB", "CD", "CE", "CF",
    "CG", "CH", "CI", "CJ", "CK", "CL", "CM", "CN", "CO",
)

# ------------------------------------------------------------------
# Land types
# ------------------------------------------------------------------
LAND_TYPES: Tuple[str, ...] = ("Plains", "Forest", "Mountains", "Hills", "Swamps", "Caverns", "Water")

EXPLORE_COLUMNS: Tuple[Tuple[str, str], ...] = tuple(zip(LAND_TYPES, ("T", "U", "V", "W", "X", "Y", "Z")))
REZONE_COLUMNS: Tuple[Tuple[str, str], ...] = tuple(zip(LAND_TYPES, ("L", "M", "N", "O", "P", "Q", "R")))

# ------------------------------------------------------------------
# Military
# ------------------------------------------------------------------
UNIT_NAME_ROW = 2

RELEASE_COLUMNS: Tuple[str, ...] = ("AX", "AY", "AZ", "BA", "BB", "BC", "BD", "BE")
RELEASE_DRAFTEES_COLUMN = "AW"

TRAIN_COLUMNS: Tuple[str, ...] = ("AG", "AH", "AI", "AJ", "AK", "AL", "AM", "AN")
TRAIN_SPIES_SLOT = 5
TRAIN_WIZARDS_SLOT = 7

# ------------------------------------------------------------------
# Magic
# ------------------------------------------------------------------
RACIAL_SPELL = "Racial Spell"

SPELLS: Tuple[SpellDef, ...] = (
    SpellDef("Gaia's Watch", "G", "B75"),
    SpellDef("Mining Strength", "H", "B76"),
    SpellDef("Ares' Call", "I", "B77"),
    SpellDef("Midas Touch", "J", "B78"),
    SpellDef("Harmony", "K", "B79"),
) + tuple(SpellDef(RACIAL_SPELL, col, "B80") for col in ("L", "M", "N", "O", "P", "Q", "R", "S", "T", "U"))

# ------------------------------------------------------------------
# Trade (Production sheet; negative = given away, positive = received)
# ------------------------------------------------------------------
TRADE_COLUMNS: Tuple[Tuple[str, str], ...] = (
    ("platinum", "BC"),
    ("lumber", "BD"),
    ("ore", "BE"),
    ("gems", "BF"),
)

# ------------------------------------------------------------------
# Castle improvements
# ------------------------------------------------------------------
IMPROVEMENT_SLOTS: Tuple[ImprovementSlot, ...] = (
    ImprovementSlot("P", "O", "Q"),
    ImprovementSlot("S", "R", "T"),
    ImprovementSlot("V", "U", "W"),
)

# ------------------------------------------------------------------
# Fixed cells
# ------------------------------------------------------------------
DATE_CELL = "B15"          # Overview: protection start date
DAILY_LAND_CELL = "B70"    # Overview: home land type
