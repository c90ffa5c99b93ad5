# od_simlog/config.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LogConfig:
    """
    Configuration for the narrative log generator.

    Conceptual role:
    - Encodes the fixed layout assumptions of the protection sim workbook.
    - Game constants that the workbook does not expose as cells live here.

    Design principles:
    - Immutable (frozen=True) so two runs over the same workbook are identical.
    - Every value has the default used by the published sim.
    """

    # ------------------------------------------------------------------
    # Time structure
    # ------------------------------------------------------------------
    last_hour: int = 73
    # Protection lasts 72 hours; hour 73 is the first unprotected tick.

    header_rows: int = 3
    # Rows above hour 1 in every per-hour sheet (row = hour + header_rows).

    # ------------------------------------------------------------------
    # Game constants
    # ------------------------------------------------------------------
    land_bonus: int = 20
    # Acres granted by the daily land bonus; also discounted from spell cost.

    plat_awarded_mult: int = 4
    # Daily platinum bonus = peasants * plat_awarded_mult.

    default_spell_multiplier: float = 2.0
    # Used when a spell cost multiplier on the Constants sheet is missing.


@dataclass(frozen=True)
class ParserConfig:
    """
    Configuration for the narrative log parser.

    Notes:
    - `debug` replaces a process-wide flag; it only changes logging verbosity,
      never the parsed result.
    """

    last_hour: int = 73
    debug: bool = False
