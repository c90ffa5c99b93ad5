# od_simlog/aliases.py
from __future__ import annotations

from typing import Dict

MILITARY_PREFIX = "military_"

# Narrative (workbook) spelling -> canonical game name.
# Exact, case-sensitive lookup: both "draftees" and "Draftees" are needed.
ALIASES: Dict[str, str] = {
    "draftees": "military_draftees",
    "Draftees": "military_draftees",
    "Spies": "military_spies",
    "Archspies": "military_assassins",
    "Wizards": "military_wizards",
    "Archmages": "military_archmages",
    "Fire Spirit": "Fire Sprite",
    "Ice Beast": "Icebeast",
    "Frost Mage": "FrostMage",
    "Voodoo Magi": "Voodoo Mage",
    "Mermen": "Merman",
    "Sirens": "Siren",
    "Alchemies": "alchemy",
    "Barracks": "barracks",
    "Factories": "factory",
    "Guilds": "wizard_guild",
    "Lumber Yards": "lumberyard",
    "Lumberyards": "lumberyard",
    "Masonries": "masonry",
    "Smithies": "smithy",
    "Ares Call": "Ares' Call",
    "Gaias Blessing": "Gaia's Blessing",
    "Gaias Watch": "Gaia's Watch",
    "Miners Sight": "Miner's Sight",
}


def canonical_name(name: str) -> str:
    """Alias lookup; unknown names pass through unchanged."""
    return ALIASES.get(name, name)


def record_key(name: str) -> str:
    """Canonical name with the `military_` namespace removed, as used in parsed records."""
    name = canonical_name(name)
    if name.startswith(MILITARY_PREFIX):
        return name[len(MILITARY_PREFIX):]
    return name
