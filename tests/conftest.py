"""
Shared fixtures: an in-memory sim where every cell the extractors read exists
and is blank, so each test only sets the cells its scenario needs.
"""

import pytest
from openpyxl import Workbook

from od_simlog.grid import MappingGridSource
from od_simlog.hours import for_hour
from od_simlog.schema import (
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
    UNIT_NAME_ROW,
)

RELEASE_NAMES = ["Spearman", "Archer", "Knight", "Cavalry", "Spies", "Archspies", "Wizards", "Archmages"]
TRAIN_NAMES = ["Spearman", "Archer", "Knight", "Cavalry", "Unused", "Spies", "Archspies", "Wizards"]


def row(hour):
    return for_hour(hour).row


def _hour_cells(r):
    """Every per-hour cell the extractors read at row r, blank."""
    cells = {
        SHEETS.imps: {f"BY{r}": "18:00", f"BZ{r}": "00:00"},
        SHEETS.military: {f"Y{r}": "", f"Z{r - 1}": "", f"{RELEASE_DRAFTEES_COLUMN}{r}": "", f"AR{r}": "", f"AS{r}": ""},
        SHEETS.explore: {f"S{r}": "", f"B{r}": "", f"AH{r}": "", f"AI{r}": ""},
        SHEETS.magic: {},
        SHEETS.techs: {f"K{r}": "", f"CA{r}": ""},
        SHEETS.production: {f"C{r}": ""},
        SHEETS.population: {f"C{r}": ""},
        SHEETS.construction: {f"AQ{r}": "", f"AR{r}": ""},
        SHEETS.rezone: {f"Y{r}": ""},
    }
    for col in RELEASE_COLUMNS + TRAIN_COLUMNS:
        cells[SHEETS.military][f"{col}{r}"] = ""
    for spell in SPELLS:
        cells[SHEETS.magic][f"{spell.flag_col}{r}"] = ""
    for _, col in EXPLORE_COLUMNS:
        cells[SHEETS.explore][f"{col}{r}"] = ""
    for _, col in REZONE_COLUMNS:
        cells[SHEETS.rezone][f"{col}{r}"] = ""
    for _, col in TRADE_COLUMNS:
        cells[SHEETS.production][f"{col}{r}"] = ""
    for col in CONSTRUCT_COLUMNS + DESTROY_COLUMNS:
        cells[SHEETS.construction][f"{col}{r}"] = ""
    for slot in IMPROVEMENT_SLOTS:
        for col in (slot.amount_col, slot.resource_col, slot.target_col):
            cells[SHEETS.imps][f"{col}{r}"] = ""
    return cells


def make_sim(last_hour=73):
    """Blank sim covering hours 1..last_hour."""
    sim = MappingGridSource({
        SHEETS.overview: {DATE_CELL: "5/18/2024", DAILY_LAND_CELL: "Plains"},
        SHEETS.constants: {spell.multiplier_cell: "2" for spell in SPELLS},
    })
    for name, col in zip(RELEASE_NAMES, RELEASE_COLUMNS):
        sim.set(SHEETS.military, f"{col}{UNIT_NAME_ROW}", name)
    for name, col in zip(TRAIN_NAMES, TRAIN_COLUMNS):
        sim.set(SHEETS.military, f"{col}{UNIT_NAME_ROW}", name)
    for hour in range(1, last_hour + 1):
        sim.update(_hour_cells(row(hour)))
    return sim


@pytest.fixture
def sim():
    return make_sim()


@pytest.fixture
def sim_workbook(tmp_path):
    """
    Small sim workbook on disk: 10 Spearman released in hour 1, nothing in
    hour 2, 1000 platinum invested into Keep in hour 3.
    """
    wb = Workbook()
    wb.remove(wb.active)
    for name in SHEETS.__dataclass_fields__:
        wb.create_sheet(getattr(SHEETS, name))

    wb[SHEETS.overview][DATE_CELL] = "5/18/2024"
    wb[SHEETS.overview][DAILY_LAND_CELL] = "Plains"
    military = wb[SHEETS.military]
    for name, col in zip(RELEASE_NAMES, RELEASE_COLUMNS):
        military[f"{col}{UNIT_NAME_ROW}"] = name

    imps = wb[SHEETS.imps]
    for hour in range(1, 74):
        r = row(hour)
        imps[f"BY{r}"] = f"{(17 + hour) % 24}:00"
        imps[f"BZ{r}"] = f"{(hour - 1) % 24}:00"

    military[f"AX{row(1)}"] = 10
    imps[f"P{row(3)}"] = 1000
    imps[f"O{row(3)}"] = "platinum"
    imps[f"Q{row(3)}"] = "Keep"

    path = tmp_path / "sim.xlsx"
    wb.save(path)
    return path
