from datetime import date, datetime, time

import pytest
from openpyxl import Workbook, load_workbook

from od_simlog.errors import CellReadError
from od_simlog.generator import generate_log
from od_simlog.io_excel import WorkbookGridSource, render_cell


@pytest.fixture
def ws():
    return Workbook().active


class TestRenderCell:
    def test_blank(self, ws):
        assert render_cell(ws["A1"]) == ""

    def test_whole_float(self, ws):
        ws["A1"] = 12.0
        assert render_cell(ws["A1"]) == "12"

    def test_integral_display_format(self, ws):
        ws["A1"] = 1234.6
        ws["A1"].number_format = "#,##0"
        assert render_cell(ws["A1"]) == "1235"

    def test_fraction(self, ws):
        ws["A1"] = 2.5
        assert render_cell(ws["A1"]) == "2.5"

    def test_percent(self, ws):
        ws["A1"] = 0.9
        ws["A1"].number_format = "0%"
        assert render_cell(ws["A1"]) == "90%"

    def test_clock(self, ws):
        ws["A1"] = time(18, 0)
        assert render_cell(ws["A1"]) == "18:00"

    def test_date(self, ws):
        ws["A1"] = date(2024, 5, 18)
        ws["A2"] = datetime(2024, 5, 18, 9, 30)
        assert render_cell(ws["A1"]) == "5/18/2024"
        assert render_cell(ws["A2"]) == "5/18/2024"

    def test_integral_format_rounds_ties_away_from_zero(self, ws):
        ws["A1"] = 2502.5
        ws["A1"].number_format = "#,##0"
        ws["A2"] = -2502.5
        ws["A2"].number_format = "#,##0"
        assert render_cell(ws["A1"]) == "2503"
        assert render_cell(ws["A2"]) == "-2503"

    def test_percent_rounds_ties_away_from_zero(self, ws):
        ws["A1"] = 0.125
        ws["A1"].number_format = "0%"
        assert render_cell(ws["A1"]) == "13%"

    def test_formula_noise_is_hidden(self, ws):
        ws["A1"] = 30.000000000000007
        ws["A2"] = 5.000000000000001
        ws["A3"] = 0.1 + 0.2
        assert render_cell(ws["A1"]) == "30"
        assert render_cell(ws["A2"]) == "5"
        assert render_cell(ws["A3"]) == "0.3"

    def test_datetime_with_clock_format(self, ws):
        ws["A1"] = datetime(2024, 5, 18, 18, 0)
        ws["A1"].number_format = "h:mm"
        ws["A2"] = datetime(2024, 5, 18, 6, 30)
        ws["A2"].number_format = "[$-409]h:mm AM/PM"
        assert render_cell(ws["A1"]) == "18:00"
        assert render_cell(ws["A2"]) == "6:30"

    def test_datetime_with_date_format(self, ws):
        ws["A1"] = datetime(2024, 5, 18, 18, 0)
        ws["A1"].number_format = "mm-dd-yy h:mm"
        assert render_cell(ws["A1"]) == "5/18/2024"

    def test_text_is_stripped(self, ws):
        ws["A1"] = "  Plains "
        assert render_cell(ws["A1"]) == "Plains"


class TestWorkbookGridSource:
    def test_reads_cells(self, sim_workbook):
        with WorkbookGridSource(sim_workbook) as grid:
            assert grid.get_cell("Military", "AX2") == "Spearman"
            assert grid.get_cell("Military", "AX4") == "10"
            assert grid.get_cell("Imps", "BY4") == "18:00"

    def test_unused_cell_is_blank(self, sim_workbook):
        with WorkbookGridSource(sim_workbook) as grid:
            assert grid.get_cell("Military", "ZZ500") == ""

    def test_missing_sheet(self, sim_workbook):
        with WorkbookGridSource(sim_workbook) as grid:
            with pytest.raises(CellReadError, match="sheet not found: Nope!A1"):
                grid.get_cell("Nope", "A1")

    def test_bad_coordinate(self, sim_workbook):
        with WorkbookGridSource(sim_workbook) as grid:
            with pytest.raises(CellReadError):
                grid.get_cell("Military", "not-a-cell")

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            WorkbookGridSource(tmp_path / "missing.xlsx")


class TestGenerateFromWorkbook:
    def test_formula_noise_does_not_stop_the_run(self, sim_workbook):
        wb = load_workbook(sim_workbook)
        wb["Military"]["AY5"] = 5.000000000000001
        wb.save(sim_workbook)

        result = generate_log(sim_workbook)
        assert result.ok, result.error
        assert result.hours == [1, 2, 3]
        assert "You successfully released 5 Archer.\n" in result.report

    def test_clock_cells_holding_full_datetimes(self, sim_workbook):
        wb = load_workbook(sim_workbook)
        imps = wb["Imps"]
        imps["BY4"] = datetime(2024, 5, 18, 18, 0)
        imps["BY4"].number_format = "h:mm"
        wb.save(sim_workbook)

        result = generate_log(sim_workbook, hour=1)
        assert result.ok, result.error
        assert result.report.startswith("====== Protection Hour: 1 ( Local Time: 6:00:00 PM 5/18/2024 )")
