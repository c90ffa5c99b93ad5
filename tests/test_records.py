import json

from openpyxl import load_workbook

from od_simlog.parser import ParsedAction
from od_simlog.records import (
    RECORD_COLUMNS,
    records_to_dict,
    records_to_frame,
    records_to_json,
    summarize_by_kind,
    write_records,
)

RECORDS = {
    2: [ParsedAction("invest", {"Keep": 1000})],
    0: [
        ParsedAction("release", {"Spearman": 10, "spies": 5}),
        ParsedAction("release", {"draftees": 12}),
    ],
}


class TestConversions:
    def test_dict_has_sorted_string_hours(self):
        data = records_to_dict(RECORDS)
        assert list(data) == ["0", "2"]
        assert data["2"] == [{"kind": "invest", "data": {"Keep": 1000}}]

    def test_json(self):
        assert json.loads(records_to_json(RECORDS)) == records_to_dict(RECORDS)

    def test_frame_is_long_format(self):
        df = records_to_frame(RECORDS)
        assert list(df.columns) == RECORD_COLUMNS
        assert len(df) == 4
        assert df.iloc[2].to_dict() == {"hour": 0, "seq": 1, "kind": "release", "item": "draftees", "amount": 12}

    def test_summary(self):
        summary = summarize_by_kind(RECORDS)
        totals = {(k, i): a for k, i, a in summary.itertuples(index=False, name=None)}
        assert totals == {
            ("invest", "Keep"): 1000,
            ("release", "Spearman"): 10,
            ("release", "draftees"): 12,
            ("release", "spies"): 5,
        }

    def test_empty(self):
        assert records_to_frame({}).empty
        assert summarize_by_kind({}).empty
        assert records_to_json({}) == "{}"


class TestWriteRecords:
    def test_stdout(self, capsys):
        write_records(RECORDS)
        assert json.loads(capsys.readouterr().out) == records_to_dict(RECORDS)

    def test_json_file(self, tmp_path, capsys):
        out = tmp_path / "records.json"
        write_records(RECORDS, out)
        assert json.loads(out.read_text(encoding="utf-8")) == records_to_dict(RECORDS)
        assert "Successfully wrote result to" in capsys.readouterr().out

    def test_workbook(self, tmp_path):
        out = tmp_path / "records.xlsx"
        write_records(RECORDS, out)

        wb = load_workbook(out)
        assert wb.sheetnames == ["records", "summary"]
        rows = list(wb["records"].iter_rows(values_only=True))
        assert rows[0] == tuple(RECORD_COLUMNS)
        assert rows[-1] == (2, 0, "invest", "Keep", 1000)
        assert len(list(wb["summary"].iter_rows(values_only=True))) == 5
