# od_simlog/records.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Mapping, Sequence

import pandas as pd

from .io_excel import write_frames_to_workbook
from .parser import ParsedAction

RECORD_COLUMNS: List[str] = ["hour", "seq", "kind", "item", "amount"]

Records = Mapping[int, Sequence[ParsedAction]]


def records_to_dict(records: Records) -> Dict[str, List[Dict[str, object]]]:
    """Nested plain-data view; hours become string keys, in increasing order."""
    return {str(hour): [a.to_dict() for a in records[hour]] for hour in sorted(records)}


def records_to_json(records: Records, indent: int = 2) -> str:
    return json.dumps(records_to_dict(records), indent=indent, ensure_ascii=False)


def records_to_frame(records: Records) -> pd.DataFrame:
    """
    Long-format table of parsed records.

    One row per (hour, action, item); `seq` is the action's position within
    its hour so actions of the same kind stay distinguishable.
    """
    rows: List[Dict[str, object]] = []
    for hour in sorted(records):
        for seq, action in enumerate(records[hour]):
            for item, amount in action.data.items():
                rows.append(dict(hour=hour, seq=seq, kind=action.kind, item=item, amount=int(amount)))
    return pd.DataFrame(rows, columns=RECORD_COLUMNS)


def summarize_by_kind(records: Records) -> pd.DataFrame:
    """Total amount per (kind, item) across all hours."""
    df = records_to_frame(records)
    if df.empty:
        return pd.DataFrame(columns=["kind", "item", "amount"])
    return df.groupby(["kind", "item"], as_index=False, sort=True)["amount"].sum()


def write_records(records: Records, result_path: str | Path | None = None) -> None:
    """
    Deliver parsed records.

    Behavior:
    - no path or `std`: print JSON
    - `.xlsx` path: `records` and `summary` sheets
    - any other path: JSON file
    """
    if not result_path or str(result_path) == "std":
        print(records_to_json(records))
        return

    path = Path(result_path)
    if path.suffix.lower() == ".xlsx":
        write_frames_to_workbook(path, {
            "records": records_to_frame(records),
            "summary": summarize_by_kind(records),
        })
    else:
        path.write_text(records_to_json(records) + "\n", encoding="utf-8")
    print(f"Successfully wrote result to {result_path}")
