"""
Reference workbook import (five sheets, first row of each is a header):

1. district -> category      (columns B, C)
2. office -> district        (columns B, C)
3. old-scheme marks, male    (columns A, B)
4. old-scheme marks, female  (columns A, B)
5. new-scheme marks          (columns A, B)

The import replaces all reference tables and drops the cached snapshot along
with every cached vacancy scorecard.
"""
from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from dotenv import load_dotenv
from openpyxl import load_workbook
from sqlalchemy import delete

import db as db_
from actions.reference_repo import invalidate_reference_data
from cache_layer import SCORECARD_NAMESPACE, cache_invalidate_prefix, namespace_prefix
from config import Config
from models import CategoryMarks, District, Office
from services.employee_detail_import import resolve_source_path

log = logging.getLogger("import.district")

SHEET_COUNT = 5


@dataclass
class DistrictData:
    districts: list[tuple[str, str]] = field(default_factory=list)
    offices: list[tuple[str, str]] = field(default_factory=list)
    marks: list[tuple[str, float, str, Optional[str]]] = field(default_factory=list)


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _pairs(rows: Sequence[Sequence[Any]], first: int, second: int) -> list[tuple[str, str]]:
    out: list[tuple[str, str]] = []
    for row in list(rows)[1:]:
        row = list(row or [])
        a = _text(row[first]) if first < len(row) else ""
        b = _text(row[second]) if second < len(row) else ""
        if a and b:
            out.append((a, b))
    return out


def _marks(rows: Sequence[Sequence[Any]], era_type: str, gender: Optional[str], sheet: int) -> list:
    out = []
    for category, raw in _pairs(rows, 0, 1):
        try:
            value = float(raw)
        except ValueError:
            log.warning("Sheet %s: skipping category %r with non-numeric marks %r", sheet, category, raw)
            continue
        out.append((category, value, era_type, gender))
    return out


def parse_district_sheets(sheets: Sequence[Sequence[Sequence[Any]]]) -> DistrictData:
    if len(sheets) < SHEET_COUNT:
        raise ValueError(f"District workbook needs {SHEET_COUNT} sheets, found {len(sheets)}")
    return DistrictData(
        districts=_pairs(sheets[0], 1, 2),
        offices=_pairs(sheets[1], 1, 2),
        marks=(
            _marks(sheets[2], "old", "male", 3)
            + _marks(sheets[3], "old", "female", 4)
            + _marks(sheets[4], "new", None, 5)
        ),
    )


def read_district_workbook(source) -> DistrictData:
    wb = load_workbook(source, read_only=True, data_only=True)
    try:
        sheets = [[tuple(r) for r in ws.iter_rows(values_only=True)] for ws in wb.worksheets[:SHEET_COUNT]]
    finally:
        wb.close()
    return parse_district_sheets(sheets)


def save_district_data(db, data: DistrictData) -> dict[str, int]:
    db.execute(delete(CategoryMarks))
    db.execute(delete(Office))
    db.execute(delete(District))

    # Last row wins when a name repeats.
    districts = dict(data.districts)
    offices = dict(data.offices)
    marks = {(c, t, g): m for c, m, t, g in data.marks}

    for name, category in districts.items():
        db.add(District(name=name, category=category))
    for name, district in offices.items():
        db.add(Office(name=name, district=district))
    for (category, era_type, gender), value in marks.items():
        db.add(CategoryMarks(category=category, marks=value, type=era_type, gender=gender))
    db.flush()

    invalidate_reference_data()
    # Scorecards embed category marks.
    cache_invalidate_prefix(namespace_prefix(SCORECARD_NAMESPACE))
    counts = {"districts": len(districts), "offices": len(offices), "categoryMarks": len(marks)}
    log.info("district data import %s", counts)
    return counts


def main():
    parser = argparse.ArgumentParser(description="Replace district/office/category marks reference data from a workbook.")
    parser.add_argument("file", help="Path to the 5-sheet district data .xlsx (relative paths also tried under UPLOAD_DIR).")
    args = parser.parse_args()

    load_dotenv()
    cfg = Config()
    logging.basicConfig(level=cfg.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    engine = db_.init_engine(cfg.DATABASE_URL)

    from models import Base  # ensure models are registered

    Base.metadata.create_all(bind=engine)

    path = resolve_source_path(args.file, cfg.UPLOAD_DIR)
    session = db_.SessionLocal()
    try:
        counts = save_district_data(session, read_district_workbook(path))
        session.commit()
        print(f"Imported: {counts}")
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


if __name__ == "__main__":
    main()
