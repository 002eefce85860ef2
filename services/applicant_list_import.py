"""
Approved applicant list import.

The workbook's first sheet holds one applicant per row under a header row that
names an employee-number column (``Emp No``, ``Employee No``, ``Employee ID``).
Rows above the header (report titles, ministry banners) are ignored. When the
sheet also carries a ``Bigyapan No`` column, rows for other vacancies are
skipped.

Saving replaces the vacancy's applicant set: new employees are added, employees
no longer listed are removed, and those already present keep their stored marks.
"""
from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Sequence

from dotenv import load_dotenv
from sqlalchemy import delete, select

import db as db_
from cache_layer import SCORECARD_NAMESPACE, cache_invalidate_prefix, namespace_prefix
from config import Config
from models import Applicant, Vacancy
from services.employee_detail_import import _as_int, _cell_text, _is_blank, _read_rows, header_key, resolve_source_path

log = logging.getLogger("import.applicants")

EMPLOYEE_COLUMNS = {"empno", "employeeno", "employeeid", "empid", "employeenumber"}
BIGYAPAN_COLUMNS = {"bigyapanno", "bigyapannumber", "advertisementno"}


@dataclass
class ApplicantList:
    bigyapan_no: str
    employee_ids: list[int] = field(default_factory=list)
    skipped: int = 0


def _find_header(row: Sequence[Any]) -> Optional[tuple[int, Optional[int]]]:
    emp_col = bigyapan_col = None
    for idx, value in enumerate(row):
        key = header_key(value)
        if emp_col is None and key in EMPLOYEE_COLUMNS:
            emp_col = idx
        elif bigyapan_col is None and key in BIGYAPAN_COLUMNS:
            bigyapan_col = idx
    if emp_col is None:
        return None
    return emp_col, bigyapan_col


def parse_applicant_list_rows(rows: Iterable[Sequence[Any]], bigyapan_no: str) -> ApplicantList:
    bigyapan_no = str(bigyapan_no or "").strip()
    out = ApplicantList(bigyapan_no=bigyapan_no)
    seen: set[int] = set()
    columns: Optional[tuple[int, Optional[int]]] = None

    for row_no, row in enumerate(rows, start=1):
        row = list(row or [])
        if _is_blank(row):
            continue
        if columns is None:
            columns = _find_header(row)
            continue

        emp_col, bigyapan_col = columns
        if bigyapan_col is not None and bigyapan_col < len(row):
            row_bigyapan = _cell_text(row[bigyapan_col])
            if row_bigyapan and row_bigyapan != bigyapan_no:
                out.skipped += 1
                continue
        emp_id = _as_int(row[emp_col]) if emp_col < len(row) else 0
        if emp_id <= 0:
            log.warning("Row %s: skipping applicant with invalid employee number %r", row_no, row[emp_col] if emp_col < len(row) else None)
            out.skipped += 1
            continue
        if emp_id in seen:
            continue
        seen.add(emp_id)
        out.employee_ids.append(emp_id)

    if columns is None:
        raise ValueError("Applicant list has no employee number column")
    return out


def read_applicant_list_workbook(source, bigyapan_no: str) -> ApplicantList:
    return parse_applicant_list_rows(_read_rows(source), bigyapan_no)


def save_applicant_list(db, applicants: ApplicantList) -> dict[str, int]:
    bigyapan_no = applicants.bigyapan_no
    vacancy = db.execute(select(Vacancy).where(Vacancy.bigyapanNo == bigyapan_no)).scalar_one_or_none()
    if not vacancy:
        raise LookupError(f"Vacancy {bigyapan_no} not found")

    existing = set(
        db.execute(select(Applicant.employeeId).where(Applicant.bigyapanNo == bigyapan_no)).scalars().all()
    )
    wanted = set(applicants.employee_ids)

    removed = existing - wanted
    if removed:
        db.execute(
            delete(Applicant).where(Applicant.bigyapanNo == bigyapan_no, Applicant.employeeId.in_(sorted(removed)))
        )
    added = [emp_id for emp_id in applicants.employee_ids if emp_id not in existing]
    for emp_id in added:
        db.add(Applicant(employeeId=emp_id, bigyapanNo=bigyapan_no))
    db.flush()

    cache_invalidate_prefix(namespace_prefix(SCORECARD_NAMESPACE, bigyapan_no))
    counts = {"applicants": len(wanted), "added": len(added), "removed": len(removed), "skipped": applicants.skipped}
    log.info("applicant list import bigyapan=%s %s", bigyapan_no, counts)
    return counts


def main():
    parser = argparse.ArgumentParser(description="Replace a vacancy's approved applicant list from a workbook.")
    parser.add_argument("file", help="Path to the applicant list .xlsx (relative paths also tried under UPLOAD_DIR).")
    parser.add_argument("--bigyapan", required=True, help="Bigyapan number of the vacancy the list belongs to.")
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
        counts = save_applicant_list(session, read_applicant_list_workbook(path, args.bigyapan))
        session.commit()
        print(f"Imported: {counts}")
    except LookupError as e:
        session.rollback()
        raise SystemExit(str(e))
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


if __name__ == "__main__":
    main()
