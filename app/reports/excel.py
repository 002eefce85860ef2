from __future__ import annotations

from io import BytesIO
from typing import Any, Optional

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font
from openpyxl.utils import get_column_letter

from app.utils.datetime import generated_stamp

TIMELINE_COLUMNS = [
    ("startDateBS", "Start Date BS"),
    ("endDateBS", "End Date BS"),
    ("level", "Level"),
    ("position", "Position"),
    ("workOffice", "Work Office"),
    ("district", "District"),
    ("category", "Category"),
    ("years", "Years"),
    ("months", "Months"),
    ("days", "Days"),
    ("totalNumDays", "Total Days"),
    ("beforeBreak", "Old Scheme"),
    ("isBreak", "Break"),
    ("remarks", "Remarks"),
    ("presentDays", "Present Days"),
    ("marksYear", "Marks/Year"),
    ("yearMarks", "Year Marks"),
    ("monthMarks", "Month Marks"),
    ("daysMarks", "Days Marks"),
    ("totalMarks", "Total Marks"),
]

SENIORITY_COLUMNS = [
    ("startDateBS", "Start Date BS"),
    ("endDateBS", "End Date BS"),
    ("totalNumDays", "Total Days"),
    ("years", "Years"),
    ("months", "Months"),
    ("days", "Days"),
    ("isBreak", "Break"),
    ("remarks", "Remarks"),
    ("totalMarks", "Total Marks"),
]


def _auto_fit(ws) -> None:
    for col in ws.columns:
        max_len = 0
        col_letter = get_column_letter(col[0].column)
        for cell in col:
            v = "" if cell.value is None else str(cell.value)
            max_len = max(max_len, len(v))
        ws.column_dimensions[col_letter].width = min(max(12, max_len + 2), 60)


def _write_table(ws, headers: list[str], rows: list[list[Any]]) -> None:
    ws.append(headers)
    for r in rows:
        ws.append(r)

    ws.freeze_panes = "A2"
    ws.auto_filter.ref = ws.dimensions

    header_font = Font(bold=True)
    for cell in ws[1]:
        cell.font = header_font
        cell.alignment = Alignment(horizontal="center")

    _auto_fit(ws)


def _cell(value: Any) -> Any:
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, float):
        return round(value, 4)
    return value


def _rows(items: list[dict[str, Any]], columns: list[tuple[str, str]]) -> list[list[Any]]:
    return [[_cell(item.get(key)) for key, _ in columns] for item in items]


def build_timeline_workbook_bytes(
    *,
    employee: dict[str, Any],
    timeline: dict[str, Any],
    seniority: Optional[dict[str, Any]],
    seniority_error: str = "",
    timezone_display: str,
) -> bytes:
    wb = Workbook()
    wb.remove(wb.active)

    summary = timeline.get("summary") or {}
    meta = wb.create_sheet("Meta")
    meta_rows = [
        ["employeeId", employee.get("employeeId")],
        ["name", employee.get("name")],
        ["level", employee.get("level")],
        ["seniorityDateBS", employee.get("seniorityDateBS")],
        ["todayBS", timeline.get("todayBS")],
        ["geographicalMarks", _cell(float(summary.get("totalMarks") or 0))],
        ["generatedAt", generated_stamp(timezone_display)],
    ]
    if seniority:
        meta_rows.append(["seniorityMarks", _cell(float(seniority.get("seniorityMarks") or 0))])
    _write_table(meta, ["key", "value"], meta_rows)

    ws = wb.create_sheet("Timeline")
    _write_table(ws, [label for _, label in TIMELINE_COLUMNS], _rows(timeline.get("segments") or [], TIMELINE_COLUMNS))

    sen = wb.create_sheet("Seniority")
    if seniority:
        _write_table(sen, [label for _, label in SENIORITY_COLUMNS], _rows(seniority.get("segments") or [], SENIORITY_COLUMNS))
        sen.append([])
        sen.append(
            [
                "Elapsed",
                f"{seniority.get('yearsElapsed')}y {seniority.get('monthsElapsed')}m {seniority.get('daysElapsed')}d",
                "Marks",
                _cell(float(seniority.get("seniorityMarks") or 0)),
            ]
        )
    else:
        _write_table(sen, ["error"], [[seniority_error or "Seniority not available"]])

    with BytesIO() as bio:
        wb.save(bio)
        return bio.getvalue()
