from __future__ import annotations

from io import BytesIO

from openpyxl import load_workbook

from helpers_seed import seed_all


def test_timeline_workbook(app_client):
    _app, client = app_client
    seed_all()

    res = client.get(
        "/api/v1/reports/timeline.xlsx?employeeId=101&todayBS=2080-01-01&evaluationEndDateBS=2080-01-01"
    )
    assert res.status_code == 200
    assert res.mimetype == "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    assert "timeline_101_2080-01-01.xlsx" in res.headers["Content-Disposition"]

    wb = load_workbook(BytesIO(res.data))
    assert wb.sheetnames == ["Meta", "Timeline", "Seniority"]

    timeline = list(wb["Timeline"].iter_rows(values_only=True))
    assert timeline[0][0] == "Start Date BS"
    assert len(timeline) == 4
    assert timeline[1][0] == "2078-01-01"

    meta = {row[0]: row[1] for row in wb["Meta"].iter_rows(min_row=2, values_only=True)}
    assert meta["employeeId"] == 101
    assert meta["todayBS"] == "2080-01-01"
    assert "BS" in meta["generatedAt"]


def test_timeline_workbook_reports_seniority_problems_inline(app_client):
    _app, client = app_client
    seed_all()

    res = client.get("/api/v1/reports/timeline.xlsx?employeeId=101&todayBS=2080-01-01&evaluationEndDateBS=2070-01-01")
    assert res.status_code == 200
    wb = load_workbook(BytesIO(res.data))
    rows = list(wb["Seniority"].iter_rows(values_only=True))
    assert rows[0] == ("error",)
    assert "after evaluation end" in rows[1][0]


def test_timeline_workbook_unknown_employee(app_client):
    _app, client = app_client
    res = client.get("/api/v1/reports/timeline.xlsx?employeeId=555")
    assert res.status_code == 404
    assert res.get_json()["error"]["code"] == "NOT_FOUND"

    res = client.get("/api/v1/reports/timeline.xlsx")
    assert res.status_code == 400
