from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Optional

ALLOWED_ERROR_CODES = {
    "BAD_REQUEST",
    "NOT_FOUND",
    "CONFLICT",
    "INTERNAL",
}


def map_error_code(code: str) -> str:
    c = str(code or "").upper().strip()
    return c if c in ALLOWED_ERROR_CODES else "INTERNAL"


class ApiError(Exception):
    def __init__(self, code: str, message: str, http_status: int = 200):
        super().__init__(message)
        self.code = map_error_code(code)
        self.message = str(message or "")
        self.http_status = http_status


def ok(data: Any, http_status: int = 200):
    return {"ok": True, "data": data}, http_status


def err(code: str, message: str, http_status: int = 200):
    return {"ok": False, "error": {"code": map_error_code(code), "message": str(message or "")}}, http_status


def iso_utc_now() -> str:
    dt = datetime.now(timezone.utc)
    dt = dt.replace(microsecond=(dt.microsecond // 1000) * 1000)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_json_body(raw_text: str) -> dict:
    try:
        obj = json.loads(raw_text or "{}")
    except Exception:
        raise ApiError("BAD_REQUEST", "Invalid JSON body")
    if not isinstance(obj, dict):
        raise ApiError("BAD_REQUEST", "JSON body must be an object")
    return obj


def parse_employee_id(value: Any) -> Optional[int]:
    s = str(value if value is not None else "").strip()
    if not s:
        return None
    try:
        n = int(float(s))
    except ValueError:
        return None
    return n if n > 0 else None


def require_employee_id(data: Any) -> int:
    emp_id = parse_employee_id((data or {}).get("employeeId"))
    if emp_id is None:
        raise ApiError("BAD_REQUEST", "Missing or invalid employeeId")
    return emp_id
