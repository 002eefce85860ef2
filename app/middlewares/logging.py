from __future__ import annotations

import json
import logging
import time
from typing import Any

from flask import Flask, g, request


def _client_ip() -> str:
    ip = request.headers.get("X-Forwarded-For", request.remote_addr or "")
    if ip and "," in ip:
        ip = ip.split(",", 1)[0].strip()
    return ip


_SUBJECT_KEYS = ("employeeId", "bigyapanNo")


def _subject() -> dict[str, Any]:
    """Action name plus the employee or vacancy a request is about, when present."""
    out: dict[str, Any] = {}
    if request.method == "POST" and request.path == "/api":
        body = request.get_json(silent=True) or {}
        if not isinstance(body, dict):
            return out
        out["action"] = str(body.get("action") or "").upper().strip()
        params = body.get("data") if isinstance(body.get("data"), dict) else {}
    else:
        params = request.args
    for key in _SUBJECT_KEYS:
        value = params.get(key)
        if value not in (None, ""):
            out[key] = str(value)
    return out


def init_request_logging(app: Flask) -> None:
    logger = logging.getLogger("app.request")

    @app.after_request
    def _log(resp):
        start = getattr(g, "start_ts", None)
        latency_ms = int((time.monotonic() - start) * 1000) if isinstance(start, (int, float)) else None

        data: dict[str, Any] = {
            "type": "request",
            "request_id": getattr(g, "request_id", ""),
            "method": request.method,
            "path": request.path,
            "status": resp.status_code,
            "latency_ms": latency_ms,
            "ip": _client_ip(),
        }
        data.update(_subject())

        logger.info(json.dumps(data, separators=(",", ":")))
        return resp
