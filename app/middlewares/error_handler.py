from __future__ import annotations

import logging
from typing import Any

from flask import Flask, g, jsonify
from werkzeug.exceptions import HTTPException

from utils import ApiError, err

_HTTP_CODES = {400: "BAD_REQUEST", 404: "NOT_FOUND", 405: "BAD_REQUEST", 409: "CONFLICT"}


def _with_request_id(payload: dict[str, Any]) -> dict[str, Any]:
    if getattr(g, "request_id", None):
        payload["request_id"] = g.request_id
    return payload


def init_error_handlers(app: Flask) -> None:
    @app.errorhandler(ApiError)
    def _api_error(e: ApiError):
        payload, status = err(e.code, e.message, http_status=e.http_status)
        return jsonify(_with_request_id(payload)), status

    @app.errorhandler(HTTPException)
    def _http_error(e: HTTPException):
        status = int(e.code or 500)
        payload, _ = err(_HTTP_CODES.get(status, "INTERNAL"), str(e.description or "HTTP error"))
        return jsonify(_with_request_id(payload)), status

    @app.errorhandler(Exception)
    def _unhandled(e: Exception):
        logging.getLogger("api").exception("Unhandled exception request_id=%s", getattr(g, "request_id", ""))
        payload, _ = err("INTERNAL", "Unexpected error")
        return jsonify(_with_request_id(payload)), 500
