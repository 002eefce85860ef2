from __future__ import annotations

import os
import re
import time

from flask import Flask, g, request

_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def init_request_id(app: Flask) -> None:
    @app.before_request
    def _set_request_id():
        incoming = str(request.headers.get("X-Request-ID") or "").strip()
        # Echo caller ids only when they are safe to put in logs and headers.
        g.request_id = incoming if _REQUEST_ID_RE.match(incoming) else os.urandom(8).hex()
        g.start_ts = time.monotonic()

    @app.after_request
    def _add_header(resp):
        rid = getattr(g, "request_id", "")
        if rid:
            resp.headers["X-Request-ID"] = rid
        resp.headers.setdefault("Cache-Control", "no-store")
        return resp
