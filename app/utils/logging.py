from __future__ import annotations

import logging
import sys

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def setup_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FORMAT))

    root.handlers.clear()
    root.addHandler(handler)

    # app.request already emits one JSON document per line.
    request_logger = logging.getLogger("app.request")
    request_handler = logging.StreamHandler(sys.stdout)
    request_handler.setFormatter(logging.Formatter("%(message)s"))
    request_logger.handlers.clear()
    request_logger.addHandler(request_handler)
    request_logger.propagate = False
