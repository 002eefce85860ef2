from __future__ import annotations

from dotenv import load_dotenv
from flask import Flask
from flask_cors import CORS

import db as db_
from app.middlewares.error_handler import init_error_handlers
from app.middlewares.logging import init_request_logging
from app.middlewares.request_id import init_request_id
from app.routes.api import api_bp
from app.routes.core import core_bp
from app.routes.reports import reports_bp
from app.utils.logging import setup_logging
from cache_layer import cache_configure
from config import Config


def create_app() -> Flask:
    load_dotenv()

    cfg = Config()
    cfg.validate()
    setup_logging(cfg.LOG_LEVEL)
    cache_configure(cfg.CACHE_TTL_SECONDS, cfg.CACHE_MAX_ITEMS)

    engine = db_.init_engine(cfg.DATABASE_URL)

    from models import Base  # imported after engine init

    Base.metadata.create_all(bind=engine)

    app = Flask(__name__)
    app.config["CFG"] = cfg

    CORS(
        app,
        origins=cfg.ALLOWED_ORIGINS,
        supports_credentials=False,
        allow_headers=["Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
        methods=["GET", "POST", "OPTIONS"],
        max_age=3600,
    )

    init_request_id(app)
    init_request_logging(app)
    init_error_handlers(app)

    app.register_blueprint(core_bp)
    app.register_blueprint(api_bp)
    app.register_blueprint(reports_bp, url_prefix="/api/v1/reports")

    return app
