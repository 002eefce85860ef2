import os


def _env_int(name: str, default: int) -> int:
    try:
        return int(str(os.getenv(name, "") or "").strip() or default)
    except Exception:
        return default


class Config:
    def __init__(self) -> None:
        self.APP_ENV = os.getenv("APP_ENV", "development")
        self.APP_VERSION = os.getenv("APP_VERSION", "dev")
        self.HOST = os.getenv("HOST", "0.0.0.0")
        self.PORT = _env_int("PORT", 5002)

        self.DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./marks.db")

        # "Today" in BS is taken in this zone; open-ended assignments run to it.
        self.APP_TIMEZONE = os.getenv("APP_TIMEZONE", "Asia/Kathmandu")

        self.ALLOWED_ORIGINS = [
            s.strip() for s in (os.getenv("ALLOWED_ORIGINS", "*") or "*").split(",") if s.strip()
        ]

        self.CACHE_TTL_SECONDS = _env_int("CACHE_TTL_SECONDS", 30)
        self.CACHE_MAX_ITEMS = _env_int("CACHE_MAX_ITEMS", 10000)

        # Import CLIs read workbooks from here when given a bare file name.
        self.UPLOAD_DIR = os.getenv("UPLOAD_DIR", "./uploads")

        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def IS_PRODUCTION(self) -> bool:
        return str(self.APP_ENV or "").strip().lower() in {"prod", "production"}

    def validate(self) -> None:
        if not str(self.DATABASE_URL or "").strip():
            raise RuntimeError("DATABASE_URL must be set")

        if self.IS_PRODUCTION and str(self.DATABASE_URL or "").startswith("sqlite"):
            raise RuntimeError("DATABASE_URL must be Postgres in production")

        if self.IS_PRODUCTION and any(str(o or "").strip() == "*" for o in (self.ALLOWED_ORIGINS or [])):
            raise RuntimeError("ALLOWED_ORIGINS must not contain '*' in production")
