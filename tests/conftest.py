import sys
from pathlib import Path

import pytest


BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))


@pytest.fixture()
def app_client(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    db_path = tmp_path / "test.db"

    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_path.as_posix()}")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    monkeypatch.setenv("APP_ENV", "test")

    # Prevent accidental pollution from any existing env config.
    monkeypatch.delenv("UPLOAD_DIR", raising=False)
    monkeypatch.delenv("ALLOWED_ORIGINS", raising=False)

    from app import create_app
    from cache_layer import cache_clear

    cache_clear()

    app = create_app()
    app.testing = True

    with app.test_client() as client:
        yield app, client

    cache_clear()


@pytest.fixture()
def reference():
    from marks.reference import ReferenceData

    return ReferenceData.build(
        offices=[
            ("District Office Humla", "Humla"),
            ("District Office Kathmandu", "Kathmandu"),
            ("Ghost Office", "Nowhere"),
        ],
        districts=[("Humla", "A"), ("Kathmandu", "D")],
        marks=[
            ("A", 2.0, "old", "male"),
            ("D", 1.25, "old", "male"),
            ("D", 1.5, "old", "female"),
            ("A", 3.0, "new", None),
            ("D", 1.5, "new", None),
        ],
    )
