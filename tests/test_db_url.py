from db import normalize_database_url


def test_normalize_database_url_uses_psycopg_driver():
    assert normalize_database_url("postgres://u:p@host:5432/db") == "postgresql+psycopg://u:p@host:5432/db"
    assert normalize_database_url("postgresql://u:p@host/db") == "postgresql+psycopg://u:p@host/db"
    assert normalize_database_url("postgresql+psycopg2://u:p@host/db") == "postgresql+psycopg://u:p@host/db"


def test_normalize_database_url_leaves_others_alone():
    assert normalize_database_url("sqlite:///./marks.db") == "sqlite:///./marks.db"
    assert normalize_database_url("  ") == ""


def test_init_engine_sets_sqlite_thread_flag(monkeypatch):
    import db as dbmod

    captured = {}

    def fake_create_engine(_url, **kwargs):
        captured.update(kwargs)

        class DummyEngine:
            pass

        return DummyEngine()

    monkeypatch.setattr(dbmod, "create_engine", fake_create_engine)
    monkeypatch.setattr(dbmod.SessionLocal, "configure", lambda **_kwargs: None)
    monkeypatch.setattr(dbmod, "engine", None)

    dbmod.init_engine("sqlite:///./x.db")

    assert captured["connect_args"] == {"check_same_thread": False}
    assert "pool_size" not in captured


def test_init_engine_passes_sslmode_for_postgres(monkeypatch):
    import db as dbmod

    monkeypatch.setenv("DB_SSLMODE", "require")
    captured = {}

    def fake_create_engine(url, **kwargs):
        captured["url"] = url
        captured.update(kwargs)

        class DummyEngine:
            pass

        return DummyEngine()

    monkeypatch.setattr(dbmod, "create_engine", fake_create_engine)
    monkeypatch.setattr(dbmod.SessionLocal, "configure", lambda **_kwargs: None)
    monkeypatch.setattr(dbmod, "engine", None)

    dbmod.init_engine("postgres://u:p@host:5432/db")

    assert captured["url"].startswith("postgresql+psycopg://")
    assert captured["connect_args"] == {"sslmode": "require"}
    assert captured["pool_size"] >= 1
