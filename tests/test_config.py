from __future__ import annotations

import pytest

from cache_layer import cache_clear, cache_get, cache_get_or_load, cache_invalidate_prefix, cache_set, make_cache_key, namespace_prefix
from config import Config


def test_production_rejects_sqlite_and_wildcard_origins(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///./marks.db")
    with pytest.raises(RuntimeError):
        Config().validate()

    monkeypatch.setenv("DATABASE_URL", "postgresql+psycopg://u:p@host/db")
    monkeypatch.setenv("ALLOWED_ORIGINS", "*")
    with pytest.raises(RuntimeError):
        Config().validate()

    monkeypatch.setenv("ALLOWED_ORIGINS", "https://hr.example.org, https://admin.example.org")
    cfg = Config()
    cfg.validate()
    assert cfg.ALLOWED_ORIGINS == ["https://hr.example.org", "https://admin.example.org"]


def test_defaults(monkeypatch):
    for name in ("APP_ENV", "PORT", "APP_TIMEZONE", "CACHE_TTL_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("PORT", "not-a-port")
    cfg = Config()
    assert cfg.PORT == 5002
    assert cfg.APP_TIMEZONE == "Asia/Kathmandu"
    assert cfg.IS_PRODUCTION is False


def test_cache_prefix_invalidation():
    cache_clear()
    a = make_cache_key("vacancy_scorecard", scope=["BG-1"], params={"today": "2080-01-01"})
    b = make_cache_key("VACANCY_SCORECARD", scope=["BG-2"], params={"today": "2080-01-01"})
    assert a.startswith("VACANCY_SCORECARD:BG-1:")
    cache_set(a, 1)
    cache_set(b, 2)

    assert cache_invalidate_prefix(namespace_prefix("vacancy_scorecard", "BG-1")) == 1
    assert cache_get(a) is None
    assert cache_get(b) == 2
    cache_clear()


def test_cache_get_or_load_calls_loader_once():
    cache_clear()
    calls = []

    def loader():
        calls.append(1)
        return {"value": 42}

    key = make_cache_key("reference_data")
    assert cache_get_or_load(key, loader) == {"value": 42}
    assert cache_get_or_load(key, loader) == {"value": 42}
    assert len(calls) == 1
    cache_clear()
