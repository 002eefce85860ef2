import os


def _env_int(name: str, default: int) -> int:
    try:
        return int(str(os.getenv(name, "") or "").strip() or default)
    except ValueError:
        return default


wsgi_app = "wsgi:app"
bind = f"{os.getenv('HOST', '0.0.0.0')}:{_env_int('PORT', 5002)}"

# Scoring is CPU bound.
workers = max(1, _env_int("WEB_CONCURRENCY", 2))
threads = max(1, _env_int("PYTHON_THREADS", 2))

# Large vacancies take a while to score on a cold cache.
timeout = max(30, _env_int("GUNICORN_TIMEOUT", 180))
graceful_timeout = max(5, _env_int("GUNICORN_GRACEFUL_TIMEOUT", 30))
keepalive = max(1, _env_int("GUNICORN_KEEPALIVE", 5))

accesslog = "-"
errorlog = "-"
loglevel = str(os.getenv("LOG_LEVEL", "info") or "info").lower()
