import os


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# Prefer DATABASE_URL (e.g. Postgres). Fallback to local SQLite.
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./studynotes.db")

OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o")
OPENAI_TIMEOUT = float(os.getenv("OPENAI_TIMEOUT", "30"))

AI_RATE_LIMIT = os.getenv("AI_RATE_LIMIT", "20/minute")
RATE_LIMIT_ENABLED = _env_flag("RATE_LIMIT_ENABLED", True)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def openai_api_key() -> str:
    # Read per call so a key added at runtime is picked up
    return os.getenv("OPENAI_API_KEY", "")


def is_api_available() -> bool:
    key = openai_api_key()
    return key.startswith("sk-") and len(key) > 20
