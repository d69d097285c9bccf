"""Configuration from environment (and an optional .env file)."""
import logging
import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

from errors import ConfigError


@dataclass(frozen=True)
class Settings:
    """Runtime settings, resolved once at startup."""

    database_url: str
    host: str = "0.0.0.0"
    port: int = 8080
    pool_size: int = 10
    pool_timeout: float = 30.0
    log_level: str = "INFO"


def _require(name: str) -> str:
    value = os.environ.get(name, "").strip()
    if not value:
        raise ConfigError(f"Env variable: {name} must be set")
    return value


def _int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"Env variable: {name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ConfigError(f"Env variable: {name} must be positive, got {value}")
    return value


def _float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"Env variable: {name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ConfigError(f"Env variable: {name} must be positive, got {value}")
    return value


def load_env_file(path: str | os.PathLike | None = None) -> bool:
    """Load a .env file (default: nearest one from the working directory up).

    Variables already present in the environment win over the file.
    """
    if path is None:
        path = find_dotenv(usecwd=True)
    return load_dotenv(path, override=False)


def _log_level(name: str, default: str) -> str:
    level = os.environ.get(name, default).strip().upper() or default
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"Env variable: {name} must be a logging level name, got {level!r}")
    return level


def load_settings() -> Settings:
    """Read settings from the environment. Raises ConfigError on missing or malformed values."""
    return Settings(
        database_url=_require("DATABASE_URL"),
        host=os.environ.get("HOST", "0.0.0.0"),
        port=_int("PORT", 8080),
        pool_size=_int("DB_POOL_SIZE", 10),
        pool_timeout=_float("DB_POOL_TIMEOUT", 30.0),
        log_level=_log_level("LOG_LEVEL", "INFO"),
    )
