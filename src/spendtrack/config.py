"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DEFAULT_API_URL = "https://personalexpensetrackerbackend-3htl.onrender.com"


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_number(name: str, default: float, cast=float):
    """Read a numeric environment variable, rejecting garbage early."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "SpendTrack"
    API_PREFIX = "/api"
    LOG_FILENAME = "spendtrack.log"

    def __init__(self) -> None:
        self.API_URL = os.getenv("SPENDTRACK_API_URL", DEFAULT_API_URL).rstrip("/")
        self.API_TIMEOUT = _env_number("SPENDTRACK_API_TIMEOUT", 5.0)
        self.PAGE_SIZE = _env_number("SPENDTRACK_PAGE_SIZE", 5, cast=int)
        self.DEV_MODE = _env_bool("SPENDTRACK_DEV_MODE", default=True)
        self.DATA_DIR = self._resolve_data_dir()
        if self.API_TIMEOUT <= 0:
            raise ValueError("SPENDTRACK_API_TIMEOUT must be positive.")
        if self.PAGE_SIZE < 1:
            raise ValueError("SPENDTRACK_PAGE_SIZE must be at least 1.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where logs are written."""

        data_root = os.getenv("SPENDTRACK_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def api_base_url(self) -> str:
        """Root of the JSON resources (expenses, income, categories)."""

        return f"{self.API_URL}{self.API_PREFIX}"


class DevConfig(BaseConfig):
    """Development configuration."""

    DEBUG = True
    TESTING = False


class TestConfig(BaseConfig):
    """Configuration used by the test-suite; never talks to the hosted backend."""

    DEBUG = False
    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.API_URL = os.getenv("SPENDTRACK_API_URL", "http://testserver").rstrip("/")
        self.DEV_MODE = False
