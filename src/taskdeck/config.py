# src/taskdeck/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets at import time (the credential lives in the session store, never in env).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKDECK"

DEFAULT_API_URL = "http://localhost:8080"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float | None) -> float | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Remote API ----
    api_url: str
    # None -> wait forever (no client-side timeout).
    request_timeout_seconds: float | None
    default_status: str

    # ---- Session ----
    ephemeral_session: bool

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    credentials_db_path: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskdeck") or "taskdeck"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        api_url = (_first_env(_k("API_URL"), "API_URL", default=DEFAULT_API_URL) or DEFAULT_API_URL).strip()
        api_url = api_url.rstrip("/")

        timeout = _env_float(_k("REQUEST_TIMEOUT_SECONDS"), None)
        if timeout is not None and timeout <= 0:
            timeout = None

        default_status = _env(_k("DEFAULT_STATUS"), "pending").strip() or "pending"

        ephemeral_session = _env_bool(_k("EPHEMERAL_SESSION"), False)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskdeck"))
        credentials_db_path = _env_path(_k("CREDENTIALS_DB_PATH"), data_dir / "credentials.sqlite3")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            api_url=api_url,
            request_timeout_seconds=timeout,
            default_status=default_status,
            ephemeral_session=ephemeral_session,
            data_dir=data_dir,
            credentials_db_path=credentials_db_path,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
