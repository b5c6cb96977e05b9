# src/pocket_tasks/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is read from disk at import time except an optional .env.
- Bad values fall back to defaults instead of crashing the REPL.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "POCKET"

STORAGE_BACKENDS = ("sqlite", "json", "memory")

_TRUTHY = frozenset({"1", "true", "yes", "y", "on"})
_FALSY = frozenset({"0", "false", "no", "n", "off"})


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def load_env_file(path: str | Path | None = None) -> bool:
    """Load a .env file (default: the nearest one from the working directory).

    Variables already set in the environment win. Returns True if a file was read.
    """
    dotenv_path = path if path is not None else find_dotenv(usecwd=True)
    if not dotenv_path:
        return False
    return load_dotenv(dotenv_path, override=False)


load_env_file()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
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

    # ---- Storage ----
    data_dir: Path
    storage_backend: str
    db_path: Path
    json_path: Path
    storage_key: str

    # ---- Console ----
    default_filter: str
    color: bool
    confirm_delete: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "pocket-tasks").strip() or "pocket-tasks"
        log_level = _env(_k("LOG_LEVEL"), "INFO").strip().upper() or "INFO"

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/pocket_tasks"))

        # Unknown names are kept as-is; bootstrap warns and falls back to sqlite.
        storage_backend = _env(_k("STORAGE_BACKEND"), "sqlite").strip().lower() or "sqlite"
        db_path = _env_path(_k("DB_PATH"), data_dir / "tasks.sqlite3")
        json_path = _env_path(_k("JSON_PATH"), data_dir / "tasks.json")
        storage_key = _env(_k("STORAGE_KEY"), "tasks").strip() or "tasks"

        default_filter = _env(_k("DEFAULT_FILTER"), "All").strip() or "All"
        # NO_COLOR (https://no-color.org) always wins.
        color = _env_bool(_k("COLOR"), True) and os.getenv("NO_COLOR") is None
        confirm_delete = _env_bool(_k("CONFIRM_DELETE"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            storage_backend=storage_backend,
            db_path=db_path,
            json_path=json_path,
            storage_key=storage_key,
            default_filter=default_filter,
            color=color,
            confirm_delete=confirm_delete,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide Settings, building them on first use."""
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
