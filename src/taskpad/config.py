# src/taskpad/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Every value has a default; blank or invalid values fall back to it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .tasks.task_models import SortOption

ENV_PREFIX = "TASKPAD"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v.strip()


_TRUE_WORDS = {"1", "true", "yes", "y", "on"}
_FALSE_WORDS = {"0", "false", "no", "n", "off"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    val = raw.strip().lower()
    if val in _TRUE_WORDS:
        return True
    if val in _FALSE_WORDS:
        return False
    return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_sort(name: str, default: SortOption) -> SortOption:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return SortOption.from_db(raw.strip()) or SortOption.parse(raw) or default


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Storage ----
    data_dir: Path
    storage_backend: str
    kv_db_path: Path
    kv_json_path: Path

    # ---- Task list ----
    default_sort: SortOption
    remember_sort: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskpad")
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskpad"))
        storage_backend = _env(_k("STORAGE_BACKEND"), "sqlite").lower()
        kv_db_path = _env_path(_k("KV_DB_PATH"), data_dir / "prefs.sqlite3")
        kv_json_path = _env_path(_k("KV_JSON_PATH"), data_dir / "prefs.json")

        default_sort = _env_sort(_k("DEFAULT_SORT"), SortOption.DATE_CREATED)
        remember_sort = _env_bool(_k("REMEMBER_SORT"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            storage_backend=storage_backend,
            kv_db_path=kv_db_path,
            kv_json_path=kv_json_path,
            default_sort=default_sort,
            remember_sort=remember_sort,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
