"""Environment-driven runtime settings."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


logger = logging.getLogger(__name__)

_DB_PATH_ENV = "GOTAGUY_DB_PATH"
_SUPABASE_URL_ENVS = ("GOTAGUY_SUPABASE_URL", "NEXT_PUBLIC_SUPABASE_URL")
_SUPABASE_KEY_ENVS = ("GOTAGUY_SUPABASE_KEY", "NEXT_PUBLIC_SUPABASE_ANON_KEY")
_SUBJECTS_CSV_ENV = "GOTAGUY_SUBJECTS_CSV"
_HTTP_TIMEOUT_ENV = "GOTAGUY_HTTP_TIMEOUT"

_HTTP_TIMEOUT_DEFAULT = 10.0
_DB_FILENAME_DEFAULT = "gotaguy.sqlite"


@dataclass(frozen=True)
class Settings:
    db_path: Path | str
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    subjects_csv: Optional[Path] = None
    http_timeout: float = _HTTP_TIMEOUT_DEFAULT


def _first_env(names: tuple[str, ...]) -> Optional[str]:
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return None


def _env_float(name: str, default: float, *, clamp_min: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %.2f", name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    return value


def _resolve_db_path(raw: Optional[str]) -> Path | str:
    if not raw:
        return Path.cwd() / _DB_FILENAME_DEFAULT
    if raw.startswith("file:"):
        return raw
    return Path(raw)


def load_settings() -> Settings:
    """Read settings from the process environment."""

    db_path = os.getenv(_DB_PATH_ENV)
    subjects_csv = os.getenv(_SUBJECTS_CSV_ENV)
    return Settings(
        db_path=_resolve_db_path(db_path),
        supabase_url=_first_env(_SUPABASE_URL_ENVS),
        supabase_key=_first_env(_SUPABASE_KEY_ENVS),
        subjects_csv=Path(subjects_csv) if subjects_csv else None,
        http_timeout=_env_float(_HTTP_TIMEOUT_ENV, _HTTP_TIMEOUT_DEFAULT, clamp_min=0.1),
    )
