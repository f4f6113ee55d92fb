"""Date keys and the provider contract."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Mapping, Optional, Protocol

from gotaguy.config import Settings
from gotaguy.models import Subject

from .schedule import load_schedule_csv
from .supabase import SupabaseProvider


logger = logging.getLogger("uvicorn.error")


def today_key(now: datetime | None = None) -> str:
    """Return the UTC calendar date used to address the daily subject."""

    now = now or datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.date().isoformat()


class DailySubjectProvider(Protocol):
    def get_subject(self, date_key: str) -> Optional[Subject]:
        ...


class StaticProvider:
    """Serve subjects from an in-memory ``{date_key: Subject}`` schedule."""

    def __init__(self, schedule: Mapping[str, Subject]):
        self._schedule = dict(schedule)

    def get_subject(self, date_key: str) -> Optional[Subject]:
        subject = self._schedule.get(date_key)
        if subject is None:
            logger.info("No scheduled subject for %s", date_key)
        return subject

    def __len__(self) -> int:
        return len(self._schedule)


def build_provider(settings: Settings) -> Optional[DailySubjectProvider]:
    """Pick a provider from settings: CSV schedule first, then Supabase."""

    if settings.subjects_csv is not None:
        return StaticProvider(load_schedule_csv(settings.subjects_csv))
    if settings.supabase_url and settings.supabase_key:
        return SupabaseProvider(
            settings.supabase_url,
            settings.supabase_key,
            timeout=settings.http_timeout,
        )
    logger.warning("No subject provider configured; daily puzzle unavailable")
    return None
