"""Adapters that resolve the day's subject."""

from .daily import DailySubjectProvider, StaticProvider, build_provider, today_key
from .schedule import ScheduleRow, load_schedule_csv
from .supabase import SupabaseProvider

__all__ = [
    "DailySubjectProvider",
    "ScheduleRow",
    "StaticProvider",
    "SupabaseProvider",
    "build_provider",
    "load_schedule_csv",
    "today_key",
]
