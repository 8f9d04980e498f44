"""Utility helpers shared across layers."""

from .datetime import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    get_app_timezone,
    now_in_app_naive_datetime,
    now_in_app_timezone,
    start_of_today,
    today_in_app_timezone,
)
from .formatting import format_currency, past_tense

__all__ = [
    "ensure_app_naive_datetime",
    "ensure_app_timezone",
    "format_currency",
    "get_app_timezone",
    "now_in_app_naive_datetime",
    "now_in_app_timezone",
    "past_tense",
    "start_of_today",
    "today_in_app_timezone",
]
