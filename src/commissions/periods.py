"""Commission period windows."""
from __future__ import annotations

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from django.utils import timezone

DAILY = "daily"
WEEKLY = "weekly"
MONTHLY = "monthly"
YEARLY = "yearly"

PERIOD_CHOICES = [
    (DAILY, "Journalier"),
    (WEEKLY, "Hebdomadaire"),
    (MONTHLY, "Mensuel"),
    (YEARLY, "Annuel"),
]
PERIODS = {DAILY, WEEKLY, MONTHLY, YEARLY}


def period_start(period: str, now: datetime, tz_name: str | None = None) -> datetime:
    """Start of the period containing ``now``, as an aware datetime.

    Weeks start on Sunday. Unknown periods fall back to monthly.
    """
    tz = ZoneInfo(tz_name) if tz_name else timezone.get_current_timezone()
    local = timezone.localtime(now, tz)
    midnight = local.replace(hour=0, minute=0, second=0, microsecond=0)
    if period == DAILY:
        return midnight
    if period == WEEKLY:
        # isoweekday: Monday=1 .. Sunday=7
        return midnight - timedelta(days=midnight.isoweekday() % 7)
    if period == YEARLY:
        return midnight.replace(month=1, day=1)
    return midnight.replace(day=1)


def period_end(period: str, start: datetime) -> datetime:
    """Exclusive end of the period starting at ``start``."""
    if period == DAILY:
        return start + timedelta(days=1)
    if period == WEEKLY:
        return start + timedelta(days=7)
    if period == YEARLY:
        return start.replace(year=start.year + 1)
    if start.month == 12:
        return start.replace(year=start.year + 1, month=1)
    return start.replace(month=start.month + 1)


def period_window(period: str, now: datetime, tz_name: str | None = None) -> tuple[datetime, datetime]:
    start = period_start(period, now, tz_name)
    return start, period_end(period, start)


def period_label(period: str, start: datetime) -> str:
    """Stable label of a period, e.g. ``2026-10`` or ``2026-10-18`` for a week."""
    if period == DAILY or period == WEEKLY:
        return start.strftime("%Y-%m-%d")
    if period == YEARLY:
        return start.strftime("%Y")
    return start.strftime("%Y-%m")
