"""Goal progress arithmetic.

Pure functions; the database side lives in :mod:`goals.services`.
"""
from __future__ import annotations

import math
from datetime import date, datetime, time
from decimal import Decimal
from zoneinfo import ZoneInfo

DAY_SECONDS = 86400
HUNDRED = Decimal("100")
ZERO = Decimal("0")

POSITION_SALE_TYPES = {
    "opener": "open",
    "upseller": "upsell",
}


def sale_type_for_position(position_type: str | None) -> str | None:
    """``sale_type`` counted by a position-specific goal, ``None`` for all orders."""
    return POSITION_SALE_TYPES.get(position_type or "")


def _dec(value) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def is_count_goal(target_count) -> bool:
    return bool(target_count) and target_count > 0


def progress_percentage(current, target) -> Decimal:
    """``current / target * 100`` clamped to ``[0, 100]``; 0 without a positive target."""
    target = _dec(target)
    if target <= 0:
        return ZERO
    ratio = _dec(current) / target * HUNDRED
    return max(ZERO, min(ratio, HUNDRED))


def days_remaining(end_date: date, now: datetime, tz_name: str = "UTC") -> int:
    """Whole days from ``now`` until the start of ``end_date``, rounded up, never negative."""
    end = datetime.combine(end_date, time.min, tzinfo=ZoneInfo(tz_name))
    seconds = (end - now).total_seconds()
    return max(0, math.ceil(seconds / DAY_SECONDS))


def daily_needed(target, current, days_left: int) -> Decimal:
    """Pace needed per remaining day; 0 once no day is left."""
    remaining = max(ZERO, _dec(target) - _dec(current))
    if days_left <= 0:
        return ZERO
    return remaining / days_left


def compute_goal_progress(
    *,
    target_amount,
    target_count,
    current_amount,
    current_count,
    end_date: date,
    now: datetime,
    tz_name: str = "UTC",
) -> dict:
    """Progress of one goal from already aggregated figures.

    A positive ``target_count`` makes the goal count-based; otherwise it
    is measured on ``current_amount`` against ``target_amount``.
    """
    if is_count_goal(target_count):
        target, current = _dec(target_count), _dec(current_count)
    else:
        target, current = _dec(target_amount), _dec(current_amount)

    days_left = days_remaining(end_date, now, tz_name)
    return {
        "current_amount": _dec(current_amount),
        "current_count": int(current_count or 0),
        "progress_percentage": progress_percentage(current, target),
        "days_remaining": days_left,
        "remaining": max(ZERO, target - current),
        "daily_needed": daily_needed(target, current, days_left),
    }
