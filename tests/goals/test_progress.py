"""Tests for the pure goal progress arithmetic."""
from datetime import date, datetime, timezone as dt_timezone
from decimal import Decimal

import pytest

from goals.progress import (
    compute_goal_progress,
    daily_needed,
    days_remaining,
    progress_percentage,
    sale_type_for_position,
)

NOW = datetime(2026, 10, 14, 12, 0, tzinfo=dt_timezone.utc)


@pytest.mark.parametrize(
    "current, target, expected",
    [
        (Decimal("50"), Decimal("200"), Decimal("25")),
        (Decimal("500"), Decimal("200"), Decimal("100")),
        (Decimal("-10"), Decimal("200"), Decimal("0")),
        (Decimal("10"), Decimal("0"), Decimal("0")),
        (Decimal("10"), None, Decimal("0")),
    ],
)
def test_progress_percentage_is_clamped(current, target, expected):
    assert progress_percentage(current, target) == expected


def test_days_remaining_rounds_up_partial_days():
    # 12:00 on the 14th to 00:00 on the 17th is 2.5 days.
    assert days_remaining(date(2026, 10, 17), NOW, "UTC") == 3


def test_days_remaining_is_zero_for_past_end_dates():
    assert days_remaining(date(2026, 10, 1), NOW, "UTC") == 0
    assert days_remaining(date(2026, 10, 14), NOW, "UTC") == 0


def test_days_remaining_uses_the_business_time_zone():
    # Midnight Oct 15 in Tokyo is 15:00 UTC on Oct 14.
    assert days_remaining(date(2026, 10, 15), NOW, "Asia/Tokyo") == 1


def test_daily_needed_is_zero_without_days_left():
    assert daily_needed(Decimal("1000"), Decimal("100"), 0) == Decimal("0")


def test_daily_needed_spreads_the_remainder():
    assert daily_needed(Decimal("1000"), Decimal("400"), 4) == Decimal("150")
    assert daily_needed(Decimal("1000"), Decimal("1400"), 4) == Decimal("0")


def test_compute_goal_progress_amount_goal():
    result = compute_goal_progress(
        target_amount=Decimal("3000"),
        target_count=None,
        current_amount=Decimal("1200"),
        current_count=7,
        end_date=date(2026, 10, 20),
        now=NOW,
        tz_name="UTC",
    )
    assert result["progress_percentage"] == Decimal("40")
    assert result["days_remaining"] == 6
    assert result["remaining"] == Decimal("1800")
    assert result["daily_needed"] == Decimal("300")
    assert result["current_count"] == 7


def test_compute_goal_progress_count_target_wins():
    result = compute_goal_progress(
        target_amount=Decimal("3000"),
        target_count=10,
        current_amount=Decimal("2900"),
        current_count=5,
        end_date=date(2026, 10, 20),
        now=NOW,
        tz_name="UTC",
    )
    assert result["progress_percentage"] == Decimal("50")
    assert result["remaining"] == Decimal("5")


def test_compute_goal_progress_after_end_date_has_no_daily_pace():
    result = compute_goal_progress(
        target_amount=Decimal("3000"),
        target_count=None,
        current_amount=Decimal("0"),
        current_count=0,
        end_date=date(2026, 9, 30),
        now=NOW,
        tz_name="UTC",
    )
    assert result["days_remaining"] == 0
    assert result["daily_needed"] == Decimal("0")
    assert result["remaining"] == Decimal("3000")


def test_sale_type_for_position():
    assert sale_type_for_position("opener") == "open"
    assert sale_type_for_position("upseller") == "upsell"
    assert sale_type_for_position("sales_associate") is None
    assert sale_type_for_position("") is None
