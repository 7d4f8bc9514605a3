"""Tests for the pure commission tier resolver."""
from decimal import Decimal
from types import SimpleNamespace

import pytest

from commissions.resolver import (
    estimate_commission,
    next_tier,
    progress_to_next_tier,
    resolve_tier,
)


def tier(target, rate, number=1, active=True, name=None):
    return SimpleNamespace(
        name=name or f"T{number}",
        target_amount=Decimal(str(target)) if target is not None else None,
        commission_rate=Decimal(str(rate)),
        tier_number=number,
        is_active=active,
    )


@pytest.fixture
def ladder():
    return [tier(0, "0.05", 1), tier(1000, "0.08", 2), tier(5000, "0.12", 3)]


def test_resolve_tier_picks_highest_reached_target(ladder):
    assert resolve_tier(ladder, Decimal("4000")).commission_rate == Decimal("0.08")


def test_resolve_tier_order_of_input_does_not_matter(ladder):
    assert resolve_tier(list(reversed(ladder)), 4000).tier_number == 2


def test_target_equal_to_sales_is_reached(ladder):
    assert resolve_tier(ladder, Decimal("5000")).tier_number == 3


def test_no_tier_reached_returns_none():
    assert resolve_tier([tier(1000, "0.08")], Decimal("999.99")) is None


def test_empty_tier_set_returns_none():
    assert resolve_tier([], Decimal("100")) is None


def test_inactive_and_targetless_tiers_are_ignored():
    tiers = [tier(0, "0.05", 1), tier(1000, "0.20", 2, active=False), tier(None, "0.50", 3)]
    assert resolve_tier(tiers, 4000).tier_number == 1


def test_ties_on_target_go_to_highest_tier_number_then_rate():
    tiers = [tier(1000, "0.10", 2), tier(1000, "0.08", 4), tier(1000, "0.09", 4)]
    chosen = resolve_tier(tiers, 1500)
    assert chosen.tier_number == 4
    assert chosen.commission_rate == Decimal("0.09")


def test_estimate_commission_example(ladder):
    result = estimate_commission(ladder, Decimal("4000"))
    assert result["commission_rate"] == Decimal("0.08")
    assert result["estimated_commission"] == Decimal("320.00")
    assert result["tier"].tier_number == 2


def test_estimate_commission_is_not_rounded():
    result = estimate_commission([tier(0, "0.0825")], Decimal("123.45"))
    assert result["estimated_commission"] == Decimal("123.45") * Decimal("0.0825")


def test_estimate_commission_defaults_to_zero_rate():
    result = estimate_commission([tier(1000, "0.08")], Decimal("200"))
    assert result["tier"] is None
    assert result["commission_rate"] == Decimal("0")
    assert result["estimated_commission"] == Decimal("0")


def test_estimate_commission_accepts_floats_and_ints(ladder):
    assert estimate_commission(ladder, 4000)["estimated_commission"] == Decimal("320.00")


def test_next_tier_is_lowest_target_above_sales(ladder):
    assert next_tier(ladder, 1200).tier_number == 3
    assert next_tier(ladder, 6000) is None


def test_progress_to_next_tier(ladder):
    assert progress_to_next_tier(ladder, 2500) == Decimal("50")
    assert progress_to_next_tier(ladder, 9000) == Decimal("100")
