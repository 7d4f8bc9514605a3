"""Tests for CommissionEngine aggregation, dashboard and payment runs."""
from datetime import timedelta
from decimal import Decimal
from unittest import mock

import pytest
from django.db import DatabaseError

from accounts.models import User
from commissions.engine import CommissionEngine, tiers_for_period
from commissions.models import CommissionPayment, CommissionTier
from sales.models import Order


def role_tier(business, position, number, target, rate, period="monthly", name=None):
    return CommissionTier.objects.create(
        business=business,
        role_type=position,
        tier_number=number,
        name=name or f"Palier {number}",
        target_amount=Decimal(str(target)),
        commission_rate=Decimal(str(rate)),
        target_period=period,
    )


@pytest.fixture
def associate_ladder(business):
    return [
        role_tier(business, "sales_associate", 1, 0, "0.05", name="Bronze"),
        role_tier(business, "sales_associate", 2, 1000, "0.08", name="Silver"),
        role_tier(business, "sales_associate", 3, 5000, "0.12", name="Gold"),
    ]


@pytest.mark.django_db
def test_employee_tiers_take_precedence_over_role_tiers(business, sales_user, associate_ladder):
    own = CommissionTier.objects.create(
        business=business, user=sales_user, tier_number=1, name="Perso",
        target_amount=Decimal("0"), commission_rate=Decimal("0.10"),
    )
    engine = CommissionEngine(business)
    assert engine.tiers_for_employee(sales_user) == [own]


@pytest.mark.django_db
def test_role_tiers_follow_position_with_default(business, associate_ladder):
    no_position = User.objects.create_user(
        email="np@test.com", password="x", first_name="No", last_name="Position",
    )
    tiers = CommissionEngine(business).tiers_for_employee(no_position)
    assert [t.name for t in tiers] == ["Bronze", "Silver", "Gold"]


@pytest.mark.django_db
def test_inactive_employee_tiers_fall_back_to_role(business, sales_user, associate_ladder):
    CommissionTier.objects.create(
        business=business, user=sales_user, name="Ancien", is_active=False,
        target_amount=Decimal("0"), commission_rate=Decimal("0.30"),
    )
    tiers = CommissionEngine(business).tiers_for_employee(sales_user)
    assert len(tiers) == 3


def test_tiers_for_period_falls_back_to_all_tiers():
    monthly = mock.Mock(target_period="monthly")
    weekly = mock.Mock(target_period="weekly")
    assert tiers_for_period([monthly, weekly], "weekly") == [weekly]
    assert tiers_for_period([monthly], "daily") == [monthly]


@pytest.mark.django_db
def test_aggregate_sales_counts_only_completed_orders_in_window(
    business, store_user_sales, sales_user, make_order, now,
):
    make_order(sales_user, "1500.00")
    make_order(sales_user, "500.00", sale_type=Order.SaleType.UPSELL)
    make_order(sales_user, "200.00", sale_type=Order.SaleType.OPEN)
    make_order(sales_user, "999.00", status=Order.Status.PENDING)
    make_order(sales_user, "800.00", completed_at=now - timedelta(days=40))

    engine = CommissionEngine(business)
    start = now.replace(day=1, hour=0)
    agg = engine.aggregate_sales(sales_user, start, now + timedelta(days=1))

    assert agg["total_sales"] == Decimal("2200.00")
    assert agg["order_count"] == 3
    assert agg["upsells_count"] == 1
    assert agg["opens_count"] == 1


@pytest.mark.django_db
def test_dashboard_resolves_rate_and_estimate(
    business, store_user_sales, sales_user, associate_ladder, make_order, now,
):
    make_order(sales_user, "4000.00")

    data = CommissionEngine(business).dashboard(sales_user, now=now)

    assert data["period"] == "monthly"
    assert data["total_sales"] == Decimal("4000.00")
    assert data["current_tier"] == "Silver"
    assert data["commission_rate"] == Decimal("0.0800")
    assert data["estimated_commission"] == Decimal("320.00")
    assert data["next_tier_target"] == Decimal("5000.00")
    assert data["progress_to_next_tier"] == Decimal("80")
    assert data["goals"] == []


@pytest.mark.django_db
def test_dashboard_defaults_to_zero_when_tiers_cannot_load(
    business, store_user_sales, sales_user, associate_ladder, make_order, now,
):
    make_order(sales_user, "4000.00")
    engine = CommissionEngine(business)

    with mock.patch.object(engine, "tiers_for_employee", side_effect=DatabaseError("boom")):
        data = engine.dashboard(sales_user, now=now)

    assert data["current_tier"] == "Base"
    assert data["commission_rate"] == Decimal("0")
    assert data["estimated_commission"] == Decimal("0")


@pytest.mark.django_db
def test_performance_metrics_sorted_by_monthly_sales(
    business, store_user_sales, store_user_opener, sales_user, opener_user,
    associate_ladder, make_order, now,
):
    make_order(sales_user, "1200.00")
    make_order(opener_user, "3000.00")
    make_order(sales_user, "700.00", completed_at=now.replace(month=2))

    metrics = CommissionEngine(business).performance_metrics(now=now)

    assert [m["user"] for m in metrics] == [opener_user, sales_user]
    associate = metrics[1]
    assert associate["monthly_sales"] == Decimal("1200.00")
    assert associate["current_tier"] == "Silver"
    assert associate["monthly_commission"] == Decimal("96.00")
    assert associate["total_sales_ytd"] == Decimal("1900.00")
    assert associate["total_commission_ytd"] == Decimal("152.00")
    assert associate["progress_to_next_tier"] == Decimal("24")
    # Openers have no tiers configured here.
    assert metrics[0]["current_tier"] == "Base"
    assert metrics[0]["progress_to_next_tier"] == Decimal("100")


@pytest.mark.django_db
def test_run_calculation_creates_one_payment_per_employee(
    business, store_user_sales, sales_user, associate_ladder, make_order, now,
):
    make_order(sales_user, "4000.00")

    payments = CommissionEngine(business).run_calculation("monthly", now=now)

    assert len(payments) == 1
    payment = payments[0]
    assert payment.period_label == "2026-10"
    assert payment.commission_amount == Decimal("320.00")
    assert payment.tier_name == "Silver"


@pytest.mark.django_db
def test_run_calculation_updates_unpaid_and_keeps_paid(
    business, store_user_sales, sales_user, manager_user, associate_ladder, make_order, now,
):
    engine = CommissionEngine(business)
    make_order(sales_user, "4000.00")
    engine.run_calculation("monthly", now=now)

    make_order(sales_user, "2000.00")
    engine.run_calculation("monthly", now=now)
    payment = CommissionPayment.objects.get(user=sales_user)
    assert payment.sale_amount == Decimal("6000.00")
    assert payment.commission_amount == Decimal("720.00")

    engine.mark_paid(payment.pk, manager_user)
    make_order(sales_user, "1000.00")
    engine.run_calculation("monthly", now=now)

    payment.refresh_from_db()
    assert CommissionPayment.objects.filter(user=sales_user).count() == 1
    assert payment.is_paid
    assert payment.commission_amount == Decimal("720.00")


@pytest.mark.django_db
def test_run_calculation_skips_zero_commission(business, store_user_sales, sales_user, make_order, now):
    make_order(sales_user, "4000.00")
    assert CommissionEngine(business).run_calculation("monthly", now=now) == []


@pytest.mark.django_db
def test_run_calculation_rejects_unknown_period(business):
    with pytest.raises(ValueError):
        CommissionEngine(business).run_calculation("fortnight")


@pytest.mark.django_db
def test_mark_paid_twice_raises(business, sales_user, manager_user):
    payment = CommissionPayment.objects.create(
        business=business, user=sales_user, period_label="2026-10",
        sale_amount=Decimal("100"), commission_rate=Decimal("0.05"), commission_amount=Decimal("5"),
    )
    engine = CommissionEngine(business)
    engine.mark_paid(payment.pk, manager_user)

    with pytest.raises(ValueError):
        engine.mark_paid(payment.pk, manager_user)
