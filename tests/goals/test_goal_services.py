"""Tests for goal aggregation, achievement and the order subscriber."""
from datetime import date, datetime, timedelta, timezone as dt_timezone
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError
from django.utils import timezone

from goals.models import SalesGoal
from goals.services import active_goals_for, check_achievement, goal_progress
from goals.tasks import check_goal_achievements
from notifications.models import Notification
from sales.models import Order


def make_goal(business, user=None, **kwargs):
    defaults = {
        "goal_type": SalesGoal.GoalType.MONTHLY,
        "target_amount": Decimal("1000.00"),
        "start_date": date(2026, 10, 1),
    }
    defaults.update(kwargs)
    return SalesGoal.objects.create(business=business, user=user, **defaults)


@pytest.mark.django_db
@pytest.mark.parametrize(
    "goal_type, start, expected_end",
    [
        (SalesGoal.GoalType.DAILY, date(2026, 10, 14), date(2026, 10, 14)),
        (SalesGoal.GoalType.WEEKLY, date(2026, 10, 11), date(2026, 10, 17)),
        (SalesGoal.GoalType.MONTHLY, date(2026, 10, 1), date(2026, 10, 31)),
        (SalesGoal.GoalType.MONTHLY, date(2026, 1, 31), date(2026, 2, 27)),
        (SalesGoal.GoalType.MONTHLY, date(2026, 12, 15), date(2027, 1, 14)),
    ],
)
def test_periodic_goal_end_date_is_derived(business, goal_type, start, expected_end):
    goal = make_goal(business, goal_type=goal_type, start_date=start, end_date=date(2030, 1, 1))
    assert goal.end_date == expected_end


@pytest.mark.django_db
def test_custom_goal_keeps_its_end_date(business):
    goal = make_goal(
        business, goal_type=SalesGoal.GoalType.CUSTOM,
        start_date=date(2026, 10, 1), end_date=date(2026, 11, 15),
    )
    assert goal.end_date == date(2026, 11, 15)


@pytest.mark.django_db
def test_goal_requires_a_positive_target(business):
    goal = SalesGoal(
        business=business, goal_type=SalesGoal.GoalType.CUSTOM,
        target_amount=Decimal("0"), start_date=date(2026, 10, 1), end_date=date(2026, 10, 5),
    )
    with pytest.raises(ValidationError):
        goal.full_clean()


@pytest.mark.django_db
def test_goal_progress_counts_the_employee_completed_orders(
    business, store_user_sales, sales_user, opener_user, make_order, now,
):
    goal = make_goal(business, user=sales_user)
    make_order(sales_user, "250.00")
    make_order(sales_user, "150.00")
    make_order(opener_user, "900.00")
    make_order(sales_user, "999.00", status=Order.Status.PENDING)
    make_order(sales_user, "500.00", completed_at=now - timedelta(days=30))

    progress = goal_progress(goal, now)

    assert progress["current_amount"] == Decimal("400.00")
    assert progress["current_count"] == 2
    assert progress["progress_percentage"] == Decimal("40")
    assert progress["remaining"] == Decimal("600.00")
    # 2026-10-14 15:00 UTC to 2026-10-31 00:00 UTC.
    assert progress["days_remaining"] == 17


@pytest.mark.django_db
def test_goal_window_includes_the_whole_last_day(business, sales_user, make_order, now):
    goal = make_goal(business, user=sales_user, goal_type=SalesGoal.GoalType.DAILY, start_date=date(2026, 10, 14))
    last_instant = datetime(2026, 10, 14, 23, 59, 59, 500000, tzinfo=dt_timezone.utc)
    make_order(sales_user, "120.00", completed_at=last_instant)
    make_order(sales_user, "80.00", completed_at=datetime(2026, 10, 15, tzinfo=dt_timezone.utc))
    make_order(sales_user, "40.00", completed_at=datetime(2026, 10, 14, tzinfo=dt_timezone.utc))

    assert goal_progress(goal, now)["current_amount"] == Decimal("160.00")


@pytest.mark.django_db
def test_opener_goal_counts_only_open_sales(business, opener_user, make_order, now):
    goal = make_goal(business, user=opener_user, position_type="opener", target_count=4)
    make_order(opener_user, "100.00", sale_type=Order.SaleType.OPEN)
    make_order(opener_user, "100.00", sale_type=Order.SaleType.UPSELL)

    progress = goal_progress(goal, now)

    assert progress["current_count"] == 1
    assert progress["progress_percentage"] == Decimal("25")


@pytest.mark.django_db
def test_manual_count_overrides_order_count(business, sales_user, make_order, now):
    goal = make_goal(business, user=sales_user, target_count=10, current_count=8)
    make_order(sales_user, "100.00")
    assert goal_progress(goal, now)["progress_percentage"] == Decimal("80")


@pytest.mark.django_db
def test_team_goal_counts_every_seller(business, sales_user, opener_user, make_order, now):
    goal = make_goal(business, user=None, target_amount=Decimal("500.00"))
    make_order(sales_user, "200.00")
    make_order(opener_user, "100.00")
    assert goal_progress(goal, now)["current_amount"] == Decimal("300.00")


@pytest.mark.django_db
def test_active_goals_for_returns_personal_and_team_goals(business, sales_user, opener_user, now):
    personal = make_goal(business, user=sales_user)
    team = make_goal(business, user=None)
    make_goal(business, user=opener_user)
    make_goal(business, user=sales_user, start_date=date(2026, 8, 1))
    make_goal(business, user=sales_user, is_active=False)

    assert set(active_goals_for(sales_user, business, now)) == {personal, team}


@pytest.mark.django_db
def test_check_achievement_stamps_once_and_notifies(business, sales_user, make_order, now):
    make_order(sales_user, "1200.00")
    goal = make_goal(business, user=sales_user)

    assert check_achievement(goal, now) is True
    assert check_achievement(goal, now) is False

    goal.refresh_from_db()
    assert goal.achieved_at == now
    notifications = Notification.objects.filter(notification_type=Notification.Type.GOAL_ACHIEVED)
    assert notifications.count() == 1
    assert notifications.get().user == sales_user


@pytest.mark.django_db
def test_check_achievement_below_target_does_nothing(business, sales_user, make_order, now):
    goal = make_goal(business, user=sales_user)
    make_order(sales_user, "999.99")
    assert check_achievement(goal, now) is False
    assert not Notification.objects.exists()


@pytest.mark.django_db
def test_completing_an_order_achieves_running_goal(business, store, sales_user, make_order):
    today = timezone.now().date()
    goal = make_goal(
        business, user=sales_user, goal_type=SalesGoal.GoalType.DAILY,
        start_date=today, target_amount=Decimal("100.00"),
    )
    order = make_order(sales_user, "150.00", status=Order.Status.PENDING)

    order.status = Order.Status.COMPLETED
    order.completed_at = timezone.now()
    order.save()

    goal.refresh_from_db()
    assert goal.achieved_at is not None
    assert Notification.objects.filter(
        notification_type=Notification.Type.GOAL_ACHIEVED, user=sales_user,
    ).count() == 1


@pytest.mark.django_db
def test_periodic_task_checks_running_goals(business, store, sales_user):
    goal = make_goal(
        business, user=sales_user, goal_type=SalesGoal.GoalType.DAILY,
        start_date=timezone.now().date(), target_amount=Decimal("50.00"),
    )
    # Bypass the change feed so only the task can achieve the goal.
    Order.objects.bulk_create([
        Order(
            store=store, seller=sales_user, status=Order.Status.COMPLETED,
            total=Decimal("80.00"), completed_at=timezone.now(),
        )
    ])

    assert check_goal_achievements() == "1 goal(s) achieved"
    goal.refresh_from_db()
    assert goal.achieved_at is not None
