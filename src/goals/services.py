"""Goal progress aggregation and achievement tracking."""
from __future__ import annotations

import logging
from datetime import datetime, time, timedelta
from decimal import Decimal
from zoneinfo import ZoneInfo

from django.db.models import Count, Q, Sum
from django.utils import timezone

from .models import SalesGoal
from .progress import HUNDRED, compute_goal_progress, sale_type_for_position

logger = logging.getLogger(__name__)


def goal_window(goal: SalesGoal, tz_name: str) -> tuple[datetime, datetime]:
    """Midnight of ``start_date`` to the exclusive midnight after ``end_date``, business time."""
    tz = ZoneInfo(tz_name)
    start = datetime.combine(goal.start_date, time.min, tzinfo=tz)
    end = datetime.combine(goal.end_date + timedelta(days=1), time.min, tzinfo=tz)
    return start, end


def filter_orders_for_position(orders, position_type):
    """Openers count open sales, upsellers upsells; anyone else every order."""
    sale_type = sale_type_for_position(position_type)
    if sale_type:
        return orders.filter(sale_type=sale_type)
    return orders


def goal_orders(goal: SalesGoal):
    """Completed orders counted by *goal*."""
    from sales.models import Order

    start, end = goal_window(goal, goal.business.tz_name)
    orders = Order.objects.filter(
        store__business_id=goal.business_id,
        status=Order.Status.COMPLETED,
        completed_at__gte=start,
        completed_at__lt=end,
    )
    if goal.user_id:
        orders = orders.filter(seller_id=goal.user_id)
    return filter_orders_for_position(orders, goal.position_type)


def goal_progress(goal: SalesGoal, now: datetime | None = None) -> dict:
    now = now or timezone.now()
    agg = goal_orders(goal).aggregate(total=Sum("total"), count=Count("id"))
    current_amount = agg["total"] or Decimal("0")
    current_count = goal.current_count or agg["count"] or 0
    return compute_goal_progress(
        target_amount=goal.target_amount,
        target_count=goal.target_count,
        current_amount=current_amount,
        current_count=current_count,
        end_date=goal.end_date,
        now=now,
        tz_name=goal.business.tz_name,
    )


def active_goals_for(user, business, now: datetime | None = None):
    """Active goals of *user* (personal and team) still running at ``now``."""
    now = now or timezone.now()
    today = timezone.localtime(now, ZoneInfo(business.tz_name)).date()
    return (
        SalesGoal.objects
        .filter(business=business, is_active=True, end_date__gte=today)
        .filter(Q(user=user) | Q(user__isnull=True))
        .select_related("business")
        .order_by("end_date")
    )


def check_achievement(goal: SalesGoal, now: datetime | None = None) -> bool:
    """Stamp ``achieved_at`` and notify once when *goal* reaches 100 %.

    Returns True when the goal was newly achieved.
    """
    from notifications.models import Notification
    from notifications.services import create_notification

    if goal.achieved_at is not None:
        return False
    now = now or timezone.now()
    progress = goal_progress(goal, now)
    if progress["progress_percentage"] < HUNDRED:
        return False

    updated = SalesGoal.objects.filter(pk=goal.pk, achieved_at__isnull=True).update(
        achieved_at=now, updated_at=now,
    )
    if not updated:
        return False
    goal.achieved_at = now

    target = goal.target_count if goal.is_count_based else goal.target_amount
    create_notification(
        goal.business,
        Notification.Type.GOAL_ACHIEVED,
        "Objectif atteint",
        f"Objectif {goal.get_goal_type_display().lower()} de {target} atteint.",
        user=goal.user,
        data={"goal_id": str(goal.pk), "goal_type": goal.goal_type},
    )
    logger.info("Goal %s achieved (user=%s)", goal.pk, goal.user_id)
    return True


def running_goals(now: datetime | None = None):
    """Active, unachieved goals whose window contains today (any business)."""
    now = now or timezone.now()
    # One day of slack either side covers business time zones.
    today = now.date()
    return (
        SalesGoal.objects
        .filter(
            is_active=True,
            achieved_at__isnull=True,
            start_date__lte=today + timedelta(days=1),
            end_date__gte=today - timedelta(days=1),
            business__is_active=True,
        )
        .select_related("business", "user")
    )
