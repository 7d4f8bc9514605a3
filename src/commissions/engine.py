"""Commission engine: per-business aggregation over completed orders.

All order aggregation for commissions lives here; the resolver functions
stay pure and the API only formats what this engine returns.
"""
from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from django.conf import settings
from django.db import DatabaseError, transaction
from django.db.models import Count, Q, Sum
from django.utils import timezone

from .periods import MONTHLY, PERIODS, YEARLY, period_label, period_window
from .resolver import estimate_commission, next_tier, progress_to_next_tier

if TYPE_CHECKING:
    from accounts.models import User
    from stores.models import Business

logger = logging.getLogger(__name__)

BASE_TIER_NAME = "Base"
CENT = Decimal("0.01")


def tiers_for_period(tiers: list, period: str) -> list:
    """Tiers targeting ``period``; all tiers when none does."""
    matching = [t for t in tiers if t.target_period == period]
    return matching or list(tiers)


class CommissionEngine:
    """Commission figures for the employees of one business."""

    def __init__(self, business: "Business") -> None:
        self.business = business

    # ------------------------------------------------------------------
    # Tiers
    # ------------------------------------------------------------------

    def tiers_for_employee(self, user: "User") -> list:
        """Employee-specific tiers when any is active, else the tiers of the position."""
        from commissions.models import CommissionTier

        base = CommissionTier.objects.filter(business=self.business, is_active=True)
        own = list(base.filter(user=user).order_by("target_amount", "tier_number"))
        if own:
            return own
        position = user.position_type or settings.COMMISSION_DEFAULT_POSITION
        return list(
            base.filter(user__isnull=True, role_type=position).order_by("target_amount", "tier_number")
        )

    def _safe_tiers_for_employee(self, user: "User") -> list:
        try:
            return self.tiers_for_employee(user)
        except DatabaseError:
            logger.exception(
                "Could not load commission tiers for user=%s business=%s; defaulting to 0",
                user.pk, self.business.pk,
            )
            return []

    # ------------------------------------------------------------------
    # Aggregation
    # ------------------------------------------------------------------

    def employees(self):
        from accounts.models import User

        return (
            User.objects
            .filter(store_users__store__business=self.business, is_active=True)
            .distinct()
            .order_by("last_name", "first_name")
        )

    def completed_orders(self, start: datetime, end: datetime):
        from sales.models import Order

        return Order.objects.filter(
            store__business=self.business,
            status=Order.Status.COMPLETED,
            completed_at__gte=start,
            completed_at__lt=end,
        )

    def aggregate_sales(self, user: "User", start: datetime, end: datetime) -> dict:
        from sales.models import Order

        agg = self.completed_orders(start, end).filter(seller=user).aggregate(
            total=Sum("total"),
            order_count=Count("id"),
            opens=Count("id", filter=Q(sale_type=Order.SaleType.OPEN)),
            upsells=Count("id", filter=Q(sale_type=Order.SaleType.UPSELL)),
        )
        return {
            "total_sales": agg["total"] or Decimal("0"),
            "order_count": agg["order_count"] or 0,
            "opens_count": agg["opens"] or 0,
            "upsells_count": agg["upsells"] or 0,
        }

    def sales_by_employee(self, start: datetime, end: datetime) -> dict:
        rows = (
            self.completed_orders(start, end)
            .values("seller_id")
            .annotate(total=Sum("total"))
        )
        return {row["seller_id"]: row["total"] or Decimal("0") for row in rows}

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def dashboard(self, user: "User", now: datetime | None = None) -> dict:
        """Period-to-date commission summary of one employee."""
        from goals.services import active_goals_for, goal_progress

        now = now or timezone.now()
        all_tiers = self._safe_tiers_for_employee(user)
        period = all_tiers[0].target_period if all_tiers else settings.COMMISSION_DEFAULT_PERIOD
        tiers = tiers_for_period(all_tiers, period)
        start, end = period_window(period, now, self.business.tz_name)

        sales = self.aggregate_sales(user, start, end)
        estimate = estimate_commission(tiers, sales["total_sales"])
        upcoming = next_tier(tiers, sales["total_sales"])

        goals = [
            {"goal": goal, **goal_progress(goal, now)}
            for goal in active_goals_for(user, self.business, now)
        ]

        return {
            "period": period,
            "period_start": start,
            "period_end": end,
            **sales,
            "current_tier": estimate["tier"].name if estimate["tier"] else BASE_TIER_NAME,
            "commission_rate": estimate["commission_rate"],
            "estimated_commission": estimate["estimated_commission"],
            "next_tier_target": upcoming.target_amount if upcoming else None,
            "progress_to_next_tier": progress_to_next_tier(tiers, sales["total_sales"]),
            "goals": goals,
        }

    def performance_metrics(self, now: datetime | None = None) -> list[dict]:
        """Monthly and year-to-date figures of every employee, best sellers first."""
        now = now or timezone.now()
        tz_name = self.business.tz_name
        month_start, month_end = period_window(MONTHLY, now, tz_name)
        year_start, _ = period_window(YEARLY, now, tz_name)

        monthly = self.sales_by_employee(month_start, month_end)
        ytd = self.sales_by_employee(year_start, month_end)

        metrics = []
        for user in self.employees():
            tiers = tiers_for_period(self._safe_tiers_for_employee(user), MONTHLY)
            monthly_sales = monthly.get(user.pk, Decimal("0"))
            ytd_sales = ytd.get(user.pk, Decimal("0"))
            estimate = estimate_commission(tiers, monthly_sales)
            upcoming = next_tier(tiers, monthly_sales)
            rate = estimate["commission_rate"]
            metrics.append({
                "user": user,
                "position_type": user.position_type,
                "monthly_sales": monthly_sales,
                "monthly_commission": estimate["estimated_commission"],
                "current_tier": estimate["tier"].name if estimate["tier"] else BASE_TIER_NAME,
                "commission_rate": rate,
                "next_tier_target": upcoming.target_amount if upcoming else None,
                "progress_to_next_tier": progress_to_next_tier(tiers, monthly_sales),
                "total_sales_ytd": ytd_sales,
                "total_commission_ytd": ytd_sales * rate,
            })

        metrics.sort(key=lambda m: m["monthly_sales"], reverse=True)
        return metrics

    # ------------------------------------------------------------------
    # Payments
    # ------------------------------------------------------------------

    def run_calculation(self, period: str = MONTHLY, now: datetime | None = None) -> list:
        """Create or refresh the commission payments of ``period``.

        One payment per employee with a positive commission; re-running the
        same period updates unpaid rows and never touches paid ones.
        """
        from accounts.models import User
        from commissions.models import CommissionPayment

        if period not in PERIODS:
            raise ValueError(f"Periode inconnue: {period}")

        now = now or timezone.now()
        start, end = period_window(period, now, self.business.tz_name)
        label = period_label(period, start)
        sales = self.sales_by_employee(start, end)
        users = User.objects.in_bulk(list(sales))

        payments = []
        with transaction.atomic():
            for user_id, amount in sales.items():
                user = users.get(user_id)
                if user is None:
                    continue
                tiers = tiers_for_period(self.tiers_for_employee(user), period)
                estimate = estimate_commission(tiers, amount)
                commission = estimate["estimated_commission"].quantize(CENT)
                if commission <= 0:
                    continue

                payment = (
                    CommissionPayment.objects.select_for_update()
                    .filter(business=self.business, user=user, period_type=period, period_label=label)
                    .first()
                )
                if payment is not None and payment.is_paid:
                    payments.append(payment)
                    continue
                if payment is None:
                    payment = CommissionPayment(
                        business=self.business,
                        user=user,
                        period_type=period,
                        period_label=label,
                    )
                payment.sale_amount = amount
                payment.commission_rate = estimate["commission_rate"]
                payment.commission_amount = commission
                payment.tier_name = estimate["tier"].name if estimate["tier"] else BASE_TIER_NAME
                payment.save()
                payments.append(payment)

        logger.info(
            "Commission run business=%s period=%s label=%s: %d payment(s)",
            self.business.pk, period, label, len(payments),
        )
        return payments

    def mark_paid(self, payment_id, actor) -> "CommissionPayment":
        from commissions.models import CommissionPayment

        with transaction.atomic():
            payment = CommissionPayment.objects.select_for_update().get(
                pk=payment_id, business=self.business,
            )
            payment.mark_paid(actor)
        logger.info("Commission payment %s marked paid by %s", payment.pk, actor)
        return payment
