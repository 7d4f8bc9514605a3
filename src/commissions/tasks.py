"""Celery tasks for commissions."""
from __future__ import annotations

import logging
from datetime import timedelta

from celery import shared_task
from django.utils import timezone

from .periods import MONTHLY

logger = logging.getLogger(__name__)


@shared_task(name="commissions.tasks.calculate_commissions")
def calculate_commissions(business_id: str, period: str = MONTHLY):
    """Run the commission calculation of one business for the current period."""
    from commissions.engine import CommissionEngine
    from stores.models import Business

    business = Business.objects.get(pk=business_id)
    payments = CommissionEngine(business).run_calculation(period)
    return f"{len(payments)} commission payment(s)"


@shared_task(name="commissions.tasks.close_month_commissions")
def close_month_commissions():
    """On the first day of a month, compute last month's payments for every business."""
    from commissions.engine import CommissionEngine
    from stores.models import Business

    today = timezone.localdate()
    if today.day != 1:
        return "skipped"

    reference = timezone.now() - timedelta(days=1)
    count = 0
    for business in Business.objects.filter(is_active=True):
        try:
            count += len(CommissionEngine(business).run_calculation(MONTHLY, now=reference))
        except Exception:
            logger.exception("Monthly commission close failed for business=%s", business.pk)
    logger.info("close_month_commissions completed: %d payment(s).", count)
    return f"{count} commission payment(s)"
