"""Change feed subscribers of the goals app."""
from __future__ import annotations

import logging

from django.db.models import Q

from realtime.feed import RowChange

logger = logging.getLogger(__name__)

COMPLETED = "completed"


def on_order_changed(change: RowChange) -> None:
    """Check the seller's running goals once an order becomes completed."""
    from goals.services import check_achievement, running_goals

    new, old = change.new or {}, change.old or {}
    if new.get("status") != COMPLETED or old.get("status") == COMPLETED:
        return

    goals = running_goals().filter(business_id=change.business_id).filter(
        Q(user_id=new.get("seller_id")) | Q(user__isnull=True)
    )
    for goal in goals:
        check_achievement(goal)
