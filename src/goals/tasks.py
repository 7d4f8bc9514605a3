"""Celery tasks for sales goals."""
from __future__ import annotations

import logging

from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task(name="goals.tasks.check_goal_achievements")
def check_goal_achievements():
    """Stamp and notify goals that reached 100 % since the last run."""
    from goals.services import check_achievement, running_goals

    achieved = 0
    for goal in running_goals():
        try:
            if check_achievement(goal):
                achieved += 1
        except Exception:
            logger.exception("Goal achievement check failed for goal=%s", goal.pk)
    logger.info("check_goal_achievements completed: %d goal(s) achieved.", achieved)
    return f"{achieved} goal(s) achieved"
