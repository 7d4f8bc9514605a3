"""Celery tasks for inventory workflows."""
from __future__ import annotations

import logging

from celery import shared_task
from django.conf import settings

logger = logging.getLogger(__name__)


@shared_task(name="workflows.tasks.run_workflow_execution")
def run_workflow_execution(execution_id: str):
    """Run one queued workflow execution."""
    from workflows.engine import execute
    from workflows.models import WorkflowExecution

    execution = WorkflowExecution.objects.filter(pk=execution_id).first()
    if execution is None:
        logger.warning("Workflow execution %s vanished before running", execution_id)
        return "missing"
    if execution.status != WorkflowExecution.Status.PENDING:
        return execution.status
    return execute(execution).status


@shared_task(name="workflows.tasks.scan_low_stock")
def scan_low_stock():
    """Re-evaluate every low-stock item so missed change events still trigger workflows."""
    from inventory.services import low_stock_items
    from workflows.engine import evaluate_item

    if not settings.LOW_STOCK_SCAN_ENABLED:
        return "disabled"

    triggered = 0
    for item in low_stock_items().select_related("product__category"):
        try:
            triggered += len(evaluate_item(item))
        except Exception:
            logger.exception("Low-stock scan failed for inventory item %s", item.pk)
    logger.info("scan_low_stock completed: %d workflow(s) triggered.", triggered)
    return f"{triggered} workflow(s) triggered"
