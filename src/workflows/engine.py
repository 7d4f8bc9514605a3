"""Low-stock workflow engine.

Inventory row changes arrive from the change feed; the engine maps them to
workflow types, creates one execution per matching active rule and runs
the rule's actions in order through an explicit status machine.
"""
from __future__ import annotations

import logging
from typing import Optional

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from inventory.levels import is_low_stock, is_out_of_stock

from .actions import ACTIONS
from .exceptions import WorkflowError
from .models import ReorderPoint, WorkflowExecution, WorkflowRule

logger = logging.getLogger(__name__)

STOCK_ALERT = WorkflowRule.WorkflowType.STOCK_ALERT
EMERGENCY_RESTOCK = WorkflowRule.WorkflowType.EMERGENCY_RESTOCK
AUTO_REORDER = WorkflowRule.WorkflowType.AUTO_REORDER


def workflow_types_for_change(new: dict, old: Optional[dict] = None) -> list[str]:
    """Workflow types fired by an inventory row going from *old* to *new*.

    Low stock fires ``stock_alert``; a positive quantity dropping to zero
    also fires ``emergency_restock``. A row created empty is only low stock.
    """
    quantity = new["quantity_on_hand"]
    types = []
    if is_low_stock(quantity, new["low_stock_threshold"]):
        types.append(STOCK_ALERT)
    if is_out_of_stock(quantity):
        old_quantity = (old or {}).get("quantity_on_hand")
        if old_quantity is not None and old_quantity > 0:
            types.append(EMERGENCY_RESTOCK)
    return types


def conditions_match(rule: WorkflowRule, item) -> bool:
    """Check the optional ``stock_threshold`` / ``product_categories`` conditions."""
    conditions = rule.trigger_conditions or {}
    threshold = conditions.get("stock_threshold")
    if threshold is not None and item.quantity_on_hand > int(threshold):
        return False
    categories = conditions.get("product_categories")
    if categories and "all" not in categories:
        category = item.product.category
        if category is None or category.slug not in categories:
            return False
    return True


def trigger_data_for(item, **extra) -> dict:
    data = {
        "inventory_item_id": str(item.pk),
        "product_id": str(item.product_id),
        "store_id": str(item.store_id),
        "product_name": item.product.name,
        "store_name": item.store.name,
        "current_stock": item.quantity_on_hand,
        "threshold": item.low_stock_threshold,
    }
    data.update(extra)
    return data


def queue_execution(execution: WorkflowExecution) -> None:
    """Run *execution* on a worker once the current transaction commits."""
    execution_id = str(execution.pk)

    def _dispatch() -> None:
        try:
            from workflows.tasks import run_workflow_execution

            run_workflow_execution.delay(execution_id)
            return
        except Exception as exc:
            logger.warning("workflow async dispatch failed: %s", exc, exc_info=True)
        # Worker unavailable: run in-process so the alert still goes out.
        try:
            execute(WorkflowExecution.objects.get(pk=execution_id))
        except Exception as exc:
            logger.error("workflow sync execution failed: %s", exc, exc_info=True)

    transaction.on_commit(_dispatch)


def trigger_workflow(business, workflow_type: str, item, trigger_data: dict | None = None, *, manual: bool = False):
    """Create and queue an execution of the first active rule of *workflow_type*.

    Returns the execution, or ``None`` when no rule applies or an unresolved
    execution already covers this item (manual triggers skip both checks
    on conditions and duplicates).
    """
    rule = (
        WorkflowRule.objects
        .filter(business=business, workflow_type=workflow_type, is_active=True)
        .order_by("created_at")
        .first()
    )
    if rule is None:
        logger.debug("No active %s rule for business=%s", workflow_type, business.pk)
        return None

    if not manual:
        if not conditions_match(rule, item):
            return None
        already_open = WorkflowExecution.objects.filter(
            rule=rule, inventory_item=item, resolved_at__isnull=True,
        ).exists()
        if already_open:
            return None

    execution = WorkflowExecution.objects.create(
        rule=rule,
        inventory_item=item,
        trigger_data=trigger_data if trigger_data is not None else trigger_data_for(item),
        manual_trigger=manual,
    )
    logger.info(
        "Workflow %s triggered for item=%s (rule=%s, manual=%s)",
        workflow_type, item.pk, rule.pk, manual,
    )
    queue_execution(execution)
    return execution


def execute(execution: WorkflowExecution) -> WorkflowExecution:
    """Run the actions of *execution* in order.

    The first action that raises fails the execution and the remaining
    actions are not run. Unknown action names are logged and skipped.
    """
    with transaction.atomic():
        execution = (
            WorkflowExecution.objects
            .select_for_update()
            .select_related("rule__business", "inventory_item__product__supplier", "inventory_item__store")
            .get(pk=execution.pk)
        )
        execution.transition_to(WorkflowExecution.Status.PROCESSING)

    rule = execution.rule
    results = []
    for name in rule.actions:
        action = ACTIONS.get(name)
        if action is None:
            logger.warning("Unknown workflow action '%s' in rule %s; skipped", name, rule.pk)
            results.append({"action": name, "status": "skipped"})
            continue
        try:
            with transaction.atomic():
                result = action(execution)
        except Exception as exc:
            logger.warning(
                "Workflow action '%s' failed for execution %s: %s",
                name, execution.pk, exc, exc_info=True,
            )
            results.append({"action": name, "status": "error", "error": str(exc)})
            execution.action_results = results
            execution.transition_to(WorkflowExecution.Status.FAILED, error=str(exc))
            return execution
        results.append({"action": name, "status": "ok", "result": result})

    execution.action_results = results
    execution.transition_to(WorkflowExecution.Status.COMPLETED)
    WorkflowRule.objects.filter(pk=rule.pk).update(
        execution_count=F("execution_count") + 1,
        last_triggered=execution.completed_at,
        updated_at=timezone.now(),
    )
    logger.info("Workflow execution %s completed (%d action(s))", execution.pk, len(results))
    return execution


def resolve_for_item(item) -> int:
    """Close the open executions of *item* so a later drop triggers again."""
    return WorkflowExecution.objects.filter(
        inventory_item=item, resolved_at__isnull=True,
    ).update(resolved_at=timezone.now())


def check_reorder_point(item, old: Optional[dict] = None):
    """Fire the reorder point of *item* when this change crossed it.

    Drafts a purchase order when the point allows it and a supplier is
    known, otherwise notifies the business for a manual review. Returns
    the purchase order, or ``None``.
    """
    from notifications.models import Notification
    from notifications.services import create_notification
    from purchases.models import PurchaseOrder
    from purchases.services import create_purchase_order

    point = ReorderPoint.for_item(item)
    old_quantity = (old or {}).get("quantity_on_hand")
    if point is None or not point.is_crossed(item.quantity_on_hand, old_quantity):
        return None

    now = timezone.now()
    ReorderPoint.objects.filter(pk=point.pk).update(last_triggered=now, updated_at=now)
    point.last_triggered = now
    logger.info("Reorder point %s reached for item=%s (%d on hand)", point.pk, item.pk, item.quantity_on_hand)

    supplier = point.supplier
    if point.auto_generate_po and supplier is not None:
        try:
            return create_purchase_order(
                store=item.store,
                supplier=supplier,
                actor=None,
                lines=[{"product": item.product, "quantity_ordered": point.reorder_quantity}],
                notes=f"Point de commande atteint ({point.reorder_point}).",
                source=PurchaseOrder.Source.WORKFLOW,
            )
        except ValueError as exc:
            logger.warning("Reorder point %s could not draft a purchase order: %s", point.pk, exc)

    create_notification(
        item.store.business,
        Notification.Type.INVENTORY_ALERT,
        "Point de commande atteint",
        f"{item.product.name} ({item.store.name}) : {item.quantity_on_hand} en stock, "
        f"commande suggeree de {point.reorder_quantity}.",
        data={
            "reorder_point_id": str(point.pk),
            "inventory_item_id": str(item.pk),
            "reorder_quantity": point.reorder_quantity,
        },
    )
    return None


def evaluate_item(item, old: Optional[dict] = None) -> list[WorkflowExecution]:
    """Trigger or resolve workflows for the current state of *item*."""
    check_reorder_point(item, old)
    new = {"quantity_on_hand": item.quantity_on_hand, "low_stock_threshold": item.low_stock_threshold}
    types = workflow_types_for_change(new, old)
    if not types:
        resolve_for_item(item)
        return []

    business = item.store.business
    executions = []
    for workflow_type in types:
        extra = {"urgency": "critical"} if workflow_type == EMERGENCY_RESTOCK else {}
        execution = trigger_workflow(business, workflow_type, item, trigger_data_for(item, **extra))
        if execution is not None:
            executions.append(execution)
    return executions


def handle_inventory_change(change) -> None:
    """Change feed subscriber for ``inventory_items`` inserts and updates."""
    from inventory.models import InventoryItem

    item = (
        InventoryItem.objects
        .select_related("store__business", "product__category")
        .filter(pk=change.new["id"])
        .first()
    )
    if item is None:
        return
    evaluate_item(item, change.old)


def manual_restock(item) -> WorkflowExecution:
    """Trigger the business ``auto_reorder`` rule for *item* on demand."""
    execution = trigger_workflow(
        item.store.business,
        AUTO_REORDER,
        item,
        trigger_data_for(item, manual_trigger=True),
        manual=True,
    )
    if execution is None:
        raise WorkflowError("Aucune regle de reapprovisionnement automatique active.")
    return execution
