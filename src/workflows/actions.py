"""Actions a workflow rule can chain.

Each action takes the running :class:`~workflows.models.WorkflowExecution`
and returns a JSON-serialisable result dict, or raises to fail the run.
"""
from __future__ import annotations

import logging

from django.conf import settings

from .exceptions import ActionError

logger = logging.getLogger(__name__)


def _context(execution) -> dict:
    item = execution.inventory_item
    if item is None:
        raise ActionError("Aucun article d'inventaire associe a cette execution.")
    return {
        "rule": execution.rule,
        "business": execution.rule.business,
        "item": item,
        "product": item.product,
        "store": item.store,
        "out_of_stock": item.is_out_of_stock,
    }


def reorder_quantity(rule, item, point=None) -> int:
    """Rule condition first, then the item's reorder point, then the product."""
    qty = rule.trigger_conditions.get("reorder_quantity")
    if not qty:
        qty = point.reorder_quantity if point is not None else item.product.reorder_quantity
    return int(qty or settings.WORKFLOW_DEFAULT_REORDER_QTY)


def create_purchase_order(execution) -> dict:
    """Draft a purchase order to the reorder point's supplier, else the product's."""
    from purchases.models import PurchaseOrder
    from purchases.services import create_purchase_order as create_po
    from workflows.models import ReorderPoint

    ctx = _context(execution)
    product = ctx["product"]
    point = ReorderPoint.for_item(ctx["item"])
    supplier = point.supplier if point is not None else product.supplier
    if supplier is None:
        raise ActionError(f"Aucun fournisseur pour le produit '{product}'.")

    quantity = reorder_quantity(ctx["rule"], ctx["item"], point)
    try:
        purchase_order = create_po(
            store=ctx["store"],
            supplier=supplier,
            actor=None,
            lines=[{"product": product, "quantity_ordered": quantity}],
            notes=f"Genere par le workflow {ctx['rule'].name}.",
            source=PurchaseOrder.Source.WORKFLOW,
        )
    except ValueError as exc:
        raise ActionError(str(exc)) from exc
    return {
        "purchase_order_id": str(purchase_order.pk),
        "po_number": purchase_order.po_number,
        "quantity": quantity,
    }


def send_notification(execution) -> dict:
    """Business-wide inventory alert."""
    from notifications.models import Notification
    from notifications.services import create_notification

    ctx = _context(execution)
    item, product = ctx["item"], ctx["product"]
    title = "Rupture de stock" if ctx["out_of_stock"] else "Alerte stock faible"
    notification = create_notification(
        ctx["business"],
        Notification.Type.INVENTORY_ALERT,
        f"{title} : {product.name}",
        (
            f"Le produit {product.name} ({product.sku}) a {item.quantity_on_hand} unite(s) "
            f"dans la boutique {ctx['store'].name} (seuil {item.low_stock_threshold})."
        ),
        data=execution.trigger_data,
    )
    return {"notification_id": str(notification.pk)}


def notify_manager(execution) -> dict:
    """One personal notification per manager of the business."""
    from notifications.models import Notification
    from notifications.services import create_notification

    ctx = _context(execution)
    managers = list(ctx["business"].managers())
    if not managers:
        raise ActionError("Aucun gestionnaire a notifier.")
    for manager in managers:
        create_notification(
            ctx["business"],
            Notification.Type.WORKFLOW,
            f"Workflow {ctx['rule'].name}",
            f"Action requise pour {ctx['product'].name} ({ctx['store'].name}).",
            user=manager,
            data=execution.trigger_data,
        )
    return {"notified": len(managers)}


def email_manager(execution) -> dict:
    """Email the managers of the business."""
    from core.email import send_templated_email

    ctx = _context(execution)
    recipients = [m.email for m in ctx["business"].managers()]
    if not recipients:
        raise ActionError("Aucun gestionnaire a qui envoyer l'email.")
    sent = send_templated_email(
        subject=f"[{ctx['business'].name}] Stock faible : {ctx['product'].name}",
        template_name="emails/low_stock",
        context=ctx,
        recipient_list=recipients,
    )
    return {"emailed": len(recipients), "sent": sent}


ACTIONS = {
    "create_purchase_order": create_purchase_order,
    "send_notification": send_notification,
    "notify_manager": notify_manager,
    "email_manager": email_manager,
}
