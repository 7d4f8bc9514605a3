"""Business-logic / service functions for the sales app."""
from __future__ import annotations

import logging
from decimal import Decimal

from django.db import transaction
from django.db.models import Sum
from django.utils import timezone

from inventory.models import InventoryItem, InventoryMovement
from inventory.services import adjust_stock
from sales.models import Order, OrderItem

logger = logging.getLogger("spadesk")


@transaction.atomic
def create_order(store, seller, items, sale_type=Order.SaleType.REGULAR, notes="") -> Order:
    """Create a PENDING order from ``[{"product": ..., "quantity": ...}]`` lines."""
    if store is None:
        raise ValueError("Impossible de creer une commande sans boutique active.")
    if not items:
        raise ValueError("La commande doit contenir au moins une ligne.")

    order = Order.objects.create(
        store=store,
        seller=seller,
        sale_type=sale_type,
        status=Order.Status.PENDING,
        notes=notes,
    )
    for line in items:
        product = line["product"]
        if product.business_id != store.business_id:
            raise ValueError(f"Produit '{product}' introuvable dans cette entreprise.")
        qty = int(line.get("quantity") or 1)
        if qty <= 0:
            raise ValueError("La quantite doit etre positive.")
        OrderItem.objects.create(
            order=order,
            product=product,
            unit_price=line.get("unit_price", product.selling_price),
            quantity=qty,
        )

    order.total = order.items.aggregate(total=Sum("line_total"))["total"] or Decimal("0.00")
    order.save(update_fields=["total", "updated_at"])
    logger.info("Order %s created by %s in store %s", order.pk, seller, store)
    return order


@transaction.atomic
def complete_order(order: Order, actor=None) -> Order:
    """Mark an order completed and take its items out of stock.

    Raises ``ValueError`` when the order is not pending or stock is short;
    the whole completion is then rolled back.
    """
    if order.status != Order.Status.PENDING:
        raise ValueError("Seule une commande en attente peut etre terminee.")

    for line in order.items.select_related("product"):
        item = InventoryItem.objects.filter(store=order.store, product=line.product).first()
        if item is None:
            raise ValueError(f"Aucun stock pour '{line.product}' dans cette boutique.")
        adjust_stock(
            item,
            -line.quantity,
            InventoryMovement.MovementType.SALE,
            reason="Vente",
            actor=actor or order.seller,
            reference=order.order_number or str(order.pk),
        )

    order.status = Order.Status.COMPLETED
    order.completed_at = timezone.now()
    order.save(update_fields=["status", "completed_at", "updated_at"])
    logger.info("Order %s completed (total=%s)", order.pk, order.total)
    return order
