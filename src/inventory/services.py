"""Business logic / service functions for inventory management."""
import logging

from django.db import transaction
from django.db.models import F

from .models import InventoryItem, InventoryMovement

logger = logging.getLogger("spadesk")


@transaction.atomic
def adjust_stock(item, qty_delta, movement_type, reason="", actor=None, reference=""):
    """
    Adjust the quantity on hand of an inventory item.

    Uses ``select_for_update`` on the InventoryItem row to prevent race
    conditions and records an InventoryMovement. Saving the row publishes
    the change on the business realtime channel, which is what fires the
    low-stock workflows.

    Raises:
        ValueError: If the delta is zero or would make the stock negative.
    """
    qty_delta = int(qty_delta)
    if qty_delta == 0:
        raise ValueError("La variation de stock doit etre non nulle.")

    locked = InventoryItem.objects.select_for_update().get(pk=item.pk)
    if locked.quantity_on_hand + qty_delta < 0:
        raise ValueError(
            f"Stock insuffisant pour {locked.product}. "
            f"Disponible: {locked.quantity_on_hand}, demande: {abs(qty_delta)}."
        )

    locked.quantity_on_hand += qty_delta
    locked.save(update_fields=["quantity_on_hand", "updated_at"])
    item.quantity_on_hand = locked.quantity_on_hand

    movement = InventoryMovement.objects.create(
        item=locked,
        movement_type=movement_type,
        quantity=qty_delta,
        quantity_after=locked.quantity_on_hand,
        reference=reference,
        reason=reason,
        actor=actor,
    )

    logger.info(
        "Stock adjusted: %s %+d (now %d) by %s (type=%s, ref=%s)",
        locked.product_id, qty_delta, locked.quantity_on_hand, actor, movement_type, reference,
    )
    return movement


def low_stock_items(business=None):
    """Inventory items at or below their threshold in active stores."""
    qs = (
        InventoryItem.objects
        .filter(
            store__is_active=True,
            store__business__is_active=True,
            quantity_on_hand__lte=F("low_stock_threshold"),
        )
        .select_related("store__business", "product")
    )
    if business is not None:
        qs = qs.filter(store__business=business)
    return qs
