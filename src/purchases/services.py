"""Drafting restock orders for suppliers."""
from __future__ import annotations

from datetime import timedelta
from decimal import Decimal, InvalidOperation

from django.db import transaction
from django.utils import timezone

from stores.models import Sequence

from .models import PurchaseOrder, PurchaseOrderLine, Supplier

CENT = Decimal("0.01")


def next_po_number(store) -> str:
    """``PO-<store code>-<year>-<6 digits>``, numbered per store and year."""
    sequence, _ = Sequence.objects.get_or_create(
        store=store, prefix="PO", year=timezone.now().year,
    )
    return sequence.generate_next()


def _resolve_product(store, line: dict, position: int):
    from catalog.models import Product

    if line.get("product") is not None:
        return line["product"]
    product_id = line.get("product_id")
    if not product_id:
        raise ValueError(f"Ligne {position}: produit requis.")
    product = Product.objects.filter(pk=product_id, business_id=store.business_id).first()
    if product is None:
        raise ValueError(f"Ligne {position}: produit introuvable dans cette entreprise.")
    return product


def _parse_line(store, line: dict, position: int) -> PurchaseOrderLine:
    product = _resolve_product(store, line, position)

    try:
        quantity = int(line.get("quantity_ordered") or 0)
    except (TypeError, ValueError):
        raise ValueError(f"Ligne {position}: quantite commandee invalide.")
    if quantity <= 0:
        raise ValueError(f"Ligne {position}: la quantite commandee doit etre positive.")

    raw_cost = line.get("unit_cost")
    if raw_cost is None:
        raw_cost = product.cost_price
    try:
        unit_cost = Decimal(str(raw_cost)).quantize(CENT)
    except InvalidOperation:
        raise ValueError(f"Ligne {position}: cout unitaire invalide.")
    if unit_cost < 0:
        raise ValueError(f"Ligne {position}: cout unitaire invalide.")

    return PurchaseOrderLine(product=product, quantity_ordered=quantity, unit_cost=unit_cost)


@transaction.atomic
def create_purchase_order(
    *,
    store,
    supplier: Supplier,
    actor,
    lines: list[dict],
    notes: str = "",
    source: str = PurchaseOrder.Source.MANUAL,
) -> PurchaseOrder:
    """Draft a purchase order to *supplier* for *store*.

    Each line gives a ``product`` (or ``product_id``) and ``quantity_ordered``;
    ``unit_cost`` defaults to the product's cost price. The expected delivery
    date follows the supplier's lead time. Raises ``ValueError`` when the
    lines are empty or invalid, a product repeats, or the supplier belongs to
    another business.
    """
    if supplier.business_id != store.business_id:
        raise ValueError("Le fournisseur doit appartenir a la meme entreprise que la boutique.")
    if not lines:
        raise ValueError("Le bon de commande doit contenir au moins une ligne.")

    parsed = [_parse_line(store, line, position) for position, line in enumerate(lines, start=1)]
    product_ids = [line.product.pk for line in parsed]
    if len(set(product_ids)) != len(product_ids):
        raise ValueError("Un produit apparait plusieurs fois dans le bon de commande.")

    purchase_order = PurchaseOrder.objects.create(
        store=store,
        supplier=supplier,
        created_by=actor,
        po_number=next_po_number(store),
        source=source,
        expected_date=timezone.localdate() + timedelta(days=supplier.lead_time_days),
        notes=(notes or "").strip(),
    )
    for line in parsed:
        line.purchase_order = purchase_order
        line.save()

    purchase_order.subtotal = sum((line.line_total for line in parsed), Decimal("0.00"))
    purchase_order.save(update_fields=["subtotal", "updated_at"])
    return purchase_order

