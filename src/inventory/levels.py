"""Stock level classification.

Pure functions shared by the inventory models, the workflow trigger and
the API. ``quantity_on_hand == threshold`` is low stock; zero or less is
out of stock, which is always low stock as well.
"""

OUT_OF_STOCK = "out_of_stock"
LOW_STOCK = "low_stock"
OVERSTOCKED = "overstocked"
IN_STOCK = "in_stock"

STOCK_STATUS_LABELS = {
    OUT_OF_STOCK: "Rupture de stock",
    LOW_STOCK: "Stock faible",
    OVERSTOCKED: "Surstock",
    IN_STOCK: "En stock",
}


def is_out_of_stock(quantity_on_hand) -> bool:
    return quantity_on_hand <= 0


def is_low_stock(quantity_on_hand, threshold) -> bool:
    return quantity_on_hand <= threshold


def classify_stock(quantity_on_hand, threshold, max_stock=None) -> str:
    """Return the stock status of a quantity against its thresholds."""
    if is_out_of_stock(quantity_on_hand):
        return OUT_OF_STOCK
    if is_low_stock(quantity_on_hand, threshold):
        return LOW_STOCK
    if max_stock is not None and quantity_on_hand > max_stock:
        return OVERSTOCKED
    return IN_STOCK
