import pytest
from django.core.exceptions import ValidationError

from inventory.models import InventoryItem, InventoryMovement
from inventory.services import adjust_stock, low_stock_items


@pytest.mark.django_db
def test_adjust_stock_records_a_movement(inventory_item, manager_user):
    movement = adjust_stock(
        inventory_item, -15, InventoryMovement.MovementType.OUT,
        reason="Casse", actor=manager_user, reference="INV-1",
    )

    inventory_item.refresh_from_db()
    assert inventory_item.quantity_on_hand == 25
    assert movement.quantity == -15
    assert movement.quantity_after == 25
    assert movement.actor == manager_user


@pytest.mark.django_db
def test_adjust_stock_refuses_negative_stock(inventory_item):
    with pytest.raises(ValueError):
        adjust_stock(inventory_item, -41, InventoryMovement.MovementType.OUT)

    inventory_item.refresh_from_db()
    assert inventory_item.quantity_on_hand == 40
    assert not InventoryMovement.objects.exists()


@pytest.mark.django_db
def test_adjust_stock_refuses_zero_delta(inventory_item):
    with pytest.raises(ValueError):
        adjust_stock(inventory_item, 0, InventoryMovement.MovementType.ADJUST)


@pytest.mark.django_db
def test_low_stock_items_includes_threshold_and_empty(store, product, business):
    from catalog.models import Product

    other = Product.objects.create(business=business, name="Creme", sku="CRE-001", selling_price=10)
    third = Product.objects.create(business=business, name="Huile", sku="HUI-001", selling_price=10)
    at_threshold = InventoryItem.objects.create(store=store, product=product, quantity_on_hand=5, low_stock_threshold=5)
    empty = InventoryItem.objects.create(store=store, product=other, quantity_on_hand=0, low_stock_threshold=5)
    InventoryItem.objects.create(store=store, product=third, quantity_on_hand=6, low_stock_threshold=5)

    assert set(low_stock_items(business)) == {at_threshold, empty}


@pytest.mark.django_db
def test_item_status_properties(inventory_item):
    inventory_item.quantity_on_hand = 5
    assert inventory_item.is_low_stock
    assert not inventory_item.is_out_of_stock
    assert inventory_item.stock_status == "low_stock"
    assert inventory_item.stock_status_label == "Stock faible"


@pytest.mark.django_db
def test_max_stock_below_threshold_is_invalid(inventory_item):
    inventory_item.max_stock = 2
    with pytest.raises(ValidationError):
        inventory_item.full_clean()
