"""Per-item reorder points evaluated on stock updates."""
import pytest

from inventory.models import InventoryItem, InventoryMovement
from inventory.services import adjust_stock
from notifications.models import Notification
from purchases.models import PurchaseOrder, Supplier
from workflows.engine import manual_restock
from workflows.models import ReorderPoint, WorkflowRule

OUT = InventoryMovement.MovementType.OUT


def make_point(inventory_item, **kwargs):
    defaults = {"reorder_point": 10, "reorder_quantity": 24}
    defaults.update(kwargs)
    return ReorderPoint.objects.create(
        business=inventory_item.store.business,
        store=inventory_item.store,
        product=inventory_item.product,
        **defaults,
    )


@pytest.fixture
def preferred_supplier(business):
    return Supplier.objects.create(business=business, name="Maison Iris", lead_time_days=3)


@pytest.mark.parametrize(
    "quantity, old_quantity, crossed",
    [
        (10, 11, True),
        (3, 40, True),
        (11, 40, False),
        (8, 9, False),
        (0, None, False),
    ],
)
def test_is_crossed_only_when_falling_through_the_point(quantity, old_quantity, crossed):
    point = ReorderPoint(reorder_point=10)
    assert point.is_crossed(quantity, old_quantity) is crossed


@pytest.mark.django_db
def test_crossing_drafts_a_purchase_order_to_the_preferred_supplier(inventory_item, preferred_supplier):
    point = make_point(inventory_item, preferred_supplier=preferred_supplier)

    adjust_stock(inventory_item, -32, OUT)

    po = PurchaseOrder.objects.get()
    assert po.supplier == preferred_supplier
    assert po.source == PurchaseOrder.Source.WORKFLOW
    assert po.notes == "Point de commande atteint (10)."
    assert [line.quantity_ordered for line in po.lines.all()] == [24]
    point.refresh_from_db()
    assert point.last_triggered is not None


@pytest.mark.django_db
def test_point_falls_back_to_the_product_supplier(inventory_item, supplier):
    make_point(inventory_item)
    adjust_stock(inventory_item, -35, OUT)
    assert PurchaseOrder.objects.get().supplier == supplier


@pytest.mark.django_db
def test_point_does_not_fire_again_while_below(inventory_item):
    make_point(inventory_item)

    adjust_stock(inventory_item, -32, OUT)
    adjust_stock(inventory_item, -2, OUT)

    assert PurchaseOrder.objects.count() == 1


@pytest.mark.django_db
def test_point_fires_again_after_restocking(inventory_item):
    make_point(inventory_item)

    adjust_stock(inventory_item, -32, OUT)
    adjust_stock(inventory_item, 30, InventoryMovement.MovementType.IN)
    adjust_stock(inventory_item, -30, OUT)

    assert PurchaseOrder.objects.count() == 2


@pytest.mark.django_db
def test_new_item_below_its_point_does_not_fire(store, business, product):
    ReorderPoint.objects.create(business=business, store=store, product=product, reorder_point=10)
    InventoryItem.objects.create(store=store, product=product, quantity_on_hand=2, low_stock_threshold=1)
    assert not PurchaseOrder.objects.exists()


@pytest.mark.django_db
def test_manual_point_only_notifies(inventory_item):
    make_point(inventory_item, auto_generate_po=False)

    adjust_stock(inventory_item, -32, OUT)

    assert not PurchaseOrder.objects.exists()
    notification = Notification.objects.get(title="Point de commande atteint")
    assert notification.notification_type == Notification.Type.INVENTORY_ALERT
    assert notification.data["reorder_quantity"] == 24
    assert notification.data["inventory_item_id"] == str(inventory_item.pk)


@pytest.mark.django_db
def test_point_without_supplier_notifies(inventory_item):
    inventory_item.product.supplier = None
    inventory_item.product.save(update_fields=["supplier"])
    make_point(inventory_item)

    adjust_stock(inventory_item, -32, OUT)

    assert not PurchaseOrder.objects.exists()
    assert Notification.objects.filter(title="Point de commande atteint").count() == 1


@pytest.mark.django_db
def test_inactive_point_is_ignored(inventory_item):
    point = make_point(inventory_item, is_active=False)

    adjust_stock(inventory_item, -32, OUT)

    assert not PurchaseOrder.objects.exists()
    assert not Notification.objects.exists()
    point.refresh_from_db()
    assert point.last_triggered is None


@pytest.mark.django_db
def test_reorder_action_uses_the_point_quantity_and_supplier(
    business, inventory_item, preferred_supplier, django_capture_on_commit_callbacks,
):
    make_point(inventory_item, preferred_supplier=preferred_supplier, reorder_quantity=60)
    WorkflowRule.objects.create(
        business=business, name="Reassort", workflow_type="auto_reorder", actions=["create_purchase_order"],
    )

    with django_capture_on_commit_callbacks(execute=True):
        execution = manual_restock(inventory_item)

    execution.refresh_from_db()
    [outcome] = execution.action_results
    assert outcome["result"]["quantity"] == 60
    assert PurchaseOrder.objects.get().supplier == preferred_supplier
