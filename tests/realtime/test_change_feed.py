import pytest

from inventory.models import InventoryItem
from notifications.models import Notification
from realtime.feed import DELETE, INSERT, UPDATE, ChangeFeed, RowChange, change_feed, channel_name


@pytest.fixture
def captured():
    """Subscribe a recorder to every tracked table and unsubscribe afterwards."""
    events = []
    subscriptions = [
        change_feed.subscribe(
            table,
            on_insert=events.append,
            on_update=events.append,
            on_delete=events.append,
        )
        for table in ("inventory_items", "orders", "notifications")
    ]
    yield events
    for subscription in subscriptions:
        change_feed.unsubscribe(subscription)


def test_channel_name():
    change = RowChange(event=INSERT, table="orders", business_id="42", new={"id": 1})
    assert change.channel == "business_42_realtime" == channel_name(42)


def test_handlers_are_routed_by_table_and_event():
    feed = ChangeFeed()
    inserts, updates = [], []
    feed.subscribe("orders", on_insert=inserts.append, on_update=updates.append)

    feed.publish(RowChange(event=INSERT, table="orders", business_id="1", new={"id": 1}))
    feed.publish(RowChange(event=UPDATE, table="orders", business_id="1", new={"id": 1}, old={"id": 1}))
    feed.publish(RowChange(event=DELETE, table="orders", business_id="1", old={"id": 1}))
    feed.publish(RowChange(event=INSERT, table="notifications", business_id="1", new={"id": 2}))

    assert len(inserts) == 1
    assert len(updates) == 1


def test_channel_subscription_only_sees_its_business():
    feed = ChangeFeed()
    seen = []
    feed.subscribe("orders", on_insert=seen.append, channel=channel_name("1"))

    feed.publish(RowChange(event=INSERT, table="orders", business_id="1", new={}))
    feed.publish(RowChange(event=INSERT, table="orders", business_id="2", new={}))

    assert [c.business_id for c in seen] == ["1"]


@pytest.mark.django_db
def test_failing_handler_does_not_break_the_write_or_other_handlers():
    feed = ChangeFeed()
    seen = []

    def broken(change):
        raise RuntimeError("boom")

    feed.subscribe("orders", on_insert=broken)
    feed.subscribe("orders", on_insert=seen.append)

    feed.publish(RowChange(event=INSERT, table="orders", business_id="1", new={}))

    assert len(seen) == 1


@pytest.mark.django_db
def test_model_saves_publish_insert_update_and_delete(captured, business, inventory_item):
    inventory_item.quantity_on_hand = 12
    inventory_item.save()
    inventory_item_id = inventory_item.pk
    notification = Notification.objects.create(
        business=business, notification_type=Notification.Type.WORKFLOW, title="t", message="m",
    )
    notification.delete()

    item_events = [c for c in captured if c.table == "inventory_items"]
    assert [c.event for c in item_events] == [INSERT, UPDATE]
    update = item_events[1]
    assert update.old["quantity_on_hand"] == 40
    assert update.new["quantity_on_hand"] == 12
    assert update.new["id"] == inventory_item_id
    assert update.channel == business.realtime_channel

    note_events = [c for c in captured if c.table == "notifications"]
    assert [c.event for c in note_events] == [INSERT, DELETE]
    assert note_events[1].new is None


@pytest.mark.django_db
def test_queryset_update_is_not_published(captured, inventory_item):
    captured.clear()
    InventoryItem.objects.filter(pk=inventory_item.pk).update(quantity_on_hand=1)
    assert captured == []


@pytest.mark.django_db
def test_orders_are_published_on_their_business_channel(captured, business, sales_user, make_order):
    order = make_order(sales_user, "80.00")
    event = next(c for c in captured if c.table == "orders")
    assert event.event == INSERT
    assert event.business_id == str(business.pk)
    assert event.new["seller_id"] == sales_user.pk
    assert event.new["id"] == order.pk
