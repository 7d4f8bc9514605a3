"""Publish row changes of tracked models on the change feed."""
from __future__ import annotations

import logging

from django.apps import apps
from django.db.models.signals import post_delete, post_save, pre_save

from realtime.feed import DELETE, INSERT, UPDATE, RowChange, change_feed

logger = logging.getLogger(__name__)

# model label -> table name published on the feed
TRACKED_MODELS = {
    "inventory.InventoryItem": "inventory_items",
    "sales.Order": "orders",
    "notifications.Notification": "notifications",
}


def row_dict(instance) -> dict:
    """Concrete field values of *instance* keyed by column attribute name."""
    return {f.attname: getattr(instance, f.attname) for f in instance._meta.concrete_fields}


def _table_for(sender) -> str:
    return TRACKED_MODELS[sender._meta.label]


def on_tracked_pre_save(sender, instance, raw=False, **kwargs):
    """Capture the stored row so the UPDATE event carries ``old``."""
    if raw or instance._state.adding:
        instance._realtime_old = None
        return
    previous = sender._base_manager.filter(pk=instance.pk).first()
    instance._realtime_old = row_dict(previous) if previous is not None else None


def on_tracked_post_save(sender, instance, created, raw=False, **kwargs):
    if raw:
        return
    old = getattr(instance, "_realtime_old", None)
    change_feed.publish(
        RowChange(
            event=INSERT if created or old is None else UPDATE,
            table=_table_for(sender),
            business_id=str(instance.business_id),
            new=row_dict(instance),
            old=old,
        )
    )


def on_tracked_post_delete(sender, instance, **kwargs):
    change_feed.publish(
        RowChange(
            event=DELETE,
            table=_table_for(sender),
            business_id=str(instance.business_id),
            new=None,
            old=row_dict(instance),
        )
    )


def connect_tracked_models():
    for label in TRACKED_MODELS:
        model = apps.get_model(label)
        uid = f"realtime:{label}"
        pre_save.connect(on_tracked_pre_save, sender=model, dispatch_uid=uid)
        post_save.connect(on_tracked_post_save, sender=model, dispatch_uid=uid)
        post_delete.connect(on_tracked_post_delete, sender=model, dispatch_uid=uid)
