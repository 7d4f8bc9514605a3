"""In-process change feed.

Row changes of tracked models are published as :class:`RowChange` events
on a per-business channel (``business_<id>_realtime``). Subscribers
register ``on_insert`` / ``on_update`` / ``on_delete`` handlers for a
table, optionally restricted to one channel. Delivery is synchronous, in
the saving thread; each handler runs in its own savepoint so a failing
subscriber never breaks the write that produced the event.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from django.db import transaction
from django.dispatch import Signal

logger = logging.getLogger(__name__)

INSERT = "INSERT"
UPDATE = "UPDATE"
DELETE = "DELETE"


def channel_name(business_id) -> str:
    return f"business_{business_id}_realtime"


@dataclass(frozen=True)
class RowChange:
    event: str
    table: str
    business_id: str
    new: Optional[dict] = None
    old: Optional[dict] = None

    @property
    def channel(self) -> str:
        return channel_name(self.business_id)


@dataclass
class Subscription:
    table: str
    channel: Optional[str] = None
    handlers: dict = field(default_factory=dict)

    def matches(self, change: RowChange) -> bool:
        if change.table != self.table:
            return False
        return self.channel is None or self.channel == change.channel


Handler = Callable[[RowChange], None]


class ChangeFeed:
    """Registry of subscriptions fed by :data:`row_changed`."""

    def __init__(self):
        self.row_changed = Signal()
        self._subscriptions: list[Subscription] = []
        self.row_changed.connect(self._deliver, weak=False, dispatch_uid=id(self))

    def subscribe(
        self,
        table: str,
        *,
        on_insert: Handler | None = None,
        on_update: Handler | None = None,
        on_delete: Handler | None = None,
        channel: str | None = None,
    ) -> Subscription:
        handlers = {INSERT: on_insert, UPDATE: on_update, DELETE: on_delete}
        subscription = Subscription(
            table=table,
            channel=channel,
            handlers={event: fn for event, fn in handlers.items() if fn is not None},
        )
        self._subscriptions.append(subscription)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    def publish(self, change: RowChange) -> None:
        self.row_changed.send(sender=self.__class__, change=change)

    def _deliver(self, sender, change: RowChange, **kwargs):
        for subscription in list(self._subscriptions):
            if not subscription.matches(change):
                continue
            handler = subscription.handlers.get(change.event)
            if handler is None:
                continue
            try:
                with transaction.atomic():
                    handler(change)
            except Exception:
                logger.exception(
                    "Realtime handler %r failed for %s %s on %s",
                    handler, change.event, change.table, change.channel,
                )


change_feed = ChangeFeed()
