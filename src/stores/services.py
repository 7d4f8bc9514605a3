"""Service / helper functions for the stores app."""
from __future__ import annotations

from django.contrib.auth import get_user_model

from stores.models import Business, Store, StoreUser

User = get_user_model()


def get_user_store(user: User, store_id=None) -> Store | None:
    """Return the active store of *user*.

    Resolution order: the requested ``store_id`` when the user belongs to
    it, then the user's default store, then the first store.
    """
    if user is None or not user.is_authenticated:
        return None

    memberships = (
        StoreUser.objects
        .filter(user=user, store__is_active=True, store__business__is_active=True)
        .select_related("store__business")
    )
    if store_id:
        membership = memberships.filter(store_id=store_id).first()
        if membership:
            return membership.store

    membership = memberships.filter(is_default=True).first() or memberships.first()
    return membership.store if membership else None


def get_user_business(user: User, store_id=None) -> Business | None:
    """Return the business (tenant) the user works for, or None."""
    store = get_user_store(user, store_id=store_id)
    return store.business if store else None

