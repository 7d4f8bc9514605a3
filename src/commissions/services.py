"""Tier set management for the commission screens."""
from __future__ import annotations

import logging

from django.db import transaction

from .models import CommissionTier

logger = logging.getLogger(__name__)

TIER_FIELDS = ("tier_number", "name", "target_amount", "commission_rate", "target_period", "is_active")


def _build_tiers(business, rows, **owner) -> list[CommissionTier]:
    tiers = []
    for idx, row in enumerate(rows, start=1):
        values = {key: row[key] for key in TIER_FIELDS if key in row}
        values.setdefault("tier_number", idx)
        tier = CommissionTier(business=business, **values, **owner)
        if "role_type" not in owner:
            tier.role_type = row.get("role_type")
        tier.full_clean(exclude=["business", "user"])
        tiers.append(tier)
    return tiers


@transaction.atomic
def replace_role_tiers(business, rows) -> list[CommissionTier]:
    """Replace every role-based tier of *business* with *rows*.

    The delete and the inserts share one transaction: a row failing
    validation leaves the previous tier set in place.
    """
    tiers = _build_tiers(business, rows)
    deleted, _ = CommissionTier.objects.filter(business=business, user__isnull=True).delete()
    created = CommissionTier.objects.bulk_create(tiers)
    logger.info(
        "Role tiers replaced for business=%s: %d removed, %d created",
        business.pk, deleted, len(created),
    )
    return created


@transaction.atomic
def replace_employee_tiers(business, user, rows) -> list[CommissionTier]:
    """Replace the employee-specific tiers of *user*; an empty list clears them."""
    tiers = _build_tiers(business, rows, user=user, role_type=None)
    deleted, _ = CommissionTier.objects.filter(business=business, user=user).delete()
    created = CommissionTier.objects.bulk_create(tiers)
    logger.info(
        "Employee tiers replaced for user=%s business=%s: %d removed, %d created",
        user.pk, business.pk, deleted, len(created),
    )
    return created
