from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from commissions.models import CommissionTier
from commissions.services import replace_employee_tiers, replace_role_tiers


def rows(*specs):
    return [
        {"name": name, "target_amount": Decimal(target), "commission_rate": Decimal(rate), "role_type": role}
        for name, target, rate, role in specs
    ]


@pytest.mark.django_db
def test_replace_role_tiers_swaps_the_whole_set(business, sales_user):
    CommissionTier.objects.create(
        business=business, role_type="opener", name="Old",
        target_amount=Decimal("0"), commission_rate=Decimal("0.02"),
    )
    own = CommissionTier.objects.create(
        business=business, user=sales_user, name="Perso",
        target_amount=Decimal("0"), commission_rate=Decimal("0.10"),
    )

    created = replace_role_tiers(business, rows(
        ("Bronze", "0", "0.05", "sales_associate"),
        ("Silver", "1000", "0.08", "sales_associate"),
    ))

    assert [t.tier_number for t in created] == [1, 2]
    role_names = set(CommissionTier.objects.filter(user__isnull=True).values_list("name", flat=True))
    assert role_names == {"Bronze", "Silver"}
    assert CommissionTier.objects.filter(pk=own.pk).exists()


@pytest.mark.django_db
def test_replace_role_tiers_keeps_previous_set_on_invalid_row(business):
    CommissionTier.objects.create(
        business=business, role_type="opener", name="Old",
        target_amount=Decimal("0"), commission_rate=Decimal("0.02"),
    )

    with pytest.raises(ValidationError):
        replace_role_tiers(business, rows(
            ("Bronze", "0", "0.05", "sales_associate"),
            ("Broken", "1000", "1.50", "sales_associate"),
        ))

    assert list(CommissionTier.objects.values_list("name", flat=True)) == ["Old"]


@pytest.mark.django_db
def test_replace_role_tiers_rejects_unknown_position(business):
    with pytest.raises(ValidationError):
        replace_role_tiers(business, rows(("X", "0", "0.05", "janitor")))


@pytest.mark.django_db
def test_replace_employee_tiers_only_touches_that_employee(business, sales_user, opener_user):
    CommissionTier.objects.create(
        business=business, user=opener_user, name="Opener perso",
        target_amount=Decimal("0"), commission_rate=Decimal("0.04"),
    )

    created = replace_employee_tiers(business, sales_user, rows(("Perso", "0", "0.10", "opener")))

    assert created[0].user == sales_user
    assert created[0].role_type is None
    assert CommissionTier.objects.filter(user=opener_user).count() == 1


@pytest.mark.django_db
def test_replace_employee_tiers_with_empty_list_clears(business, sales_user):
    CommissionTier.objects.create(
        business=business, user=sales_user, name="Perso",
        target_amount=Decimal("0"), commission_rate=Decimal("0.10"),
    )
    assert replace_employee_tiers(business, sales_user, []) == []
    assert not CommissionTier.objects.filter(user=sales_user).exists()


@pytest.mark.django_db
def test_role_xor_user_is_enforced_by_the_database(business, sales_user):
    with pytest.raises(IntegrityError), transaction.atomic():
        CommissionTier.objects.create(
            business=business, user=sales_user, role_type="opener", name="Both",
            target_amount=Decimal("0"), commission_rate=Decimal("0.05"),
        )


@pytest.mark.django_db
def test_negative_target_is_rejected_by_validation(business):
    tier = CommissionTier(
        business=business, role_type="opener", name="Neg",
        target_amount=Decimal("-1"), commission_rate=Decimal("0.05"),
    )
    with pytest.raises(ValidationError):
        tier.full_clean()
