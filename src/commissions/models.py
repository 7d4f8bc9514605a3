"""Models for commission tiers and commission payments."""
from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Q
from django.utils import timezone

from core.models import TimeStampedModel

from .periods import MONTHLY, PERIOD_CHOICES


class CommissionTier(TimeStampedModel):
    """A commission tier (palier) for a position or for one employee.

    Role-based tiers set ``role_type`` and leave ``user`` empty;
    employee-specific tiers do the opposite. ``commission_rate`` is a
    fraction (0.08 for 8 %).
    """

    business = models.ForeignKey(
        "stores.Business",
        on_delete=models.CASCADE,
        related_name="commission_tiers",
        verbose_name="entreprise",
    )
    tier_number = models.PositiveSmallIntegerField("numero de palier", default=1)
    name = models.CharField("nom", max_length=60)
    target_amount = models.DecimalField(
        "objectif de ventes",
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    commission_rate = models.DecimalField(
        "taux de commission",
        max_digits=5,
        decimal_places=4,
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("1"))],
        help_text="Fraction du chiffre d'affaires (0.08 = 8 %).",
    )
    target_period = models.CharField(
        "periode",
        max_length=10,
        choices=PERIOD_CHOICES,
        default=MONTHLY,
    )
    role_type = models.CharField(
        "poste",
        max_length=30,
        null=True,
        blank=True,
        db_index=True,
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="commission_tiers",
        verbose_name="employe",
    )
    is_active = models.BooleanField("actif", default=True)

    class Meta:
        verbose_name = "palier de commission"
        verbose_name_plural = "paliers de commission"
        ordering = ["target_amount", "tier_number"]
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(role_type__isnull=False, user__isnull=True)
                    | Q(role_type__isnull=True, user__isnull=False)
                ),
                name="commission_tier_role_xor_user",
            ),
            models.CheckConstraint(
                condition=Q(target_amount__gte=0),
                name="commission_tier_target_non_negative",
            ),
            models.CheckConstraint(
                condition=Q(commission_rate__gte=0, commission_rate__lte=1),
                name="commission_tier_rate_fraction",
            ),
        ]

    def __str__(self) -> str:
        owner = self.role_type or self.user
        return f"{self.name} ({owner}) >= {self.target_amount}"

    def clean(self) -> None:
        from accounts.models import User

        if bool(self.role_type) == bool(self.user_id):
            raise ValidationError(
                "Un palier doit viser soit un poste, soit un employe (exactement un des deux)."
            )
        if self.role_type and self.role_type not in User.Position.values:
            raise ValidationError({"role_type": f"Poste inconnu: {self.role_type}"})

    @property
    def rate_percent(self) -> Decimal:
        return self.commission_rate * 100


class CommissionPayment(TimeStampedModel):
    """Commission owed to one employee for one period."""

    business = models.ForeignKey(
        "stores.Business",
        on_delete=models.CASCADE,
        related_name="commission_payments",
        verbose_name="entreprise",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="commission_payments",
        verbose_name="employe",
    )
    period_type = models.CharField("periode", max_length=10, choices=PERIOD_CHOICES, default=MONTHLY)
    period_label = models.CharField("libelle de periode", max_length=20, db_index=True)
    sale_amount = models.DecimalField("ventes", max_digits=14, decimal_places=2)
    commission_rate = models.DecimalField("taux", max_digits=5, decimal_places=4)
    commission_amount = models.DecimalField("commission", max_digits=14, decimal_places=2)
    tier_name = models.CharField("palier atteint", max_length=60, blank=True, default="")
    is_paid = models.BooleanField("payee", default=False, db_index=True)
    paid_at = models.DateTimeField("payee le", null=True, blank=True)
    paid_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="commission_payments_settled",
        verbose_name="payee par",
    )

    class Meta:
        verbose_name = "paiement de commission"
        verbose_name_plural = "paiements de commission"
        ordering = ["-period_label", "user__last_name"]
        constraints = [
            models.UniqueConstraint(
                fields=["business", "user", "period_type", "period_label"],
                name="uniq_commission_payment_per_period",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.user} {self.period_label}: {self.commission_amount}"

    def mark_paid(self, actor) -> None:
        if self.is_paid:
            raise ValueError("Cette commission est deja payee.")
        self.is_paid = True
        self.paid_at = timezone.now()
        self.paid_by = actor
        self.save(update_fields=["is_paid", "paid_at", "paid_by", "updated_at"])
