"""Models for sales goals."""
from __future__ import annotations

import calendar
from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from core.models import TimeStampedModel


def derived_end_date(goal_type: str, start_date):
    """End date implied by a periodic goal type, ``None`` for custom goals."""
    if goal_type == SalesGoal.GoalType.DAILY:
        return start_date
    if goal_type == SalesGoal.GoalType.WEEKLY:
        return start_date + timedelta(days=6)
    if goal_type == SalesGoal.GoalType.MONTHLY:
        year = start_date.year + (start_date.month // 12)
        month = start_date.month % 12 + 1
        day = min(start_date.day, calendar.monthrange(year, month)[1])
        return start_date.replace(year=year, month=month, day=day) - timedelta(days=1)
    return None


class SalesGoal(TimeStampedModel):
    """Sales or count target for one employee, or for the whole business.

    ``user`` empty means a team goal counted on every employee's orders.
    """

    class GoalType(models.TextChoices):
        DAILY = "daily", "Journalier"
        WEEKLY = "weekly", "Hebdomadaire"
        MONTHLY = "monthly", "Mensuel"
        CUSTOM = "custom", "Personnalise"

    business = models.ForeignKey(
        "stores.Business",
        on_delete=models.CASCADE,
        related_name="sales_goals",
        verbose_name="entreprise",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="sales_goals",
        verbose_name="employe",
    )
    goal_type = models.CharField(
        "type d'objectif",
        max_length=10,
        choices=GoalType.choices,
        default=GoalType.MONTHLY,
    )
    target_amount = models.DecimalField(
        "objectif de ventes",
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0"))],
    )
    target_count = models.PositiveIntegerField("objectif de transactions", null=True, blank=True)
    current_count = models.PositiveIntegerField(
        "compteur manuel",
        null=True,
        blank=True,
        help_text="Vide = nombre de commandes terminees sur la periode.",
    )
    start_date = models.DateField("debut")
    end_date = models.DateField("fin")
    position_type = models.CharField("poste", max_length=30, blank=True, default="")
    is_active = models.BooleanField("actif", default=True, db_index=True)
    achieved_at = models.DateTimeField("atteint le", null=True, blank=True)

    class Meta:
        verbose_name = "objectif de vente"
        verbose_name_plural = "objectifs de vente"
        ordering = ["-start_date", "-created_at"]

    def __str__(self) -> str:
        owner = self.user or "equipe"
        return f"{self.get_goal_type_display()} {owner} {self.start_date} - {self.end_date}"

    @property
    def is_count_based(self) -> bool:
        return bool(self.target_count)

    def save(self, *args, **kwargs):
        if self.start_date and self.goal_type != self.GoalType.CUSTOM:
            self.end_date = derived_end_date(self.goal_type, self.start_date)
        super().save(*args, **kwargs)

    def clean(self) -> None:
        if not self.target_count and not (self.target_amount and self.target_amount > 0):
            raise ValidationError("Un objectif doit avoir un montant ou un nombre cible positif.")
        if self.goal_type == self.GoalType.CUSTOM:
            if self.start_date and self.end_date and self.end_date < self.start_date:
                raise ValidationError({"end_date": "La date de fin doit etre posterieure a la date de debut."})
