"""Models for the notifications app."""
from django.conf import settings
from django.db import models
from django.utils import timezone

from core.models import TimeStampedModel


class Notification(TimeStampedModel):
    """A notification addressed to a business or to one employee.

    ``user`` is empty for business-wide notifications, which every member
    of the business sees.
    """

    class Type(models.TextChoices):
        INVENTORY_ALERT = "inventory_alert", "Alerte inventaire"
        WORKFLOW = "workflow", "Workflow"
        GOAL_ACHIEVED = "goal_achieved", "Objectif atteint"
        COMMISSION = "commission", "Commission"

    business = models.ForeignKey(
        "stores.Business",
        on_delete=models.CASCADE,
        related_name="notifications",
        verbose_name="entreprise",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="notifications",
        verbose_name="destinataire",
    )
    notification_type = models.CharField(
        "type",
        max_length=30,
        choices=Type.choices,
        db_index=True,
    )
    title = models.CharField("titre", max_length=200)
    message = models.TextField("message")
    data = models.JSONField(
        "donnees supplementaires",
        default=dict,
        blank=True,
        help_text="Donnees JSON supplementaires (ex: inventory_item_id, goal_id).",
    )

    is_read = models.BooleanField("lu", default=False)
    read_at = models.DateTimeField("lu le", null=True, blank=True)

    class Meta:
        verbose_name = "Notification"
        verbose_name_plural = "Notifications"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["business", "is_read"], name="notif_business_read_idx"),
        ]

    def __str__(self):
        return self.title

    def mark_as_read(self):
        if not self.is_read:
            self.is_read = True
            self.read_at = timezone.now()
            self.save(update_fields=["is_read", "read_at", "updated_at"])
