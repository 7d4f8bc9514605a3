"""Models for the stores app."""
import re
import uuid

from django.conf import settings
from django.db import models, transaction
from django.db.models import F
from django.utils.text import slugify

from core.models import TimeStampedModel


# ---------------------------------------------------------------------------
# Business
# ---------------------------------------------------------------------------

def default_currency():
    return settings.CURRENCY


class Business(TimeStampedModel):
    """Tenant: top-level business entity that owns one or more stores."""

    name = models.CharField("nom", max_length=255)
    code = models.CharField("code", max_length=50, unique=True)
    legal_name = models.CharField("raison sociale", max_length=255, blank=True, default="")
    currency = models.CharField("devise", max_length=10, default=default_currency)
    timezone = models.CharField(
        "fuseau horaire",
        max_length=64,
        blank=True,
        default="",
        help_text="Fuseau utilise pour les objectifs. Vide = TIME_ZONE du projet.",
    )
    email = models.EmailField("email", blank=True, default="")
    phone = models.CharField("telephone", max_length=30, blank=True, default="")
    is_active = models.BooleanField("actif", default=True)

    class Meta:
        ordering = ["name"]
        verbose_name = "Entreprise"
        verbose_name_plural = "Entreprises"

    def __str__(self):
        return f"{self.name} ({self.code})"

    @property
    def tz_name(self) -> str:
        return self.timezone or settings.TIME_ZONE

    @property
    def realtime_channel(self) -> str:
        """Channel name on which row changes of this business are published."""
        return f"business_{self.pk}_realtime"

    def managers(self):
        """Active users holding a manager or admin role in one of the stores."""
        from accounts.models import User

        return (
            User.objects
            .filter(
                store_users__store__business=self,
                is_active=True,
                role__in=[User.Role.ADMIN, User.Role.MANAGER],
            )
            .distinct()
        )


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

class Store(TimeStampedModel):
    """A physical point-of-sale location belonging to a Business."""

    business = models.ForeignKey(
        Business,
        on_delete=models.CASCADE,
        related_name="stores",
        verbose_name="entreprise",
    )
    name = models.CharField("nom", max_length=255)
    code = models.CharField("code", max_length=50, unique=True)
    address = models.TextField("adresse", blank=True, default="")
    phone = models.CharField("telephone", max_length=30, blank=True, default="")
    email = models.EmailField("email", blank=True, default="")
    is_active = models.BooleanField("actif", default=True)

    class Meta:
        ordering = ["name"]
        verbose_name = "Boutique"
        verbose_name_plural = "Boutiques"

    def __str__(self):
        return f"{self.name} ({self.code})"


class StoreUser(models.Model):
    """Links a user to one or more stores."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    store = models.ForeignKey(
        Store,
        on_delete=models.CASCADE,
        related_name="store_users",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="store_users",
    )
    is_default = models.BooleanField(
        default=False,
        help_text="If True, this store is the user's default store.",
    )

    class Meta:
        unique_together = [("store", "user")]
        verbose_name = "Utilisateur boutique"
        verbose_name_plural = "Utilisateurs boutique"

    def __str__(self):
        return f"{self.user} - {self.store}"


class Sequence(models.Model):
    """Auto-incrementing sequence per store, prefix, and year (e.g. purchase orders)."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    store = models.ForeignKey(
        Store,
        on_delete=models.CASCADE,
        related_name="sequences",
    )
    prefix = models.CharField(max_length=20)
    year = models.PositiveIntegerField("annee")
    next_number = models.PositiveIntegerField(default=1)

    class Meta:
        unique_together = [("store", "prefix", "year")]
        verbose_name = "Sequence"
        verbose_name_plural = "Sequences"

    def __str__(self):
        return f"{self.store.code} - {self.prefix}-{self.year}"

    def generate_next(self):
        """Atomically increment and return the next formatted number.

        Returns a string like ``PO-SPA1-2026-000001``.
        """
        with transaction.atomic():
            locked = Sequence.objects.select_for_update().get(pk=self.pk)
            current = locked.next_number
            Sequence.objects.filter(pk=locked.pk).update(next_number=F("next_number") + 1)
            self.next_number = current + 1
        raw_code = slugify((self.store.code or "")).upper()
        store_code = re.sub(r"[^A-Z0-9]", "", raw_code)[:10] or "STORE"
        return f"{self.prefix}-{store_code}-{self.year}-{current:06d}"
