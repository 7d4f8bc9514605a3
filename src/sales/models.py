"""Models for the sales app."""
from decimal import Decimal

from django.conf import settings
from django.db import models

from core.models import TimeStampedModel


class Order(TimeStampedModel):
    """A sales transaction rung up by an employee.

    Only ``COMPLETED`` orders count toward commissions and goals.
    ``sale_type`` tells openers' first sales apart from upsells.
    """

    class Status(models.TextChoices):
        PENDING = "pending", "En attente"
        COMPLETED = "completed", "Terminee"
        CANCELLED = "cancelled", "Annulee"
        REFUNDED = "refunded", "Remboursee"

    class SaleType(models.TextChoices):
        REGULAR = "regular", "Vente"
        OPEN = "open", "Ouverture"
        UPSELL = "upsell", "Vente additionnelle"

    store = models.ForeignKey(
        "stores.Store",
        on_delete=models.PROTECT,
        related_name="orders",
        verbose_name="boutique",
    )
    seller = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="orders",
        verbose_name="vendeur",
    )
    order_number = models.CharField(
        "numero de commande",
        max_length=50,
        blank=True,
        default="",
        db_index=True,
    )
    status = models.CharField(
        "statut",
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
    )
    sale_type = models.CharField(
        "type de vente",
        max_length=20,
        choices=SaleType.choices,
        default=SaleType.REGULAR,
        db_index=True,
    )
    total = models.DecimalField(
        "total",
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    completed_at = models.DateTimeField("terminee le", null=True, blank=True, db_index=True)
    notes = models.TextField("notes", blank=True, default="")

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "commande"
        verbose_name_plural = "commandes"
        indexes = [
            models.Index(fields=["seller", "status", "completed_at"], name="order_seller_status_idx"),
        ]

    def __str__(self):
        return self.order_number or f"Commande {self.pk}"

    @property
    def business_id(self):
        return self.store.business_id


class OrderItem(TimeStampedModel):
    """A single line item on an order."""

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="items",
        verbose_name="commande",
    )
    product = models.ForeignKey(
        "catalog.Product",
        on_delete=models.PROTECT,
        related_name="order_items",
        verbose_name="produit",
    )
    unit_price = models.DecimalField("prix unitaire", max_digits=12, decimal_places=2)
    quantity = models.PositiveIntegerField("quantite", default=1)
    line_total = models.DecimalField(
        "total ligne",
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    class Meta:
        verbose_name = "ligne de commande"
        verbose_name_plural = "lignes de commande"
        ordering = ["created_at"]

    def __str__(self):
        return f"{self.product} x{self.quantity}"

    def save(self, *args, **kwargs):
        self.line_total = self.unit_price * self.quantity
        super().save(*args, **kwargs)
