"""Models for the inventory app."""
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

from core.models import TimeStampedModel

from .levels import STOCK_STATUS_LABELS, classify_stock, is_low_stock, is_out_of_stock


class InventoryItem(TimeStampedModel):
    """Current stock level of a product in a specific store."""

    store = models.ForeignKey(
        "stores.Store",
        on_delete=models.PROTECT,
        related_name="inventory_items",
        verbose_name="boutique",
    )
    product = models.ForeignKey(
        "catalog.Product",
        on_delete=models.PROTECT,
        related_name="inventory_items",
        verbose_name="produit",
    )
    quantity_on_hand = models.IntegerField("quantite en stock", default=0)
    low_stock_threshold = models.PositiveIntegerField(
        "seuil de stock faible",
        default=5,
        help_text="Stock faible lorsque la quantite est inferieure ou egale a ce seuil.",
    )
    max_stock = models.PositiveIntegerField(
        "stock maximum",
        null=True,
        blank=True,
        help_text="Au-dela, l'article est considere en surstock.",
    )

    class Meta:
        ordering = ["product__name"]
        unique_together = [["store", "product"]]
        verbose_name = "Article d'inventaire"
        verbose_name_plural = "Articles d'inventaire"

    def __str__(self):
        return f"{self.product} @ {self.store} ({self.quantity_on_hand} en stock)"

    def clean(self):
        if self.max_stock is not None and self.max_stock < self.low_stock_threshold:
            raise ValidationError(
                {"max_stock": "Le stock maximum doit etre superieur ou egal au seuil."}
            )

    @property
    def business_id(self):
        return self.store.business_id

    @property
    def is_low_stock(self):
        return is_low_stock(self.quantity_on_hand, self.low_stock_threshold)

    @property
    def is_out_of_stock(self):
        return is_out_of_stock(self.quantity_on_hand)

    @property
    def stock_status(self):
        return classify_stock(self.quantity_on_hand, self.low_stock_threshold, self.max_stock)

    @property
    def stock_status_label(self):
        return STOCK_STATUS_LABELS[self.stock_status]


class InventoryMovement(TimeStampedModel):
    """Records every stock movement for full traceability."""

    class MovementType(models.TextChoices):
        IN = "IN", "Entree"
        OUT = "OUT", "Sortie"
        ADJUST = "ADJUST", "Ajustement"
        DAMAGE = "DAMAGE", "Dommage"
        SALE = "SALE", "Vente"
        PURCHASE = "PURCHASE", "Achat"

    item = models.ForeignKey(
        InventoryItem,
        on_delete=models.CASCADE,
        related_name="movements",
        verbose_name="article",
    )
    movement_type = models.CharField(
        "type de mouvement",
        max_length=20,
        choices=MovementType.choices,
    )
    quantity = models.IntegerField(
        "quantite",
        help_text="Positif pour les entrees, negatif pour les sorties.",
    )
    quantity_after = models.IntegerField("quantite apres mouvement")
    reference = models.CharField(
        "reference",
        max_length=255,
        blank=True,
        default="",
        help_text="Numero de commande, bon de commande, etc.",
    )
    reason = models.TextField("motif", blank=True, default="")
    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="inventory_movements",
        verbose_name="utilisateur",
    )

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "Mouvement de stock"
        verbose_name_plural = "Mouvements de stock"

    def __str__(self):
        return f"{self.get_movement_type_display()} {self.item} ({self.quantity:+d})"
