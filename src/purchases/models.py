"""Suppliers and the restock orders drafted for them."""
from decimal import Decimal

from django.conf import settings
from django.db import models

from core.models import TimeStampedModel


class Supplier(TimeStampedModel):
    """Vendor of retail products for one business."""

    business = models.ForeignKey(
        "stores.Business",
        on_delete=models.PROTECT,
        related_name="suppliers",
        verbose_name="entreprise",
    )
    name = models.CharField("nom", max_length=255)
    contact_name = models.CharField("contact", max_length=255, blank=True, default="")
    phone = models.CharField("telephone", max_length=30, blank=True, default="")
    email = models.EmailField("e-mail", blank=True, default="")
    lead_time_days = models.PositiveSmallIntegerField(
        "delai de livraison (jours)",
        default=7,
    )
    is_active = models.BooleanField("actif", default=True)

    class Meta:
        ordering = ["name"]
        unique_together = [["business", "name"]]
        verbose_name = "Fournisseur"
        verbose_name_plural = "Fournisseurs"

    def __str__(self):
        return self.name


class PurchaseOrder(TimeStampedModel):
    """Restock order for one store, either entered by staff or drafted by a workflow."""

    class Status(models.TextChoices):
        DRAFT = "DRAFT", "Brouillon"
        SUBMITTED = "SUBMITTED", "Envoye"
        RECEIVED = "RECEIVED", "Receptionne"
        CANCELLED = "CANCELLED", "Annule"

    class Source(models.TextChoices):
        MANUAL = "manual", "Saisie manuelle"
        WORKFLOW = "workflow", "Workflow de reassort"

    store = models.ForeignKey(
        "stores.Store",
        on_delete=models.PROTECT,
        related_name="purchase_orders",
        verbose_name="boutique",
    )
    supplier = models.ForeignKey(
        Supplier,
        on_delete=models.PROTECT,
        related_name="purchase_orders",
        verbose_name="fournisseur",
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="purchase_orders_created",
        verbose_name="cree par",
    )
    po_number = models.CharField("numero", max_length=50, unique=True)
    status = models.CharField(
        "statut", max_length=20, choices=Status.choices, default=Status.DRAFT, db_index=True,
    )
    source = models.CharField(
        "origine", max_length=20, choices=Source.choices, default=Source.MANUAL,
    )
    expected_date = models.DateField("livraison prevue", null=True, blank=True)
    subtotal = models.DecimalField("sous-total", max_digits=14, decimal_places=2, default=Decimal("0.00"))
    notes = models.TextField("notes", blank=True, default="")

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "Bon de commande"
        verbose_name_plural = "Bons de commande"

    def __str__(self):
        return f"{self.po_number} ({self.supplier})"

    @property
    def is_open(self):
        return self.status in (self.Status.DRAFT, self.Status.SUBMITTED)


class PurchaseOrderLine(TimeStampedModel):
    purchase_order = models.ForeignKey(
        PurchaseOrder,
        on_delete=models.CASCADE,
        related_name="lines",
        verbose_name="bon de commande",
    )
    product = models.ForeignKey(
        "catalog.Product",
        on_delete=models.PROTECT,
        related_name="purchase_order_lines",
        verbose_name="produit",
    )
    quantity_ordered = models.PositiveIntegerField("quantite commandee")
    unit_cost = models.DecimalField("cout unitaire", max_digits=12, decimal_places=2)
    line_total = models.DecimalField("total ligne", max_digits=14, decimal_places=2, default=Decimal("0.00"))

    class Meta:
        ordering = ["product__name"]
        unique_together = [["purchase_order", "product"]]
        verbose_name = "Ligne de commande"
        verbose_name_plural = "Lignes de commande"

    def __str__(self):
        return f"{self.product} x {self.quantity_ordered}"

    def save(self, *args, **kwargs):
        self.line_total = self.unit_cost * self.quantity_ordered
        super().save(*args, **kwargs)
