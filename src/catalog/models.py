"""Models for the catalog app (products, categories)."""
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils.text import slugify

from core.models import TimeStampedModel


class Category(TimeStampedModel):
    """Product category (skincare, body care, accessories...)."""

    business = models.ForeignKey(
        "stores.Business",
        on_delete=models.CASCADE,
        related_name="categories",
        verbose_name="entreprise",
    )
    name = models.CharField("nom", max_length=255)
    slug = models.SlugField("slug", max_length=255)
    is_active = models.BooleanField("actif", default=True)

    class Meta:
        verbose_name = "categorie"
        verbose_name_plural = "categories"
        ordering = ["name"]
        unique_together = [["business", "slug"]]

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.name) or "cat"
        super().save(*args, **kwargs)


class Product(TimeStampedModel):
    """Retail product sold in the spa stores."""

    business = models.ForeignKey(
        "stores.Business",
        on_delete=models.CASCADE,
        related_name="products",
        verbose_name="entreprise",
    )
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
        verbose_name="categorie",
    )
    supplier = models.ForeignKey(
        "purchases.Supplier",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
        verbose_name="fournisseur",
    )
    name = models.CharField("nom", max_length=255)
    sku = models.CharField(
        "SKU",
        max_length=50,
        help_text="Reference interne unique du produit.",
    )
    description = models.TextField("description", blank=True, default="")
    cost_price = models.DecimalField(
        "prix d'achat",
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0"))],
    )
    selling_price = models.DecimalField(
        "prix de vente",
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    reorder_quantity = models.PositiveIntegerField(
        "quantite de reapprovisionnement",
        null=True,
        blank=True,
        help_text="Vide = WORKFLOW_DEFAULT_REORDER_QTY.",
    )
    is_active = models.BooleanField("actif", default=True)

    class Meta:
        verbose_name = "produit"
        verbose_name_plural = "produits"
        ordering = ["name"]
        unique_together = [["business", "sku"]]

    def __str__(self):
        return f"{self.name} ({self.sku})"
