import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("catalog", "0001_initial"),
        ("stores", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="InventoryItem",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="cree le")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="modifie le")),
                ("quantity_on_hand", models.IntegerField(default=0, verbose_name="quantite en stock")),
                (
                    "low_stock_threshold",
                    models.PositiveIntegerField(
                        default=5,
                        help_text="Stock faible lorsque la quantite est inferieure ou egale a ce seuil.",
                        verbose_name="seuil de stock faible",
                    ),
                ),
                (
                    "max_stock",
                    models.PositiveIntegerField(
                        blank=True,
                        help_text="Au-dela, l'article est considere en surstock.",
                        null=True,
                        verbose_name="stock maximum",
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="inventory_items",
                        to="catalog.product",
                        verbose_name="produit",
                    ),
                ),
                (
                    "store",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="inventory_items",
                        to="stores.store",
                        verbose_name="boutique",
                    ),
                ),
            ],
            options={
                "verbose_name": "Article d'inventaire",
                "verbose_name_plural": "Articles d'inventaire",
                "ordering": ["product__name"],
                "unique_together": {("store", "product")},
            },
        ),
        migrations.CreateModel(
            name="InventoryMovement",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="cree le")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="modifie le")),
                (
                    "movement_type",
                    models.CharField(
                        choices=[
                            ("IN", "Entree"),
                            ("OUT", "Sortie"),
                            ("ADJUST", "Ajustement"),
                            ("DAMAGE", "Dommage"),
                            ("SALE", "Vente"),
                            ("PURCHASE", "Achat"),
                        ],
                        max_length=20,
                        verbose_name="type de mouvement",
                    ),
                ),
                (
                    "quantity",
                    models.IntegerField(
                        help_text="Positif pour les entrees, negatif pour les sorties.",
                        verbose_name="quantite",
                    ),
                ),
                ("quantity_after", models.IntegerField(verbose_name="quantite apres mouvement")),
                (
                    "reference",
                    models.CharField(
                        blank=True,
                        default="",
                        help_text="Numero de commande, bon de commande, etc.",
                        max_length=255,
                        verbose_name="reference",
                    ),
                ),
                ("reason", models.TextField(blank=True, default="", verbose_name="motif")),
                (
                    "actor",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="inventory_movements",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="utilisateur",
                    ),
                ),
                (
                    "item",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="movements",
                        to="inventory.inventoryitem",
                        verbose_name="article",
                    ),
                ),
            ],
            options={
                "verbose_name": "Mouvement de stock",
                "verbose_name_plural": "Mouvements de stock",
                "ordering": ["-created_at"],
            },
        ),
    ]
