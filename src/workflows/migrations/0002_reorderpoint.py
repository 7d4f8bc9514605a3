import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("catalog", "0002_product_supplier"),
        ("purchases", "0001_initial"),
        ("stores", "0001_initial"),
        ("workflows", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="ReorderPoint",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="cree le")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="modifie le")),
                ("reorder_point", models.PositiveIntegerField(default=10, verbose_name="point de commande")),
                ("reorder_quantity", models.PositiveIntegerField(default=50, verbose_name="quantite a commander")),
                (
                    "auto_generate_po",
                    models.BooleanField(default=True, verbose_name="bon de commande automatique"),
                ),
                ("is_active", models.BooleanField(default=True, verbose_name="actif")),
                (
                    "last_triggered",
                    models.DateTimeField(blank=True, null=True, verbose_name="dernier declenchement"),
                ),
                (
                    "business",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reorder_points",
                        to="stores.business",
                        verbose_name="entreprise",
                    ),
                ),
                (
                    "preferred_supplier",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="reorder_points",
                        to="purchases.supplier",
                        verbose_name="fournisseur prefere",
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reorder_points",
                        to="catalog.product",
                        verbose_name="produit",
                    ),
                ),
                (
                    "store",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reorder_points",
                        to="stores.store",
                        verbose_name="boutique",
                    ),
                ),
            ],
            options={
                "verbose_name": "point de commande",
                "verbose_name_plural": "points de commande",
                "ordering": ["product__name"],
                "unique_together": {("store", "product")},
            },
        ),
    ]
