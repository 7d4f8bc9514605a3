import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("stores", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="SalesGoal",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="cree le")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="modifie le")),
                (
                    "goal_type",
                    models.CharField(
                        choices=[
                            ("daily", "Journalier"),
                            ("weekly", "Hebdomadaire"),
                            ("monthly", "Mensuel"),
                            ("custom", "Personnalise"),
                        ],
                        default="monthly",
                        max_length=10,
                        verbose_name="type d'objectif",
                    ),
                ),
                (
                    "target_amount",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        max_digits=14,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                        verbose_name="objectif de ventes",
                    ),
                ),
                (
                    "target_count",
                    models.PositiveIntegerField(blank=True, null=True, verbose_name="objectif de transactions"),
                ),
                (
                    "current_count",
                    models.PositiveIntegerField(
                        blank=True,
                        help_text="Vide = nombre de commandes terminees sur la periode.",
                        null=True,
                        verbose_name="compteur manuel",
                    ),
                ),
                ("start_date", models.DateField(verbose_name="debut")),
                ("end_date", models.DateField(verbose_name="fin")),
                ("position_type", models.CharField(blank=True, default="", max_length=30, verbose_name="poste")),
                ("is_active", models.BooleanField(db_index=True, default=True, verbose_name="actif")),
                ("achieved_at", models.DateTimeField(blank=True, null=True, verbose_name="atteint le")),
                (
                    "business",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="sales_goals",
                        to="stores.business",
                        verbose_name="entreprise",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="sales_goals",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="employe",
                    ),
                ),
            ],
            options={
                "verbose_name": "objectif de vente",
                "verbose_name_plural": "objectifs de vente",
                "ordering": ["-start_date", "-created_at"],
            },
        ),
    ]
