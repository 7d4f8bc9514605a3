import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


PERIOD_CHOICES = [
    ("daily", "Journalier"),
    ("weekly", "Hebdomadaire"),
    ("monthly", "Mensuel"),
    ("yearly", "Annuel"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("stores", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="CommissionTier",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="cree le")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="modifie le")),
                ("tier_number", models.PositiveSmallIntegerField(default=1, verbose_name="numero de palier")),
                ("name", models.CharField(max_length=60, verbose_name="nom")),
                (
                    "target_amount",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=14,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                        verbose_name="objectif de ventes",
                    ),
                ),
                (
                    "commission_rate",
                    models.DecimalField(
                        decimal_places=4,
                        help_text="Fraction du chiffre d'affaires (0.08 = 8 %).",
                        max_digits=5,
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0")),
                            django.core.validators.MaxValueValidator(Decimal("1")),
                        ],
                        verbose_name="taux de commission",
                    ),
                ),
                (
                    "target_period",
                    models.CharField(choices=PERIOD_CHOICES, default="monthly", max_length=10, verbose_name="periode"),
                ),
                (
                    "role_type",
                    models.CharField(blank=True, db_index=True, max_length=30, null=True, verbose_name="poste"),
                ),
                ("is_active", models.BooleanField(default=True, verbose_name="actif")),
                (
                    "business",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="commission_tiers",
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
                        related_name="commission_tiers",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="employe",
                    ),
                ),
            ],
            options={
                "verbose_name": "palier de commission",
                "verbose_name_plural": "paliers de commission",
                "ordering": ["target_amount", "tier_number"],
                "constraints": [
                    models.CheckConstraint(
                        condition=(
                            models.Q(role_type__isnull=False, user__isnull=True)
                            | models.Q(role_type__isnull=True, user__isnull=False)
                        ),
                        name="commission_tier_role_xor_user",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(target_amount__gte=0),
                        name="commission_tier_target_non_negative",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(commission_rate__gte=0, commission_rate__lte=1),
                        name="commission_tier_rate_fraction",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="CommissionPayment",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="cree le")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="modifie le")),
                (
                    "period_type",
                    models.CharField(choices=PERIOD_CHOICES, default="monthly", max_length=10, verbose_name="periode"),
                ),
                ("period_label", models.CharField(db_index=True, max_length=20, verbose_name="libelle de periode")),
                ("sale_amount", models.DecimalField(decimal_places=2, max_digits=14, verbose_name="ventes")),
                ("commission_rate", models.DecimalField(decimal_places=4, max_digits=5, verbose_name="taux")),
                ("commission_amount", models.DecimalField(decimal_places=2, max_digits=14, verbose_name="commission")),
                ("tier_name", models.CharField(blank=True, default="", max_length=60, verbose_name="palier atteint")),
                ("is_paid", models.BooleanField(db_index=True, default=False, verbose_name="payee")),
                ("paid_at", models.DateTimeField(blank=True, null=True, verbose_name="payee le")),
                (
                    "business",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="commission_payments",
                        to="stores.business",
                        verbose_name="entreprise",
                    ),
                ),
                (
                    "paid_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="commission_payments_settled",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="payee par",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="commission_payments",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="employe",
                    ),
                ),
            ],
            options={
                "verbose_name": "paiement de commission",
                "verbose_name_plural": "paiements de commission",
                "ordering": ["-period_label", "user__last_name"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=["business", "user", "period_type", "period_label"],
                        name="uniq_commission_payment_per_period",
                    ),
                ],
            },
        ),
    ]
