import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

import stores.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Business",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="cree le")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="modifie le")),
                ("name", models.CharField(max_length=255, verbose_name="nom")),
                ("code", models.CharField(max_length=50, unique=True, verbose_name="code")),
                ("legal_name", models.CharField(blank=True, default="", max_length=255, verbose_name="raison sociale")),
                ("currency", models.CharField(default=stores.models.default_currency, max_length=10, verbose_name="devise")),
                (
                    "timezone",
                    models.CharField(
                        blank=True,
                        default="",
                        help_text="Fuseau utilise pour les objectifs. Vide = TIME_ZONE du projet.",
                        max_length=64,
                        verbose_name="fuseau horaire",
                    ),
                ),
                ("email", models.EmailField(blank=True, default="", max_length=254, verbose_name="email")),
                ("phone", models.CharField(blank=True, default="", max_length=30, verbose_name="telephone")),
                ("is_active", models.BooleanField(default=True, verbose_name="actif")),
            ],
            options={
                "verbose_name": "Entreprise",
                "verbose_name_plural": "Entreprises",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Store",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="cree le")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="modifie le")),
                ("name", models.CharField(max_length=255, verbose_name="nom")),
                ("code", models.CharField(max_length=50, unique=True, verbose_name="code")),
                ("address", models.TextField(blank=True, default="", verbose_name="adresse")),
                ("phone", models.CharField(blank=True, default="", max_length=30, verbose_name="telephone")),
                ("email", models.EmailField(blank=True, default="", max_length=254, verbose_name="email")),
                ("is_active", models.BooleanField(default=True, verbose_name="actif")),
                (
                    "business",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="stores",
                        to="stores.business",
                        verbose_name="entreprise",
                    ),
                ),
            ],
            options={
                "verbose_name": "Boutique",
                "verbose_name_plural": "Boutiques",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Sequence",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("prefix", models.CharField(max_length=20)),
                ("year", models.PositiveIntegerField(verbose_name="annee")),
                ("next_number", models.PositiveIntegerField(default=1)),
                (
                    "store",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="sequences",
                        to="stores.store",
                    ),
                ),
            ],
            options={
                "verbose_name": "Sequence",
                "verbose_name_plural": "Sequences",
                "unique_together": {("store", "prefix", "year")},
            },
        ),
        migrations.CreateModel(
            name="StoreUser",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "is_default",
                    models.BooleanField(default=False, help_text="If True, this store is the user's default store."),
                ),
                (
                    "store",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="store_users",
                        to="stores.store",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="store_users",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Utilisateur boutique",
                "verbose_name_plural": "Utilisateurs boutique",
                "unique_together": {("store", "user")},
            },
        ),
    ]
