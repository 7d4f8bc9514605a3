import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("inventory", "0001_initial"),
        ("stores", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="WorkflowRule",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="cree le")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="modifie le")),
                ("name", models.CharField(max_length=120, verbose_name="nom")),
                (
                    "workflow_type",
                    models.CharField(
                        choices=[
                            ("auto_reorder", "Reapprovisionnement automatique"),
                            ("stock_alert", "Alerte de stock"),
                            ("emergency_restock", "Reapprovisionnement d'urgence"),
                            ("supplier_rotation", "Rotation fournisseur"),
                        ],
                        db_index=True,
                        max_length=30,
                        verbose_name="type de workflow",
                    ),
                ),
                (
                    "trigger_conditions",
                    models.JSONField(
                        blank=True,
                        default=dict,
                        help_text='Ex: {"stock_threshold": 10, "product_categories": ["all"]}.',
                        verbose_name="conditions de declenchement",
                    ),
                ),
                (
                    "actions",
                    models.JSONField(
                        blank=True,
                        default=list,
                        help_text="Liste ordonnee de noms d'actions.",
                        verbose_name="actions",
                    ),
                ),
                ("is_active", models.BooleanField(default=True, verbose_name="actif")),
                ("execution_count", models.PositiveIntegerField(default=0, verbose_name="nombre d'executions")),
                ("last_triggered", models.DateTimeField(blank=True, null=True, verbose_name="dernier declenchement")),
                (
                    "business",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="workflow_rules",
                        to="stores.business",
                        verbose_name="entreprise",
                    ),
                ),
            ],
            options={
                "verbose_name": "regle de workflow",
                "verbose_name_plural": "regles de workflow",
                "ordering": ["workflow_type", "name"],
                "unique_together": {("business", "name")},
            },
        ),
        migrations.CreateModel(
            name="WorkflowExecution",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="cree le")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="modifie le")),
                (
                    "trigger_data",
                    models.JSONField(blank=True, default=dict, verbose_name="donnees de declenchement"),
                ),
                ("manual_trigger", models.BooleanField(default=False, verbose_name="declenchement manuel")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "En attente"),
                            ("processing", "En cours"),
                            ("completed", "Terminee"),
                            ("failed", "Echouee"),
                        ],
                        db_index=True,
                        default="pending",
                        max_length=20,
                        verbose_name="statut",
                    ),
                ),
                (
                    "action_results",
                    models.JSONField(blank=True, default=list, verbose_name="resultats des actions"),
                ),
                ("error", models.TextField(blank=True, default="", verbose_name="erreur")),
                ("started_at", models.DateTimeField(blank=True, null=True, verbose_name="demarree le")),
                ("completed_at", models.DateTimeField(blank=True, null=True, verbose_name="terminee le")),
                (
                    "resolved_at",
                    models.DateTimeField(
                        blank=True,
                        help_text="Renseigne quand le stock repasse au-dessus du seuil.",
                        null=True,
                        verbose_name="resolue le",
                    ),
                ),
                (
                    "inventory_item",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="workflow_executions",
                        to="inventory.inventoryitem",
                        verbose_name="article",
                    ),
                ),
                (
                    "rule",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="executions",
                        to="workflows.workflowrule",
                        verbose_name="regle",
                    ),
                ),
            ],
            options={
                "verbose_name": "execution de workflow",
                "verbose_name_plural": "executions de workflow",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["rule", "inventory_item", "resolved_at"], name="wf_exec_open_idx"),
                ],
            },
        ),
    ]
