"""Models for inventory workflow rules and their executions."""
from __future__ import annotations

from django.db import models
from django.utils import timezone

from core.models import TimeStampedModel

from .exceptions import InvalidTransition


class WorkflowRule(TimeStampedModel):
    """Automated response of a business to an inventory condition."""

    class WorkflowType(models.TextChoices):
        AUTO_REORDER = "auto_reorder", "Reapprovisionnement automatique"
        STOCK_ALERT = "stock_alert", "Alerte de stock"
        EMERGENCY_RESTOCK = "emergency_restock", "Reapprovisionnement d'urgence"
        SUPPLIER_ROTATION = "supplier_rotation", "Rotation fournisseur"

    business = models.ForeignKey(
        "stores.Business",
        on_delete=models.CASCADE,
        related_name="workflow_rules",
        verbose_name="entreprise",
    )
    name = models.CharField("nom", max_length=120)
    workflow_type = models.CharField(
        "type de workflow",
        max_length=30,
        choices=WorkflowType.choices,
        db_index=True,
    )
    trigger_conditions = models.JSONField(
        "conditions de declenchement",
        default=dict,
        blank=True,
        help_text='Ex: {"stock_threshold": 10, "product_categories": ["all"]}.',
    )
    actions = models.JSONField(
        "actions",
        default=list,
        blank=True,
        help_text="Liste ordonnee de noms d'actions.",
    )
    is_active = models.BooleanField("actif", default=True)
    execution_count = models.PositiveIntegerField("nombre d'executions", default=0)
    last_triggered = models.DateTimeField("dernier declenchement", null=True, blank=True)

    class Meta:
        verbose_name = "regle de workflow"
        verbose_name_plural = "regles de workflow"
        ordering = ["workflow_type", "name"]
        unique_together = [["business", "name"]]

    def __str__(self) -> str:
        return f"{self.name} ({self.workflow_type})"


class WorkflowExecution(TimeStampedModel):
    """One run of a rule for one inventory item.

    Status moves along ``pending -> processing -> completed | failed``
    only; :meth:`transition_to` refuses anything else.
    """

    class Status(models.TextChoices):
        PENDING = "pending", "En attente"
        PROCESSING = "processing", "En cours"
        COMPLETED = "completed", "Terminee"
        FAILED = "failed", "Echouee"

    TRANSITIONS = {
        Status.PENDING: {Status.PROCESSING},
        Status.PROCESSING: {Status.COMPLETED, Status.FAILED},
        Status.COMPLETED: set(),
        Status.FAILED: set(),
    }

    rule = models.ForeignKey(
        WorkflowRule,
        on_delete=models.CASCADE,
        related_name="executions",
        verbose_name="regle",
    )
    inventory_item = models.ForeignKey(
        "inventory.InventoryItem",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="workflow_executions",
        verbose_name="article",
    )
    trigger_data = models.JSONField("donnees de declenchement", default=dict, blank=True)
    manual_trigger = models.BooleanField("declenchement manuel", default=False)
    status = models.CharField(
        "statut",
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
    )
    action_results = models.JSONField("resultats des actions", default=list, blank=True)
    error = models.TextField("erreur", blank=True, default="")
    started_at = models.DateTimeField("demarree le", null=True, blank=True)
    completed_at = models.DateTimeField("terminee le", null=True, blank=True)
    resolved_at = models.DateTimeField(
        "resolue le",
        null=True,
        blank=True,
        help_text="Renseigne quand le stock repasse au-dessus du seuil.",
    )

    class Meta:
        verbose_name = "execution de workflow"
        verbose_name_plural = "executions de workflow"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["rule", "inventory_item", "resolved_at"], name="wf_exec_open_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.rule.workflow_type} [{self.status}] {self.inventory_item_id}"

    @property
    def is_finished(self) -> bool:
        return self.status in (self.Status.COMPLETED, self.Status.FAILED)

    def can_transition_to(self, status) -> bool:
        return status in self.TRANSITIONS.get(self.status, set())

    def transition_to(self, status, *, error: str = "") -> None:
        """Move to *status* and persist, stamping the matching timestamps."""
        if not self.can_transition_to(status):
            raise InvalidTransition(self.status, status)
        now = timezone.now()
        self.status = status
        fields = ["status", "updated_at"]
        if status == self.Status.PROCESSING:
            self.started_at = now
            fields.append("started_at")
        else:
            self.completed_at = now
            fields += ["completed_at", "action_results"]
        if error:
            self.error = error
            fields.append("error")
        self.save(update_fields=fields)


class ReorderPoint(TimeStampedModel):
    """Reorder point of one product in one store.

    When an update brings the stock from above ``reorder_point`` to at or
    below it, a purchase order for ``reorder_quantity`` is drafted to the
    preferred supplier (or the product's), or the managers are asked to
    review it when ``auto_generate_po`` is off.
    """

    business = models.ForeignKey(
        "stores.Business",
        on_delete=models.CASCADE,
        related_name="reorder_points",
        verbose_name="entreprise",
    )
    store = models.ForeignKey(
        "stores.Store",
        on_delete=models.CASCADE,
        related_name="reorder_points",
        verbose_name="boutique",
    )
    product = models.ForeignKey(
        "catalog.Product",
        on_delete=models.CASCADE,
        related_name="reorder_points",
        verbose_name="produit",
    )
    reorder_point = models.PositiveIntegerField("point de commande", default=10)
    reorder_quantity = models.PositiveIntegerField("quantite a commander", default=50)
    preferred_supplier = models.ForeignKey(
        "purchases.Supplier",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="reorder_points",
        verbose_name="fournisseur prefere",
    )
    auto_generate_po = models.BooleanField("bon de commande automatique", default=True)
    is_active = models.BooleanField("actif", default=True)
    last_triggered = models.DateTimeField("dernier declenchement", null=True, blank=True)

    class Meta:
        verbose_name = "point de commande"
        verbose_name_plural = "points de commande"
        ordering = ["product__name"]
        unique_together = [["store", "product"]]

    def __str__(self) -> str:
        return f"{self.product} @ {self.store} <= {self.reorder_point}"

    @classmethod
    def for_item(cls, item):
        """Active reorder point of *item*, or ``None``."""
        return (
            cls.objects
            .filter(store_id=item.store_id, product_id=item.product_id, is_active=True)
            .select_related("preferred_supplier", "product__supplier")
            .first()
        )

    @property
    def supplier(self):
        return self.preferred_supplier or self.product.supplier

    def is_crossed(self, quantity: int, old_quantity) -> bool:
        """True when the stock went from above the point to at or below it."""
        return (
            quantity <= self.reorder_point
            and old_quantity is not None
            and old_quantity > self.reorder_point
        )
