"""Default workflow rules of a new business."""

DEFAULT_RULES = [
    {
        "name": "Reapprovisionnement automatique",
        "workflow_type": "auto_reorder",
        "trigger_conditions": {"stock_threshold": 10, "product_categories": ["all"]},
        "actions": ["create_purchase_order", "notify_manager"],
        "is_active": True,
    },
    {
        "name": "Alerte de stock faible",
        "workflow_type": "stock_alert",
        "trigger_conditions": {"stock_level": "critical"},
        "actions": ["send_notification", "email_manager"],
        "is_active": True,
    },
    {
        "name": "Reapprovisionnement d'urgence",
        "workflow_type": "emergency_restock",
        "trigger_conditions": {},
        "actions": ["create_purchase_order", "send_notification", "notify_manager"],
        "is_active": True,
    },
    {
        "name": "Rotation fournisseur",
        "workflow_type": "supplier_rotation",
        "trigger_conditions": {"delivery_delay": 3},
        "actions": ["switch_supplier", "notify_team"],
        "is_active": False,
    },
]


def seed_default_rules(business) -> int:
    """Create the missing default rules of *business*; returns how many were created."""
    from workflows.models import WorkflowRule

    created = 0
    for spec in DEFAULT_RULES:
        _, was_created = WorkflowRule.objects.get_or_create(
            business=business,
            name=spec["name"],
            defaults={key: value for key, value in spec.items() if key != "name"},
        )
        created += int(was_created)
    return created
