"""App config for inventory workflows."""
from django.apps import AppConfig


class WorkflowsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "workflows"
    verbose_name = "Workflows inventaire"

    def ready(self):
        from realtime.feed import change_feed
        from workflows.engine import handle_inventory_change

        change_feed.subscribe(
            "inventory_items",
            on_insert=handle_inventory_change,
            on_update=handle_inventory_change,
        )
