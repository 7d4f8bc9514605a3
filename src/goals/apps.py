"""App config for sales goals."""
from django.apps import AppConfig


class GoalsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "goals"
    verbose_name = "Objectifs de vente"

    def ready(self):
        from goals.handlers import on_order_changed
        from realtime.feed import change_feed

        change_feed.subscribe("orders", on_insert=on_order_changed, on_update=on_order_changed)
