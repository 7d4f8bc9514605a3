"""App config for the realtime change feed."""
from django.apps import AppConfig


class RealtimeConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "realtime"
    verbose_name = "Temps reel"

    def ready(self):
        from realtime.signals import connect_tracked_models

        connect_tracked_models()
