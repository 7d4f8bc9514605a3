"""Local development settings."""
from .base import *  # noqa: F401,F403

DEBUG = True
ENABLE_DJANGO_ADMIN = True

# Low-stock and goal emails land on the console unless a relay is configured.
EMAIL_BACKEND = env("EMAIL_BACKEND", default="django.core.mail.backends.console.EmailBackend")  # noqa: F405
EMAIL_HOST = env("EMAIL_HOST", default="localhost")  # noqa: F405
EMAIL_PORT = env.int("EMAIL_PORT", default=1025)  # noqa: F405

CORS_ALLOW_ALL_ORIGINS = True

# Set to run workflow tasks inline, without a worker.
CELERY_TASK_ALWAYS_EAGER = env.bool("CELERY_TASK_ALWAYS_EAGER", default=False)  # noqa: F405
LOW_STOCK_SCAN_ENABLED = env.bool("LOW_STOCK_SCAN_ENABLED", default=False)  # noqa: F405

LOGGING["root"]["level"] = "DEBUG"  # noqa: F405
for _app in ("workflows", "realtime"):
    LOGGING["loggers"][_app]["level"] = "DEBUG"  # noqa: F405
