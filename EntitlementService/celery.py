"""
Celery configuration for background tasks.

Runs the daily license maintenance jobs scheduled by Celery beat.
"""
import os

from celery import Celery
from celery.schedules import crontab

# Set default Django settings module
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "EntitlementService.settings.base")

app = Celery("EntitlementService")

# Load configuration from Django settings
app.config_from_object("django.conf:settings", namespace="CELERY")

# Auto-discover tasks from all installed apps
app.autodiscover_tasks()

app.conf.beat_schedule = {
    "expire-overdue-licenses": {
        "task": "core.tasks.expire_licenses_task",
        "schedule": crontab(hour=0, minute=5),
    },
    "dispatch-license-expiration-alerts": {
        "task": "core.tasks.dispatch_license_alerts_task",
        "schedule": crontab(hour=8, minute=0),
    },
}
