"""
Celery configuration for background tasks.

Used for notification emails, RabbitMQ event processing and the
periodic license expiration sweep.
"""
import os

from celery import Celery
from celery.schedules import crontab

# Set default Django settings module
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "LicensingPortal.settings.dev")

app = Celery("LicensingPortal")

# Load configuration from Django settings
app.config_from_object("django.conf:settings", namespace="CELERY")

# Auto-discover tasks from all installed apps
app.autodiscover_tasks()

app.conf.beat_schedule = {
    "expire-licenses-hourly": {
        "task": "core.tasks.expire_licenses_task",
        "schedule": crontab(minute=0),
    },
}
