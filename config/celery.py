import os

from celery import Celery
from celery.schedules import crontab  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.dev")

app = Celery("heiwa_house")

app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()


# ============================================================================
# CELERY BEAT SCHEDULE (Periodic Tasks)
# ============================================================================

app.conf.beat_schedule = {
    # Expire unpaid bookings whose payment hold ran out - every 10 minutes
    "expire-pending-bookings": {
        "task": "bookings.expire_pending_bookings",
        "schedule": 600.0,
        "options": {"expires": 540},
    },
    # Complete confirmed bookings after check-out - hourly
    "complete-finished-bookings": {
        "task": "bookings.complete_finished_bookings",
        "schedule": crontab(minute=15),
    },
}
