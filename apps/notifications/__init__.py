"""Notifications app package.

Email delivery for booking lifecycle events. Messages are queued from
booking services through Celery tasks in ``apps.bookings.tasks``.
"""
