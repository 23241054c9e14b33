"""Celery tasks for the booking domain."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore
from django.utils import timezone  # type: ignore

from .models import Booking
from .services import expire_booking

logger = logging.getLogger(__name__)


# ============================================================================
# PERIODIC TASKS (scheduled by Celery Beat)
# ============================================================================

@shared_task(name="bookings.expire_pending_bookings")
def expire_pending_bookings() -> dict[str, int]:
    """
    Expire unpaid pending bookings whose payment hold ran out.

    Expired bookings stop blocking their room or surf week. Runs every
    ten minutes.

    Returns:
        dict: {"expired": number of expired bookings}
    """
    now = timezone.now()
    expired_count = 0

    candidates = Booking.objects.filter(
        status=Booking.Status.PENDING,
        expires_at__lte=now,
    ).exclude(payment_status=Booking.PaymentStatus.PAID)

    for booking in candidates:
        try:
            if expire_booking(booking):
                expired_count += 1
        except Exception as e:
            logger.error(f"Error expiring booking {booking.id}: {e}", exc_info=True)

    if expired_count > 0:
        logger.info(f"Expired {expired_count} pending bookings")

    return {"expired": expired_count}


@shared_task(name="bookings.complete_finished_bookings")
def complete_finished_bookings() -> dict[str, int]:
    """
    Mark confirmed bookings completed once their check-out date has passed.

    Runs every hour.

    Returns:
        dict: {"completed": number of completed bookings}
    """
    today = timezone.localdate()
    completed_count = 0

    bookings_to_complete = Booking.objects.filter(
        status=Booking.Status.CONFIRMED,
        check_out__lte=today,
    )

    for booking in bookings_to_complete:
        try:
            booking.status = Booking.Status.COMPLETED
            booking.save(update_fields=["status", "updated_at"])
            completed_count += 1
            logger.info(f"Booking {booking.booking_code} completed")
        except Exception as e:
            logger.error(f"Error completing booking {booking.id}: {e}", exc_info=True)

    if completed_count > 0:
        logger.info(f"Completed {completed_count} bookings")

    return {"completed": completed_count}


# ============================================================================
# NOTIFICATION TASKS
# ============================================================================

def _load_booking(booking_id: int) -> Booking | None:
    try:
        return (
            Booking.objects.select_related("room", "surf_camp")
            .prefetch_related("clients", "add_on_items__add_on")
            .get(id=booking_id)
        )
    except Booking.DoesNotExist:
        logger.error(f"Booking {booking_id} not found for notification")
        return None


@shared_task(name="bookings.notify_booking_received")
def notify_booking_received(booking_id: int) -> bool:
    """Booking request received, with payment instructions."""
    booking = _load_booking(booking_id)
    if booking is None:
        return False
    from apps.notifications.services import send_booking_received_email

    return send_booking_received_email(booking)


@shared_task(name="bookings.notify_booking_confirmed")
def notify_booking_confirmed(booking_id: int) -> bool:
    """Payment received, booking confirmed."""
    booking = _load_booking(booking_id)
    if booking is None:
        return False
    from apps.notifications.services import send_booking_confirmation_email

    return send_booking_confirmation_email(booking)


@shared_task(name="bookings.notify_booking_cancelled")
def notify_booking_cancelled(booking_id: int) -> bool:
    booking = _load_booking(booking_id)
    if booking is None:
        return False
    from apps.notifications.services import send_booking_cancelled_email

    return send_booking_cancelled_email(booking)


@shared_task(name="bookings.notify_booking_expired")
def notify_booking_expired(booking_id: int) -> bool:
    booking = _load_booking(booking_id)
    if booking is None:
        return False
    from apps.notifications.services import send_booking_expired_email

    return send_booking_expired_email(booking)
