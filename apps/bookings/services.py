"""Domain services for booking workflows."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import TYPE_CHECKING, Any, Iterable, Sequence

from django.conf import settings  # type: ignore
from django.db import transaction  # type: ignore
from django.utils import timezone  # type: ignore

from apps.clients.models import Client
from apps.surf_camps.models import SurfCamp
from shared.domain.value_objects import Money

from .availability import lock_queryset_if_possible, ensure_room_is_available
from .exceptions import BookingConflictError, BookingValidationError
from .models import AssignmentStatus, Booking, BookingAddOn, RoomAssignment, SurfCampAssignment
from .pricing import PriceQuote, add_on_total, quote_room_booking, quote_surf_week

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from apps.rooms.models import Room

logger = logging.getLogger(__name__)

__all__ = [
    "BookingConflictError",
    "BookingValidationError",
    "cancel_booking",
    "confirm_payment",
    "create_booking",
    "expire_booking",
    "quote_booking",
    "refund_booking",
    "update_booking",
    "upsert_client",
    "validate_stay_dates",
]

CLIENT_PROFILE_FIELDS = (
    "phone",
    "date_of_birth",
    "emergency_contact_name",
    "emergency_contact_phone",
    "dietary_restrictions",
    "medical_conditions",
    "surf_experience",
)


def validate_stay_dates(check_in: date, check_out: date, *, today: date | None = None) -> None:
    if check_out <= check_in:
        raise BookingValidationError("Check-out date must be after check-in date.")
    today = today or timezone.localdate()
    if check_in < today:
        raise BookingValidationError("Check-in date cannot be in the past.")
    max_days = getattr(settings, "BOOKING_MAX_ADVANCE_DAYS", 730)
    if check_in > today + timedelta(days=max_days):
        raise BookingValidationError("Bookings can be made at most two years in advance.")


def upsert_client(participant: dict[str, Any]) -> Client:
    """Find the client by email or create it, refreshing the profile with the given details."""
    email = participant["email"].strip().lower()
    details = {
        field: participant[field]
        for field in CLIENT_PROFILE_FIELDS
        if participant.get(field) not in (None, "")
    }
    client, created = Client.objects.get_or_create(
        email=email,
        defaults={
            "first_name": participant["first_name"].strip(),
            "last_name": participant["last_name"].strip(),
            **details,
        },
    )
    if not created and details:
        for field, value in details.items():
            setattr(client, field, value)
        client.save(update_fields=[*details.keys(), "updated_at"])
    return client


def _unique_clients(participants: Sequence[dict[str, Any]]) -> list[Client]:
    clients: dict[int, Client] = {}
    for participant in participants:
        client = upsert_client(participant)
        clients.setdefault(client.pk, client)
    return list(clients.values())


def _check_add_ons(add_ons: Iterable[tuple]) -> list[tuple]:
    checked = []
    for add_on, quantity in add_ons:
        if not add_on.is_active:
            raise BookingValidationError(f"{add_on.name} is no longer available.")
        add_on_total(add_on, quantity)
        checked.append((add_on, quantity))
    return checked


def _apply_quote(booking: Booking, quote: PriceQuote) -> None:
    booking.subtotal = quote.subtotal.amount
    booking.taxes = quote.taxes.amount
    booking.fees = quote.fees.amount
    booking.discount_amount = quote.discount.amount
    booking.total_amount = quote.total.amount
    booking.currency = quote.total.currency
    booking.is_peak_season = quote.is_peak_season


def _room_quote(room: "Room", check_in: date, check_out: date, guests: int, add_ons, discount=None) -> PriceQuote:
    if not room.is_active:
        raise BookingValidationError("Room is not available for booking.")
    if guests > room.capacity:
        raise BookingValidationError(f"{room.name} sleeps at most {room.capacity} guests.")
    return quote_room_booking(room, check_in, check_out, guests, add_ons, discount)


def _reserve_camp_spots(camp: SurfCamp, participants: int) -> None:
    lock_queryset_if_possible(SurfCamp.objects.filter(pk=camp.pk)).first()
    remaining = camp.spots_remaining()
    if remaining < participants:
        logger.info("Surf camp %s has %s spots left, %s requested", camp.pk, remaining, participants)
        raise BookingConflictError(
            f"Only {remaining} spots left for {camp.name}."
            if remaining
            else f"{camp.name} is fully booked."
        )


def quote_booking(
    *,
    booking_type: str,
    room: "Room | None" = None,
    surf_camp: SurfCamp | None = None,
    check_in: date | None = None,
    check_out: date | None = None,
    guests: int = 1,
    add_ons: Sequence[tuple] = (),
) -> PriceQuote:
    """Price a booking request without saving anything."""
    add_ons = _check_add_ons(add_ons)
    if booking_type == Booking.BookingType.ROOM:
        if room is None or not check_in or not check_out:
            raise BookingValidationError("Room bookings need room_id, start_date and end_date.")
        if check_out <= check_in:
            raise BookingValidationError("Check-out date must be after check-in date.")
        return _room_quote(room, check_in, check_out, guests, add_ons)
    if booking_type == Booking.BookingType.SURF_WEEK:
        if surf_camp is None:
            raise BookingValidationError("Surf week bookings need camp_id.")
        return quote_surf_week(surf_camp, guests, add_ons)
    raise BookingValidationError("Unknown booking type.")


@transaction.atomic
def create_booking(
    *,
    booking_type: str,
    participants: Sequence[dict[str, Any]],
    room: "Room | None" = None,
    surf_camp: SurfCamp | None = None,
    check_in: date | None = None,
    check_out: date | None = None,
    guests: int | None = None,
    add_ons: Sequence[tuple] = (),
    payment_method: str = Booking.PaymentMethod.STRIPE,
    source: str = Booking.Source.WEB,
    source_url: str = "",
    notes: str = "",
    created_by=None,
) -> Booking:
    """
    Create a pending booking with its clients, assignments and add-ons.

    Participants are upserted as clients by email. The availability check
    and the inserts run in one transaction with the inspected rows locked.
    """
    if not participants:
        raise BookingValidationError("At least one participant is required.")
    add_ons = _check_add_ons(add_ons)

    if booking_type == Booking.BookingType.ROOM:
        if room is None:
            raise BookingValidationError("room_id is required for room bookings.")
        if not check_in or not check_out:
            raise BookingValidationError("start_date and end_date are required for room bookings.")
        validate_stay_dates(check_in, check_out)
        guests = max(guests or 0, len(participants))
        quote = _room_quote(room, check_in, check_out, guests, add_ons)
        ensure_room_is_available(room, check_in, check_out, guests)
    elif booking_type == Booking.BookingType.SURF_WEEK:
        if surf_camp is None:
            raise BookingValidationError("camp_id is required for surf week bookings.")
        if not surf_camp.is_active:
            raise BookingValidationError("This surf week is not open for booking.")
        check_in, check_out = surf_camp.start_date, surf_camp.end_date
        validate_stay_dates(check_in, check_out)
        guests = len(participants)
        _reserve_camp_spots(surf_camp, guests)
        quote = quote_surf_week(surf_camp, guests, add_ons)
        room = None
    else:
        raise BookingValidationError("Unknown booking type.")

    clients = _unique_clients(participants)
    hold_hours = getattr(settings, "BOOKING_HOLD_HOURS", 48)
    booking = Booking(
        booking_type=booking_type,
        room=room,
        surf_camp=surf_camp if booking_type == Booking.BookingType.SURF_WEEK else None,
        check_in=check_in,
        check_out=check_out,
        guests=guests,
        payment_method=payment_method,
        source=source,
        source_url=source_url,
        notes=notes,
        created_by=created_by,
        expires_at=timezone.now() + timedelta(hours=hold_hours),
    )
    _apply_quote(booking, quote)
    booking.save()
    booking.clients.set(clients)

    for add_on, quantity in add_ons:
        BookingAddOn.objects.create(
            booking=booking,
            add_on=add_on,
            quantity=quantity,
            unit_price=add_on.price,
            total_price=add_on_total(add_on, quantity).rounded().amount,
        )

    for client in clients:
        if booking_type == Booking.BookingType.ROOM:
            RoomAssignment.objects.create(
                booking=booking,
                client=client,
                room=room,
                check_in=check_in,
                check_out=check_out,
            )
        else:
            SurfCampAssignment.objects.create(booking=booking, client=client, surf_camp=surf_camp)

    Client.objects.filter(pk__in=[client.pk for client in clients]).update(last_booking_date=check_in)

    logger.info(
        "Booking %s created: type=%s room=%s camp=%s %s..%s guests=%s total=%s %s",
        booking.booking_code,
        booking.booking_type,
        booking.room_id,
        booking.surf_camp_id,
        check_in,
        check_out,
        guests,
        booking.total_amount,
        booking.currency,
    )
    _notify_on_commit("notify_booking_received", booking.pk)
    return booking


@transaction.atomic
def update_booking(booking: Booking, **changes: Any) -> Booking:
    """
    Apply staff edits to a booking.

    Moving a room booking (room, dates or guest count) re-runs the
    availability check with the booking itself left out, and reprices it.
    """
    room = changes.pop("room", booking.room)
    check_in = changes.pop("check_in", booking.check_in)
    check_out = changes.pop("check_out", booking.check_out)
    guests = changes.pop("guests", booking.guests)
    discount = changes.pop("discount_amount", None)

    moved = (
        booking.booking_type == Booking.BookingType.ROOM
        and (
            room != booking.room
            or check_in != booking.check_in
            or check_out != booking.check_out
            or guests != booking.guests
        )
    )
    if booking.booking_type == Booking.BookingType.SURF_WEEK and (
        check_in != booking.check_in or check_out != booking.check_out
    ):
        raise BookingValidationError("Surf week dates follow the surf camp and cannot be changed.")
    if booking.booking_type == Booking.BookingType.SURF_WEEK and guests != booking.guests:
        raise BookingValidationError("Surf week participants come from the camp assignments.")

    if moved or discount is not None:
        if check_out <= check_in:
            raise BookingValidationError("Check-out date must be after check-in date.")
        add_ons = [(item.add_on, item.quantity) for item in booking.add_on_items.select_related("add_on")]
        discount_money = Money(discount if discount is not None else booking.discount_amount, booking.currency)
        if booking.booking_type == Booking.BookingType.ROOM:
            quote = _room_quote(room, check_in, check_out, guests, add_ons, discount_money)
            if moved and booking.is_blocking:
                ensure_room_is_available(room, check_in, check_out, guests, exclude_booking_id=booking.pk)
        else:
            quote = quote_surf_week(booking.surf_camp, booking.guests, add_ons, discount_money)
        _apply_quote(booking, quote)

    booking.room = room
    booking.check_in = check_in
    booking.check_out = check_out
    booking.guests = guests
    for field, value in changes.items():
        setattr(booking, field, value)
    booking.save()

    if moved:
        booking.room_assignments.filter(status=AssignmentStatus.ACTIVE).update(
            room=room,
            check_in=check_in,
            check_out=check_out,
        )
        logger.info("Booking %s moved to room %s %s..%s", booking.booking_code, room.pk, check_in, check_out)
    return booking


@transaction.atomic
def cancel_booking(booking: Booking, reason: str = "") -> Booking:
    if booking.status in (Booking.Status.COMPLETED, Booking.Status.EXPIRED):
        raise BookingValidationError("Completed or expired bookings cannot be cancelled.")
    if booking.status == Booking.Status.CANCELLED:
        raise BookingValidationError("Booking is already cancelled.")
    booking.mark_cancelled(reason)
    logger.info("Booking %s cancelled: %s", booking.booking_code, reason or "no reason given")
    _notify_on_commit("notify_booking_cancelled", booking.pk)
    return booking


@transaction.atomic
def confirm_payment(booking: Booking) -> Booking:
    if booking.payment_status == Booking.PaymentStatus.PAID:
        raise BookingValidationError("Payment has already been confirmed.")
    if not booking.is_blocking:
        raise BookingValidationError("Payment cannot be confirmed for a cancelled, expired or completed booking.")
    booking.mark_paid()
    logger.info("Payment confirmed for booking %s", booking.booking_code)
    _notify_on_commit("notify_booking_confirmed", booking.pk)
    return booking


@transaction.atomic
def refund_booking(booking: Booking, reason: str = "") -> Booking:
    if booking.payment_status != Booking.PaymentStatus.PAID:
        raise BookingValidationError("Only paid bookings can be refunded.")
    booking.mark_refunded(reason)
    logger.info("Booking %s refunded: %s", booking.booking_code, reason or "no reason given")
    _notify_on_commit("notify_booking_cancelled", booking.pk)
    return booking


@transaction.atomic
def expire_booking(booking: Booking) -> bool:
    """Expire a pending booking whose payment hold ran out. Returns False when it no longer qualifies."""
    locked = lock_queryset_if_possible(Booking.objects.filter(pk=booking.pk)).first()
    if locked is None or not locked.should_expire():
        return False
    locked.mark_expired()
    logger.info("Booking %s expired after its payment hold", locked.booking_code)
    _notify_on_commit("notify_booking_expired", locked.pk)
    return True


def _notify_on_commit(task_name: str, booking_id: int) -> None:
    from . import tasks  # local import to avoid circular

    task = getattr(tasks, task_name)
    transaction.on_commit(lambda: task.delay(booking_id))
