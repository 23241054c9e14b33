"""
Availability checks for rooms and dates.

Every endpoint that sells or reports on rooms goes through this module.
Stays are half-open ranges: the check-out day is free for the next guest.
A room is taken by pending or confirmed bookings, by surf camp
participants placed in it, and by manual room blocks.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta

from django.db import transaction  # type: ignore
from django.db.models import Q  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore

from apps.rooms.models import Room, RoomBlock
from shared.domain.value_objects import DateRange

from .exceptions import BookingConflictError
from .models import AssignmentStatus, Booking, SurfCampAssignment

logger = logging.getLogger(__name__)


def lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def room_bookings(room, check_in: date, check_out: date, *, exclude_booking_id=None):
    """Pending and confirmed room bookings of ``room`` sharing a night with the range."""
    qs = Booking.objects.filter(
        room=room,
        booking_type=Booking.BookingType.ROOM,
        status__in=Booking.BLOCKING_STATUSES,
    ).filter(Q(check_in__lt=check_out) & Q(check_out__gt=check_in))
    if exclude_booking_id is not None:
        qs = qs.exclude(pk=exclude_booking_id)
    return qs


def room_camp_assignments(room, check_in: date, check_out: date, *, exclude_booking_id=None):
    """Surf camp participants housed in ``room`` during the range."""
    qs = SurfCampAssignment.objects.filter(
        room=room,
        status=AssignmentStatus.ACTIVE,
        booking__status__in=Booking.BLOCKING_STATUSES,
    ).filter(Q(surf_camp__start_date__lt=check_out) & Q(surf_camp__end_date__gt=check_in))
    if exclude_booking_id is not None:
        qs = qs.exclude(booking_id=exclude_booking_id)
    return qs


def room_blocks(room, check_in: date, check_out: date, *, exclude_block_id=None):
    qs = RoomBlock.objects.filter(room=room).filter(
        Q(start_date__lt=check_out) & Q(end_date__gt=check_in)
    )
    if exclude_block_id is not None:
        qs = qs.exclude(pk=exclude_block_id)
    return qs


def nightly_occupancy(room, check_in: date, check_out: date, *, exclude_booking_id=None) -> dict[date, int]:
    """Beds taken in ``room`` for every night of the range."""
    occupancy = {night: 0 for night in DateRange(check_in, check_out).nights()}

    bookings = lock_queryset_if_possible(
        room_bookings(room, check_in, check_out, exclude_booking_id=exclude_booking_id)
    ).values_list("check_in", "check_out", "guests")
    for start, end, guests in bookings:
        for night in occupancy:
            if start <= night < end:
                occupancy[night] += guests

    assignments = lock_queryset_if_possible(
        room_camp_assignments(room, check_in, check_out, exclude_booking_id=exclude_booking_id)
    ).values_list("surf_camp__start_date", "surf_camp__end_date")
    for start, end in assignments:
        for night in occupancy:
            if start <= night < end:
                occupancy[night] += 1

    return occupancy


def ensure_room_is_available(
    room,
    check_in: date,
    check_out: date,
    guests: int = 1,
    *,
    exclude_booking_id=None,
) -> None:
    """
    Ensure ``room`` can take ``guests`` for every night of the range.

    Inside a transaction the room row and the rows inspected are locked, so
    two concurrent requests for the same room are serialised.
    """

    # Locking the room row covers the case where no booking rows exist yet.
    lock_queryset_if_possible(Room.objects.filter(pk=room.pk)).first()

    if lock_queryset_if_possible(room_blocks(room, check_in, check_out)).exists():
        logger.info("Room %s is blocked between %s and %s", room.pk, check_in, check_out)
        raise BookingConflictError("Room is blocked for the selected dates.")

    if room.is_per_bed:
        occupancy = nightly_occupancy(room, check_in, check_out, exclude_booking_id=exclude_booking_id)
        full_nights = [night for night, taken in occupancy.items() if taken + guests > room.capacity]
        if full_nights:
            logger.info("Room %s has no free beds on %s", room.pk, full_nights[0])
            raise BookingConflictError(
                f"Not enough free beds in {room.name} on {full_nights[0].isoformat()}."
            )
        return

    bookings_qs = lock_queryset_if_possible(
        room_bookings(room, check_in, check_out, exclude_booking_id=exclude_booking_id)
    )
    assignments_qs = lock_queryset_if_possible(
        room_camp_assignments(room, check_in, check_out, exclude_booking_id=exclude_booking_id)
    )
    if bookings_qs.exists() or assignments_qs.exists():
        logger.info("Room %s is already booked between %s and %s", room.pk, check_in, check_out)
        raise BookingConflictError("Room is not available for the selected dates.")


def is_room_available(room, check_in: date, check_out: date, guests: int = 1, *, exclude_booking_id=None) -> bool:
    if guests > room.capacity:
        return False
    try:
        ensure_room_is_available(room, check_in, check_out, guests, exclude_booking_id=exclude_booking_id)
    except BookingConflictError:
        return False
    return True


def available_rooms(start_date: date, end_date: date, guests: int = 1) -> list[Room]:
    """Active rooms that can hold ``guests`` for the whole range."""
    candidates = Room.objects.filter(is_active=True, capacity__gte=guests)

    blocked_ids = RoomBlock.objects.filter(
        start_date__lt=end_date,
        end_date__gt=start_date,
    ).values_list("room_id", flat=True)
    candidates = candidates.exclude(id__in=blocked_ids)

    booked_whole_ids = Booking.objects.filter(
        booking_type=Booking.BookingType.ROOM,
        room__booking_type=Room.BookingType.WHOLE,
        status__in=Booking.BLOCKING_STATUSES,
        check_in__lt=end_date,
        check_out__gt=start_date,
    ).values_list("room_id", flat=True)
    camp_whole_ids = SurfCampAssignment.objects.filter(
        room__booking_type=Room.BookingType.WHOLE,
        status=AssignmentStatus.ACTIVE,
        booking__status__in=Booking.BLOCKING_STATUSES,
        surf_camp__start_date__lt=end_date,
        surf_camp__end_date__gt=start_date,
    ).values_list("room_id", flat=True)
    candidates = candidates.exclude(id__in=booked_whole_ids).exclude(id__in=camp_whole_ids)

    result = []
    for room in candidates:
        if room.is_per_bed:
            occupancy = nightly_occupancy(room, start_date, end_date)
            if any(taken + guests > room.capacity for taken in occupancy.values()):
                continue
        result.append(room)
    return result


def check_room_availability(room, check_in: date, check_out: date, guests: int = 1) -> dict:
    """Answer for a single room check, including the accommodation price."""
    from .pricing import quote_room_booking

    conflicts = room_bookings(room, check_in, check_out).order_by("check_in")
    quote = quote_room_booking(room, check_in, check_out, guests)
    return {
        "roomId": room.id,
        "available": room.is_active and is_room_available(room, check_in, check_out, guests),
        "nights": quote.nights,
        "totalPrice": quote.accommodation.amount,
        "basePrice": quote.base_price.amount,
        "isPeakSeason": quote.is_peak_season,
        "room": {
            "id": room.id,
            "name": room.name,
            "capacity": room.capacity,
            "bookingType": room.booking_type,
        },
        "conflictingBookings": [
            {
                "id": booking.id,
                "bookingCode": booking.booking_code,
                "checkIn": booking.check_in.isoformat(),
                "checkOut": booking.check_out.isoformat(),
                "guests": booking.guests,
                "status": booking.status,
            }
            for booking in conflicts
        ],
    }


def date_availability(start_date: date, end_date: date, participants: int = 1) -> dict:
    """
    Beds left per day for the inclusive range ``start_date`` to ``end_date``.

    Capacity is the sum of active room capacities. A day counts as booked
    by a stay or surf week when it is one of their nights.
    """
    total_capacity = sum(Room.objects.filter(is_active=True).values_list("capacity", flat=True))
    range_end = end_date + timedelta(days=1)

    booked = {start_date + timedelta(days=offset): 0 for offset in range((range_end - start_date).days)}

    stays = Booking.objects.filter(
        booking_type=Booking.BookingType.ROOM,
        status__in=Booking.BLOCKING_STATUSES,
        check_in__lt=range_end,
        check_out__gt=start_date,
    ).values_list("check_in", "check_out", "guests")
    for check_in, check_out, guests in stays:
        for day in booked:
            if check_in <= day < check_out:
                booked[day] += guests

    camp_nights = SurfCampAssignment.objects.filter(
        status=AssignmentStatus.ACTIVE,
        booking__status__in=Booking.BLOCKING_STATUSES,
        surf_camp__start_date__lt=range_end,
        surf_camp__end_date__gt=start_date,
    ).values_list("surf_camp__start_date", "surf_camp__end_date")
    for camp_start, camp_end in camp_nights:
        for day in booked:
            if camp_start <= day < camp_end:
                booked[day] += 1

    dates = []
    for day, taken in booked.items():
        remaining = max(0, total_capacity - taken)
        dates.append(
            {
                "date": day.isoformat(),
                "available": remaining >= participants,
                "capacity": total_capacity,
                "booked": taken,
                "remaining": remaining,
            }
        )

    available_count = sum(1 for item in dates if item["available"])
    return {
        "date_availability": dates,
        "summary": {
            "total_dates_checked": len(dates),
            "available_dates": available_count,
            "sold_out_dates": len(dates) - available_count,
            "total_capacity": total_capacity,
            "participants_requested": participants,
        },
    }
