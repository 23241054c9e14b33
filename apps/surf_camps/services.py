"""Room allocation for surf week participants."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Iterable

from django.db import transaction  # type: ignore

from apps.bookings.availability import ensure_room_is_available, lock_queryset_if_possible
from apps.bookings.exceptions import BookingValidationError
from apps.bookings.models import AssignmentStatus, Booking, SurfCampAssignment

from .models import SurfCamp

logger = logging.getLogger(__name__)


def active_assignments(camp: SurfCamp):
    return (
        SurfCampAssignment.objects.filter(
            surf_camp=camp,
            status=AssignmentStatus.ACTIVE,
            booking__status__in=Booking.BLOCKING_STATUSES,
        )
        .select_related("client", "room", "booking")
        .order_by("room__name", "client__last_name")
    )


@transaction.atomic
def replace_room_assignments(camp: SurfCamp, allocations: Iterable[dict]) -> list[SurfCampAssignment]:
    """
    Place the camp participants in rooms.

    Participants left out of ``allocations`` lose their room. Every listed
    client must hold an active place in the camp, and every target room
    must be free of other bookings, other camps and blocks for the camp
    week. Raises ``BookingConflictError`` when a room is taken.
    """
    allocations = list(allocations)
    locked = lock_queryset_if_possible(
        SurfCampAssignment.objects.filter(
            surf_camp=camp,
            status=AssignmentStatus.ACTIVE,
            booking__status__in=Booking.BLOCKING_STATUSES,
        )
    )
    assignments = {assignment.client_id: assignment for assignment in locked}

    wanted: dict[int, int] = {}
    for allocation in allocations:
        for client_id in allocation["client_ids"]:
            if client_id not in assignments:
                raise BookingValidationError(f"Client {client_id} is not a participant of this surf camp.")
            wanted[client_id] = allocation["room_id"]

    # The camp's own placements are cleared first so they do not count against the rooms.
    SurfCampAssignment.objects.filter(pk__in=[a.pk for a in assignments.values()]).update(room=None)

    guests_per_room: dict[int, int] = defaultdict(int)
    for allocation in allocations:
        guests_per_room[allocation["room_id"]] += len(allocation["client_ids"])

    rooms = {room.id: room for room in camp.rooms.all()}
    for room_id, guests in guests_per_room.items():
        room = rooms[room_id]
        if guests > room.capacity:
            raise BookingValidationError(f"{room.name} sleeps at most {room.capacity} participants.")
        if guests:
            ensure_room_is_available(room, camp.start_date, camp.end_date, guests)

    for client_id, assignment in assignments.items():
        room_id = wanted.get(client_id)
        previous = assignment.room_id
        assignment.room_id = room_id
        if room_id is not None or previous is not None:
            assignment.save(update_fields=["room"])

    logger.info("Room assignments replaced for surf camp %s: %s participants placed", camp.pk, len(wanted))
    return list(active_assignments(camp))
