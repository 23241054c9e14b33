"""CSV and GDPR exports of client data."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Any, Iterable

from django.utils import timezone  # type: ignore

from .models import Client

CSV_COLUMNS = (
    ("id", "ID"),
    ("first_name", "First name"),
    ("last_name", "Last name"),
    ("email", "Email"),
    ("phone", "Phone"),
    ("date_of_birth", "Date of birth"),
    ("surf_experience", "Surf experience"),
    ("dietary_restrictions", "Dietary restrictions"),
    ("marketing_consent", "Marketing consent"),
    ("last_booking_date", "Last booking date"),
    ("created_at", "Created at"),
)


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if hasattr(value, "isoformat"):
        return value.isoformat()
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value)


def clients_to_csv(clients: Iterable[Client]) -> str:
    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow([label for _, label in CSV_COLUMNS])
    for client in clients:
        writer.writerow([_cell(getattr(client, field)) for field, _ in CSV_COLUMNS])
    return buffer.getvalue()


def gdpr_export(client: Client) -> dict[str, Any]:
    """Everything stored about a client, including every booking they take part in."""
    bookings = (
        client.bookings.select_related("room", "surf_camp")
        .prefetch_related("add_on_items__add_on")
        .order_by("-check_in")
    )
    return {
        "exported_at": timezone.now().isoformat(),
        "client": {
            "id": client.id,
            "first_name": client.first_name,
            "last_name": client.last_name,
            "email": client.email,
            "phone": client.phone,
            "date_of_birth": _cell(client.date_of_birth) or None,
            "emergency_contact_name": client.emergency_contact_name,
            "emergency_contact_phone": client.emergency_contact_phone,
            "dietary_restrictions": client.dietary_restrictions,
            "medical_conditions": client.medical_conditions,
            "surf_experience": client.surf_experience,
            "notes": client.notes,
            "marketing_consent": client.marketing_consent,
            "last_booking_date": _cell(client.last_booking_date) or None,
            "created_at": client.created_at.isoformat(),
        },
        "bookings": [
            {
                "booking_code": booking.booking_code,
                "booking_type": booking.booking_type,
                "room": booking.room.name if booking.room else None,
                "surf_camp": booking.surf_camp.name if booking.surf_camp else None,
                "check_in": booking.check_in.isoformat(),
                "check_out": booking.check_out.isoformat(),
                "guests": booking.guests,
                "status": booking.status,
                "payment_status": booking.payment_status,
                "total_amount": str(booking.total_amount),
                "currency": booking.currency,
                "add_ons": [
                    {"name": item.add_on.name, "quantity": item.quantity, "total_price": str(item.total_price)}
                    for item in booking.add_on_items.all()
                ],
                "created_at": booking.created_at.isoformat(),
            }
            for booking in bookings
        ],
    }
