"""Email notifications for guests and the front desk."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.conf import settings  # type: ignore
from django.core.mail import send_mail  # type: ignore
from django.template.loader import render_to_string  # type: ignore
from django.utils.html import escape, strip_tags  # type: ignore

if TYPE_CHECKING:  # pragma: no cover
    from apps.bookings.models import Booking

logger = logging.getLogger(__name__)


# ============================================================================
# EMAIL NOTIFICATIONS
# ============================================================================

def send_email_notification(
    recipient_email: str,
    subject: str,
    template_name: str | None,
    context: dict,
    *,
    html_message: str | None = None,
) -> bool:
    """
    Send a single email, logging the outcome.

    Args:
        recipient_email: Recipient address
        subject: Subject line
        template_name: Django template path (optional)
        context: Template context; ``message`` is used as plain text when
            neither a template nor HTML is given
        html_message: Ready HTML body (optional)

    Returns:
        bool: True when the message was handed to the mail backend
    """
    try:
        if html_message:
            text_message = strip_tags(html_message)
        elif template_name:
            html_message = render_to_string(template_name, context)
            text_message = strip_tags(html_message)
        else:
            text_message = context.get("message", "")
            html_message = None

        send_mail(
            subject=subject,
            message=text_message,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[recipient_email],
            html_message=html_message,
            fail_silently=False,
        )

        logger.info(f"Email sent successfully to {recipient_email}: {subject}")
        return True

    except Exception as e:
        logger.error(f"Failed to send email to {recipient_email}: {e}", exc_info=True)
        return False


def _booking_context(booking: "Booking") -> dict:
    if booking.booking_type == booking.BookingType.SURF_WEEK and booking.surf_camp:
        stay = booking.surf_camp.name
    elif booking.room:
        stay = booking.room.name
    else:
        stay = "Heiwa House"
    return {
        "booking": booking,
        "booking_code": booking.booking_code,
        "stay": stay,
        "check_in": booking.check_in.strftime("%d.%m.%Y"),
        "check_out": booking.check_out.strftime("%d.%m.%Y"),
        "nights": booking.nights,
        "guests": booking.guests,
        "total_amount": booking.total_amount,
        "currency": booking.currency,
    }


def _details_html(context: dict) -> str:
    return f"""
        <ul>
            <li><strong>Booking code:</strong> {context['booking_code']}</li>
            <li><strong>Stay:</strong> {escape(context['stay'])}</li>
            <li><strong>Check-in:</strong> {context['check_in']}</li>
            <li><strong>Check-out:</strong> {context['check_out']}</li>
            <li><strong>Guests:</strong> {context['guests']}</li>
            <li><strong>Total:</strong> {context['total_amount']} {context['currency']}</li>
        </ul>
    """


def _send_to_clients(booking: "Booking", subject: str, body: str) -> bool:
    """Send the same message to every client on the booking."""
    clients = list(booking.clients.all())
    if not clients:
        logger.warning(f"Booking {booking.booking_code} has no clients to notify")
        return False

    results = []
    for client in clients:
        html_message = f"""
    <html>
    <body>
        <h2>Hello {escape(client.first_name)},</h2>
        {body}
        <p>See you in the water,<br>The Heiwa House team</p>
    </body>
    </html>
    """
        results.append(
            send_email_notification(
                recipient_email=client.email,
                subject=subject,
                template_name=None,
                context={"booking": booking, "client": client},
                html_message=html_message,
            )
        )
    return all(results)


def send_booking_received_email(booking: "Booking") -> bool:
    """Booking request received; payment is still due."""
    context = _booking_context(booking)
    hold = booking.expires_at.strftime("%d.%m.%Y %H:%M") if booking.expires_at else ""
    body = f"""
        <p>We have received your booking request.</p>
        {_details_html(context)}
        <p>Your dates are held until {hold}. Please complete the payment before then.</p>
    """
    sent = _send_to_clients(booking, f"Booking #{booking.booking_code} received", body)
    send_new_booking_to_staff_email(booking)
    return sent


def send_booking_confirmation_email(booking: "Booking") -> bool:
    """Payment received, booking confirmed."""
    context = _booking_context(booking)
    body = f"""
        <p>Your payment has been received and your booking is confirmed.</p>
        {_details_html(context)}
    """
    return _send_to_clients(booking, f"Booking #{booking.booking_code} confirmed!", body)


def send_booking_cancelled_email(booking: "Booking") -> bool:
    context = _booking_context(booking)
    reason = f"<p>Reason: {escape(booking.cancellation_reason)}</p>" if booking.cancellation_reason else ""
    refund = (
        "<p>Your refund has been issued and should reach you within a few days.</p>"
        if booking.payment_status == booking.PaymentStatus.REFUNDED
        else ""
    )
    body = f"""
        <p>Your booking has been cancelled.</p>
        {_details_html(context)}
        {reason}
        {refund}
    """
    return _send_to_clients(booking, f"Booking #{booking.booking_code} cancelled", body)


def send_booking_expired_email(booking: "Booking") -> bool:
    """The payment hold ran out and the dates were released."""
    context = _booking_context(booking)
    body = f"""
        <p>We did not receive the payment for your booking in time, so the dates have been released.</p>
        {_details_html(context)}
        <p>If you still want to come, just book again on our website.</p>
    """
    return _send_to_clients(booking, f"Booking #{booking.booking_code} expired", body)


def send_new_booking_to_staff_email(booking: "Booking") -> bool:
    """Tell the front desk about a new booking request."""
    recipient = getattr(settings, "BOOKING_NOTIFICATION_EMAIL", "")
    if not recipient:
        return False

    context = _booking_context(booking)
    client_names = ", ".join(escape(client.full_name) for client in booking.clients.all())
    html_message = f"""
    <html>
    <body>
        <h2>New {booking.get_booking_type_display().lower()} booking ({booking.get_source_display()})</h2>
        {_details_html(context)}
        <p><strong>Guests:</strong> {client_names}</p>
    </body>
    </html>
    """
    return send_email_notification(
        recipient_email=recipient,
        subject=f"New booking #{booking.booking_code}",
        template_name=None,
        context=context,
        html_message=html_message,
    )
