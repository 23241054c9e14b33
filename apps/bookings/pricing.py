"""
Server-side price calculation.

Every amount is a ``Money`` value; rounding to cents happens once, when
the quote is built. Taxes and service fees are computed on the
subtotal (accommodation plus add-ons).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Sequence

from django.conf import settings  # type: ignore

from apps.surf_camps.models import MAX_GROUP_DISCOUNT
from shared.domain.value_objects import DateRange, Money

from .exceptions import BookingValidationError


def _currency() -> str:
    return getattr(settings, "BOOKING_CURRENCY", "EUR")


def _money(amount) -> Money:
    return Money(Decimal(str(amount or 0)), _currency())


@dataclass(frozen=True)
class PriceQuote:
    nights: int
    is_peak_season: bool
    base_price: Money
    accommodation: Money
    add_ons: Money
    subtotal: Money
    taxes: Money
    fees: Money
    discount: Money
    total: Money
    group_discount_rate: Decimal = Decimal("0")

    def as_dict(self) -> dict:
        return {
            "nights": self.nights,
            "is_peak_season": self.is_peak_season,
            "base_price": self.base_price.amount,
            "accommodation": self.accommodation.amount,
            "add_ons": self.add_ons.amount,
            "subtotal": self.subtotal.amount,
            "taxes": self.taxes.amount,
            "fees": self.fees.amount,
            "discount": self.discount.amount,
            "total": self.total.amount,
            "group_discount_rate": self.group_discount_rate,
            "currency": self.total.currency,
        }


def count_nights(check_in: date, check_out: date) -> int:
    return max(1, (check_out - check_in).days)


def is_peak_season(check_in: date, check_out: date) -> bool:
    """True when any night of the stay falls in a peak season month."""
    peak_months = set(getattr(settings, "PEAK_SEASON_MONTHS", (5, 6, 7, 8, 9)))
    if check_out <= check_in:
        return check_in.month in peak_months
    return any(night.month in peak_months for night in DateRange(check_in, check_out).nights())


def room_nightly_rate(room, guests: int, peak: bool) -> Money:
    if room.is_per_bed:
        bed_price = room.price_per_bed or room.seasonal_rate(peak)
        return _money(bed_price) * guests
    occupancy_price = room.occupancy_rate(guests)
    if occupancy_price is not None:
        return _money(occupancy_price)
    return _money(room.seasonal_rate(peak))


def group_discount_rate(camp, participants: int) -> Decimal:
    rate = Decimal(str(camp.group_discount_rate or 0)) * max(participants - 1, 0)
    return min(rate, MAX_GROUP_DISCOUNT)


def add_on_total(add_on, quantity: int) -> Money:
    if quantity < 1:
        raise BookingValidationError(f"Quantity for {add_on.name} must be at least 1.")
    if add_on.max_quantity is not None and quantity > add_on.max_quantity:
        raise BookingValidationError(
            f"At most {add_on.max_quantity} x {add_on.name} can be ordered."
        )
    return _money(add_on.price) * quantity


def _add_ons_sum(add_ons: Iterable[tuple]) -> Money:
    total = Money.zero(_currency())
    for add_on, quantity in add_ons:
        total = total + add_on_total(add_on, quantity)
    return total


def build_quote(
    *,
    nights: int,
    peak: bool,
    base_price: Money,
    accommodation: Money,
    add_ons: Money,
    discount: Money | None = None,
    group_rate: Decimal = Decimal("0"),
) -> PriceQuote:
    discount = discount or Money.zero(_currency())
    subtotal = accommodation + add_ons
    taxes = subtotal * Decimal(str(settings.BOOKING_TAX_RATE))
    fees = subtotal * Decimal(str(settings.BOOKING_SERVICE_FEE_RATE))
    # Money subtraction floors at zero
    total = (subtotal.rounded() + taxes.rounded() + fees.rounded()) - discount.rounded()
    return PriceQuote(
        nights=nights,
        is_peak_season=peak,
        base_price=base_price.rounded(),
        accommodation=accommodation.rounded(),
        add_ons=add_ons.rounded(),
        subtotal=subtotal.rounded(),
        taxes=taxes.rounded(),
        fees=fees.rounded(),
        discount=discount.rounded(),
        total=total.rounded(),
        group_discount_rate=group_rate,
    )


def quote_room_booking(
    room,
    check_in: date,
    check_out: date,
    guests: int,
    add_ons: Sequence[tuple] = (),
    discount: Money | None = None,
) -> PriceQuote:
    nights = count_nights(check_in, check_out)
    peak = is_peak_season(check_in, check_out)
    nightly = room_nightly_rate(room, guests, peak)
    return build_quote(
        nights=nights,
        peak=peak,
        base_price=nightly,
        accommodation=nightly * nights,
        add_ons=_add_ons_sum(add_ons),
        discount=discount,
    )


def quote_surf_week(
    camp,
    participants: int,
    add_ons: Sequence[tuple] = (),
    discount: Money | None = None,
) -> PriceQuote:
    rate = group_discount_rate(camp, participants)
    unit = _money(camp.price_per_person)
    discounted_unit = unit - unit * rate
    return build_quote(
        nights=count_nights(camp.start_date, camp.end_date),
        peak=is_peak_season(camp.start_date, camp.end_date),
        base_price=unit,
        accommodation=discounted_unit * participants,
        add_ons=_add_ons_sum(add_ons),
        discount=discount,
        group_rate=rate,
    )
