"""
Common Value Objects

Value objects used across the booking domain:
- Money: Represents monetary amounts with currency
- DateRange: Represents a stay (check-in inclusive, check-out exclusive)
"""

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterator

from shared.domain.base import ValueObject

SUPPORTED_CURRENCIES = ('EUR', 'USD', 'GBP')
CENT = Decimal('0.01')


@dataclass(frozen=True)
class Money(ValueObject):
    """
    Money value object

    Represents a non-negative monetary amount with currency.
    Arithmetic keeps full precision; call ``rounded()`` before persisting.
    """
    amount: Decimal
    currency: str = 'EUR'

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, 'amount', Decimal(str(self.amount)))
        if self.amount < 0:
            raise ValueError("Amount cannot be negative")
        if self.currency not in SUPPORTED_CURRENCIES:
            raise ValueError(f"Unsupported currency: {self.currency}")

    @classmethod
    def zero(cls, currency: str = 'EUR') -> 'Money':
        return cls(Decimal('0'), currency)

    def _check_currency(self, other: 'Money') -> None:
        if not isinstance(other, Money):
            raise TypeError("Money can only be combined with Money")
        if self.currency != other.currency:
            raise ValueError(f"Currency mismatch: {self.currency} and {other.currency}")

    def __add__(self, other: 'Money') -> 'Money':
        self._check_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: 'Money') -> 'Money':
        """Subtract, flooring at zero (a discount never makes a price negative)."""
        self._check_currency(other)
        return Money(max(self.amount - other.amount, Decimal('0')), self.currency)

    def __mul__(self, factor) -> 'Money':
        if not isinstance(factor, (int, Decimal)):
            raise TypeError("Money can only be multiplied by int or Decimal")
        return Money(self.amount * factor, self.currency)

    def rounded(self) -> 'Money':
        return Money(self.amount.quantize(CENT, rounding=ROUND_HALF_UP), self.currency)

    def __str__(self):
        return f"{self.amount:,.2f} {self.currency}"

    def __repr__(self):
        return f"Money({self.amount}, '{self.currency}')"


@dataclass(frozen=True)
class DateRange(ValueObject):
    """
    Date range value object

    Represents a range from start_date (inclusive) to end_date (exclusive).
    Used for stays, room blocks and availability checks.
    """
    start_date: date
    end_date: date

    def __post_init__(self):
        if self.start_date >= self.end_date:
            raise ValueError(f"Start date ({self.start_date}) must be before end date ({self.end_date})")

    def overlaps_with(self, other: 'DateRange') -> bool:
        """
        Two ranges overlap if they share at least one night.

        Examples:
            - DateRange(1, 4) overlaps with DateRange(3, 6) -> True
            - DateRange(1, 4) overlaps with DateRange(4, 7) -> False (back-to-back)
        """
        if not isinstance(other, DateRange):
            raise TypeError("Can only check overlap with another DateRange")
        return self.start_date < other.end_date and self.end_date > other.start_date

    def contains(self, check_date: date) -> bool:
        return self.start_date <= check_date < self.end_date

    def nights(self) -> Iterator[date]:
        """Yield every night of the stay (the check-out day is excluded)."""
        current = self.start_date
        while current < self.end_date:
            yield current
            current += timedelta(days=1)

    def __len__(self) -> int:
        return (self.end_date - self.start_date).days

    def __str__(self):
        return f"{self.start_date.isoformat()} - {self.end_date.isoformat()}"

    def __repr__(self):
        return f"DateRange({self.start_date}, {self.end_date})"
