"""
Common Value Objects

Value objects used across the marketplace:
- Money: a rent amount in the platform currency
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from shared.domain.base import ValueObject

PLATFORM_CURRENCY = 'BDT'


@dataclass(frozen=True)
class Money(ValueObject):
    """
    Money value object

    Every price on the platform is quoted in BDT, so comparisons
    between two Money objects never need a conversion.
    """
    amount: Decimal
    currency: str = PLATFORM_CURRENCY

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            raise TypeError("Money amount must be a Decimal")
        if self.currency != PLATFORM_CURRENCY:
            raise ValueError(f"Unsupported currency: {self.currency}")

    @classmethod
    def of(cls, value) -> 'Money':
        """
        Build Money from an int, float, str or Decimal

        Raises ValueError for values that are not finite numbers.
        """
        if isinstance(value, bool):
            raise ValueError(f"Not a monetary amount: {value!r}")
        try:
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError) as exc:
            raise ValueError(f"Not a monetary amount: {value!r}") from exc
        if not amount.is_finite():
            raise ValueError(f"Not a monetary amount: {value!r}")
        return cls(amount)

    def __lt__(self, other: 'Money') -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.amount < other.amount

    def __le__(self, other: 'Money') -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.amount <= other.amount

    def __str__(self):
        return f"{self.amount:,.0f} {self.currency}"

    def __repr__(self):
        return f"Money({self.amount}, '{self.currency}')"
