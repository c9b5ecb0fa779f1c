"""
Common Value Objects

Value objects used across multiple domains:
- Money: a price with currency, rendered the Turkish way (1.250.000 TL)
- NumericRange: an optional min/max bound used by price and area filters

Plus the thousands-separator helpers behind price inputs.
"""

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from shared.domain.base import ValueObject

CURRENCY_SYMBOLS = {
    'TRY': 'TL',
    'USD': '$',
    'EUR': '€',
    'GBP': '£',
}

_NON_DIGITS = re.compile(r'\D')
_THOUSANDS = re.compile(r'\B(?=(\d{3})+(?!\d))')
_GROUPED = re.compile(r'^\d{1,3}(\.\d{3})+$')


def format_thousands(value) -> str:
    """Insert dot separators: ``"1000000"`` -> ``"1.000.000"``.

    Anything that is not a digit is dropped first, so already formatted
    input is returned unchanged.
    """
    digits = _NON_DIGITS.sub('', str(value or ''))
    return _THOUSANDS.sub('.', digits)


def parse_thousands(value) -> str:
    """Strip dot separators: ``"1.000.000"`` -> ``"1000000"``."""
    return str(value or '').replace('.', '').strip()


def to_decimal(value) -> Decimal | None:
    """Parse a number; ``None`` when empty or invalid.

    Strings grouped with dots (``1.000.000``) are read as thousands, any
    other string as a plain decimal (``1250000.00``).
    """
    if value is None or value == '':
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, (int, float)):
        return Decimal(str(value))
    text = str(value).strip()
    if _GROUPED.match(text):
        text = parse_thousands(text)
    try:
        return Decimal(text)
    except (InvalidOperation, ValueError):
        return None


@dataclass(frozen=True)
class Money(ValueObject):
    """
    Money value object

    Represents a listing price with currency. Display uses dot-separated
    thousands without decimals, as on the public site.
    """
    amount: Decimal
    currency: str = 'TRY'

    def __post_init__(self):
        if self.amount < 0:
            raise ValueError("Amount cannot be negative")
        if self.currency not in CURRENCY_SYMBOLS:
            raise ValueError(f"Unsupported currency: {self.currency}")

    def display(self) -> str:
        whole = int(self.amount.quantize(Decimal('1')))
        return f"{format_thousands(whole)} {CURRENCY_SYMBOLS[self.currency]}"

    def __str__(self):
        return self.display()

    def __repr__(self):
        return f"Money({self.amount}, '{self.currency}')"


@dataclass(frozen=True)
class NumericRange(ValueObject):
    """
    Inclusive numeric range with optional bounds

    A missing bound means "no constraint" on that side.
    """
    minimum: Decimal | None = None
    maximum: Decimal | None = None

    @classmethod
    def from_strings(cls, minimum, maximum) -> 'NumericRange':
        return cls(to_decimal(minimum), to_decimal(maximum))

    @property
    def is_open(self) -> bool:
        return self.minimum is None and self.maximum is None

    def contains(self, value) -> bool:
        if self.is_open:
            return True
        number = to_decimal(value)
        if number is None:
            return False
        if self.minimum is not None and number < self.minimum:
            return False
        if self.maximum is not None and number > self.maximum:
            return False
        return True
