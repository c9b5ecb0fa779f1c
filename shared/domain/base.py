"""
Base Domain Classes

Value objects are immutable and compared by value. Filter state, money
amounts and numeric ranges used by listing search derive from
``ValueObject``.
"""

from abc import ABC
from dataclasses import dataclass


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects

    Value objects are immutable and have no identity.
    Two value objects are equal if all their attributes are equal.
    """
    pass
