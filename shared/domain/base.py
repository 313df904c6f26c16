"""
Base Domain Classes

Building blocks shared by the listing and user domains:
- ValueObject: immutable objects compared by value
"""

from abc import ABC
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects

    Value objects are immutable and have no identity.
    Two value objects are equal if all their attributes are equal.
    """

    def evolve(self, **changes):
        """Return a copy with the given attributes replaced"""
        return replace(self, **changes)
