"""
Enumeration utilities.
"""
from enum import Enum


class HasMemberMixin(Enum):
    """Adds `has_value()` and `has_name()` convenience methods to enumerations, as well as case-insensitive
    lookup by value."""

    @classmethod
    def has_value(cls, value):
        return value in cls._value2member_map_

    @classmethod
    def has_name(cls, name):
        return name in cls.__members__

    @classmethod
    def from_value_nocase(cls, value: str):
        """Returns the member whose value matches ``value`` ignoring case, or None"""
        for member in cls:
            if member.value.lower() == value.lower():
                return member
        return None
