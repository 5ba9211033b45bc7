"""Enumerations for the chambers routing service."""

from enum import Enum
from typing import Optional


class Seniority(str, Enum):
    """Barrister seniority, ordered from Pupil up to King's Counsel."""

    PUPIL = "Pupil"
    JUNIOR = "Junior"
    MIDDLE = "Middle"
    SENIOR = "Senior"
    KC = "KC"

    @property
    def level(self) -> int:
        """Numeric rank (Pupil=1 ... KC=5)."""
        return SENIORITY_LEVELS[self]

    @classmethod
    def parse(cls, value: object) -> "Seniority":
        """Case-insensitive lookup by value or name."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if text in (member.value.lower(), member.name.lower()):
                return member
        raise ValueError(f"Unknown seniority: {value!r}")


SENIORITY_LEVELS: dict[Seniority, int] = {
    Seniority.PUPIL: 1,
    Seniority.JUNIOR: 2,
    Seniority.MIDDLE: 3,
    Seniority.SENIOR: 4,
    Seniority.KC: 5,
}


class Urgency(str, Enum):
    """How quickly an enquiry needs a response."""

    IMMEDIATE = "Immediate"
    THIS_WEEK = "This Week"
    THIS_MONTH = "This Month"
    FLEXIBLE = "Flexible"

    @classmethod
    def coerce(cls, value: object) -> Optional["Urgency"]:
        """Lenient lookup; unrecognised values give None."""
        if value is None or isinstance(value, cls):
            return value
        text = " ".join(str(value).replace("_", " ").replace("-", " ").split()).lower()
        for member in cls:
            if text in (member.value.lower(), member.name.lower().replace("_", " ")):
                return member
        return None


class Complexity(str, Enum):
    """Complexity tier derived from an enquiry."""

    SIMPLE = "Simple"
    MEDIUM = "Medium"
    COMPLEX = "Complex"

    @classmethod
    def coerce(cls, value: object) -> Optional["Complexity"]:
        """Lenient lookup; unrecognised values give None."""
        if value is None or isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if text == member.value.lower():
                return member
        return None


class AvailabilityStatus(str, Enum):
    """Availability band for a barrister."""

    AVAILABLE = "Available"
    LIMITED = "Limited"
    BUSY = "Busy"
    UNAVAILABLE = "Unavailable"


class RoutingPriority(str, Enum):
    """Priority of a routing decision for clerk review."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class RoutingCondition(str, Enum):
    """Non-fatal conditions met while routing an enquiry."""

    NO_CANDIDATES = "no_candidates"  # Empty barrister list
    MISSING_WORKLOAD = "missing_workload"  # Defaulted to zero load
    INVALID_CRITERIA = "invalid_criteria"  # Enquiry fields defaulted
