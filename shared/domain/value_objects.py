"""
Common Value Objects

Value objects used across multiple domains:
- TimeInterval: Half-open range of instants (rental start to rental end)
- GeoPoint: A latitude/longitude pair in decimal degrees
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from shared.domain.base import ValueObject
from shared.domain.exceptions import InvalidInterval

SECONDS_PER_HOUR = Decimal(3600)


@dataclass(frozen=True)
class TimeInterval(ValueObject):
    """
    Time interval value object

    Represents a range from start (inclusive) to end (exclusive).
    Used for booking slots and conflict checks.
    """
    start: datetime
    end: datetime

    def __post_init__(self):
        if self.start >= self.end:
            raise InvalidInterval(
                f"Start time ({self.start.isoformat()}) must be before "
                f"end time ({self.end.isoformat()})"
            )

    def overlaps_with(self, other: 'TimeInterval') -> bool:
        """
        Check if this interval overlaps with another

        Note: end is exclusive, so back-to-back intervals don't overlap.

        Examples:
            - [10:00, 12:00) overlaps with [11:00, 13:00) -> True
            - [10:00, 12:00) overlaps with [12:00, 14:00) -> False (adjacent)
        """
        if not isinstance(other, TimeInterval):
            raise TypeError("Can only check overlap with another TimeInterval")

        # Overlap formula: start1 < end2 AND start2 < end1
        return self.start < other.end and other.start < self.end

    def starts_before(self, moment: datetime) -> bool:
        return self.start < moment

    @property
    def duration_hours(self) -> Decimal:
        """Length of the interval in fractional hours"""
        seconds = Decimal(str((self.end - self.start).total_seconds()))
        return seconds / SECONDS_PER_HOUR

    def __str__(self):
        return f"{self.start.isoformat()} - {self.end.isoformat()}"

    def __repr__(self):
        return f"TimeInterval({self.start!r}, {self.end!r})"


@dataclass(frozen=True)
class GeoPoint(ValueObject):
    """Coordinate pair in decimal degrees (WGS84)"""
    latitude: float
    longitude: float

    def __post_init__(self):
        if not -90 <= self.latitude <= 90:
            raise ValueError(f"Latitude {self.latitude} is out of range [-90, 90]")
        if not -180 <= self.longitude <= 180:
            raise ValueError(f"Longitude {self.longitude} is out of range [-180, 180]")

    def __str__(self):
        return f"({self.latitude:.6f}, {self.longitude:.6f})"
