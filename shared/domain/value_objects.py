"""
Common Value Objects

Value objects used across multiple domains:
- DateRange: Represents the calendar days a charter booking occupies
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from shared.domain.base import ValueObject


@dataclass(frozen=True)
class DateRange(ValueObject):
    """
    Date range value object

    Represents a closed range from start_date to end_date, both inclusive.
    A missing end_date means a single-day range. Charter trips are booked
    per day, so a trip on the 5th and another on the 5th share a day.
    """
    start_date: date
    end_date: Optional[date] = None

    def __post_init__(self):
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError(f"End date ({self.end_date}) must not be before start date ({self.start_date})")

    @property
    def last_day(self) -> date:
        """Last occupied day (start_date for single-day ranges)."""
        return self.end_date or self.start_date

    def __str__(self):
        if self.end_date is None:
            return self.start_date.isoformat()
        return f"{self.start_date.isoformat()} - {self.end_date.isoformat()}"

    def __repr__(self):
        return f"DateRange({self.start_date}, {self.end_date})"
