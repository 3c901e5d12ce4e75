"""
Calendar-month period value type.

A Period is a whole calendar month selected by a "YYYY-MM" token. Membership
checks compare calendar dates only, so records dated on the last day of a
month are never excluded by a time-of-day component.
"""

import calendar
import re
from dataclasses import dataclass
from datetime import date, datetime, time

from messmate.core.exceptions import ValidationException

PERIOD_TOKEN = re.compile(r"^([0-9]{4})-([0-9]{2})$")


@dataclass(frozen=True, order=True)
class Period:
    """Immutable year/month selector."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValidationException(f"Month must be between 1 and 12, got {self.month}")
        if not 1 <= self.year <= 9999:
            raise ValidationException(f"Year out of range: {self.year}")

    @classmethod
    def parse(cls, token: str) -> "Period":
        """
        Parse a "YYYY-MM" token.

        Args:
            token: Year-month selector, e.g. "2026-10"

        Returns:
            Period for that calendar month

        Raises:
            ValidationException: If the token is malformed or the month is invalid
        """
        match = PERIOD_TOKEN.match(token.strip()) if token else None
        if match is None:
            raise ValidationException(f"Invalid month '{token}', expected YYYY-MM")
        return cls(year=int(match.group(1)), month=int(match.group(2)))

    @classmethod
    def containing(cls, day: date) -> "Period":
        """Period of the month that contains the given date."""
        return cls(year=day.year, month=day.month)

    @classmethod
    def current(cls, today: date | None = None) -> "Period":
        """Period of the current month in the local calendar."""
        return cls.containing(today or date.today())

    @property
    def token(self) -> str:
        """Format as YYYY-MM."""
        return f"{self.year:04d}-{self.month:02d}"

    @property
    def label(self) -> str:
        """Human label, e.g. "October 2026"."""
        return f"{calendar.month_name[self.month]} {self.year}"

    @property
    def days_in_month(self) -> int:
        return calendar.monthrange(self.year, self.month)[1]

    @property
    def start(self) -> date:
        """First calendar day of the month (inclusive)."""
        return date(self.year, self.month, 1)

    @property
    def end(self) -> date:
        """Last calendar day of the month (inclusive)."""
        return date(self.year, self.month, self.days_in_month)

    def bounds(self) -> tuple[datetime, datetime]:
        """
        Inclusive start and end instants of the month in local time.

        Returns:
            (first day at 00:00:00, last day at 23:59:59.999999)
        """
        return datetime.combine(self.start, time.min), datetime.combine(self.end, time.max)

    def day(self, day_of_month: int) -> date:
        """
        Date for a day number within this month.

        Raises:
            ValidationException: If the day does not exist in this month
        """
        if not 1 <= day_of_month <= self.days_in_month:
            raise ValidationException(
                f"Day {day_of_month} is outside {self.label} (1-{self.days_in_month})"
            )
        return date(self.year, self.month, day_of_month)

    def days(self) -> list[date]:
        """Every calendar day of the month, in order."""
        return [date(self.year, self.month, n) for n in range(1, self.days_in_month + 1)]

    def contains(self, value: date | datetime | str) -> bool:
        """
        Check whether a date falls within the month.

        Datetimes are truncated to their calendar date and ISO strings are
        parsed by their date part, so only whole calendar days are compared.
        """
        if isinstance(value, str):
            value = date.fromisoformat(value[:10])
        elif isinstance(value, datetime):
            value = value.date()
        return self.start <= value <= self.end

    def shift(self, months: int) -> "Period":
        """Period a number of months before (negative) or after (positive) this one."""
        index = self.year * 12 + (self.month - 1) + months
        return Period(year=index // 12, month=index % 12 + 1)

    def previous(self) -> "Period":
        return self.shift(-1)

    def next(self) -> "Period":
        return self.shift(1)

    def __str__(self) -> str:
        return self.token
