"""Reporting period model."""

from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

from dateutil.relativedelta import relativedelta

MONTH = "month"
QUARTER = "quarter"
YEAR = "year"
CUSTOM = "custom"
PERIOD_KINDS = (MONTH, QUARTER, YEAR, CUSTOM)

_LABELS = {
    MONTH: "This month",
    QUARTER: "This quarter",
    YEAR: "This year",
    CUSTOM: "Custom period",
}


@dataclass(frozen=True)
class Period:
    """A calendar window anchored to "today".

    MONTH, QUARTER and YEAR are resolved against the date passed in at
    computation time. CUSTOM uses its own inclusive bounds; when either bound
    is missing the period is open and filters nothing out.
    """

    kind: str
    start: Optional[date] = None
    end: Optional[date] = None

    @classmethod
    def month(cls) -> "Period":
        return cls(MONTH)

    @classmethod
    def quarter(cls) -> "Period":
        return cls(QUARTER)

    @classmethod
    def year(cls) -> "Period":
        return cls(YEAR)

    @classmethod
    def custom(cls, start: Optional[date], end: Optional[date]) -> "Period":
        return cls(CUSTOM, start, end)

    @classmethod
    def parse(
        cls,
        name: str,
        start: Optional[str] = None,
        end: Optional[str] = None,
    ) -> "Period":
        """Build a Period from user input.

        Args:
            name: One of "month", "quarter", "year" or "custom".
            start: Start date in ISO format (custom periods only).
            end: End date in ISO format (custom periods only).

        Raises:
            ValueError: If the name is unknown or a date is malformed.
        """
        name = (name or "").strip().lower()
        if name not in PERIOD_KINDS:
            raise ValueError(
                f"Unknown period '{name}'. Expected one of: {', '.join(PERIOD_KINDS)}"
            )

        if name != CUSTOM:
            return cls(name)

        return cls.custom(
            date.fromisoformat(start) if start else None,
            date.fromisoformat(end) if end else None,
        )

    @property
    def label(self) -> str:
        return _LABELS[self.kind]

    @property
    def is_open(self) -> bool:
        """True for a custom period missing one of its bounds."""
        return self.kind == CUSTOM and (self.start is None or self.end is None)

    def bounds(self, today: date) -> Optional[Tuple[date, date]]:
        """Get the inclusive date window this period covers.

        Args:
            today: Reference date for MONTH, QUARTER and YEAR.

        Returns:
            (start, end) tuple, or None for an open custom period.
        """
        if self.kind == CUSTOM:
            if self.is_open:
                return None
            return self.start, self.end

        if self.kind == MONTH:
            start = today.replace(day=1)
            return start, start + relativedelta(months=1, days=-1)

        if self.kind == QUARTER:
            first_month = (today.month - 1) // 3 * 3 + 1
            start = date(today.year, first_month, 1)
            return start, start + relativedelta(months=3, days=-1)

        return date(today.year, 1, 1), date(today.year, 12, 31)
