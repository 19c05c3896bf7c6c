"""
Shared type definitions

Small value types used by both the ledger engine and the adapters.
"""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar date range

    A missing bound means the range is open on that side.

    Attributes:
        start: first included date (None = since the beginning)
        end: last included date (None = up to the present)
    """

    start: date | None = None
    end: date | None = None

    def __post_init__(self) -> None:
        if self.start and self.end and self.start > self.end:
            raise ValueError(
                f"start date {self.start.isoformat()} is after end date {self.end.isoformat()}"
            )

    @classmethod
    def as_of(cls, cutoff: date) -> "DateRange":
        """Everything up to and including `cutoff`"""
        return cls(start=None, end=cutoff)

    @property
    def is_bounded(self) -> bool:
        """True when at least one bound is set"""
        return self.start is not None or self.end is not None

    def contains(self, value: date) -> bool:
        """Whether `value` falls inside the range (bounds included)"""
        if self.start is not None and value < self.start:
            return False
        if self.end is not None and value > self.end:
            return False
        return True

    def describe(self) -> str:
        """Human readable period label"""
        if not self.is_bounded:
            return "All Transactions"
        start = self.start.isoformat() if self.start else "Beginning"
        end = self.end.isoformat() if self.end else "Present"
        return f"Period: {start} to {end}"
