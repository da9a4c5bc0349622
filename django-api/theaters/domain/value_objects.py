"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Self


class SeatStatus(Enum):
    """Closed set of states a seat can be in."""

    AVAILABLE = "AVAILABLE"
    BOOKED = "BOOKED"
    RESERVED = "RESERVED"
    OUT_OF_ORDER = "OUT_OF_ORDER"

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Parse a status name case-insensitively.

        Raises:
            ValueError: If the name is not one of the known statuses.
        """
        try:
            return cls[value.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown seat status '{value}'") from None


@dataclass(frozen=True)
class SeatRangeRecord:
    """One import line: a contiguous inclusive run of seats in one row.

    Not validated at construction; rule checks run over the whole file so
    every violation can be reported at once.
    """

    section_name: str
    row_number: int
    seat_start: int
    seat_end: int
    status: SeatStatus = SeatStatus.AVAILABLE
    line_number: int = field(default=0, compare=False)

    @property
    def seat_numbers(self) -> range:
        return range(self.seat_start, self.seat_end + 1)

    @property
    def seat_count(self) -> int:
        return len(self.seat_numbers)


@dataclass(frozen=True)
class SectionPlan:
    """Shape of one section in a custom layout: seats per row, rows from 1."""

    name: str | None
    seats_per_row: tuple[int, ...]
