"""Domain models for the theater seating tree.

Theater owns Sections, Section owns Rows, Row owns Seats. Children keep a weak
reference to their parent for navigation only. Identities stay ``None`` until
the store persists the entity.

Django ORM models are in theaters/models.py (persistence layer).
"""

import weakref
from dataclasses import dataclass, field

from theaters.domain.value_objects import SeatStatus


@dataclass(eq=False)
class _Entity:
    id: int | None = field(default=None, kw_only=True)

    def assign_id(self, value: int) -> None:
        """Record the identity generated by the store.

        Raises:
            ValueError: If the entity already has an identity.
        """
        if self.id is not None:
            raise ValueError(f"{type(self).__name__} already has id {self.id}")
        self.id = value

    def reset_id(self) -> None:
        self.id = None


@dataclass(eq=False)
class Seat(_Entity):
    """Domain representation of a Seat."""

    number: int
    status: SeatStatus = SeatStatus.AVAILABLE
    _row_ref: weakref.ReferenceType | None = field(default=None, init=False, repr=False)

    @property
    def row(self) -> "Row | None":
        return self._row_ref() if self._row_ref is not None else None

    @property
    def is_available(self) -> bool:
        return self.status is SeatStatus.AVAILABLE

    @property
    def is_booked(self) -> bool:
        return self.status is SeatStatus.BOOKED


@dataclass(eq=False)
class Row(_Entity):
    """Domain representation of a Row."""

    number: int
    seats: list[Seat] = field(default_factory=list)
    _section_ref: weakref.ReferenceType | None = field(default=None, init=False, repr=False)

    @property
    def section(self) -> "Section | None":
        return self._section_ref() if self._section_ref is not None else None

    def add_seat(self, seat: Seat) -> Seat:
        self.seats.append(seat)
        seat._row_ref = weakref.ref(self)
        return seat

    @property
    def total_seats(self) -> int:
        return len(self.seats)

    @property
    def available_seats(self) -> int:
        return sum(1 for seat in self.seats if seat.is_available)


@dataclass(eq=False)
class Section(_Entity):
    """Domain representation of a Section."""

    name: str
    rows: list[Row] = field(default_factory=list)
    _theater_ref: weakref.ReferenceType | None = field(default=None, init=False, repr=False)

    @property
    def theater(self) -> "Theater | None":
        return self._theater_ref() if self._theater_ref is not None else None

    def add_row(self, row: Row) -> Row:
        self.rows.append(row)
        row._section_ref = weakref.ref(self)
        return row

    @property
    def total_seats(self) -> int:
        return sum(row.total_seats for row in self.rows)

    @property
    def available_seats(self) -> int:
        return sum(row.available_seats for row in self.rows)


@dataclass(eq=False)
class Theater(_Entity):
    """Domain representation of a Theater and its full layout."""

    name: str
    sections: list[Section] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Theater name cannot be empty")

    def add_section(self, section: Section) -> Section:
        self.sections.append(section)
        section._theater_ref = weakref.ref(self)
        return section

    @property
    def total_seats(self) -> int:
        return sum(section.total_seats for section in self.sections)

    @property
    def available_seats(self) -> int:
        return sum(section.available_seats for section in self.sections)

    def iter_entities(self):
        """Yield every section, row and seat in the tree, parents first."""
        for section in self.sections:
            yield section
            for row in section.rows:
                yield row
                yield from row.seats


@dataclass(frozen=True)
class TheaterSummary:
    """Listing entry for a theater with its aggregate seat counts."""

    id: int
    name: str
    total_seats: int
    available_seats: int


@dataclass(frozen=True)
class ImportOutcome:
    """Result of importing one seat range source."""

    source: str
    success: bool
    message: str
    records_processed: int = 0
