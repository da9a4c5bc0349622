"""Theater service - business logic for theaters and seats.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
from collections.abc import Sequence

from theaters.domain import Seat, SeatStatus, SectionPlan, Theater, TheaterSummary
from theaters.domain.errors import (
    InvalidLayoutError,
    InvalidTheaterNameError,
    SeatNotFoundError,
    TheaterNotFoundError,
)
from theaters.domain.layout import build_custom_layout, build_uniform_layout, check_section_plans
from theaters.stores.interfaces import TheaterStore

logger = logging.getLogger(__name__)


class TheaterService:
    """Service for theater, layout and booking operations."""

    def __init__(self, store: TheaterStore) -> None:
        self._store = store

    def create_theater(self, name: str) -> int:
        """Create an empty theater and return its id.

        Raises:
            InvalidTheaterNameError: If the name is blank.
            DuplicateTheaterNameError: If the name is taken.
        """
        name = (name or "").strip()
        if not name:
            raise InvalidTheaterNameError()
        theater_id = self._store.create_theater(name)
        logger.info("Created theater %r with id %s", name, theater_id)
        return theater_id

    def create_uniform_layout(
        self, name: str, sections: int, rows_per_section: int, seats_per_row: int
    ) -> Theater:
        """Create a theater whose sections all have the same rows and seats."""
        if sections <= 0 or rows_per_section <= 0 or seats_per_row <= 0:
            raise InvalidLayoutError()
        return self._create_with_layout(
            name,
            lambda theater: build_uniform_layout(theater, sections, rows_per_section, seats_per_row),
        )

    def create_custom_layout(self, name: str, plans: Sequence[SectionPlan]) -> Theater:
        """Create a theater with a per-section, per-row seat count layout."""
        check_section_plans(plans)
        return self._create_with_layout(name, lambda theater: build_custom_layout(theater, plans))

    def _create_with_layout(self, name: str, build) -> Theater:
        theater_id = self.create_theater(name)
        try:
            theater = build(Theater(name=name.strip(), id=theater_id))
            self._store.bulk_insert_layout(theater)
        except Exception:
            # The empty theater row must not outlive its failed layout.
            self._store.delete_theater(theater_id)
            raise
        return theater

    def list_theaters(self) -> list[TheaterSummary]:
        """Return all theaters with seat counts."""
        return self._store.find_all_theaters()

    def get_theater_layout(self, theater_id: int) -> Theater:
        """Return a theater with its full layout.

        Raises:
            TheaterNotFoundError: If the theater does not exist.
        """
        theater = self._store.find_theater_with_layout(theater_id)
        if theater is None:
            raise TheaterNotFoundError(theater_id)
        return theater

    def delete_theater(self, theater_id: int) -> None:
        if not self._store.delete_theater(theater_id):
            raise TheaterNotFoundError(theater_id)
        logger.info("Deleted theater %s", theater_id)

    def book_seat(self, seat_id: int) -> bool:
        """Book an available seat.

        Returns False when the seat exists but is not available.

        Raises:
            SeatNotFoundError: If the seat does not exist.
        """
        if self._store.mark_seat_booked_if_available(seat_id):
            logger.info("Booked seat %s", seat_id)
            return True
        if not self._store.seat_exists(seat_id):
            raise SeatNotFoundError(seat_id)
        return False

    def cancel_booking(self, seat_id: int) -> bool:
        """Release a booked seat.

        Returns False when the seat exists but is not booked.

        Raises:
            SeatNotFoundError: If the seat does not exist.
        """
        if self._store.mark_seat_available_if_booked(seat_id):
            logger.info("Cancelled booking for seat %s", seat_id)
            return True
        if not self._store.seat_exists(seat_id):
            raise SeatNotFoundError(seat_id)
        return False

    def set_seat_status(self, seat_id: int, status: SeatStatus) -> None:
        if not self._store.set_seat_status(seat_id, status):
            raise SeatNotFoundError(seat_id)

    @staticmethod
    def find_seat(
        theater: Theater, section_name: str, row_number: int, seat_number: int
    ) -> Seat | None:
        """Locate a seat in a loaded layout; section names match case-insensitively."""
        wanted = section_name.strip().casefold()
        for section in theater.sections:
            if section.name.casefold() != wanted:
                continue
            for row in section.rows:
                if row.number != row_number:
                    continue
                for seat in row.seats:
                    if seat.number == seat_number:
                        return seat
        return None
