"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager, nullcontext

from theaters.domain import SeatStatus, Theater, TheaterSummary
from theaters.domain.errors import StoreError


class TheaterStore(ABC):
    """Interface for theater persistence operations."""

    @abstractmethod
    def create_theater(self, name: str) -> int:
        """Insert an empty theater and return its id.

        Raises:
            DuplicateTheaterNameError: If the name is already taken.
        """
        ...

    @abstractmethod
    def bulk_insert_layout(self, theater: Theater) -> None:
        """Persist every section, row and seat of an existing theater atomically.

        Generated ids are assigned onto the domain objects in submission order.
        On failure nothing is persisted and no id assigned by this call remains.

        Raises:
            TheaterNotFoundError: If ``theater.id`` does not exist.
            StoreError: If any section, row or seat already has an id, or the
                write fails for any other reason.
        """
        ...

    @abstractmethod
    def mark_seat_booked_if_available(self, seat_id: int) -> bool:
        """Set AVAILABLE -> BOOKED in one conditional update; False if not applied."""
        ...

    @abstractmethod
    def mark_seat_available_if_booked(self, seat_id: int) -> bool:
        """Set BOOKED -> AVAILABLE in one conditional update; False if not applied."""
        ...

    @abstractmethod
    def set_seat_status(self, seat_id: int, status: SeatStatus) -> bool:
        """Overwrite a seat's status; False if the seat does not exist."""
        ...

    @abstractmethod
    def seat_exists(self, seat_id: int) -> bool:
        """Check if a seat exists."""
        ...

    @abstractmethod
    def find_all_theaters(self) -> list[TheaterSummary]:
        """Return every theater with seat counts, ordered by name."""
        ...

    @abstractmethod
    def find_theater_with_layout(self, theater_id: int) -> Theater | None:
        """Return a theater with its full layout, or None if not found.

        Sections are ordered by name, rows and seats by number.
        """
        ...

    @abstractmethod
    def delete_theater(self, theater_id: int) -> bool:
        """Delete a theater and its layout; False if it did not exist."""
        ...

    def worker_scope(self) -> AbstractContextManager:
        """Context a background worker runs one job inside."""
        return nullcontext()


def check_unpersisted(theater: Theater) -> None:
    """Raise StoreError if any part of the layout already has an identity."""
    for entity in theater.iter_entities():
        if entity.id is not None:
            raise StoreError(
                f"{type(entity).__name__} {entity.id} is already persisted; "
                "a layout insert needs new entities"
            )
