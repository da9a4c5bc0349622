"""In-process implementation of the TheaterStore.

Keeps the same uniqueness rules and all-or-nothing layout inserts as the
relational store. Safe to share between threads.
"""

import itertools
import logging
import threading
from dataclasses import dataclass

from theaters.domain import Row, Seat, SeatStatus, Section, Theater, TheaterSummary
from theaters.domain.errors import DuplicateTheaterNameError, StoreError, TheaterNotFoundError
from theaters.stores.interfaces import TheaterStore, check_unpersisted

logger = logging.getLogger(__name__)


@dataclass
class _SectionRecord:
    theater_id: int
    name: str


@dataclass
class _RowRecord:
    section_id: int
    number: int


@dataclass
class _SeatRecord:
    row_id: int
    number: int
    status: SeatStatus


class InMemoryTheaterStore(TheaterStore):
    """Dict-backed theater store."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._theaters: dict[int, str] = {}
        self._sections: dict[int, _SectionRecord] = {}
        self._rows: dict[int, _RowRecord] = {}
        self._seats: dict[int, _SeatRecord] = {}

    def create_theater(self, name: str) -> int:
        with self._lock:
            if name in self._theaters.values():
                raise DuplicateTheaterNameError(name)
            theater_id = next(self._ids)
            self._theaters[theater_id] = name
        return theater_id

    def bulk_insert_layout(self, theater: Theater) -> None:
        check_unpersisted(theater)
        with self._lock:
            if theater.id not in self._theaters:
                raise TheaterNotFoundError(theater.id)
            staged = False
            try:
                sections, rows, seats = self._stage(theater)
                staged = True
            except StoreError:
                raise
            except Exception as exc:
                raise StoreError(f"Could not save layout: {exc}") from exc
            finally:
                if not staged:
                    for entity in theater.iter_entities():
                        entity.reset_id()
            self._sections.update(sections)
            self._rows.update(rows)
            self._seats.update(seats)
        logger.info("Inserted layout for theater %s in memory", theater.id)

    def _stage(self, theater: Theater):
        """Build new records and assign ids without touching committed state."""
        sections: dict[int, _SectionRecord] = {}
        rows: dict[int, _RowRecord] = {}
        seats: dict[int, _SeatRecord] = {}

        section_keys = {(r.theater_id, r.name) for r in self._sections.values()}
        for section in theater.sections:
            key = (theater.id, section.name)
            if key in section_keys:
                raise StoreError(f"Section '{section.name}' already exists in theater {theater.id}")
            section_keys.add(key)
            section.assign_id(next(self._ids))
            sections[section.id] = _SectionRecord(theater.id, section.name)

            row_numbers = set()
            for row in section.rows:
                if row.number in row_numbers:
                    raise StoreError(f"Row {row.number} repeated in section '{section.name}'")
                row_numbers.add(row.number)
                row.assign_id(next(self._ids))
                rows[row.id] = _RowRecord(section.id, row.number)

                seat_numbers = set()
                for seat in row.seats:
                    if seat.number in seat_numbers:
                        raise StoreError(
                            f"Seat {seat.number} repeated in row {row.number} of '{section.name}'"
                        )
                    seat_numbers.add(seat.number)
                    seat.assign_id(next(self._ids))
                    seats[seat.id] = _SeatRecord(row.id, seat.number, seat.status)

        return sections, rows, seats

    def mark_seat_booked_if_available(self, seat_id: int) -> bool:
        return self._transition_seat(seat_id, SeatStatus.AVAILABLE, SeatStatus.BOOKED)

    def mark_seat_available_if_booked(self, seat_id: int) -> bool:
        return self._transition_seat(seat_id, SeatStatus.BOOKED, SeatStatus.AVAILABLE)

    def _transition_seat(self, seat_id: int, current: SeatStatus, new: SeatStatus) -> bool:
        with self._lock:
            seat = self._seats.get(seat_id)
            if seat is None or seat.status is not current:
                return False
            seat.status = new
        return True

    def set_seat_status(self, seat_id: int, status: SeatStatus) -> bool:
        with self._lock:
            seat = self._seats.get(seat_id)
            if seat is None:
                return False
            seat.status = status
        return True

    def seat_exists(self, seat_id: int) -> bool:
        with self._lock:
            return seat_id in self._seats

    def find_all_theaters(self) -> list[TheaterSummary]:
        with self._lock:
            theater_ids = sorted(self._theaters, key=self._theaters.__getitem__)
        summaries = []
        for theater_id in theater_ids:
            theater = self.find_theater_with_layout(theater_id)
            if theater is None:
                continue
            summaries.append(
                TheaterSummary(
                    id=theater_id,
                    name=theater.name,
                    total_seats=theater.total_seats,
                    available_seats=theater.available_seats,
                )
            )
        return summaries

    def find_theater_with_layout(self, theater_id: int) -> Theater | None:
        with self._lock:
            if theater_id not in self._theaters:
                return None
            theater = Theater(name=self._theaters[theater_id], id=theater_id)
            sections = sorted(
                (item for item in self._sections.items() if item[1].theater_id == theater_id),
                key=lambda item: item[1].name,
            )
            for section_id, section_record in sections:
                section = theater.add_section(Section(name=section_record.name, id=section_id))
                rows = sorted(
                    (item for item in self._rows.items() if item[1].section_id == section_id),
                    key=lambda item: item[1].number,
                )
                for row_id, row_record in rows:
                    row = section.add_row(Row(number=row_record.number, id=row_id))
                    seats = sorted(
                        (item for item in self._seats.items() if item[1].row_id == row_id),
                        key=lambda item: item[1].number,
                    )
                    for seat_id, seat_record in seats:
                        row.add_seat(
                            Seat(number=seat_record.number, status=seat_record.status, id=seat_id)
                        )
        return theater

    def delete_theater(self, theater_id: int) -> bool:
        with self._lock:
            if self._theaters.pop(theater_id, None) is None:
                return False
            section_ids = {
                key for key, record in self._sections.items() if record.theater_id == theater_id
            }
            row_ids = {key for key, record in self._rows.items() if record.section_id in section_ids}
            seat_ids = {key for key, record in self._seats.items() if record.row_id in row_ids}
            for table, ids in ((self._sections, section_ids), (self._rows, row_ids), (self._seats, seat_ids)):
                for key in ids:
                    del table[key]
        return True
