"""Django ORM implementation of the TheaterStore."""

import logging
from collections.abc import Sequence
from contextlib import contextmanager

from django.db import DatabaseError, IntegrityError, close_old_connections, connections, transaction
from django.db.models import Count, Model, Q
from django.utils import timezone

from theaters import models as orm
from theaters.domain import Row, Seat, SeatStatus, Section, Theater, TheaterSummary
from theaters.domain.errors import (
    DomainError,
    DuplicateTheaterNameError,
    StoreError,
    TheaterNotFoundError,
)
from theaters.stores.interfaces import TheaterStore, check_unpersisted

logger = logging.getLogger(__name__)

AVAILABLE = SeatStatus.AVAILABLE.value
BOOKED = SeatStatus.BOOKED.value


class DjangoTheaterStore(TheaterStore):
    """Relational theater store using the Django ORM."""

    def __init__(self, using: str = "default") -> None:
        self._using = using

    def create_theater(self, name: str) -> int:
        try:
            with transaction.atomic(using=self._using):
                theater = orm.Theater.objects.using(self._using).create(name=name)
        except IntegrityError as exc:
            raise DuplicateTheaterNameError(name) from exc
        except DatabaseError as exc:
            raise StoreError(f"Could not create theater: {exc}") from exc
        return theater.pk

    def bulk_insert_layout(self, theater: Theater) -> None:
        check_unpersisted(theater)
        committed = False
        try:
            with transaction.atomic(using=self._using):
                if not orm.Theater.objects.using(self._using).filter(pk=theater.id).exists():
                    raise TheaterNotFoundError(theater.id)
                self._insert_sections(theater)
            committed = True
        except DomainError:
            raise
        except Exception as exc:
            # Drivers raise plain Python errors too, e.g. OverflowError.
            logger.warning("Layout insert for theater %s rolled back: %s", theater.id, exc)
            raise StoreError(f"Could not save layout: {exc}") from exc
        finally:
            if not committed:
                _reset_layout_ids(theater)

        logger.info(
            "Inserted layout for theater %s: %d sections, %d seats",
            theater.id,
            len(theater.sections),
            theater.total_seats,
        )

    def _insert_sections(self, theater: Theater) -> None:
        records = self._insert_batch(
            orm.Section,
            [orm.Section(theater_id=theater.id, name=section.name) for section in theater.sections],
        )
        for section, record in zip(theater.sections, records):
            section.assign_id(record.pk)
            self._insert_rows(section)

    def _insert_rows(self, section: Section) -> None:
        records = self._insert_batch(
            orm.Row,
            [orm.Row(section_id=section.id, number=row.number) for row in section.rows],
        )
        for row, record in zip(section.rows, records):
            row.assign_id(record.pk)
            self._insert_seats(row)

    def _insert_seats(self, row: Row) -> None:
        records = self._insert_batch(
            orm.Seat,
            [
                orm.Seat(row_id=row.id, number=seat.number, status=seat.status.value)
                for seat in row.seats
            ],
        )
        for seat, record in zip(row.seats, records):
            seat.assign_id(record.pk)

    def _insert_batch(self, model: type[Model], instances: Sequence[Model]) -> Sequence[Model]:
        """Insert instances so each one has its primary key set, in order."""
        if not instances:
            return instances
        if connections[self._using].features.can_return_rows_from_bulk_insert:
            return model.objects.using(self._using).bulk_create(instances)
        for instance in instances:
            instance.save(using=self._using, force_insert=True)
        return instances

    def mark_seat_booked_if_available(self, seat_id: int) -> bool:
        return self._transition_seat(seat_id, AVAILABLE, BOOKED)

    def mark_seat_available_if_booked(self, seat_id: int) -> bool:
        return self._transition_seat(seat_id, BOOKED, AVAILABLE)

    def _transition_seat(self, seat_id: int, current: str, new: str) -> bool:
        try:
            updated = (
                orm.Seat.objects.using(self._using)
                .filter(pk=seat_id, status=current)
                .update(status=new, updated_at=timezone.now())
            )
        except DatabaseError as exc:
            raise StoreError(f"Could not update seat {seat_id}: {exc}") from exc
        return updated > 0

    def set_seat_status(self, seat_id: int, status: SeatStatus) -> bool:
        try:
            updated = (
                orm.Seat.objects.using(self._using)
                .filter(pk=seat_id)
                .update(status=status.value, updated_at=timezone.now())
            )
        except DatabaseError as exc:
            raise StoreError(f"Could not update seat {seat_id}: {exc}") from exc
        return updated > 0

    def seat_exists(self, seat_id: int) -> bool:
        try:
            return orm.Seat.objects.using(self._using).filter(pk=seat_id).exists()
        except DatabaseError as exc:
            raise StoreError(f"Could not look up seat {seat_id}: {exc}") from exc

    def find_all_theaters(self) -> list[TheaterSummary]:
        seats = "sections__rows__seats"
        try:
            records = list(
                orm.Theater.objects.using(self._using)
                .annotate(
                    total_seats=Count(seats),
                    available_seats=Count(seats, filter=Q(sections__rows__seats__status=AVAILABLE)),
                )
                .order_by("name")
            )
        except DatabaseError as exc:
            raise StoreError(f"Could not list theaters: {exc}") from exc
        return [
            TheaterSummary(
                id=record.pk,
                name=record.name,
                total_seats=record.total_seats,
                available_seats=record.available_seats,
            )
            for record in records
        ]

    def find_theater_with_layout(self, theater_id: int) -> Theater | None:
        try:
            record = (
                orm.Theater.objects.using(self._using)
                .prefetch_related("sections__rows__seats")
                .get(pk=theater_id)
            )
        except orm.Theater.DoesNotExist:
            return None
        except DatabaseError as exc:
            raise StoreError(f"Could not load theater {theater_id}: {exc}") from exc

        theater = Theater(name=record.name, id=record.pk)
        for section_record in record.sections.all():
            section = theater.add_section(Section(name=section_record.name, id=section_record.pk))
            for row_record in section_record.rows.all():
                row = section.add_row(Row(number=row_record.number, id=row_record.pk))
                for seat_record in row_record.seats.all():
                    row.add_seat(
                        Seat(
                            number=seat_record.number,
                            status=SeatStatus(seat_record.status),
                            id=seat_record.pk,
                        )
                    )
        return theater

    def delete_theater(self, theater_id: int) -> bool:
        try:
            deleted, _ = orm.Theater.objects.using(self._using).filter(pk=theater_id).delete()
        except DatabaseError as exc:
            raise StoreError(f"Could not delete theater {theater_id}: {exc}") from exc
        return deleted > 0

    @contextmanager
    def worker_scope(self):
        """Give the calling thread a fresh connection and close it afterwards."""
        close_old_connections()
        try:
            yield
        finally:
            connections[self._using].close()


def _reset_layout_ids(theater: Theater) -> None:
    for entity in theater.iter_entities():
        entity.reset_id()
