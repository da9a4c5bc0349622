"""Tests for TheaterStore implementations.

Contract tests run against both the Django ORM store and the in-memory store.
Run with: pytest tests/test_stores.py -v
"""

import pytest
from django.db import OperationalError, connection

from theaters import models as orm
from theaters.domain import Row, Seat, SeatRangeRecord, SeatStatus, Section, Theater
from theaters.domain.errors import DuplicateTheaterNameError, StoreError, TheaterNotFoundError
from theaters.domain.layout import materialize_layout
from theaters.stores import DjangoTheaterStore, InMemoryTheaterStore

RECORDS = [
    SeatRangeRecord("Orchestra", 2, 1, 10),
    SeatRangeRecord("Orchestra", 1, 1, 10, SeatStatus.RESERVED),
    SeatRangeRecord("Balcony", 1, 1, 8),
]


@pytest.fixture(params=["memory", "django"])
def store(request):
    if request.param == "memory":
        return InMemoryTheaterStore()
    request.getfixturevalue("db")
    return DjangoTheaterStore()


def keyed_ids(theater: Theater) -> dict[tuple, int]:
    """Map (section, row, seat) keys to ids across a layout."""
    ids = {}
    for section in theater.sections:
        ids[(section.name,)] = section.id
        for row in section.rows:
            ids[(section.name, row.number)] = row.id
            for seat in row.seats:
                ids[(section.name, row.number, seat.number)] = seat.id
    return ids


def fail_every_query(execute, sql, params, many, context):
    raise OperationalError("database is unavailable")


def duplicate_seat_layout(theater_id: int) -> Theater:
    theater = Theater(name=f"Theater {theater_id}", id=theater_id)
    row = theater.add_section(Section(name="Broken")).add_row(Row(number=1))
    row.add_seat(Seat(number=1))
    row.add_seat(Seat(number=1))
    return theater


class TestCreateTheater:
    """Tests for create_theater."""

    def test_returns_new_id(self, store):
        """Each theater gets its own id."""
        first = store.create_theater("Alpha")
        second = store.create_theater("Beta")
        assert first != second

    def test_duplicate_name(self, store):
        """A taken name raises DuplicateTheaterNameError."""
        store.create_theater("Alpha")
        with pytest.raises(DuplicateTheaterNameError):
            store.create_theater("Alpha")


class TestBulkInsertLayout:
    """Tests for atomic layout persistence."""

    def test_assigns_ids_in_submission_order(self, store):
        """Every entity gets an id, and ids point at the matching stored rows."""
        theater_id = store.create_theater("Main")
        layout = materialize_layout(theater_id, RECORDS)
        store.bulk_insert_layout(layout)

        ids = keyed_ids(layout)
        assert None not in ids.values()
        assert len(set(ids.values())) == len(ids)
        assert keyed_ids(store.find_theater_with_layout(theater_id)) == ids

    def test_round_trip(self, store):
        """Loading returns the same names, numbers and statuses, sorted."""
        theater_id = store.create_theater("Main")
        store.bulk_insert_layout(materialize_layout(theater_id, RECORDS))

        loaded = store.find_theater_with_layout(theater_id)
        assert loaded.name == "Main"
        assert [section.name for section in loaded.sections] == ["Balcony", "Orchestra"]
        orchestra = loaded.sections[1]
        assert [row.number for row in orchestra.rows] == [1, 2]
        assert [seat.number for seat in orchestra.rows[0].seats] == list(range(1, 11))
        assert {seat.status for seat in orchestra.rows[0].seats} == {SeatStatus.RESERVED}
        assert loaded.total_seats == 28
        assert loaded.available_seats == 18

    def test_unknown_theater(self, store):
        """Inserting under a missing theater fails and leaves no ids."""
        layout = materialize_layout(999, RECORDS)
        with pytest.raises(TheaterNotFoundError):
            store.bulk_insert_layout(layout)
        assert all(entity.id is None for entity in layout.iter_entities())

    def test_failure_rolls_back_everything(self, store):
        """A rejected seat undoes the sections and rows written before it."""
        theater_id = store.create_theater("Main")
        layout = duplicate_seat_layout(theater_id)

        with pytest.raises(StoreError):
            store.bulk_insert_layout(layout)

        assert all(entity.id is None for entity in layout.iter_entities())
        assert store.find_theater_with_layout(theater_id).sections == []

    def test_unexpected_error_mid_insert_rolls_back(self, store, monkeypatch):
        """Any exception during the insert becomes a StoreError with no ids left behind."""
        assign_id = Seat.assign_id

        def failing_assign_id(seat, value):
            if seat.number == 5:
                raise RuntimeError("driver crashed")
            assign_id(seat, value)

        theater_id = store.create_theater("Main")
        layout = materialize_layout(theater_id, RECORDS)
        monkeypatch.setattr(Seat, "assign_id", failing_assign_id)

        with pytest.raises(StoreError, match="driver crashed"):
            store.bulk_insert_layout(layout)

        assert all(entity.id is None for entity in layout.iter_entities())
        assert store.find_theater_with_layout(theater_id).sections == []

    def test_rejects_already_persisted_entities(self, store):
        """A layout carrying ids is refused before anything is assigned or written."""
        theater_id = store.create_theater("Main")
        layout = materialize_layout(theater_id, RECORDS)
        preset = layout.sections[1].rows[0].seats[0]
        preset.id = 42

        with pytest.raises(StoreError, match="already persisted"):
            store.bulk_insert_layout(layout)

        assert preset.id == 42
        assert all(entity.id is None for entity in layout.iter_entities() if entity is not preset)
        assert store.find_theater_with_layout(theater_id).sections == []

    def test_existing_section_name_rejects_second_import(self, store):
        """A second layout reusing a section name fails without touching the first."""
        theater_id = store.create_theater("Main")
        store.bulk_insert_layout(materialize_layout(theater_id, RECORDS))

        with pytest.raises(StoreError):
            store.bulk_insert_layout(
                materialize_layout(
                    theater_id, [SeatRangeRecord("Annex", 1, 1, 4), SeatRangeRecord("Balcony", 9, 1, 2)]
                )
            )
        loaded = store.find_theater_with_layout(theater_id)
        assert [section.name for section in loaded.sections] == ["Balcony", "Orchestra"]
        assert loaded.total_seats == 28


class TestSeatTransitions:
    """Tests for conditional status updates."""

    @pytest.fixture
    def seat_id(self, store):
        theater_id = store.create_theater("Main")
        layout = materialize_layout(theater_id, [SeatRangeRecord("A", 1, 1, 1)])
        store.bulk_insert_layout(layout)
        return layout.sections[0].rows[0].seats[0].id

    def test_book_available_seat(self, store, seat_id):
        """AVAILABLE -> BOOKED succeeds once."""
        assert store.mark_seat_booked_if_available(seat_id) is True
        assert store.mark_seat_booked_if_available(seat_id) is False

    def test_cancel_requires_booking(self, store, seat_id):
        """BOOKED -> AVAILABLE applies only to booked seats."""
        assert store.mark_seat_available_if_booked(seat_id) is False
        store.mark_seat_booked_if_available(seat_id)
        assert store.mark_seat_available_if_booked(seat_id) is True

    def test_unknown_seat(self, store, seat_id):
        """Updates on a missing seat report False."""
        assert store.mark_seat_booked_if_available(seat_id + 1000) is False
        assert store.set_seat_status(seat_id + 1000, SeatStatus.RESERVED) is False
        assert store.seat_exists(seat_id) is True
        assert store.seat_exists(seat_id + 1000) is False

    def test_reserved_seat_cannot_be_booked(self, store, seat_id):
        """Only AVAILABLE seats can be booked."""
        assert store.set_seat_status(seat_id, SeatStatus.RESERVED) is True
        assert store.mark_seat_booked_if_available(seat_id) is False


class TestQueries:
    """Tests for listing, loading and deleting theaters."""

    def test_find_all_theaters_with_counts(self, store):
        """Summaries are ordered by name with total and available counts."""
        zeta = store.create_theater("Zeta")
        alpha = store.create_theater("Alpha")
        layout = materialize_layout(zeta, RECORDS)
        store.bulk_insert_layout(layout)
        store.mark_seat_booked_if_available(layout.sections[1].rows[0].seats[0].id)

        summaries = store.find_all_theaters()
        assert [(s.id, s.name) for s in summaries] == [(alpha, "Alpha"), (zeta, "Zeta")]
        assert (summaries[0].total_seats, summaries[0].available_seats) == (0, 0)
        assert (summaries[1].total_seats, summaries[1].available_seats) == (28, 17)

    def test_find_missing_theater(self, store):
        """Loading an unknown id returns None."""
        assert store.find_theater_with_layout(12345) is None

    def test_delete_theater_cascades(self, store):
        """Deleting a theater removes its layout."""
        theater_id = store.create_theater("Main")
        layout = materialize_layout(theater_id, RECORDS)
        store.bulk_insert_layout(layout)
        seat_id = layout.sections[0].rows[0].seats[0].id

        assert store.delete_theater(theater_id) is True
        assert store.delete_theater(theater_id) is False
        assert store.find_theater_with_layout(theater_id) is None
        assert store.seat_exists(seat_id) is False


@pytest.mark.django_db
class TestDjangoStore:
    """Django-specific persistence behaviour."""

    def test_one_at_a_time_fallback(self, django_store, monkeypatch):
        """Without bulk key returns, rows are saved singly and still get ids."""
        monkeypatch.setattr(type(connection.features), "can_return_rows_from_bulk_insert", False)
        theater_id = django_store.create_theater("Fallback")
        layout = materialize_layout(theater_id, RECORDS)

        django_store.bulk_insert_layout(layout)

        for seat in layout.sections[0].rows[0].seats:
            assert orm.Seat.objects.get(pk=seat.id).number == seat.number
        assert orm.Seat.objects.filter(row__section__theater_id=theater_id).count() == 28

    def test_rollback_leaves_no_rows(self, django_store):
        """A failed insert leaves no section or row records behind."""
        theater_id = django_store.create_theater("Main")
        with pytest.raises(StoreError):
            django_store.bulk_insert_layout(duplicate_seat_layout(theater_id))
        assert not orm.Section.objects.filter(theater_id=theater_id).exists()
        assert not orm.Row.objects.exists()

    def test_driver_overflow_becomes_store_error(self, django_store):
        """Numbers the database cannot hold fail as StoreError and leave no ids."""
        theater_id = django_store.create_theater("Main")
        layout = materialize_layout(theater_id, [SeatRangeRecord("A", 1, 1, 2)])
        layout.add_section(Section(name="B")).add_row(Row(number=99999999999999999999))

        with pytest.raises(StoreError):
            django_store.bulk_insert_layout(layout)

        assert all(entity.id is None for entity in layout.iter_entities())
        assert not orm.Section.objects.filter(theater_id=theater_id).exists()

    @pytest.mark.parametrize(
        "operation",
        [
            lambda store: store.find_all_theaters(),
            lambda store: store.find_theater_with_layout(1),
            lambda store: store.delete_theater(1),
            lambda store: store.seat_exists(1),
        ],
        ids=["find_all_theaters", "find_theater_with_layout", "delete_theater", "seat_exists"],
    )
    def test_read_failures_become_store_errors(self, django_store, operation):
        """Database errors on reads and deletes surface as StoreError."""
        with connection.execute_wrapper(fail_every_query):
            with pytest.raises(StoreError):
                operation(django_store)

    def test_booking_stamps_updated_at(self, django_store):
        """Conditional updates refresh updated_at."""
        theater_id = django_store.create_theater("Main")
        layout = materialize_layout(theater_id, [SeatRangeRecord("A", 1, 1, 1)])
        django_store.bulk_insert_layout(layout)
        seat = orm.Seat.objects.get()
        before = seat.updated_at

        django_store.mark_seat_booked_if_available(seat.pk)

        seat.refresh_from_db()
        assert seat.status == SeatStatus.BOOKED.value
        assert seat.updated_at >= before
