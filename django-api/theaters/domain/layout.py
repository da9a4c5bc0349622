"""Builders that turn records or layout dimensions into a Theater tree."""

from collections.abc import Iterable, Sequence

from theaters.domain.errors import InvalidLayoutError
from theaters.domain.models import Row, Seat, Section, Theater
from theaters.domain.value_objects import SeatRangeRecord, SectionPlan


def materialize_layout(theater_id: int, records: Iterable[SeatRangeRecord]) -> Theater:
    """Fold validated seat range records into a layout for an existing theater.

    Sections and rows are created on first sight and reused by later records.
    Records must already be validated; duplicates are not checked here.
    """
    theater = Theater(name=f"Theater {theater_id}", id=theater_id)
    sections: dict[str, Section] = {}
    rows: dict[tuple[str, int], Row] = {}

    for record in records:
        section = sections.get(record.section_name)
        if section is None:
            section = theater.add_section(Section(name=record.section_name))
            sections[record.section_name] = section

        row_key = (record.section_name, record.row_number)
        row = rows.get(row_key)
        if row is None:
            row = section.add_row(Row(number=record.row_number))
            rows[row_key] = row

        for seat_number in record.seat_numbers:
            row.add_seat(Seat(number=seat_number, status=record.status))

    return theater


def build_uniform_layout(
    theater: Theater, sections: int, rows_per_section: int, seats_per_row: int
) -> Theater:
    """Fill ``theater`` with identical sections named "Section 1".."Section N"."""
    if sections <= 0 or rows_per_section <= 0 or seats_per_row <= 0:
        raise InvalidLayoutError()

    plans = [
        SectionPlan(name=None, seats_per_row=(seats_per_row,) * rows_per_section)
        for _ in range(sections)
    ]
    return build_custom_layout(theater, plans)


def build_custom_layout(theater: Theater, plans: Sequence[SectionPlan]) -> Theater:
    """Fill ``theater`` with one section per plan, rows numbered from 1.

    A plan without a name gets "Section <position>".
    """
    names = check_section_plans(plans)

    for name, plan in zip(names, plans):
        section = theater.add_section(Section(name=name))
        for row_number, seat_count in enumerate(plan.seats_per_row, start=1):
            row = section.add_row(Row(number=row_number))
            for seat_number in range(1, seat_count + 1):
                row.add_seat(Seat(number=seat_number))

    return theater


def check_section_plans(plans: Sequence[SectionPlan]) -> list[str]:
    """Validate plans and return the resolved section names in order.

    Raises:
        InvalidLayoutError: If there are no plans, a plan has no rows or a row
            without seats, or two sections resolve to the same name.
    """
    if not plans:
        raise InvalidLayoutError("A layout needs at least one section")

    names = []
    for position, plan in enumerate(plans, start=1):
        if not plan.seats_per_row:
            raise InvalidLayoutError(f"Section {position} needs at least one row")
        if any(count <= 0 for count in plan.seats_per_row):
            raise InvalidLayoutError(f"Section {position} has a row without seats")
        name = (plan.name or "").strip() or f"Section {position}"
        if name in names:
            raise InvalidLayoutError(f"Section name '{name}' is used more than once")
        names.append(name)
    return names
