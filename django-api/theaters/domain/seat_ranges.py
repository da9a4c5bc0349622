"""Seat range file parsing and validation.

A seat range file is CSV with the header ``section,row,seat_start,seat_end``
and an optional fifth ``status`` column. Each data line describes an
inclusive run of seat numbers within one row of one section.

Parsing stops at the first malformed line. Validation then checks the whole
parsed file and reports every violation together.
"""

import csv
import re
from collections.abc import Iterable, Sequence
from pathlib import Path

from theaters.domain.errors import (
    EmptyLayoutError,
    LayoutValidationError,
    SeatRangeFormatError,
    SourceError,
)
from theaters.domain.value_objects import SeatRangeRecord, SeatStatus

REQUIRED_COLUMNS = ("section", "row", "seat_start", "seat_end")
STATUS_COLUMN = "status"

# Row and seat numbers are stored as 32-bit signed integers.
MIN_NUMBER = -(2**31)
MAX_NUMBER = 2**31 - 1
MAX_SEATS_PER_FILE = 100_000

_INTEGER = re.compile(r"[+-]?[0-9]{1,10}")


def parse_seat_ranges(lines: Iterable[str]) -> list[SeatRangeRecord]:
    """Parse seat range lines, header first, into records.

    Raises:
        SeatRangeFormatError: On an empty source, a wrong header, or the first
            data line that cannot be parsed.
    """
    reader = csv.reader(lines)
    header = next(reader, None)
    if header is None:
        raise SeatRangeFormatError("Seat range file is empty")
    _check_header(header)

    records = []
    # Header is line 1.
    for line_number, fields in enumerate(reader, start=2):
        records.append(_parse_line(fields, line_number))
    return records


def _check_header(header: Sequence[str]) -> None:
    columns = tuple(column.strip().lower() for column in header)
    if columns[:4] != REQUIRED_COLUMNS or len(columns) > 5:
        raise SeatRangeFormatError(
            "Invalid CSV headers. Expected: section, row, seat_start, seat_end [, status]"
        )
    if len(columns) == 5 and columns[4] != STATUS_COLUMN:
        raise SeatRangeFormatError("Fifth column must be 'status' if present")


def _parse_line(fields: Sequence[str], line_number: int) -> SeatRangeRecord:
    if len(fields) < 4:
        raise SeatRangeFormatError(
            f"Invalid data at line {line_number}: insufficient columns"
        )

    row_number, seat_start, seat_end = (_parse_number(value, line_number) for value in fields[1:4])

    status = SeatStatus.AVAILABLE
    if len(fields) > 4 and fields[4].strip():
        try:
            status = SeatStatus.from_string(fields[4])
        except ValueError as exc:
            raise SeatRangeFormatError(
                f"Invalid seat status at line {line_number}: {exc}"
            ) from exc

    return SeatRangeRecord(
        section_name=fields[0].strip(),
        row_number=row_number,
        seat_start=seat_start,
        seat_end=seat_end,
        status=status,
        line_number=line_number,
    )


def _parse_number(value: str, line_number: int) -> int:
    text = value.strip()
    if _INTEGER.fullmatch(text) is None or not MIN_NUMBER <= int(text) <= MAX_NUMBER:
        raise SeatRangeFormatError(
            f"Invalid number format at line {line_number}: '{text}'"
        )
    return int(text)


def _has_valid_range(record: SeatRangeRecord) -> bool:
    return 1 <= record.seat_start <= record.seat_end


def validate_seat_ranges(records: Sequence[SeatRangeRecord]) -> None:
    """Check range, naming and duplicate rules across every record.

    Raises:
        EmptyLayoutError: If there are no records.
        LayoutValidationError: With every violation found, in line order.
    """
    if not records:
        raise EmptyLayoutError()

    # Counted without expanding any range.
    total_seats = sum(record.seat_count for record in records if _has_valid_range(record))
    too_many_seats = total_seats > MAX_SEATS_PER_FILE

    violations = []
    seen = set()
    for record in records:
        prefix = f"Line {record.line_number}"

        if record.seat_start < 1 or record.seat_end < 1:
            violations.append(f"{prefix}: Seat numbers must be positive")
        if record.seat_start > record.seat_end:
            violations.append(f"{prefix}: seat_start cannot be greater than seat_end")
        if record.row_number < 1:
            violations.append(f"{prefix}: Row number must be positive")
        if not record.section_name:
            violations.append(f"{prefix}: Section name cannot be empty")

        if too_many_seats or not _has_valid_range(record):
            continue
        for seat_number in record.seat_numbers:
            key = (record.section_name, record.row_number, seat_number)
            if key in seen:
                violations.append(
                    f"{prefix}: Duplicate seat found: "
                    f"{record.section_name}-{record.row_number}-{seat_number}"
                )
            seen.add(key)

    if too_many_seats:
        violations.append(
            f"Seat ranges describe {total_seats} seats; at most {MAX_SEATS_PER_FILE} "
            "are allowed per file"
        )
    if violations:
        raise LayoutValidationError(violations)


def read_seat_range_file(path: Path) -> list[SeatRangeRecord]:
    """Parse a seat range file from disk.

    Raises:
        SourceError: If the file cannot be read or decoded.
        SeatRangeFormatError: If its contents are malformed.
    """
    try:
        with path.open(newline="", encoding="utf-8-sig") as handle:
            return parse_seat_ranges(handle)
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceError(f"Error reading seat range file: {exc}") from exc
