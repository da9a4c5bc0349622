"""Domain error codes for the theaters module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    INVALID_FORMAT = "INVALID_FORMAT"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    EMPTY_LAYOUT = "EMPTY_LAYOUT"
    INVALID_SOURCE = "INVALID_SOURCE"
    STORE_FAILURE = "STORE_FAILURE"
    DUPLICATE_THEATER_NAME = "DUPLICATE_THEATER_NAME"
    THEATER_NOT_FOUND = "THEATER_NOT_FOUND"
    SEAT_NOT_FOUND = "SEAT_NOT_FOUND"
    INVALID_THEATER_NAME = "INVALID_THEATER_NAME"
    INVALID_LAYOUT = "INVALID_LAYOUT"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class SeatRangeFormatError(DomainError):
    """Raised when a seat range file has a malformed header or line."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_FORMAT, message=message)


class LayoutValidationError(DomainError):
    """Raised with every rule violation found in a parsed seat range file."""

    def __init__(self, violations: list[str]) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION_FAILED,
            message="Data validation failed:\n" + "\n".join(violations),
        )
        self.violations = tuple(violations)


class EmptyLayoutError(DomainError):
    """Raised when a seat range file has a header but no data lines."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.EMPTY_LAYOUT,
            message="No valid seat data found in seat range file",
        )


class SourceError(DomainError):
    """Raised when an import source is missing, unreadable or not acceptable."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_SOURCE, message=message)


class StoreError(DomainError):
    """Raised when the backing store fails or rejects a write."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.STORE_FAILURE, message=message)


class DuplicateTheaterNameError(DomainError):
    """Raised when a theater name is already taken."""

    def __init__(self, name: str) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_THEATER_NAME,
            message=f"Theater with name '{name}' already exists",
        )
        self.name = name


class TheaterNotFoundError(DomainError):
    """Raised when a theater is not found."""

    def __init__(self, theater_id: int | None) -> None:
        super().__init__(
            code=ErrorCode.THEATER_NOT_FOUND,
            message=f"Theater {theater_id} not found",
        )
        self.theater_id = theater_id


class SeatNotFoundError(DomainError):
    """Raised when a seat is not found."""

    def __init__(self, seat_id: int) -> None:
        super().__init__(
            code=ErrorCode.SEAT_NOT_FOUND,
            message=f"Seat {seat_id} not found",
        )
        self.seat_id = seat_id


class InvalidTheaterNameError(DomainError):
    """Raised when a theater name is blank."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_THEATER_NAME,
            message="Theater name cannot be empty",
        )


class InvalidLayoutError(DomainError):
    """Raised when layout dimensions are not positive."""

    def __init__(self, message: str = "All layout parameters must be positive") -> None:
        super().__init__(code=ErrorCode.INVALID_LAYOUT, message=message)
