from theaters.domain.models import (
    ImportOutcome,
    Row,
    Seat,
    Section,
    Theater,
    TheaterSummary,
)
from theaters.domain.value_objects import SeatRangeRecord, SeatStatus, SectionPlan

__all__ = [
    "Theater",
    "Section",
    "Row",
    "Seat",
    "TheaterSummary",
    "ImportOutcome",
    "SeatStatus",
    "SeatRangeRecord",
    "SectionPlan",
]
