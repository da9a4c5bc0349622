"""Plain-text seating map rendering."""

from theaters.domain import Seat, SeatStatus, Theater

STATUS_LABELS = {
    SeatStatus.AVAILABLE: "Available",
    SeatStatus.BOOKED: "Booked",
    SeatStatus.RESERVED: "Reserved",
    SeatStatus.OUT_OF_ORDER: "Out of Order",
}

LEGEND = "Legend: [##] = Available, [X] = Booked, [R] = Reserved, [-] = Out of Order"


def seat_cell(seat: Seat) -> str:
    if seat.status is SeatStatus.AVAILABLE:
        return f"[{seat.number:2d}]"
    return {
        SeatStatus.BOOKED: " [X]",
        SeatStatus.RESERVED: " [R]",
        SeatStatus.OUT_OF_ORDER: " [-]",
    }[seat.status]


def render_seating_map(theater: Theater) -> str:
    total = theater.total_seats
    available = theater.available_seats
    lines = [
        f"=== Seating Map for {theater.name} ===",
        f"Total Seats: {total} | Available: {available} | Booked: {total - available}",
        "",
    ]
    for section in theater.sections:
        lines.append(
            f"Section: {section.name} "
            f"(Available: {section.available_seats}/{section.total_seats})"
        )
        for row in section.rows:
            cells = " ".join(seat_cell(seat) for seat in row.seats)
            lines.append(f"  Row {row.number:2d}: {cells}")
        lines.append("")
    lines.append(LEGEND)
    return "\n".join(lines)
