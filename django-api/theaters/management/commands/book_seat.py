from django.core.management.base import BaseCommand, CommandError

from theaters.domain.errors import DomainError
from theaters.services import TheaterService
from theaters.stores import DjangoTheaterStore


class Command(BaseCommand):
    help = "Book a seat by section, row and seat number, or cancel its booking"

    def add_arguments(self, parser):
        parser.add_argument("theater_id", type=int)
        parser.add_argument("section")
        parser.add_argument("row", type=int)
        parser.add_argument("seat", type=int)
        parser.add_argument("--cancel", action="store_true", help="Cancel instead of book")

    def handle(self, *args, **options):
        service = TheaterService(DjangoTheaterStore())
        try:
            theater = service.get_theater_layout(options["theater_id"])
            seat = service.find_seat(theater, options["section"], options["row"], options["seat"])
            if seat is None:
                raise CommandError("Seat not found.")

            if options["cancel"]:
                done = service.cancel_booking(seat.id)
                success, failure = "Booking cancelled successfully!", "Selected seat is not booked."
            else:
                done = service.book_seat(seat.id)
                success, failure = (
                    "Seat booked successfully!",
                    "Failed to book seat. It may have been booked by someone else.",
                )
        except DomainError as exc:
            raise CommandError(exc.message) from exc

        if not done:
            raise CommandError(failure)
        self.stdout.write(self.style.SUCCESS(success))
