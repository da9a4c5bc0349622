from django.core.management.base import BaseCommand, CommandError

from theaters.domain.errors import DomainError
from theaters.handlers.rendering import render_seating_map
from theaters.services import TheaterService
from theaters.stores import DjangoTheaterStore


class Command(BaseCommand):
    help = "Print the seating map of a theater"

    def add_arguments(self, parser):
        parser.add_argument("theater_id", type=int)

    def handle(self, *args, **options):
        service = TheaterService(DjangoTheaterStore())
        try:
            theater = service.get_theater_layout(options["theater_id"])
        except DomainError as exc:
            raise CommandError(exc.message) from exc

        if not theater.sections:
            self.stdout.write("Theater has no seating layout.")
            return
        self.stdout.write(render_seating_map(theater))
