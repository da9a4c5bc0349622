from django.core.management.base import BaseCommand, CommandError

from theaters.domain import SectionPlan
from theaters.domain.errors import DomainError
from theaters.services import TheaterService
from theaters.stores import DjangoTheaterStore


def parse_section_plan(value: str) -> SectionPlan:
    """Parse ``[NAME:]SEATS,SEATS,...`` into a SectionPlan, one count per row."""
    name, _, counts = value.rpartition(":")
    try:
        seats_per_row = tuple(int(count) for count in counts.split(","))
    except ValueError as exc:
        raise CommandError(f"Invalid section '{value}': seat counts must be integers") from exc
    return SectionPlan(name=name.strip() or None, seats_per_row=seats_per_row)


class Command(BaseCommand):
    help = "Create a theater, optionally with a uniform or custom seating layout"

    def add_arguments(self, parser):
        parser.add_argument("name")
        parser.add_argument("--sections", type=int)
        parser.add_argument("--rows", type=int, help="Rows per section")
        parser.add_argument("--seats", type=int, help="Seats per row")
        parser.add_argument(
            "--section",
            action="append",
            dest="section_plans",
            metavar="[NAME:]SEATS,...",
            help="Add a custom section with one seat count per row, e.g. Stalls:10,12,14",
        )

    def handle(self, *args, **options):
        layout = [options["sections"], options["rows"], options["seats"]]
        uniform = any(value is not None for value in layout)
        if uniform and None in layout:
            raise CommandError("--sections, --rows and --seats must be given together")
        if uniform and options["section_plans"]:
            raise CommandError("--section cannot be combined with --sections, --rows and --seats")

        service = TheaterService(DjangoTheaterStore())
        try:
            if options["section_plans"]:
                plans = [parse_section_plan(value) for value in options["section_plans"]]
                theater = service.create_custom_layout(options["name"], plans)
                theater_id, total_seats = theater.id, theater.total_seats
            elif uniform:
                theater = service.create_uniform_layout(options["name"], *layout)
                theater_id, total_seats = theater.id, theater.total_seats
            else:
                theater_id = service.create_theater(options["name"])
                total_seats = 0
        except DomainError as exc:
            raise CommandError(exc.message) from exc

        self.stdout.write(
            self.style.SUCCESS(
                f"Theater '{options['name'].strip()}' created with ID {theater_id} "
                f"({total_seats} seats)"
            )
        )
