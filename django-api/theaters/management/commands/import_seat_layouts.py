from django.core.management.base import BaseCommand, CommandError

from theaters.services import LayoutImporter
from theaters.stores import DjangoTheaterStore


class Command(BaseCommand):
    help = "Import seat range CSV files into an existing theater, several at a time"

    def add_arguments(self, parser):
        parser.add_argument("theater_id", type=int)
        parser.add_argument("paths", nargs="+", help="Seat range CSV files")

    def handle(self, *args, **options):
        paths = options["paths"]
        self.stdout.write(f"Processing {len(paths)} file(s)...")

        importer = LayoutImporter.from_settings(DjangoTheaterStore())
        outcomes = importer.import_files(paths, options["theater_id"])

        for outcome in outcomes:
            line = (
                f"File: {outcome.source} | Records: {outcome.records_processed} "
                f"| {outcome.message}"
            )
            style = self.style.SUCCESS if outcome.success else self.style.ERROR
            self.stdout.write(style(line))

        failed = [outcome for outcome in outcomes if not outcome.success]
        if failed:
            raise CommandError(f"{len(failed)} of {len(outcomes)} import(s) failed")
