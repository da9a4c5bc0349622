"""Concurrent seat layout imports from CSV seat range files.

Each file runs through parse -> validate -> materialize -> bulk insert as an
independent job on a bounded thread pool. Every job ends in an ImportOutcome;
a failing job never affects its siblings or the caller.
"""

import logging
from collections.abc import Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from os import PathLike
from pathlib import Path

from django.conf import settings

from theaters.domain import ImportOutcome
from theaters.domain.errors import DomainError, SourceError
from theaters.domain.layout import materialize_layout
from theaters.domain.seat_ranges import read_seat_range_file, validate_seat_ranges
from theaters.stores.interfaces import TheaterStore

logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 10 * 1024 * 1024
ALLOWED_EXTENSION = ".csv"
DEFAULT_MAX_WORKERS = 5


class LayoutImporter:
    """Imports seat range files into an existing theater."""

    def __init__(self, store: TheaterStore, max_workers: int = DEFAULT_MAX_WORKERS) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._store = store
        self._max_workers = max_workers

    @classmethod
    def from_settings(cls, store: TheaterStore) -> "LayoutImporter":
        """Build an importer sized by the THEATER_IMPORT_MAX_WORKERS setting."""
        return cls(store, getattr(settings, "THEATER_IMPORT_MAX_WORKERS", DEFAULT_MAX_WORKERS))

    def import_files(
        self, paths: Sequence[str | PathLike], theater_id: int
    ) -> list[ImportOutcome]:
        """Import every file concurrently; outcomes follow the order of ``paths``."""
        if not paths:
            return []

        with ThreadPoolExecutor(
            max_workers=self._max_workers, thread_name_prefix="layout-import"
        ) as executor:
            futures = [executor.submit(self._run_job, path, theater_id) for path in paths]
            outcomes = [_outcome_of(future, path) for future, path in zip(futures, paths)]

        failed = sum(1 for outcome in outcomes if not outcome.success)
        logger.info(
            "Imported %d file(s) into theater %s, %d failed", len(outcomes), theater_id, failed
        )
        return outcomes

    def _run_job(self, path: str | PathLike, theater_id: int) -> ImportOutcome:
        with self._store.worker_scope():
            return self.import_file(path, theater_id)

    def import_file(self, path: str | PathLike, theater_id: int) -> ImportOutcome:
        """Run the whole import pipeline for one file on the calling thread."""
        source = str(path)
        try:
            records = self._load(path)
            validate_seat_ranges(records)
            layout = materialize_layout(theater_id, records)
            self._store.bulk_insert_layout(layout)
        except DomainError as exc:
            logger.warning("Import of %s failed: %s", source, exc)
            return ImportOutcome(source=source, success=False, message=str(exc))
        except Exception as exc:
            logger.exception("Unexpected error importing %s", source)
            return ImportOutcome(source=source, success=False, message=f"Unexpected error: {exc}")

        message = f"Imported {len(records)} seat ranges ({layout.total_seats} seats)"
        logger.info("%s: %s", source, message)
        return ImportOutcome(
            source=source, success=True, message=message, records_processed=len(records)
        )

    def _load(self, path: str | PathLike):
        check_source(path)
        return read_seat_range_file(Path(path))


def check_source(path: str | PathLike) -> None:
    """Raise SourceError unless ``path`` is an existing CSV file within the size limit."""
    if not str(path).strip():
        raise SourceError("File path cannot be empty")

    source = Path(path)
    if not source.is_file():
        raise SourceError(f"File does not exist: {path}")
    if source.suffix.lower() != ALLOWED_EXTENSION:
        raise SourceError("Unsupported file type. Only CSV files are supported.")

    try:
        size = source.stat().st_size
    except OSError as exc:
        raise SourceError(f"Cannot read file size: {exc}") from exc
    if size > MAX_FILE_SIZE:
        raise SourceError("File size exceeds maximum allowed size of 10MB")


def _outcome_of(future: Future, path: str | PathLike) -> ImportOutcome:
    try:
        return future.result()
    except Exception as exc:
        logger.exception("Import worker for %s crashed", path)
        return ImportOutcome(source=str(path), success=False, message=f"Unexpected error: {exc}")
