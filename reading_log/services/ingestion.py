"""
Book Ingestion Service

Wraps the deriver with the I/O around it:

    fetch snapshot → derive fields → insert → announce

Store failures propagate as DependencyFailure. The announcement is
best-effort and never changes the outcome of an ingestion.
"""

import logging
from typing import Any, Callable

from reading_log.catalog.clock import Clock
from reading_log.catalog.deriver import derive_fields
from reading_log.catalog.reader import CatalogReader, CatalogWriter
from reading_log.schemas.book import BookCreate, BookRecord
from reading_log.services.notifications import Notifier

logger = logging.getLogger(__name__)

Scheduler = Callable[..., Any]


class BookIngestionService:
    """Creates books in the catalog."""

    def __init__(
        self,
        reader: CatalogReader,
        writer: CatalogWriter,
        clock: Clock,
        notifier: Notifier,
    ) -> None:
        self.reader = reader
        self.writer = writer
        self.clock = clock
        self.notifier = notifier

    def ingest(
        self,
        candidate: BookCreate,
        schedule: Scheduler | None = None,
    ) -> BookRecord:
        """
        Derive, store and announce a new book.

        Args:
            candidate: Caller-supplied book fields
            schedule: Runs the announcement later, e.g. BackgroundTasks.add_task.
                When omitted the announcement runs inline.

        Returns:
            The stored record

        Raises:
            DependencyFailure: If the catalog store fails
        """
        existing = self.reader.fetch_all()
        record = derive_fields(candidate, existing, self.clock)

        logger.info(f"Creating book: {record.title} by {record.author} with ID: {record.id}")
        stored = self.writer.insert(record)
        logger.info(f"Book created successfully with ID: {stored.id}")

        if schedule is not None:
            schedule(self._announce, stored)
        else:
            self._announce(stored)
        return stored

    def _announce(self, record: BookRecord) -> None:
        try:
            self.notifier.publish(record)
        except Exception as e:
            logger.error(f"Notification for book {record.id} failed: {e}")
