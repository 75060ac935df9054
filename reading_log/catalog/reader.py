"""
Catalog Reader and Writer

The catalog core never talks to the database directly. It depends on the
small reader/writer interfaces below; the SQLAlchemy implementations are
the production collaborators.

Every fetch returns a fresh list of immutable BookRecord snapshots. Nothing
is cached between calls.

Errors
======
Any SQLAlchemyError is logged and re-raised as DependencyFailure, so the
HTTP layer can answer with a server error without knowing about the store.
"""

import logging
from collections.abc import Sequence
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from reading_log.catalog.filters import Exact
from reading_log.exceptions import DependencyFailure
from reading_log.models import Book
from reading_log.schemas.book import BookRecord

logger = logging.getLogger(__name__)


# =============================================================================
# Interfaces
# =============================================================================


class CatalogReader(Protocol):
    """Read access to the full set of stored book records."""

    def fetch_all(self) -> list[BookRecord]:
        ...

    def fetch_by_id(self, book_id: int) -> BookRecord | None:
        ...

    def fetch_exact_filtered(self, predicates: Sequence[Exact]) -> list[BookRecord]:
        ...


class CatalogWriter(Protocol):
    """Insert access to the catalog store."""

    def insert(self, record: BookRecord) -> BookRecord:
        ...


# =============================================================================
# SQLAlchemy Implementations
# =============================================================================


def to_record(book: Book) -> BookRecord:
    """Snapshot an ORM row as an immutable BookRecord."""
    return BookRecord(
        id=book.id,
        title=book.title,
        author=book.author,
        publication_year=book.publication_year,
        language=book.language,
        format=book.format,
        finish_date=book.finish_date,
        read_year=book.read_year,
        reading_time_in_days=book.reading_time_in_days,
    )


class SqlCatalogReader:
    """CatalogReader over a SQLAlchemy session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def fetch_all(self) -> list[BookRecord]:
        """Fetch every record, ascending by id."""
        return self._fetch(select(Book).order_by(Book.id))

    def fetch_by_id(self, book_id: int) -> BookRecord | None:
        """Fetch one record, or None if no record has this id."""
        try:
            book = self.db.get(Book, book_id)
        except SQLAlchemyError as e:
            logger.error(f"Catalog store error fetching book {book_id}: {e}")
            raise DependencyFailure("Catalog store is unavailable") from e
        return to_record(book) if book is not None else None

    def fetch_exact_filtered(self, predicates: Sequence[Exact]) -> list[BookRecord]:
        """
        Fetch records matching all exact predicates, evaluated by the store.

        Args:
            predicates: Exact predicates on Book columns

        Returns:
            Matching records, ascending by id
        """
        stmt = select(Book)
        for predicate in predicates:
            column = getattr(Book, predicate.field)
            stmt = stmt.where(column == predicate.value)
        return self._fetch(stmt.order_by(Book.id))

    def _fetch(self, stmt) -> list[BookRecord]:
        try:
            books = self.db.execute(stmt).scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Catalog store error: {e}")
            raise DependencyFailure("Catalog store is unavailable") from e
        return [to_record(book) for book in books]


class SqlCatalogWriter:
    """CatalogWriter over a SQLAlchemy session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def insert(self, record: BookRecord) -> BookRecord:
        """
        Persist a derived record.

        A concurrent ingestion that derived the same id loses on the
        primary key and gets a DependencyFailure.

        Returns:
            The stored record

        Raises:
            DependencyFailure: If the store rejects or cannot take the write
        """
        book = Book(**record.model_dump())
        try:
            self.db.add(book)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.error(f"Book id {record.id} was taken by a concurrent insert: {e}")
            raise DependencyFailure(f"Book id {record.id} already exists") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Catalog store error inserting book {record.id}: {e}")
            raise DependencyFailure("Catalog store is unavailable") from e
        return record
