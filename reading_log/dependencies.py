"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle.

The catalog core is built per request from these pieces:

    get_db ─→ get_catalog_reader ─→ get_query_engine
        └──→ get_ingestion_service ←─ get_clock, get_notifier

Tests swap any of them with app.dependency_overrides (for example a
FixedClock in place of the system clock).
"""

from typing import Annotated

from fastapi import Depends, Query
from sqlalchemy.orm import Session

from reading_log.catalog.clock import Clock, SystemClock
from reading_log.catalog.filters import SearchCriteria
from reading_log.catalog.queries import CatalogQueryEngine
from reading_log.catalog.reader import SqlCatalogReader, SqlCatalogWriter
from reading_log.database import get_db
from reading_log.services.ingestion import BookIngestionService
from reading_log.services.notifications import Notifier, get_notifier

DbSession = Annotated[Session, Depends(get_db)]


# =============================================================================
# Catalog Collaborators
# =============================================================================
def get_clock() -> Clock:
    """Clock used for finish dates."""
    return SystemClock()


def get_catalog_reader(db: DbSession) -> SqlCatalogReader:
    return SqlCatalogReader(db)


def get_query_engine(
    reader: SqlCatalogReader = Depends(get_catalog_reader),
) -> CatalogQueryEngine:
    return CatalogQueryEngine(reader)


def get_ingestion_service(
    db: DbSession,
    clock: Clock = Depends(get_clock),
    notifier: Notifier = Depends(get_notifier),
) -> BookIngestionService:
    return BookIngestionService(
        reader=SqlCatalogReader(db),
        writer=SqlCatalogWriter(db),
        clock=clock,
        notifier=notifier,
    )


QueryEngine = Annotated[CatalogQueryEngine, Depends(get_query_engine)]
IngestionService = Annotated[BookIngestionService, Depends(get_ingestion_service)]


# =============================================================================
# Book Search Filters
# =============================================================================
class BookSearchParams:
    """
    Query parameters of the combined book search.

    Every parameter is optional; the supplied ones are combined with AND.
    Values are taken as raw strings so that a malformed year is reported
    by the catalog as a 400 with a clear message.

    Usage:
        GET /api/v1/books/search?author=tolkien&year=1954
        GET /api/v1/books/search?readYear=2023&format=ebook
    """

    def __init__(
        self,
        title: str | None = Query(
            default=None,
            description="Title contains (case-insensitive)",
            examples=["ring"],
        ),
        author: str | None = Query(
            default=None,
            description="Author contains (case-insensitive)",
            examples=["tolkien"],
        ),
        year: str | None = Query(
            default=None,
            description="Publication year (exact)",
            examples=["1954"],
        ),
        read_year: str | None = Query(
            default=None,
            alias="readYear",
            description="Year the book was finished (exact)",
            examples=["2023"],
        ),
        language: str | None = Query(
            default=None,
            description="Language contains (case-insensitive)",
            examples=["english"],
        ),
        format: str | None = Query(
            default=None,
            description="Format (exact)",
            examples=["Paperback"],
        ),
    ) -> None:
        self.title = title
        self.author = author
        self.year = year
        self.read_year = read_year
        self.language = language
        self.format = format

    def to_criteria(self) -> SearchCriteria:
        return SearchCriteria(
            title=self.title,
            author=self.author,
            publication_year=self.year,
            read_year=self.read_year,
            language=self.language,
            format=self.format,
        )


BookFilters = Annotated[BookSearchParams, Depends()]
