"""
Books Router

Endpoints of the reading log:

- POST /books/                      create a book (derived id, dates, reading time)
- GET  /books/                      every book, by id
- GET  /books/count                 number of books
- GET  /books/count/year?year=      number of books finished in a year
- GET  /books/search                combined search (title, author, year, readYear, language, format)
- GET  /books/search/author?author= books by author, by title
- GET  /books/search/read-year?year= books finished in a year, by id
- GET  /books/{book_id}             one book

The handlers only translate HTTP to catalog calls. Validation and store
failures raised by the catalog are turned into 400/500 responses by the
exception handlers registered in main.py.
"""

from fastapi import APIRouter, BackgroundTasks, HTTPException, Query, Request, status

from reading_log.catalog.filters import parse_int_term
from reading_log.config import get_settings
from reading_log.dependencies import BookFilters, IngestionService, QueryEngine
from reading_log.schemas import (
    BookCountResponse,
    BookCreate,
    BookRecord,
    YearCountResponse,
)
from reading_log.services.rate_limiter import limiter

settings = get_settings()

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        404: {"description": "Book not found"},
    },
)


# =============================================================================
# Create
# =============================================================================
@router.post(
    "/",
    response_model=BookRecord,
    status_code=status.HTTP_201_CREATED,
    summary="Log a finished book",
    description="Create a book. id, finishDate, readYear and readingTimeInDays are derived.",
)
@limiter.limit(settings.rate_limit_write)
def create_book(
    request: Request,
    book_data: BookCreate,
    service: IngestionService,
    background_tasks: BackgroundTasks,
) -> BookRecord:
    """
    Create a new book.

    The new book is announced on the notification channel after the
    response is sent; a failed announcement does not affect the result.
    """
    return service.ingest(book_data, schedule=background_tasks.add_task)


# =============================================================================
# Listing and Counts
# =============================================================================
@router.get(
    "/",
    response_model=list[BookRecord],
    summary="List all books",
    description="Every book in the reading log, ascending by id.",
)
@limiter.limit(settings.rate_limit_default)
def list_books(request: Request, engine: QueryEngine) -> list[BookRecord]:
    return engine.get_all()


@router.get(
    "/count",
    response_model=BookCountResponse,
    summary="Count all books",
)
@limiter.limit(settings.rate_limit_default)
def count_books(request: Request, engine: QueryEngine) -> BookCountResponse:
    return BookCountResponse(count=engine.count_all())


@router.get(
    "/count/year",
    response_model=YearCountResponse,
    summary="Count books finished in a year",
    responses={400: {"description": "Missing or non-integer year"}},
)
@limiter.limit(settings.rate_limit_default)
def count_books_by_year(
    request: Request,
    engine: QueryEngine,
    year: str | None = Query(default=None, description="Read year", examples=["2023"]),
) -> YearCountResponse:
    read_year = parse_int_term(year, "year")
    return YearCountResponse(year=read_year, count=engine.count_by_read_year(read_year))


# =============================================================================
# Searches
# =============================================================================
@router.get(
    "/search",
    response_model=list[BookRecord],
    summary="Search books",
    description=(
        "Combine any of title, author, language (case-insensitive contains) "
        "and year, readYear, format (exact). Results ascending by id."
    ),
    responses={400: {"description": "Non-integer year or readYear"}},
)
@limiter.limit(settings.rate_limit_search)
def search_books(
    request: Request,
    engine: QueryEngine,
    filters: BookFilters,
) -> list[BookRecord]:
    return engine.search(filters.to_criteria())


@router.get(
    "/search/author",
    response_model=list[BookRecord],
    summary="Search books by author",
    description="Case-insensitive partial match on author, sorted by title.",
    responses={400: {"description": "Missing author"}},
)
@limiter.limit(settings.rate_limit_search)
def search_books_by_author(
    request: Request,
    engine: QueryEngine,
    author: str | None = Query(default=None, examples=["tolkien"]),
) -> list[BookRecord]:
    return engine.search_by_author(author)


@router.get(
    "/search/read-year",
    response_model=list[BookRecord],
    summary="Search books by read year",
    responses={400: {"description": "Missing or non-integer year"}},
)
@limiter.limit(settings.rate_limit_search)
def search_books_by_read_year(
    request: Request,
    engine: QueryEngine,
    year: str | None = Query(default=None, examples=["2023"]),
) -> list[BookRecord]:
    return engine.search_by_read_year(year)


# =============================================================================
# Single Book
# =============================================================================
@router.get(
    "/{book_id}",
    response_model=BookRecord,
    summary="Get a book by ID",
)
@limiter.limit(settings.rate_limit_default)
def get_book(request: Request, book_id: int, engine: QueryEngine) -> BookRecord:
    """
    Raises:
        HTTPException: 404 if book not found
    """
    book = engine.get_by_id(book_id)
    if book is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Book with id {book_id} not found",
        )
    return book
