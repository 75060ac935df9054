"""
Catalog Query Engine

Answers every read shape of the catalog from a fresh snapshot fetched per
call:

- get_by_id: exact lookup, None when absent
- get_all: every record, ascending by id
- search_by_author: case-insensitive substring on author, sorted by title
- search_by_read_year: exact read year, ascending by id
- search: combined multi-field filter (AND), ascending by id
- count_all / count_by_read_year: cardinality of the matching searches

Filtering strategy
==================
Exact predicates (publication year, read year, format) are handed to the
store with fetch_exact_filtered() when push-down is enabled; substring
predicates are always applied after the fetch. All predicates are then
re-checked in memory, so the result never depends on whether the store
filtered anything.

Usage:
    engine = CatalogQueryEngine(SqlCatalogReader(db))
    books = engine.search(SearchCriteria(author="tolkien", publication_year="1954"))
"""

import logging

from reading_log.catalog.filters import (
    Contains,
    Exact,
    Predicate,
    SearchCriteria,
    is_blank,
    matches_all,
    parse_int_term,
    split_predicates,
)
from reading_log.catalog.reader import CatalogReader
from reading_log.exceptions import ValidationFailure
from reading_log.schemas.book import BookRecord

logger = logging.getLogger(__name__)


def by_id(record: BookRecord) -> int:
    return record.id


def by_title(record: BookRecord) -> tuple[str, int]:
    """Case-insensitive title, ties broken by id for a stable order."""
    return ((record.title or "").casefold(), record.id)


class CatalogQueryEngine:
    """
    Read-only queries over the catalog.

    Args:
        reader: Catalog store reader
        push_down: Let the store evaluate exact predicates while fetching
    """

    def __init__(self, reader: CatalogReader, push_down: bool = True) -> None:
        self.reader = reader
        self.push_down = push_down

    # -------------------------------------------------------------------------
    # Single-record and full-catalog reads
    # -------------------------------------------------------------------------
    def get_by_id(self, book_id: int) -> BookRecord | None:
        """Return the record with this id, or None if there is none."""
        return self.reader.fetch_by_id(book_id)

    def get_all(self) -> list[BookRecord]:
        """Every record, ascending by id."""
        return sorted(self.reader.fetch_all(), key=by_id)

    def count_all(self) -> int:
        return len(self.get_all())

    # -------------------------------------------------------------------------
    # Searches
    # -------------------------------------------------------------------------
    def search_by_author(self, author: str | None) -> list[BookRecord]:
        """
        Books whose author contains the term, ignoring case.

        Raises:
            ValidationFailure: If the author term is missing or blank
        """
        if is_blank(author):
            raise ValidationFailure("Author parameter is required", field="author")

        term = author.strip()
        logger.info(f"Searching books by author: {term}")
        results = self._select([Contains("author", term)])
        return sorted(results, key=by_title)

    def search_by_read_year(self, year: str | int | None) -> list[BookRecord]:
        """
        Books finished in the given year.

        Raises:
            ValidationFailure: If year is missing or not an integer
        """
        read_year = parse_int_term(year, "year")
        return sorted(self._select([Exact("read_year", read_year)]), key=by_id)

    def count_by_read_year(self, year: str | int | None) -> int:
        return len(self.search_by_read_year(year))

    def search(self, criteria: SearchCriteria) -> list[BookRecord]:
        """
        Combined search. Supplied criteria are ANDed; blank ones are ignored.

        Raises:
            ValidationFailure: If a numeric criterion is not an integer
        """
        predicates = criteria.predicates()
        logger.debug(f"Catalog search with predicates: {predicates}")
        return sorted(self._select(predicates), key=by_id)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------
    def _select(self, predicates: list[Predicate]) -> list[BookRecord]:
        exact, _ = split_predicates(predicates)
        if self.push_down and exact:
            candidates = self.reader.fetch_exact_filtered(exact)
        else:
            candidates = self.reader.fetch_all()
        return [record for record in candidates if matches_all(record, predicates)]
