"""
Catalog Filter Predicates

A search is a list of predicates combined with AND. There are two kinds:

- Exact(field, value): equality. The catalog store can evaluate these
  itself while fetching (a "push-down" filter).
- Contains(field, substring): case-insensitive substring containment.
  These are always evaluated in memory, after the fetch.

Both kinds can also be evaluated in memory with `matches()`, and the result
is the same whichever side evaluates an Exact predicate.

Usage:
    criteria = SearchCriteria(author="tolkien", publication_year="1954")
    predicates = criteria.predicates()
    exact, contains = split_predicates(predicates)
"""

import re
from dataclasses import dataclass, fields
from typing import Any

from reading_log.exceptions import ValidationFailure
from reading_log.schemas.book import BookRecord


@dataclass(frozen=True)
class Exact:
    """`record.<field> == value`."""

    field: str
    value: Any

    def matches(self, record: BookRecord) -> bool:
        actual = getattr(record, self.field)
        return actual is not None and actual == self.value


@dataclass(frozen=True)
class Contains:
    """`substring` occurs in `record.<field>`, ignoring case."""

    field: str
    substring: str

    def matches(self, record: BookRecord) -> bool:
        actual = getattr(record, self.field)
        if actual is None:
            return False
        return self.substring.lower() in str(actual).lower()


Predicate = Exact | Contains


def matches_all(record: BookRecord, predicates: list[Predicate]) -> bool:
    """AND of all predicates; an empty list matches every record."""
    return all(predicate.matches(record) for predicate in predicates)


def split_predicates(predicates: list[Predicate]) -> tuple[list[Exact], list[Contains]]:
    """Partition predicates into store-evaluable and in-memory sets."""
    exact = [p for p in predicates if isinstance(p, Exact)]
    contains = [p for p in predicates if isinstance(p, Contains)]
    return exact, contains


def is_blank(term: str | None) -> bool:
    """True for a missing or whitespace-only query term."""
    return term is None or not str(term).strip()


INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")

# Numeric terms are 32-bit signed integers
MIN_INT_TERM = -(2**31)
MAX_INT_TERM = 2**31 - 1


def parse_int_term(term: str | int | None, name: str) -> int:
    """
    Parse a numeric query term.

    Args:
        term: Raw term as received from the caller
        name: Parameter name, used in the error message

    Returns:
        The integer value

    Raises:
        ValidationFailure: If the term is missing or not a 32-bit integer
    """
    if isinstance(term, int) and not isinstance(term, bool):
        value = term
    elif is_blank(term):
        raise ValidationFailure(f"{name} parameter is required", field=name)
    elif INTEGER_PATTERN.fullmatch(str(term).strip()):
        value = int(str(term).strip())
    else:
        value = None

    if value is None or not MIN_INT_TERM <= value <= MAX_INT_TERM:
        raise ValidationFailure(
            f"Invalid {name} format: {name} must be a valid integer",
            field=name,
        )
    return value


@dataclass(frozen=True)
class SearchCriteria:
    """
    Optional criteria of a combined catalog search, as raw caller terms.

    Absent or blank terms do not constrain the result. Numeric terms are
    parsed when predicates are built, so a malformed year fails the search
    with ValidationFailure instead of silently matching nothing.
    """

    title: str | None = None
    author: str | None = None
    publication_year: str | None = None
    read_year: str | None = None
    language: str | None = None
    format: str | None = None

    # field -> (predicate kind, integer-valued)
    _KINDS = {
        "title": (Contains, False),
        "author": (Contains, False),
        "language": (Contains, False),
        "publication_year": (Exact, True),
        "read_year": (Exact, True),
        "format": (Exact, False),
    }

    def predicates(self) -> list[Predicate]:
        """Build one predicate per supplied criterion."""
        predicates: list[Predicate] = []
        for f in fields(self):
            term = getattr(self, f.name)
            if is_blank(term):
                continue
            kind, numeric = self._KINDS[f.name]
            if numeric:
                predicates.append(Exact(f.name, parse_int_term(term, to_param(f.name))))
            elif kind is Exact:
                predicates.append(Exact(f.name, str(term).strip()))
            else:
                predicates.append(Contains(f.name, str(term).strip()))
        return predicates

    @property
    def is_empty(self) -> bool:
        return all(is_blank(getattr(self, f.name)) for f in fields(self))


def to_param(field_name: str) -> str:
    """snake_case attribute name to the camelCase name callers use."""
    head, *rest = field_name.split("_")
    return head + "".join(part.title() for part in rest)
