"""
Catalog Core

The derivation and query rules of the reading log. Everything here works on
BookRecord snapshots handed over by a CatalogReader; no module in this
package touches HTTP or holds state between calls.

- clock.py: injectable source of "today"
- filters.py: Exact / Contains predicates and SearchCriteria
- reader.py: store reader/writer interfaces and SQLAlchemy implementations
- deriver.py: id, finish date and reading time of a new book
- queries.py: CatalogQueryEngine
"""

from reading_log.catalog.clock import Clock, FixedClock, SystemClock
from reading_log.catalog.deriver import derive_fields
from reading_log.catalog.filters import Contains, Exact, SearchCriteria
from reading_log.catalog.queries import CatalogQueryEngine
from reading_log.catalog.reader import (
    CatalogReader,
    CatalogWriter,
    SqlCatalogReader,
    SqlCatalogWriter,
)

__all__ = [
    "CatalogQueryEngine",
    "CatalogReader",
    "CatalogWriter",
    "Clock",
    "Contains",
    "Exact",
    "FixedClock",
    "SearchCriteria",
    "SqlCatalogReader",
    "SqlCatalogWriter",
    "SystemClock",
    "derive_fields",
]
