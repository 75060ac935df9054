"""
Ingestion Deriver

Turns a new book submission into a complete BookRecord:

1. id: one more than the highest existing id (1 for an empty catalog)
2. finish_date / read_year: today, according to the injected clock
3. reading_time_in_days: days between the previous record's finish date
   and today. The previous record is the one with the highest id, not the
   latest finish date.

The derivation is a pure function of the candidate, the existing records
and the clock. It is not atomic with the insert that follows it: two
concurrent ingestions can derive the same id, and the store's primary key
decides which one wins.
"""

import logging
from collections.abc import Sequence

from reading_log.catalog.clock import Clock, today
from reading_log.schemas.book import BookCreate, BookRecord

logger = logging.getLogger(__name__)


def next_id(existing: Sequence[BookRecord]) -> int:
    """max(existing ids) + 1, or 1 for an empty catalog."""
    return max((record.id for record in existing), default=0) + 1


def previous_record(existing: Sequence[BookRecord]) -> BookRecord | None:
    """The most recently created record (highest id), if any."""
    return max(existing, key=lambda record: record.id, default=None)


def derive_fields(
    candidate: BookCreate,
    existing: Sequence[BookRecord],
    clock: Clock,
) -> BookRecord:
    """
    Derive the system-assigned fields of a new book.

    Args:
        candidate: The caller-supplied fields
        existing: Snapshot of every record currently in the catalog
        clock: Source of "today"

    Returns:
        The full record, ready to be inserted

    A missing or unparseable finish date on the previous record is not an
    error: reading time falls back to 0 and a warning is logged. A negative
    reading time (previous finish date in the future) is returned as is.
    """
    finish_date = today(clock)
    previous = previous_record(existing)

    reading_time = 0
    if previous is not None:
        previous_finish = previous.finish_date_parsed()
        if previous_finish is None:
            logger.warning(
                f"Previous book {previous.id} has unusable finish date "
                f"{previous.finish_date!r}; reading time defaults to 0"
            )
        else:
            reading_time = (finish_date - previous_finish).days

    return BookRecord(
        id=next_id(existing),
        title=candidate.title,
        author=candidate.author,
        publication_year=candidate.publication_year,
        language=candidate.language,
        format=candidate.format,
        finish_date=finish_date.isoformat(),
        read_year=finish_date.year,
        reading_time_in_days=reading_time,
    )
