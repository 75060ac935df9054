"""
Tests for the Ingestion Deriver

Covers id assignment, finish date stamping and reading time computation,
including the degraded paths for unusable previous finish dates.
"""

from datetime import date

import pytest

from reading_log.catalog.clock import FixedClock
from reading_log.catalog.deriver import derive_fields, next_id, previous_record
from reading_log.schemas import BookCreate
from tests.fakes import make_record


@pytest.fixture
def dune() -> BookCreate:
    return BookCreate(
        title="Dune",
        author="Herbert",
        publication_year=1965,
        language="English",
        format="Paperback",
    )


class TestIdAssignment:
    """Tests for next_id and the id of derived records."""

    def test_first_book_gets_id_one(self, dune):
        """An empty catalog starts at 1."""
        record = derive_fields(dune, [], FixedClock.on(date(2023, 1, 20)))

        assert record.id == 1

    def test_id_is_max_plus_one(self, dune):
        """Gaps are not filled: the id follows the highest existing one."""
        existing = [make_record(1), make_record(7), make_record(3)]

        record = derive_fields(dune, existing, FixedClock.on(date(2023, 1, 20)))

        assert record.id == 8

    def test_next_id_ignores_order(self):
        assert next_id([make_record(5), make_record(2)]) == 6


class TestFinishDate:
    """Tests for finish_date and read_year."""

    def test_finish_date_is_today(self, dune):
        record = derive_fields(dune, [], FixedClock.on(date(2024, 12, 31)))

        assert record.finish_date == "2024-12-31"
        assert record.read_year == 2024

    def test_read_year_matches_finish_date(self, dune):
        """read_year is always the year of finish_date, across a year boundary."""
        existing = [make_record(1, finish_date="2023-12-30")]

        record = derive_fields(dune, existing, FixedClock.on(date(2024, 1, 2)))

        assert record.read_year == int(record.finish_date[:4]) == 2024
        assert record.reading_time_in_days == 3


class TestReadingTime:
    """Tests for reading_time_in_days."""

    def test_first_book_reads_zero_days(self, dune):
        record = derive_fields(dune, [], FixedClock.on(date(2023, 1, 20)))

        assert record.reading_time_in_days == 0

    def test_days_since_previous_book(self, dune):
        """Store holds one book finished 2023-01-10; Dune finishes 2023-01-20."""
        existing = [make_record(1, author="Orwell", finish_date="2023-01-10", read_year=2023)]

        record = derive_fields(dune, existing, FixedClock.on(date(2023, 1, 20)))

        assert record.id == 2
        assert record.reading_time_in_days == 10
        assert record.read_year == 2023

    def test_same_day_is_zero(self, dune):
        existing = [make_record(1, finish_date="2023-01-20")]

        record = derive_fields(dune, existing, FixedClock.on(date(2023, 1, 20)))

        assert record.reading_time_in_days == 0

    def test_previous_is_highest_id_not_latest_date(self, dune):
        """The previous book is picked by id, whatever its finish date or read year."""
        existing = [
            make_record(1, finish_date="2023-01-15", read_year=2023),
            make_record(2, finish_date="2022-12-01", read_year=2022),
        ]

        record = derive_fields(dune, existing, FixedClock.on(date(2023, 1, 20)))

        assert previous_record(existing).id == 2
        assert record.reading_time_in_days == 50

    @pytest.mark.parametrize("finish_date", [None, "", "   ", "20/01/2023", "not-a-date", "2023-02-30"])
    def test_unusable_previous_date_defaults_to_zero(self, dune, finish_date, caplog):
        """A bad stored date degrades to 0 with a warning instead of failing."""
        existing = [make_record(1, finish_date=finish_date)]

        record = derive_fields(dune, existing, FixedClock.on(date(2023, 1, 20)))

        assert record.reading_time_in_days == 0
        assert record.id == 2
        assert "reading time defaults to 0" in caplog.text

    def test_future_previous_date_gives_negative_value(self, dune):
        """An inconsistent clock is not corrected here."""
        existing = [make_record(1, finish_date="2023-01-25")]

        record = derive_fields(dune, existing, FixedClock.on(date(2023, 1, 20)))

        assert record.reading_time_in_days == -5


class TestCandidateFields:
    """Descriptive fields are copied from the candidate."""

    def test_fields_copied(self, dune):
        record = derive_fields(dune, [], FixedClock.on(date(2023, 1, 20)))

        assert record.title == "Dune"
        assert record.author == "Herbert"
        assert record.publication_year == 1965
        assert record.language == "English"
        assert record.format == "Paperback"

    def test_existing_records_untouched(self, dune):
        existing = [make_record(1, finish_date="2023-01-10")]
        before = [r.model_copy() for r in existing]

        derive_fields(dune, existing, FixedClock.on(date(2023, 1, 20)))

        assert existing == before
