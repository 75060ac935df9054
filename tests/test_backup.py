"""
Tests for catalog backups.
"""

from datetime import datetime

import pytest

from reading_log.catalog.clock import FixedClock
from reading_log.catalog.reader import SqlCatalogReader
from reading_log.exceptions import DependencyFailure
from reading_log.services.backup import backup_filename, render_backup, write_backup
from tests.fakes import FailingCatalog, InMemoryCatalog, make_record

HEADER = "id;title;author;publicationYear;language;format;finishDate;readYear;readingTimeInDays"


class TestRenderBackup:
    """Tests for the backup text format."""

    def test_header_only_for_empty_catalog(self):
        assert render_backup([]) == HEADER + "\n"

    def test_lines_sorted_by_id(self):
        records = [
            make_record(2, title="Emma", author="Austen", publication_year=1815,
                        finish_date="2023-02-01", reading_time_in_days=12),
            make_record(1, title="Dune", author="Herbert", publication_year=1965,
                        finish_date="2023-01-20"),
        ]

        lines = render_backup(records).splitlines()

        assert lines == [
            HEADER,
            "1;Dune;Herbert;1965;English;Paperback;2023-01-20;2023;0",
            "2;Emma;Austen;1815;English;Paperback;2023-02-01;2023;12",
        ]

    def test_missing_values_are_empty(self):
        record = make_record(1, language=None, format=None, publication_year=None)

        line = render_backup([record]).splitlines()[1]

        assert line == "1;Book 1;Unknown;;;;2023-01-01;2023;0"

    def test_separator_in_value_is_quoted(self):
        record = make_record(1, title="Yes; No")

        line = render_backup([record]).splitlines()[1]

        assert line.startswith('1;"Yes; No";')


class TestWriteBackup:
    """Tests for writing backup files."""

    def test_filename(self):
        clock = FixedClock(datetime(2023, 1, 20, 3, 4, 5))

        assert backup_filename(clock) == "backup_scheduled_2023-01-20_03-04-05.txt"

    def test_writes_file(self, tmp_path):
        catalog = InMemoryCatalog([make_record(2), make_record(1)])
        clock = FixedClock(datetime(2023, 1, 20, 3, 0, 0))

        path = write_backup(catalog, tmp_path / "backups", clock)

        assert path == tmp_path / "backups" / "backup_scheduled_2023-01-20_03-00-00.txt"
        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines[0] == HEADER
        assert [line.split(";")[0] for line in lines[1:]] == ["1", "2"]

    def test_backup_from_database(self, tmp_path, db_session, library):
        path = write_backup(SqlCatalogReader(db_session), tmp_path, FixedClock(datetime(2023, 6, 1)))

        lines = path.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 6
        assert lines[4] == "4;Cien años de soledad;Gabriel García Márquez;1967;Spanish;Paperback;2023-04-15;2023;45"

    def test_unwritable_directory(self, tmp_path):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("")

        with pytest.raises(DependencyFailure):
            write_backup(InMemoryCatalog([make_record(1)]), blocker, FixedClock(datetime(2023, 1, 1)))

    def test_store_down(self, tmp_path):
        with pytest.raises(DependencyFailure):
            write_backup(FailingCatalog(), tmp_path, FixedClock(datetime(2023, 1, 1)))

        assert list(tmp_path.iterdir()) == []
