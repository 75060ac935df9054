"""
Catalog Backup

Writes a plain-text snapshot of the whole catalog: one semicolon-separated
line per book, ordered by id, behind a header line with the wire field
names.

    id;title;author;publicationYear;language;format;finishDate;readYear;readingTimeInDays
    1;1984;George Orwell;1949;English;Paperback;2023-01-10;2023;0

Files are named backup_scheduled_YYYY-MM-DD_HH-MM-SS.txt. Run it from cron
or any scheduler with scripts/backup_catalog.py.
"""

import csv
import io
import logging
from collections.abc import Iterable
from pathlib import Path

from reading_log.catalog.clock import Clock
from reading_log.catalog.reader import CatalogReader
from reading_log.exceptions import DependencyFailure
from reading_log.schemas.book import BookRecord

logger = logging.getLogger(__name__)

BACKUP_FIELDS = [
    "id",
    "title",
    "author",
    "publicationYear",
    "language",
    "format",
    "finishDate",
    "readYear",
    "readingTimeInDays",
]


def render_backup(records: Iterable[BookRecord]) -> str:
    """
    Render records as backup text.

    Missing values are written as empty fields. Records are sorted by id
    whatever order they are given in.
    """
    buffer = io.StringIO()
    writer = csv.DictWriter(
        buffer,
        fieldnames=BACKUP_FIELDS,
        delimiter=";",
        lineterminator="\n",
    )
    writer.writeheader()
    for record in sorted(records, key=lambda r: r.id):
        payload = record.to_payload()
        writer.writerow({name: "" if payload[name] is None else payload[name] for name in BACKUP_FIELDS})
    return buffer.getvalue()


def backup_filename(clock: Clock) -> str:
    _, instant = clock.now()
    return f"backup_scheduled_{instant.strftime('%Y-%m-%d_%H-%M-%S')}.txt"


def write_backup(reader: CatalogReader, directory: str | Path, clock: Clock) -> Path:
    """
    Back up the whole catalog into a new file.

    Args:
        reader: Catalog store reader
        directory: Target directory, created if missing
        clock: Source of the timestamp in the file name

    Returns:
        Path of the written file

    Raises:
        DependencyFailure: If the store or the file system fails
    """
    records = reader.fetch_all()
    logger.info(f"Found {len(records)} books to backup")

    target = Path(directory) / backup_filename(clock)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(render_backup(records), encoding="utf-8")
    except OSError as e:
        logger.error(f"Error writing backup to {target}: {e}")
        raise DependencyFailure(f"Failed to write backup to {target}") from e

    logger.info(f"Backup written to {target}")
    return target
