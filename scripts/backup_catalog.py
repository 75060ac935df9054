#!/usr/bin/env python3
"""
Catalog Backup Script

Writes every book of the reading log to a semicolon-separated text file.

Usage:
    # From project root with venv activated:
    python scripts/backup_catalog.py

    # Options:
    python scripts/backup_catalog.py --output-dir /mnt/backups

Schedule it with cron for periodic backups, e.g. daily at 03:00:
    0 3 * * * cd /srv/reading-log && .venv/bin/python scripts/backup_catalog.py
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from reading_log.catalog.clock import SystemClock
from reading_log.catalog.reader import SqlCatalogReader
from reading_log.config import get_settings
from reading_log.database import SessionLocal
from reading_log.exceptions import DependencyFailure
from reading_log.services.backup import write_backup

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def run_backup(output_dir: str) -> Path:
    """
    Back up the catalog into output_dir.

    Returns:
        Path of the written backup file
    """
    db = SessionLocal()
    try:
        return write_backup(SqlCatalogReader(db), output_dir, SystemClock())
    finally:
        db.close()


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Back up the reading log catalog"
    )
    parser.add_argument(
        "--output-dir",
        default=get_settings().backup_dir,
        help="Directory for the backup file (default: BACKUP_DIR setting)"
    )

    args = parser.parse_args()

    try:
        path = run_backup(args.output_dir)
    except DependencyFailure as e:
        logger.error(f"Backup failed: {e.message}")
        return 1

    logger.info(f"Backup complete: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
