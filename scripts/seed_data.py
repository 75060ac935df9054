#!/usr/bin/env python3
"""
Database Seed Script

Populates the reading log with sample books for development.

USAGE:
    # Make sure you're in the project root with venv activated
    python scripts/seed_data.py

Books go through the regular ingestion path, so they get sequential ids,
today's finish date and derived reading times, exactly as if they had been
posted to the API. No notifications are published.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlalchemy.orm import Session

from reading_log.catalog.clock import SystemClock
from reading_log.catalog.reader import SqlCatalogReader, SqlCatalogWriter
from reading_log.database import SessionLocal, create_tables
from reading_log.models import Book
from reading_log.schemas import BookCreate, BookRecord
from reading_log.services.ingestion import BookIngestionService
from reading_log.services.notifications import NullNotifier

SAMPLE_BOOKS = [
    {
        "title": "1984",
        "author": "George Orwell",
        "publicationYear": 1949,
        "language": "English",
        "format": "Paperback",
    },
    {
        "title": "The Fellowship of the Ring",
        "author": "J.R.R. Tolkien",
        "publicationYear": 1954,
        "language": "English",
        "format": "Hardcover",
    },
    {
        "title": "The Two Towers",
        "author": "J.R.R. Tolkien",
        "publicationYear": 1954,
        "language": "English",
        "format": "Ebook",
    },
    {
        "title": "Dune",
        "author": "Frank Herbert",
        "publicationYear": 1965,
        "language": "English",
        "format": "Paperback",
    },
    {
        "title": "Cien años de soledad",
        "author": "Gabriel García Márquez",
        "publicationYear": 1967,
        "language": "Spanish",
        "format": "Audiobook",
    },
]


def clear_data(db: Session) -> None:
    """Clear all existing books."""
    print("Clearing existing data...")
    db.execute(delete(Book))
    db.commit()
    print("Data cleared.")


def create_books(db: Session) -> list[BookRecord]:
    """Ingest the sample books."""
    print("Creating books...")
    service = BookIngestionService(
        reader=SqlCatalogReader(db),
        writer=SqlCatalogWriter(db),
        clock=SystemClock(),
        notifier=NullNotifier(),
    )
    books = [service.ingest(BookCreate.model_validate(data)) for data in SAMPLE_BOOKS]
    print(f"Created {len(books)} books.")
    return books


def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    create_tables()
    db = SessionLocal()

    try:
        if clear_existing:
            clear_data(db)

        books = create_books(db)

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print(f"\nSummary:")
        print(f"  - Books: {len(books)}")
        print(f"\nYou can now access the API at http://localhost:8001")
        print(f"API documentation at http://localhost:8001/docs")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
