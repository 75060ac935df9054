"""
SQLAlchemy Models Package

The catalog store holds a single table, `books`.

Import models here to:
1. Make them available as: from reading_log.models import Book
2. Register their tables on Base.metadata for create_tables()
"""

from reading_log.models.book import Book

__all__ = [
    "Book",
]
