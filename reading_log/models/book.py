"""
Book Model

The only table of the reading log: one row per finished book.

finish_date storage
===================
`finish_date` is stored exactly as written, an ISO `YYYY-MM-DD` string.
Rows written by older clients or by hand may hold an empty or malformed
value; the ingestion deriver reads such rows and falls back to a reading
time of 0.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from reading_log.database import Base


class Book(Base):
    """
    A finished book in the reading log.

    Table: books

    Fields:
    - id: Sequential identifier assigned at creation (never caller-supplied)
    - title, author, language, format: Free text as submitted
    - publication_year: Year the book was published
    - finish_date: ISO date the book was logged as finished
    - read_year: Year component of finish_date
    - reading_time_in_days: Days since the previous book was finished

    The primary key is not autoincremented: ids come from the deriver, so a
    concurrent insert computing the same id fails on the primary key
    instead of silently getting a different one.
    """

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=False,
    )

    title: Mapped[str | None] = mapped_column(
        String(500),
        nullable=True,
        comment="Book title"
    )

    author: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Author name(s) as submitted"
    )

    publication_year: Mapped[int | None] = mapped_column(
        Integer,
        index=True,
        nullable=True,
        comment="Year of publication"
    )

    language: Mapped[str | None] = mapped_column(
        String(50),
        nullable=True,
    )

    format: Mapped[str | None] = mapped_column(
        String(50),
        index=True,
        nullable=True,
        comment="Paper, ebook, audiobook, ..."
    )

    finish_date: Mapped[str | None] = mapped_column(
        String(10),
        nullable=True,
        comment="ISO date the book was finished"
    )

    read_year: Mapped[int | None] = mapped_column(
        Integer,
        index=True,
        nullable=True,
    )

    reading_time_in_days: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}', finish_date='{self.finish_date}')"
