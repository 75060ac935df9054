"""
Book Pydantic Schemas

- BookCreate: the caller-supplied fields of a new book
- BookRecord: a complete catalog entry, used both inside the catalog core
  and as the API response
- BookCountResponse / YearCountResponse: aggregate query results

Field naming
============
Python attributes are snake_case. The wire form (API payloads, event
payloads) is camelCase: `publicationYear`, `finishDate`, `readYear`,
`readingTimeInDays`. `alias_generator=to_camel` produces those names and
`populate_by_name=True` lets Python code keep using the snake_case names.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class BookCreate(BaseModel):
    """
    Schema for creating a new book.

    Only the descriptive fields are accepted. `id`, `finishDate`, `readYear`
    and `readingTimeInDays` are derived on ingestion; if a client sends
    them anyway they are ignored.

    Example request body:
    {
        "title": "Dune",
        "author": "Frank Herbert",
        "publicationYear": 1965,
        "language": "English",
        "format": "Paperback"
    }
    """

    title: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="Book title",
        examples=["Dune", "The Fellowship of the Ring"],
    )

    author: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Author name(s)",
        examples=["Frank Herbert", "J.R.R. Tolkien"],
    )

    publication_year: int | None = Field(
        default=None,
        description="Year of publication",
        examples=[1965, 1954],
    )

    language: str | None = Field(
        default=None,
        max_length=50,
        examples=["English", "Spanish"],
    )

    format: str | None = Field(
        default=None,
        max_length=50,
        examples=["Paperback", "Ebook", "Audiobook"],
    )

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("title", "author")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        """Reject whitespace-only title and author."""
        if not v.strip():
            raise ValueError("must not be empty or whitespace")
        return v.strip()


class BookRecord(BaseModel):
    """
    A complete, persisted catalog entry.

    Records are immutable snapshots: the catalog core reads them, derives
    new ones, and never mutates an existing record.

    `finish_date` is kept as the stored ISO string (or None) so a malformed
    stored value can be carried through unchanged; `finish_date_parsed()`
    is the single place it is interpreted.
    """

    id: int = Field(..., description="Sequential identifier")
    title: str | None = None
    author: str | None = None
    publication_year: int | None = None
    language: str | None = None
    format: str | None = None
    finish_date: str | None = Field(
        default=None,
        description="ISO date (YYYY-MM-DD) the book was finished",
    )
    read_year: int | None = None
    reading_time_in_days: int | None = Field(
        default=None,
        description="Days elapsed since the previous book was finished",
    )

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        frozen=True,
        json_schema_extra={
            "example": {
                "id": 2,
                "title": "Dune",
                "author": "Frank Herbert",
                "publicationYear": 1965,
                "language": "English",
                "format": "Paperback",
                "finishDate": "2023-01-20",
                "readYear": 2023,
                "readingTimeInDays": 10,
            }
        },
    )

    def finish_date_parsed(self) -> date | None:
        """
        Parse the stored finish date.

        Returns:
            The date, or None if it is missing, blank or not an ISO date

        Raises nothing: callers treat None as "unknown".
        """
        if not self.finish_date or not self.finish_date.strip():
            return None
        try:
            return date.fromisoformat(self.finish_date.strip())
        except ValueError:
            return None

    def to_payload(self) -> dict:
        """Serialize with the camelCase field names of the wire format."""
        return self.model_dump(mode="json", by_alias=True)


class BookCountResponse(BaseModel):
    """Total number of books in the catalog."""

    count: int = Field(..., ge=0)


class YearCountResponse(BaseModel):
    """Number of books finished in a given year."""

    year: int
    count: int = Field(..., ge=0)
