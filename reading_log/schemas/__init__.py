"""
Pydantic Schemas Package

Pydantic models for request/response validation and for the records the
catalog core works with.

Schema Naming Convention:
- BookCreate: Fields accepted when creating a new record
- BookRecord: A full catalog entry (also the API response)
- XxxResponse: Aggregate responses
"""

from reading_log.schemas.book import (
    BookCountResponse,
    BookCreate,
    BookRecord,
    YearCountResponse,
)

__all__ = [
    "BookCreate",
    "BookRecord",
    "BookCountResponse",
    "YearCountResponse",
]
