"""
Catalog Exceptions

Error taxonomy shared by the catalog core, the services and the HTTP layer.

- ValidationFailure: a query term is missing or malformed (client error, 400)
- DependencyFailure: the catalog store or another external collaborator
  failed (server error, 500)

"Not found" is not an exception: lookups return None and the router turns
that into a 404.
"""


class ReadingLogError(Exception):
    """Base class for all reading log errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationFailure(ReadingLogError):
    """A query term is missing, blank or not of the expected type."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class DependencyFailure(ReadingLogError):
    """An external collaborator (store, backup target) failed."""
