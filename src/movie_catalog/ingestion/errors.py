"""
Exceptions raised by the ingestion pipeline.

FetchError, ParseError, CoercionError and PersistenceError abort the
processing of one candidate. PartialCommitError signals that the catalog
writer failed after the movie row was already inserted and must be reported
separately.
"""


class IngestionError(Exception):
    """Base class for ingestion failures."""


class FetchError(IngestionError):
    """Transport failure, timeout or non-success HTTP response."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch {url}: {reason}")


class ParseError(IngestionError):
    """Feed or detail document that cannot be parsed."""


class CoercionError(IngestionError):
    """Numeric field text that cannot be converted."""

    def __init__(self, field: str, value):
        self.field = field
        self.value = value
        super().__init__(f"Cannot convert {field}={value!r} to a number")


class PersistenceError(IngestionError):
    """A catalog store operation failed."""


class PartialCommitError(PersistenceError):
    """Genre associations failed after the movie row was inserted."""

    def __init__(self, title: str, cause: Exception, rolled_back: bool):
        self.title = title
        self.cause = cause
        self.rolled_back = rolled_back
        state = "rolled back" if rolled_back else "ROLLBACK FAILED, catalog may hold an orphan movie"
        super().__init__(
            f"Genre associations failed for '{title}' after movie insert ({state}): {cause}"
        )
