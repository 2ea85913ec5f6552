from typing import Any


class StringAnalyzerError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 400

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        # Extra fields merged into the error response body
        self.context = context


class InvalidInputError(StringAnalyzerError):
    """Value is malformed or rejected by policy (e.g. empty string)."""

    status_code = 400


class ConflictError(StringAnalyzerError):
    """Value has already been analyzed and stored."""

    status_code = 409


class NotFoundError(StringAnalyzerError):
    """Lookup or delete target does not exist."""

    status_code = 404


class ConflictingFiltersError(StringAnalyzerError):
    """Parsed query produced filters no string can satisfy."""

    status_code = 422
