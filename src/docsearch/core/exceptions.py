"""Domain exceptions surfaced to API callers."""

from __future__ import annotations

from collections.abc import Iterable


class DocSearchError(Exception):
    """Base exception for docsearch domain errors."""


class ValidationError(DocSearchError):
    """Raised when input is malformed or a required value is missing.

    Every detected violation is collected in ``errors``; the message is the
    comma-joined list so callers see all problems at once.
    """

    def __init__(self, errors: str | Iterable[str]) -> None:
        self.errors = [errors] if isinstance(errors, str) else list(errors)
        super().__init__(", ".join(self.errors))


class NotFoundError(DocSearchError):
    """Raised when a collection or document does not exist."""


class ConflictError(DocSearchError):
    """Raised when a write collides with an existing resource."""


class UpstreamUnavailable(DocSearchError):
    """Raised when the search engine failed or timed out. Safe to retry."""

    retryable = True


class UnexpectedError(DocSearchError):
    """Raised for failures with no more specific category."""


class UnauthorizedError(DocSearchError):
    """Raised when request credentials are missing or wrong."""


class ReadOnlyError(DocSearchError):
    """Raised for data-modifying requests while updates are disabled."""
