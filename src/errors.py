"""
Errors - Exception hierarchy for the Graylog reconciler.

Every failure raised by the transport, the resource clients, the reconcilers
and the title lookups derives from GraylogError. Nothing in this package
retries or substitutes a default; callers see these exceptions directly.
"""

from typing import Optional


class GraylogError(Exception):
    """Base class for all reconciler errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(GraylogError):
    """Raised when a caller supplies an empty or missing required value."""


class TransportError(GraylogError):
    """Raised when a request cannot be built, sent, or decoded."""

    def __init__(self, method: str, path: str, message: str):
        self.method = method
        self.path = path
        super().__init__(f"{method} {path}: {message}")


class APIError(GraylogError):
    """Raised when the Graylog API answers with a non-2xx status."""

    def __init__(self, status: int, body: str, method: str = "", path: str = ""):
        self.status = status
        self.body = body
        self.method = method
        self.path = path
        super().__init__(
            f"{method} {path} failed with status {status}: {body}".strip()
        )

    @property
    def not_found(self) -> bool:
        return self.status == 404


class NotFoundError(GraylogError):
    """Raised when a lookup by id or title resolves to no record."""

    def __init__(self, message: str, title: Optional[str] = None):
        self.title = title
        super().__init__(message)


class ResourceNotFoundError(APIError, NotFoundError):
    """
    A 404 answer from the API.

    Still an APIError (status and raw body are kept), and also catchable as
    NotFoundError by callers that only care about absence.
    """

    def __init__(self, body: str, method: str = "", path: str = ""):
        APIError.__init__(self, 404, body, method, path)
        self.title = None


class AmbiguousResultError(GraylogError):
    """Raised when a title lookup matches more than one record."""

    def __init__(self, label: str, title: str, count: int):
        self.title = title
        self.count = count
        super().__init__(
            f"Multiple {label}s found with title: {title}. Please use id instead."
        )
