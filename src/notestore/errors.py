from abc import ABC


class UserError(ABC, Exception):
    """Base class for caller-facing errors.

    All errors that inherit from UserError will have their messages
    returned to the client. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Document not found") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when user input fails validation."""


class InvalidIdentifierError(ValidationError):
    """Raised when an identifier is not a valid ObjectId hex string."""

    def __init__(self, raw: object) -> None:
        self.raw = raw
        super().__init__(f"Invalid id: {raw!r}")


class InvalidPaginationError(ValidationError):
    """Raised when page or limit is not a positive integer."""

    def __init__(self, page: int, limit: int) -> None:
        self.page = page
        self.limit = limit
        super().__init__(f"page and limit must be positive 64-bit integers, got page={page}, limit={limit}")


class DuplicateTitleError(UserError):
    """Raised when a write violates the unique title index."""

    def __init__(self, title: str | None) -> None:
        self.title = title
        super().__init__(f"Note with title {title!r} already exists")


class StorageError(Exception):
    """Base class for store-side failures.

    Messages are logged but never shown to the client.
    """

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(detail)


class QueryFailureError(StorageError):
    """Raised when a database operation fails (connectivity, server error, bad reply)."""


class QueryTimeoutError(QueryFailureError):
    """Raised when a database operation exceeds a driver or server time limit."""


class SerializationError(StorageError):
    """Raised when a request cannot be encoded as a BSON document."""


class MalformedDocumentError(StorageError):
    """Raised when a stored document lacks fields every note must have."""


class IndexSetupError(StorageError):
    """Raised when the unique title index cannot be confirmed."""
