"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class InvalidInputError(AppError):
    """Raised when a user-supplied value fails validation."""

    def __init__(self, message: str):
        super().__init__(message, code="INVALID_INPUT")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class FeedUnavailableError(AppError):
    """Raised when a quote cannot be fetched for a symbol."""

    def __init__(self, symbol: str, reason: str = "price feed unavailable"):
        self.symbol = symbol
        super().__init__(f"Quote unavailable for {symbol}: {reason}", code="FEED_UNAVAILABLE")


class PersistenceError(AppError):
    """Raised when durable storage cannot be read or written."""

    def __init__(self, message: str):
        super().__init__(message, code="PERSISTENCE_FAILURE")


class SnapshotImportError(AppError):
    """Raised when an import document is malformed."""

    def __init__(self, message: str):
        super().__init__(message, code="IMPORT_ERROR")
