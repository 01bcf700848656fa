"""Custom domain exceptions for the application."""

# Stable, machine-readable error codes for API consumers.
NOT_FOUND = "NOT_FOUND"
VALIDATION_ERROR = "VALIDATION_ERROR"
ALREADY_PROCESSED = "ALREADY_PROCESSED"
UNAUTHORIZED = "UNAUTHORIZED"
TRANSACTION_FAILED = "TRANSACTION_FAILED"


class DomainError(Exception):
    """Base exception for domain/business logic errors."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource does not exist."""

    pass


class DomainValidationError(DomainError):
    """Raised when business rules or domain validation fail (e.g. missing fields, no stock left)."""

    pass


class AlreadyProcessedError(DomainError):
    """Raised when a return is attempted on a rental that has already been returned."""

    pass


class UnauthorizedError(DomainError):
    """Raised when the caller's credentials are missing or wrong."""

    pass


class TransactionFailedError(DomainError):
    """Raised when a multi-record write could not be committed. Nothing from it was applied."""

    pass
