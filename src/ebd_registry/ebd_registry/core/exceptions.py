class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or a required selection is missing."""


class LockedError(DomainError):
    """Raised when a registration write is attempted while the system is locked."""


class UploadError(DomainError):
    """Raised when any receipt file failed to persist."""


class PersistenceError(DomainError):
    """Raised when the store fails to read or write."""


class NoDataError(DomainError):
    """Raised when a report query found nothing to report on."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""
