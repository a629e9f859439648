class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class LockedError(DomainError):
    """Raised when a gated resource is locked against mutation."""


class StorageError(DomainError):
    """Raised when the underlying store fails (including transaction aborts)."""
