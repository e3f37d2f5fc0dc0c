class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when no authenticated user is attached to the request."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class RecordNotFoundError(DomainError):
    """Raised when an action needs a record that does not exist."""


class DuplicateRecordError(DomainError):
    """Raised when a second record is attempted for the same user and date."""


class InvalidIntervalError(ValidationError):
    """Raised when a check-out precedes its check-in."""


class OutsideWindowError(DomainError):
    """Raised when an action is submitted outside its time window."""
