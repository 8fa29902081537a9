class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when the addressed entity does not exist."""


class RecordNotFoundError(NotFoundError):
    """Raised when a clock record does not exist."""


class ConflictError(DomainError):
    """Business-rule conflict. `code` lets API clients branch on the specific case."""

    code = "CONFLICT"


class AlreadyClockedInError(ConflictError):
    code = "ALREADY_CLOCKED_IN"


class AlreadyClockedOutError(ConflictError):
    code = "ALREADY_CLOCKED_OUT"


class InvalidTimeRangeError(ConflictError):
    code = "INVALID_TIME_RANGE"
