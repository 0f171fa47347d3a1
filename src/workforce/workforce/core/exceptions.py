class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400
    kind = "domain_error"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    status_code = 400
    kind = "validation_error"


class AuthenticationError(DomainError):
    """Raised when the request carries no usable identity."""

    status_code = 401
    kind = "authentication_error"


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403
    kind = "authorization_error"


class NotFoundError(DomainError):
    """Raised when a transition needs state that does not exist."""

    status_code = 404
    kind = "not_found"


class ConflictError(DomainError):
    """Raised when a transition is invalid for the current state."""

    status_code = 409
    kind = "conflict"


class PersistenceError(DomainError):
    """Raised when the store is unavailable or a write failed. Retryable."""

    status_code = 503
    kind = "persistence_error"
