class DomainError(Exception):
    """Base exception for business rule violations."""

    http_status = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates temporal ordering."""

    http_status = 400


class AuthenticationError(DomainError):
    """Raised when the request carries no caller identity."""

    http_status = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    http_status = 403


class NotFoundError(DomainError):
    """Raised when a record is not resolvable in the caller's scope."""

    http_status = 404


class ConflictError(DomainError):
    """Raised when a write would duplicate a day record or an open break."""

    http_status = 409


class InternalError(Exception):
    """Unexpected failure inside an operation.

    The message names the failed operation only; the underlying cause is kept
    as ``__cause__`` for logs.
    """

    http_status = 500
