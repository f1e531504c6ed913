class DomainError(Exception):
    """Base class for errors raised by application services."""

    status_code = 400


class ValidationError(DomainError):
    """Payload rejected by a domain rule (unknown field, wrong type, bad transition)."""

    status_code = 400


class PermissionDenied(DomainError):
    """Caller lacks the role required for the operation. No write was performed."""

    status_code = 403


class NotFoundError(DomainError):
    """Referenced logbook, page type, section or member does not exist."""

    status_code = 404


class ConflictError(DomainError):
    status_code = 409


class PersistenceError(DomainError):
    """
    Transient storage failure.

    Writes are upserts on a composite key, so the caller may retry the
    same request safely.
    """

    status_code = 503


class AuthenticationError(DomainError):
    status_code = 401
