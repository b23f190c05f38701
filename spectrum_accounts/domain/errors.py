class DomainError(Exception):
    """Base class for all domain-level errors."""

    pass


class ValidationFailure(DomainError):
    """Input is malformed (empty email, weak password, ...)."""

    pass


class UserNotFound(DomainError):
    """No user matches the lookup criteria (e.g., email)."""

    pass


class UserAlreadyExists(DomainError):
    """Another account already uses the given email."""

    pass


class Unauthorized(DomainError):
    """Caller's token does not grant the requested action."""

    pass


class CodeNotFound(DomainError):
    """No outstanding code for the subject (never issued, consumed or expired)."""

    pass


class InvalidCode(DomainError):
    """Submitted code does not match the stored one."""

    pass


class StorageFailure(DomainError):
    """Verification cache unreachable or write rejected."""

    pass


class NotificationFailure(DomainError):
    """Template unreadable or the mail relay refused/failed the send."""

    pass
