class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class InvalidCredentialsError(AuthenticationError):
    def __init__(self, role, message=None):
        self.role = getattr(role, "value", role)
        super().__init__(message or f"Invalid credentials for {self.role}")


class AuthorizationError(DomainError):
    """Raised when a principal lacks permission for an action."""


class LifecycleError(DomainError):
    """Raised when a student status change breaks the trip lifecycle."""


class InvalidTransitionError(LifecycleError):
    def __init__(self, current, requested):
        self.current = current
        self.requested = requested
        super().__init__(
            f"Cannot move student from {getattr(current, 'value', current)} "
            f"to {getattr(requested, 'value', requested)}"
        )


class PersistenceError(DomainError):
    """Raised when the stored document cannot be read or written."""
