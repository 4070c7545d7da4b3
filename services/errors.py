# services/errors.py


class ReadStreamError(Exception):
    """Base class for errors raised by the service layer."""
    pass


class UpstreamUnavailable(ReadStreamError):
    """Raised when the upstream news provider cannot serve a request."""
    pass


class NotFoundError(ReadStreamError):
    """Raised when an identifier cannot be resolved in any tier."""
    pass


class ConflictError(ReadStreamError):
    """Raised when a write would duplicate an existing record."""
    pass


class PermissionDeniedError(ReadStreamError):
    pass


class ValidationFailedError(ReadStreamError):
    pass


class AuthenticationError(ReadStreamError):
    pass
