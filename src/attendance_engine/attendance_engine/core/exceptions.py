class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConfigurationError(DomainError):
    """Raised on programmer errors, e.g. an unrecognized clock event kind."""


class StoreUnavailableError(DomainError):
    """Raised when the attendance store cannot answer a read."""
