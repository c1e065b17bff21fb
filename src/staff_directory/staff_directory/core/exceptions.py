class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a staff record does not exist."""


class DocumentError(DomainError):
    """Raised when a printable document cannot be generated or saved."""


class ConfigurationError(DomainError):
    """Raised when a required local resource (e.g. Downloads folder) cannot be resolved."""
