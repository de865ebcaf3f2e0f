"""Custom exceptions for boscora-lib."""


class BoscoraError(Exception):
    """Base exception for boscora-lib."""

    pass


class ProjectionError(BoscoraError):
    """Raised when projection operations fail."""

    pass


class GeometryError(BoscoraError):
    """Raised when geometry operations fail."""

    pass


class BoundaryError(BoscoraError):
    """Raised when a boundary cannot be read or has no polygons."""

    pass


class ValidationError(BoscoraError):
    """Raised when input validation fails."""

    pass


class MintValidationError(ValidationError):
    """Raised when a donation is attempted without a wallet or a selection."""

    pass


class MintSubmissionError(BoscoraError):
    """Raised when the batched mint submission fails."""

    pass


class ConfigurationError(BoscoraError):
    """Raised when contract connection settings are missing."""

    pass
