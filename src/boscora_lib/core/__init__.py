"""Core functionality for boscora-lib."""

from boscora_lib.core.definitions import GeoTagMode, ParcelStatus
from boscora_lib.core.exceptions import (
    BoscoraError,
    BoundaryError,
    ConfigurationError,
    GeometryError,
    MintSubmissionError,
    MintValidationError,
    ProjectionError,
    ValidationError,
)

__all__ = [
    "ParcelStatus",
    "GeoTagMode",
    "BoscoraError",
    "BoundaryError",
    "ConfigurationError",
    "GeometryError",
    "MintSubmissionError",
    "MintValidationError",
    "ProjectionError",
    "ValidationError",
]
