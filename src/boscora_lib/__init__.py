"""boscora-lib: parcel grid derivation and donation engine for the Bosques de Agua reserve."""

__version__ = "0.1.0"

from .config import ParcelConfig
from .mint import ContractConfig, MintOrchestrator
from .runner import ParcelRun, generate_parcels, load_parcels
from .selection import ParcelSelection

__all__ = [
    "__version__",
    "ParcelConfig",
    "ParcelRun",
    "generate_parcels",
    "load_parcels",
    "ParcelSelection",
    "MintOrchestrator",
    "ContractConfig",
]
