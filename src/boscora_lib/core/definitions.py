"""Core definitions for boscora-lib.

This module contains enumeration types and constants shared by the parcel
engine, the selection state machine and the mint orchestrator.

Classes:
    ParcelStatus: Lifecycle status of a parcel.
    GeoTagMode: Policy used to derive a mint geo-tag from a parcel polygon.
"""

from enum import Enum

WGS84_EPSG = 4326

# Fixed-point scale of on-chain coordinates (micro-degrees)
GEO_SCALE = 1_000_000

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


class ParcelStatus(str, Enum):
    """Parcel status.

    Attributes:
        AVAILABLE: Parcel can be selected and donated.
        DONATED: Parcel is part of the reserve. Terminal.
    """

    AVAILABLE = "available"
    DONATED = "donated"


class GeoTagMode(str, Enum):
    """Representative point used for a parcel's on-chain coordinates.

    Attributes:
        CENTROID: Polygon centroid.
        FIRST_VERTEX: First vertex of the exterior ring, matching parcels
            minted by the first release of the dapp.
    """

    CENTROID = "centroid"
    FIRST_VERTEX = "first_vertex"
