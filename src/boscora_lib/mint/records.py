"""Mint record construction."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from shapely.geometry import Polygon

from boscora_lib.core.definitions import GEO_SCALE, INT32_MAX, INT32_MIN, GeoTagMode
from boscora_lib.core.exceptions import ValidationError
from boscora_lib.parcels.models import Parcel


@dataclass(frozen=True)
class GeoCoordinates:
    """Fixed-point coordinates stored on chain (micro-degrees)."""

    latitude: int
    longitude: int

    def as_dict(self) -> dict[str, int]:
        return {"latitude": self.latitude, "longitude": self.longitude}


@dataclass(frozen=True)
class MintRecord:
    token_id: int
    geo: GeoCoordinates

    def as_dict(self) -> dict:
        return {"token_id": self.token_id, "geo": self.geo.as_dict()}


def _to_fixed(value: float, scale: int) -> int:
    # int() truncates toward zero
    fixed = int(value * scale)
    if not INT32_MIN <= fixed <= INT32_MAX:
        raise ValidationError(f"Coordinate {value} does not fit a 32-bit fixed-point value")
    return fixed


def geo_tag(
    geometry: Polygon, mode: GeoTagMode = GeoTagMode.CENTROID, scale: int = GEO_SCALE
) -> GeoCoordinates:
    """
    Derive the on-chain coordinates of a parcel polygon.

    Args:
        geometry: Parcel polygon in WGS84
        mode: CENTROID or FIRST_VERTEX of the exterior ring
        scale: Fixed-point multiplier

    Returns:
        GeoCoordinates truncated toward zero
    """
    if geometry is None or geometry.is_empty:
        raise ValidationError("Cannot geo-tag an empty geometry")

    if GeoTagMode(mode) is GeoTagMode.FIRST_VERTEX:
        lon, lat = geometry.exterior.coords[0][:2]
    else:
        c = geometry.centroid
        lon, lat = c.x, c.y

    return GeoCoordinates(latitude=_to_fixed(lat, scale), longitude=_to_fixed(lon, scale))


def build_mint_records(
    parcels: Iterable[Parcel], mode: GeoTagMode = GeoTagMode.CENTROID
) -> list[MintRecord]:
    return [MintRecord(token_id=p.token_id, geo=geo_tag(p.geometry, mode)) for p in parcels]
