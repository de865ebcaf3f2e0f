"""Geospatial helpers shared by the grid and materialization steps."""

from __future__ import annotations

import geopandas as gpd
from pyproj.exceptions import CRSError, ProjError
from shapely import GEOSException

from boscora_lib.core.definitions import WGS84_EPSG
from boscora_lib.core.exceptions import GeometryError, ProjectionError


def utm_epsg_for(lon: float, lat: float) -> int:
    """Return the WGS84 UTM zone EPSG code containing a lon/lat position."""
    zone = int((lon + 180.0) // 6.0) + 1
    zone = min(max(zone, 1), 60)
    return 32600 + zone if lat >= 0 else 32700 + zone


def to_metric_crs(gdf: gpd.GeoDataFrame) -> gpd.GeoDataFrame:
    """Project to local UTM CRS for metric operations."""
    if gdf.crs is None:
        gdf = gdf.set_crs(WGS84_EPSG)

    if gdf.crs.is_projected:
        return gdf

    try:
        centroid = gdf.union_all().centroid
    except (GEOSException, ValueError, TypeError):
        centroid = gdf.geometry.iloc[0].centroid

    epsg = utm_epsg_for(centroid.x, centroid.y)
    try:
        return gdf.to_crs(epsg)
    except (CRSError, ProjError) as e:
        raise ProjectionError(f"Failed to project to EPSG:{epsg}: {e}") from e


def boundary_area_m2(boundary_m: gpd.GeoDataFrame) -> float:
    """
    Total area of a boundary in square meters.

    Overlapping polygons are dissolved first so shared ground is counted once.

    Args:
        boundary_m: Boundary polygons in a projected metric CRS

    Returns:
        Area in square meters

    Raises:
        GeometryError: If the boundary is not in a projected CRS or is invalid
    """
    if boundary_m.empty:
        return 0.0
    if boundary_m.crs is None or not boundary_m.crs.is_projected:
        raise GeometryError("Boundary area requires a projected CRS")
    try:
        return float(boundary_m.union_all().area)
    except GEOSException as e:
        raise GeometryError(f"Invalid boundary geometry: {e}") from e
