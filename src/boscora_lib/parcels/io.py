"""I/O operations for boundaries and parcels."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

import geopandas as gpd
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union

from boscora_lib.core.definitions import WGS84_EPSG
from boscora_lib.core.exceptions import BoundaryError
from boscora_lib.parcels.models import Parcel

POLYGON_TYPES = ("Polygon", "MultiPolygon")


def _polygonal(geom: BaseGeometry) -> Optional[BaseGeometry]:
    if geom.geom_type in POLYGON_TYPES:
        return geom
    if geom.geom_type == "GeometryCollection":
        parts = [g for g in geom.geoms if g.geom_type in POLYGON_TYPES]
        if parts:
            return unary_union(parts)
    return None


def _keep_polygons(gdf: gpd.GeoDataFrame, label: str) -> gpd.GeoDataFrame:
    if gdf.crs is None:
        gdf = gdf.set_crs(WGS84_EPSG)
    elif not gdf.crs.equals(WGS84_EPSG):
        gdf = gdf.to_crs(WGS84_EPSG)

    geoms = gdf.geometry[gdf.geometry.notna() & ~gdf.geometry.is_empty]
    # self-intersecting rings are common in hand-drawn KML
    geoms = [_polygonal(g) for g in geoms.make_valid()]
    geoms = [g for g in geoms if g is not None and not g.is_empty]
    if not geoms:
        raise BoundaryError(f"{label} contains no polygon features")

    return gpd.GeoDataFrame(geometry=geoms, crs=WGS84_EPSG)


def clean_boundary(gdf: gpd.GeoDataFrame) -> gpd.GeoDataFrame:
    """
    Normalize an in-memory boundary the way file boundaries are.

    Reprojects to WGS84, repairs invalid polygons and drops non-polygon
    features.

    Raises:
        BoundaryError: If no polygon remains
    """
    return _keep_polygons(gdf, "Boundary")


def read_boundary(path: str | Path) -> gpd.GeoDataFrame:
    """Read boundary polygon(s) from a KML, GeoJSON or other vector file."""
    p = Path(path)
    if not p.exists():
        raise BoundaryError(f"Boundary file not found: {p}")

    try:
        gdf = gpd.read_file(p)
    except Exception as e:
        raise BoundaryError(f"Could not read boundary file {p}: {e}") from e

    return _keep_polygons(gdf, str(p))


def boundary_from_geojson(data: dict) -> gpd.GeoDataFrame:
    """Build a boundary from a GeoJSON FeatureCollection, Feature or bare geometry mapping."""
    if not isinstance(data, dict):
        raise BoundaryError("Boundary must be a GeoJSON mapping")

    kind = data.get("type")
    if kind == "FeatureCollection":
        features = data.get("features") or []
    elif kind == "Feature":
        features = [data]
    elif kind in POLYGON_TYPES:
        features = [{"type": "Feature", "geometry": data, "properties": {}}]
    else:
        raise BoundaryError(f"Unsupported GeoJSON type: {kind}")

    features = [f for f in features if isinstance(f, dict) and f.get("geometry")]
    if not features:
        raise BoundaryError("Boundary contains no features")

    gdf = gpd.GeoDataFrame.from_features(features, crs=WGS84_EPSG)
    return _keep_polygons(gdf, "Boundary")


def parcels_to_geodataframe(parcels: Iterable[Parcel]) -> gpd.GeoDataFrame:
    """Convert parcels to a WGS84 GeoDataFrame."""
    parcels = list(parcels)
    rows = [p.properties() for p in parcels]
    return gpd.GeoDataFrame(
        rows,
        columns=["id", "name", "price", "status"],
        geometry=[p.geometry for p in parcels],
        crs=WGS84_EPSG,
    )


def save_geojson(gdf: gpd.GeoDataFrame, out_path: Path) -> None:
    """Save GeoDataFrame to GeoJSON."""
    out_path.parent.mkdir(parents=True, exist_ok=True)
    gdf.to_file(out_path, driver="GeoJSON")
