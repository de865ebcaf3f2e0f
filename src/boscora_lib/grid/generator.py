"""Square grid generation and boundary filtering."""

from __future__ import annotations

import math

import geopandas as gpd
from shapely import GEOSException
from shapely.geometry import box

from boscora_lib.core.exceptions import GeometryError


def make_square_grid(
    bbox: tuple[float, float, float, float], side: float, crs
) -> gpd.GeoDataFrame:
    """
    Tile a bounding box with equal squares anchored at its lower-left corner.

    The last row and column may overhang the bbox so the tiling always covers
    it completely. Cells are enumerated row by row, bottom row first.

    Args:
        bbox: Bounding box (minx, miny, maxx, maxy)
        side: Side length of each square in CRS units
        crs: Coordinate reference system

    Returns:
        GeoDataFrame with grid cells and their enumeration index in ``cell_id``

    Raises:
        GeometryError: If side is not a positive finite number
    """
    if not (math.isfinite(side) and side > 0):
        raise GeometryError(f"Grid cell side must be positive, got {side}")

    minx, miny, maxx, maxy = bbox

    cols = max(1, math.ceil((maxx - minx) / side))
    rows = max(1, math.ceil((maxy - miny) / side))

    cells = []
    for r in range(rows):
        for c in range(cols):
            x0 = minx + c * side
            y0 = miny + r * side
            # clockwise rings starting at the south-west corner
            cells.append(box(x0, y0, x0 + side, y0 + side, ccw=False))

    return gpd.GeoDataFrame({"cell_id": range(len(cells))}, geometry=cells, crs=crs)


def filter_intersecting(grid: gpd.GeoDataFrame, boundary: gpd.GeoDataFrame) -> gpd.GeoDataFrame:
    """
    Keep grid cells that intersect at least one boundary polygon.

    Cells that only touch a boundary edge or vertex are kept. Enumeration
    order is preserved.

    Args:
        grid: Grid cells
        boundary: Boundary polygons in the same CRS as the grid

    Returns:
        GeoDataFrame with the retained cells

    Raises:
        GeometryError: If the boundary cannot be dissolved
    """
    if grid.empty or boundary.empty:
        return grid.iloc[0:0].copy()

    try:
        mask = grid.intersects(boundary.union_all())
    except GEOSException as e:
        raise GeometryError(f"Invalid boundary geometry: {e}") from e
    return grid[mask].reset_index(drop=True)


def generate_grid(boundary_m: gpd.GeoDataFrame, side_km: float) -> gpd.GeoDataFrame:
    """
    Generate the cells of a metric boundary at a given resolution.

    Args:
        boundary_m: Boundary polygons in a projected metric CRS
        side_km: Cell side in kilometers

    Returns:
        GeoDataFrame of boundary-intersecting cells in the boundary CRS
    """
    grid = make_square_grid(tuple(boundary_m.total_bounds), side_km * 1000.0, boundary_m.crs)
    return filter_intersecting(grid, boundary_m)
