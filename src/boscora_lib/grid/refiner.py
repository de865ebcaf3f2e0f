"""Iterative grid resolution refinement."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import geopandas as gpd

from boscora_lib.core.definitions import WGS84_EPSG
from boscora_lib.core.exceptions import GeometryError
from boscora_lib.geo import boundary_area_m2, to_metric_crs
from boscora_lib.grid.generator import generate_grid

logger = logging.getLogger(__name__)


@dataclass
class RefinementResult:
    """Outcome of a refinement run."""

    cells: gpd.GeoDataFrame
    side_km: float
    attempts: int
    target_count: int

    @property
    def count(self) -> int:
        return len(self.cells)

    @property
    def reached(self) -> bool:
        return self.count >= self.target_count


def initial_side_km(area_m2: float, target_count: int) -> float:
    """Side in kilometers of the square that splits ``area_m2`` into ``target_count``."""
    return math.sqrt(area_m2 / target_count) / 1000.0


def refine_grid(
    boundary: gpd.GeoDataFrame,
    target_count: int,
    shrink_factor: float = 0.9,
    max_attempts: int = 10,
) -> RefinementResult:
    """
    Shrink the grid resolution until enough cells intersect the boundary.

    Starts from a cell side derived from the boundary area, then multiplies
    the side by ``shrink_factor`` until the intersecting cell count reaches
    ``target_count`` or ``max_attempts`` shrinks were made. Running out of
    attempts is not an error; the last grid is returned.

    Args:
        boundary: Boundary polygons, WGS84 or projected
        target_count: Number of cells wanted
        shrink_factor: Side multiplier per attempt
        max_attempts: Maximum number of shrinks

    Returns:
        RefinementResult with cells in WGS84

    Raises:
        GeometryError: If the boundary is empty or has no area
    """
    if boundary.empty:
        raise GeometryError("Cannot build a grid over an empty boundary")

    boundary_m = to_metric_crs(boundary)
    # reprojection can fold thin slivers into invalid rings
    boundary_m = boundary_m.set_geometry(boundary_m.geometry.make_valid())
    area_m2 = boundary_area_m2(boundary_m)
    if area_m2 <= 0:
        raise GeometryError("Boundary has no area")

    side_km = initial_side_km(area_m2, target_count)
    cells = generate_grid(boundary_m, side_km)
    logger.debug("Initial side %.5f km gives %d cells", side_km, len(cells))

    attempts = 0
    while len(cells) < target_count and attempts < max_attempts:
        side_km *= shrink_factor
        cells = generate_grid(boundary_m, side_km)
        attempts += 1
        logger.debug("Attempt %d: side %.5f km gives %d cells", attempts, side_km, len(cells))

    if len(cells) < target_count:
        logger.warning(
            "Refinement stopped after %d attempts with %d of %d cells (side %.5f km)",
            attempts,
            len(cells),
            target_count,
            side_km,
        )

    return RefinementResult(
        cells=cells.to_crs(WGS84_EPSG),
        side_km=side_km,
        attempts=attempts,
        target_count=target_count,
    )
