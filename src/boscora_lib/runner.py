"""Main runner for boundary to parcel derivation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import geopandas as gpd
import numpy as np

from boscora_lib.config import ParcelConfig
from boscora_lib.core.exceptions import BoscoraError
from boscora_lib.grid.refiner import RefinementResult, refine_grid
from boscora_lib.parcels.io import (
    clean_boundary,
    parcels_to_geodataframe,
    read_boundary,
    save_geojson,
)
from boscora_lib.parcels.materializer import materialize_parcels
from boscora_lib.parcels.models import Parcel
from boscora_lib.selection.state import ParcelSelection
from boscora_lib.summary import ParcelSummary

logger = logging.getLogger(__name__)


@dataclass
class ParcelRun:
    """Parcels produced from one boundary load."""

    parcels: list[Parcel] = field(default_factory=list)
    refinement: Optional[RefinementResult] = None

    def selection(self) -> ParcelSelection:
        """Fresh selection state machine over the parcels."""
        return ParcelSelection(self.parcels)

    def summary(self) -> ParcelSummary:
        return ParcelSummary(self.parcels, self.refinement)


def generate_parcels(boundary: gpd.GeoDataFrame, cfg: ParcelConfig) -> ParcelRun:
    """
    Derive parcels from boundary polygons.

    Args:
        boundary: Boundary polygons in WGS84
        cfg: ParcelConfig with all settings

    Returns:
        ParcelRun with the parcels and refinement details

    Raises:
        GeometryError: If the boundary has no area

    Example:
        >>> boundary = read_boundary("Reserva Bosques de Agua.kml")
        >>> run = generate_parcels(boundary, ParcelConfig(seed=7))
        >>> len(run.parcels)
        500
    """
    refinement = refine_grid(
        boundary,
        target_count=cfg.target_count,
        shrink_factor=cfg.shrink_factor,
        max_attempts=cfg.max_attempts,
    )
    rng = np.random.default_rng(cfg.seed)
    parcels = materialize_parcels(refinement.cells, cfg, rng=rng)
    logger.info(
        "Materialized %d parcels at %.4f km after %d refinement attempts",
        len(parcels),
        refinement.side_km,
        refinement.attempts,
    )
    return ParcelRun(parcels=parcels, refinement=refinement)


def load_parcels(source: str | Path | gpd.GeoDataFrame, cfg: ParcelConfig) -> ParcelRun:
    """
    Load a boundary and derive its parcels.

    A boundary that cannot be read or gridded yields an empty run instead of
    an exception; the failure is logged.

    Args:
        source: Boundary file path or GeoDataFrame
        cfg: ParcelConfig with all settings

    Returns:
        ParcelRun, empty if the boundary is unusable
    """
    try:
        if isinstance(source, gpd.GeoDataFrame):
            boundary = clean_boundary(source)
        else:
            boundary = read_boundary(source)
        return generate_parcels(boundary, cfg)
    except BoscoraError as e:
        logger.error("No parcels generated: %s", e)
        return ParcelRun()


def save_outputs(run: ParcelRun, output_dir: str | Path) -> Path:
    """
    Write ``parcels.geojson`` and ``summary.json``.

    Returns:
        Path to the parcels GeoJSON
    """
    out_dir = Path(output_dir)
    out_geojson = out_dir / "parcels.geojson"
    save_geojson(parcels_to_geodataframe(run.parcels), out_geojson)
    run.summary().save(str(out_dir))
    return out_geojson
