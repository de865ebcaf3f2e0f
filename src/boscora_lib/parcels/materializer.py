"""Turn refined grid cells into priced, status-tagged parcels."""

from __future__ import annotations

import logging
from typing import Optional

import geopandas as gpd
import numpy as np

from boscora_lib.config import ParcelConfig
from boscora_lib.core.definitions import WGS84_EPSG, ParcelStatus
from boscora_lib.parcels.models import Parcel

logger = logging.getLogger(__name__)


def parcel_id(ordinal: int, prefix: str = "lot-") -> str:
    return f"{prefix}{ordinal}"


def parcel_name(ordinal: int, prefix: str = "Parcela BDA-") -> str:
    return f"{prefix}{ordinal + 1:03d}"


def assign_statuses(
    count: int, target_count: int, donated_count: int, rng: np.random.Generator
) -> list[ParcelStatus]:
    """
    Shuffle the fixed donated/available multiset and return its first ``count`` labels.

    Args:
        count: Number of labels needed (at most target_count)
        target_count: Size of the multiset
        donated_count: Donated labels in the multiset
        rng: Random generator used for the permutation

    Returns:
        List of statuses, uniformly permuted
    """
    labels = np.array(
        [ParcelStatus.DONATED.value] * donated_count
        + [ParcelStatus.AVAILABLE.value] * (target_count - donated_count)
    )
    shuffled = rng.permutation(labels)
    return [ParcelStatus(label) for label in shuffled[:count]]


def materialize_parcels(
    cells: gpd.GeoDataFrame,
    config: ParcelConfig,
    rng: Optional[np.random.Generator] = None,
) -> list[Parcel]:
    """
    Create exactly ``config.target_count`` parcels from refined cells.

    Cells are taken in grid enumeration order and truncated, never
    resampled. When fewer cells are available every cell becomes a parcel.

    Args:
        cells: Boundary-intersecting cells
        config: ParcelConfig with counts, prefixes and price policy
        rng: Random generator; a new one seeded from config.seed if omitted

    Returns:
        List of parcels ordered by ordinal
    """
    if rng is None:
        rng = np.random.default_rng(config.seed)

    if cells.crs is not None and not cells.crs.equals(WGS84_EPSG):
        cells = cells.to_crs(WGS84_EPSG)

    selected = cells.geometry.iloc[: config.target_count]
    count = len(selected)
    if count < config.target_count:
        logger.warning(
            "Only %d cells available, materializing %d of %d parcels",
            count,
            count,
            config.target_count,
        )

    statuses = assign_statuses(count, config.target_count, config.donated_count, rng)
    prices = config.price_policy.draw(count, rng)

    return [
        Parcel(
            id=parcel_id(idx, config.id_prefix),
            ordinal=idx,
            name=parcel_name(idx, config.name_prefix),
            price=prices[idx],
            status=statuses[idx],
            geometry=geom,
        )
        for idx, geom in enumerate(selected)
    ]
