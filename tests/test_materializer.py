"""Tests for parcel materialization."""

from collections import Counter

import geopandas as gpd
import numpy as np
import pytest
from shapely.geometry import box

from boscora_lib.config import ParcelConfig
from boscora_lib.core.definitions import ParcelStatus
from boscora_lib.parcels.materializer import (
    assign_statuses,
    materialize_parcels,
    parcel_id,
    parcel_name,
)
from boscora_lib.parcels.pricing import RandomPrice


def _cells(n):
    """n tiny cells in WGS84 laid out along a row."""
    geoms = [box(-64.6 + i * 0.001, -31.4, -64.599 + i * 0.001, -31.399) for i in range(n)]
    return gpd.GeoDataFrame({"cell_id": range(n)}, geometry=geoms, crs="EPSG:4326")


class TestNaming:
    """Tests for id and name derivation."""

    def test_parcel_id(self):
        assert parcel_id(0) == "lot-0"
        assert parcel_id(499) == "lot-499"

    def test_parcel_name_is_one_based_and_padded(self):
        assert parcel_name(0) == "Parcela BDA-001"
        assert parcel_name(41) == "Parcela BDA-042"
        assert parcel_name(999) == "Parcela BDA-1000"

    def test_custom_prefixes(self):
        assert parcel_id(3, "plot-") == "plot-3"
        assert parcel_name(3, "Lote ") == "Lote 004"


class TestAssignStatuses:
    """Tests for assign_statuses."""

    def test_exact_donated_count(self):
        """Test the shuffled multiset keeps its composition."""
        statuses = assign_statuses(500, 500, 83, np.random.default_rng(1))

        counts = Counter(statuses)
        assert counts[ParcelStatus.DONATED] == 83
        assert counts[ParcelStatus.AVAILABLE] == 417

    def test_not_clustered_by_construction_order(self):
        """Test donated labels do not all end up at the front."""
        statuses = assign_statuses(500, 500, 83, np.random.default_rng(2))

        assert statuses[:83] != [ParcelStatus.DONATED] * 83

    def test_permutation_varies_between_runs(self):
        """Test unseeded runs produce different arrangements."""
        arrangements = {
            tuple(assign_statuses(500, 500, 83, np.random.default_rng())) for _ in range(5)
        }

        assert len(arrangements) > 1

    def test_seeded_runs_repeat(self):
        a = assign_statuses(100, 100, 10, np.random.default_rng(7))
        b = assign_statuses(100, 100, 10, np.random.default_rng(7))

        assert a == b

    def test_roughly_uniform_positions(self):
        """Test each position is donated about donated/target of the time."""
        rng = np.random.default_rng(3)
        hits = np.zeros(10)
        runs = 4000
        for _ in range(runs):
            statuses = assign_statuses(10, 10, 3, rng)
            hits += [s is ParcelStatus.DONATED for s in statuses]

        assert np.allclose(hits / runs, 0.3, atol=0.05)

    def test_prefix_of_shuffled_multiset(self):
        """Test fewer labels than the multiset size are returned on request."""
        statuses = assign_statuses(20, 500, 83, np.random.default_rng(4))

        assert len(statuses) == 20


class TestMaterializeParcels:
    """Tests for materialize_parcels."""

    def test_truncates_to_target(self):
        """Test only the first target_count cells become parcels."""
        cells = _cells(60)
        config = ParcelConfig(target_count=50, donated_count=5, seed=1)

        parcels = materialize_parcels(cells, config)

        assert len(parcels) == 50
        assert parcels[-1].geometry.equals(cells.geometry.iloc[49])

    def test_ids_unique_and_positional(self):
        parcels = materialize_parcels(_cells(30), ParcelConfig(target_count=30, donated_count=3))

        assert [p.id for p in parcels] == [f"lot-{i}" for i in range(30)]
        assert len({p.id for p in parcels}) == 30
        assert [p.ordinal for p in parcels] == list(range(30))
        assert parcels[0].name == "Parcela BDA-001"
        assert parcels[0].token_id == 1

    def test_default_500_with_83_donated(self):
        """Test the default configuration on 500+ cells."""
        parcels = materialize_parcels(_cells(520), ParcelConfig(seed=11))

        counts = Counter(p.status for p in parcels)
        assert len(parcels) == 500
        assert counts[ParcelStatus.DONATED] == 83
        assert counts[ParcelStatus.AVAILABLE] == 417

    def test_fixed_price_default(self):
        parcels = materialize_parcels(_cells(10), ParcelConfig(target_count=10, donated_count=1))

        assert all(p.price == 50.0 for p in parcels)

    def test_random_price_policy(self):
        config = ParcelConfig(
            target_count=200, donated_count=0, price_policy=RandomPrice(50, 100), seed=5
        )

        parcels = materialize_parcels(_cells(200), config)

        prices = [p.price for p in parcels]
        assert all(50 <= p < 100 for p in prices)
        assert all(p == int(p) for p in prices)
        assert len(set(prices)) > 1

    def test_fewer_cells_than_target(self, caplog):
        """Test graceful degradation when refinement fell short."""
        config = ParcelConfig(target_count=500, donated_count=83, seed=9)

        parcels = materialize_parcels(_cells(40), config)

        assert len(parcels) == 40
        assert len({p.id for p in parcels}) == 40
        assert sum(p.is_donated for p in parcels) <= 40
        assert "materializing 40 of 500" in caplog.text

    def test_empty_cells(self):
        assert materialize_parcels(_cells(0), ParcelConfig()) == []

    def test_same_seed_same_parcels(self):
        config = ParcelConfig(target_count=50, donated_count=10, seed=21)

        a = materialize_parcels(_cells(50), config)
        b = materialize_parcels(_cells(50), config)

        assert [p.status for p in a] == [p.status for p in b]

    def test_projected_cells_are_converted(self):
        """Test cells in a projected CRS end up in WGS84."""
        cells = _cells(5).to_crs("EPSG:32720")

        parcels = materialize_parcels(cells, ParcelConfig(target_count=5, donated_count=0))

        minx, miny, _, _ = parcels[0].geometry.bounds
        assert minx == pytest.approx(-64.6, abs=1e-6)
        assert miny == pytest.approx(-31.4, abs=1e-6)
