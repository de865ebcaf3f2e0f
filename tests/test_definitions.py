"""Tests for core definitions module."""

from boscora_lib.core.definitions import GEO_SCALE, INT32_MAX, INT32_MIN, GeoTagMode, ParcelStatus


class TestParcelStatus:
    """Test ParcelStatus enumeration."""

    def test_values(self):
        assert ParcelStatus.AVAILABLE == "available"
        assert ParcelStatus.DONATED == "donated"

    def test_from_value(self):
        assert ParcelStatus("donated") is ParcelStatus.DONATED


class TestGeoTagMode:
    def test_values(self):
        assert GeoTagMode.CENTROID.value == "centroid"
        assert GeoTagMode.FIRST_VERTEX.value == "first_vertex"


def test_constants():
    assert GEO_SCALE == 1_000_000
    assert INT32_MIN == -2147483648
    assert INT32_MAX == 2147483647
