"""Tests for mint records and the mint orchestrator."""

import asyncio
from unittest.mock import AsyncMock, Mock

import geopandas as gpd
import pytest
from shapely.geometry import Polygon, box

from boscora_lib.config import ParcelConfig
from boscora_lib.core.definitions import GeoTagMode, ParcelStatus
from boscora_lib.core.exceptions import (
    ConfigurationError,
    MintSubmissionError,
    MintValidationError,
    ValidationError,
)
from boscora_lib.grid.refiner import refine_grid
from boscora_lib.mint.client import ContractClient
from boscora_lib.mint.config import ContractConfig
from boscora_lib.mint.orchestrator import DonationReceipt, MintOrchestrator
from boscora_lib.mint.records import GeoCoordinates, MintRecord, build_mint_records, geo_tag
from boscora_lib.parcels.models import Parcel
from boscora_lib.selection.state import ParcelSelection

SQUARE = Polygon([(-64.5, -31.5), (-64.25, -31.5), (-64.25, -31.25), (-64.5, -31.25)])


def make_parcel(ordinal, status=ParcelStatus.AVAILABLE):
    return Parcel(
        id=f"lot-{ordinal}",
        ordinal=ordinal,
        name=f"Parcela BDA-{ordinal + 1:03d}",
        price=50.0,
        status=status,
        geometry=SQUARE,
    )


@pytest.fixture
def selection():
    return ParcelSelection(
        [make_parcel(0), make_parcel(1), make_parcel(2, ParcelStatus.DONATED), make_parcel(3)]
    )


@pytest.fixture
def client():
    mock = Mock()
    mock.mint_batch = AsyncMock(return_value={"hash": "abc123"})
    return mock


class TestGeoTag:
    """Tests for geo_tag."""

    def test_centroid(self):
        tag = geo_tag(SQUARE)

        assert abs(tag.latitude - -31375000) <= 1
        assert abs(tag.longitude - -64375000) <= 1

    def test_first_vertex(self):
        tag = geo_tag(SQUARE, GeoTagMode.FIRST_VERTEX)

        assert tag == GeoCoordinates(latitude=-31500000, longitude=-64500000)

    def test_first_vertex_of_grid_cell_is_south_west_corner(self):
        """Test generated cells are tagged at their south-west corner."""
        boundary = gpd.GeoDataFrame(
            geometry=[box(-64.61, -31.41, -64.60, -31.40)], crs="EPSG:4326"
        )
        cell = refine_grid(boundary, target_count=20).cells.geometry.iloc[0]
        minx, miny, maxx, maxy = cell.bounds

        tag = geo_tag(cell, GeoTagMode.FIRST_VERTEX)

        assert abs(tag.longitude / 1e6 - minx) < 0.1 * (maxx - minx)
        assert abs(tag.latitude / 1e6 - miny) < 0.1 * (maxy - miny)

    def test_truncates_toward_zero(self):
        tiny = Polygon([(-0.0000015, 0.0000019), (1, 0.0000019), (1, 1), (-0.0000015, 1)])

        tag = geo_tag(tiny, GeoTagMode.FIRST_VERTEX)

        assert tag.longitude == -1
        assert tag.latitude == 1

    def test_empty_geometry_rejected(self):
        with pytest.raises(ValidationError):
            geo_tag(Polygon())

    def test_out_of_range_rejected(self):
        huge = Polygon([(3000, 0), (3001, 0), (3001, 1), (3000, 1)])

        with pytest.raises(ValidationError):
            geo_tag(huge, GeoTagMode.FIRST_VERTEX)

    def test_as_dict(self):
        record = MintRecord(token_id=7, geo=GeoCoordinates(latitude=-1, longitude=2))

        assert record.as_dict() == {"token_id": 7, "geo": {"latitude": -1, "longitude": 2}}


class TestBuildMintRecords:
    def test_token_id_is_one_based_ordinal(self):
        records = build_mint_records([make_parcel(0), make_parcel(41)])

        assert [r.token_id for r in records] == [1, 42]
        assert records[0].geo == geo_tag(SQUARE)


class TestContractConfig:
    """Tests for ContractConfig."""

    def test_from_env(self):
        env = {
            "PUBLIC_SOROBAN_NETWORK_PASSPHRASE": "Test SDF Network ; September 2015",
            "PUBLIC_BOSCORA_NFT_CONTRACT_ID": "CABC",
            "PUBLIC_SOROBAN_RPC_URL": "https://soroban-testnet.stellar.org",
        }

        config = ContractConfig.from_env(env)

        assert config.contract_id == "CABC"
        assert config.rpc_url == "https://soroban-testnet.stellar.org"
        assert config.allow_http is False

    def test_allow_http_flag(self):
        env = {
            "PUBLIC_SOROBAN_NETWORK_PASSPHRASE": "Standalone Network ; February 2017",
            "PUBLIC_BOSCORA_NFT_CONTRACT_ID": "CABC",
            "PUBLIC_SOROBAN_RPC_URL": "http://localhost:8000/soroban/rpc",
            "SOROBAN_ALLOW_HTTP": "true",
        }

        assert ContractConfig.from_env(env).allow_http is True

    def test_missing_variables(self):
        with pytest.raises(ConfigurationError, match="PUBLIC_SOROBAN_RPC_URL"):
            ContractConfig.from_env(
                {
                    "PUBLIC_SOROBAN_NETWORK_PASSPHRASE": "x",
                    "PUBLIC_BOSCORA_NFT_CONTRACT_ID": "CABC",
                }
            )


class TestMintOrchestrator:
    """Tests for MintOrchestrator.donate."""

    def test_fake_client_satisfies_protocol(self):
        class FakeClient:
            async def mint_batch(self, recipient, records):
                return "ok"

        assert isinstance(FakeClient(), ContractClient)

    def test_success_commits_selection(self, selection, client):
        selection.toggle_select("lot-0")
        selection.toggle_select("lot-3")
        orchestrator = MintOrchestrator(client, selection)

        receipt = asyncio.run(orchestrator.donate("GWALLET"))

        assert isinstance(receipt, DonationReceipt)
        assert receipt.parcel_ids == ("lot-0", "lot-3")
        assert receipt.token_ids == (1, 4)
        assert receipt.total == 100.0
        assert receipt.receipt == {"hash": "abc123"}
        assert selection.status("lot-0") is ParcelStatus.DONATED
        assert selection.status("lot-3") is ParcelStatus.DONATED
        assert selection.status("lot-1") is ParcelStatus.AVAILABLE
        assert selection.selected_ids == ()

    def test_single_batched_call(self, selection, client):
        selection.toggle_select("lot-0")
        selection.toggle_select("lot-1")
        orchestrator = MintOrchestrator(client, selection, GeoTagMode.FIRST_VERTEX)

        asyncio.run(orchestrator.donate("GWALLET"))

        client.mint_batch.assert_awaited_once()
        recipient, records = client.mint_batch.await_args.args
        assert recipient == "GWALLET"
        assert [r.token_id for r in records] == [1, 2]
        assert records[0].geo == GeoCoordinates(latitude=-31500000, longitude=-64500000)

    def test_not_connected_rejected_before_submission(self, selection, client):
        selection.toggle_select("lot-0")
        orchestrator = MintOrchestrator(client, selection)

        with pytest.raises(MintValidationError):
            asyncio.run(orchestrator.donate(None))

        client.mint_batch.assert_not_called()
        assert selection.selected_ids == ("lot-0",)

    def test_empty_selection_rejected_before_submission(self, selection, client):
        orchestrator = MintOrchestrator(client, selection)

        with pytest.raises(MintValidationError):
            asyncio.run(orchestrator.donate("GWALLET"))

        client.mint_batch.assert_not_called()

    def test_submission_failure_rolls_back(self, selection, client):
        client.mint_batch.side_effect = RuntimeError("user declined signing")
        selection.toggle_select("lot-0")
        selection.toggle_select("lot-1")
        parcels_before = selection.parcels
        selected_before = selection.selected_ids
        orchestrator = MintOrchestrator(client, selection)

        with pytest.raises(MintSubmissionError) as excinfo:
            asyncio.run(orchestrator.donate("GWALLET"))

        assert isinstance(excinfo.value.__cause__, RuntimeError)
        assert selection.parcels == parcels_before
        assert selection.selected_ids == selected_before

    def test_retry_after_failure(self, selection, client):
        client.mint_batch.side_effect = [ConnectionError("rpc down"), {"hash": "def456"}]
        selection.toggle_select("lot-1")
        orchestrator = MintOrchestrator(client, selection)

        with pytest.raises(MintSubmissionError):
            asyncio.run(orchestrator.donate("GWALLET"))
        receipt = asyncio.run(orchestrator.donate("GWALLET"))

        assert receipt.receipt == {"hash": "def456"}
        assert selection.status("lot-1") is ParcelStatus.DONATED
        assert client.mint_batch.await_count == 2

    def test_from_config_uses_geo_tag_mode(self, selection, client):
        cfg = ParcelConfig(target_count=4, donated_count=1, geo_tag_mode="first_vertex")
        selection.toggle_select("lot-0")

        orchestrator = MintOrchestrator.from_config(client, selection, cfg)
        asyncio.run(orchestrator.donate("GWALLET"))

        assert orchestrator.geo_tag_mode is GeoTagMode.FIRST_VERTEX
        _, records = client.mint_batch.await_args.args
        assert records[0].geo == GeoCoordinates(latitude=-31500000, longitude=-64500000)

    def test_listener_failure_after_mint_returns_receipt(self, selection, client, caplog):
        def broken(state):
            raise RuntimeError("map not mounted")

        selection.subscribe(broken)
        selection.toggle_select("lot-0")
        orchestrator = MintOrchestrator(client, selection)

        receipt = asyncio.run(orchestrator.donate("GWALLET"))

        assert receipt.parcel_ids == ("lot-0",)
        assert selection.status("lot-0") is ParcelStatus.DONATED
        assert "Selection listener" in caplog.text
