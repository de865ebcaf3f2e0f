"""Mint records and batched donation orchestration."""

from boscora_lib.mint.client import ContractClient
from boscora_lib.mint.config import ContractConfig
from boscora_lib.mint.orchestrator import DonationReceipt, MintOrchestrator
from boscora_lib.mint.records import GeoCoordinates, MintRecord, build_mint_records, geo_tag

__all__ = [
    "ContractClient",
    "ContractConfig",
    "DonationReceipt",
    "MintOrchestrator",
    "GeoCoordinates",
    "MintRecord",
    "build_mint_records",
    "geo_tag",
]
