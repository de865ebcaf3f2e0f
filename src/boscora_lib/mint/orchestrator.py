"""Batched donation minting."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from boscora_lib.config import ParcelConfig
from boscora_lib.core.definitions import GeoTagMode
from boscora_lib.core.exceptions import MintSubmissionError, MintValidationError
from boscora_lib.mint.client import ContractClient
from boscora_lib.mint.records import build_mint_records
from boscora_lib.selection.state import ParcelSelection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DonationReceipt:
    """Result of a successful donation."""

    recipient: str
    parcel_ids: tuple[str, ...]
    token_ids: tuple[int, ...]
    total: float
    receipt: Any


class MintOrchestrator:
    """
    Mints the current selection as one batch and reconciles the state machine.

    The selection is only committed after the client reports success. A
    failed submission leaves statuses and selection untouched so the caller
    can retry.
    """

    def __init__(
        self,
        client: ContractClient,
        selection: ParcelSelection,
        geo_tag_mode: GeoTagMode = GeoTagMode.CENTROID,
    ):
        self.client = client
        self.selection = selection
        self.geo_tag_mode = GeoTagMode(geo_tag_mode)

    @classmethod
    def from_config(
        cls, client: ContractClient, selection: ParcelSelection, cfg: ParcelConfig
    ) -> "MintOrchestrator":
        """Orchestrator that tags parcels with ``cfg.geo_tag_mode``."""
        return cls(client, selection, geo_tag_mode=cfg.geo_tag_mode)

    def validate(self, recipient: Optional[str]) -> None:
        """
        Raises:
            MintValidationError: If no wallet is connected or nothing is selected
        """
        if not recipient:
            raise MintValidationError("Connect a wallet before donating")
        if not self.selection.selected_ids:
            raise MintValidationError("Select at least one parcel before donating")

    async def donate(self, recipient: Optional[str]) -> DonationReceipt:
        """
        Mint every selected parcel to ``recipient`` in a single transaction.

        Args:
            recipient: Connected wallet address

        Returns:
            DonationReceipt with the client's receipt

        Raises:
            MintValidationError: Before any submission, on missing wallet or empty selection
            MintSubmissionError: If the client fails; no state is changed
        """
        self.validate(recipient)

        parcels = self.selection.selected_parcels()
        parcel_ids = tuple(p.id for p in parcels)
        total = self.selection.compute_total()
        records = build_mint_records(parcels, self.geo_tag_mode)

        logger.info("Submitting %d mint records for %s", len(records), recipient)
        try:
            receipt = await self.client.mint_batch(recipient, records)
        except Exception as e:
            logger.error("Mint submission failed: %s", e)
            raise MintSubmissionError(f"Failed to mint {len(records)} parcels: {e}") from e

        self.selection.commit_donation(parcel_ids)

        return DonationReceipt(
            recipient=recipient,
            parcel_ids=parcel_ids,
            token_ids=tuple(r.token_id for r in records),
            total=total,
            receipt=receipt,
        )
