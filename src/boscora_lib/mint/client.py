"""Contract client interface used by the mint orchestrator."""

from __future__ import annotations

from typing import Any, Protocol, Sequence, runtime_checkable

from boscora_lib.mint.records import MintRecord


@runtime_checkable
class ContractClient(Protocol):
    """
    Builds, signs and submits one mint transaction for a batch of records.

    Implementations own their connection settings (see ContractConfig) and
    wallet signer. ``mint_batch`` resolves with an opaque receipt or raises.
    """

    async def mint_batch(self, recipient: str, records: Sequence[MintRecord]) -> Any: ...
