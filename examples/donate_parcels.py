"""
Donate Parcels
--------------
This example slices a reserve boundary into parcels, selects a few of the
available ones and mints them through a contract client.

The client below only prints the batch it receives. A real client would
build, sign and submit the transaction with the settings in ContractConfig.

Usage:
    python examples/donate_parcels.py [--boundary FILE] [--wallet ADDRESS]
"""

import argparse
import asyncio

from boscora_lib.config import ParcelConfig
from boscora_lib.display import display_summary
from boscora_lib.mint import MintOrchestrator
from boscora_lib.parcels.io import boundary_from_geojson, read_boundary
from boscora_lib.runner import load_parcels

SAMPLE_RESERVE = {
    "type": "Polygon",
    "coordinates": [
        [
            [-64.62, -31.42],
            [-64.58, -31.42],
            [-64.57, -31.39],
            [-64.60, -31.37],
            [-64.63, -31.39],
            [-64.62, -31.42],
        ]
    ],
}


class PrintingContractClient:
    """Stand-in contract client that echoes the batch."""

    async def mint_batch(self, recipient, records):
        for record in records:
            print(f"  mint token {record.token_id} -> {recipient} at {record.geo.as_dict()}")
        return {"status": "SUCCESS", "minted": len(records)}


async def donate(selection, wallet, cfg):
    orchestrator = MintOrchestrator.from_config(PrintingContractClient(), selection, cfg)
    return await orchestrator.donate(wallet)


def main():
    parser = argparse.ArgumentParser(description="Select and donate reserve parcels")
    parser.add_argument("--boundary", help="Boundary file; a sample polygon is used if omitted")
    parser.add_argument("--wallet", default="GDEMOWALLETADDRESS", help="Recipient address")
    parser.add_argument("--count", type=int, default=3, help="Parcels to donate")
    args = parser.parse_args()

    if args.boundary:
        boundary = read_boundary(args.boundary)
    else:
        boundary = boundary_from_geojson(SAMPLE_RESERVE)
    cfg = ParcelConfig(seed=2024)
    run = load_parcels(boundary, cfg)
    display_summary(run.summary())

    selection = run.selection()
    for parcel_id in selection.available_ids()[: args.count]:
        selection.toggle_select(parcel_id)
    total = selection.compute_total()
    print(f"Selected {len(selection.selected_ids)} parcels, total {total:g} XLM")

    receipt = asyncio.run(donate(selection, args.wallet, cfg))
    print(f"✔ Donated {len(receipt.token_ids)} parcels: {receipt.receipt}")
    print(f"Remaining available: {len(selection.available_ids())}")


if __name__ == "__main__":
    main()
