from __future__ import annotations

from dataclasses import dataclass, replace

from shapely.geometry import Polygon

from boscora_lib.core.definitions import ParcelStatus


@dataclass(frozen=True)
class Parcel:
    """A donatable unit of the reserve."""

    id: str
    ordinal: int
    name: str
    price: float
    status: ParcelStatus
    geometry: Polygon

    @property
    def token_id(self) -> int:
        # The NFT contract accepts ids 1..max_parcels only
        return self.ordinal + 1

    @property
    def is_donated(self) -> bool:
        return self.status is ParcelStatus.DONATED

    def donated(self) -> Parcel:
        return replace(self, status=ParcelStatus.DONATED)

    def properties(self) -> dict:
        """Attribute table row used by feature exports."""
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "status": self.status.value,
        }
