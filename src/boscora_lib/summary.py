# src/boscora_lib/summary.py

from pathlib import Path
from typing import Any, Optional

from boscora_lib.core.definitions import ParcelStatus
from boscora_lib.grid.refiner import RefinementResult
from boscora_lib.parcels.models import Parcel
from boscora_lib.utils.io import save_json


class ParcelSummary:
    """Totals of a materialized parcel set."""

    def __init__(self, parcels: list[Parcel], refinement: Optional[RefinementResult] = None):
        donated = [p for p in parcels if p.status is ParcelStatus.DONATED]
        available = [p for p in parcels if p.status is ParcelStatus.AVAILABLE]

        self.parcel_count = len(parcels)
        self.donated_count = len(donated)
        self.available_count = len(available)
        self.donated_value = sum(p.price for p in donated)
        self.available_value = sum(p.price for p in available)

        self.target_count = refinement.target_count if refinement else None
        self.cell_side_km = refinement.side_km if refinement else None
        self.refinement_attempts = refinement.attempts if refinement else None
        self.target_reached = refinement.reached if refinement else None

    def data_in_json(self) -> dict[str, Any]:
        """Return data in json."""
        return self.__dict__

    def save(self, output_dir: str) -> Path:
        """Save summary attributes to summary.json."""
        output_path = Path(output_dir) / "summary.json"
        save_json(output_path, self.data_in_json())
        return output_path
