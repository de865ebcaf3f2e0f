from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from boscora_lib.core.definitions import GeoTagMode
from boscora_lib.core.exceptions import ValidationError
from boscora_lib.parcels.pricing import FixedPrice, PricePolicy


@dataclass
class ParcelConfig:
    """
    Configuration for parcel grid derivation.

    Attributes:
        target_count: Number of parcels produced per boundary
        donated_count: Parcels that start out donated
        donated_ratio: If set, overrides donated_count as a share of target_count
        price_policy: FixedPrice or RandomPrice
        shrink_factor: Cell side multiplier applied on each refinement attempt
        max_attempts: Maximum number of refinement attempts
        seed: Seed for status shuffling and random prices. None draws fresh entropy
        id_prefix: Prefix of parcel identifiers
        name_prefix: Prefix of parcel display names
        geo_tag_mode: Representative point used for mint coordinates
        output_dir: Directory the CLI writes its outputs to

    Notes:
        - Cell sides are expressed in kilometers and derived from the boundary area
        - Donated statuses are shuffled over identifiers, never clustered
    """

    target_count: int = 500
    donated_count: int = 83
    donated_ratio: Optional[float] = None
    price_policy: PricePolicy = field(default_factory=FixedPrice)

    # Resolution refinement
    shrink_factor: float = 0.9
    max_attempts: int = 10

    seed: Optional[int] = None

    id_prefix: str = "lot-"
    name_prefix: str = "Parcela BDA-"
    geo_tag_mode: GeoTagMode = GeoTagMode.CENTROID

    output_dir: str = "outputs/parcels"

    def __post_init__(self):
        if self.target_count <= 0:
            raise ValidationError(f"target_count must be positive, got {self.target_count}")

        if self.donated_ratio is not None:
            if not 0.0 <= self.donated_ratio <= 1.0:
                raise ValidationError(
                    f"donated_ratio must be between 0 and 1, got {self.donated_ratio}"
                )
            self.donated_count = round(self.donated_ratio * self.target_count)

        if not 0 <= self.donated_count <= self.target_count:
            raise ValidationError(
                f"donated_count must be between 0 and {self.target_count}, "
                f"got {self.donated_count}"
            )
        if not 0.0 < self.shrink_factor < 1.0:
            raise ValidationError(
                f"shrink_factor must be between 0 and 1 (exclusive), got {self.shrink_factor}"
            )
        if self.max_attempts < 0:
            raise ValidationError(f"max_attempts cannot be negative, got {self.max_attempts}")

        self.geo_tag_mode = GeoTagMode(self.geo_tag_mode)

    @property
    def available_count(self) -> int:
        return self.target_count - self.donated_count
