"""Parcel model and price policies."""

from boscora_lib.parcels.models import Parcel
from boscora_lib.parcels.pricing import FixedPrice, PricePolicy, RandomPrice

__all__ = ["Parcel", "FixedPrice", "RandomPrice", "PricePolicy"]
