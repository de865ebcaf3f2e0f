"""Selection and status tracking."""

from boscora_lib.selection.state import ParcelSelection

__all__ = ["ParcelSelection"]
