"""Utility functions for boscora-lib."""

from boscora_lib.utils.io import save_json, to_feature

__all__ = [
    "save_json",
    "to_feature",
]
