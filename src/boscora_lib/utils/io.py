"""Input/output utilities."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from shapely.geometry import mapping
from shapely.geometry.base import BaseGeometry


def save_json(path: Path, data: dict[str, Any]) -> None:
    """Save data to a JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def _as_lists(coords):
    if isinstance(coords, (list, tuple)):
        return [_as_lists(c) for c in coords]
    return coords


def to_feature(geom: BaseGeometry, props: dict[str, Any] | None = None) -> dict:
    """Convert a Shapely geometry to a GeoJSON feature."""
    geometry = mapping(geom)
    # GeoJSON consumers expect nested lists, mapping() returns tuples
    geometry = {**geometry, "coordinates": _as_lists(geometry["coordinates"])}
    return {"type": "Feature", "properties": props or {}, "geometry": geometry}
