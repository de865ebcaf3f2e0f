"""Selection and status state machine for a loaded parcel set."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from boscora_lib.core.definitions import ParcelStatus
from boscora_lib.core.exceptions import MintValidationError, ValidationError
from boscora_lib.parcels.models import Parcel
from boscora_lib.utils.io import to_feature

logger = logging.getLogger(__name__)

Listener = Callable[["ParcelSelection"], None]


class ParcelSelection:
    """
    Tracks which parcels a user has picked and which are donated.

    Parcel statuses only move from available to donated, and only through
    :meth:`commit_donation`. Donated parcels can never be selected. Listeners
    registered with :meth:`subscribe` are called after every effective change.
    Listener exceptions are logged and never propagate.
    """

    def __init__(self, parcels: Iterable[Parcel] = ()):
        self._parcels: dict[str, Parcel] = {}
        for parcel in parcels:
            if parcel.id in self._parcels:
                raise ValidationError(f"Duplicate parcel id: {parcel.id}")
            self._parcels[parcel.id] = parcel
        # dict keys as an insertion-ordered set
        self._selected: dict[str, None] = {}
        self._listeners: list[Listener] = []

    def __len__(self) -> int:
        return len(self._parcels)

    def __contains__(self, parcel_id: str) -> bool:
        return parcel_id in self._parcels

    @property
    def parcels(self) -> tuple[Parcel, ...]:
        return tuple(self._parcels.values())

    @property
    def selected_ids(self) -> tuple[str, ...]:
        return tuple(self._selected)

    def get(self, parcel_id: str) -> Optional[Parcel]:
        return self._parcels.get(parcel_id)

    def status(self, parcel_id: str) -> Optional[ParcelStatus]:
        parcel = self._parcels.get(parcel_id)
        return parcel.status if parcel else None

    def is_selected(self, parcel_id: str) -> bool:
        return parcel_id in self._selected

    def selected_parcels(self) -> list[Parcel]:
        return [self._parcels[pid] for pid in self._selected]

    def available_ids(self) -> list[str]:
        return [p.id for p in self._parcels.values() if p.status is ParcelStatus.AVAILABLE]

    def donated_ids(self) -> list[str]:
        return [p.id for p in self._parcels.values() if p.status is ParcelStatus.DONATED]

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener and return a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                # state is already committed at this point
                logger.exception("Selection listener %r failed", listener)

    def toggle_select(self, parcel_id: str) -> bool:
        """
        Flip a parcel's membership in the selection.

        Unknown and donated parcels are ignored.

        Returns:
            True if the selection changed
        """
        parcel = self._parcels.get(parcel_id)
        if parcel is None or parcel.is_donated:
            return False

        if parcel_id in self._selected:
            del self._selected[parcel_id]
        else:
            self._selected[parcel_id] = None
        self._notify()
        return True

    def clear_selection(self) -> None:
        if not self._selected:
            return
        self._selected = {}
        self._notify()

    def compute_total(self) -> float:
        """Sum of the prices of the selected parcels."""
        return sum(self._parcels[pid].price for pid in self._selected)

    def commit_donation(self, selection: Iterable[str]) -> list[Parcel]:
        """
        Mark parcels as donated and drop them from the selection.

        Either every parcel is flipped or none is.

        Args:
            selection: Ids of the parcels that were minted

        Returns:
            The donated parcels

        Raises:
            MintValidationError: If selection is empty
            ValidationError: If an id is unknown or already donated
        """
        ids = list(dict.fromkeys(selection))
        if not ids:
            raise MintValidationError("Nothing to commit: selection is empty")

        for pid in ids:
            parcel = self._parcels.get(pid)
            if parcel is None:
                raise ValidationError(f"Unknown parcel id: {pid}")
            if parcel.is_donated:
                raise ValidationError(f"Parcel {pid} is already donated")

        committed = set(ids)
        parcels = dict(self._parcels)
        for pid in ids:
            parcels[pid] = parcels[pid].donated()
        selected = {pid: None for pid in self._selected if pid not in committed}

        self._parcels = parcels
        self._selected = selected
        logger.info("Committed donation of %d parcels", len(ids))
        self._notify()
        return [parcels[pid] for pid in ids]

    def to_feature_collection(self) -> dict:
        """Feature collection for the map renderer, with a numeric id per feature."""
        features = []
        for parcel in self._parcels.values():
            props = parcel.properties()
            props["selected"] = parcel.id in self._selected
            feature = to_feature(parcel.geometry, props)
            feature["id"] = parcel.ordinal
            features.append(feature)
        return {"type": "FeatureCollection", "features": features}

    def bounds(self) -> Optional[tuple[float, float, float, float]]:
        """Extent of all parcels as (minx, miny, maxx, maxy)."""
        if not self._parcels:
            return None
        boxes = [p.geometry.bounds for p in self._parcels.values()]
        return (
            min(b[0] for b in boxes),
            min(b[1] for b in boxes),
            max(b[2] for b in boxes),
            max(b[3] for b in boxes),
        )
