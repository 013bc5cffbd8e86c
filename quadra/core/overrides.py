"""
Manual segment overrides and effective classification.

An override pins one point occurrence (see `PointKey`) to a segment chosen
by the user. Any segment can be assigned, including one far away from the
point; whether an override still makes sense is decided later, when the
geometry changes (see `quadra.core.reassignment`).
"""

from __future__ import annotations

import logging
import threading
from typing import Iterable, Iterator, Optional

from quadra.core.models import Geometry, Point, PointKey
from quadra.core.schema import Segment
from quadra.core.zone_classifier import ZoneClassifier

logger = logging.getLogger(__name__)


class OverrideStore:
    """
    Mapping from point key to manually assigned segment.

    Writes are serialized through a lock; reads go through `snapshot()` or
    single lookups and never observe a half-applied write.
    """

    def __init__(self, overrides: Optional[dict[PointKey, Segment]] = None):
        self._overrides: dict[PointKey, Segment] = dict(overrides or {})
        self._lock = threading.RLock()

    def get(self, key: PointKey) -> Optional[Segment]:
        return self._overrides.get(key)

    def set(self, key: PointKey, segment: Segment) -> None:
        segment = Segment(segment)
        with self._lock:
            self._overrides[key] = segment
        logger.debug(f"Set override for {key}: {segment}")

    def clear(self, key: PointKey) -> bool:
        """Remove the override for `key`. Returns whether one existed."""
        with self._lock:
            existed = self._overrides.pop(key, None) is not None
        if existed:
            logger.debug(f"Cleared override for {key}")
        return existed

    def clear_all(self) -> None:
        with self._lock:
            count = len(self._overrides)
            self._overrides.clear()
        logger.debug(f"Cleared all {count} overrides")

    def remove_many(self, keys: Iterable[PointKey]) -> list[PointKey]:
        """Remove several overrides at once, returning the keys actually removed."""
        removed = []
        with self._lock:
            for key in keys:
                if self._overrides.pop(key, None) is not None:
                    removed.append(key)
        return removed

    def prune(self, valid_keys: Iterable[PointKey]) -> list[PointKey]:
        """Drop overrides whose key matches none of `valid_keys`."""
        valid = set(valid_keys)
        with self._lock:
            orphaned = [key for key in self._overrides if key not in valid]
            for key in orphaned:
                del self._overrides[key]
        if orphaned:
            logger.debug(f"Pruned {len(orphaned)} orphaned overrides")
        return orphaned

    def snapshot(self) -> dict[PointKey, Segment]:
        with self._lock:
            return dict(self._overrides)

    def __contains__(self, key: PointKey) -> bool:
        return key in self._overrides

    def __len__(self) -> int:
        return len(self._overrides)

    def __iter__(self) -> Iterator[PointKey]:
        return iter(self.snapshot())


def effective_segment(point: Point, store: OverrideStore, geometry: Geometry) -> Segment:
    """Override if present, else neutral on the exact midpoint, else natural."""
    return resolve_segment(point, store, ZoneClassifier(geometry))


def resolve_segment(point: Point, store: OverrideStore, classifier: ZoneClassifier) -> Segment:
    """Same as `effective_segment`, reusing a classifier bound to one geometry."""
    manual = store.get(point.key)
    if manual is not None:
        return manual

    if classifier.is_neutral(point):
        return Segment.NEUTRAL

    return classifier.classify_point(point)
