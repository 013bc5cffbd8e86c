"""
Re-validates manual overrides after the midpoint or zone sizes change.

An override survives a geometry change only while it is still plausible:
the chosen segment must border the point under the new geometry, and the
point must not sit clearly inside its natural segment. Anything else is
dropped and the point falls back to natural classification.

The decision depends only on the point and the geometry, so reconciling
twice against the same geometry drops nothing the second time.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Optional

from quadra.core.boundary_detector import BoundaryDetector
from quadra.core.config import ReassignmentRules
from quadra.core.models import Geometry, Point, PointKey, ReconcileResult
from quadra.core.overrides import OverrideStore
from quadra.core.schema import Segment

logger = logging.getLogger(__name__)


class AutoReassigner:

    def __init__(self, geometry: Geometry, rules: Optional[ReassignmentRules] = None):
        """
        Args:
            geometry: the new geometry overrides are judged against
            rules: probe offsets and centrality threshold
        """
        self.geometry = geometry
        self.rules = rules or ReassignmentRules()
        self.detector = BoundaryDetector(geometry, self.rules)

    def distance_from_midpoint(self, point: Point) -> float:
        midpoint = self.geometry.midpoint
        return math.hypot(point.satisfaction - midpoint.sat, point.loyalty - midpoint.loy)

    def should_revert(self, point: Point, manual: Segment) -> bool:
        """Whether an override for `point` should be dropped."""
        natural = self.detector.classifier.classify_point(point)

        if manual == natural:
            return False

        still_adjacent = self.detector.is_adjacent(point, manual)
        distance = self.distance_from_midpoint(point)
        clearly_inside = distance > self.rules.centrality_threshold

        revert = not still_adjacent or clearly_inside

        logger.debug(
            f"Point {point.id} ({point.satisfaction},{point.loyalty}): manual={manual}, "
            f"natural={natural}, distance={distance:.2f}, adjacent={still_adjacent}, "
            f"revert={revert}"
        )
        return revert

    def reconcile(self, points: Iterable[Point], store: OverrideStore) -> ReconcileResult:
        """
        Check every override in `store` against the current point set.

        Orphaned overrides (no point with that key) and stale overrides are
        removed from the store in place.

        Returns:
            ReconcileResult: the surviving overrides plus the removed keys
        """
        overrides = store.snapshot()
        if not overrides:
            return ReconcileResult(overrides={})

        by_key: dict[PointKey, Point] = {point.key: point for point in points}

        orphaned: list[PointKey] = []
        reverted: list[PointKey] = []

        for key, manual in overrides.items():
            point = by_key.get(key)
            if point is None:
                logger.debug(f"Override {key} matches no point, removing")
                orphaned.append(key)
                continue

            if self.should_revert(point, manual):
                reverted.append(key)

        store.remove_many(orphaned + reverted)

        if reverted or orphaned:
            logger.info(
                f"Reconciled {len(overrides)} overrides: {len(reverted)} reverted, "
                f"{len(orphaned)} orphaned"
            )

        return ReconcileResult(
            overrides=store.snapshot(),
            reverted=reverted,
            orphaned=orphaned,
        )


def reconcile_overrides(
    points: Iterable[Point],
    store: OverrideStore,
    geometry: Geometry,
    rules: Optional[ReassignmentRules] = None,
) -> ReconcileResult:
    return AutoReassigner(geometry, rules).reconcile(points, store)
