"""
Quadrant engine: classification, reassignment choices and override
lifecycle for one chart session.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import pandas as pd

from quadra.core.boundary_detector import BoundaryDetector
from quadra.core.config import ReassignmentRules, RulesConfig
from quadra.core.models import (
    Distribution,
    Geometry,
    HierarchicalClassification,
    Midpoint,
    Point,
    ReconcileResult,
    SegmentOption,
    ZoneConfig,
)
from quadra.core.overrides import OverrideStore, resolve_segment
from quadra.core.reassignment import AutoReassigner
from quadra.core.schema import DataKey, Segment, Terminology, display_name
from quadra.core.zone_classifier import ZoneClassifier, hierarchical_classification

logger = logging.getLogger(__name__)


class QuadrantEngine:
    """
    Owns the current points, geometry and override store of a chart.

    Every public call reads the geometry once and works against that
    snapshot. Geometry edits go through `reconcile_overrides` (or the
    `set_midpoint` / `set_zone_config` shortcuts), which adopt the new
    geometry and drop overrides that no longer make sense.
    """

    def __init__(
        self,
        points: Iterable[Point],
        geometry: Geometry,
        rules: Optional[ReassignmentRules] = None,
        terminology: Terminology = Terminology.MODERN,
        overrides: Optional[OverrideStore] = None,
    ):
        self._points: list[Point] = list(points)
        self._geometry = geometry
        self.rules = rules or ReassignmentRules()
        self.terminology = terminology
        self.overrides = overrides if overrides is not None else OverrideStore()

    @classmethod
    def from_config(cls, points: Iterable[Point], config: RulesConfig) -> QuadrantEngine:
        return cls(
            points,
            config.chart.to_geometry(),
            rules=config.reassignment,
            terminology=config.chart.terminology,
        )

    @property
    def geometry(self) -> Geometry:
        return self._geometry

    @property
    def points(self) -> list[Point]:
        return list(self._points)

    def update_points(self, points: Iterable[Point]) -> list:
        """
        Replace the point set, dropping overrides whose point is gone.

        Returns:
            list[PointKey]: the orphaned override keys
        """
        self._points = list(points)
        return self.overrides.prune(point.key for point in self._points)

    # Classification

    def classify(self, point: Point) -> Segment:
        """Effective segment: override, else neutral on the midpoint, else natural."""
        return resolve_segment(point, self.overrides, ZoneClassifier(self._geometry))

    def classify_natural(self, point: Point) -> Segment:
        return ZoneClassifier(self._geometry).classify_point(point)

    def is_in_special_zone(self, point: Point) -> bool:
        return ZoneClassifier(self._geometry).is_in_special_zone(point)

    def hierarchical_classification(self, point: Point) -> HierarchicalClassification:
        return hierarchical_classification(self.classify(point))

    def display_name(self, segment: Segment) -> str:
        return display_name(segment, self.terminology)

    def distribution(self, points: Optional[Iterable[Point]] = None) -> Distribution:
        """Count effective segments, skipping excluded and midpoint points."""
        classifier = ZoneClassifier(self._geometry)
        result = Distribution()

        for point in (self._points if points is None else points):
            if point.excluded:
                result.excluded += 1
                continue
            if classifier.is_neutral(point):
                result.on_midpoint += 1
                continue
            segment = resolve_segment(point, self.overrides, classifier)
            result.counts[segment] += 1

        return result

    def classify_frame(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Add effective and natural segment columns to a DataFrame of points.

        The frame needs `id`, `satisfaction` and `loyalty` columns.
        """
        classifier = ZoneClassifier(self._geometry)
        classified = df.copy()

        natural = []
        effective = []
        for row in df.itertuples(index=False):
            values = row._asdict()
            point = Point(
                id=str(values[DataKey.ID]),
                satisfaction=float(values[DataKey.SATISFACTION]),
                loyalty=float(values[DataKey.LOYALTY]),
            )
            natural.append(str(classifier.classify_point(point)))
            effective.append(str(resolve_segment(point, self.overrides, classifier)))

        classified[DataKey.NATURAL_SEGMENT] = natural
        classified[DataKey.SEGMENT] = effective

        return classified

    # Reassignment choices

    def adjacent_segments(self, point: Point) -> list[SegmentOption]:
        """Segments the point may be reassigned to under the current geometry."""
        detector = BoundaryDetector(self._geometry, self.rules, self.terminology)
        return detector.options(point, current=self.overrides.get(point.key))

    # Overrides

    def set_override(self, point: Point, segment: Segment) -> None:
        self.overrides.set(point.key, segment)

    def clear_override(self, point: Point) -> bool:
        return self.overrides.clear(point.key)

    def clear_all_overrides(self) -> None:
        self.overrides.clear_all()

    def reconcile_overrides(self, new_geometry: Optional[Geometry] = None) -> ReconcileResult:
        """
        Adopt `new_geometry` and re-validate every override against it.

        Must be called whenever the midpoint or zone configuration changes.
        Without an argument the current geometry is re-checked.
        """
        if new_geometry is not None:
            self._geometry = new_geometry

        midpoint = self._geometry.midpoint
        logger.debug(
            f"Reconciling {len(self.overrides)} overrides against midpoint "
            f"({midpoint.sat},{midpoint.loy})"
        )

        return AutoReassigner(self._geometry, self.rules).reconcile(self._points, self.overrides)

    def set_midpoint(self, midpoint: Midpoint | tuple[float, float]) -> ReconcileResult:
        return self.reconcile_overrides(self._geometry.with_midpoint(midpoint))

    def set_zone_config(self, zones: Optional[ZoneConfig] = None, **changes) -> ReconcileResult:
        return self.reconcile_overrides(self._geometry.with_zones(zones, **changes))
