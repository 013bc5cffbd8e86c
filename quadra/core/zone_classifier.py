"""
Applies zone classification to points on the satisfaction / loyalty grid
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional

from quadra.core.models import Geometry, HierarchicalClassification, Point
from quadra.core.schema import Segment, is_special
from quadra.core.zone_boundaries import boundaries_for

Predicate = Callable[[float, float], bool]


class ZoneClassifier:
    """
    Natural classification of grid coordinates under one geometry snapshot.

    Rules are evaluated top to bottom and the first match wins. The
    near-apostles rule must come before the apostles rule: its L-shape
    shares an edge with the apostles square, and only the ordering keeps
    the corner cells out of the elite zone.
    """

    def __init__(self, geometry: Geometry):
        """
        Args:
            geometry: chart geometry every classification is made against
        """
        self.geometry = geometry
        self.boundaries = boundaries_for(geometry)
        self._rules = self._build_rules()

    def _build_rules(self) -> list[tuple[Segment, Predicate]]:
        zones = self.geometry.zones
        mid = self.geometry.midpoint
        apostles = self.boundaries.apostles
        terrorists = self.boundaries.terrorists

        rules: list[tuple[Segment, Predicate]] = []

        if zones.show_special_zones:
            if zones.show_near_apostles and self.has_space_for_near_apostles():
                rules.append((Segment.NEAR_APOSTLES, self._in_near_apostles))
            rules.append((Segment.APOSTLES,
                          lambda s, l: s >= apostles.sat and l >= apostles.loy))
            rules.append((Segment.TERRORISTS,
                          lambda s, l: s <= terrorists.sat and l <= terrorists.loy))

        rules.append((Segment.LOYALISTS, lambda s, l: s >= mid.sat and l >= mid.loy))
        rules.append((Segment.MERCENARIES, lambda s, l: s >= mid.sat and l < mid.loy))
        rules.append((Segment.HOSTAGES, lambda s, l: s < mid.sat and l >= mid.loy))
        rules.append((Segment.DEFECTORS, lambda s, l: True))

        return rules

    def has_space_for_near_apostles(self) -> bool:
        """The apostles zone exists and leaves a free cell below it on both axes."""
        apostles = self.boundaries.apostles
        return (self.geometry.zones.apostles_zone_size > 0 and
                apostles.sat > self.geometry.satisfaction_scale.min and
                apostles.loy > self.geometry.loyalty_scale.min)

    def _in_near_apostles(self, sat: float, loy: float) -> bool:
        apostles = self.boundaries.apostles
        near_sat = apostles.sat - 1
        near_loy = apostles.loy - 1

        in_left_strip = near_sat <= sat < apostles.sat and loy >= apostles.loy
        in_bottom_strip = sat >= apostles.sat and near_loy <= loy < apostles.loy
        in_corner = sat == near_sat and loy == near_loy
        in_interior = near_sat <= sat < apostles.sat and near_loy <= loy < apostles.loy

        return in_left_strip or in_bottom_strip or in_corner or in_interior

    def classify(self, satisfaction: float, loyalty: float) -> Segment:
        """Classify raw coordinates, ignoring overrides and the neutral midpoint."""
        for segment, predicate in self._rules:
            if predicate(satisfaction, loyalty):
                return segment
        return Segment.DEFECTORS

    def classify_point(self, point: Point) -> Segment:
        return self.classify(point.satisfaction, point.loyalty)

    def is_neutral(self, point: Point) -> bool:
        """Whether the point sits exactly on the midpoint intersection."""
        return self.geometry.midpoint.is_at(point.satisfaction, point.loyalty)

    def is_in_special_zone(self, point: Point) -> bool:
        return is_special(self.classify_point(point))

    def is_on_grid_edge(self, point: Point) -> bool:
        sat_scale = self.geometry.satisfaction_scale
        loy_scale = self.geometry.loyalty_scale
        return (point.satisfaction in (sat_scale.min, sat_scale.max) or
                point.loyalty in (loy_scale.min, loy_scale.max))


def classify_natural(point: Point, geometry: Geometry) -> Segment:
    return ZoneClassifier(geometry).classify_point(point)


def hierarchical_classification(segment: Segment) -> HierarchicalClassification:
    """Roll a segment up to the standard quadrant it lives in."""
    if segment in (Segment.APOSTLES, Segment.NEAR_APOSTLES):
        return HierarchicalClassification(base_quadrant=Segment.LOYALISTS, specific_zone=segment)
    if segment == Segment.TERRORISTS:
        return HierarchicalClassification(base_quadrant=Segment.DEFECTORS, specific_zone=segment)
    return HierarchicalClassification(base_quadrant=segment)


def filter_points(
    points: Iterable[Point],
    geometry: Geometry,
    segment: Optional[Segment] = None,
    min_satisfaction: Optional[float] = None,
    max_satisfaction: Optional[float] = None,
    min_loyalty: Optional[float] = None,
    max_loyalty: Optional[float] = None,
) -> list[Point]:
    """Select points by natural segment and coordinate ranges."""
    classifier = ZoneClassifier(geometry)
    selected = []

    for point in points:
        if segment is not None and classifier.classify_point(point) != segment:
            continue
        if min_satisfaction is not None and point.satisfaction < min_satisfaction:
            continue
        if max_satisfaction is not None and point.satisfaction > max_satisfaction:
            continue
        if min_loyalty is not None and point.loyalty < min_loyalty:
            continue
        if max_loyalty is not None and point.loyalty > max_loyalty:
            continue
        selected.append(point)

    return selected
