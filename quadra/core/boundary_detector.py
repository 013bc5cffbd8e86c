"""
Finds the segments a point borders, to offer as reassignment choices.

Points live on integer grid coordinates while segment lines run along the
midpoint and zone edges, so a point "touches" another segment when a small
step away from it lands there. The detector looks a quarter cell to the
right, left, up and down and classifies each probe naturally:

    (s, l + 0.25)
         |
    (s - 0.25, l) -- (s, l) -- (s + 0.25, l)
         |
    (s, l - 0.25)

Probes falling outside the scale are skipped. Points sitting on the outer
grid edge get an extra inward probe, because the grid edge clips them rather
than a zone line.

Results are bound to the geometry the detector was built with; build a new
detector after every geometry change.
"""

from __future__ import annotations

import logging
from typing import Optional

from quadra.core.config import ReassignmentRules
from quadra.core.models import Geometry, Point, SegmentOption
from quadra.core.schema import (
    MIDPOINT_CANDIDATES,
    Segment,
    Terminology,
    display_name,
    is_special,
    segment_color,
)
from quadra.core.zone_classifier import ZoneClassifier

logger = logging.getLogger(__name__)


class BoundaryDetector:

    def __init__(
        self,
        geometry: Geometry,
        rules: Optional[ReassignmentRules] = None,
        terminology: Terminology = Terminology.MODERN,
    ):
        self.geometry = geometry
        self.rules = rules or ReassignmentRules()
        self.terminology = terminology
        self.classifier = ZoneClassifier(geometry)

    def adjacent_segments(self, point: Point, current: Optional[Segment] = None) -> list[Segment]:
        """
        Segments the point is adjacent to, in discovery order.

        Args:
            point: the point to inspect
            current: the segment the point currently shows, when it differs
                from its natural one (e.g. because of an override). Defaults
                to the natural segment.

        Returns:
            list[Segment]: own segment first, then every neighbour found
        """
        # The midpoint touches all four standard quadrants at once
        if self.classifier.is_neutral(point):
            return list(MIDPOINT_CANDIDATES)

        natural = self.classifier.classify_point(point)

        if natural == Segment.NEAR_APOSTLES:
            found = [Segment.NEAR_APOSTLES]
            self._probe(point, Segment.NEAR_APOSTLES, found)
            return found

        own = current or natural
        found = [own]
        self._probe(point, own, found)

        if self.classifier.is_on_grid_edge(point) and not is_special(natural):
            self._probe_inward(point, own, found)

        return found

    def options(self, point: Point, current: Optional[Segment] = None) -> list[SegmentOption]:
        """Adjacent segments with the name and color a picker shows for them."""
        return [
            SegmentOption(
                segment=segment,
                display_name=display_name(segment, self.terminology),
                color=segment_color(segment),
            )
            for segment in self.adjacent_segments(point, current)
        ]

    def is_adjacent(self, point: Point, segment: Segment) -> bool:
        adjacent = self.adjacent_segments(point)
        is_adjacent = segment in adjacent
        logger.debug(
            f"Point ({point.satisfaction},{point.loyalty}) adjacent segments: "
            f"[{', '.join(adjacent)}], candidate={segment}, adjacent={is_adjacent}"
        )
        return is_adjacent

    def _probe(self, point: Point, own: Segment, found: list[Segment]) -> None:
        offset = self.rules.probe_offset
        sat, loy = point.satisfaction, point.loyalty
        positions = [
            (sat + offset, loy),  # right
            (sat - offset, loy),  # left
            (sat, loy + offset),  # up
            (sat, loy - offset),  # down
        ]

        for probe_sat, probe_loy in positions:
            if not self._within_grid(probe_sat, probe_loy):
                continue
            neighbour = self.classifier.classify(probe_sat, probe_loy)
            if neighbour != own and neighbour not in found:
                found.append(neighbour)

    def _probe_inward(self, point: Point, own: Segment, found: list[Segment]) -> None:
        offset = self.rules.edge_probe_offset
        sat_scale = self.geometry.satisfaction_scale
        loy_scale = self.geometry.loyalty_scale
        sat, loy = point.satisfaction, point.loyalty

        directions = []
        if sat == sat_scale.min:
            directions.append((offset, 0.0))
        if sat == sat_scale.max:
            directions.append((-offset, 0.0))
        if loy == loy_scale.min:
            directions.append((0.0, offset))
        if loy == loy_scale.max:
            directions.append((0.0, -offset))

        for d_sat, d_loy in directions:
            neighbour = self.classifier.classify(sat + d_sat, loy + d_loy)
            if neighbour != own and neighbour not in found:
                found.append(neighbour)

    def _within_grid(self, sat: float, loy: float) -> bool:
        return (self.geometry.satisfaction_scale.contains(sat) and
                self.geometry.loyalty_scale.contains(loy))


def adjacent_segments(
    point: Point,
    geometry: Geometry,
    rules: Optional[ReassignmentRules] = None,
) -> list[SegmentOption]:
    return BoundaryDetector(geometry, rules).options(point)
