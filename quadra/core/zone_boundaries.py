"""
Computes the extent of the special corner zones.

Both zones are squares anchored in opposite grid corners. The apostles zone
grows down-left from (sat.max, loy.max), the terrorists zone up-right from
(sat.min, loy.min). Each is described by its inner corner, the edge vertex:

    apostles   = (sat.max - size + 1, loy.max - size + 1)
    terrorists = (sat.min + size - 1, loy.min + size - 1)

Because the terrorists vertex starts from the scale minimum, a zero-based
axis puts it one cell lower than a one-based axis of the same size. A size
of 0 puts the vertex just outside the grid, leaving the zone empty.
"""

from __future__ import annotations

from quadra.core.models import EdgeVertex, Geometry, Point, SpecialZoneBoundaries
from quadra.core.scales import AxisScale
from quadra.core.schema import Segment


def compute_boundaries(
    apostles_size: int,
    terrorists_size: int,
    satisfaction_scale: AxisScale,
    loyalty_scale: AxisScale,
) -> SpecialZoneBoundaries:
    return SpecialZoneBoundaries(
        apostles=EdgeVertex(
            sat=satisfaction_scale.max - apostles_size + 1,
            loy=loyalty_scale.max - apostles_size + 1,
        ),
        terrorists=EdgeVertex(
            sat=satisfaction_scale.min + terrorists_size - 1,
            loy=loyalty_scale.min + terrorists_size - 1,
        ),
    )


def boundaries_for(geometry: Geometry) -> SpecialZoneBoundaries:
    return compute_boundaries(
        geometry.zones.apostles_zone_size,
        geometry.zones.terrorists_zone_size,
        geometry.satisfaction_scale,
        geometry.loyalty_scale,
    )


def is_on_special_zone_boundary(point: Point, zone: Segment, geometry: Geometry) -> bool:
    """Whether the point sits on the inner edge row or column of a corner zone."""
    boundaries = boundaries_for(geometry)
    sat, loy = point.satisfaction, point.loyalty

    if zone == Segment.APOSTLES:
        vertex = boundaries.apostles
        return ((sat == vertex.sat and loy >= vertex.loy) or
                (sat >= vertex.sat and loy == vertex.loy))

    if zone == Segment.TERRORISTS:
        vertex = boundaries.terrorists
        return ((sat == vertex.sat and loy <= vertex.loy) or
                (sat <= vertex.sat and loy == vertex.loy))

    raise ValueError(f"Zone must be apostles or terrorists, got '{zone}'")
