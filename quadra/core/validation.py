"""
Validation helpers for the boundary between the import layer, chart
controls and the classification engine.

Classification itself never re-checks its inputs: points must be inside
their scales and the geometry must be sane before they reach it. These
helpers let the host check both.
"""

from __future__ import annotations

from quadra.core.models import Geometry, Midpoint, Point, PointValidation
from quadra.core.scales import AxisScale
from quadra.core.schema import is_special
from quadra.core.zone_boundaries import boundaries_for
from quadra.core.zone_classifier import ZoneClassifier


def validate_point(point: Point, satisfaction_scale: AxisScale, loyalty_scale: AxisScale) -> PointValidation:
    errors = []

    if not point.id or not point.id.strip():
        errors.append("Data point must have a valid ID")

    if not satisfaction_scale.contains(point.satisfaction):
        errors.append(
            f"Satisfaction value {point.satisfaction} out of range for scale {satisfaction_scale}")

    if not loyalty_scale.contains(point.loyalty):
        errors.append(
            f"Loyalty value {point.loyalty} out of range for scale {loyalty_scale}")

    return PointValidation(is_valid=not errors, errors=errors)


def validate_midpoint(midpoint: Midpoint, satisfaction_scale: AxisScale, loyalty_scale: AxisScale) -> bool:
    """The midpoint must sit strictly inside both scales."""
    return (satisfaction_scale.min < midpoint.sat < satisfaction_scale.max and
            loyalty_scale.min < midpoint.loy < loyalty_scale.max)


def validate_geometry(geometry: Geometry) -> list[str]:
    """
    Problems that make a geometry unsafe to classify against.

    Returns:
        list[str]: one message per problem, empty when the geometry is valid
    """
    errors = []
    sat_scale = geometry.satisfaction_scale
    loy_scale = geometry.loyalty_scale
    zones = geometry.zones
    midpoint = geometry.midpoint

    if not validate_midpoint(midpoint, sat_scale, loy_scale):
        errors.append(
            f"Midpoint ({midpoint.sat},{midpoint.loy}) must lie strictly inside "
            f"scales {sat_scale} x {loy_scale}")

    if not zones.show_special_zones:
        return errors

    max_size = min(sat_scale.cells, loy_scale.cells)
    for name, size in (("Apostles", zones.apostles_zone_size),
                       ("Terrorists", zones.terrorists_zone_size)):
        if size > max_size:
            errors.append(f"{name} zone size {size} exceeds grid size {max_size}")

    boundaries = boundaries_for(geometry)
    apostles, terrorists = boundaries.apostles, boundaries.terrorists
    if apostles.sat <= terrorists.sat and apostles.loy <= terrorists.loy:
        errors.append("Apostles and terrorists zones overlap")

    if is_special(ZoneClassifier(geometry).classify(midpoint.sat, midpoint.loy)):
        errors.append(f"Midpoint ({midpoint.sat},{midpoint.loy}) lies inside a special zone")

    return errors
