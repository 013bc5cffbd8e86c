import pytest

from quadra.core.models import Geometry, Point, ZoneConfig
from quadra.core.scales import AxisScale
from quadra.core.schema import Segment
from quadra.core.zone_boundaries import (
    boundaries_for,
    compute_boundaries,
    is_on_special_zone_boundary,
)


def make_point(sat, loy):
    return Point(id="p", satisfaction=sat, loyalty=loy)


def test_single_cell_zones():
    scale = AxisScale.parse("1-10")
    boundaries = compute_boundaries(1, 1, scale, scale)

    assert (boundaries.apostles.sat, boundaries.apostles.loy) == (10, 10)
    assert (boundaries.terrorists.sat, boundaries.terrorists.loy) == (1, 1)


def test_deeper_zones():
    scale = AxisScale.parse("1-10")
    boundaries = compute_boundaries(3, 2, scale, scale)

    assert (boundaries.apostles.sat, boundaries.apostles.loy) == (8, 8)
    assert (boundaries.terrorists.sat, boundaries.terrorists.loy) == (2, 2)


def test_zero_based_shifts_terrorists_vertex():
    """The terrorists vertex starts from the scale minimum, so 0-based axes sit one cell lower."""
    one_based = AxisScale.parse("1-10")
    zero_based = AxisScale.parse("0-10")

    one = compute_boundaries(2, 2, one_based, one_based)
    zero = compute_boundaries(2, 2, zero_based, zero_based)

    assert (one.terrorists.sat, one.terrorists.loy) == (2, 2)
    assert (zero.terrorists.sat, zero.terrorists.loy) == (1, 1)

    # The apostles corner is anchored on the maximum and does not move
    assert (one.apostles.sat, one.apostles.loy) == (zero.apostles.sat, zero.apostles.loy)


def test_mixed_scales():
    boundaries = compute_boundaries(1, 1, AxisScale.parse("1-5"), AxisScale.parse("0-10"))

    assert (boundaries.apostles.sat, boundaries.apostles.loy) == (5, 10)
    assert (boundaries.terrorists.sat, boundaries.terrorists.loy) == (1, 0)


def test_zero_size_zone_is_outside_grid():
    scale = AxisScale.parse("1-5")
    boundaries = compute_boundaries(0, 0, scale, scale)

    assert boundaries.apostles.sat > scale.max
    assert boundaries.terrorists.sat < scale.min


def test_boundaries_for_geometry():
    geometry = Geometry.from_scales("1-7", "1-7", zones=ZoneConfig(apostles_zone_size=2))
    boundaries = boundaries_for(geometry)

    assert (boundaries.apostles.sat, boundaries.apostles.loy) == (6, 6)


def test_on_special_zone_boundary():
    geometry = Geometry.from_scales(
        "1-10", "1-10",
        zones=ZoneConfig(apostles_zone_size=2, terrorists_zone_size=2))

    assert is_on_special_zone_boundary(make_point(9, 10), Segment.APOSTLES, geometry)
    assert is_on_special_zone_boundary(make_point(10, 9), Segment.APOSTLES, geometry)
    assert not is_on_special_zone_boundary(make_point(10, 10), Segment.APOSTLES, geometry)

    assert is_on_special_zone_boundary(make_point(2, 1), Segment.TERRORISTS, geometry)
    assert is_on_special_zone_boundary(make_point(1, 2), Segment.TERRORISTS, geometry)
    assert not is_on_special_zone_boundary(make_point(1, 1), Segment.TERRORISTS, geometry)


def test_on_special_zone_boundary_rejects_standard_segment():
    geometry = Geometry.from_scales("1-5", "1-5")

    with pytest.raises(ValueError, match="apostles or terrorists"):
        is_on_special_zone_boundary(make_point(3, 3), Segment.LOYALISTS, geometry)
