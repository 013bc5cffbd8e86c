from quadra.core.models import Geometry, Midpoint, Point, ZoneConfig
from quadra.core.scales import AxisScale
from quadra.core.validation import validate_geometry, validate_midpoint, validate_point


def make_geometry(midpoint=(3, 3), apostles=1, terrorists=1):
    return Geometry.from_scales(
        "1-5", "1-5", midpoint=midpoint,
        zones=ZoneConfig(apostles_zone_size=apostles, terrorists_zone_size=terrorists))


def test_validate_point_in_range():
    scale = AxisScale.parse("1-5")

    result = validate_point(Point(id="a", satisfaction=5, loyalty=1), scale, scale)

    assert result.is_valid
    assert result.errors == []


def test_validate_point_out_of_range():
    scale = AxisScale.parse("1-5")

    result = validate_point(Point(id="a", satisfaction=0, loyalty=6), scale, scale)

    assert not result.is_valid
    assert len(result.errors) == 2
    assert "Satisfaction value 0.0 out of range for scale 1-5" in result.errors
    assert "Loyalty value 6.0 out of range for scale 1-5" in result.errors


def test_validate_point_zero_based():
    result = validate_point(
        Point(id="a", satisfaction=0, loyalty=0), AxisScale.parse("0-10"), AxisScale.parse("0-10"))

    assert result.is_valid


def test_validate_point_blank_id():
    scale = AxisScale.parse("1-5")

    result = validate_point(Point(id="  ", satisfaction=3, loyalty=3), scale, scale)

    assert result.errors == ["Data point must have a valid ID"]


def test_validate_midpoint():
    scale = AxisScale.parse("1-5")

    assert validate_midpoint(Midpoint(sat=3, loy=2.5), scale, scale)
    assert not validate_midpoint(Midpoint(sat=1, loy=3), scale, scale)
    assert not validate_midpoint(Midpoint(sat=3, loy=5), scale, scale)


def test_valid_geometry():
    assert validate_geometry(make_geometry()) == []


def test_midpoint_on_grid_edge():
    errors = validate_geometry(make_geometry(midpoint=(5, 3)))

    assert any("strictly inside" in e for e in errors)


def test_zone_too_large():
    errors = validate_geometry(make_geometry(apostles=6, terrorists=0))

    assert any("Apostles zone size 6 exceeds grid size 5" in e for e in errors)


def test_overlapping_zones():
    errors = validate_geometry(make_geometry(apostles=3, terrorists=3))

    assert "Apostles and terrorists zones overlap" in errors


def test_midpoint_inside_special_zone():
    errors = validate_geometry(make_geometry(midpoint=(4.5, 4.5), apostles=2))

    assert any("inside a special zone" in e for e in errors)


def test_zone_checks_skipped_when_zones_hidden():
    geometry = make_geometry(apostles=3, terrorists=3).with_zones(show_special_zones=False)

    assert validate_geometry(geometry) == []
