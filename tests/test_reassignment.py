"""Tests for override reconciliation after geometry changes."""

from quadra.core.config import ReassignmentRules
from quadra.core.models import Geometry, Point, ZoneConfig
from quadra.core.overrides import OverrideStore, effective_segment
from quadra.core.reassignment import AutoReassigner, reconcile_overrides
from quadra.core.schema import Segment


def make_point(sat, loy, point_id="c1"):
    return Point(id=point_id, satisfaction=sat, loyalty=loy)


def make_geometry(scale="1-7", midpoint=(4, 4)):
    return Geometry.from_scales(
        scale, scale, midpoint=midpoint,
        zones=ZoneConfig(apostles_zone_size=0, terrorists_zone_size=0))


def test_distant_override_reverts_after_midpoint_move():
    """A point pushed deep into loyalists loses its terrorists override."""
    point = make_point(4, 4)
    store = OverrideStore()
    store.set(point.key, Segment.TERRORISTS)

    geometry = make_geometry("1-5", midpoint=(2, 2))
    result = reconcile_overrides([point], store, geometry)

    assert result.reverted == [point.key]
    assert result.orphaned == []
    assert result.overrides == {}
    assert effective_segment(point, store, geometry) == Segment.LOYALISTS


def test_boundary_override_survives():
    point = make_point(4, 5)
    store = OverrideStore()
    store.set(point.key, Segment.HOSTAGES)

    result = reconcile_overrides([point], store, make_geometry(midpoint=(4, 4.5)))

    assert result.reverted == []
    assert result.overrides == {point.key: Segment.HOSTAGES}


def test_non_adjacent_override_reverts_even_when_close():
    point = make_point(4, 5)
    store = OverrideStore()
    store.set(point.key, Segment.MERCENARIES)

    result = reconcile_overrides([point], store, make_geometry())

    assert result.reverted == [point.key]


def test_central_point_reverts_even_when_adjacent():
    point = make_point(4, 6)
    store = OverrideStore()
    store.set(point.key, Segment.HOSTAGES)
    reassigner = AutoReassigner(make_geometry())

    assert reassigner.detector.is_adjacent(point, Segment.HOSTAGES)
    assert reassigner.distance_from_midpoint(point) == 2.0
    assert reassigner.should_revert(point, Segment.HOSTAGES)


def test_threshold_is_configurable():
    point = make_point(4, 6)
    store = OverrideStore()
    store.set(point.key, Segment.HOSTAGES)

    result = reconcile_overrides(
        [point], store, make_geometry(), ReassignmentRules(centrality_threshold=2.5))

    assert result.reverted == []
    assert store.get(point.key) == Segment.HOSTAGES


def test_redundant_override_is_kept():
    point = make_point(4, 6)
    store = OverrideStore()
    store.set(point.key, Segment.LOYALISTS)

    result = reconcile_overrides([point], store, make_geometry())

    assert not result.changed
    assert store.get(point.key) == Segment.LOYALISTS


def test_midpoint_override_is_kept():
    point = make_point(4, 4)
    store = OverrideStore()
    store.set(point.key, Segment.DEFECTORS)

    result = reconcile_overrides([point], store, make_geometry())

    assert result.overrides == {point.key: Segment.DEFECTORS}


def test_orphaned_override_is_dropped():
    present = make_point(4, 5, "present")
    missing = make_point(4, 5, "missing")
    store = OverrideStore()
    store.set(present.key, Segment.HOSTAGES)
    store.set(missing.key, Segment.HOSTAGES)

    result = reconcile_overrides([present], store, make_geometry())

    assert result.orphaned == [missing.key]
    assert result.removed == [missing.key]
    assert present.key in store
    assert missing.key not in store


def test_edited_point_orphans_its_override():
    """Changing a point's scores changes its key, leaving the old override behind."""
    original = make_point(4, 5)
    edited = make_point(5, 5)
    store = OverrideStore()
    store.set(original.key, Segment.HOSTAGES)

    result = reconcile_overrides([edited], store, make_geometry())

    assert result.orphaned == [original.key]
    assert len(store) == 0


def test_reconciliation_is_stable():
    """A second pass against the same geometry drops nothing more."""
    points = [make_point(4, 5, "a"), make_point(4, 6, "b"), make_point(2, 2, "c"), make_point(4, 4, "d")]
    store = OverrideStore()
    store.set(points[0].key, Segment.HOSTAGES)
    store.set(points[1].key, Segment.HOSTAGES)
    store.set(points[2].key, Segment.LOYALISTS)
    store.set(points[3].key, Segment.MERCENARIES)
    geometry = make_geometry()

    first = reconcile_overrides(points, store, geometry)
    second = reconcile_overrides(points, store, geometry)

    assert set(first.reverted) == {points[1].key, points[2].key}
    assert second.reverted == []
    assert second.orphaned == []
    assert second.overrides == first.overrides


def test_empty_store():
    result = reconcile_overrides([make_point(4, 4)], OverrideStore(), make_geometry())

    assert result.overrides == {}
    assert not result.changed
