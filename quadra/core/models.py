"""Core models for points, chart geometry and classification results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple, Optional

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field

from quadra.core.scales import AxisScale, default_midpoint
from quadra.core.schema import TALLY_SEGMENTS, DataKey, Segment


class PointKey(NamedTuple):
    """
    Identity of one point occurrence for override purposes.

    The same respondent id can recur at different coordinates over time
    (historical tracking), and every occurrence is classified on its own,
    so the coordinates are part of the key.
    """
    id: str
    satisfaction: float
    loyalty: float


class Point(BaseModel):
    """One respondent observation on the grid."""
    id: str
    name: str = ""
    satisfaction: float
    loyalty: float
    email: Optional[str] = None
    date: Optional[str] = None
    group: str = ""
    excluded: bool = False

    @property
    def key(self) -> PointKey:
        return PointKey(self.id, self.satisfaction, self.loyalty)


class Midpoint(BaseModel):
    """Crossing point of the four standard quadrants. Half cells are allowed."""
    model_config = ConfigDict(frozen=True)

    sat: float
    loy: float

    def is_at(self, satisfaction: float, loyalty: float) -> bool:
        return satisfaction == self.sat and loyalty == self.loy


class ZoneConfig(BaseModel):
    """Depth of the corner zones in grid cells, and which zones are shown."""
    model_config = ConfigDict(frozen=True)

    apostles_zone_size: int = Field(default=1, ge=0)
    terrorists_zone_size: int = Field(default=1, ge=0)
    show_special_zones: bool = True
    show_near_apostles: bool = False


class Geometry(BaseModel):
    """
    Immutable snapshot of everything classification depends on.

    A classification or reconciliation pass is bound to one Geometry value,
    so a midpoint edit can never be mixed with stale zone sizes halfway
    through a pass. Edits produce a new snapshot via `with_midpoint` and
    `with_zones`.

    The midpoint is expected to lie outside the special zones and the zone
    sizes to fit the grid; the host clamps edits before they get here (see
    `quadra.core.validation.validate_geometry`).
    """
    model_config = ConfigDict(frozen=True)

    satisfaction_scale: AxisScale
    loyalty_scale: AxisScale
    midpoint: Midpoint
    zones: ZoneConfig = ZoneConfig()

    @classmethod
    def from_scales(
        cls,
        satisfaction_scale: AxisScale | str,
        loyalty_scale: AxisScale | str,
        midpoint: Midpoint | tuple[float, float] | None = None,
        zones: ZoneConfig | None = None,
    ) -> Geometry:
        """Build a geometry, defaulting the midpoint to the grid centre."""
        sat_scale = AxisScale.model_validate(satisfaction_scale)
        loy_scale = AxisScale.model_validate(loyalty_scale)

        if midpoint is None:
            midpoint = default_midpoint(sat_scale, loy_scale)
        if isinstance(midpoint, tuple):
            midpoint = Midpoint(sat=midpoint[0], loy=midpoint[1])

        return cls(
            satisfaction_scale=sat_scale,
            loyalty_scale=loy_scale,
            midpoint=midpoint,
            zones=zones or ZoneConfig(),
        )

    def with_midpoint(self, midpoint: Midpoint | tuple[float, float]) -> Geometry:
        if isinstance(midpoint, tuple):
            midpoint = Midpoint(sat=midpoint[0], loy=midpoint[1])
        return self.model_copy(update={"midpoint": midpoint})

    def with_zones(self, zones: ZoneConfig | None = None, **changes) -> Geometry:
        """Replace the zone config, or patch individual fields of it."""
        if zones is None:
            zones = ZoneConfig.model_validate({**self.zones.model_dump(), **changes})
        return self.model_copy(update={"zones": zones})


class EdgeVertex(BaseModel):
    """Inner corner of a special zone rectangle."""
    sat: float
    loy: float


class SpecialZoneBoundaries(BaseModel):
    """
    Edge vertices of the two corner zones.

    The apostles zone covers every coordinate at or above its vertex on
    both axes; the terrorists zone every coordinate at or below its vertex.
    """
    apostles: EdgeVertex
    terrorists: EdgeVertex


class SegmentOption(BaseModel):
    """A reassignment choice offered for a point."""
    segment: Segment
    display_name: str
    color: str


class HierarchicalClassification(BaseModel):
    """Standard quadrant a point rolls up to, plus the special zone if any."""
    base_quadrant: Segment
    specific_zone: Optional[Segment] = None


class PointValidation(BaseModel):
    is_valid: bool
    errors: list[str] = []


@dataclass
class ReconcileResult:
    """Outcome of re-validating overrides against a new geometry."""
    overrides: dict[PointKey, Segment]
    reverted: list[PointKey] = field(default_factory=list)
    orphaned: list[PointKey] = field(default_factory=list)

    @property
    def removed(self) -> list[PointKey]:
        return self.reverted + self.orphaned

    @property
    def changed(self) -> bool:
        return bool(self.reverted or self.orphaned)


@dataclass
class Distribution:
    """
    Count of points per effective segment.

    Excluded points and points sitting exactly on the midpoint are left out
    of `counts`; the latter are reported separately in `on_midpoint`. Points
    overridden to neutral elsewhere on the grid are kept under `neutral` in
    `counts` but, like midpoint points, stay out of the headline tally
    (`total`, `percentages()` and `to_frame()`).
    """
    counts: dict[Segment, int] = field(
        default_factory=lambda: {segment: 0 for segment in Segment})
    on_midpoint: int = 0
    excluded: int = 0

    @property
    def total(self) -> int:
        return sum(self.get(segment) for segment in TALLY_SEGMENTS)

    @property
    def neutral(self) -> int:
        """Points shown as neutral, on the midpoint or by override."""
        return self.on_midpoint + self.get(Segment.NEUTRAL)

    def get(self, segment: Segment) -> int:
        return self.counts.get(segment, 0)

    def percentages(self) -> dict[Segment, float]:
        total = self.total
        if total == 0:
            return {segment: 0.0 for segment in TALLY_SEGMENTS}
        return {segment: self.get(segment) / total * 100.0 for segment in TALLY_SEGMENTS}

    def to_frame(self) -> pd.DataFrame:
        """One row per tallied segment with its count and share of the tally."""
        pcts = self.percentages()
        return pd.DataFrame(
            {
                DataKey.SEGMENT: [str(s) for s in TALLY_SEGMENTS],
                DataKey.COUNT: [self.get(s) for s in TALLY_SEGMENTS],
                DataKey.PCT: [round(pcts[s], 1) for s in TALLY_SEGMENTS],
            }
        )
