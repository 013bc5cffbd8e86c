"""
Schema definitions for segment tags, data keys and policy constants.

Segment
-------
The closed set of segment ("quadrant") tags a point can resolve to. Four
standard segments are split by the midpoint, three special zones are carved
out of the grid corners, and `neutral` marks a point sitting exactly on the
midpoint intersection.

DataKey
-------
Keys used in JSON records and DataFrames. These keep the camelCase
convention of the point records handed over by the import layer.

Policy constants
----------------
Probe offsets and the centrality threshold used by boundary detection and
override reconciliation. They are empirically chosen and not derived from
grid resolution; they can be overridden through `ReassignmentRules`.
"""

from enum import StrEnum
from typing import Final


class Segment(StrEnum):
    LOYALISTS = "loyalists"
    MERCENARIES = "mercenaries"
    HOSTAGES = "hostages"
    DEFECTORS = "defectors"
    APOSTLES = "apostles"
    TERRORISTS = "terrorists"
    NEAR_APOSTLES = "near_apostles"
    NEUTRAL = "neutral"


STANDARD_SEGMENTS: Final[tuple[Segment, ...]] = (
    Segment.LOYALISTS,
    Segment.MERCENARIES,
    Segment.HOSTAGES,
    Segment.DEFECTORS,
)

SPECIAL_SEGMENTS: Final[tuple[Segment, ...]] = (
    Segment.APOSTLES,
    Segment.TERRORISTS,
    Segment.NEAR_APOSTLES,
)

# Segments that make up the headline tally; neutral is reported separately
TALLY_SEGMENTS: Final[tuple[Segment, ...]] = STANDARD_SEGMENTS + SPECIAL_SEGMENTS

# Candidates offered for a point sitting exactly on the midpoint
MIDPOINT_CANDIDATES: Final[tuple[Segment, ...]] = (Segment.NEUTRAL,) + STANDARD_SEGMENTS


class DataKey(StrEnum):
    ID = "id"
    NAME = "name"
    EMAIL = "email"
    SATISFACTION = "satisfaction"
    LOYALTY = "loyalty"
    DATE = "date"
    GROUP = "group"
    EXCLUDED = "excluded"
    SEGMENT = "segment"
    NATURAL_SEGMENT = "naturalSegment"
    COUNT = "count"
    PCT = "pct"


class Terminology(StrEnum):
    MODERN = "modern"
    CLASSIC = "classic"


# Probe distance used to look across a boundary from a grid point
PROBE_OFFSET: Final[float] = 0.25

# Inward probe distance for points clipped by the outer grid edge
EDGE_PROBE_OFFSET: Final[float] = 0.1

# Distance from the midpoint beyond which a point is clearly inside its segment
CENTRALITY_THRESHOLD: Final[float] = 1.5


_CLASSIC_NAMES: Final[dict[Segment, str]] = {
    Segment.LOYALISTS: "Loyalists",
    Segment.MERCENARIES: "Mercenaries",
    Segment.HOSTAGES: "Hostages",
    Segment.DEFECTORS: "Defectors",
    Segment.APOSTLES: "Apostles",
    Segment.TERRORISTS: "Terrorists",
    Segment.NEAR_APOSTLES: "Near-Apostles",
    Segment.NEUTRAL: "Neutral",
}

_MODERN_NAMES: Final[dict[Segment, str]] = {
    **_CLASSIC_NAMES,
    Segment.APOSTLES: "Advocates",
    Segment.TERRORISTS: "Trolls",
    Segment.NEAR_APOSTLES: "Near-Advocates",
}

SEGMENT_COLORS: Final[dict[Segment, str]] = {
    Segment.LOYALISTS: "#4CAF50",
    Segment.APOSTLES: "#4CAF50",
    Segment.NEAR_APOSTLES: "#4CAF50",
    Segment.MERCENARIES: "#F7B731",
    Segment.HOSTAGES: "#3A6494",
    Segment.DEFECTORS: "#CC0000",
    Segment.TERRORISTS: "#CC0000",
    Segment.NEUTRAL: "#9E9E9E",
}


def display_name(segment: Segment, terminology: Terminology = Terminology.MODERN) -> str:
    if terminology == Terminology.CLASSIC:
        return _CLASSIC_NAMES[segment]
    return _MODERN_NAMES[segment]


def segment_color(segment: Segment) -> str:
    return SEGMENT_COLORS[segment]


def is_special(segment: Segment) -> bool:
    return segment in SPECIAL_SEGMENTS
