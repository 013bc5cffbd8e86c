from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

from quadra.core.models import Geometry, Midpoint, ZoneConfig
from quadra.core.scales import AxisScale
from quadra.core.schema import (
    CENTRALITY_THRESHOLD,
    EDGE_PROBE_OFFSET,
    PROBE_OFFSET,
    Terminology,
)


class ReassignmentRules(BaseModel):
    """Policy constants for boundary probing and override reconciliation."""
    probe_offset: float = Field(default=PROBE_OFFSET, gt=0, lt=0.5)
    edge_probe_offset: float = Field(default=EDGE_PROBE_OFFSET, gt=0, lt=0.5)
    centrality_threshold: float = Field(default=CENTRALITY_THRESHOLD, gt=0)


class ChartConfig(BaseModel):
    """Chart geometry as chosen during import and configuration."""
    satisfaction_scale: AxisScale = AxisScale(min=1, max=5)
    loyalty_scale: AxisScale = AxisScale(min=1, max=5)
    midpoint: Optional[Midpoint] = None
    zones: ZoneConfig = ZoneConfig()
    terminology: Terminology = Terminology.MODERN

    def to_geometry(self) -> Geometry:
        return Geometry.from_scales(
            self.satisfaction_scale,
            self.loyalty_scale,
            midpoint=self.midpoint,
            zones=self.zones,
        )


class RulesConfig(BaseModel):
    """Complete engine configuration."""
    metadata: dict = {}
    chart: ChartConfig
    reassignment: ReassignmentRules

    @classmethod
    def from_file(cls, path: str) -> RulesConfig:
        """Load rules configuration from YAML or JSON file."""
        file_path = Path(path)

        with open(file_path, 'r') as f:
            if file_path.suffix.lower() in ['.yml', '.yaml']:
                data = yaml.safe_load(f) or {}
            else:
                data = json.load(f)

        # Extract sections, use defaults if missing
        chart_data = data.get('chart', {})
        reassignment_data = data.get('reassignment', {})

        return cls(
            metadata=data.get('metadata', {}),
            chart=ChartConfig(**chart_data) if chart_data else ChartConfig(),
            reassignment=ReassignmentRules(**reassignment_data) if reassignment_data else ReassignmentRules()
        )

    @classmethod
    def default(cls) -> RulesConfig:
        """Create default rules configuration."""
        return cls(
            metadata={'version': '1.0.0', 'description': 'Default quadra rules'},
            chart=ChartConfig(),
            reassignment=ReassignmentRules()
        )
