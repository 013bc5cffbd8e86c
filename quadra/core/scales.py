"""
Axis scale descriptors and coordinate normalization.

A scale is written the way the import layer reports it, as "<min>-<max>"
(e.g. "1-5", "1-10", "0-10"). Only 0 and 1 are valid minimums.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

SUPPORTED_MINIMUMS = (0, 1)


class AxisScale(BaseModel):
    """A closed integer range for one axis of the grid."""
    model_config = ConfigDict(frozen=True)

    min: int
    max: int

    @model_validator(mode="before")
    @classmethod
    def _from_descriptor(cls, data: Any) -> Any:
        if isinstance(data, str):
            return _parse_descriptor(data)
        return data

    @model_validator(mode="after")
    def _check_range(self) -> AxisScale:
        if self.min not in SUPPORTED_MINIMUMS:
            raise ValueError(f"Scale minimum must be 0 or 1, got {self.min}")
        if self.min >= self.max:
            raise ValueError(f"Scale minimum {self.min} must be below maximum {self.max}")
        return self

    @classmethod
    def parse(cls, descriptor: str) -> AxisScale:
        return cls(**_parse_descriptor(descriptor))

    @property
    def format(self) -> str:
        return f"{self.min}-{self.max}"

    @property
    def is_zero_based(self) -> bool:
        return self.min == 0

    @property
    def span(self) -> int:
        return self.max - self.min

    @property
    def cells(self) -> int:
        """Number of distinct integer scores on the axis."""
        return self.span + 1

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def center(self) -> float:
        """Middle of the scale; a half cell when the span is odd."""
        return (self.min + self.max) / 2

    def normalize(self, value: float) -> float:
        """Position of `value` along the axis as a percentage, clamped to 0-100."""
        normalized = (value - self.min) / self.span * 100
        return max(0.0, min(100.0, normalized))

    def denormalize(self, percentage: float) -> float:
        return self.min + (percentage / 100) * self.span

    def __str__(self) -> str:
        return self.format


def _parse_descriptor(descriptor: str) -> dict:
    parts = descriptor.strip().split("-")
    if len(parts) != 2:
        raise ValueError(f"Invalid scale descriptor '{descriptor}', expected '<min>-<max>'")
    try:
        low, high = int(parts[0]), int(parts[1])
    except ValueError as e:
        raise ValueError(f"Invalid scale descriptor '{descriptor}': {e}") from e
    return {"min": low, "max": high}


def default_midpoint(satisfaction_scale: AxisScale, loyalty_scale: AxisScale) -> tuple[float, float]:
    """Centre of the grid, used when no midpoint has been chosen."""
    return satisfaction_scale.center(), loyalty_scale.center()
