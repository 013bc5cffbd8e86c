"""
Point supply from JSON Lines records or pandas DataFrames.

Each record describes one observation:

    {"id": "C-104", "name": "Acme", "satisfaction": 4, "loyalty": 9,
     "email": "ops@acme.test", "date": "2024-03-01", "group": "EMEA",
     "excluded": false}

Only `id`, `satisfaction` and `loyalty` are required.
"""

import logging

import pandas as pd
from pydantic import ValidationError

from quadra.core.loaders.base_loader import BaseLoader
from quadra.core.models import Point
from quadra.core.schema import DataKey

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = (DataKey.ID, DataKey.SATISFACTION, DataKey.LOYALTY)


class PointsLoadError(Exception):
    pass


class PointsLoader(BaseLoader):
    """Load points from JSONL."""

    @property
    def _error_class(self):
        return PointsLoadError

    def load_points(self) -> list[Point]:
        """Load as a list of Point models."""
        return points_from_dataframe(self.load())

    def _load_from_file(self, file_handle) -> pd.DataFrame:
        rows = self._load_jsonl(file_handle)
        if not rows:
            raise self._error_class("No points found")

        df = pd.DataFrame(rows)

        missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
        if missing:
            raise self._error_class(f"Missing required columns: {', '.join(missing)}")

        try:
            df[DataKey.SATISFACTION] = pd.to_numeric(df[DataKey.SATISFACTION])
            df[DataKey.LOYALTY] = pd.to_numeric(df[DataKey.LOYALTY])
        except ValueError as e:
            raise self._error_class(f"satisfaction and loyalty must be numeric: {e}") from e

        df[DataKey.ID] = df[DataKey.ID].astype(str)

        return df


def points_from_dataframe(df: pd.DataFrame) -> list[Point]:
    """
    Convert a DataFrame of point records into Point models.

    Rows without a satisfaction or loyalty score are skipped with a warning.
    """
    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        raise PointsLoadError(f"Missing required columns: {', '.join(missing)}")

    incomplete = df[DataKey.SATISFACTION].isna() | df[DataKey.LOYALTY].isna()
    if incomplete.any():
        logger.warning(f"{int(incomplete.sum())} rows without satisfaction or loyalty were skipped.")

    points = []
    for record in df[~incomplete].to_dict(orient="records"):
        values = {k: v for k, v in record.items() if not _is_missing(v)}
        values[DataKey.ID] = str(values[DataKey.ID])
        try:
            points.append(Point(**values))
        except ValidationError as e:
            raise PointsLoadError(f"Invalid point {values[DataKey.ID]}: {e}") from e

    return points


def _is_missing(value) -> bool:
    return not isinstance(value, (list, dict)) and pd.isna(value)
