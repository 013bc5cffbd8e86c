import io

import pandas as pd
import pytest

from quadra.core.loaders.points_loader import (
    PointsLoader,
    PointsLoadError,
    points_from_dataframe,
)
from quadra.core.schema import DataKey


def test_load_jsonl():
    jsonl = """\
{"id": 1, "name": "Acme", "satisfaction": 4, "loyalty": 5, "group": "EMEA"}
{"id": "c2", "satisfaction": 2, "loyalty": 1, "excluded": true}
"""
    points = PointsLoader(io.StringIO(jsonl)).load_points()

    assert len(points) == 2
    assert points[0].id == "1"
    assert points[0].name == "Acme"
    assert points[0].satisfaction == 4
    assert points[0].group == "EMEA"
    assert not points[0].excluded

    assert points[1].id == "c2"
    assert points[1].name == ""
    assert points[1].excluded


def test_load_dataframe_from_path(tmp_path):
    path = tmp_path / "points.jsonl"
    path.write_text('{"id": "a", "satisfaction": 3, "loyalty": 3}\n\n')

    df = PointsLoader(path).load()

    assert len(df) == 1
    assert df[DataKey.ID].iloc[0] == "a"


def test_invalid_json_line():
    jsonl = '{"id": "a", "satisfaction": 3, "loyalty": 3}\n{not json}\n'

    with pytest.raises(PointsLoadError, match="line 2"):
        PointsLoader(io.StringIO(jsonl)).load()


def test_non_object_line():
    jsonl = '{"id": "a", "satisfaction": 3, "loyalty": 3}\n[1, 2]\n'

    with pytest.raises(PointsLoadError, match="Line 2 must hold a JSON object"):
        PointsLoader(io.StringIO(jsonl)).load()


def test_missing_columns():
    with pytest.raises(PointsLoadError, match="loyalty"):
        PointsLoader(io.StringIO('{"id": "a", "satisfaction": 3}\n')).load()


def test_empty_source():
    with pytest.raises(PointsLoadError, match="No points"):
        PointsLoader(io.StringIO("\n")).load()


def test_non_numeric_scores():
    with pytest.raises(PointsLoadError, match="numeric"):
        PointsLoader(io.StringIO('{"id": "a", "satisfaction": "high", "loyalty": 3}\n')).load()


def test_points_from_dataframe_skips_incomplete_rows():
    df = pd.DataFrame({
        DataKey.ID: ["a", "b", "c"],
        DataKey.SATISFACTION: [4, None, 2],
        DataKey.LOYALTY: [5, 3, 1],
        DataKey.EMAIL: ["a@example.test", None, None],
    })

    points = points_from_dataframe(df)

    assert [p.id for p in points] == ["a", "c"]
    assert points[0].email == "a@example.test"
    assert points[1].email is None
