"""Tests for dict <-> model converters."""

import math

import pytest
from pydantic import ValidationError

from core.models.bands import BandPoint
from core.models.converters import (
    band_point_from_dict,
    band_point_to_dict,
    nan_to_none,
    none_to_nan,
    observation_from_dict,
    observations_from_dicts,
)


class TestValueHelpers:
    """Tests for NaN/None mapping."""

    def test_nan_to_none(self):
        assert nan_to_none(math.nan) is None
        assert nan_to_none(1.5) == 1.5

    def test_zero_is_not_missing(self):
        assert nan_to_none(0.0) == 0.0
        assert nan_to_none(0.0) is not None

    def test_none_to_nan(self):
        assert math.isnan(none_to_nan(None))
        assert none_to_nan(0) == 0.0


class TestObservationConversion:
    """Tests for observation parsing."""

    def test_from_dict(self):
        obs = observation_from_dict(
            {
                "timestamp": 1704067200000,
                "open": 1,
                "high": 2,
                "low": 0.5,
                "close": 1.5,
                "volume": 10,
            }
        )
        assert obs.timestamp == 1704067200000
        assert obs.close == 1.5
        assert isinstance(obs.open, float)

    def test_from_dicts_preserves_order(self):
        rows = [
            {"timestamp": t, "open": 1, "high": 1, "low": 1, "close": t, "volume": 0}
            for t in (3, 1, 2)
        ]
        assert [o.timestamp for o in observations_from_dicts(rows)] == [3, 1, 2]

    def test_missing_field(self):
        with pytest.raises(ValidationError):
            observation_from_dict({"timestamp": 1, "open": 1, "high": 1, "low": 1})


class TestBandPointConversion:
    """Tests for BandPoint serialization."""

    def test_to_dict(self):
        p = BandPoint(timestamp=5, basis=10.0, upper=12.0, lower=8.0)
        assert band_point_to_dict(p) == {
            "timestamp": 5,
            "basis": 10.0,
            "upper": 12.0,
            "lower": 8.0,
        }

    def test_to_dict_nan_becomes_none(self):
        p = BandPoint(timestamp=5, basis=math.nan, upper=math.nan, lower=math.nan)
        d = band_point_to_dict(p)
        assert d["basis"] is None
        assert d["upper"] is None
        assert d["lower"] is None

    def test_from_dict(self):
        p = band_point_from_dict({"timestamp": 5, "basis": None, "upper": 1, "lower": 0})
        assert p.timestamp == 5
        assert math.isnan(p.basis)
        assert p.upper == 1.0
        assert p.lower == 0.0
