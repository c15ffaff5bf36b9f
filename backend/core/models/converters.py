"""Converters between plain dicts (JSON payloads) and core models.

JSON has no NaN, so band values that are NaN in memory travel as ``null``
on the wire and are read back as NaN.
"""

import math
from typing import Any, Iterable

from core.models.bands import BandPoint
from core.models.ohlcv import Observation


# =============================================================================
# Value helpers
# =============================================================================

def nan_to_none(value: float) -> float | None:
    """Map NaN to None, leaving every other number (including 0.0) untouched."""
    return None if math.isnan(value) else value


def none_to_nan(value: float | None) -> float:
    """Map None to NaN."""
    return math.nan if value is None else float(value)


# =============================================================================
# Observation conversions
# =============================================================================

def observation_from_dict(data: dict[str, Any]) -> Observation:
    """Build an Observation from a ``{timestamp, open, high, low, close, volume}`` dict.

    Raises:
        pydantic.ValidationError: If a field is missing or not numeric
    """
    return Observation.model_validate(data)


def observations_from_dicts(rows: Iterable[dict[str, Any]]) -> list[Observation]:
    """Convert a sequence of dicts, preserving order."""
    return [observation_from_dict(row) for row in rows]


# =============================================================================
# BandPoint conversions
# =============================================================================

def band_point_to_dict(point: BandPoint) -> dict[str, Any]:
    """Convert a BandPoint to a JSON-safe dict (NaN becomes None)."""
    return {
        "timestamp": point.timestamp,
        "basis": nan_to_none(point.basis),
        "upper": nan_to_none(point.upper),
        "lower": nan_to_none(point.lower),
    }


def band_point_from_dict(data: dict[str, Any]) -> BandPoint:
    """Convert a dict produced by ``band_point_to_dict`` back to a BandPoint."""
    return BandPoint(
        timestamp=int(data["timestamp"]),
        basis=none_to_nan(data.get("basis")),
        upper=none_to_nan(data.get("upper")),
        lower=none_to_nan(data.get("lower")),
    )
