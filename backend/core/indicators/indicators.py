"""Bollinger Bands indicator engine.

Pure functions over lists of floats; no I/O, no shared state. The pipeline is:

1. ``extract_source``  - pick open/high/low/close from each observation
2. ``sma``             - rolling simple moving average (the basis)
3. ``stdev``           - rolling sample standard deviation (N-1 denominator)
4. ``bollinger_bands`` - basis +/- multiplier * stdev, then ``apply_offset``

Every stage returns a list of the same length as its input. Slots without
enough history hold NaN. Parameter errors raise ValueError before any
computation starts; bad data (NaN/inf prices) never raises and simply
poisons the windows it falls into.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Iterator, Sequence

from core.models.bands import BandPoint
from core.models.config import (
    DEFAULT_LENGTH,
    DEFAULT_OFFSET,
    DEFAULT_SOURCE,
    DEFAULT_STD_DEV_MULTIPLIER,
    SOURCES,
    BollingerParams,
)

logger = logging.getLogger(__name__)

NAN = math.nan


# =============================================================================
# Parameter checks
# =============================================================================

def _check_length(length: int) -> None:
    if isinstance(length, bool) or not isinstance(length, int) or length < 1:
        raise ValueError(f"length must be an integer >= 1, got {length!r}")


def _check_offset(offset: int) -> None:
    if isinstance(offset, bool) or not isinstance(offset, int):
        raise ValueError(f"offset must be an integer, got {offset!r}")


def _check_multiplier(multiplier: float) -> None:
    if (
        isinstance(multiplier, bool)
        or not isinstance(multiplier, (int, float))
        or not math.isfinite(multiplier)
        or multiplier < 0
    ):
        raise ValueError(
            f"std_dev_multiplier must be a finite number >= 0, got {multiplier!r}"
        )


def _windows(values: Sequence[float], length: int) -> Iterator[tuple[int, Sequence[float]]]:
    """Yield ``(i, values[i-length+1 : i+1])`` for every index with a full window."""
    for i in range(length - 1, len(values)):
        yield i, values[i - length + 1 : i + 1]


# =============================================================================
# Pipeline stages
# =============================================================================

def extract_source(data: Sequence[Any], source: str = DEFAULT_SOURCE) -> list[float]:
    """
    Extract one price field from each observation.

    Args:
        data: Observations (anything with open/high/low/close attributes)
        source: Field name; unrecognized names fall back to "close"

    Returns:
        List of floats, same length and order as ``data``
    """
    field = source if source in SOURCES else "close"
    if field != source:
        logger.debug("Unknown source %r, falling back to close", source)
    return [float(getattr(obs, field)) for obs in data]


def sma(values: Sequence[float], length: int) -> list[float]:
    """
    Calculate Simple Moving Average.

    Args:
        values: Sequence of values
        length: Window size (>= 1)

    Returns:
        List of SMA values (same length as input, NaN for the first length-1)

    Raises:
        ValueError: If length is not an integer >= 1
    """
    _check_length(length)
    result = [NAN] * len(values)
    for i, window in _windows(values, length):
        result[i] = sum(window) / length
    return result


def stdev(values: Sequence[float], length: int) -> list[float]:
    """
    Calculate rolling sample standard deviation.

    variance = sum((x - mean)^2) / (length - 1)

    A window of one value has no variance estimate, so ``length == 1``
    yields NaN everywhere.

    Args:
        values: Sequence of values
        length: Window size (>= 1)

    Returns:
        List of standard deviations (same length as input)

    Raises:
        ValueError: If length is not an integer >= 1
    """
    _check_length(length)
    result = [NAN] * len(values)
    if length == 1:
        return result

    for i, window in _windows(values, length):
        mean = sum(window) / length
        # d * d instead of d ** 2: float ** raises OverflowError on huge values
        variance = sum((x - mean) * (x - mean) for x in window) / (length - 1)
        result[i] = math.sqrt(variance)
    return result


def apply_offset(values: Sequence[float], offset: int) -> list[float]:
    """
    Shift a series along the time axis.

    offset > 0 moves the value at index i to i + offset; offset < 0 moves the
    value at i + |offset| to i. Slots left without a source are NaN. Values
    are copied as-is, so a legitimate 0.0 stays 0.0.

    Raises:
        ValueError: If offset is not an integer
    """
    _check_offset(offset)
    n = len(values)
    if offset == 0:
        return list(values)

    result = [NAN] * n
    if offset > 0:
        for i in range(max(0, n - offset)):
            result[i + offset] = values[i]
    else:
        shift = -offset
        for i in range(max(0, n - shift)):
            result[i] = values[i + shift]
    return result


def bollinger_bands(
    data: Sequence[Any],
    length: int = DEFAULT_LENGTH,
    std_dev_multiplier: float = DEFAULT_STD_DEV_MULTIPLIER,
    source: str = DEFAULT_SOURCE,
    offset: int = DEFAULT_OFFSET,
) -> list[BandPoint]:
    """
    Calculate Bollinger Bands.

    basis = SMA(source, length)
    upper = basis + std_dev_multiplier * stdev(source, length)
    lower = basis - std_dev_multiplier * stdev(source, length)

    The three series are then shifted by ``offset`` and paired with the
    (unshifted) timestamps of ``data``.

    Args:
        data: Observations in ascending timestamp order
        length: Window size (>= 1)
        std_dev_multiplier: Band width in standard deviations (finite, >= 0)
        source: "open", "high", "low" or "close"
        offset: Bars to shift the bands (positive = right)

    Returns:
        One BandPoint per observation

    Raises:
        ValueError: If any parameter is structurally invalid
    """
    _check_length(length)
    _check_multiplier(std_dev_multiplier)
    _check_offset(offset)

    values = extract_source(data, source)
    basis = sma(values, length)
    deviation = stdev(values, length)

    upper = [NAN] * len(values)
    lower = [NAN] * len(values)
    for i, (mid, sd) in enumerate(zip(basis, deviation)):
        if math.isnan(mid) or math.isnan(sd):
            continue
        upper[i] = mid + std_dev_multiplier * sd
        lower[i] = mid - std_dev_multiplier * sd

    basis = apply_offset(basis, offset)
    upper = apply_offset(upper, offset)
    lower = apply_offset(lower, offset)

    logger.debug(
        "Computed %d band points (length=%d, mult=%s, offset=%d)",
        len(values), length, std_dev_multiplier, offset,
    )

    return [
        BandPoint(
            timestamp=obs.timestamp,
            basis=basis[i],
            upper=upper[i],
            lower=lower[i],
        )
        for i, obs in enumerate(data)
    ]


# =============================================================================
# Derived series
# =============================================================================

def percent_b(
    points: Sequence[BandPoint],
    data: Sequence[Any],
    source: str = DEFAULT_SOURCE,
) -> list[float]:
    """
    Calculate %B: where the price sits inside the bands.

    %B = (price - lower) / (upper - lower)

    0 means on the lower band, 1 on the upper band. NaN where the bands are
    undefined or have zero width.

    Raises:
        ValueError: If ``points`` and ``data`` differ in length
    """
    if len(points) != len(data):
        raise ValueError(
            f"points and data must have the same length, got {len(points)} and {len(data)}"
        )

    prices = extract_source(data, source)
    result = []
    for point, price in zip(points, prices):
        width = point.upper - point.lower
        if math.isnan(width) or width == 0:
            result.append(NAN)
        else:
            result.append((price - point.lower) / width)
    return result


def bandwidth(points: Sequence[BandPoint]) -> list[float]:
    """
    Calculate band width relative to the basis.

    bandwidth = (upper - lower) / basis

    NaN where the bands are undefined or the basis is zero.
    """
    result = []
    for point in points:
        if math.isnan(point.width) or math.isnan(point.basis) or point.basis == 0:
            result.append(NAN)
        else:
            result.append(point.width / point.basis)
    return result


# =============================================================================
# BollingerCalculator class
# =============================================================================

class BollingerCalculator:
    """Calculator bound to one validated parameter set.

    Holds no state between calls; every calculation starts from scratch.
    """

    def __init__(self, params: BollingerParams | None = None):
        self.params = params or BollingerParams()

    @property
    def min_history(self) -> int:
        """Observations needed before the first band value appears (pre-offset)."""
        return self.params.length

    def calculate_all(self, data: Sequence[Any]) -> list[BandPoint]:
        """
        Calculate bands for every observation.

        Args:
            data: Observations in ascending timestamp order

        Returns:
            One BandPoint per observation
        """
        return bollinger_bands(
            data,
            length=self.params.length,
            std_dev_multiplier=self.params.std_dev_multiplier,
            source=self.params.source,
            offset=self.params.offset,
        )

    def calculate_latest(self, data: Sequence[Any]) -> BandPoint | None:
        """
        Calculate bands for the latest bar only.

        Args:
            data: Observations (need at least ``min_history`` of them)

        Returns:
            The last BandPoint, or None if not enough data or the slot is undefined
        """
        if len(data) < self.min_history:
            return None

        latest = self.calculate_all(data)[-1]
        if not latest.is_defined:
            return None
        return latest
