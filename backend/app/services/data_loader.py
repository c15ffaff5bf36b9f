"""Load OHLCV observations from local files.

Supported formats:
- JSON: an array of ``{timestamp, open, high, low, close, volume}`` objects
- CSV: a header row with those column names, one bar per row

Rows are returned in file order. The loader warns about out-of-order
timestamps but never sorts; ordering is the data producer's job.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path

import orjson
from pydantic import ValidationError

from core.models.converters import observations_from_dicts
from core.models.ohlcv import Observation

logger = logging.getLogger(__name__)


class DataLoadError(Exception):
    """Raised when an OHLCV file cannot be read or parsed."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


def _read_json(path: Path) -> list[dict]:
    try:
        rows = orjson.loads(path.read_bytes())
    except orjson.JSONDecodeError as e:
        raise DataLoadError(path, f"invalid JSON ({e})") from e
    if not isinstance(rows, list):
        raise DataLoadError(path, "expected a JSON array of OHLCV objects")
    return rows


def _read_csv(path: Path) -> list[dict]:
    try:
        with open(path, newline="", encoding="utf-8") as f:
            return list(csv.DictReader(f))
    except (UnicodeDecodeError, csv.Error) as e:
        raise DataLoadError(path, f"invalid CSV ({e})") from e


def _warn_if_unordered(path: Path, observations: list[Observation]) -> None:
    for prev, cur in zip(observations, observations[1:]):
        if cur.timestamp <= prev.timestamp:
            logger.warning(
                "%s: timestamps not ascending at %d -> %d",
                path, prev.timestamp, cur.timestamp,
            )
            return


def load_observations(path: Path | str) -> list[Observation]:
    """
    Load OHLCV observations from a JSON or CSV file.

    The format is chosen by extension (``.csv`` for CSV, anything else JSON).

    Args:
        path: File to read

    Returns:
        Observations in file order

    Raises:
        DataLoadError: If the file is missing or malformed
    """
    path = Path(path)
    if not path.exists():
        raise DataLoadError(path, "file not found")
    if not path.is_file():
        raise DataLoadError(path, "not a regular file")

    try:
        rows = _read_csv(path) if path.suffix.lower() == ".csv" else _read_json(path)
    except OSError as e:
        raise DataLoadError(path, f"cannot read file ({e})") from e

    try:
        observations = observations_from_dicts(rows)
    except ValidationError as e:
        raise DataLoadError(path, f"invalid OHLCV row: {e}") from e

    _warn_if_unordered(path, observations)
    logger.info("Loaded %d observations from %s", len(observations), path)
    return observations
