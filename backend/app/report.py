"""Console and JSON output for computed bands."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Sequence

import orjson

from core.models.bands import BandPoint
from core.models.config import BollingerParams
from core.models.converters import band_point_to_dict


def _fmt(value: float) -> str:
    return "-" if math.isnan(value) else f"{value:.4f}"


def _fmt_time(timestamp_ms: int) -> str:
    dt = datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)
    return f"{dt:%Y-%m-%d %H:%M}"


class BandReportFormatter:
    """Format Bollinger Bands output for display and export."""

    @staticmethod
    def print_console(
        points: Sequence[BandPoint],
        params: BollingerParams,
        tail: int = 20,
    ) -> None:
        """Print the last ``tail`` band points as a table."""
        defined = sum(1 for p in points if p.is_defined)

        print("\n" + "=" * 70)
        print(
            f"  BOLLINGER BANDS — {params.ma_type}({params.length}, "
            f"{params.std_dev_multiplier:g}) on {params.source}, offset {params.offset}"
        )
        print("=" * 70)
        print(f"  Bars:     {len(points)}")
        print(f"  Defined:  {defined}")

        rows = points[-tail:] if tail > 0 else points
        print("\n" + "-" * 70)
        print(f"  {'Time (UTC)':<18} {'Lower':>14} {'Basis':>14} {'Upper':>14}")
        print("-" * 70)
        for p in rows:
            print(
                f"  {_fmt_time(p.timestamp):<18} {_fmt(p.lower):>14} "
                f"{_fmt(p.basis):>14} {_fmt(p.upper):>14}"
            )
        print()

    @staticmethod
    def to_json_lines(points: Sequence[BandPoint]) -> str:
        """One JSON object per line; NaN values become null."""
        return "\n".join(
            orjson.dumps(band_point_to_dict(p)).decode("utf-8") for p in points
        )
