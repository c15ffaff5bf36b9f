"""Technical indicators (pure math, no I/O)."""

from core.indicators.indicators import (
    extract_source,
    sma,
    stdev,
    apply_offset,
    bollinger_bands,
    percent_b,
    bandwidth,
    BollingerCalculator,
)

__all__ = [
    "extract_source",
    "sma",
    "stdev",
    "apply_offset",
    "bollinger_bands",
    "percent_b",
    "bandwidth",
    "BollingerCalculator",
]
