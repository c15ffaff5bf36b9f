"""Bollinger Bands configuration models.

``BollingerParams`` holds the inputs that drive the calculation. The style
models describe how a chart host draws the three bands and the fill between
them; the indicator engine never reads them.

Keys accept both snake_case and the camelCase used by chart front-ends
(``stdDevMultiplier``, ``maType``, ``lineWidth``...).
"""

from __future__ import annotations

import math
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Price fields a band can be computed from
SOURCES: tuple[str, ...] = ("open", "high", "low", "close")

DEFAULT_LENGTH = 20
DEFAULT_SOURCE = "close"
DEFAULT_STD_DEV_MULTIPLIER = 2.0
DEFAULT_OFFSET = 0

_HEX_COLOR = r"^#[0-9a-fA-F]{6}$"


class BollingerParams(BaseModel):
    """Bollinger Bands calculation inputs.

    Invalid values are rejected up front:
    - ``length`` must be >= 1
    - ``std_dev_multiplier`` must be finite and >= 0 (0 collapses the bands
      onto the basis)

    An unknown ``source`` is not an error; extraction falls back to close.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    length: int = DEFAULT_LENGTH
    source: str = DEFAULT_SOURCE
    std_dev_multiplier: float = Field(
        default=DEFAULT_STD_DEV_MULTIPLIER, alias="stdDevMultiplier"
    )
    offset: int = DEFAULT_OFFSET
    ma_type: Literal["SMA"] = Field(default="SMA", alias="maType")

    @field_validator("length")
    @classmethod
    def _check_length(cls, value: int) -> int:
        if value < 1:
            raise ValueError(f"length must be >= 1, got {value}")
        return value

    @field_validator("std_dev_multiplier")
    @classmethod
    def _check_multiplier(cls, value: float) -> float:
        if not math.isfinite(value) or value < 0:
            raise ValueError(
                f"std_dev_multiplier must be a finite number >= 0, got {value}"
            )
        return value


class BandStyle(BaseModel):
    """Line style for one band."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    visible: bool = True
    color: str = Field(default="#2196f3", pattern=_HEX_COLOR)
    line_width: int = Field(default=1, ge=1, alias="lineWidth")
    line_style: Literal["solid", "dashed"] = Field(default="solid", alias="lineStyle")


class FillStyle(BaseModel):
    """Shaded area between the upper and lower band."""

    model_config = ConfigDict(frozen=True)

    visible: bool = True
    opacity: float = Field(default=0.1, ge=0.0, le=1.0)


class BollingerStyle(BaseModel):
    """Styling for basis, upper, lower and the fill."""

    model_config = ConfigDict(frozen=True)

    basis: BandStyle = BandStyle(color="#ff9800")
    upper: BandStyle = BandStyle(color="#2196f3")
    lower: BandStyle = BandStyle(color="#2196f3")
    fill: FillStyle = FillStyle()


class BollingerOptions(BaseModel):
    """Complete indicator options: calculation inputs plus drawing style."""

    model_config = ConfigDict(frozen=True)

    inputs: BollingerParams = BollingerParams()
    style: BollingerStyle = BollingerStyle()
