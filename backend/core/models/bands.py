"""Band output models.

These sit on the hot path (one per input bar), so they use
``@dataclass(slots=True)`` and plain floats instead of Pydantic models.
NaN marks a slot with insufficient history or no shifted source.
"""

import math
from dataclasses import dataclass


@dataclass(slots=True)
class BandPoint:
    """Bollinger Bands values paired with the timestamp of one observation."""

    timestamp: int  # Unix epoch in milliseconds
    basis: float
    upper: float
    lower: float

    @property
    def is_defined(self) -> bool:
        """True when basis, upper and lower all hold a number."""
        return not (
            math.isnan(self.basis)
            or math.isnan(self.upper)
            or math.isnan(self.lower)
        )

    @property
    def width(self) -> float:
        """Distance between the upper and lower band (NaN if undefined)."""
        return self.upper - self.lower
