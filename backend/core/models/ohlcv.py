"""OHLCV observation data model."""

from pydantic import BaseModel, ConfigDict


class Observation(BaseModel):
    """A single OHLCV bar.

    ``timestamp`` is a Unix epoch in milliseconds. Observations are passed
    to the indicator engine in ascending timestamp order; the engine never
    re-sorts them.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: int
    open: float
    high: float
    low: float
    close: float
    volume: float
