"""Host services."""

from app.services.data_loader import DataLoadError, load_observations

__all__ = [
    "DataLoadError",
    "load_observations",
]
