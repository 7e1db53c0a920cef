"""Collection loop that keeps a time axis and its value series aligned."""
from chronoseries_lite.collector.collector import SeriesCollector
from chronoseries_lite.collector.config import CollectorConfig

__all__ = [
    "CollectorConfig",
    "SeriesCollector",
]
