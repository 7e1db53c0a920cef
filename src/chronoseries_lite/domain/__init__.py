"""Domain types for chronoseries-lite.

Re-exports the shared aliases:
    from chronoseries_lite.domain import Instant, LogicalIndex
"""
from chronoseries_lite.domain.types import (
    MAX_OFFSET_MS,
    NANOS_PER_MILLI,
    Instant,
    LogicalIndex,
    Millis,
)

__all__ = [
    "MAX_OFFSET_MS",
    "NANOS_PER_MILLI",
    "Instant",
    "LogicalIndex",
    "Millis",
]
