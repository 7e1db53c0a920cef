"""Shared type aliases and constants used across the package."""
from __future__ import annotations

from typing import TypeAlias

Instant: TypeAlias = int  # monotonic clock, nanoseconds (time.monotonic_ns())
Millis: TypeAlias = int
LogicalIndex: TypeAlias = int  # position in the full tick sequence, gaps included

NANOS_PER_MILLI: int = 1_000_000

# Deltas are stored in array('I'); anything longer (~49.7 days) saturates.
MAX_OFFSET_MS: Millis = 2**32 - 1
