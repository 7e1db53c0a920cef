"""Delta-encoded time axis with approximate, checkpoint-based age pruning."""
from chronoseries_lite.timeline.offset_time import (
    Checkpoint,
    OffsetTimeList,
    offset_ms,
    to_nanos,
)

__all__ = [
    "Checkpoint",
    "OffsetTimeList",
    "offset_ms",
    "to_nanos",
]
