"""Value stores that sit alongside a time axis: chunked (gap-tolerant) and flat.

ChunkedData keeps runs of present values and skips gaps without storing
placeholders. NonChunkedData is the one-value-per-tick baseline.
"""
from chronoseries_lite.data.chunked import (
    ChunkedData,
    ChunkedDataIter,
    DataChunk,
    PruneError,
)
from chronoseries_lite.data.non_chunked import NonChunkedData

__all__ = [
    "ChunkedData",
    "ChunkedDataIter",
    "DataChunk",
    "NonChunkedData",
    "PruneError",
]
