"""Non-chunked value storage: one value for every tick, no breaks.

The baseline next to ChunkedData. If every tick on the time axis has a
value, a flat list is all you need: logical index == list index, and
pruning is a prefix delete. Use ChunkedData as soon as ticks can be
missing values.
"""
from __future__ import annotations

import sys
from typing import Generic, Iterator, Sequence, TypeVar

from chronoseries_lite.data.chunked import PruneError
from chronoseries_lite.domain.types import LogicalIndex

D = TypeVar("D")
T = TypeVar("T")


class NonChunkedData(Generic[D]):
    """A plain list of values, one per tick.

    Mirrors the ChunkedData surface so a collector can drive either
    kind of store through the same calls.
    """

    __slots__ = ("_data",)

    def __init__(self) -> None:
        self._data: list[D] = []

    def push(self, item: D) -> None:
        self._data.append(item)

    def iter(self) -> list[D]:
        """The values in order. A list, so it is reversible and sized."""
        return self._data

    def iter_with_index(self) -> Iterator[tuple[LogicalIndex, D]]:
        return enumerate(self._data)

    def iter_along_base(
        self, base_slice: Sequence[T]
    ) -> Iterator[tuple[T, D]] | None:
        """(base_slice[i], value_i) pairs; None if base_slice is too short."""
        if len(base_slice) < len(self._data):
            return None
        return zip(base_slice, self._data)

    def __iter__(self) -> Iterator[D]:
        return iter(self._data)

    def __reversed__(self) -> Iterator[D]:
        return reversed(self._data)

    def num_elements(self) -> int:
        return len(self._data)

    def length(self) -> int:
        return len(self._data)

    def no_elements(self) -> bool:
        return not self._data

    def first(self) -> D | None:
        return self._data[0] if self._data else None

    def last(self) -> D | None:
        return self._data[-1] if self._data else None

    def prune(self, index: LogicalIndex) -> None:
        """Remove values 0..index inclusive.

        Raises PruneError if the store is empty or index is out of range.
        """
        length = len(self._data)
        if length == 0 or index < 0 or index >= length:
            raise PruneError(index, length)
        del self._data[:index + 1]

    def shrink_to_fit(self) -> None:
        self._data = list(self._data)

    def prune_and_shrink_to_fit(self, index: LogicalIndex) -> None:
        self.prune(index)
        self.shrink_to_fit()

    def memory_usage_bytes(self) -> int:
        """List shell plus every value."""
        return sys.getsizeof(self._data) + sum(sys.getsizeof(v) for v in self._data)

    def __repr__(self) -> str:
        return f"NonChunkedData(length={len(self._data)})"
