"""Chunked value storage: gap-tolerant, append-only, front-prunable.

A collection loop produces one tick at a time, but not every tick carries
a value for every series. Storing a placeholder per missing tick wastes
memory when gaps are long, so values live in chunks: maximal runs of
present values, each tagged with the logical index of its first element.

Layout for pushes [1, 2, 3, None, None, None, 7, 8, 9, 10]:

    chunks:     DataChunk(start_offset=0, data=[1, 2, 3])
                DataChunk(start_offset=6, data=[7, 8, 9, 10])
    next_index: 10   (logical length, gaps included)
    is_active:  True (the next present push extends the second chunk)

Logical indices line up with the entries of a parallel time axis
(see chronoseries_lite.timeline.OffsetTimeList). Pruning removes a prefix
of logical positions, gaps included, and rebases every surviving chunk so
the alignment still holds afterwards.

Key optimization: chunks are sorted by start_offset, so prune() finds the
chunk holding the cut point with bisect in O(log c) for c chunks. The
rest of the work is deleting a list prefix and shifting offsets.
"""
from __future__ import annotations

import bisect
import itertools
import logging
import sys
from dataclasses import dataclass, field
from typing import Callable, Generic, Iterable, Iterator, Sequence, TypeVar

from chronoseries_lite.domain.types import LogicalIndex

log = logging.getLogger(__name__)

D = TypeVar("D")
T = TypeVar("T")
Y = TypeVar("Y")


class PruneError(IndexError):
    """Raised when prune() is asked to cut through a position that does not exist.

    Carries the store's logical length so the caller can clamp and retry,
    or treat the store as already fully pruned.
    """

    def __init__(self, index: int, length: int) -> None:
        self.index = index
        self.length = length
        super().__init__(
            f"Cannot prune through index {index}: logical length is {length}"
        )


@dataclass(slots=True)
class DataChunk(Generic[D]):
    """A contiguous run of present values.

    start_offset is the logical index of data[0]. It corresponds to an
    index on the time axis, so if that axis is pruned this MUST move too.
    """
    start_offset: LogicalIndex
    data: list[D] = field(default_factory=list)

    @property
    def end_offset(self) -> LogicalIndex:
        """One past the logical index of the last value."""
        return self.start_offset + len(self.data)


def _start_offset(chunk: DataChunk) -> LogicalIndex:
    return chunk.start_offset


class ChunkedDataIter(Generic[Y]):
    """Re-iterable, reversible view over a list of chunks.

    Every iter() call walks the chunks from scratch, so one view can be
    consumed any number of times. reversed() walks the chunk list back to
    front and each chunk's data back to front, giving exactly the reverse
    of forward order. len() is the number of items either direction yields.

    The view reads the live chunk list: mutating the store while a view is
    being consumed is not supported.
    """

    __slots__ = ("_chunks", "_project", "_size")

    def __init__(
        self,
        chunks: list[DataChunk],
        project: Callable[[LogicalIndex, object], Y],
        size: int,
    ) -> None:
        self._chunks = chunks
        self._project = project
        self._size = size

    def __iter__(self) -> Iterator[Y]:
        project = self._project
        for chunk in self._chunks:
            start = chunk.start_offset
            for offset, datum in enumerate(chunk.data):
                yield project(start + offset, datum)

    def __reversed__(self) -> Iterator[Y]:
        project = self._project
        for chunk in reversed(self._chunks):
            start = chunk.start_offset
            data = chunk.data
            for offset in range(len(data) - 1, -1, -1):
                yield project(start + offset, data[offset])

    def __len__(self) -> int:
        return self._size


def _value_only(index: LogicalIndex, datum: D) -> D:
    return datum


def _with_index(index: LogicalIndex, datum: D) -> tuple[LogicalIndex, D]:
    return index, datum


class ChunkedData(Generic[D]):
    """Values that may have breaks, stored without placeholders.

    If you expect to record a time for every tick but only sometimes a
    value, use this instead of a plain list to avoid storing blanks.

    INVARIANTS:
      - chunks are sorted by start_offset and never overlap:
        chunks[i].end_offset <= chunks[i + 1].start_offset
      - no chunk is empty
      - if is_active, the last chunk ends exactly at next_index
      - num_elements() <= length() == next_index
    """

    __slots__ = ("_next_index", "_is_active", "_chunks")

    def __init__(self) -> None:
        self._next_index: int = 0
        self._is_active: bool = False
        self._chunks: list[DataChunk[D]] = []

    @classmethod
    def from_values(cls, values: Iterable[D | None]) -> ChunkedData[D]:
        """Build a store by try_push()-ing every item; None marks a gap."""
        store: ChunkedData[D] = cls()
        for value in values:
            store.try_push(value)
        return store

    # ---- appending -------------------------------------------------------

    def push(self, item: D) -> None:
        """Append a present value at logical index next_index."""
        if self._is_active:
            self._chunks[-1].data.append(item)
        else:
            # Start a new chunk.
            self._chunks.append(DataChunk(start_offset=self._next_index, data=[item]))
            self._is_active = True

        self._next_index += 1

    def insert_break(self) -> None:
        """Seal the latest chunk so the next push starts a new one.

        Does not consume a logical index. Harmless when nothing is active,
        including before the first push ever happened.
        """
        self._is_active = False

    def try_push(self, item: D | None) -> None:
        """Push item, or record a skipped position if item is None.

        A skipped position seals the active chunk (if any) and advances the
        logical index by one without storing anything.
        """
        if item is None:
            self.insert_break()
            self._next_index += 1
        else:
            self.push(item)

    # ---- reading ---------------------------------------------------------

    def iter(self) -> ChunkedDataIter[D]:
        """Present values in logical order. Supports reversed() and len()."""
        return ChunkedDataIter(self._chunks, _value_only, self.num_elements())

    def iter_with_index(self) -> ChunkedDataIter[tuple[LogicalIndex, D]]:
        """(logical_index, value) pairs for every present value."""
        return ChunkedDataIter(self._chunks, _with_index, self.num_elements())

    def iter_along_base(
        self, base_slice: Sequence[T]
    ) -> ChunkedDataIter[tuple[T, D]] | None:
        """(base_slice[i], value) for every present value at logical index i.

        Meant to be used with the instants of the matching time axis.
        Returns None if base_slice is shorter than length(), so the view
        can never index past its end.
        """
        if len(base_slice) < self.length():
            return None

        def along_base(index: LogicalIndex, datum: D) -> tuple[T, D]:
            return base_slice[index], datum

        return ChunkedDataIter(self._chunks, along_base, self.num_elements())

    def __iter__(self) -> Iterator[D]:
        return iter(self.iter())

    def __reversed__(self) -> Iterator[D]:
        return reversed(self.iter())

    def num_elements(self) -> int:
        """How many values are actually stored."""
        return sum(len(chunk.data) for chunk in self._chunks)

    def length(self) -> int:
        """Logical length, skipped positions included."""
        return self._next_index

    def no_elements(self) -> bool:
        return self.num_elements() == 0

    def first(self) -> D | None:
        """Value at the lowest stored logical index, or None."""
        if not self._chunks:
            return None
        return self._chunks[0].data[0]

    def last(self) -> D | None:
        """Value at the highest stored logical index, or None."""
        if not self._chunks:
            return None
        return self._chunks[-1].data[-1]

    @property
    def is_active(self) -> bool:
        """Whether the next present push extends the last chunk."""
        return self._is_active

    def chunk_spans(self) -> list[tuple[LogicalIndex, int]]:
        """(start_offset, length) for every chunk, in order."""
        return [(chunk.start_offset, len(chunk.data)) for chunk in self._chunks]

    # ---- pruning ---------------------------------------------------------

    def prune(self, index: LogicalIndex) -> None:
        """Remove logical positions 0..index inclusive, gaps included.

        The logical length becomes prev_length - index - 1 and every
        surviving value moves down by index + 1.

        Raises PruneError (carrying the current length) if the store is
        empty or index is not an existing position.
        """
        length = self._next_index
        if length == 0 or index < 0 or index >= length:
            raise PruneError(index, length)

        removed = index + 1
        self._next_index -= removed
        chunks = self._chunks

        # Last chunk starting at or before the cut point.
        pos = bisect.bisect_right(chunks, index, key=_start_offset) - 1
        if pos < 0:
            # The cut lands in the gap before the first chunk. Nothing to
            # drop, but every offset still moves.
            for chunk in chunks:
                chunk.start_offset -= removed
            log.debug("Pruned %d leading gap positions, no values dropped", removed)
            return

        located = chunks[pos]
        to_remove = index - located.start_offset + 1

        if to_remove < len(located.data):
            # Cut inside the chunk: keep its tail, which now starts at 0.
            del located.data[:to_remove]
            located.start_offset = 0
            del chunks[:pos]
            for chunk in itertools.islice(chunks, 1, None):
                chunk.start_offset -= removed
        else:
            # Cut covers this chunk entirely, and maybe the gap after it.
            if pos == len(chunks) - 1:
                self._is_active = False
            del chunks[:pos + 1]
            for chunk in chunks:
                chunk.start_offset -= removed

        log.debug(
            "Pruned %d positions: %d chunks left, logical length %d",
            removed, len(chunks), self._next_index,
        )

    def shrink_to_fit(self) -> None:
        """Drop spare list capacity left behind by appends and deletes.

        Rebuilds each list at its exact size. No effect on contents; any
        outstanding view keeps pointing at the old chunk list.
        """
        for chunk in self._chunks:
            chunk.data = list(chunk.data)
        self._chunks = list(self._chunks)

    def prune_and_shrink_to_fit(self, index: LogicalIndex) -> None:
        """prune(index), then shrink_to_fit()."""
        self.prune(index)
        self.shrink_to_fit()

    def memory_usage_bytes(self) -> int:
        """Approximate footprint: chunk list, chunk records, data lists, values."""
        total = sys.getsizeof(self._chunks)
        for chunk in self._chunks:
            total += sys.getsizeof(chunk)
            total += sys.getsizeof(chunk.data)
            for value in chunk.data:
                total += sys.getsizeof(value)
        return total

    def __repr__(self) -> str:
        return (
            f"ChunkedData(length={self._next_index}, "
            f"elements={self.num_elements()}, chunks={len(self._chunks)})"
        )
