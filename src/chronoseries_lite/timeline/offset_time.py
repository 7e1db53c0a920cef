"""Time axis stored as millisecond offsets, with checkpoint-based pruning.

Only the latest instant is kept in full (current_time). Every earlier
instant is implied by a chain of deltas: time_offsets[i] is the number of
milliseconds between instant i and instant i + 1. Each delta fits in a
uint32, so the whole axis lives in one contiguous array('I') at 4 bytes
per tick instead of a Python int object per tick.

Layout after add(t0), add(t0 + 5ms), add(t0 + 12ms):

    time_offsets: array('I', [5, 7])
    current_time: t0 + 12ms

Pruning by age would normally need a scan that sums deltas back from the
head until the age threshold is crossed: O(n). Instead the owner calls
checkpoint() every so often, recording (current_time, len(time_offsets)).
prune(max_age) bisects those checkpoints, which are sorted by instant, and
cuts at the newest one that is older than max_age.

The trade-off is precision. The oldest entry kept after a prune can be
older than max_age by up to one checkpoint interval. That is the contract,
not a bug: exact pruning would bring the O(n) scan back.
"""
from __future__ import annotations

import array
import bisect
import logging
from dataclasses import dataclass
from datetime import timedelta

from chronoseries_lite.domain.types import (
    MAX_OFFSET_MS,
    NANOS_PER_MILLI,
    Instant,
    Millis,
)

log = logging.getLogger(__name__)

_NANOS_PER_MICRO = 1_000


@dataclass(frozen=True, slots=True)
class Checkpoint:
    """Where the axis stood at some instant.

    index is len(time_offsets) when the checkpoint was taken, which is also
    the position of `instant` in the sequence of held instants.
    """
    instant: Instant
    index: int


def _checkpoint_instant(checkpoint: Checkpoint) -> Instant:
    return checkpoint.instant


def offset_ms(earlier: Instant, later: Instant) -> Millis:
    """Whole milliseconds from earlier to later, clamped to [0, uint32 max].

    A clock that appears to go backwards yields 0. Gaps longer than
    ~49.7 days saturate at MAX_OFFSET_MS.
    """
    delta = later - earlier
    if delta <= 0:
        return 0
    return min(delta // NANOS_PER_MILLI, MAX_OFFSET_MS)


def to_nanos(duration: timedelta) -> int:
    """timedelta -> integer nanoseconds, exact to the microsecond."""
    return (duration // timedelta(microseconds=1)) * _NANOS_PER_MICRO


class OffsetTimeList:
    """Append-only monotonic timestamps stored as deltas from the previous one.

    add() returns the number of instants held after the call, which matches
    ChunkedData.length() when both are driven by the same collection loop.
    """

    __slots__ = ("_time_offsets", "_checkpoints", "_current_time")

    def __init__(self) -> None:
        self._time_offsets = array.array("I")   # uint32 milliseconds
        self._checkpoints: list[Checkpoint] = []
        self._current_time: Instant | None = None

    def add(self, time: Instant) -> int:
        """Record a new instant and return the logical length of the axis.

        The very first instant has nothing to subtract from, so no delta is
        stored and the call returns 1.
        """
        current = self._current_time
        self._current_time = time
        if current is None:
            return 1

        self._time_offsets.append(offset_ms(current, time))
        # The head instant is held separately, hence the + 1.
        return len(self._time_offsets) + 1

    def checkpoint(self) -> None:
        """Remember (current_time, len(time_offsets)) for later pruning.

        No-op if nothing has been added yet, or if the newest checkpoint
        already sits at current_time (checkpoint instants stay strictly
        ascending).
        """
        current = self._current_time
        if current is None:
            return
        if self._checkpoints and self._checkpoints[-1].instant >= current:
            return
        self._checkpoints.append(
            Checkpoint(instant=current, index=len(self._time_offsets))
        )

    def prune(self, max_age: timedelta) -> int | None:
        """Approximately drop entries older than max_age; return the new length.

        Returns None when nothing was pruned: nothing added yet, no
        checkpoints, or no checkpoint (other than the newest, which is
        always kept) is older than max_age. Returns 0 if the cut point was
        stale and the whole axis had to be cleared.
        """
        current = self._current_time
        if current is None or not self._checkpoints:
            return None

        # Checkpoints older than max_age are exactly those before threshold.
        threshold = current - to_nanos(max_age)
        boundary = bisect.bisect_left(
            self._checkpoints, threshold, key=_checkpoint_instant
        )
        boundary = min(boundary, len(self._checkpoints) - 1)
        if boundary == 0:
            return None

        cut = self._checkpoints[boundary - 1].index
        del self._checkpoints[:boundary]

        if cut > len(self._time_offsets):
            log.debug(
                "Checkpoint index %d is past %d stored offsets, clearing axis",
                cut, len(self._time_offsets),
            )
            self.clear()
            return 0

        del self._time_offsets[:cut]
        self._checkpoints = [
            Checkpoint(instant=c.instant, index=c.index - cut)
            for c in self._checkpoints
        ]
        log.debug(
            "Pruned %d offsets, %d left, %d checkpoints kept",
            cut, len(self._time_offsets), len(self._checkpoints),
        )
        return len(self._time_offsets) + 1

    def clear(self) -> None:
        """Forget every instant and checkpoint."""
        self._time_offsets = array.array("I")
        self._checkpoints.clear()
        self._current_time = None

    @property
    def current_time(self) -> Instant | None:
        """The most recently added instant, or None."""
        return self._current_time

    @property
    def checkpoints(self) -> tuple[Checkpoint, ...]:
        return tuple(self._checkpoints)

    def offsets(self) -> array.array:
        """A copy of the stored millisecond deltas."""
        return array.array("I", self._time_offsets)

    def instants(self) -> list[Instant]:
        """Every held instant, oldest first, rebuilt back from current_time.

        Deltas are whole milliseconds, so earlier instants are only exact
        to the millisecond. Suitable as the base slice for
        ChunkedData.iter_along_base().
        """
        current = self._current_time
        if current is None:
            return []
        offsets = self._time_offsets
        result = [current] * (len(offsets) + 1)
        for i in range(len(offsets) - 1, -1, -1):
            result[i] = result[i + 1] - offsets[i] * NANOS_PER_MILLI
        return result

    def __len__(self) -> int:
        """Number of instants held (0 when empty)."""
        if self._current_time is None:
            return 0
        return len(self._time_offsets) + 1

    def __repr__(self) -> str:
        return (
            f"OffsetTimeList(length={len(self)}, "
            f"checkpoints={len(self._checkpoints)})"
        )
