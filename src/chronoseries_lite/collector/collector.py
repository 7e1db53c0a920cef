"""Lockstep driver for one time axis and any number of value series.

Neither OffsetTimeList nor ChunkedData knows about the other. They stay
aligned only because the same loop feeds them: one add() on the axis per
tick, then one push (or skipped position) on every series. This class is
that loop, plus the retention bookkeeping that turns "drop anything older
than X" on the axis into "drop the first N positions" on each series.

The pipeline for each tick:
  1. add() the instant to the time axis
  2. push the sample for every registered series, or a gap if absent
  3. every checkpoint_every ticks, checkpoint the axis
  4. every prune_every ticks (if retention is set), prune by age
"""
from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any, Iterator, Mapping, Union

from chronoseries_lite.collector.config import CollectorConfig
from chronoseries_lite.data.chunked import ChunkedData
from chronoseries_lite.data.non_chunked import NonChunkedData
from chronoseries_lite.domain.types import Instant
from chronoseries_lite.timeline.offset_time import OffsetTimeList

log = logging.getLogger(__name__)

Store = Union[ChunkedData[Any], NonChunkedData[Any]]


class SeriesCollector:
    """Owns a time axis and named series, and keeps their indices aligned.

    Args:
        config: cadence and retention settings (defaults if None).
    """

    __slots__ = ("_config", "_times", "_series", "_ticks")

    def __init__(self, config: CollectorConfig | None = None) -> None:
        self._config = config or CollectorConfig()
        self._times = OffsetTimeList()
        self._series: dict[str, Store] = {}
        self._ticks = 0  # ticks ever recorded; drives the cadences

    @property
    def config(self) -> CollectorConfig:
        return self._config

    @property
    def times(self) -> OffsetTimeList:
        return self._times

    def register(self, name: str, chunked: bool = True) -> Store:
        """Add a series and return its store.

        A chunked series registered mid-run is back-filled with gaps so its
        logical indices line up with the axis. A non-chunked series needs a
        value for every tick, so it can only join before the first one.
        """
        if name in self._series:
            raise ValueError(f"Series {name!r} already registered")

        held = len(self._times)
        store: Store
        if chunked:
            store = ChunkedData()
            for _ in range(held):
                store.try_push(None)
        else:
            if held:
                raise ValueError(
                    f"Non-chunked series {name!r} must be registered before "
                    f"the first tick ({held} already recorded)"
                )
            store = NonChunkedData()

        self._series[name] = store
        return store

    def record(self, instant: Instant, samples: Mapping[str, Any] | None = None) -> int:
        """Record one tick; return the logical length of the axis afterwards.

        samples maps series name -> value. A missing name or a None value
        is a gap for that series. Everything is validated before anything
        is mutated, so a rejected tick leaves the collector untouched.
        """
        samples = samples or {}
        unknown = samples.keys() - self._series.keys()
        if unknown:
            raise ValueError(f"Unknown series: {sorted(unknown)}")

        last = self._times.current_time
        if last is not None and instant < last:
            raise ValueError(
                f"Out-of-order tick: {instant} < last instant {last}. "
                f"Instants must be monotonic."
            )

        for name, store in self._series.items():
            if isinstance(store, NonChunkedData) and samples.get(name) is None:
                raise ValueError(f"Non-chunked series {name!r} needs a value every tick")

        self._times.add(instant)
        for name, store in self._series.items():
            value = samples.get(name)
            if isinstance(store, ChunkedData):
                store.try_push(value)
            else:
                store.push(value)

        self._ticks += 1
        cfg = self._config
        if self._ticks % cfg.checkpoint_every == 0:
            self._times.checkpoint()
        if cfg.retention is not None and self._ticks % cfg.prune_every == 0:
            self.prune_older_than(cfg.retention)

        return len(self._times)

    def prune_older_than(self, max_age: timedelta) -> int:
        """Prune the axis by age and every series by the same count.

        Returns how many ticks were dropped (0 if the axis had nothing
        old enough to cut at a checkpoint).
        """
        before = len(self._times)
        after = self._times.prune(max_age)
        if after is None:
            return 0

        dropped = before - after
        if dropped == 0:
            return 0

        shrink = self._config.shrink_after_prune
        for store in self._series.values():
            if shrink:
                store.prune_and_shrink_to_fit(dropped - 1)
            else:
                store.prune(dropped - 1)

        log.debug(
            "Retention dropped %d ticks across %d series, %d ticks held",
            dropped, len(self._series), after,
        )
        return dropped

    def get(self, name: str) -> Store:
        """The store for a series. Raises ValueError if not registered."""
        try:
            return self._series[name]
        except KeyError:
            raise ValueError(f"Series {name!r} not registered") from None

    def series(self, name: str) -> list[tuple[Instant, Any]]:
        """(instant, value) for every stored value of a series, oldest first."""
        pairs = self.get(name).iter_along_base(self._times.instants())
        if pairs is None:
            raise RuntimeError(
                f"Series {name!r} is longer than the time axis; "
                f"record() and prune_older_than() keep them in step"
            )
        return list(pairs)

    def latest(self, name: str) -> Any:
        """Most recent stored value of a series, or None."""
        return self.get(name).last()

    def names(self) -> list[str]:
        return list(self._series)

    def __iter__(self) -> Iterator[str]:
        return iter(self._series)

    def __len__(self) -> int:
        """Ticks currently held on the axis."""
        return len(self._times)

    def memory_usage_bytes(self) -> int:
        """Approximate footprint of every series store (axis excluded)."""
        return sum(store.memory_usage_bytes() for store in self._series.values())
