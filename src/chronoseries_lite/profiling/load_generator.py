"""Simulate gappy multi-series sampling for profiling.

Sampling pattern:
  - num_series series, one tick every tick_ms milliseconds
  - each series does a Gaussian random walk while it reports
  - at any tick a reporting series goes silent with probability gap_rate,
    for an exponentially distributed number of ticks (mean mean_gap_ticks)

That is the shape ChunkedData is built for: long runs of values broken by
outages, where a placeholder per missing tick would be pure waste.
"""
from __future__ import annotations

import random
from dataclasses import dataclass

from chronoseries_lite.domain.types import NANOS_PER_MILLI, Instant


@dataclass(slots=True)
class Sample:
    """One tick: its instant and whichever series reported a value."""
    instant: Instant
    values: dict[str, float]


class SampleGenerator:
    """Generate a deterministic gappy workload."""

    __slots__ = (
        "_rng", "_names", "_total_ticks", "_tick_ns",
        "_gap_rate", "_mean_gap_ticks", "_base_instant",
    )

    def __init__(
        self,
        num_series: int = 8,
        total_ticks: int = 10_000,
        tick_ms: int = 1000,
        gap_rate: float = 0.02,
        mean_gap_ticks: float = 20.0,
        seed: int = 42,
        base_instant: Instant = 0,
    ) -> None:
        if num_series < 1:
            raise ValueError(f"num_series must be positive, got {num_series}")
        if total_ticks < 0:
            raise ValueError(f"total_ticks must be >= 0, got {total_ticks}")
        if tick_ms < 0:
            raise ValueError(f"tick_ms must be >= 0, got {tick_ms}")
        if not (0.0 <= gap_rate <= 1.0):
            raise ValueError(f"gap_rate must be in [0, 1], got {gap_rate}")
        if mean_gap_ticks < 1.0:
            raise ValueError(f"mean_gap_ticks must be >= 1, got {mean_gap_ticks}")
        self._rng = random.Random(seed)
        self._names = [f"series-{i:02d}" for i in range(num_series)]
        self._total_ticks = total_ticks
        self._tick_ns = tick_ms * NANOS_PER_MILLI
        self._gap_rate = gap_rate
        self._mean_gap_ticks = mean_gap_ticks
        self._base_instant = base_instant

    @property
    def names(self) -> list[str]:
        return list(self._names)

    def generate(self) -> list[Sample]:
        rng = self._rng
        silent_for = {name: 0 for name in self._names}
        level = {name: rng.uniform(0.0, 100.0) for name in self._names}

        samples = []
        for tick in range(self._total_ticks):
            values: dict[str, float] = {}
            for name in self._names:
                if silent_for[name] > 0:
                    silent_for[name] -= 1
                    continue
                if rng.random() < self._gap_rate:
                    # This tick is the first missing one.
                    gap = max(1, round(rng.expovariate(1.0 / self._mean_gap_ticks)))
                    silent_for[name] = gap - 1
                    continue
                level[name] += rng.gauss(0.0, 1.0)
                values[name] = round(level[name], 3)
            samples.append(
                Sample(instant=self._base_instant + tick * self._tick_ns, values=values)
            )
        return samples
