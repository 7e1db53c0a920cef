"""Simulation harness for the collection pipeline.

Feeds a generated workload through a SeriesCollector, then measures what
the chunked layout saved: the same held history stored as one list slot
per tick (None for gaps) versus ChunkedData's runs.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import timedelta

from chronoseries_lite.collector.collector import SeriesCollector
from chronoseries_lite.collector.config import CollectorConfig
from chronoseries_lite.data.chunked import ChunkedData
from chronoseries_lite.data.non_chunked import NonChunkedData
from chronoseries_lite.profiling.load_generator import SampleGenerator

log = logging.getLogger(__name__)


@dataclass(slots=True)
class SimulationResult:
    """Counts, timing and memory from a single simulation run."""
    total_ticks: int
    ticks_held: int
    num_series: int
    values_stored: int
    gaps_skipped: int
    chunks: int
    record_time_ms: float
    ticks_per_sec: float
    chunked_bytes: int
    placeholder_bytes: int
    checkpoints_held: int


def _placeholder_copy(store: ChunkedData) -> NonChunkedData:
    """The same logical sequence with a None slot for every gap."""
    flat: NonChunkedData = NonChunkedData()
    by_index = dict(store.iter_with_index())
    for i in range(store.length()):
        flat.push(by_index.get(i))
    return flat


def run_simulation(
    total_ticks: int = 10_000,
    num_series: int = 8,
    tick_ms: int = 1000,
    gap_rate: float = 0.02,
    mean_gap_ticks: float = 20.0,
    checkpoint_every: int = 60,
    retention: timedelta | None = None,
    seed: int = 42,
) -> SimulationResult:
    """Generate a workload, record it, and return what it cost.

    With retention set, the collector prunes by age every
    checkpoint_every ticks, so ticks_held ends up bounded.
    """
    gen = SampleGenerator(
        num_series=num_series,
        total_ticks=total_ticks,
        tick_ms=tick_ms,
        gap_rate=gap_rate,
        mean_gap_ticks=mean_gap_ticks,
        seed=seed,
    )
    samples = gen.generate()

    collector = SeriesCollector(CollectorConfig(
        checkpoint_every=checkpoint_every,
        retention=retention,
        prune_every=checkpoint_every,
    ))
    for name in gen.names:
        collector.register(name)

    t0 = time.perf_counter()
    for sample in samples:
        collector.record(sample.instant, sample.values)
    record_ms = (time.perf_counter() - t0) * 1000

    stores = [collector.get(name) for name in collector.names()]
    values_stored = sum(s.num_elements() for s in stores)
    ticks_held = len(collector)
    chunked_bytes = sum(s.memory_usage_bytes() for s in stores)
    placeholder_bytes = sum(_placeholder_copy(s).memory_usage_bytes() for s in stores)

    log.debug(
        "Simulated %d ticks over %d series in %.1f ms",
        total_ticks, num_series, record_ms,
    )

    return SimulationResult(
        total_ticks=total_ticks,
        ticks_held=ticks_held,
        num_series=num_series,
        values_stored=values_stored,
        gaps_skipped=ticks_held * num_series - values_stored,
        chunks=sum(len(s.chunk_spans()) for s in stores),
        record_time_ms=record_ms,
        ticks_per_sec=total_ticks / (record_ms / 1000) if record_ms > 0 else 0.0,
        chunked_bytes=chunked_bytes,
        placeholder_bytes=placeholder_bytes,
        checkpoints_held=len(collector.times.checkpoints),
    )
