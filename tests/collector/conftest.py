"""Shared test fixtures for collector tests."""
from __future__ import annotations

import pytest

from chronoseries_lite.collector.collector import SeriesCollector
from chronoseries_lite.collector.config import CollectorConfig
from chronoseries_lite.domain.types import NANOS_PER_MILLI


SECOND = 1000 * NANOS_PER_MILLI
T0 = 5_000 * SECOND


def tick(i: int) -> int:
    """Instant of tick i, one second apart."""
    return T0 + i * SECOND


@pytest.fixture
def collector() -> SeriesCollector:
    """Two chunked series, checkpoint every 10 ticks, no retention."""
    c = SeriesCollector(CollectorConfig(checkpoint_every=10))
    c.register("cpu")
    c.register("mem")
    return c
