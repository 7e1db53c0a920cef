"""Shared test fixtures for value store tests."""
from __future__ import annotations

import pytest

from chronoseries_lite.data.chunked import ChunkedData


# Three values, a three-tick outage, then four values.
POPULATION: list[int | None] = [1, 2, 3, None, None, None, 7, 8, 9, 10]


def populate(data: ChunkedData, values: list | None = None) -> ChunkedData:
    """try_push() every item of values (POPULATION by default) into data."""
    for value in POPULATION if values is None else values:
        data.try_push(value)
    return data


def expected_after_prune(values: list, index: int) -> list[tuple[int, object]]:
    """(index, value) pairs a store built from values should yield after prune(index).

    Drop the first index + 1 positions, renumber from 0, keep present ones.
    """
    return [
        (i, v) for i, v in enumerate(values[index + 1:]) if v is not None
    ]


def check_invariants(data: ChunkedData) -> None:
    """Assert every structural invariant ChunkedData promises."""
    spans = data.chunk_spans()
    for start, size in spans:
        assert size >= 1
        assert start >= 0
    for (start_a, size_a), (start_b, _) in zip(spans, spans[1:]):
        assert start_a + size_a <= start_b
    if spans:
        last_start, last_size = spans[-1]
        assert last_start + last_size <= data.length()
    if data.is_active:
        assert spans
        last_start, last_size = spans[-1]
        assert last_start + last_size == data.length()
    assert data.num_elements() == sum(size for _, size in spans)
    assert data.num_elements() <= data.length()


@pytest.fixture
def populated() -> ChunkedData[int]:
    return populate(ChunkedData())
