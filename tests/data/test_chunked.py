"""Tests for ChunkedData: pushing, breaks, and iteration."""
from __future__ import annotations

from chronoseries_lite.data.chunked import ChunkedData, ChunkedDataIter

from .conftest import POPULATION, check_invariants, populate


PRESENT = [v for v in POPULATION if v is not None]


# ---- Pushing and breaks --------------------------------------------------

def test_new_store_is_empty():
    data = ChunkedData()
    assert data.no_elements()
    assert data.length() == 0
    assert data.num_elements() == 0
    assert not data.is_active
    assert data.chunk_spans() == []


def test_try_push_builds_chunks():
    data = ChunkedData()

    data.try_push(1)
    assert data.is_active
    assert data.chunk_spans() == [(0, 1)]
    assert data.length() == 1

    data.try_push(2)
    data.try_push(None)
    assert not data.is_active
    assert data.chunk_spans() == [(0, 2)]
    assert list(data.iter()) == [1, 2]
    assert data.length() == 3

    data.try_push(None)
    assert not data.is_active
    assert data.length() == 4

    data.try_push(3)
    assert data.is_active
    assert data.chunk_spans() == [(0, 2), (4, 1)]
    assert data.last() == 3
    assert data.length() == 5
    assert data.num_elements() == 3
    check_invariants(data)


def test_gap_before_first_push_does_not_seal_anything():
    """A gap on a never-activated store only consumes an index."""
    data: ChunkedData[int] = ChunkedData()

    data.try_push(None)
    assert not data.is_active
    assert data.chunk_spans() == []
    assert data.length() == 1

    data.try_push(1)
    assert data.is_active
    assert data.chunk_spans() == [(1, 1)]
    assert data.length() == 2
    check_invariants(data)


def test_insert_break_before_any_push():
    data: ChunkedData[int] = ChunkedData()
    data.insert_break()
    assert data.length() == 0
    assert data.chunk_spans() == []

    data.push(5)
    assert data.chunk_spans() == [(0, 1)]


def test_insert_break_does_not_consume_an_index():
    data = ChunkedData()
    data.push("a")
    data.insert_break()
    data.push("b")

    assert data.length() == 2
    assert data.chunk_spans() == [(0, 1), (1, 1)]
    assert list(data.iter_with_index()) == [(0, "a"), (1, "b")]
    check_invariants(data)


def test_repeated_gaps_grow_length_not_storage(populated):
    before = populated.num_elements()
    for _ in range(1000):
        populated.try_push(None)

    assert populated.length() == len(POPULATION) + 1000
    assert populated.num_elements() == before
    assert len(populated.chunk_spans()) == 2


def test_falsy_values_are_present():
    """Only None marks a gap; 0, "" and False are real values."""
    data = ChunkedData.from_values([0, "", False, None])
    assert data.num_elements() == 3
    assert list(data.iter()) == [0, "", False]


def test_concrete_population(populated):
    assert populated.length() == 10
    assert populated.num_elements() == 7
    assert populated.first() == 1
    assert populated.last() == 10
    assert populated.chunk_spans() == [(0, 3), (6, 4)]


def test_first_last_empty():
    data = ChunkedData()
    assert data.first() is None
    assert data.last() is None

    data.try_push(None)
    assert data.first() is None
    assert data.last() is None


def test_from_values_matches_try_push():
    built = ChunkedData.from_values(POPULATION)
    pushed = populate(ChunkedData())
    assert built.chunk_spans() == pushed.chunk_spans()
    assert list(built.iter_with_index()) == list(pushed.iter_with_index())


# ---- Iteration -----------------------------------------------------------

def test_iter(populated):
    assert list(populated.iter()) == PRESENT
    assert list(populated) == PRESENT


def test_reverse_iter(populated):
    assert list(reversed(populated.iter())) == PRESENT[::-1]
    assert list(reversed(populated)) == PRESENT[::-1]


def test_iter_with_index(populated):
    expected = [(i, v) for i, v in enumerate(POPULATION) if v is not None]
    assert list(populated.iter_with_index()) == expected
    assert list(reversed(populated.iter_with_index())) == expected[::-1]


def test_views_are_restartable(populated):
    view = populated.iter()
    assert isinstance(view, ChunkedDataIter)
    assert list(view) == PRESENT
    assert list(view) == PRESENT
    assert list(reversed(view)) == PRESENT[::-1]


def test_view_len_is_num_elements(populated):
    assert len(populated.iter()) == 7
    assert len(populated.iter_with_index()) == 7
    assert len(ChunkedData().iter()) == 0


def test_iter_empty():
    data = ChunkedData()
    assert list(data.iter()) == []
    assert list(reversed(data.iter())) == []


# ---- iter_along_base -----------------------------------------------------

def test_iter_along_base(populated):
    base = [f"t{i}" for i in range(len(POPULATION))]
    pairs = populated.iter_along_base(base)

    assert pairs is not None
    expected = [(f"t{i}", v) for i, v in enumerate(POPULATION) if v is not None]
    assert list(pairs) == expected
    assert list(reversed(pairs)) == expected[::-1]
    assert len(pairs) == 7


def test_iter_along_longer_base(populated):
    base = list(range(100, 200))
    pairs = populated.iter_along_base(base)
    assert pairs is not None
    assert list(pairs)[-1] == (109, 10)


def test_iter_along_short_base_returns_none(populated):
    assert populated.iter_along_base(list(range(9))) is None
    assert populated.iter_along_base([]) is None


def test_iter_along_base_counts_trailing_gaps():
    """A trailing gap still needs a base entry, even with no value there."""
    data = ChunkedData.from_values([1, 2, None])
    assert data.iter_along_base(["a", "b"]) is None
    assert list(data.iter_along_base(["a", "b", "c"])) == [("a", 1), ("b", 2)]


def test_iter_along_base_on_empty_store():
    data = ChunkedData()
    assert list(data.iter_along_base([])) == []


# ---- Housekeeping --------------------------------------------------------

def test_shrink_to_fit_keeps_contents(populated):
    spans = populated.chunk_spans()
    pairs = list(populated.iter_with_index())

    populated.shrink_to_fit()

    assert populated.chunk_spans() == spans
    assert list(populated.iter_with_index()) == pairs
    populated.push(11)
    assert populated.last() == 11
    assert populated.chunk_spans()[-1] == (6, 5)


def test_memory_usage_grows_with_values_not_gaps():
    gappy = ChunkedData.from_values([1.5] + [None] * 10_000 + [2.5])
    dense = ChunkedData.from_values([float(i) for i in range(10_002)])
    assert gappy.length() == dense.length()
    assert gappy.memory_usage_bytes() < dense.memory_usage_bytes() / 10


def test_repr(populated):
    assert repr(populated) == "ChunkedData(length=10, elements=7, chunks=2)"
