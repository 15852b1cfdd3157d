import random

import pytest

from structviz.disjoint_set import DisjointSetEngine
from structviz.results import ResultKind


def _scenario(**kwargs):
    engine = DisjointSetEngine(8, **kwargs)
    engine.union(0, 1)
    engine.union(2, 3)
    return engine, engine.union(1, 2)


def test_documented_union_scenario():
    engine, result = _scenario()
    assert result.trace == [1, 0, 2]
    assert engine.find(0).value == engine.find(3).value
    assert engine.find(0).value != engine.find(5).value


def test_union_by_rank_prefers_first_root_on_ties():
    engine, _ = _scenario()
    assert engine.parent[:4] == [0, 0, 0, 2]
    assert engine.rank[0] == 2
    assert engine.rank[2] == 1

    result = engine.union(4, 0)
    assert result.value == 0
    assert engine.parent[4] == 0
    assert engine.rank[0] == 2


def test_find_traces_pre_compression_path():
    engine, _ = _scenario()
    first = engine.find(3)
    assert first.trace == [3, 2, 0]
    assert engine.parent[3] == 0
    assert engine.find(3).trace == [3, 0]


def test_find_without_path_compression_leaves_links():
    engine, _ = _scenario(path_compression=False)
    assert engine.find(3).trace == [3, 2, 0]
    assert engine.parent[3] == 2


def test_union_of_connected_elements_is_a_no_op():
    engine, _ = _scenario()
    before = engine.snapshot()
    result = engine.union(3, 1)
    assert result.success
    assert not result.changed
    assert result.details["already_connected"]
    assert result.message == "3 and 1 are already connected"
    assert result.trace == [3, 2, 0, 1, 0]
    assert engine.snapshot() == before


def test_connected_does_not_mutate():
    engine, _ = _scenario()
    result = engine.connected(3, 0)
    assert result.value is True
    assert engine.parent[3] == 2
    assert engine.connected(3, 6).value is False


def test_components_group_by_root():
    engine, _ = _scenario()
    assert engine.components() == [[0, 1, 2, 3], [4], [5], [6], [7]]


def test_invalid_elements():
    engine = DisjointSetEngine()
    assert engine.find(8).kind is ResultKind.INDEX_OUT_OF_RANGE
    assert engine.union(-1, 2).kind is ResultKind.INDEX_OUT_OF_RANGE
    with pytest.raises(ValueError):
        DisjointSetEngine(-1)


def test_resize_and_reset():
    engine, _ = _scenario()
    engine.resize(3)
    assert engine.size == 3
    assert engine.parent == [0, 1, 2]
    engine.union(0, 2)
    engine.reset()
    assert engine.parent == [0, 1, 2]


def test_rejected_resize_keeps_current_sets():
    engine = DisjointSetEngine()
    for size in (-1, "x", 2.0):
        result = engine.resize(size)
        assert result.kind is ResultKind.INVALID_INPUT
        assert not result.changed
        assert engine.size == 8
    assert engine.reset().success
    assert engine.parent == list(range(8))


def test_random_unions_agree_with_naive_labels():
    rng = random.Random(99)
    size = 20
    engine = DisjointSetEngine(size)
    labels = list(range(size))
    for _ in range(25):
        x, y = rng.randrange(size), rng.randrange(size)
        engine.union(x, y)
        old, new = labels[y], labels[x]
        labels = [new if label == old else label for label in labels]
        for a in range(size):
            for b in range(size):
                assert engine.connected(a, b).value == (labels[a] == labels[b])
    for root in {engine.find(i).value for i in range(size)}:
        assert engine.rank[root] >= 0
