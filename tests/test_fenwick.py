import random

from structviz.fenwick import FenwickTreeEngine, lowbit
from structviz.results import ResultKind


def test_lowbit():
    assert lowbit(12) == 4
    assert lowbit(8) == 8
    assert lowbit(7) == 1


def test_prefix_sum_matches_documented_scenario():
    engine = FenwickTreeEngine()
    result = engine.prefix_sum(3)
    assert result.value == 16
    assert result.trace == [4]
    assert engine.query(4).value == 16


def test_query_walks_down_by_lowbit():
    engine = FenwickTreeEngine()
    result = engine.query(7)
    assert result.value == 49
    assert result.trace == [7, 6, 4]


def test_query_of_empty_prefix():
    result = FenwickTreeEngine().query(0)
    assert result.success
    assert result.value == 0
    assert len(result.trace) == 0


def test_update_walks_up_by_lowbit():
    engine = FenwickTreeEngine()
    result = engine.update(3, 2)
    assert result.trace == [3, 4, 8]
    assert engine.values()[2] == 7
    assert engine.prefix_sum(7).value == 66
    assert engine.is_consistent()


def test_set_value_reports_delta():
    engine = FenwickTreeEngine()
    result = engine.set_value(0, 4)
    assert result.trace == [1, 2, 4, 8]
    assert result.details["delta"] == 3
    assert result.message == "Updated index 0: 1 → 4 (Δ+3)"
    assert engine.prefix_sum(0).value == 4


def test_range_sum():
    engine = FenwickTreeEngine()
    result = engine.range_sum(2, 4)
    assert result.value == 21
    assert result.trace == [5, 4, 2]
    assert engine.range_sum(0, 7).value == 64


def test_out_of_range_indices():
    engine = FenwickTreeEngine()
    assert engine.query(9).kind is ResultKind.INDEX_OUT_OF_RANGE
    assert engine.update(0, 1).kind is ResultKind.INDEX_OUT_OF_RANGE
    assert engine.prefix_sum(8).kind is ResultKind.INDEX_OUT_OF_RANGE
    assert engine.range_sum(4, 2).kind is ResultKind.INDEX_OUT_OF_RANGE
    assert engine.values() == [1, 3, 5, 7, 9, 11, 13, 15]


def test_prefix_sums_stay_consistent_under_random_updates():
    rng = random.Random(7)
    values = [rng.randint(-20, 20) for _ in range(13)]
    engine = FenwickTreeEngine(values)
    for _ in range(50):
        position = rng.randrange(len(values))
        values[position] = rng.randint(-20, 20)
        engine.set_value(position, values[position])
        for index in range(len(values)):
            assert engine.prefix_sum(index).value == sum(values[: index + 1])
    assert engine.is_consistent()


def test_non_integer_arguments_are_invalid_input():
    engine = FenwickTreeEngine()
    before = engine.snapshot()
    assert engine.update(1, 1.5).kind is ResultKind.INVALID_INPUT
    assert engine.query("3").kind is ResultKind.INVALID_INPUT
    assert engine.set_value(0, None).kind is ResultKind.INVALID_INPUT
    assert engine.range_sum(0, True).kind is ResultKind.INVALID_INPUT
    assert engine.build([1, 2, 3.0]).kind is ResultKind.INVALID_INPUT
    assert engine.snapshot() == before
