import pytest

from structviz.results import ResultKind
from structviz.segment_tree import SegmentTreeEngine


def test_query_matches_documented_scenario():
    engine = SegmentTreeEngine()
    result = engine.query(1, 3)
    assert result.success
    assert result.value == 15
    assert result.message == "Range sum [1, 3] = 15"


def test_query_trace_records_pruned_nodes_in_first_touch_order():
    engine = SegmentTreeEngine()
    result = engine.query(1, 3)
    assert result.trace == [1, 2, 4, 8, 9, 5, 3, 6, 12, 13, 7]
    assert result.trace.first_touch() == result.trace.to_list()


def test_every_range_matches_direct_sum():
    values = [4, -2, 7, 0, 3, 9, 1]
    engine = SegmentTreeEngine(values)
    for left in range(len(values)):
        for right in range(left, len(values)):
            assert engine.query(left, right).value == sum(values[left : right + 1])
    assert engine.is_consistent()


def test_update_rewrites_leaf_and_ancestors():
    engine = SegmentTreeEngine()
    result = engine.update(2, 10)

    assert result.success
    assert result.trace == [1, 2, 5]
    assert result.details["previous"] == 5
    assert engine.values() == [1, 3, 10, 7, 9, 11]
    assert engine.tree[1] == 41
    assert engine.query(0, 5).value == 41
    assert engine.is_consistent()


@pytest.mark.parametrize("left, right", [(3, 1), (-1, 2), (0, 6)])
def test_invalid_ranges_are_rejected_without_mutation(left, right):
    engine = SegmentTreeEngine()
    before = engine.snapshot()
    result = engine.query(left, right)
    assert not result.success
    assert result.kind is ResultKind.INDEX_OUT_OF_RANGE
    assert len(result.trace) == 0
    assert engine.snapshot() == before


def test_update_out_of_range():
    engine = SegmentTreeEngine()
    assert engine.update(6, 1).kind is ResultKind.INDEX_OUT_OF_RANGE
    assert engine.values() == [1, 3, 5, 7, 9, 11]


def test_build_replaces_data_and_reset_restores_default():
    engine = SegmentTreeEngine()
    engine.build([2, 4, 6])
    assert engine.query(0, 2).value == 12
    engine.reset()
    assert engine.values() == [1, 3, 5, 7, 9, 11]


def test_empty_tree_rejects_queries():
    engine = SegmentTreeEngine([])
    assert engine.query(0, 0).kind is ResultKind.INDEX_OUT_OF_RANGE
    assert engine.is_consistent()


def test_non_integer_arguments_are_invalid_input():
    engine = SegmentTreeEngine()
    before = engine.snapshot()
    assert engine.query("a", 1).kind is ResultKind.INVALID_INPUT
    assert engine.update(1, 2.5).kind is ResultKind.INVALID_INPUT
    result = engine.build([1, "x"])
    assert result.kind is ResultKind.INVALID_INPUT
    assert "values[1]" in result.message
    assert engine.snapshot() == before
