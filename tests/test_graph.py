from structviz.graph import GraphTraversalEngine
from structviz.results import ResultKind


def test_default_adjacency_follows_edge_order():
    adjacency = GraphTraversalEngine().adjacency()
    assert adjacency == {0: [1, 2], 1: [0, 3, 4], 2: [0, 5], 3: [1, 4], 4: [1, 3, 5], 5: [2, 4]}


def test_bfs_documented_order():
    result = GraphTraversalEngine().bfs(0)
    assert result.trace == [0, 1, 2, 3, 4, 5]

    steps = result.details["steps"]
    assert len(steps) == 7
    assert steps[0].message == "BFS visiting node 0 (start)"
    assert steps[3].node == 3 and steps[3].parent == 1
    assert steps[-1].completed
    assert steps[-1].message == "BFS completed! Path: 0 → 1 → 2 → 3 → 4 → 5"


def test_bfs_visits_in_non_decreasing_distance():
    steps = GraphTraversalEngine().bfs(0).details["steps"][:-1]
    distance = {}
    for step in steps:
        distance[step.node] = 0 if step.parent is None else distance[step.parent] + 1
    ordered = [distance[step.node] for step in steps]
    assert ordered == sorted(ordered)


def test_dfs_explores_neighbors_in_adjacency_order():
    result = GraphTraversalEngine().dfs(0)
    assert result.trace == [0, 1, 3, 4, 5, 2]
    parents = [(step.node, step.parent) for step in result.details["steps"][:-1]]
    assert parents == [(0, None), (1, 0), (3, 1), (4, 3), (5, 4), (2, 5)]
    assert result.details["tree_edges"] == [(0, 1), (1, 3), (3, 4), (4, 5), (2, 5)]


def test_traversal_stays_inside_component():
    engine = GraphTraversalEngine(6, [(0, 1), (2, 3)])
    assert engine.bfs(0).trace == [0, 1]
    assert engine.dfs(2).trace == [2, 3]
    assert engine.traverse("bfs", 5).trace == [5]


def test_invalid_start_node():
    engine = GraphTraversalEngine()
    for start in (6, -1):
        result = engine.bfs(start)
        assert not result.success
        assert result.kind is ResultKind.INVALID_INPUT
        assert engine.dfs(start).kind is ResultKind.INVALID_INPUT


def test_edge_editing():
    engine = GraphTraversalEngine()
    assert engine.add_edge(0, 3).changed
    assert engine.adjacency()[0] == [1, 2, 3]
    assert engine.add_edge(3, 0).kind is ResultKind.DUPLICATE_KEY
    assert engine.add_edge(0, 0).kind is ResultKind.INVALID_INPUT
    assert engine.add_edge(0, 9).kind is ResultKind.INVALID_INPUT

    engine.reset()
    assert engine.remove_edge(4, 1).changed
    assert engine.bfs(0).trace == [0, 1, 2, 3, 5, 4]
    assert engine.remove_edge(4, 1).kind is ResultKind.NOT_FOUND

    engine.reset()
    assert engine.bfs(0).trace == [0, 1, 2, 3, 4, 5]


def test_malformed_arguments_are_invalid_input():
    engine = GraphTraversalEngine()
    before = engine.snapshot()
    assert engine.traverse("level", 0).kind is ResultKind.INVALID_INPUT
    assert engine.bfs("0").kind is ResultKind.INVALID_INPUT
    assert engine.add_edge("a", 1).kind is ResultKind.INVALID_INPUT
    assert engine.remove_edge(0, None).kind is ResultKind.INVALID_INPUT
    assert engine.snapshot() == before
