"""Breadth- and depth-first traversal over an undirected graph."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from .config import EngineDefaults
from .results import OperationResult, ResultKind, failure, invalid_choice, invalid_ints, ok, require_int

TRAVERSAL_ALGORITHMS = ("bfs", "dfs")

Edge = Tuple[int, int]


def edge_key(u: int, v: int) -> Edge:
    return (min(u, v), max(u, v))


@dataclass(frozen=True)
class TraversalStep:
    """One playback frame. The terminal frame has ``node is None``."""

    node: Optional[int]
    parent: Optional[int]
    order: Tuple[int, ...]
    edges: Tuple[Edge, ...]
    message: str

    @property
    def completed(self) -> bool:
        return self.node is None


class _StepRecorder:
    def __init__(self, label: str) -> None:
        self.label = label
        self.order: List[int] = []
        self.edges: List[Edge] = []
        self.steps: List[TraversalStep] = []

    def visit(self, node: int, parent: Optional[int]) -> None:
        self.order.append(node)
        if parent is not None:
            self.edges.append(edge_key(parent, node))
            origin = f" from {parent}"
        else:
            origin = " (start)"
        self.steps.append(
            TraversalStep(node, parent, tuple(self.order), tuple(self.edges), f"{self.label} visiting node {node}{origin}")
        )

    def finish(self) -> TraversalStep:
        path = " → ".join(str(node) for node in self.order)
        final = TraversalStep(None, None, tuple(self.order), tuple(self.edges), f"{self.label} completed! Path: {path}")
        self.steps.append(final)
        return final


class GraphTraversalEngine:
    """Fixed node set ``0..n-1`` with an ordered edge list; adjacency is derived per call."""

    def __init__(self, node_count: int | None = None, edges: Iterable[Edge] | None = None) -> None:
        defaults = EngineDefaults()
        self._seed_count = defaults.graph_node_count if node_count is None else require_int("node_count", node_count)
        if self._seed_count < 0:
            raise ValueError("node_count must be non-negative")
        self._seed_edges = [tuple(edge) for edge in (defaults.graph_edges if edges is None else edges)]
        for u, v in self._seed_edges:
            if not (self._valid(u) and self._valid(v)) or u == v:
                raise ValueError(f"invalid edge ({u}, {v}) for {self._seed_count} nodes")
        self.node_count = self._seed_count
        self.edges: List[Edge] = []
        self.reset()

    @property
    def nodes(self) -> List[int]:
        return list(range(self.node_count))

    def reset(self) -> OperationResult:
        self.node_count = self._seed_count
        self.edges = list(self._seed_edges)
        return ok("Graph reset", state=self.snapshot(), changed=True)

    def adjacency(self) -> Dict[int, List[int]]:
        adjacency: Dict[int, List[int]] = {node: [] for node in range(self.node_count)}
        for u, v in self.edges:
            adjacency[u].append(v)
            adjacency[v].append(u)
        return adjacency

    def add_edge(self, u: int, v: int) -> OperationResult:
        problem = invalid_ints(u=u, v=v)
        if problem is not None:
            return problem
        if not (self._valid(u) and self._valid(v)):
            return failure(ResultKind.INVALID_INPUT, "Both nodes must be valid")
        if u == v:
            return failure(ResultKind.INVALID_INPUT, "Self loops are not allowed")
        if self._find_edge(u, v) is not None:
            return ok(
                f"Edge {u}-{v} already exists",
                [u, v],
                state=self.snapshot(),
                kind=ResultKind.DUPLICATE_KEY,
                changed=False,
            )
        self.edges.append((u, v))
        return ok(f"Added edge {u}-{v}", [u, v], state=self.snapshot(), changed=True)

    def remove_edge(self, u: int, v: int) -> OperationResult:
        problem = invalid_ints(u=u, v=v)
        if problem is not None:
            return problem
        position = self._find_edge(u, v)
        if position is None:
            return failure(ResultKind.NOT_FOUND, f"Edge {u}-{v} not found")
        del self.edges[position]
        return ok(f"Removed edge {u}-{v}", [u, v], state=self.snapshot(), changed=True)

    def bfs(self, start: int) -> OperationResult:
        problem = self._check_start(start)
        if problem is not None:
            return problem
        adjacency = self.adjacency()
        recorder = _StepRecorder("BFS")
        visited = {start}
        queue = deque([(start, None)])
        while queue:
            node, parent = queue.popleft()
            recorder.visit(node, parent)
            for neighbor in adjacency[node]:
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append((neighbor, node))
        return self._finish(recorder)

    def dfs(self, start: int) -> OperationResult:
        problem = self._check_start(start)
        if problem is not None:
            return problem
        adjacency = self.adjacency()
        recorder = _StepRecorder("DFS")
        visited = set()
        stack: List[Tuple[int, Optional[int]]] = [(start, None)]
        while stack:
            node, parent = stack.pop()
            if node in visited:
                continue
            visited.add(node)
            recorder.visit(node, parent)
            for neighbor in reversed(adjacency[node]):
                if neighbor not in visited:
                    stack.append((neighbor, node))
        return self._finish(recorder)

    def traverse(self, algorithm: str, start: int) -> OperationResult:
        problem = invalid_choice("algorithm", algorithm, TRAVERSAL_ALGORITHMS)
        if problem is not None:
            return problem
        if algorithm == "bfs":
            return self.bfs(start)
        return self.dfs(start)

    def snapshot(self) -> dict:
        return {"nodes": self.nodes, "edges": list(self.edges)}

    def _valid(self, node: int) -> bool:
        return 0 <= node < self._seed_count

    def _check_start(self, start: int) -> OperationResult | None:
        problem = invalid_ints(start=start)
        if problem is not None or self._valid(start):
            return problem
        return failure(
            ResultKind.INVALID_INPUT,
            f"Invalid start node! Please enter a number between 0 and {self.node_count - 1}",
        )

    def _find_edge(self, u: int, v: int) -> int | None:
        wanted = edge_key(u, v)
        for position, (a, b) in enumerate(self.edges):
            if edge_key(a, b) == wanted:
                return position
        return None

    def _finish(self, recorder: _StepRecorder) -> OperationResult:
        final = recorder.finish()
        return ok(
            final.message,
            recorder.order,
            state=self.snapshot(),
            value=list(recorder.order),
            steps=recorder.steps,
            tree_edges=list(recorder.edges),
        )


__all__ = ["GraphTraversalEngine", "TraversalStep", "edge_key"]
