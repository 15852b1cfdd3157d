"""Host-side dispatcher that owns one instance of every engine."""

from __future__ import annotations

import inspect
import time
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence, Tuple

try:
    from tqdm import tqdm

    _TQDM_AVAILABLE = True
except ImportError:  # pragma: no cover - optional dependency
    _TQDM_AVAILABLE = False

from .balanced_tree import BalancedTreeEngine
from .config import WorkbenchConfig
from .disjoint_set import DisjointSetEngine
from .fenwick import FenwickTreeEngine
from .graph import GraphTraversalEngine
from .heap import HeapEngine
from .results import OperationResult, ResultKind, failure
from .segment_tree import SegmentTreeEngine

OPERATIONS: Dict[str, Tuple[str, ...]] = {
    "tree": ("insert", "delete", "search", "min", "max", "traverse", "reset"),
    "segment": ("build", "query", "update", "reset"),
    "fenwick": ("build", "update", "query", "prefix_sum", "range_sum", "set_value", "reset"),
    "dsu": ("find", "union", "connected", "resize", "reset"),
    "heap": ("insert", "extract_root", "peek", "change_polarity", "reset"),
    "graph": ("bfs", "dfs", "traverse", "add_edge", "remove_edge", "reset"),
}

# operations taking the whole argument list as a single sequence
_SEQUENCE_OPERATIONS = {("segment", "build"), ("fenwick", "build")}


@dataclass(frozen=True)
class Command:
    """A single engine invocation with already-typed arguments."""

    engine: str
    operation: str
    args: Tuple[object, ...] = ()


@dataclass
class WorkbenchStats:
    """Summary metrics for a batch of commands."""

    commands: int
    results_by_kind: Dict[str, int]
    failures: int
    runtime_seconds: float


@dataclass
class WorkbenchRun:
    """Result bundle returned by :meth:Workbench.run."""

    results: List[OperationResult] = field(default_factory=list)
    stats: WorkbenchStats | None = None


class Workbench:
    """Route commands to independent engine instances and tally the outcomes."""

    def __init__(self, config: WorkbenchConfig | None = None) -> None:
        self.config = config or WorkbenchConfig()
        self.engines: Dict[str, object] = {}
        self.reset()

    def reset(self, engine: str | None = None) -> None:
        """Re-seed one engine (or all of them) with its default dataset."""

        factories = {
            "tree": self._make_tree,
            "segment": lambda: SegmentTreeEngine(self.config.defaults.segment_array),
            "fenwick": lambda: FenwickTreeEngine(self.config.defaults.fenwick_array),
            "dsu": lambda: DisjointSetEngine(self.config.dsu_size, self.config.path_compression),
            "heap": lambda: HeapEngine(self.config.defaults.heap_values, self.config.heap_type),
            "graph": lambda: GraphTraversalEngine(
                self.config.defaults.graph_node_count, self.config.defaults.graph_edges
            ),
        }
        if engine is not None and engine not in factories:
            raise KeyError(f"Unknown engine '{engine}'")
        for name, factory in factories.items():
            if engine is None or name == engine:
                self.engines[name] = factory()

    def execute(self, command: Command) -> OperationResult:
        operations = OPERATIONS.get(command.engine)
        if operations is None:
            return failure(ResultKind.INVALID_INPUT, f"Unknown engine '{command.engine}'")
        if command.operation not in operations:
            return failure(
                ResultKind.INVALID_INPUT,
                f"Unknown operation '{command.operation}' for engine '{command.engine}'",
            )

        method = getattr(self.engines[command.engine], command.operation)
        args: Sequence[object] = command.args
        if (command.engine, command.operation) in _SEQUENCE_OPERATIONS:
            args = (list(command.args),)
        try:
            inspect.signature(method).bind(*args)
        except TypeError as exc:
            return failure(ResultKind.INVALID_INPUT, f"Invalid arguments for {command.engine}.{command.operation}: {exc}")
        return method(*args)

    def run(self, commands: Iterable[Command]) -> WorkbenchRun:
        """Execute `commands` in order and return every result plus summary stats."""

        verbose = self.config.verbose
        start_time = time.time()
        commands = list(commands)
        if verbose:
            print(f"--- Running {len(commands)} commands ---")

        iterator: Iterable[Command] = commands
        if commands and self._use_tqdm:
            iterator = tqdm(commands, desc="   Commands", unit="cmd")

        results: List[OperationResult] = []
        kind_counter: defaultdict[str, int] = defaultdict(int)
        for command in iterator:
            result = self.execute(command)
            results.append(result)
            kind_counter[result.kind.value] += 1
            if verbose:
                arguments = " ".join(str(arg) for arg in command.args)
                status = "ok" if result.success else "FAILED"
                print(f"   [{command.engine}] {command.operation} {arguments}".rstrip() + f" -> {status}: {result.message}")

        elapsed = time.time() - start_time
        stats = WorkbenchStats(
            commands=len(results),
            results_by_kind=dict(kind_counter),
            failures=sum(1 for result in results if not result.success),
            runtime_seconds=elapsed,
        )
        if verbose:
            print(f"   Result kinds: {stats.results_by_kind}")
            print(f"--- Finished in {elapsed:.2f} seconds ---")
        return WorkbenchRun(results=results, stats=stats)

    @property
    def _use_tqdm(self) -> bool:
        if self.config.use_tqdm is not None:
            return self.config.use_tqdm and _TQDM_AVAILABLE
        return _TQDM_AVAILABLE

    def _make_tree(self) -> BalancedTreeEngine:
        defaults = self.config.defaults
        keys = defaults.avl_keys if self.config.balanced else defaults.bst_keys
        return BalancedTreeEngine(keys, balanced=self.config.balanced)


__all__ = ["Command", "Workbench", "WorkbenchRun", "WorkbenchStats", "OPERATIONS"]
