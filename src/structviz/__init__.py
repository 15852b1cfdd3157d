"""Structviz library initialization."""

from .balanced_tree import BalancedTreeEngine, TreeNode
from .config import EngineDefaults, WorkbenchConfig
from .disjoint_set import DisjointSetEngine
from .fenwick import FenwickTreeEngine
from .graph import GraphTraversalEngine, TraversalStep
from .heap import HeapEngine
from .results import OperationResult, ResultKind, Trace
from .runner import run_script
from .segment_tree import SegmentTreeEngine
from .workbench import Command, Workbench, WorkbenchRun, WorkbenchStats

__all__ = [
    "BalancedTreeEngine",
    "TreeNode",
    "SegmentTreeEngine",
    "FenwickTreeEngine",
    "DisjointSetEngine",
    "HeapEngine",
    "GraphTraversalEngine",
    "TraversalStep",
    "OperationResult",
    "ResultKind",
    "Trace",
    "EngineDefaults",
    "WorkbenchConfig",
    "Command",
    "Workbench",
    "WorkbenchRun",
    "WorkbenchStats",
    "run_script",
]
