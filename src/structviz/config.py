"""Default datasets and workbench configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Tuple

HEAP_TYPES = ("min", "max")


@dataclass
class EngineDefaults:
    """Datasets every engine is seeded with on initialization and reset."""

    avl_keys: List[int] = field(default_factory=lambda: [30, 20, 40, 10, 25, 35, 50])
    bst_keys: List[int] = field(default_factory=lambda: [50, 30, 70, 20, 40, 60, 80])
    segment_array: List[int] = field(default_factory=lambda: [1, 3, 5, 7, 9, 11])
    fenwick_array: List[int] = field(default_factory=lambda: [1, 3, 5, 7, 9, 11, 13, 15])
    dsu_size: int = 8
    heap_values: List[int] = field(default_factory=list)
    graph_node_count: int = 6
    graph_edges: List[Tuple[int, int]] = field(
        default_factory=lambda: [(0, 1), (0, 2), (1, 3), (1, 4), (2, 5), (3, 4), (4, 5)]
    )


@dataclass
class WorkbenchConfig:
    """Configuration parameters for :class:Workbench."""

    verbose: bool = False
    use_tqdm: bool | None = None
    balanced: bool = True
    heap_type: str | None = None
    dsu_size: int | None = None
    path_compression: bool = True
    defaults: EngineDefaults = field(default_factory=EngineDefaults)

    def __post_init__(self) -> None:
        if self.heap_type is None:
            self.heap_type = os.getenv("STRUCTVIZ_HEAP_TYPE", "min")
        if self.dsu_size is None:
            env_size = os.getenv("STRUCTVIZ_DSU_SIZE")
            self.dsu_size = int(env_size) if env_size else self.defaults.dsu_size
        if self.heap_type not in HEAP_TYPES:
            raise ValueError(f"heap_type must be one of {HEAP_TYPES}, got '{self.heap_type}'")
        if self.dsu_size < 0:
            raise ValueError("dsu_size must be non-negative")
