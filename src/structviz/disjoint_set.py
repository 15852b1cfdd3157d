"""Union-find with union by rank and optional path compression."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Tuple

from .results import OperationResult, ResultKind, check_index, failure, invalid_ints, ok, require_int


@dataclass
class DisjointSetEngine:
    """Union-find structure whose operations report the parent links walked."""

    size: int = 8
    path_compression: bool = True

    def __post_init__(self) -> None:
        self._seed_size = self.size
        self.reset()

    def reset(self) -> OperationResult:
        return self._initialize(self._seed_size)

    def resize(self, size: int) -> OperationResult:
        problem = invalid_ints(size=size)
        if problem is None and size < 0:
            problem = failure(ResultKind.INVALID_INPUT, f"Size must be non-negative, got {size}")
        if problem is not None:
            return problem
        result = self._initialize(size)
        self._seed_size = size
        return result

    def find(self, x: int) -> OperationResult:
        problem = check_index(x, self.size, "Element")
        if problem is not None:
            return problem
        root, path = self._walk(x)
        self._compress(path, root)
        return ok(f"Find({x}) = {root}", path, state=self.snapshot(), value=root)

    def union(self, x: int, y: int) -> OperationResult:
        problem = check_index(x, self.size, "Element") or check_index(y, self.size, "Element")
        if problem is not None:
            return problem
        root_x, path_x = self._walk(x)
        root_y, path_y = self._walk(y)
        trace = path_x + path_y
        if root_x == root_y:
            return ok(
                f"{x} and {y} are already connected",
                trace,
                state=self.snapshot(),
                value=root_x,
                changed=False,
                already_connected=True,
            )

        self._compress(path_x, root_x)
        self._compress(path_y, root_y)
        if self.rank[root_x] < self.rank[root_y]:
            self.parent[root_x] = root_y
            new_root = root_y
        elif self.rank[root_x] > self.rank[root_y]:
            self.parent[root_y] = root_x
            new_root = root_x
        else:
            self.parent[root_y] = root_x
            self.rank[root_x] += 1
            new_root = root_x
        return ok(
            f"Union {x} and {y}",
            trace,
            state=self.snapshot(),
            value=new_root,
            changed=True,
            already_connected=False,
        )

    def connected(self, x: int, y: int) -> OperationResult:
        problem = check_index(x, self.size, "Element") or check_index(y, self.size, "Element")
        if problem is not None:
            return problem
        root_x, path_x = self._walk(x)
        root_y, path_y = self._walk(y)
        same = root_x == root_y
        verb = "are" if same else "are not"
        return ok(f"{x} and {y} {verb} connected", path_x + path_y, state=self.snapshot(), value=same)

    def components(self) -> List[List[int]]:
        """Group every element by its root, ordered by each group's smallest member."""

        groups: Dict[int, List[int]] = defaultdict(list)
        for index in range(self.size):
            root, _ = self._walk(index)
            groups[root].append(index)
        return list(groups.values())

    def snapshot(self) -> dict:
        return {"parent": list(self.parent), "rank": list(self.rank)}

    def _initialize(self, size: int) -> OperationResult:
        require_int("size", size)
        if size < 0:
            raise ValueError("size must be non-negative")
        self.size = size
        self.parent = list(range(size))
        self.rank = [0] * size
        return ok(f"Initialized {size} singleton sets", state=self.snapshot(), changed=True)

    def _walk(self, x: int) -> Tuple[int, List[int]]:
        path = [x]
        current = x
        while self.parent[current] != current:
            current = self.parent[current]
            path.append(current)
        return current, path

    def _compress(self, path: List[int], root: int) -> None:
        if not self.path_compression:
            return
        for node in path:
            self.parent[node] = root


__all__ = ["DisjointSetEngine"]
