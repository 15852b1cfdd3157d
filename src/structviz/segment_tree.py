"""Array-backed segment tree for range sums and point updates."""

from __future__ import annotations

from typing import Iterable, List, Tuple

import numpy as np

from .config import EngineDefaults
from .results import OperationResult, ResultKind, check_index, failure, invalid_ints, ok, require_int


class SegmentTreeEngine:
    """Sum segment tree stored 1-based in a ``4n`` list.

    Node ``i`` has children ``2i`` and ``2i + 1``; the trace of every
    operation is the list of node indices touched.
    """

    def __init__(self, values: Iterable[int] | None = None) -> None:
        seed = values if values is not None else EngineDefaults().segment_array
        self._seed = [require_int("value", value) for value in seed]
        self.array: List[int] = []
        self.tree: List[int] = []
        self.reset()

    @property
    def size(self) -> int:
        return len(self.array)

    def reset(self) -> OperationResult:
        return self.build(self._seed)

    def build(self, values: Iterable[int]) -> OperationResult:
        values = list(values)
        for position, value in enumerate(values):
            problem = invalid_ints(**{f"values[{position}]": value})
            if problem is not None:
                return problem
        self.array = values
        self.tree = [0] * (4 * max(self.size, 1))
        if self.array:
            self._build(1, 0, self.size - 1)
        return ok(
            f"Built segment tree for array [{', '.join(str(v) for v in self.array)}]",
            [1] if self.array else [],
            state=self.snapshot(),
            changed=True,
        )

    def query(self, left: int, right: int) -> OperationResult:
        problem = invalid_ints(left=left, right=right)
        if problem is not None:
            return problem
        if left > right:
            return failure(ResultKind.INDEX_OUT_OF_RANGE, f"Invalid range [{left}, {right}]: left exceeds right")
        problem = check_index(left, self.size, "Left bound") or check_index(right, self.size, "Right bound")
        if problem is not None:
            return problem

        touched: List[int] = []
        total = self._query(1, 0, self.size - 1, left, right, touched)
        return ok(
            f"Range sum [{left}, {right}] = {total}",
            touched,
            state=self.snapshot(),
            value=total,
        )

    def update(self, index: int, value: int) -> OperationResult:
        problem = invalid_ints(value=value) or check_index(index, self.size)
        if problem is not None:
            return problem

        previous = self.array[index]
        self.array[index] = value
        path: List[int] = []
        self._update(1, 0, self.size - 1, index, value, path)
        return ok(
            f"Updated index {index} to {value}",
            path,
            state=self.snapshot(),
            value=value,
            changed=True,
            previous=previous,
        )

    def values(self) -> List[int]:
        return list(self.array)

    def snapshot(self) -> dict:
        return {"array": list(self.array), "tree": list(self.tree)}

    def is_consistent(self) -> bool:
        """Check every stored node sum against a direct prefix-sum computation."""

        if not self.array:
            return True
        prefix = np.concatenate(([0], np.cumsum(np.asarray(self.array, dtype=np.int64))))
        spans = self._spans(1, 0, self.size - 1)
        nodes = np.array([node for node, _, _ in spans])
        starts = np.array([start for _, start, _ in spans])
        ends = np.array([end for _, _, end in spans])
        stored = np.asarray(self.tree, dtype=np.int64)[nodes]
        expected = prefix[ends + 1] - prefix[starts]
        return bool(np.array_equal(stored, expected))

    def _build(self, node: int, start: int, end: int) -> None:
        if start == end:
            self.tree[node] = self.array[start]
            return
        mid = (start + end) // 2
        self._build(2 * node, start, mid)
        self._build(2 * node + 1, mid + 1, end)
        self.tree[node] = self.tree[2 * node] + self.tree[2 * node + 1]

    def _query(self, node: int, start: int, end: int, left: int, right: int, touched: List[int]) -> int:
        touched.append(node)
        if right < start or end < left:
            return 0
        if left <= start and end <= right:
            return self.tree[node]
        mid = (start + end) // 2
        return self._query(2 * node, start, mid, left, right, touched) + self._query(
            2 * node + 1, mid + 1, end, left, right, touched
        )

    def _update(self, node: int, start: int, end: int, index: int, value: int, path: List[int]) -> None:
        path.append(node)
        if start == end:
            self.tree[node] = value
            return
        mid = (start + end) // 2
        if index <= mid:
            self._update(2 * node, start, mid, index, value, path)
        else:
            self._update(2 * node + 1, mid + 1, end, index, value, path)
        self.tree[node] = self.tree[2 * node] + self.tree[2 * node + 1]

    def _spans(self, node: int, start: int, end: int) -> List[Tuple[int, int, int]]:
        spans = [(node, start, end)]
        if start != end:
            mid = (start + end) // 2
            spans.extend(self._spans(2 * node, start, mid))
            spans.extend(self._spans(2 * node + 1, mid + 1, end))
        return spans


__all__ = ["SegmentTreeEngine"]
