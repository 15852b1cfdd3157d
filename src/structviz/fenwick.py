"""Fenwick (binary indexed) tree over a mutable integer array."""

from __future__ import annotations

from typing import Iterable, List

import numpy as np

from .config import EngineDefaults
from .results import OperationResult, ResultKind, check_index, failure, invalid_ints, ok, require_int


def lowbit(index: int) -> int:
    """Value of the lowest set bit of `index`."""

    return index & -index


class FenwickTreeEngine:
    """Prefix-sum tree; ``tree[i]`` holds the sum over ``(i - lowbit(i), i]``.

    :meth:`update` and :meth:`query` take 1-based tree indices. The
    array-level helpers (:meth:`set_value`, :meth:`prefix_sum`,
    :meth:`range_sum`) take 0-based positions.
    """

    def __init__(self, values: Iterable[int] | None = None) -> None:
        seed = values if values is not None else EngineDefaults().fenwick_array
        self._seed = [require_int("value", value) for value in seed]
        self.array: List[int] = []
        self.tree: List[int] = [0]
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
        self.tree = [0] * (self.size + 1)
        for position, value in enumerate(self.array):
            self._add(position + 1, value)
        return ok(
            f"Built Fenwick tree for array [{', '.join(str(v) for v in self.array)}]",
            state=self.snapshot(),
            changed=True,
        )

    def update(self, index: int, delta: int) -> OperationResult:
        problem = invalid_ints(delta=delta) or self._check_tree_index(index)
        if problem is not None:
            return problem
        self.array[index - 1] += delta
        touched = self._add(index, delta)
        return ok(
            f"Added {delta} at tree index {index}",
            touched,
            state=self.snapshot(),
            value=delta,
            changed=True,
        )

    def query(self, index: int) -> OperationResult:
        """Prefix sum over tree indices ``[1, index]``; ``index == 0`` is the empty prefix."""

        problem = invalid_ints(index=index)
        if problem is not None:
            return problem
        if not 0 <= index <= self.size:
            return failure(ResultKind.INDEX_OUT_OF_RANGE, f"Tree index {index} is out of range [0, {self.size}]")
        total, touched = self._prefix(index)
        return ok(f"Prefix sum [1..{index}] = {total}", touched, state=self.snapshot(), value=total)

    def prefix_sum(self, position: int) -> OperationResult:
        problem = check_index(position, self.size)
        if problem is not None:
            return problem
        total, touched = self._prefix(position + 1)
        return ok(f"Prefix sum [0..{position}] = {total}", touched, state=self.snapshot(), value=total)

    def range_sum(self, left: int, right: int) -> OperationResult:
        problem = invalid_ints(left=left, right=right)
        if problem is not None:
            return problem
        if left > right:
            return failure(ResultKind.INDEX_OUT_OF_RANGE, f"Invalid range [{left}, {right}]: left exceeds right")
        problem = check_index(left, self.size, "Left bound") or check_index(right, self.size, "Right bound")
        if problem is not None:
            return problem
        upper, upper_trace = self._prefix(right + 1)
        lower, lower_trace = self._prefix(left)
        total = upper - lower
        return ok(
            f"Range sum [{left}, {right}] = {total}",
            upper_trace + lower_trace,
            state=self.snapshot(),
            value=total,
        )

    def set_value(self, position: int, value: int) -> OperationResult:
        problem = invalid_ints(value=value) or check_index(position, self.size)
        if problem is not None:
            return problem
        previous = self.array[position]
        delta = value - previous
        self.array[position] = value
        touched = self._add(position + 1, delta)
        sign = "+" if delta > 0 else ""
        return ok(
            f"Updated index {position}: {previous} → {value} (Δ{sign}{delta})",
            touched,
            state=self.snapshot(),
            value=value,
            changed=True,
            previous=previous,
            delta=delta,
        )

    def values(self) -> List[int]:
        return list(self.array)

    def snapshot(self) -> dict:
        return {"array": list(self.array), "tree": list(self.tree)}

    def is_consistent(self) -> bool:
        """Check every slot against the direct sum over its responsibility range."""

        if not self.array:
            return True
        prefix = np.concatenate(([0], np.cumsum(np.asarray(self.array, dtype=np.int64))))
        indices = np.arange(1, self.size + 1)
        expected = prefix[indices] - prefix[indices - (indices & -indices)]
        return bool(np.array_equal(np.asarray(self.tree[1:], dtype=np.int64), expected))

    def _check_tree_index(self, index: int) -> OperationResult | None:
        problem = invalid_ints(index=index)
        if problem is not None:
            return problem
        if 1 <= index <= self.size:
            return None
        return failure(ResultKind.INDEX_OUT_OF_RANGE, f"Tree index {index} is out of range [1, {self.size}]")

    def _add(self, index: int, delta: int) -> List[int]:
        touched = []
        while index <= self.size:
            touched.append(index)
            self.tree[index] += delta
            index += lowbit(index)
        return touched

    def _prefix(self, index: int) -> tuple[int, List[int]]:
        total = 0
        touched = []
        while index > 0:
            touched.append(index)
            total += self.tree[index]
            index -= lowbit(index)
        return total, touched


__all__ = ["FenwickTreeEngine", "lowbit"]
