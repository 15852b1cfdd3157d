"""Binary min/max heap over an implicit array."""

from __future__ import annotations

from typing import Iterable, List

import numpy as np

from .config import HEAP_TYPES
from .results import OperationResult, ResultKind, failure, invalid_choice, invalid_ints, ok, require_int


def parent_index(index: int) -> int:
    return (index - 1) // 2


def child_indices(index: int) -> tuple[int, int]:
    return 2 * index + 1, 2 * index + 2


class HeapEngine:
    """Heap whose traces list the array slots the moving element passed through."""

    def __init__(self, values: Iterable[int] | None = None, heap_type: str = "min") -> None:
        self._check_type(heap_type)
        self.heap_type = heap_type
        self._seed_type = heap_type
        self._seed = [require_int("value", value) for value in (values or [])]
        self.items: List[int] = []
        self.reset()

    def __len__(self) -> int:
        return len(self.items)

    def reset(self) -> OperationResult:
        self.heap_type = self._seed_type
        self.items = list(self._seed)
        self._heapify([])
        return ok(f"Reset {self.heap_type}-heap", state=self.snapshot(), changed=True)

    def insert(self, value: int) -> OperationResult:
        problem = invalid_ints(value=value)
        if problem is not None:
            return problem
        self.items.append(value)
        trace = self._sift_up(len(self.items) - 1)
        return ok(
            f"Inserted {value} into {self.heap_type}-heap",
            trace,
            state=self.snapshot(),
            value=value,
            changed=True,
        )

    def extract_root(self) -> OperationResult:
        if not self.items:
            return failure(ResultKind.EMPTY_STRUCTURE, "Cannot extract from an empty heap", state=self.snapshot())
        root = self.items[0]
        if len(self.items) == 1:
            self.items.clear()
            return ok(
                f"Extracted root {root} - heap is now empty",
                [0],
                state=self.snapshot(),
                value=root,
                changed=True,
            )
        self.items[0] = self.items.pop()
        trace = self._sift_down(0)
        return ok(
            f"Extracted root {root} from {self.heap_type}-heap",
            trace,
            state=self.snapshot(),
            value=root,
            changed=True,
        )

    def peek(self) -> OperationResult:
        if not self.items:
            return failure(ResultKind.EMPTY_STRUCTURE, "Heap is empty", state=self.snapshot())
        return ok(f"Root is {self.items[0]}", [0], state=self.snapshot(), value=self.items[0])

    def change_polarity(self, heap_type: str) -> OperationResult:
        problem = invalid_choice("heap_type", heap_type, HEAP_TYPES)
        if problem is not None:
            return problem
        self.heap_type = heap_type
        trace: List[int] = []
        self._heapify(trace)
        return ok(f"Converted to {heap_type}-heap", trace, state=self.snapshot(), changed=True)

    def snapshot(self) -> dict:
        return {"type": self.heap_type, "items": list(self.items)}

    def is_valid(self) -> bool:
        """Check the heap property for every parent/child pair."""

        if len(self.items) < 2:
            return True
        values = np.asarray(self.items)
        children = np.arange(1, len(values))
        parents = values[(children - 1) // 2]
        if self.heap_type == "min":
            return bool(np.all(parents <= values[children]))
        return bool(np.all(parents >= values[children]))

    def _out_of_order(self, upper: int, lower: int) -> bool:
        # True when the value at slot `upper` must not sit above the one at `lower`
        if self.heap_type == "min":
            return self.items[upper] > self.items[lower]
        return self.items[upper] < self.items[lower]

    def _sift_up(self, index: int) -> List[int]:
        trace = [index]
        while index > 0:
            parent = parent_index(index)
            if not self._out_of_order(parent, index):
                break
            self.items[parent], self.items[index] = self.items[index], self.items[parent]
            index = parent
            trace.append(index)
        return trace

    def _sift_down(self, index: int) -> List[int]:
        trace = [index]
        size = len(self.items)
        while True:
            target = index
            left, right = child_indices(index)
            if left < size and self._out_of_order(target, left):
                target = left
            if right < size and self._out_of_order(target, right):
                target = right
            if target == index:
                return trace
            self.items[index], self.items[target] = self.items[target], self.items[index]
            index = target
            trace.append(index)

    def _heapify(self, trace: List[int]) -> None:
        for index in range(len(self.items) // 2 - 1, -1, -1):
            trace.extend(self._sift_down(index))

    @staticmethod
    def _check_type(heap_type: str) -> None:
        if heap_type not in HEAP_TYPES:
            raise ValueError(f"heap_type must be one of {HEAP_TYPES}, got '{heap_type}'")


__all__ = ["HeapEngine", "parent_index", "child_indices"]
