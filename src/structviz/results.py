"""Result and trace types shared by every engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List


class ResultKind(str, Enum):
    """Discriminates the outcome of an engine operation."""

    OK = "ok"
    INVALID_INPUT = "invalid_input"
    INDEX_OUT_OF_RANGE = "index_out_of_range"
    NOT_FOUND = "not_found"
    EMPTY_STRUCTURE = "empty_structure"
    DUPLICATE_KEY = "duplicate_key"


class Trace:
    """Ordered record of the identifiers touched by an operation.

    Re-visits are kept: the Fenwick update path or a DSU union touching the
    same root twice are meaningful to the playback layer.
    """

    __slots__ = ("_steps",)

    def __init__(self, steps: Iterable[int] = ()) -> None:
        self._steps: List[int] = list(steps)

    def append(self, identifier: int) -> None:
        self._steps.append(identifier)

    def extend(self, identifiers: Iterable[int]) -> None:
        self._steps.extend(identifiers)

    def first_touch(self) -> List[int]:
        """Return identifiers deduplicated, keeping the order of first appearance."""

        return list(dict.fromkeys(self._steps))

    def to_list(self) -> List[int]:
        return list(self._steps)

    def __iter__(self) -> Iterator[int]:
        return iter(self._steps)

    def __len__(self) -> int:
        return len(self._steps)

    def __getitem__(self, index):
        return self._steps[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Trace):
            return self._steps == other._steps
        if isinstance(other, (list, tuple)):
            return self._steps == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"Trace({self._steps!r})"


@dataclass
class OperationResult:
    """Structured outcome returned by every engine operation."""

    success: bool
    kind: ResultKind
    message: str
    trace: Trace = field(default_factory=Trace)
    state: Any = None
    value: Any = None
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def changed(self) -> bool:
        return bool(self.details.get("changed", False))


def ok(
    message: str,
    trace: Iterable[int] | Trace = (),
    *,
    state: Any = None,
    value: Any = None,
    kind: ResultKind = ResultKind.OK,
    **details: Any,
) -> OperationResult:
    if not isinstance(trace, Trace):
        trace = Trace(trace)
    return OperationResult(
        success=True,
        kind=kind,
        message=message,
        trace=trace,
        state=state,
        value=value,
        details=dict(details),
    )


def failure(
    kind: ResultKind,
    message: str,
    *,
    trace: Iterable[int] = (),
    state: Any = None,
    **details: Any,
) -> OperationResult:
    """Build an unsuccessful result. The trace stays empty unless a search miss supplies its descent."""

    details.setdefault("changed", False)
    return OperationResult(
        success=False,
        kind=kind,
        message=message,
        trace=Trace(trace),
        state=state,
        details=details,
    )


def _is_int(value: object) -> bool:
    # bool is an int subclass but never a valid key or index
    return isinstance(value, int) and not isinstance(value, bool)


def require_int(name: str, value: object) -> int:
    """Constructor-side check: seeds that are not ints are programming errors."""

    if not _is_int(value):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    return value


def invalid_ints(**values: object) -> OperationResult | None:
    """Return an ``INVALID_INPUT`` failure for the first argument that is not an int."""

    for name, value in values.items():
        if not _is_int(value):
            return failure(ResultKind.INVALID_INPUT, f"{name} must be an integer, got {value!r}")
    return None


def invalid_choice(name: str, value: object, choices: Iterable[str]) -> OperationResult | None:
    choices = tuple(choices)
    if value in choices:
        return None
    return failure(ResultKind.INVALID_INPUT, f"{name} must be one of {', '.join(choices)}, got {value!r}")


def check_index(index: int, size: int, label: str = "Index") -> OperationResult | None:
    """Return a failure when `index` is not an int or falls outside ``[0, size)``."""

    problem = invalid_ints(**{label.lower(): index})
    if problem is not None:
        return problem
    if 0 <= index < size:
        return None
    return failure(
        ResultKind.INDEX_OUT_OF_RANGE,
        f"{label} {index} is out of range [0, {size - 1}]" if size else f"{label} {index} is out of range (empty)",
    )


__all__ = [
    "ResultKind",
    "Trace",
    "OperationResult",
    "ok",
    "failure",
    "require_int",
    "invalid_ints",
    "invalid_choice",
    "check_index",
]
