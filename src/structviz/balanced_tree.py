"""Ordered key tree with AVL rebalancing (or plain BST semantics)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .config import EngineDefaults
from .results import OperationResult, ResultKind, failure, invalid_choice, invalid_ints, ok, require_int

TRAVERSAL_ORDERS = ("pre", "in", "post")


@dataclass
class TreeNode:
    """A tree node. Each child is owned exclusively by its parent."""

    key: int
    id: int
    left: Optional["TreeNode"] = None
    right: Optional["TreeNode"] = None
    height: int = 1


@dataclass
class _Descent:
    path: List[int] = field(default_factory=list)
    rotations: List[str] = field(default_factory=list)
    duplicate: bool = False
    removed: bool = False


def height(node: Optional[TreeNode]) -> int:
    return node.height if node is not None else 0


def balance_factor(node: Optional[TreeNode]) -> int:
    if node is None:
        return 0
    return height(node.left) - height(node.right)


def _update_height(node: TreeNode) -> None:
    node.height = max(height(node.left), height(node.right)) + 1


def rotate_right(y: TreeNode) -> TreeNode:
    """Lift ``y.left`` above `y` and return it as the new local root."""

    x = y.left
    t2 = x.right
    x.right = y
    y.left = t2
    _update_height(y)
    _update_height(x)
    return x


def rotate_left(x: TreeNode) -> TreeNode:
    """Lift ``x.right`` above `x` and return it as the new local root."""

    y = x.right
    t2 = y.left
    y.left = x
    x.right = t2
    _update_height(x)
    _update_height(y)
    return y


class BalancedTreeEngine:
    """Integer-keyed search tree producing a node-id trace per operation.

    With ``balanced=True`` (the default) the tree is an AVL tree; with
    ``balanced=False`` it keeps plain BST semantics and never rotates.
    Node ids are handed out sequentially from 1, so seeding the default
    keys yields ids 1..7 in insertion order.
    """

    def __init__(self, keys: Iterable[int] | None = None, balanced: bool = True) -> None:
        self.balanced = balanced
        if keys is None:
            defaults = EngineDefaults()
            keys = defaults.avl_keys if balanced else defaults.bst_keys
        self._seed = [require_int("key", key) for key in keys]
        self.root: Optional[TreeNode] = None
        self._next_id = 1
        self.reset()

    def reset(self) -> OperationResult:
        self.root = None
        self._next_id = 1
        for key in self._seed:
            self._place(key, _Descent())
        return ok("Tree reset", state=self.snapshot(), changed=True)

    # ------------------------------------------------------------------
    # operations

    def insert(self, key: int) -> OperationResult:
        problem = invalid_ints(key=key)
        if problem is not None:
            return problem
        descent = _Descent()
        self._place(key, descent)
        if descent.duplicate:
            return ok(
                f"{key} already exists",
                descent.path,
                state=self.snapshot(),
                kind=ResultKind.DUPLICATE_KEY,
                changed=False,
                rotations=[],
            )
        if descent.rotations:
            message = f"Inserted {key} ({', '.join(descent.rotations)} rotation)"
        else:
            message = f"Inserted {key} (no rotation needed)"
        return ok(
            message,
            descent.path,
            state=self.snapshot(),
            value=key,
            changed=True,
            rotations=descent.rotations,
        )

    def delete(self, key: int) -> OperationResult:
        problem = invalid_ints(key=key)
        if problem is not None:
            return problem
        descent = _Descent()
        if self.balanced:
            self.root = self._delete(self.root, key, descent)
        else:
            self._delete_unbalanced(key, descent)
        if not descent.removed:
            return failure(ResultKind.NOT_FOUND, f"{key} not found", state=self.snapshot())
        message = f"Deleted {key}"
        if descent.rotations:
            message += f" ({', '.join(descent.rotations)} rotation)"
        return ok(
            message,
            descent.path,
            state=self.snapshot(),
            value=key,
            changed=True,
            rotations=descent.rotations,
        )

    def search(self, key: int) -> OperationResult:
        problem = invalid_ints(key=key)
        if problem is not None:
            return problem
        path: List[int] = []
        node = self.root
        while node is not None:
            path.append(node.id)
            if key == node.key:
                return ok(f"Found {key} ({len(path)} steps)", path, state=self.snapshot(), value=key)
            node = node.left if key < node.key else node.right
        return failure(ResultKind.NOT_FOUND, f"{key} not found", trace=path, state=self.snapshot())

    def min(self) -> OperationResult:
        return self._extreme("left", "Minimum")

    def max(self) -> OperationResult:
        return self._extreme("right", "Maximum")

    def traverse(self, order: str = "in") -> OperationResult:
        problem = invalid_choice("order", order, TRAVERSAL_ORDERS)
        if problem is not None:
            return problem
        if self.root is None:
            return failure(ResultKind.EMPTY_STRUCTURE, "Tree is empty", state=self.snapshot())
        visited = _walk(self.root, order)
        keys = [node.key for node in visited]
        label = {"pre": "Preorder", "in": "Inorder", "post": "Postorder"}[order]
        return ok(
            f"{label}: {', '.join(str(k) for k in keys)}",
            [node.id for node in visited],
            state=self.snapshot(),
            value=keys,
        )

    # ------------------------------------------------------------------
    # inspection

    def snapshot(self) -> Optional[dict]:
        return _snapshot(self.root)

    def keys(self) -> List[int]:
        return [node.key for node in _walk(self.root, "in")]

    def id_map(self) -> Dict[int, int]:
        """Map every node id to its current key."""

        return {node.id: node.key for node in _walk(self.root, "pre")}

    def __len__(self) -> int:
        return len(_walk(self.root, "pre"))

    @property
    def height(self) -> int:
        return height(self.root)

    def is_ordered(self) -> bool:
        keys = self.keys()
        return all(a < b for a, b in zip(keys, keys[1:]))

    def is_balanced(self) -> bool:
        """Check the AVL height bound and the stored heights at every node."""

        computed: Dict[int, int] = {}
        for node in _walk(self.root, "post"):
            left = computed[node.left.id] if node.left is not None else 0
            right = computed[node.right.id] if node.right is not None else 0
            if abs(left - right) > 1 or node.height != max(left, right) + 1:
                return False
            computed[node.id] = max(left, right) + 1
        return True

    # ------------------------------------------------------------------
    # internals

    def _new_node(self, key: int) -> TreeNode:
        node = TreeNode(key=key, id=self._next_id)
        self._next_id += 1
        return node

    def _place(self, key: int, descent: _Descent) -> None:
        if self.balanced:
            self.root = self._insert(self.root, key, descent)
        else:
            self._insert_unbalanced(key, descent)

    def _insert(self, node: Optional[TreeNode], key: int, descent: _Descent) -> TreeNode:
        if node is None:
            created = self._new_node(key)
            descent.path.append(created.id)
            return created

        descent.path.append(node.id)
        if key < node.key:
            node.left = self._insert(node.left, key, descent)
        elif key > node.key:
            node.right = self._insert(node.right, key, descent)
        else:
            descent.duplicate = True
            return node

        _update_height(node)
        balance = balance_factor(node)
        if balance > 1:
            if key < node.left.key:
                descent.rotations.append(f"LL@{node.key}")
                return rotate_right(node)
            descent.rotations.append(f"LR@{node.key}")
            node.left = rotate_left(node.left)
            return rotate_right(node)
        if balance < -1:
            if key > node.right.key:
                descent.rotations.append(f"RR@{node.key}")
                return rotate_left(node)
            descent.rotations.append(f"RL@{node.key}")
            node.right = rotate_right(node.right)
            return rotate_left(node)
        return node

    def _delete(self, node: Optional[TreeNode], key: int, descent: _Descent) -> Optional[TreeNode]:
        if node is None:
            return None

        descent.path.append(node.id)
        if key < node.key:
            node.left = self._delete(node.left, key, descent)
        elif key > node.key:
            node.right = self._delete(node.right, key, descent)
        else:
            descent.removed = True
            if node.left is None or node.right is None:
                return node.left if node.left is not None else node.right
            successor = node.right
            while successor.left is not None:
                successor = successor.left
            node.key = successor.key
            node.right = self._delete(node.right, successor.key, descent)

        _update_height(node)
        balance = balance_factor(node)
        if balance > 1:
            if balance_factor(node.left) >= 0:
                descent.rotations.append(f"LL@{node.key}")
                return rotate_right(node)
            descent.rotations.append(f"LR@{node.key}")
            node.left = rotate_left(node.left)
            return rotate_right(node)
        if balance < -1:
            if balance_factor(node.right) <= 0:
                descent.rotations.append(f"RR@{node.key}")
                return rotate_left(node)
            descent.rotations.append(f"RL@{node.key}")
            node.right = rotate_right(node.right)
            return rotate_left(node)
        return node

    # Plain BST mode has no height bound, so its mutations loop instead of recursing.

    def _insert_unbalanced(self, key: int, descent: _Descent) -> None:
        if self.root is None:
            self.root = self._new_node(key)
            descent.path.append(self.root.id)
            return

        ancestors: List[TreeNode] = []
        node = self.root
        while True:
            descent.path.append(node.id)
            if key == node.key:
                descent.duplicate = True
                return
            ancestors.append(node)
            side = "left" if key < node.key else "right"
            child = getattr(node, side)
            if child is None:
                created = self._new_node(key)
                setattr(node, side, created)
                descent.path.append(created.id)
                break
            node = child
        for ancestor in reversed(ancestors):
            _update_height(ancestor)

    def _delete_unbalanced(self, key: int, descent: _Descent) -> None:
        ancestors: List[TreeNode] = []
        node = self.root
        while node is not None and node.key != key:
            descent.path.append(node.id)
            ancestors.append(node)
            node = node.left if key < node.key else node.right
        if node is None:
            return

        descent.path.append(node.id)
        descent.removed = True
        if node.left is not None and node.right is not None:
            target = node
            ancestors.append(node)
            node = node.right
            descent.path.append(node.id)
            while node.left is not None:
                ancestors.append(node)
                node = node.left
                descent.path.append(node.id)
            target.key = node.key

        replacement = node.left if node.left is not None else node.right
        parent = ancestors[-1] if ancestors else None
        if parent is None:
            self.root = replacement
        elif parent.left is node:
            parent.left = replacement
        else:
            parent.right = replacement
        for ancestor in reversed(ancestors):
            _update_height(ancestor)

    def _extreme(self, side: str, label: str) -> OperationResult:
        if self.root is None:
            return failure(ResultKind.EMPTY_STRUCTURE, "Tree is empty", state=self.snapshot())
        path: List[int] = []
        node = self.root
        while True:
            path.append(node.id)
            child = getattr(node, side)
            if child is None:
                break
            node = child
        return ok(f"{label}: {node.key}", path, state=self.snapshot(), value=node.key)


def _walk(root: Optional[TreeNode], order: str) -> List[TreeNode]:
    """Return the nodes of `root` in the requested depth-first order."""

    visited: List[TreeNode] = []
    stack: List[tuple[TreeNode, bool]] = [(root, False)] if root is not None else []
    while stack:
        node, emit = stack.pop()
        if emit:
            visited.append(node)
            continue
        if order == "pre":
            sequence = [(node, True), (node.left, False), (node.right, False)]
        elif order == "in":
            sequence = [(node.left, False), (node, True), (node.right, False)]
        else:
            sequence = [(node.left, False), (node.right, False), (node, True)]
        for item in reversed(sequence):
            if item[0] is not None:
                stack.append(item)
    return visited


def _snapshot(root: Optional[TreeNode]) -> Optional[dict]:
    if root is None:
        return None
    built: Dict[int, dict] = {}
    for node in _walk(root, "post"):
        built[node.id] = {
            "id": node.id,
            "key": node.key,
            "height": node.height,
            "left": built[node.left.id] if node.left is not None else None,
            "right": built[node.right.id] if node.right is not None else None,
        }
    return built[root.id]


__all__ = [
    "TreeNode",
    "BalancedTreeEngine",
    "rotate_left",
    "rotate_right",
    "height",
    "balance_factor",
    "TRAVERSAL_ORDERS",
]
