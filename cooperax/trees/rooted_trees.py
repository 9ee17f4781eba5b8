"""Labelled, ordered rooted trees and their structural keys.

A ``Tree`` is an immutable value: a label plus an ordered tuple of child
trees. Structural identity is carried by string keys rather than object
identity, so two trees built independently compare equal by ``key_of``.

Keys follow the one-line planar rendering ``label(child, child, ...)``. They
are faithful as long as rendered labels do not contain the delimiter
characters ``( ) , | [ ]``.

Traversals use explicit stacks, so tree depth is not bounded by the
interpreter recursion limit.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Generic, Iterator, Sequence, TypeVar, final

import jax.numpy as jnp

from cooperax.trees.shape_types import ShapeBatch

A = TypeVar("A")
R = TypeVar("R")


@final
@dataclass(frozen=True)
class Tree(Generic[A]):
    """Rooted tree with a label and an ordered tuple of children."""

    label: A
    children: tuple[Tree[A], ...] = ()

    @property
    def is_leaf(self) -> bool:
        return len(self.children) == 0


Forest = tuple[Tree[A], ...]


def tree(label: A, children: Sequence[Tree[A]] = ()) -> Tree[A]:
    """Build a tree from a label and any sequence of children."""
    return Tree(label, tuple(children))


def leaf(label: A) -> Tree[A]:
    return Tree(label, ())


def postorder(tr: Tree[A]) -> Iterator[Tree[A]]:
    """Nodes of ``tr`` in postorder, children left to right, without recursion."""
    stack: list[tuple[Tree[A], bool]] = [(tr, False)]
    while stack:
        node, expanded = stack.pop()
        if expanded:
            yield node
            continue
        stack.append((node, True))
        stack.extend((child, False) for child in reversed(node.children))


def fold_tree(tr: Tree[A], combine: Callable[[Tree[A], list[R]], R]) -> R:
    """Bottom-up fold: ``combine(node, results_of_children)`` over an explicit stack."""
    done: list[R] = []
    for node in postorder(tr):
        split = len(done) - len(node.children)
        results = done[split:]
        del done[split:]
        done.append(combine(node, results))
    return done[0]


def pretty(tr: Tree[A], show: Callable[[A], str] = str) -> str:
    """One-line planar rendering, e.g. ``f(g(x, y), z)``."""
    parts: list[str] = []
    # stack items are either subtrees still to render or literal delimiters
    stack: list[Tree[A] | str] = [tr]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue
        parts.append(show(item.label))
        if not item.children:
            continue
        stack.append(")")
        for i, child in enumerate(reversed(item.children)):
            if i:
                stack.append(", ")
            stack.append(child)
        stack.append("(")
    return "".join(parts)


def key_of(tr: Tree[A], show: Callable[[A], str] = str) -> str:
    """Structural key of a tree; planar order is part of the key."""
    return pretty(tr, show)


def key_forest(forest: Sequence[Tree[A]], show: Callable[[A], str] = str) -> str:
    """Structural key of a forest, e.g. ``[a|b(c)]``."""
    return "[" + "|".join(key_of(tr, show) for tr in forest) + "]"


def pair_key(forest: Sequence[Tree[A]], trunk: Tree[A]) -> str:
    """Key of a ``(forest, trunk)`` term."""
    return f"{key_forest(forest)}|{key_of(trunk)}"


def node_count(tr: Tree[A]) -> int:
    return sum(1 for _ in postorder(tr))


def preorder_labels(tr: Tree[A]) -> list[A]:
    """Node labels in preorder."""
    out: list[A] = []
    stack = [tr]
    while stack:
        node = stack.pop()
        out.append(node.label)
        stack.extend(reversed(node.children))
    return out


def shape_of(tr: Tree[A]) -> Tree[None]:
    """Anonymous shape of ``tr``: same structure, every label ``None``."""
    return fold_tree(tr, lambda _, kids: Tree(None, tuple(kids)))


def _build_children(parent: list[int]) -> list[list[int]]:
    children: list[list[int]] = [[] for _ in range(len(parent))]
    for i in range(1, len(parent)):
        children[parent[i]].append(i)
    return children


def from_parent(parent: Sequence[int], labels: Sequence[A] | None = None) -> Tree[A]:
    """Build a ``Tree`` from a preorder parent array.

    Args:
        parent: ``parent[0] == -1`` and ``0 <= parent[i] < i`` for ``i > 0``.
        labels: Optional per-node labels; defaults to the preorder indices.

    Returns:
        The tree rooted at node 0, children ordered by node index.
    """
    parent_py = [int(p) for p in parent]
    n = len(parent_py)
    if n == 0 or parent_py[0] != -1:
        raise ValueError(f"Parent array must be non-empty with parent[0] == -1, got {parent_py}.")
    for i in range(1, n):
        if not 0 <= parent_py[i] < i:
            raise ValueError(f"Parent at index {i} must satisfy 0 <= p < {i}, got {parent_py[i]}.")
    node_labels = list(range(n)) if labels is None else list(labels)
    if len(node_labels) != n:
        raise ValueError(f"Expected {n} labels, got {len(node_labels)}.")
    children = _build_children(parent_py)
    # children always carry larger indices, so a reverse sweep builds them first
    built: list[Tree | None] = [None] * n
    for node in range(n - 1, -1, -1):
        built[node] = Tree(node_labels[node], tuple(built[child] for child in children[node]))
    return built[0]


def to_parent(tr: Tree[A]) -> list[int]:
    """Preorder parent array of ``tr`` (planar order preserved)."""
    parent: list[int] = []
    stack: list[tuple[Tree[A], int]] = [(tr, -1)]
    while stack:
        node, parent_idx = stack.pop()
        idx = len(parent)
        parent.append(parent_idx)
        stack.extend((child, idx) for child in reversed(node.children))
    return parent


def trees_from_shapes(batch: ShapeBatch) -> tuple[Tree[int], ...]:
    """One ``Tree[int]`` per row of ``batch``, labelled by preorder index."""
    parents = jnp.asarray(batch.parent)
    return tuple(from_parent(list(map(int, row.tolist()))) for row in parents)
