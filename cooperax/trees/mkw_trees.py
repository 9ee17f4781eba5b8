"""Enumeration of rooted ordered (plane) trees via Dyck words.

``iter_dyck_words`` lazily generates the Dyck words of length ``2*(n-1)`` and
``enumerate_mkw_trees`` maps each to a preorder parent array, stacking them
into ``MKWShapes`` batches.
"""

from typing import Iterator

import jax.numpy as jnp

from cooperax.trees.shape_types import ShapeBatch, MKWShapes


def dyck_to_parent(dyck: list[int]) -> list[int]:
    """Convert a Dyck word (length 2*(n-1)) to a parent array in preorder.

    Each opening symbol (1) creates a new child of the current node and
    descends into it; each closing symbol (0) ascends to the parent. The root
    is node 0 and is not encoded in the word.
    """
    n = len(dyck) // 2 + 1
    parent_py: list[int] = [-1] + [0] * (n - 1)
    stack: list[int] = [0]
    next_index = 1
    for bit in dyck:
        if bit == 1:
            parent_py[next_index] = stack[-1]
            stack.append(next_index)
            next_index += 1
        else:
            stack.pop()
    return parent_py


def iter_dyck_words(n: int) -> Iterator[list[int]]:
    """Yield the Dyck words describing plane trees with ``n`` nodes.

    Words are produced in backtracking order (opening before closing), so
    the first word is the chain and the last one the star.
    """
    if n <= 0:
        raise ValueError(f"n must be >= 1, got {n}.")
    m = n - 1
    dyck: list[int] = []

    def backtrack(open_used: int, close_used: int) -> Iterator[list[int]]:
        if open_used == m and close_used == m:
            yield dyck[:]
            return
        if open_used < m:
            dyck.append(1)
            yield from backtrack(open_used + 1, close_used)
            dyck.pop()
        if close_used < open_used:
            dyck.append(0)
            yield from backtrack(open_used, close_used + 1)
            dyck.pop()

    yield from backtrack(0, 0)


def _enumerate_mkw_trees_n(n: int) -> MKWShapes:
    """Plane rooted trees with exactly ``n`` nodes, ``C_{n-1}`` rows."""
    parents = [dyck_to_parent(word) for word in iter_dyck_words(n)]
    return MKWShapes(ShapeBatch(parent=jnp.asarray(parents, dtype=jnp.int32)))


def enumerate_mkw_trees(max_n: int) -> list[MKWShapes]:
    """Enumerate ordered (plane) rooted trees for all degrees 1..``max_n``.

    Returns a list where entry at index n-1 is the ``MKWShapes`` for degree n.
    """
    if max_n <= 0:
        raise ValueError(f"max_n must be >= 1, got {max_n}.")
    return [_enumerate_mkw_trees_n(n) for n in range(1, max_n + 1)]
