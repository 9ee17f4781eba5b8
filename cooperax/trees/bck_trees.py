"""Enumeration of rooted unordered trees via BH canonical sequences.

``iter_level_sequences`` lazily walks all canonical level sequences with a
fixed number of nodes using the Beyer-Hedetniemi (BH) successor, and
``enumerate_bck_trees`` stacks them into ``BCKShapes`` parent batches, one per
degree. Every row is the canonical representative of its shape, i.e. it is
a fixed point of ``cooperax.trees.canonical.canonical_parent``.
https://combinatorialpress.com/jcmcc-articles/volume-076/an-application-of-level-sequences-to-parallel-generation-of-rootedtrees/
"""

from typing import Iterator

import jax.numpy as jnp

from cooperax.trees.canonical import levelseq_to_parent
from cooperax.trees.shape_types import ShapeBatch, BCKShapes


def _bh_successor(levels: list[int]) -> list[int]:
    """Beyer-Hedetniemi successor for canonical level sequences (1-based depths)."""
    n = len(levels)
    # p: last node deeper than the root's children
    p = next((i for i in range(n - 1, -1, -1) if levels[i] > 2), None)
    if p is None:
        return list(levels)
    # q: parent of p
    q = next(i for i in range(p - 1, -1, -1) if levels[i] == levels[p] - 1)
    succ = list(levels)
    for i in range(p, n):
        succ[i] = succ[i - (p - q)]
    return succ


def iter_level_sequences(n: int) -> Iterator[list[int]]:
    """Yield every canonical level sequence with ``n`` nodes.

    Sequences come in decreasing lexicographic order, from the chain
    ``[1, 2, ..., n]`` down to the star ``[1, 2, ..., 2]``.
    """
    if n <= 0:
        raise ValueError(f"n must be >= 1, got {n}.")
    levels = list(range(1, n + 1))
    levels_min = [1] + [2] * (n - 1)
    while True:
        yield levels
        if levels == levels_min:
            return
        levels = _bh_successor(levels)


def _enumerate_bck_trees_n(n: int) -> BCKShapes:
    """Unordered rooted trees with exactly ``n`` nodes, ``A000081(n)`` rows."""
    parents = [levelseq_to_parent(levels) for levels in iter_level_sequences(n)]
    return BCKShapes(ShapeBatch(parent=jnp.asarray(parents, dtype=jnp.int32)))


def enumerate_bck_trees(max_n: int) -> list[BCKShapes]:
    """Enumerate unordered rooted trees for all degrees 1..``max_n``.

    Returns a list where entry at index n-1 is the ``BCKShapes`` for degree n.
    """
    if max_n <= 0:
        raise ValueError(f"max_n must be >= 1, got {max_n}.")
    return [_enumerate_bck_trees_n(n) for n in range(1, max_n + 1)]
