r"""Admissible cuts of rooted trees and the lazy coproduct stream.

An admissible cut of a tree :math:`T` selects a set of edges such that every
root-to-leaf path crosses at most one of them. Removing the selected edges
splits :math:`T` into the pruned forest :math:`P^c(T)` and the trunk
:math:`R^c(T)` (the component containing the root). Summing over all cuts
gives the cooperad comultiplication

.. math::

    \Delta(T) = \sum_c P^c(T) \otimes R^c(T).

The root is never cut away, so the total cut :math:`T \otimes 1` is not part
of :math:`\Delta`; ``full_delta_stream`` adds it for the Connes-Kreimer
coproduct used in ``check_coassociativity``.
"""

from __future__ import annotations
from collections import Counter
from itertools import product
from math import prod
from typing import Callable, Iterator, NamedTuple, TypeVar

from cooperax.trees.rooted_trees import Forest, Tree, fold_tree, key_forest, key_of

A = TypeVar("A")


class Cut(NamedTuple):
    """One admissible cut: the pruned ``forest`` and the remaining ``trunk``."""

    forest: Forest
    trunk: Tree


def _preorder_layout(root: Tree[A]) -> tuple[list[Tree[A]], list[int], list[int]]:
    """Non-root nodes in preorder with parent positions and subtree ends.

    The root has position -1; ``end[j]`` is the position just past ``j``'s subtree.
    """
    nodes: list[Tree[A]] = []
    parent: list[int] = []
    stack: list[tuple[Tree[A], int]] = [(child, -1) for child in reversed(root.children)]
    while stack:
        node, parent_idx = stack.pop()
        idx = len(nodes)
        nodes.append(node)
        parent.append(parent_idx)
        stack.extend((child, idx) for child in reversed(node.children))
    size = [1] * len(nodes)
    for j in range(len(nodes) - 1, -1, -1):
        if parent[j] >= 0:
            size[parent[j]] += size[j]
    return nodes, parent, [j + size[j] for j in range(len(nodes))]


def _assemble(
    root: Tree[A], nodes: list[Tree[A]], parent: list[int], keep: list[bool], reachable: list[int]
) -> Cut:
    forest = tuple(nodes[j] for j in reachable if not keep[j])
    kids: dict[int, list[Tree[A]]] = {}
    for j in reversed(reachable):
        if keep[j]:
            own = kids.pop(j, [])
            own.reverse()
            kids.setdefault(parent[j], []).append(Tree(nodes[j].label, tuple(own)))
    top = kids.get(-1, [])
    top.reverse()
    return Cut(forest, Tree(root.label, tuple(top)))


def admissible_cuts_gen(root: Tree[A]) -> Iterator[Cut]:
    """Lazily yield every admissible cut of ``root``.

    Each child edge contributes two families of choices, in this order:

    - cut here: the whole child goes to the forest and is not descended into;
    - descend: every admissible cut of the child, whose forest is kept and
      whose trunk becomes a child of the rebuilt root.

    Choices are combined as a cartesian product over the children with the
    first child varying slowest. Forests are concatenated in child order.
    A leaf has exactly one cut, ``((), root)``.

    Equivalently, a cut is a cut/keep decision for every node reachable from
    the root through kept nodes, and cuts come in lexicographic order of
    those decisions read in preorder (cut before keep). The walk keeps an
    explicit stack of reachable nodes and never mutates ``root``; calling it
    again restarts the enumeration from scratch.
    """
    if root.is_leaf:
        yield Cut((), root)
        return
    nodes, parent, end = _preorder_layout(root)
    m = len(nodes)
    keep = [False] * m
    # reachable positions in preorder; the decisions to vary live here
    reachable: list[int] = []

    def cut_from(j: int) -> None:
        while j < m:
            keep[j] = False
            reachable.append(j)
            j = end[j]

    cut_from(0)
    while True:
        yield _assemble(root, nodes, parent, keep, reachable)
        while reachable and keep[reachable[-1]]:
            reachable.pop()
        if not reachable:
            return
        i = reachable[-1]
        keep[i] = True
        cut_from(i + 1)


def admissible_cuts(root: Tree[A]) -> list[Cut]:
    """All admissible cuts of ``root`` as a list (same order as the generator)."""
    return list(admissible_cuts_gen(root))


def admissible_cut_count(root: Tree[A]) -> int:
    """Number of admissible cuts, ``prod(1 + count(child))`` without enumerating."""
    return fold_tree(root, lambda _, counts: prod(1 + c for c in counts))


def delta_stream(tr: Tree[A]) -> Iterator[tuple[Forest, Tree[A]]]:
    """Lazy comultiplication: one ``(forest, trunk)`` term per admissible cut."""
    for forest, trunk in admissible_cuts_gen(tr):
        yield forest, trunk


def counit(tr: Tree[A]) -> int:
    """1 on a single-vertex tree, 0 otherwise."""
    return 1 if tr.is_leaf else 0


def show_delta(tr: Tree[A], show: Callable[[A], str] = str) -> list[str]:
    return [f"{key_forest(forest, show)} ⊗ {key_of(trunk, show)}" for forest, trunk in delta_stream(tr)]


def full_delta_stream(tr: Tree[A]) -> Iterator[tuple[Forest, Tree[A] | None]]:
    """``delta_stream`` followed by the total cut ``((tr,), None)``.

    ``None`` stands for the empty trunk, the unit of the forest algebra.
    """
    yield from delta_stream(tr)
    yield (tr,), None


def _forest_delta(forest: Forest) -> Iterator[tuple[Forest, Forest]]:
    """Multiplicative extension of ``full_delta_stream`` to a forest."""
    per_tree = [list(full_delta_stream(tr)) for tr in forest]
    for combo in product(*per_tree):
        pruned: Forest = ()
        trunks: Forest = ()
        for forest_part, trunk in combo:
            pruned += forest_part
            if trunk is not None:
                trunks += (trunk,)
        yield pruned, trunks


def _multiset_key(forest: Forest) -> tuple[str, ...]:
    return tuple(sorted(key_of(tr) for tr in forest))


def _trunk_key(trunk: Tree | None) -> str:
    return "1" if trunk is None else key_of(trunk)


def check_coassociativity(tr: Tree[A]) -> bool:
    r"""Compare :math:`(\Delta\otimes\mathrm{id})\Delta` with :math:`(\mathrm{id}\otimes\Delta)\Delta` on ``tr``.

    Both sides are expanded with the Connes-Kreimer coproduct
    (``full_delta_stream``), forests are compared as multisets and the
    resulting three-fold tensors are compared as multisets of keys.
    """
    left: Counter[tuple[tuple[str, ...], tuple[str, ...], str]] = Counter()
    right: Counter[tuple[tuple[str, ...], tuple[str, ...], str]] = Counter()
    for forest, trunk in full_delta_stream(tr):
        trunk_key = _trunk_key(trunk)
        for pruned, middle in _forest_delta(forest):
            left[(_multiset_key(pruned), _multiset_key(middle), trunk_key)] += 1
        if trunk is None:
            right[(_multiset_key(forest), (), "1")] += 1
            continue
        for forest2, trunk2 in full_delta_stream(trunk):
            right[(_multiset_key(forest), _multiset_key(forest2), _trunk_key(trunk2))] += 1
    return left == right
