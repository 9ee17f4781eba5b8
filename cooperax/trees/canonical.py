"""Canonical forms and automorphism counts of unordered rooted trees.

Labels are ignored throughout: a tree is identified with its anonymous shape.
The canonical form is the Beyer-Hedetniemi canonical level sequence, obtained
by ordering every node's subtrees so that their level sequences are
non-increasing in lexicographic order. It agrees row-for-row with the shapes
produced by ``cooperax.trees.bck_trees.enumerate_bck_trees``.
"""

from __future__ import annotations
from collections import deque
from itertools import groupby
from math import factorial, prod
from typing import NamedTuple, Sequence, TypeVar

from cooperax.trees.rooted_trees import Tree

A = TypeVar("A")


class CanonicalForm(NamedTuple):
    """Discrete fingerprint of an unordered shape plus its symmetry count."""

    code: str
    automorphism_count: int


def _canonical_sequence_and_aut(tr: Tree[A]) -> tuple[list[int], int]:
    """Canonical level sequence (1-based depths) and ``|Aut|`` of ``tr``.

    Sibling subtrees share their depth, so ordering their absolute level
    sequences is the same as ordering their relative ones.
    """
    # postorder over an explicit stack; ``done`` holds finished children in order
    stack: list[tuple[Tree[A], int, bool]] = [(tr, 1, False)]
    done: list[tuple[deque[int], int]] = []
    while stack:
        node, level, expanded = stack.pop()
        if not expanded:
            stack.append((node, level, True))
            stack.extend((child, level + 1, False) for child in reversed(node.children))
            continue
        split = len(done) - len(node.children)
        entries = done[split:]
        del done[split:]
        entries.sort(key=lambda item: item[0], reverse=True)
        aut = 1
        # isomorphic siblings can be permuted freely
        for _, group in groupby(entries, key=lambda item: item[0]):
            members = [child_aut for _, child_aut in group]
            aut *= factorial(len(members)) * prod(members)
        seq: deque[int] = entries[0][0] if entries else deque()
        for child_seq, _ in entries[1:]:
            seq.extend(child_seq)
        seq.appendleft(level)
        done.append((seq, aut))
    seq, aut = done[0]
    return list(seq), aut


def levelseq_to_parent(levels: Sequence[int]) -> list[int]:
    """Convert a level sequence to a preorder parent array."""
    n = len(levels)
    parent_py: list[int] = [-1] * n
    stack: list[int] = []
    for i in range(n):
        d = levels[i]
        while len(stack) >= d:
            stack.pop()
        if stack:
            parent_py[i] = stack[-1]
        stack.append(i)
    return parent_py


def canonical_level_sequence(tr: Tree[A]) -> list[int]:
    return _canonical_sequence_and_aut(tr)[0]


def canonical_parent(tr: Tree[A]) -> list[int]:
    """Parent array of the canonical representative of ``tr``'s shape."""
    return levelseq_to_parent(canonical_level_sequence(tr))


def automorphism_count(tr: Tree[A]) -> int:
    """Exact size of the automorphism group of ``tr``'s unordered shape.

    The product of the children's counts times
    ``m!`` for every class of ``m`` isomorphic sibling subtrees.
    """
    return _canonical_sequence_and_aut(tr)[1]


def canonicalize(tr: Tree[A]) -> CanonicalForm:
    seq, aut = _canonical_sequence_and_aut(tr)
    return CanonicalForm(code=",".join(map(str, seq)), automorphism_count=aut)


def forest_canonical_code(forest: Sequence[Tree[A]]) -> str:
    """Canonical code of a forest, read as the children of a virtual root."""
    return canonicalize(Tree(None, tuple(forest))).code
