"""Per-degree cut tables over a basis of tree shapes.

``CutTable.build`` enumerates every tree shape up to a degree (unordered BCK
shapes, or plane MKW shapes when ``ordered=True``) and caches, per degree,
the shapes, their ``Tree`` forms, a lookup index, and the cut and
automorphism counts. ``trunk_counts`` turns the coproduct stream into an
integer incidence matrix between shapes and trunk shapes.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Sequence, final
import logging

import numpy as np

from cooperax.cuts.admissible_cuts import admissible_cut_count, delta_stream
from cooperax.cuts.weighted import SymmetryMode, delta_w_sym
from cooperax.trees.bck_trees import enumerate_bck_trees
from cooperax.trees.canonical import automorphism_count, canonical_parent
from cooperax.trees.mkw_trees import enumerate_mkw_trees
from cooperax.trees.rooted_trees import Tree, to_parent, trees_from_shapes
from cooperax.trees.shape_types import ShapeBatch

_logger = logging.getLogger(__name__)


def _build_shape_index_by_degree(
    shapes: Sequence[ShapeBatch],
) -> tuple[dict[tuple[int, ...], int], ...]:
    indices: list[dict[tuple[int, ...], int]] = []
    for batch in shapes:
        parents = np.asarray(batch.parent)
        if parents.ndim != 2:
            raise ValueError("ShapeBatch.parent must have shape [num_shapes, n_nodes].")
        indices.append({tuple(int(v) for v in row.tolist()): idx for idx, row in enumerate(parents)})
    return tuple(indices)


@final
@dataclass(frozen=True, eq=False)
class CutTable:
    """Cut statistics for every tree shape with 1..``depth`` nodes.

    Level ``k`` (0-indexed) holds the shapes of degree ``k + 1``.
    """

    depth: int
    ordered: bool = False
    shapes_by_degree: tuple[ShapeBatch, ...] = field(default_factory=tuple)
    trees_by_degree: tuple[tuple[Tree[int], ...], ...] = field(default_factory=tuple)
    shape_index_by_degree: tuple[dict[tuple[int, ...], int], ...] = field(default_factory=tuple)
    cut_count_by_degree: tuple[np.ndarray, ...] = field(default_factory=tuple)
    automorphism_count_by_degree: tuple[np.ndarray, ...] = field(default_factory=tuple)

    @classmethod
    def build(cls, depth: int, ordered: bool = False) -> CutTable:
        """Enumerate shapes up to ``depth`` nodes and cache their statistics."""
        if depth <= 0:
            raise ValueError(f"depth must be >= 1, got {depth}.")
        shapes: list[ShapeBatch] = enumerate_mkw_trees(depth) if ordered else enumerate_bck_trees(depth)
        trees = tuple(trees_from_shapes(batch) for batch in shapes)
        cut_counts = tuple(
            np.asarray([admissible_cut_count(tr) for tr in level], dtype=np.int64) for level in trees
        )
        aut_counts = tuple(
            np.asarray([automorphism_count(tr) for tr in level], dtype=np.int64) for level in trees
        )
        _logger.debug(
            "CutTable.build: depth=%d ordered=%s shapes per degree=%s",
            depth,
            ordered,
            [batch.size for batch in shapes],
        )
        return cls(
            depth=depth,
            ordered=ordered,
            shapes_by_degree=tuple(shapes),
            trees_by_degree=trees,
            shape_index_by_degree=_build_shape_index_by_degree(shapes),
            cut_count_by_degree=cut_counts,
            automorphism_count_by_degree=aut_counts,
        )

    def _check_level(self, level: int) -> None:
        if not self.trees_by_degree:
            raise ValueError("CutTable must be constructed via CutTable.build.")
        if level < 0 or level >= self.depth:
            raise ValueError(
                f"Requested level {level} outside available range [0, {self.depth - 1}]."
            )

    def basis_size(self, level: int | None = None) -> int:
        """Number of shapes at ``level``, or across all levels if ``None``."""
        if level is None:
            return sum(len(level_trees) for level_trees in self.trees_by_degree)
        self._check_level(level)
        return len(self.trees_by_degree[level])

    def offset(self, level: int) -> int:
        """Global index of the first shape at ``level``."""
        self._check_level(level)
        return sum(len(level_trees) for level_trees in self.trees_by_degree[:level])

    def shape(self, level: int, index: int) -> Tree[int]:
        self._check_level(level)
        return self.trees_by_degree[level][index]

    def locate(self, tr: Tree) -> tuple[int, int]:
        """``(level, index)`` of the table shape matching ``tr``.

        Ordered tables match the planar shape, unordered ones the canonical
        shape. Labels are ignored.
        """
        parent = to_parent(tr) if self.ordered else canonical_parent(tr)
        level = len(parent) - 1
        self._check_level(level)
        index = self.shape_index_by_degree[level].get(tuple(parent))
        if index is None:
            raise ValueError(f"Shape {parent} is not present at level {level}.")
        return level, index

    def delta(
        self, level: int, index: int, mode: SymmetryMode | None = None
    ) -> dict[str, Fraction]:
        """``delta_w_sym`` of a table shape.

        ``mode`` defaults to ``"planar"`` for ordered tables and to
        ``"symmetric-orbit"`` for unordered ones.
        """
        if mode is None:
            mode = "planar" if self.ordered else "symmetric-orbit"
        return delta_w_sym(self.shape(level, index), mode)

    def trunk_counts(self, level: int) -> np.ndarray:
        """Incidence matrix of trunk shapes.

        Entry ``[i, j]`` counts the admissible cuts of shape ``i`` at ``level``
        whose trunk is the shape with global index ``j``. Rows sum to the
        cut counts.
        """
        self._check_level(level)
        level_trees = self.trees_by_degree[level]
        out = np.zeros((len(level_trees), self.basis_size()), dtype=np.int64)
        for i, tr in enumerate(level_trees):
            for _, trunk in delta_stream(tr):
                trunk_level, trunk_index = self.locate(trunk)
                out[i, self.offset(trunk_level) + trunk_index] += 1
        return out
