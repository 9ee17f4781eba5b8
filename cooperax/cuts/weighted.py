"""Weighted and symmetry-aware aggregation of the coproduct stream.

``delta_w`` folds the admissible cuts of a tree into a ``WeightedSum`` keyed
by the exact (planar) structure of each ``(forest, trunk)`` term, merging
duplicate keys through a ``WeightMonoid``.

``delta_w_sym`` produces a rational ``Poly`` under one of three symmetry modes:

- ``"planar"``: exact structural keys, coefficients summed as given;
- ``"symmetric-agg"``: keys are unlabelled canonical codes, so isomorphic
  terms merge, coefficients summed as given;
- ``"symmetric-orbit"``: canonical keys, and every contribution is divided
  by the automorphism count of the whole input tree.

Every insertion goes through ``emit_node``, which is the single place where
the orbit precondition (a tree shape to normalise by) is enforced.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from fractions import Fraction
from numbers import Rational
from typing import Callable, Generic, Literal, NamedTuple, TypeVar, get_args
import logging

from cooperax.algebra.poly import Poly, poly_insert
from cooperax.algebra.weights import RATIONAL_SEMIRING, WeightMonoid
from cooperax.cuts.admissible_cuts import delta_stream
from cooperax.trees.canonical import automorphism_count, canonicalize, forest_canonical_code
from cooperax.trees.rooted_trees import Forest, Tree, key_forest, key_of, pair_key, shape_of

_logger = logging.getLogger(__name__)

A = TypeVar("A")
K = TypeVar("K")
W = TypeVar("W")

SymmetryMode = Literal["planar", "symmetric-agg", "symmetric-orbit"]
SYMMETRY_MODES: tuple[str, ...] = get_args(SymmetryMode)


class WeightedTerm(NamedTuple):
    """Accumulated coefficient of one ``(forest, trunk)`` term."""

    coefficient: object
    forest: Forest
    trunk: Tree


WeightedSum = dict[str, WeightedTerm]


def _check_mode(mode: str) -> None:
    if mode not in SYMMETRY_MODES:
        raise ValueError(f"Unknown symmetry mode {mode!r}; expected one of {SYMMETRY_MODES}.")


def _as_rational(weight: object) -> Fraction:
    # bool is an int subclass but never a meaningful coefficient
    if isinstance(weight, bool) or not isinstance(weight, Rational):
        raise TypeError(
            f"Symmetry-aware coefficients must be exact rationals (int or Fraction), "
            f"got {type(weight).__name__}."
        )
    return Fraction(weight)


def symmetric_pair_key(forest: Forest, trunk: Tree) -> str:
    """Label-free key of a term, invariant under reordering of siblings."""
    return f"{forest_canonical_code(forest)}|{canonicalize(trunk).code}"


@dataclass(frozen=True)
class EmitContext(Generic[K]):
    """Where and how ``emit_node`` inserts a contribution.

    ``as_tree`` is the shape whose automorphism count normalises the
    contribution; it is required in ``"symmetric-orbit"`` mode only.
    ``automorphism_count`` caches ``|Aut(as_tree)|``; when set it is used as is.
    """

    poly: Poly[K, Fraction]
    key: K
    mode: SymmetryMode
    as_tree: Tree | None = None
    automorphism_count: int | None = None


def emit_node(ctx: EmitContext[K], weight: Fraction | int = 1) -> None:
    """Insert ``weight`` (divided by ``|Aut(as_tree)|`` in orbit mode) at ``ctx.key``.

    Raises:
        ValueError: unknown mode, or orbit mode without ``ctx.as_tree``.
        TypeError: ``weight`` is not an exact rational.
    """
    _check_mode(ctx.mode)
    w = _as_rational(weight)
    if ctx.mode == "symmetric-orbit":
        if ctx.as_tree is None:
            raise ValueError("symmetric-orbit emission requires a tree shape in EmitContext.as_tree.")
        aut = ctx.automorphism_count
        if aut is None:
            aut = automorphism_count(ctx.as_tree)
        w = w * Fraction(1, aut)
    poly_insert(ctx.poly, ctx.key, w, RATIONAL_SEMIRING.add, RATIONAL_SEMIRING.zero)


def delta_w(
    tr: Tree[A],
    monoid: WeightMonoid[W],
    coef_of: Callable[[Forest, Tree[A]], W] | None = None,
) -> WeightedSum:
    """Weighted comultiplication with merging of duplicate terms.

    Args:
        tr: Tree to decompose.
        monoid: Combines coefficients of terms sharing a structural key.
        coef_of: Coefficient of each cut; defaults to ``monoid.identity``.

    Returns:
        Map from ``pair_key(forest, trunk)`` to the merged ``WeightedTerm``.
        The first forest/trunk seen for a key is kept.
    """
    out: WeightedSum = {}
    for forest, trunk in delta_stream(tr):
        key = pair_key(forest, trunk)
        w = monoid.identity if coef_of is None else coef_of(forest, trunk)
        prev = out.get(key)
        if prev is None:
            out[key] = WeightedTerm(w, forest, trunk)
        else:
            out[key] = prev._replace(coefficient=monoid.combine(prev.coefficient, w))
    return out


def delta_w_sym(
    tr: Tree[A],
    mode: SymmetryMode = "planar",
    coef_of: Callable[[Forest, Tree[A]], Fraction | int] | None = None,
) -> Poly[str, Fraction]:
    """Symmetry-aware weighted comultiplication over the rationals.

    In orbit mode the normalising automorphism count is that of the whole
    input tree, not of the individual forest or trunk.
    """
    _check_mode(mode)
    poly: Poly[str, Fraction] = {}
    base: EmitContext[str] = EmitContext(poly=poly, key="", mode=mode)
    if mode != "planar":
        base = replace(base, as_tree=shape_of(tr))
    if mode == "symmetric-orbit":
        # one canonicalisation per call, shared by every cut
        base = replace(base, automorphism_count=automorphism_count(base.as_tree))
    n_terms = 0
    for forest, trunk in delta_stream(tr):
        if mode == "planar":
            key = pair_key(forest, trunk)
        else:
            key = symmetric_pair_key(forest, trunk)
        weight = Fraction(1) if coef_of is None else coef_of(forest, trunk)
        emit_node(replace(base, key=key), weight)
        n_terms += 1
    _logger.debug("delta_w_sym: mode=%s, %d cuts merged into %d keys", mode, n_terms, len(poly))
    return poly


def show_weighted(
    ws: WeightedSum,
    show_label: Callable[[object], str] = str,
    show_weight: Callable[[object], str] = str,
) -> list[str]:
    """Debug rendering, one ``coef · [forest] ⊗ trunk`` line per term."""
    return [
        f"{show_weight(term.coefficient)} · {key_forest(term.forest, show_label)} ⊗ {key_of(term.trunk, show_label)}"
        for term in ws.values()
    ]


def show_poly(
    poly: Poly[K, W],
    show_key: Callable[[K], str] = str,
    show_weight: Callable[[W], str] = str,
) -> list[str]:
    return [f"{show_weight(weight)} · {show_key(key)}" for key, weight in poly.items()]
