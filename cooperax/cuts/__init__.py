"""Admissible cuts and weighted coproducts of rooted trees.

Exports
- ``admissible_cuts_gen``/``delta_stream``: lazy cut enumeration.
- ``delta_w``: weighted coproduct merged through a ``WeightMonoid``.
- ``delta_w_sym``/``emit_node``: symmetry-aware rational coproduct.
- ``CutTable``: cached per-degree cut statistics over shape bases.
"""

from cooperax.cuts.admissible_cuts import (
    Cut,
    admissible_cuts_gen,
    admissible_cuts,
    admissible_cut_count,
    delta_stream,
    counit,
    check_coassociativity,
)
from cooperax.cuts.weighted import (
    SymmetryMode,
    EmitContext,
    WeightedTerm,
    WeightedSum,
    emit_node,
    delta_w,
    delta_w_sym,
    show_weighted,
    show_poly,
)
from cooperax.cuts.tables import CutTable

__all__ = [
    "Cut",
    "admissible_cuts_gen",
    "admissible_cuts",
    "admissible_cut_count",
    "delta_stream",
    "counit",
    "check_coassociativity",
    "SymmetryMode",
    "EmitContext",
    "WeightedTerm",
    "WeightedSum",
    "emit_node",
    "delta_w",
    "delta_w_sym",
    "show_weighted",
    "show_poly",
    "CutTable",
]
