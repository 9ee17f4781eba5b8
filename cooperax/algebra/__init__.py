"""Weights, semirings and sparse polynomials.

Exports
- ``WeightMonoid`` and the factories ``number_weight_monoid``,
  ``big_int_weight_monoid``, ``rational_weight_monoid``.
- ``Semiring`` with ``NAT_SEMIRING``, ``BIG_INT_SEMIRING``, ``RATIONAL_SEMIRING``.
- ``Poly``/``poly_insert`` and ``polynomial_semiring``.
"""

from cooperax.algebra.weights import (
    WeightMonoid,
    Semiring,
    number_weight_monoid,
    big_int_weight_monoid,
    rational_weight_monoid,
    NAT_SEMIRING,
    BIG_INT_SEMIRING,
    RATIONAL_SEMIRING,
)
from cooperax.algebra.poly import Poly, poly_insert, KeyMonoid, string_monoid, polynomial_semiring

__all__ = [
    "WeightMonoid",
    "Semiring",
    "number_weight_monoid",
    "big_int_weight_monoid",
    "rational_weight_monoid",
    "NAT_SEMIRING",
    "BIG_INT_SEMIRING",
    "RATIONAL_SEMIRING",
    "Poly",
    "poly_insert",
    "KeyMonoid",
    "string_monoid",
    "polynomial_semiring",
]
