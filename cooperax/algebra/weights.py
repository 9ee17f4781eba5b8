"""Coefficient structures for weighted coproducts.

A ``WeightMonoid`` combines the coefficients of coincident terms; a
``Semiring`` additionally scales them. Both are plain strategy objects passed
explicitly to the aggregation functions, there is no global registry.
"""

from __future__ import annotations
from dataclasses import dataclass
from fractions import Fraction
from typing import Callable, Generic, TypeVar, final
import operator

W = TypeVar("W")
C = TypeVar("C")


@final
@dataclass(frozen=True)
class WeightMonoid(Generic[W]):
    """Commutative monoid ``(identity, combine)`` on coefficients."""

    identity: W
    combine: Callable[[W, W], W]

    @classmethod
    def from_semiring(cls, semiring: Semiring[W]) -> WeightMonoid[W]:
        """Additive monoid underlying ``semiring``."""
        return cls(identity=semiring.zero, combine=semiring.add)


@final
@dataclass(frozen=True)
class Semiring(Generic[C]):
    """Semiring ``(zero, one, add, mul)``; ``add`` must be commutative."""

    zero: C
    one: C
    add: Callable[[C, C], C]
    mul: Callable[[C, C], C]


def _int_add(a: int, b: int) -> int:
    if not isinstance(a, int) or not isinstance(b, int):
        raise TypeError(f"Big-int weights must be int, got {type(a).__name__} and {type(b).__name__}.")
    return a + b


def _rational_add(a: Fraction | int, b: Fraction | int) -> Fraction:
    return Fraction(a) + Fraction(b)


def _rational_mul(a: Fraction | int, b: Fraction | int) -> Fraction:
    return Fraction(a) * Fraction(b)


def number_weight_monoid() -> WeightMonoid[float]:
    return WeightMonoid(identity=0, combine=operator.add)


def big_int_weight_monoid() -> WeightMonoid[int]:
    """Exact integer weights; floats are rejected rather than truncated."""
    return WeightMonoid(identity=0, combine=_int_add)


def rational_weight_monoid() -> WeightMonoid[Fraction]:
    return WeightMonoid(identity=Fraction(0), combine=_rational_add)


NAT_SEMIRING: Semiring[int] = Semiring(zero=0, one=1, add=operator.add, mul=operator.mul)

BIG_INT_SEMIRING: Semiring[int] = Semiring(zero=0, one=1, add=_int_add, mul=operator.mul)

RATIONAL_SEMIRING: Semiring[Fraction] = Semiring(
    zero=Fraction(0), one=Fraction(1), add=_rational_add, mul=_rational_mul
)
