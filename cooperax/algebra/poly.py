"""Sparse polynomials: coefficient maps keyed by structural terms.

A ``Poly`` is a plain ``dict`` from term key to coefficient. Inserting into a
poly always merges with the existing coefficient through the additive
operation; it never overwrites.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, final

from cooperax.algebra.weights import NAT_SEMIRING, Semiring

K = TypeVar("K")
W = TypeVar("W")
C = TypeVar("C")

Poly = dict[K, W]


def poly_insert(
    poly: Poly[K, W],
    key: K,
    weight: W,
    add: Callable[[W, W], W],
    zero: W,
) -> Poly[K, W]:
    """Merge ``weight`` into ``poly[key]`` and return ``poly``."""
    if key in poly:
        poly[key] = add(poly[key], weight)
    else:
        poly[key] = add(zero, weight)
    return poly


@final
@dataclass(frozen=True)
class KeyMonoid(Generic[K]):
    """Monoid used to multiply polynomial keys."""

    empty: K
    concat: Callable[[K, K], K]


def string_monoid(joiner: str = "·") -> KeyMonoid[str]:
    """Concatenation of string keys; the empty string is the unit."""

    def concat(x: str, y: str) -> str:
        if not x:
            return y
        if not y:
            return x
        return f"{x}{joiner}{y}"

    return KeyMonoid(empty="", concat=concat)


def polynomial_semiring(
    keys: KeyMonoid[K],
    coefficients: Semiring[C] = NAT_SEMIRING,
) -> Semiring[Poly[K, C]]:
    """Semiring of sparse polynomials over ``coefficients``.

    - ``add`` merges coefficients on identical keys.
    - ``mul`` is the Cauchy product ``(a*b)[k1·k2] += a[k1]*b[k2]``.
    Zero coefficients are dropped from every result.
    """
    R = coefficients

    def add(a: Poly[K, C], b: Poly[K, C]) -> Poly[K, C]:
        out = dict(a)
        for k, v in b.items():
            poly_insert(out, k, v, R.add, R.zero)
        return {k: v for k, v in out.items() if v != R.zero}

    def mul(a: Poly[K, C], b: Poly[K, C]) -> Poly[K, C]:
        out: Poly[K, C] = {}
        for k1, v1 in a.items():
            for k2, v2 in b.items():
                poly_insert(out, keys.concat(k1, k2), R.mul(v1, v2), R.add, R.zero)
        return {k: v for k, v in out.items() if v != R.zero}

    return Semiring(zero={}, one={keys.empty: R.one}, add=add, mul=mul)
