from fractions import Fraction

import pytest

from cooperax.algebra.weights import (
    BIG_INT_SEMIRING,
    NAT_SEMIRING,
    RATIONAL_SEMIRING,
    WeightMonoid,
    big_int_weight_monoid,
    number_weight_monoid,
    rational_weight_monoid,
)


def test_number_weight_monoid() -> None:
    m = number_weight_monoid()
    assert m.identity == 0
    assert m.combine(1, 2) == 3
    assert m.combine(0.5, 0.25) == pytest.approx(0.75)


def test_big_int_weight_monoid_is_exact() -> None:
    m = big_int_weight_monoid()
    big = 2**100
    assert m.combine(big, 1) == big + 1
    with pytest.raises(TypeError):
        m.combine(1, 0.5)


def test_rational_weight_monoid() -> None:
    m = rational_weight_monoid()
    assert m.identity == Fraction(0)
    result = m.combine(Fraction(1, 3), Fraction(1, 6))
    assert result == Fraction(1, 2)
    assert isinstance(m.combine(1, 2), Fraction)


@pytest.mark.parametrize("semiring", [NAT_SEMIRING, BIG_INT_SEMIRING, RATIONAL_SEMIRING])
def test_semiring_units(semiring) -> None:
    x = semiring.add(semiring.one, semiring.one)
    assert semiring.add(semiring.zero, x) == x
    assert semiring.mul(semiring.one, x) == x
    assert semiring.mul(x, x) == semiring.add(x, x)


def test_rational_semiring_arithmetic() -> None:
    R = RATIONAL_SEMIRING
    assert R.mul(Fraction(2, 3), Fraction(3, 4)) == Fraction(1, 2)
    assert R.add(Fraction(1, 2), 1) == Fraction(3, 2)


def test_monoid_from_semiring() -> None:
    m = WeightMonoid.from_semiring(NAT_SEMIRING)
    assert m.identity == 0
    assert m.combine(2, 5) == 7
