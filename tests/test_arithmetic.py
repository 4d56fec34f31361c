"""
test_arithmetic.py
"""
import math

import pytest

from julia.arithmetic import Complex, add, magnitude, mul, negate, sub

PAIRS = [
    (Complex(1.0, 2.0), Complex(-1.0, 3.0)),
    (Complex(0.0, 0.0), Complex(0.5, -0.25)),
    (Complex(-0.4, 0.5868), Complex(1.5, 1.5)),
    (Complex(1e300, -1e-300), Complex(3.0, 7.0)),
]


def test_operations_match_component_formulas():
    a, b, c, d = 1.0, 2.0, -1.0, 3.0
    z1 = Complex(a, b)
    z2 = Complex(c, d)

    assert add(z1, z2) == Complex(a + c, b + d)
    assert sub(z1, z2) == Complex(a - c, b - d)
    assert mul(z1, z2) == Complex(a * c - b * d, a * d + b * c)


@pytest.mark.parametrize('a, b', PAIRS)
def test_add_and_mul_commute(a, b):
    assert add(a, b) == add(b, a)
    assert mul(a, b) == mul(b, a)


@pytest.mark.parametrize('a, b', PAIRS)
def test_sub_is_add_of_negation(a, b):
    assert sub(a, b) == add(a, negate(b))


def test_magnitude():
    assert magnitude(Complex(0.0, 0.0)) == 0.0
    assert magnitude(Complex(3.0, -4.0)) == 5.0
    for a, b in PAIRS:
        assert magnitude(a) >= 0.0
        assert magnitude(b) >= 0.0


def test_equality_is_exact():
    assert Complex(0.1 + 0.2, 0.0) != Complex(0.3, 0.0)
    assert Complex(1.0, 2.0) == Complex(1.0, 2.0)


def test_values_are_immutable():
    z = Complex(1.0, 2.0)
    with pytest.raises(AttributeError):
        z.re = 3.0
    assert z.add(Complex(1.0, 1.0)) is not z


def test_non_finite_values_propagate():
    big = Complex(1e200, 0.0)
    assert math.isinf(magnitude(mul(big, big)))
    assert math.isnan(magnitude(Complex(float('nan'), 0.0)))
    assert math.isinf(add(Complex(float('inf'), 0.0), Complex(1.0, 1.0)).re)


def test_nan_components_are_never_equal():
    z = Complex(float('nan'), 0.0)
    assert z != z
    assert not (z == z)
    assert Complex(0.0, float('nan')) != Complex(0.0, float('nan'))


def test_equal_values_hash_alike():
    assert hash(Complex(1.5, -2.0)) == hash(Complex(1.5, -2.0))
    assert Complex(0.0, 0.0) == Complex(-0.0, 0.0)
    assert hash(Complex(0.0, 0.0)) == hash(Complex(-0.0, 0.0))
    assert Complex(1.0, 2.0) != (1.0, 2.0)
