"""Complex arithmetic used by the escape-time iteration."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True, eq=False)
class Complex:
    """A complex value stored as two 64-bit floats.

    Equality is exact component-wise comparison, so a NaN component is unequal
    to everything. Every operation returns a new value and non-finite
    components propagate per IEEE rules.
    """

    re: float
    im: float

    def __eq__(self, other):
        if not isinstance(other, Complex):
            return NotImplemented
        return self.re == other.re and self.im == other.im

    def __hash__(self):
        return hash((self.re, self.im))

    def add(self, other: Complex) -> Complex:
        return Complex(self.re + other.re, self.im + other.im)

    def sub(self, other: Complex) -> Complex:
        return Complex(self.re - other.re, self.im - other.im)

    def mul(self, other: Complex) -> Complex:
        a, b = self.re, self.im
        c, d = other.re, other.im
        return Complex(a * c - b * d, a * d + b * c)

    def negate(self) -> Complex:
        return Complex(-self.re, -self.im)

    def magnitude(self) -> float:
        return math.sqrt(self.re * self.re + self.im * self.im)


def add(a: Complex, b: Complex) -> Complex:
    return a.add(b)


def sub(a: Complex, b: Complex) -> Complex:
    return a.sub(b)


def mul(a: Complex, b: Complex) -> Complex:
    return a.mul(b)


def negate(a: Complex) -> Complex:
    return a.negate()


def magnitude(a: Complex) -> float:
    return a.magnitude()
