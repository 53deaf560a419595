"""Arithmetic and half-GCD in Z[sqrt(-2)].

Z[sqrt(-2)] is norm-Euclidean: rounding x*conj(y)/N(y) to the nearest
element leaves a remainder of norm at most 3/4*N(y), so the Euclidean
algorithm below always terminates.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


def _round_div(n: int, d: int) -> int:
    """n/d rounded to the nearest integer, halves rounded up (d > 0)."""
    return (2 * n + d) // (2 * d)


@dataclass(frozen=True)
class QuadraticInteger:
    """a0 + a1*sqrt(-2)."""

    a0: int
    a1: int = 0

    def __add__(self, other: QuadraticInteger) -> QuadraticInteger:
        return QuadraticInteger(self.a0 + other.a0, self.a1 + other.a1)

    def __sub__(self, other: QuadraticInteger) -> QuadraticInteger:
        return QuadraticInteger(self.a0 - other.a0, self.a1 - other.a1)

    def __neg__(self) -> QuadraticInteger:
        return QuadraticInteger(-self.a0, -self.a1)

    def __mul__(self, other: QuadraticInteger) -> QuadraticInteger:
        # sqrt(-2)^2 = -2
        return QuadraticInteger(
            self.a0 * other.a0 - 2 * self.a1 * other.a1,
            self.a0 * other.a1 + self.a1 * other.a0,
        )

    def conjugate(self) -> QuadraticInteger:
        return QuadraticInteger(self.a0, -self.a1)

    def norm(self) -> int:
        return self.a0 * self.a0 + 2 * self.a1 * self.a1

    def is_zero(self) -> bool:
        return self.a0 == 0 and self.a1 == 0

    def quo_rem(
        self, other: QuadraticInteger
    ) -> tuple[QuadraticInteger, QuadraticInteger]:
        """Euclidean division: self = q*other + r with N(r) < N(other)."""
        n = other.norm()
        if n == 0:
            raise ZeroDivisionError("division by zero in Z[sqrt(-2)]")
        num = self * other.conjugate()
        q = QuadraticInteger(_round_div(num.a0, n), _round_div(num.a1, n))
        return q, self - q * other

    def evaluate(self, root: int, modulus: int) -> int:
        """Image under Z[sqrt(-2)] -> Z/modulus sending sqrt(-2) to ``root``."""
        return (self.a0 + self.a1 * root) % modulus


ZERO = QuadraticInteger(0, 0)
ONE = QuadraticInteger(1, 0)


def half_gcd(
    a: QuadraticInteger, b: QuadraticInteger
) -> tuple[QuadraticInteger, QuadraticInteger, QuadraticInteger]:
    """Rational reconstruction of (a, b).

    Returns (w, v, u) with w = a*u + b*v and N(w) < isqrt(N(a)); u and v are
    the Bezout-style cofactors of the row where the reduction stopped.
    """
    a_run, b_run = a, b
    # invariants: a_run = a*u + b*v, b_run = a*u_ + b*v_
    u, v = ONE, ZERO
    u_, v_ = ZERO, ONE
    if a_run.norm() < b_run.norm():
        a_run, b_run = b_run, a_run
        u, v, u_, v_ = u_, v_, u, v

    limit = max(math.isqrt(a.norm()), 1)
    while b_run.norm() >= limit:
        q, r = a_run.quo_rem(b_run)
        a_run, b_run = b_run, r
        u, u_ = u_, u - q * u_
        v, v_ = v_, v - q * v_
    return b_run, v_, u_
