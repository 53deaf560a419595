"""Half-GCD lattice reduction over the integers.

The extended Euclidean algorithm on (modulus, generator) keeps the
invariant r_i = s_i*modulus + t_i*generator, so every row (r_i, -t_i) lies
in the lattice {(x, y) : x + generator*y = 0 mod modulus}. Stopping as soon
as the remainder drops below sqrt(modulus) leaves two neighbouring rows
whose coordinates are both O(sqrt(modulus)).
"""

from __future__ import annotations

import logging
import math

from hinted_glv.types import Lattice, ScalarSplit

_logger = logging.getLogger(__name__)


def _rounding_shift(det: int) -> int:
    return 2 * (((abs(det).bit_length() + 32) >> 6) << 6)


def _round_div(a: int, b: int) -> int:
    """a/b rounded to the nearest integer, halves rounded up; b may be negative."""
    if b < 0:
        a, b = -a, -b
    return (2 * a + b) // (2 * b)


def _norm(r: int, t: int) -> int:
    return r * r + t * t


def precompute_lattice(modulus: int, generator: int) -> Lattice:
    """Reduced basis of the lattice defined by ``generator`` modulo ``modulus``.

    ``generator`` is expected in [0, modulus). The first row of the result is
    the short vector found when Euclid's remainder first drops below
    isqrt(modulus).
    """
    if modulus <= 1:
        raise ValueError(f"modulus must be > 1, got {modulus}")

    # rows are (r_i, s_i, t_i) with r_i = s_i*modulus + t_i*generator
    prev = (modulus, 1, 0)
    cur = (generator, 0, 1)
    bound = math.isqrt(modulus)
    steps = 0
    while cur[0] >= bound:
        q = prev[0] // cur[0]
        prev, cur = cur, tuple(a - q * b for a, b in zip(prev, cur))
        steps += 1

    v1 = (cur[0], -cur[2])

    # v2 is the shorter of the rows surrounding v1
    candidates = [(prev[0], -prev[2])]
    if cur[0] != 0:
        q = prev[0] // cur[0]
        nxt = tuple(a - q * b for a, b in zip(prev, cur))
        candidates.append((nxt[0], -nxt[2]))
    v2 = min(candidates, key=lambda v: _norm(*v))

    det = v1[0] * v2[1] - v1[1] * v2[0]
    shift = _rounding_shift(det)
    b1 = _round_div(v2[1] << shift, det)
    b2 = _round_div(v1[1] << shift, det)

    _logger.debug(
        "precompute_lattice: %d Euclid steps, |v1| bits=%d, |v2| bits=%d",
        steps,
        max(abs(c).bit_length() for c in v1),
        max(abs(c).bit_length() for c in v2),
    )
    return Lattice(v1=v1, v2=v2, det=det, b1=b1, b2=b2, shift=shift)


def split_scalar(scalar: int, lattice: Lattice) -> tuple[int, int]:
    """Return short (k1, k2) with k1 + generator*k2 = scalar mod modulus.

    Babai rounding: subtract from (scalar, 0) the lattice vector closest to
    it, with the rounding done by a multiply-and-shift.
    """
    c1 = (scalar * lattice.b1) >> lattice.shift
    c2 = (-scalar * lattice.b2) >> lattice.shift
    w0 = c1 * lattice.v1[0] + c2 * lattice.v2[0]
    w1 = c1 * lattice.v1[1] + c2 * lattice.v2[1]
    return scalar - w0, -w1


def half_gcd_split(order: int, scalar: int) -> ScalarSplit:
    """Split ``scalar`` into (s1, s2) with s1 + s2*scalar = 0 mod order.

    s1 is a Euclid remainder and is never negative; s2 is returned as its
    absolute value with the sign carried by ``overflow_bit``. ``quotient`` is
    the exact k in s1 + s2*scalar = k*order, computed with the signed s2 and
    the unreduced scalar.
    """
    basis = precompute_lattice(order, scalar % order)
    s1, s2 = basis.v1
    quotient = (s1 + s2 * scalar) // order
    overflow_bit = 0
    if s2 < 0:
        s2 = -s2
        overflow_bit = 1
    return ScalarSplit(s1=s1, s2=s2, overflow_bit=overflow_bit, quotient=quotient)
