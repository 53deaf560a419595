"""Hints for hinted scalar multiplication.

Each function only computes candidate values; the circuit code in
``hinted_glv.scalarmul`` is responsible for constraining them.
"""

from __future__ import annotations

import logging
from typing import Sequence

from hinted_glv.curves import native
from hinted_glv.curves.params import find_curve
from hinted_glv.errors import HintError
from hinted_glv.frontend.hints import hint
from hinted_glv.lattice.glv import check_endomorphism_field, decompose_zz2
from hinted_glv.lattice.halfgcd import half_gcd_split

_logger = logging.getLogger(__name__)


def _expect(name: str, values: Sequence[int], n: int) -> None:
    if len(values) != n:
        raise HintError(f"{name}: expecting {n} inputs, got {len(values)}")


@hint
def half_gcd(mod: int, inputs: Sequence[int]) -> list[int]:
    """(scalar, order) -> (s1, |s2|, overflow_bit, k) with s1 + s2*scalar = k*order."""
    _expect("half_gcd", inputs, 2)
    split = half_gcd_split(order=inputs[1], scalar=inputs[0])
    return [split.s1, split.s2, split.overflow_bit, split.quotient]


@hint
def scalar_mul_hint(mod: int, inputs: Sequence[int]) -> list[int]:
    """(x, y, scalar, order) -> [scalar](x, y) on the curve with that order."""
    _expect("scalar_mul_hint", inputs, 4)
    params = find_curve(mod, inputs[3])
    x, y = native.scalar_mul(params, (inputs[0], inputs[1]), inputs[2])
    return [x, y]


@hint
def half_gcd_zz2(mod: int, inputs: Sequence[int]) -> list[int]:
    """(scalar, lambda) -> (|u1|, |u2|, |v1|, |v2|, neg_u1, neg_u2, neg_v1, neg_v2).

    Magnitudes and signs come from a single reduction so that recombining
    them always gives back the signed decomposition.
    """
    _expect("half_gcd_zz2", inputs, 2)
    check_endomorphism_field(mod)
    dec = decompose_zz2(inputs[0], inputs[1])
    _logger.debug("half_gcd_zz2: magnitude bits %s", [m.bit_length() for m in dec.magnitudes()])
    return [*dec.magnitudes(), *dec.signs()]


@hint
def half_gcd_zz2_emulated(native_mod: int, foreign_mod: int, inputs: Sequence[int]) -> list[int]:
    """(scalar, lambda) -> signed (u1, u2, v1, v2) as elements of Z/order."""
    _expect("half_gcd_zz2_emulated", inputs, 2)
    check_endomorphism_field(native_mod)
    dec = decompose_zz2(inputs[0], inputs[1])
    return [c % foreign_mod for c in dec.as_tuple()]


@hint
def decompose(mod: int, inputs: Sequence[int]) -> list[int]:
    """(x) -> four 64-bit limbs of x, little-endian."""
    _expect("decompose", inputs, 1)
    mask = (1 << 64) - 1
    return [(inputs[0] >> (64 * i)) & mask for i in range(4)]
