"""Reference twisted Edwards arithmetic over Python integers.

Used by the scalar multiplication hint and by the tests as the trusted
group law. Points are affine ``(x, y)`` tuples; the identity is ``(0, 1)``.
"""

from __future__ import annotations

import numpy as np

from hinted_glv.curves.params import CurveParams

IDENTITY: tuple[int, int] = (0, 1)


def is_on_curve(params: CurveParams, point: tuple[int, int]) -> bool:
    p = params.field
    x, y = point
    xx, yy = x * x % p, y * y % p
    return (params.a * xx + yy - 1 - params.d * xx * yy) % p == 0


def neg(params: CurveParams, point: tuple[int, int]) -> tuple[int, int]:
    x, y = point
    return (-x % params.field, y)


def add(
    params: CurveParams, p1: tuple[int, int], p2: tuple[int, int]
) -> tuple[int, int]:
    """Unified addition law; also valid for doubling."""
    p = params.field
    x1, y1 = p1
    x2, y2 = p2
    x1x2 = x1 * x2 % p
    y1y2 = y1 * y2 % p
    dxy = params.d * x1x2 * y1y2 % p
    x3 = (x1 * y2 + y1 * x2) * pow((1 + dxy) % p, -1, p) % p
    y3 = (y1y2 - params.a * x1x2) * pow((1 - dxy) % p, -1, p) % p
    return (x3, y3)


def double(params: CurveParams, point: tuple[int, int]) -> tuple[int, int]:
    return add(params, point, point)


def scalar_mul(
    params: CurveParams, point: tuple[int, int], scalar: int
) -> tuple[int, int]:
    """Left-to-right double-and-add, scalar taken modulo the subgroup order."""
    scalar %= params.order
    result = IDENTITY
    for i in reversed(range(scalar.bit_length())):
        result = double(params, result)
        if (scalar >> i) & 1:
            result = add(params, result, point)
    return result


def endomorphism(params: CurveParams, point: tuple[int, int]) -> tuple[int, int]:
    """phi(P) = [lambda]P, evaluated with the rational map of ``params.endo``."""
    if params.endo is None:
        raise ValueError(f"{params.name} has no efficient endomorphism")
    if point == IDENTITY:
        return IDENTITY
    p = params.field
    c0, c1 = params.endo.c0, params.endo.c1
    x, y = point
    yy = y * y % p
    f = (1 - yy) * c1 % p
    g = (yy + c0) * c0 % p
    h = (yy - c0) % p
    return (f * pow(x * y % p, -1, p) % p, g * pow(h, -1, p) % p)


def random_scalar(order: int, rng: np.random.Generator | None = None) -> int:
    """Uniform-ish scalar in [0, order) drawn from a numpy generator."""
    if rng is None:
        rng = np.random.default_rng()
    nbytes = (order.bit_length() + 7) // 8 + 16
    return int.from_bytes(rng.bytes(nbytes), "big") % order
