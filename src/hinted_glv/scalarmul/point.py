"""Scalar multiplication on twisted Edwards curves inside a circuit.

Four strategies compute Q = [s]P:

* ``scalar_mul_generic``: 2-bit windowed double-and-add over the full scalar.
* ``scalar_mul_fake_glv``: Q is hinted and [s1]P + [s2]Q = (0, 1) is checked
  with s1 + s2*s = 0 mod r and |s1|, |s2| < sqrt(r).
* ``scalar_mul_glv_and_fake_glv``: Q is hinted and
  [u1]P + [u2]phi(P) + [v1]Q + [v2]phi(Q) = (0, 1) is checked with
  u1 + lambda*u2 + s*(v1 + lambda*v2) = 0 mod r and |u1, u2, v1, v2| in
  O(r^(1/4)); the 16-entry table is read through a multiplexer.
* ``scalar_mul_glv_and_fake_glv_log``: same, with a log-derivative lookup.
"""

from __future__ import annotations

import logging
from typing import Callable

from hinted_glv.curves.params import CurveID
from hinted_glv.curves.twistededwards import EdCurve, Point, identity
from hinted_glv.frontend.api import Builder, Operand, Variable
from hinted_glv.frontend.lookup import LogDerivTable
from hinted_glv.frontend.selector import mux
from hinted_glv.scalarmul.decompose import decompose_scalar, decompose_scalar_zz2
from hinted_glv.scalarmul.hints import scalar_mul_hint

_logger = logging.getLogger(__name__)

TABLE_SIZE = 16


def scalar_mul_generic(
    api: Builder, p: Point, s: Operand, curve_id: CurveID = CurveID.BANDERSNATCH
) -> Point:
    curve = EdCurve(api, curve_id)

    a = curve.double(p)
    b = curve.add(a, p)

    bits = api.to_binary(s)
    n = len(bits) - 1

    # windows are read most significant bit first: (b[i], b[i-1])
    res = curve.lookup2(bits[n], bits[n - 1], identity(), a, p, b)
    for i in range(n - 2, 0, -2):
        res = curve.double(res)
        res = curve.double(res)
        tmp = curve.lookup2(bits[i], bits[i - 1], identity(), a, p, b)
        res = curve.add(res, tmp)

    if n % 2 == 0:
        res = curve.double(res)
        tmp = curve.add(res, p)
        res = curve.select(bits[0], tmp, res)

    return res


def _hinted_result(api: Builder, curve: EdCurve, p: Point, s: Operand) -> Point:
    q = api.new_hint(scalar_mul_hint, 2, p.x, p.y, s, curve.params().order)
    return Point(q[0], q[1])


def _assert_identity(curve: EdCurve, res: Point) -> None:
    curve.assert_is_equal(res, identity())


def scalar_mul_fake_glv(
    api: Builder, p: Point, s: Operand, curve_id: CurveID = CurveID.BANDERSNATCH
) -> Point:
    """[s]P through the hinted result Q and a 2-term split of s."""
    curve = EdCurve(api, curve_id)
    order = curve.params().order

    split = decompose_scalar(api, s, order)
    b1, b2 = split.s1_bits, split.s2_bits
    n = len(b1)

    q = _hinted_result(api, curve, p, s)
    p2 = curve.conditional_neg(split.overflow_bit, q)
    p3 = curve.add(p, p2)

    res = curve.lookup2(b1[n - 1], b2[n - 1], identity(), p, p2, p3)
    for i in range(n - 2, -1, -1):
        res = curve.double(res)
        tmp = curve.lookup2(b1[i], b2[i], identity(), p, p2, p3)
        res = curve.add(res, tmp)

    _assert_identity(curve, res)
    return q


def combination_table(curve: EdCurve, base: list[Point]) -> list[Point]:
    """All subset sums of ``base``; entry i is the sum of base[j] for bits j of i.

    Each entry past the first 2^k is one addition to an earlier entry, so
    four base points cost eleven additions.
    """
    table = [identity()]
    for idx in range(1, 1 << len(base)):
        high = idx.bit_length() - 1
        rest = idx ^ (1 << high)
        table.append(base[high] if rest == 0 else curve.add(table[rest], base[high]))
    return table


Selector = Callable[[Variable], Point]


def _glv_and_fake_glv(
    api: Builder,
    p: Point,
    s: Operand,
    curve_id: CurveID,
    make_selector: Callable[[Builder, list[Point]], Selector],
) -> Point:
    curve = EdCurve(api, curve_id)
    endo = curve.endo()

    dec = decompose_scalar_zz2(api, s, endo.lambda_)
    neg_u1, neg_u2, neg_v1, neg_v2 = dec.signs
    q = _hinted_result(api, curve, p, s)

    # signs of the decomposition are applied to the base points
    base = [
        curve.conditional_neg(neg_u1, p),
        curve.conditional_neg(neg_u2, curve.phi(p)),
        curve.conditional_neg(neg_v1, q),
        curve.conditional_neg(neg_v2, curve.phi(q)),
    ]
    select = make_selector(api, combination_table(curve, base))

    def flag(i: int) -> Variable:
        return api.add(*(api.mul(bits[i], 1 << j) for j, bits in enumerate(dec.bits)))

    n = dec.nbits
    res = select(flag(n - 1))
    for i in range(n - 2, -1, -1):
        res = curve.double(res)
        res = curve.add(res, select(flag(i)))

    _assert_identity(curve, res)
    _logger.debug("glv and fake-glv: %d steps, %d constraints", n, api.nb_constraints)
    return q


def _mux_selector(api: Builder, table: list[Point]) -> Selector:
    xs = [t.x for t in table]
    ys = [t.y for t in table]
    return lambda sel: Point(mux(api, sel, *xs), mux(api, sel, *ys))


def _logderiv_selector(api: Builder, table: list[Point]) -> Selector:
    tbl_x = LogDerivTable(api)
    tbl_y = LogDerivTable(api)
    for t in table:
        tbl_x.insert(t.x)
        tbl_y.insert(t.y)
    return lambda sel: Point(tbl_x.lookup(sel)[0], tbl_y.lookup(sel)[0])


def scalar_mul_glv_and_fake_glv(
    api: Builder, p: Point, s: Operand, curve_id: CurveID = CurveID.BANDERSNATCH
) -> Point:
    """[s]P through a 4-term decomposition over Z[sqrt(-2)], multiplexer table."""
    return _glv_and_fake_glv(api, p, s, curve_id, _mux_selector)


def scalar_mul_glv_and_fake_glv_log(
    api: Builder, p: Point, s: Operand, curve_id: CurveID = CurveID.BANDERSNATCH
) -> Point:
    """As ``scalar_mul_glv_and_fake_glv`` with log-derivative lookups."""
    return _glv_and_fake_glv(api, p, s, curve_id, _logderiv_selector)
