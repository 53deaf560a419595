"""In-circuit twisted Edwards group law."""

from __future__ import annotations

from dataclasses import dataclass

from hinted_glv.curves.params import CurveID, CurveParams, EndoParams, get_curve_params
from hinted_glv.errors import ConfigurationError
from hinted_glv.frontend.api import Builder, Operand


@dataclass
class Point:
    x: Operand
    y: Operand


def identity() -> Point:
    return Point(0, 1)


class EdCurve:
    """Group operations on points of ``curve_id`` expressed as constraints."""

    def __init__(self, api: Builder, curve_id: CurveID) -> None:
        params = get_curve_params(curve_id)
        if params.field != api.field:
            raise ConfigurationError(
                f"{params.name} is not defined over the native field of the builder"
            )
        self.api = api
        self.curve_id = curve_id
        self._params = params

    def params(self) -> CurveParams:
        return self._params

    def endo(self) -> EndoParams:
        if self._params.endo is None:
            raise ConfigurationError("no efficient endomorphism is available on this curve")
        return self._params.endo

    def add(self, p1: Point, p2: Point) -> Point:
        api, a, d = self.api, self._params.a, self._params.d
        # x3 = (x1*y2 + y1*x2) / (1 + d*x1*x2*y1*y2)
        # y3 = (y1*y2 - a*x1*x2) / (1 - d*x1*x2*y1*y2)
        v0 = api.mul(p1.y, p2.x)
        v1 = api.mul(p1.x, p2.y)
        v2 = api.mul(v0, v1)
        x1x2 = api.mul(p1.x, p2.x)
        y1y2 = api.mul(p1.y, p2.y)
        dv2 = api.mul(v2, d)
        return Point(
            x=api.div_unchecked(api.add(v0, v1), api.add(1, dv2)),
            y=api.div_unchecked(api.sub(y1y2, api.mul(x1x2, a)), api.sub(1, dv2)),
        )

    def double(self, p: Point) -> Point:
        api, a = self.api, self._params.a
        # x3 = 2xy / (a*x^2 + y^2), y3 = (y^2 - a*x^2) / (2 - a*x^2 - y^2)
        xy = api.mul(p.x, p.y)
        xx = api.mul(p.x, p.x)
        yy = api.mul(p.y, p.y)
        axx = api.mul(xx, a)
        denom = api.add(axx, yy)
        return Point(
            x=api.div_unchecked(api.mul(xy, 2), denom),
            y=api.div_unchecked(api.sub(yy, axx), api.sub(2, denom)),
        )

    def neg(self, p: Point) -> Point:
        return Point(self.api.neg(p.x), p.y)

    def select(self, b: Operand, p1: Point, p2: Point) -> Point:
        return Point(self.api.select(b, p1.x, p2.x), self.api.select(b, p1.y, p2.y))

    def conditional_neg(self, b: Operand, p: Point) -> Point:
        """-p if b == 1 else p."""
        return Point(self.api.select(b, self.api.neg(p.x), p.x), p.y)

    def lookup2(
        self, b0: Operand, b1: Operand, p0: Point, p1: Point, p2: Point, p3: Point
    ) -> Point:
        return Point(
            self.api.lookup2(b0, b1, p0.x, p1.x, p2.x, p3.x),
            self.api.lookup2(b0, b1, p0.y, p1.y, p2.y, p3.y),
        )

    def phi(self, p: Point) -> Point:
        """Endomorphism sqrt(-2): (x, y) -> [lambda](x, y) with lambda^2 = -2 mod r."""
        api, endo = self.api, self.endo()
        xy = api.mul(p.x, p.y)
        yy = api.mul(p.y, p.y)
        f = api.mul(api.sub(1, yy), endo.c1)
        g = api.mul(api.add(yy, endo.c0), endo.c0)
        h = api.sub(yy, endo.c0)
        return Point(api.div_unchecked(f, xy), api.div_unchecked(g, h))

    def assert_is_on_curve(self, p: Point) -> None:
        api, a, d = self.api, self._params.a, self._params.d
        xx = api.mul(p.x, p.x)
        yy = api.mul(p.y, p.y)
        lhs = api.add(api.mul(xx, a), yy)
        rhs = api.add(1, api.mul(api.mul(xx, yy), d))
        api.assert_is_equal(lhs, rhs)

    def assert_is_equal(self, p1: Point, p2: Point) -> None:
        self.api.assert_is_equal(p1.x, p2.x)
        self.api.assert_is_equal(p1.y, p2.y)
