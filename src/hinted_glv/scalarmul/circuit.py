"""Test and benchmark circuit: assert [s]P == R with a chosen strategy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from hinted_glv.curves.params import CurveID
from hinted_glv.curves.twistededwards import EdCurve, Point
from hinted_glv.errors import ConfigurationError
from hinted_glv.frontend.api import Builder, Operand
from hinted_glv.scalarmul.point import (
    scalar_mul_fake_glv,
    scalar_mul_generic,
    scalar_mul_glv_and_fake_glv,
    scalar_mul_glv_and_fake_glv_log,
)

ScalarMulFn = Callable[[Builder, Point, Operand, CurveID], Point]

STRATEGIES: dict[str, ScalarMulFn] = {
    "generic": scalar_mul_generic,
    "fake-glv": scalar_mul_fake_glv,
    "glv-fake-glv": scalar_mul_glv_and_fake_glv,
    "glv-fake-glv-log": scalar_mul_glv_and_fake_glv_log,
}

# strategies that need the sqrt(-2) endomorphism
ENDOMORPHISM_STRATEGIES = frozenset({"glv-fake-glv", "glv-fake-glv-log"})


@dataclass
class ScalarMulCircuit:
    """Inputs are plain ints, allocated as witnesses when the circuit is built."""

    strategy: str
    p: tuple[int, int]
    r: tuple[int, int]
    s: int
    curve_id: CurveID = CurveID.BANDERSNATCH

    def __post_init__(self) -> None:
        if self.strategy not in STRATEGIES:
            raise ConfigurationError(
                f"unknown strategy {self.strategy!r}, expected one of {sorted(STRATEGIES)}"
            )

    def define(self, api: Builder) -> None:
        curve = EdCurve(api, self.curve_id)
        p = Point(api.secret(self.p[0]), api.secret(self.p[1]))
        r = Point(api.secret(self.r[0]), api.secret(self.r[1]))
        s = api.secret(self.s)

        res = STRATEGIES[self.strategy](api, p, s, self.curve_id)
        curve.assert_is_equal(res, r)
