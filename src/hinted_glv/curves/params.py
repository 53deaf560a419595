"""Twisted Edwards curve parameters over the BLS12-381 scalar field.

Curve: a*x^2 + y^2 = 1 + d*x^2*y^2, identity (0, 1).

Only Bandersnatch carries an efficient endomorphism (multiplication by
sqrt(-2) in the order of discriminant -8). Jubjub is kept for the generic
and fake-GLV strategies, which only need the group order.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from hinted_glv.errors import ConfigurationError

# 0x73eda753299d7d483339d80809a1d80553bda402fffe5bfeffffffff00000001
BLS12_381_FR = 52435875175126190479447740508185965837690552500527637822603658699938581184513


class CurveID(enum.Enum):
    BANDERSNATCH = "bandersnatch"
    JUBJUB = "jubjub"


@dataclass(frozen=True)
class EndoParams:
    """phi(x, y) = (c1*(1 - y^2)/(x*y), c0*(y^2 + c0)/(y^2 - c0)) = [lambda](x, y)."""

    c0: int
    c1: int
    lambda_: int


@dataclass(frozen=True)
class CurveParams:
    name: str
    field: int
    a: int
    d: int
    cofactor: int
    order: int
    base: tuple[int, int]
    endo: EndoParams | None = None

    @property
    def has_endomorphism(self) -> bool:
        return self.endo is not None


BANDERSNATCH = CurveParams(
    name="bandersnatch",
    field=BLS12_381_FR,
    a=BLS12_381_FR - 5,
    d=45022363124591815672509500913686876175488063829319466900776701791074614335719,
    cofactor=4,
    order=13108968793781547619861935127046491459309155893440570251786403306729687672801,
    base=(
        18886178867200960497001835917649091219057080094937609519140440539760939937304,
        19188667384257783945677642223292697773471335439753913231509108946878080696678,
    ),
    endo=EndoParams(
        c0=37446463827641770816307242315180085052603635617490163568005256780843403514036,
        c1=49199877423542878313146170939139662862850515542392585932876811575731455068989,
        lambda_=8913659658109529928382530854484400854125314752504019737736543920008458395397,
    ),
)

JUBJUB = CurveParams(
    name="jubjub",
    field=BLS12_381_FR,
    a=BLS12_381_FR - 1,
    # d = -(10240/10241)
    d=(-10240 * pow(10241, -1, BLS12_381_FR)) % BLS12_381_FR,
    cofactor=8,
    order=6554484396890773809930967563523245729705921265872317281365359162392183254199,
    base=(
        8076246640662884909881801758704306714034609987455869804520522091855516602923,
        13262374693698910701929044844600465831413122818447359594527400194675274060458,
    ),
)

_CURVES = {
    CurveID.BANDERSNATCH: BANDERSNATCH,
    CurveID.JUBJUB: JUBJUB,
}


def get_curve_params(curve_id: CurveID) -> CurveParams:
    try:
        return _CURVES[curve_id]
    except KeyError:
        raise ConfigurationError(f"unknown curve: {curve_id!r}") from None


def find_curve(field: int, order: int) -> CurveParams:
    """Return the curve defined over ``field`` whose subgroup order is ``order``."""
    for params in _CURVES.values():
        if params.field == field and params.order == order:
            return params
    raise ConfigurationError(f"no supported curve with order {order} over field {field}")
