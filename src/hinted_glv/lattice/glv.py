"""GLV + fake-GLV decomposition for the Bandersnatch endomorphism.

The eigenvalue lattice basis is fixed per curve, so it is computed once per
process behind a lock and shared read-only by every caller.
"""

from __future__ import annotations

import logging
import threading

from hinted_glv.curves.params import BANDERSNATCH, BLS12_381_FR
from hinted_glv.errors import ConfigurationError
from hinted_glv.lattice.halfgcd import precompute_lattice, split_scalar
from hinted_glv.lattice.zz2 import QuadraticInteger, half_gcd
from hinted_glv.types import GLVParams, ZZ2Decomposition

_logger = logging.getLogger(__name__)

_params_lock = threading.Lock()
_params: GLVParams | None = None


def build_glv_params(lambda_: int, order: int) -> GLVParams:
    return GLVParams(
        lambda_=lambda_, order=order, basis=precompute_lattice(order, lambda_)
    )


def get_glv_params() -> GLVParams:
    """Process-wide Bandersnatch GLV parameters, initialised at most once."""
    global _params
    params = _params
    if params is None:
        with _params_lock:
            if _params is None:
                endo = BANDERSNATCH.endo
                if endo is None:
                    raise ConfigurationError("Bandersnatch parameters carry no endomorphism")
                _logger.info("initialising Bandersnatch GLV lattice basis")
                _params = build_glv_params(endo.lambda_, BANDERSNATCH.order)
            params = _params
    return params


def check_endomorphism_field(modulus: int) -> None:
    # the efficient endomorphism exists on Bandersnatch only
    if modulus != BLS12_381_FR:
        raise ConfigurationError("no efficient endomorphism is available on this curve")


def decompose_zz2(
    scalar: int,
    lambda_: int | None = None,
    params: GLVParams | None = None,
) -> ZZ2Decomposition:
    """Find short (u1, u2, v1, v2) with u1 + λ*u2 + scalar*(v1 + λ*v2) = 0 mod r.

    r = v1[0] + v1[1]*sqrt(-2) generates the kernel of Z[sqrt(-2)] -> Z/order,
    and the half-GCD of (r, -scalar) in Z[sqrt(-2)] returns w = r*u + s*v with
    w and v both of size O(order^(1/4)). The scalar is negated so that
    w + scalar*v vanishes modulo the order rather than w - scalar*v.
    """
    if params is None:
        params = get_glv_params()
    if lambda_ is not None and lambda_ != params.lambda_:
        params = build_glv_params(lambda_, params.order)

    basis = params.basis
    r = QuadraticInteger(*basis.v1)
    sp0, sp1 = split_scalar(scalar, basis)
    s = -QuadraticInteger(sp0, sp1)
    w, v, _ = half_gcd(r, s)
    return ZZ2Decomposition(u1=w.a0, u2=w.a1, v1=v.a0, v2=v.a1)
