"""Hinted scalar multiplication strategies and their decomposition checks."""

from __future__ import annotations

from hinted_glv.scalarmul.circuit import (
    ENDOMORPHISM_STRATEGIES,
    STRATEGIES,
    ScalarMulCircuit,
)
from hinted_glv.scalarmul.decompose import (
    VerifiedScalarSplit,
    VerifiedZZ2Decomposition,
    check_half_gcd_zz2,
    decompose_scalar,
    decompose_scalar_zz2,
    emulated_scalar,
    zz2_nbits,
)
from hinted_glv.scalarmul.point import (
    combination_table,
    scalar_mul_fake_glv,
    scalar_mul_generic,
    scalar_mul_glv_and_fake_glv,
    scalar_mul_glv_and_fake_glv_log,
)

__all__ = [
    "ENDOMORPHISM_STRATEGIES",
    "STRATEGIES",
    "ScalarMulCircuit",
    "VerifiedScalarSplit",
    "VerifiedZZ2Decomposition",
    "check_half_gcd_zz2",
    "combination_table",
    "decompose_scalar",
    "decompose_scalar_zz2",
    "emulated_scalar",
    "scalar_mul_fake_glv",
    "scalar_mul_generic",
    "scalar_mul_glv_and_fake_glv",
    "scalar_mul_glv_and_fake_glv_log",
    "zz2_nbits",
]
