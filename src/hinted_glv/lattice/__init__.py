"""Off-circuit scalar decomposition: half-GCD over Z and over Z[sqrt(-2)]."""

from __future__ import annotations

from hinted_glv.lattice.glv import build_glv_params, decompose_zz2, get_glv_params
from hinted_glv.lattice.halfgcd import half_gcd_split, precompute_lattice, split_scalar
from hinted_glv.lattice.zz2 import QuadraticInteger, half_gcd

__all__ = [
    "QuadraticInteger",
    "build_glv_params",
    "decompose_zz2",
    "get_glv_params",
    "half_gcd",
    "half_gcd_split",
    "precompute_lattice",
    "split_scalar",
]
