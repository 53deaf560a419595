"""Twisted Edwards curves over the BLS12-381 scalar field.

The in-circuit group law lives in ``hinted_glv.curves.twistededwards`` and is
imported explicitly, since it depends on the circuit frontend.
"""

from __future__ import annotations

from hinted_glv.curves.params import (
    BANDERSNATCH,
    BLS12_381_FR,
    JUBJUB,
    CurveID,
    CurveParams,
    EndoParams,
    find_curve,
    get_curve_params,
)

__all__ = [
    "BANDERSNATCH",
    "BLS12_381_FR",
    "JUBJUB",
    "CurveID",
    "CurveParams",
    "EndoParams",
    "find_curve",
    "get_curve_params",
]
