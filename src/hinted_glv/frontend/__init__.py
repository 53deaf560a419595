"""Circuit frontend: builder, hints, selection, lookups and emulated arithmetic."""

from __future__ import annotations

from hinted_glv.frontend.api import Builder, Circuit, Operand, Variable, solve
from hinted_glv.frontend.emulated import Element, EmulatedField
from hinted_glv.frontend.hints import get_hint, hint, register_hint
from hinted_glv.frontend.lookup import LogDerivTable
from hinted_glv.frontend.selector import mux

__all__ = [
    "Builder",
    "Circuit",
    "Element",
    "EmulatedField",
    "LogDerivTable",
    "Operand",
    "Variable",
    "get_hint",
    "hint",
    "mux",
    "register_hint",
    "solve",
]
