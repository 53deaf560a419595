"""Multiplexer built from a binary tree of selections."""

from __future__ import annotations

from hinted_glv.frontend.api import Builder, Operand, Variable


def mux(api: Builder, sel: Operand, *inputs: Operand) -> Variable:
    """Return inputs[sel]; unsatisfiable when sel >= len(inputs)."""
    if not inputs:
        raise ValueError("mux needs at least one input")
    n = len(inputs)
    nbits = max((n - 1).bit_length(), 1)
    bits = api.to_binary(sel, nbits)
    if n != 1 << nbits:
        api.assert_is_less_or_equal(sel, n - 1)

    level = list(inputs) + [inputs[-1]] * ((1 << nbits) - n)
    for b in bits:
        level = [api.select(b, level[i + 1], level[i]) for i in range(0, len(level), 2)]
    return api.add(level[0], 0)
