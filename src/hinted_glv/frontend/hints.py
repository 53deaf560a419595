"""Hint registry.

A hint is a pure function ``fn(modulus, inputs) -> outputs`` evaluated
outside the constraint system. Its outputs are unconstrained: every caller
must assert the relation the outputs are supposed to satisfy.
"""

from __future__ import annotations

from hinted_glv.errors import HintError
from hinted_glv.types import HintFn

_REGISTRY: dict[str, HintFn] = {}


def hint_name(fn: HintFn) -> str:
    return getattr(fn, "hint_name", None) or fn.__name__


def register_hint(*fns: HintFn) -> None:
    for fn in fns:
        name = hint_name(fn)
        existing = _REGISTRY.get(name)
        if existing is not None and existing is not fn:
            raise HintError(f"a different hint is already registered as {name!r}")
        _REGISTRY[name] = fn


def hint(fn: HintFn) -> HintFn:
    """Decorator form of :func:`register_hint`."""
    register_hint(fn)
    return fn


def get_hint(name: str) -> HintFn:
    try:
        return _REGISTRY[name]
    except KeyError:
        raise HintError(f"no hint registered as {name!r}") from None

