"""Dataclass definitions shared across the decomposition and circuit layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Sequence

from hinted_glv.curves.params import BLS12_381_FR

HintFn = Callable[[int, Sequence[int]], list[int]]


@dataclass(frozen=True)
class Lattice:
    """Reduced basis of {(x, y) : x + generator*y = 0 mod modulus}.

    ``b1`` and ``b2`` are the fixed-point roundings of v2[1]/det and
    v1[1]/det scaled by 2^shift, used to split scalars without division.
    """

    v1: tuple[int, int]
    v2: tuple[int, int]
    det: int
    b1: int
    b2: int
    shift: int


@dataclass(frozen=True)
class ScalarSplit:
    """s1 + s2*s = quotient*order, with s2 stored as |s2|.

    ``overflow_bit`` is 1 when s2 was negative before canonicalisation.
    """

    s1: int
    s2: int
    overflow_bit: int
    quotient: int

    def signed_s2(self) -> int:
        return -self.s2 if self.overflow_bit else self.s2


@dataclass(frozen=True)
class ZZ2Decomposition:
    """u1 + lambda*u2 + s*(v1 + lambda*v2) = 0 mod order."""

    u1: int
    u2: int
    v1: int
    v2: int

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.u1, self.u2, self.v1, self.v2)

    def magnitudes(self) -> tuple[int, int, int, int]:
        return tuple(abs(c) for c in self.as_tuple())

    def signs(self) -> tuple[int, int, int, int]:
        return tuple(int(c < 0) for c in self.as_tuple())

    @classmethod
    def from_parts(
        cls, magnitudes: Sequence[int], signs: Sequence[int]
    ) -> ZZ2Decomposition:
        return cls(*(-m if neg else m for m, neg in zip(magnitudes, signs)))


@dataclass(frozen=True)
class GLVParams:
    """Endomorphism eigenvalue, group order and the memoized eigenvalue basis."""

    lambda_: int
    order: int
    basis: Lattice


@dataclass
class BuilderConfig:
    """Configuration for a circuit build."""

    modulus: int = BLS12_381_FR
    hint_overrides: dict[str, HintFn] = field(default_factory=dict)
    strict: bool = False  # raise on the first failed assertion
