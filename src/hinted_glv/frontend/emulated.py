"""Non-native (emulated) field arithmetic.

An element of Z/modulus is held as little-endian limbs of ``bits_per_limb``
bits, each limb a native variable. Additions and products are done limb by
limb without reduction, and the limbs are allowed to grow (and to go
negative) as long as they stay far below the native modulus. Equality
modulo ``modulus`` is proven by exhibiting the quotient k of
(a - b) = k*modulus and checking the integer identity limb by limb with
signed carries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from hinted_glv.errors import ConfigurationError, HintError
from hinted_glv.frontend.api import Builder, Operand, Variable
from hinted_glv.frontend.hints import hint, hint_name

EmulatedHintFn = Callable[[int, int, Sequence[int]], list[int]]


def _signed(v: int, mod: int) -> int:
    return v - mod if v > mod // 2 else v


def _split(value: int, nb_limbs: int, bits_per_limb: int) -> list[int]:
    mask = (1 << bits_per_limb) - 1
    return [(value >> (bits_per_limb * i)) & mask for i in range(nb_limbs)]


@hint
def emulated_quotient_hint(mod: int, inputs: Sequence[int]) -> list[int]:
    """(modulus, bits_per_limb, nb_quotient_limbs, *limbs) -> (sign, *|k| limbs)."""
    foreign, w, nk = inputs[0], inputs[1], inputs[2]
    diff = sum(_signed(limb, mod) << (w * i) for i, limb in enumerate(inputs[3:]))
    k = abs(diff) // foreign
    return [int(diff < 0), *_split(k, nk, w)]


@hint
def emulated_carries_hint(mod: int, inputs: Sequence[int]) -> list[int]:
    """(bits_per_limb, *limbs) -> carries of the limb-wise sum, all but the last."""
    w = inputs[0]
    carries = []
    carry = 0
    for limb in inputs[1:-1]:
        carry = (_signed(limb, mod) + carry) >> w
        carries.append(carry)
    return carries


@dataclass
class Element:
    """Limbs plus an upper bound on the bit length of each |limb|."""

    limbs: list[Operand]
    bits: int


class EmulatedField:
    def __init__(
        self,
        api: Builder,
        modulus: int,
        nb_limbs: int = 4,
        bits_per_limb: int = 64,
    ) -> None:
        if modulus.bit_length() > nb_limbs * bits_per_limb:
            raise ConfigurationError(
                f"{modulus.bit_length()}-bit modulus does not fit in "
                f"{nb_limbs} limbs of {bits_per_limb} bits"
            )
        self.api = api
        self.modulus = modulus
        self.nb_limbs = nb_limbs
        self.bits_per_limb = bits_per_limb
        # headroom for one carry and the sign
        self._max_bits = api.field.bit_length() - 3

    def _checked(self, limbs: list[Operand], bits: int) -> Element:
        if bits > self._max_bits:
            raise ConfigurationError(
                f"emulated limbs of {bits} bits overflow the native field"
            )
        return Element(limbs, bits)

    # -- construction --

    def zero(self) -> Element:
        return Element([0], 0)

    def modulus_element(self) -> Element:
        """The modulus itself as an unreduced constant."""
        w = self.bits_per_limb
        return Element(list(_split(self.modulus, self.nb_limbs, w)), w)

    def new_element(self, value: int | Sequence[Operand]) -> Element:
        """Constant from an int, or an element from native limbs (range checked)."""
        if isinstance(value, int):
            limbs = _split(value % self.modulus, self.nb_limbs, self.bits_per_limb)
            return Element(list(limbs), self.bits_per_limb)
        if len(value) != self.nb_limbs:
            raise ConfigurationError(
                f"expected {self.nb_limbs} limbs, got {len(value)}"
            )
        for limb in value:
            self.api.to_binary(limb, self.bits_per_limb)
        return Element(list(value), self.bits_per_limb)

    def from_bits(self, bits: Sequence[Variable]) -> Element:
        """Element from already boolean-constrained little-endian bits."""
        w = self.bits_per_limb
        if len(bits) > self.nb_limbs * w:
            raise ConfigurationError(f"{len(bits)} bits do not fit in the limbs")
        limbs: list[Operand] = []
        for start in range(0, len(bits), w):
            acc: Operand = 0
            for j, b in enumerate(bits[start : start + w]):
                acc = self.api.add(acc, self.api.mul(b, 1 << j))
            limbs.append(acc)
        return Element(limbs or [0], w)

    def new_hint_with_native_input(
        self, fn: EmulatedHintFn, n_outputs: int, *inputs: Operand
    ) -> list[Element]:
        """Run ``fn(native_mod, modulus, inputs)`` and limb its outputs.

        Outputs are reduced modulo ``modulus`` before limbing, so signed
        results come back as their canonical residues.
        """
        resolved = self.api.resolve_hint(fn)
        foreign, nb, w = self.modulus, self.nb_limbs, self.bits_per_limb

        def unwrapped(native_mod: int, values: Sequence[int]) -> list[int]:
            outputs = resolved(native_mod, foreign, values)
            if len(outputs) != n_outputs:
                raise HintError(
                    f"hint {hint_name(fn)} returned {len(outputs)} outputs, "
                    f"expected {n_outputs}"
                )
            limbs: list[int] = []
            for o in outputs:
                limbs.extend(_split(o % foreign, nb, w))
            return limbs

        unwrapped.hint_name = f"emulated:{hint_name(fn)}"
        raw = self.api.new_hint(unwrapped, n_outputs * nb, *inputs)
        return [self.new_element(raw[i * nb : (i + 1) * nb]) for i in range(n_outputs)]

    # -- arithmetic --

    def _pad(self, limbs: list[Operand], n: int) -> list[Operand]:
        return limbs + [0] * (n - len(limbs))

    def add(self, a: Element, b: Element) -> Element:
        n = max(len(a.limbs), len(b.limbs))
        limbs = [
            self.api.add(x, y)
            for x, y in zip(self._pad(a.limbs, n), self._pad(b.limbs, n))
        ]
        return self._checked(limbs, max(a.bits, b.bits) + 1)

    def neg(self, a: Element) -> Element:
        return Element([self.api.neg(x) for x in a.limbs], a.bits)

    def sub(self, a: Element, b: Element) -> Element:
        return self.add(a, self.neg(b))

    def select(self, bit: Operand, a: Element, b: Element) -> Element:
        """a if bit == 1 else b."""
        n = max(len(a.limbs), len(b.limbs))
        limbs = [
            self.api.select(bit, x, y)
            for x, y in zip(self._pad(a.limbs, n), self._pad(b.limbs, n))
        ]
        return Element(limbs, max(a.bits, b.bits))

    def mul_no_reduce(self, a: Element, b: Element) -> Element:
        out: list[Operand] = [0] * (len(a.limbs) + len(b.limbs) - 1)
        for i, x in enumerate(a.limbs):
            for j, y in enumerate(b.limbs):
                out[i + j] = self.api.add(out[i + j], self.api.mul(x, y))
        growth = min(len(a.limbs), len(b.limbs)).bit_length()
        return self._checked(out, a.bits + b.bits + growth)

    def value(self, a: Element) -> int:
        """Integer (not reduced) represented by ``a``."""
        mod = self.api.field
        return sum(
            _signed(self.api.value(limb), mod) << (self.bits_per_limb * i)
            for i, limb in enumerate(a.limbs)
        )

    # -- assertions --

    def assert_is_equal(self, a: Element, b: Element) -> None:
        """Assert a = b modulo ``modulus``."""
        api, w = self.api, self.bits_per_limb
        diff = self.sub(a, b)
        value_bits = diff.bits + w * (len(diff.limbs) - 1) + 1
        k_bits = max(value_bits - (self.modulus.bit_length() - 1), 1)
        nk = -(-k_bits // w)

        out = api.new_hint(emulated_quotient_hint, 1 + nk, self.modulus, w, nk, *diff.limbs)
        sign, k_limbs = out[0], out[1:]
        for limb in k_limbs:
            api.to_binary(limb, w)
        k = Element([api.select(sign, api.neg(limb), limb) for limb in k_limbs], w)
        modulus = self.modulus_element()
        self.assert_integer_zero(self.sub(diff, self.mul_no_reduce(k, modulus)))

    def assert_integer_zero(self, r: Element) -> None:
        """Assert the integer held by the limbs of ``r`` is zero, not just zero mod p."""
        api, w = self.api, self.bits_per_limb
        carry_bits = max(r.bits - w + 2, 1)
        carries = api.new_hint(emulated_carries_hint, len(r.limbs) - 1, w, *r.limbs)
        prev: Operand = 0
        for i, limb in enumerate(r.limbs):
            t = api.add(limb, prev)
            if i == len(r.limbs) - 1:
                api.assert_is_equal(t, 0)
                break
            carry = carries[i]
            api.assert_is_equal(t, api.mul(carry, 1 << w))
            api.to_binary(api.add(carry, 1 << carry_bits), carry_bits + 1)
            prev = carry
