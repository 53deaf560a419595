"""In-circuit verification of hinted scalar decompositions.

Hint outputs are only handed to the multiplier wrapped in the verified
types below, which are produced together with the constraints proving the
decomposition relation.
"""

from __future__ import annotations

from dataclasses import dataclass

from hinted_glv.frontend.api import Builder, Operand, Variable
from hinted_glv.frontend.emulated import Element, EmulatedField
from hinted_glv.lattice.glv import check_endomorphism_field, get_glv_params
from hinted_glv.scalarmul.hints import (
    decompose,
    half_gcd,
    half_gcd_zz2,
    half_gcd_zz2_emulated,
)


@dataclass(frozen=True)
class VerifiedScalarSplit:
    """Bits of s1 and |s2| with s1 + s2*s = k*order proven in-circuit."""

    s1_bits: list[Variable]
    s2_bits: list[Variable]
    overflow_bit: Variable


@dataclass(frozen=True)
class VerifiedZZ2Decomposition:
    """Bits of |u1|, |u2|, |v1|, |v2| and their sign bits.

    u1 + lambda*u2 + s*(v1 + lambda*v2) = 0 mod order has been proven on the
    signed values these bits and signs encode.
    """

    bits: tuple[list[Variable], list[Variable], list[Variable], list[Variable]]
    signs: tuple[Variable, Variable, Variable, Variable]
    nbits: int


def zz2_nbits(order: int) -> int:
    # |u1, u2, v1, v2| <= 256 * 2^(1/4) * order^(1/4)
    return order.bit_length() // 4 + 9


def decompose_scalar(api: Builder, scalar: Operand, order: int) -> VerifiedScalarSplit:
    """Hint (s1, s2) with s1 + s2*scalar = 0 mod order and prove it.

    s1 + s2*scalar = k*order is checked as an integer identity over 64-bit
    limbs, with scalar taken as its canonical representative and |k| range
    checked, so a k solving it only modulo the native field is rejected.
    """
    s1, s2, bit, k = api.new_hint(half_gcd, 4, scalar, order)

    n = (order.bit_length() + 1) // 2
    s1_bits = api.to_binary(s1, n)
    s2_bits = api.to_binary(s2, n)
    api.assert_is_boolean(bit)
    # with s2 = 0 every window selects the identity, whatever Q is
    api.assert_is_different(s2, 0)

    # |k| <= |s2|*scalar/order + 1 and scalar < field
    k_bits = n + api.field.bit_length() - order.bit_length() + 2
    k_abs_bits = api.to_binary(api.select(bit, api.neg(k), k), k_bits)

    # bit == 0: s1 + |s2|*s - |k|*order = 0
    # bit == 1: s1 - |s2|*s + |k|*order = 0
    field = EmulatedField(api, order)
    term = field.sub(
        field.mul_no_reduce(field.from_bits(s2_bits), emulated_scalar(api, field, scalar)),
        field.mul_no_reduce(field.from_bits(k_abs_bits), field.modulus_element()),
    )
    field.assert_integer_zero(
        field.add(field.from_bits(s1_bits), field.select(bit, field.neg(term), term))
    )

    return VerifiedScalarSplit(s1_bits=s1_bits, s2_bits=s2_bits, overflow_bit=bit)


def emulated_scalar(api: Builder, field: EmulatedField, s: Operand) -> Element:
    """Bring the native scalar into the emulated field.

    The limbs come from a hint, so they are range checked, recomposed and
    tied back to ``s``; the canonicity check rules out the representative
    s + p, which differs from s modulo the group order.
    """
    limbs = api.new_hint(decompose, field.nb_limbs, s)
    bits: list[Variable] = []
    for limb in limbs:
        bits.extend(api.to_binary(limb, field.bits_per_limb))
    api.assert_binary_less_or_equal(bits, api.field - 1)
    recomposed: Operand = 0
    for i, limb in enumerate(limbs):
        recomposed = api.add(recomposed, api.mul(limb, 1 << (field.bits_per_limb * i)))
    api.assert_is_equal(recomposed, s)
    return Element(list(limbs), field.bits_per_limb)


def _assert_zz2_relation(
    field: EmulatedField,
    u1: Element,
    u2: Element,
    v1: Element,
    v2: Element,
    lambda_: Element,
    s: Element,
) -> None:
    # u1 + λ * u2 + s * (v1 + λ * v2) == 0 mod r
    lhs = field.add(field.mul_no_reduce(u2, lambda_), u1)
    tmp = field.add(field.mul_no_reduce(v2, lambda_), v1)
    lhs = field.add(lhs, field.mul_no_reduce(tmp, s))
    field.assert_is_equal(lhs, field.zero())


def check_half_gcd_zz2(api: Builder, s: Operand, lambda_: int) -> list[Element]:
    """Hint the signed decomposition as emulated elements and prove the relation."""
    check_endomorphism_field(api.field)
    order = get_glv_params().order
    sapi = EmulatedField(api, order)

    # native input, non-native outputs
    sd = sapi.new_hint_with_native_input(half_gcd_zz2_emulated, 4, s, lambda_)
    _assert_zz2_relation(
        sapi, *sd, sapi.new_element(lambda_), emulated_scalar(api, sapi, s)
    )
    return sd


def decompose_scalar_zz2(api: Builder, s: Operand, lambda_: int) -> VerifiedZZ2Decomposition:
    """One hint call for magnitudes and signs, verified on the signed values."""
    check_endomorphism_field(api.field)
    order = get_glv_params().order
    out = api.new_hint(half_gcd_zz2, 8, s, lambda_)
    magnitudes, signs = out[:4], out[4:]

    n = zz2_nbits(order)
    bits = tuple(api.to_binary(m, n) for m in magnitudes)
    for sign in signs:
        api.assert_is_boolean(sign)
    # v = 0 makes every window pick a multiple of P only, whatever Q is. A
    # non-zero v this short has norm below the order, so v1 + lambda*v2 != 0
    api.assert_is_different(api.add(magnitudes[2], api.mul(magnitudes[3], 1 << n)), 0)

    sapi = EmulatedField(api, order)
    signed = [
        sapi.select(sign, sapi.neg(e), e)
        for e, sign in zip((sapi.from_bits(b) for b in bits), signs)
    ]
    _assert_zz2_relation(
        sapi, *signed, sapi.new_element(lambda_), emulated_scalar(api, sapi, s)
    )
    return VerifiedZZ2Decomposition(bits=bits, signs=tuple(signs), nbits=n)
