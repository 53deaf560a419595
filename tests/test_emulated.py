"""Tests for non-native arithmetic and the native-to-emulated scalar bridge."""

from __future__ import annotations

import numpy as np
import pytest

from hinted_glv.curves import native
from hinted_glv.curves.params import BANDERSNATCH, BLS12_381_FR
from hinted_glv.errors import ConfigurationError
from hinted_glv.frontend.api import Builder
from hinted_glv.frontend.emulated import EmulatedField
from hinted_glv.frontend.hints import hint
from hinted_glv.scalarmul.decompose import emulated_scalar
from hinted_glv.types import BuilderConfig

ORDER = BANDERSNATCH.order


@hint
def square_mod_foreign(native_mod, foreign_mod, inputs):
    return [inputs[0] * inputs[0] % foreign_mod]


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def api():
    return Builder()


@pytest.fixture
def field(api):
    return EmulatedField(api, ORDER)


def _limbs(api, value):
    return [api.secret((value >> (64 * i)) & (2**64 - 1)) for i in range(4)]


class TestEmulatedArithmetic:
    def test_constant_value(self, field):
        e = field.new_element(ORDER + 5)
        assert field.value(e) == 5

    def test_product_equality(self, api, field, rng):
        a = native.random_scalar(ORDER, rng)
        b = native.random_scalar(ORDER, rng)
        ea = field.new_element(_limbs(api, a))
        eb = field.new_element(_limbs(api, b))
        ec = field.new_element(_limbs(api, a * b % ORDER))
        field.assert_is_equal(field.mul_no_reduce(ea, eb), ec)
        assert api.is_satisfied()

    def test_wrong_product_fails(self, api, field, rng):
        a = native.random_scalar(ORDER, rng)
        b = native.random_scalar(ORDER, rng)
        ea = field.new_element(_limbs(api, a))
        eb = field.new_element(_limbs(api, b))
        ec = field.new_element(_limbs(api, (a * b + 1) % ORDER))
        field.assert_is_equal(field.mul_no_reduce(ea, eb), ec)
        assert not api.is_satisfied()

    def test_negative_difference(self, api, field):
        a = field.new_element(_limbs(api, 3))
        b = field.new_element(_limbs(api, 10))
        expected = field.new_element(_limbs(api, ORDER - 7))
        field.assert_is_equal(field.sub(a, b), expected)
        assert api.is_satisfied()

    def test_select(self, api, field):
        a = field.new_element(_limbs(api, 3))
        b = field.new_element(_limbs(api, 4))
        assert field.value(field.select(1, a, b)) == 3
        assert field.value(field.select(0, a, b)) == 4

    def test_from_bits(self, api, field):
        value = (1 << 130) + 12345
        bits = api.to_binary(api.secret(value), 140)
        e = field.from_bits(bits)
        assert field.value(e) == value
        assert len(e.limbs) == 3

    def test_zero(self, api, field):
        x = field.new_element(_limbs(api, ORDER - 1))
        field.assert_is_equal(field.add(x, field.new_element(1)), field.zero())
        assert api.is_satisfied()

    def test_integer_zero(self, api, field):
        x = field.new_element(_limbs(api, 2**70 + 3))
        field.assert_integer_zero(field.sub(x, field.new_element(2**70 + 3)))
        assert api.is_satisfied()

    def test_multiple_of_modulus_is_not_integer_zero(self, api, field):
        m = field.modulus_element()
        field.assert_is_equal(m, field.zero())
        assert api.is_satisfied()
        field.assert_integer_zero(m)
        assert not api.is_satisfied()

    def test_limb_range_checked(self, api, field):
        field.new_element([api.secret(2**64), 0, 0, 0])
        assert not api.is_satisfied()

    def test_wrong_limb_count(self, api, field):
        with pytest.raises(ConfigurationError):
            field.new_element([0, 0])

    def test_modulus_too_large(self, api):
        with pytest.raises(ConfigurationError):
            EmulatedField(api, ORDER, nb_limbs=2)

    def test_growth_overflow(self, api, field):
        e = field.new_element(_limbs(api, 5))
        with pytest.raises(ConfigurationError):
            for _ in range(4):
                e = field.mul_no_reduce(e, e)


class TestHintWithNativeInput:
    def test_outputs_are_limbed(self, api, field):
        x = api.secret(ORDER + 3)
        (sq,) = field.new_hint_with_native_input(square_mod_foreign, 1, x)
        assert field.value(sq) == 9
        assert api.nb_hints == 1

    def test_override_by_hint_name(self):
        api = Builder(
            BuilderConfig(hint_overrides={"square_mod_foreign": lambda n, f, xs: [0]})
        )
        field = EmulatedField(api, ORDER)
        (sq,) = field.new_hint_with_native_input(square_mod_foreign, 1, 7)
        assert field.value(sq) == 0


class TestEmulatedScalar:
    def test_bridge(self, api, field, rng):
        s = native.random_scalar(BLS12_381_FR, rng)
        e = emulated_scalar(api, field, api.secret(s))
        assert field.value(e) == s
        assert api.is_satisfied()

    def test_inconsistent_limbs_fail(self):
        api = Builder(
            BuilderConfig(hint_overrides={"decompose": lambda mod, xs: [xs[0] + 1 & (2**64 - 1), 0, 0, 0]})
        )
        field = EmulatedField(api, ORDER)
        emulated_scalar(api, field, api.secret(2**70 + 5))
        assert not api.is_satisfied()

    def test_non_canonical_limbs_fail(self):
        # s + p has the same native value as s but a different residue mod r
        def shifted(mod, xs):
            v = xs[0] + mod
            return [(v >> (64 * i)) & (2**64 - 1) for i in range(4)]

        api = Builder(BuilderConfig(hint_overrides={"decompose": shifted}))
        field = EmulatedField(api, ORDER)
        emulated_scalar(api, field, api.secret(12345))
        assert len(api.failures) == 1
        assert "assert_binary_less_or_equal" in api.failures[0]
