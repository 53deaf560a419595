"""Tests for the circuit builder, hint registry, multiplexer and lookup table."""

from __future__ import annotations

import pytest

from hinted_glv.errors import HintError, UnsatisfiedConstraintError
from hinted_glv.frontend.api import Builder, Variable, solve
from hinted_glv.frontend.hints import get_hint, hint_name, register_hint
from hinted_glv.frontend.lookup import LogDerivTable
from hinted_glv.frontend.selector import mux
from hinted_glv.types import BuilderConfig


@pytest.fixture
def api():
    return Builder()


class TestBuilderArithmetic:
    def test_values_are_reduced(self, api):
        x = api.secret(-1)
        assert x.value == api.field - 1
        assert api.signed_value(x) == -1

    def test_add_sub_mul(self, api):
        a, b = api.secret(6), api.secret(7)
        assert api.value(api.add(a, b, 1)) == 14
        assert api.value(api.sub(a, b)) == api.field - 1
        assert api.value(api.mul(a, b)) == 42

    def test_constraint_counting(self, api):
        a, b = api.secret(3), api.secret(5)
        api.add(a, b)
        api.mul(a, 10)
        assert api.nb_constraints == 0
        api.mul(a, b)
        assert api.nb_constraints == 1

    def test_div_unchecked(self, api):
        a, b = api.secret(10), api.secret(5)
        assert api.value(api.div_unchecked(a, b)) == 2
        assert api.value(api.div_unchecked(0, api.secret(0))) == 0
        assert api.is_satisfied()

    def test_div_nonzero_by_zero_fails(self, api):
        api.div_unchecked(api.secret(1), api.secret(0))
        assert not api.is_satisfied()

    def test_select_and_lookup2(self, api):
        assert api.value(api.select(1, 10, 20)) == 10
        assert api.value(api.select(0, 10, 20)) == 20
        for b0 in (0, 1):
            for b1 in (0, 1):
                assert api.value(api.lookup2(b0, b1, 10, 11, 12, 13)) == 10 + b0 + 2 * b1
        assert api.is_satisfied()

    def test_select_non_boolean_fails(self, api):
        api.select(api.secret(2), 10, 20)
        assert not api.is_satisfied()

    def test_rejects_non_operand(self, api):
        with pytest.raises(TypeError):
            api.value(1.5)


class TestBinary:
    def test_to_binary_little_endian(self, api):
        bits = api.to_binary(api.secret(0b1011), 4)
        assert [b.value for b in bits] == [1, 1, 0, 1]
        assert api.value(api.from_binary(bits)) == 11
        assert api.is_satisfied()

    def test_to_binary_overflow_fails(self, api):
        api.to_binary(api.secret(16), 4)
        assert not api.is_satisfied()

    def test_full_width_decomposition(self, api):
        bits = api.to_binary(api.secret(api.field - 1))
        assert len(bits) == api.field.bit_length()
        assert api.is_satisfied()

    def test_assert_binary_less_or_equal(self, api):
        bits = api.to_binary(api.secret(9), 4)
        api.assert_binary_less_or_equal(bits, 9)
        assert api.is_satisfied()
        api.assert_binary_less_or_equal(bits, 8)
        assert not api.is_satisfied()

    def test_assert_is_different(self, api):
        x = api.secret(5)
        api.assert_is_different(x, 0)
        assert api.is_satisfied()
        api.assert_is_different(x, 5)
        assert any("assert_is_different" in f for f in api.failures)

    def test_assert_is_less_or_equal(self, api):
        api.assert_is_less_or_equal(api.secret(3), 3)
        assert api.is_satisfied()
        api.assert_is_less_or_equal(api.secret(4), 3)
        assert len(api.failures) == 1


class TestFailureModes:
    def test_failures_are_recorded(self, api):
        api.assert_is_equal(1, 2)
        api.assert_is_boolean(3)
        assert len(api.failures) == 2
        assert not api.is_satisfied()

    def test_strict_mode_raises(self):
        api = Builder(BuilderConfig(strict=True))
        with pytest.raises(UnsatisfiedConstraintError):
            api.assert_is_equal(1, 2)

    def test_solve_runs_deferred_checks(self):
        seen = []

        class Circuit:
            def define(self, api):
                api.defer(lambda b: seen.append(b.nb_variables))
                api.secret(1)

        api = solve(Circuit())
        assert seen == [1]
        assert api.is_satisfied()
        # commit is idempotent
        api.commit()
        assert seen == [1]


def double_hint(mod, inputs):
    return [2 * x % mod for x in inputs]


register_hint(double_hint)


class TestHints:
    def test_new_hint(self, api):
        out = api.new_hint(double_hint, 2, api.secret(3), 4)
        assert [o.value for o in out] == [6, 8]
        assert api.nb_hints == 1
        assert all(isinstance(o, Variable) for o in out)

    def test_wrong_output_count(self, api):
        with pytest.raises(HintError):
            api.new_hint(double_hint, 3, 1, 2)

    def test_registry(self):
        assert get_hint("double_hint") is double_hint
        with pytest.raises(HintError):
            get_hint("no_such_hint")

    def test_register_conflict(self):
        def double_hint(mod, inputs):
            return list(inputs)

        with pytest.raises(HintError):
            register_hint(double_hint)

    def test_register_same_function_twice(self):
        register_hint(double_hint)
        assert get_hint(hint_name(double_hint)) is double_hint

    def test_override_by_name(self):
        api = Builder(BuilderConfig(hint_overrides={"double_hint": lambda mod, xs: [0] * len(xs)}))
        out = api.new_hint(double_hint, 1, 5)
        assert out[0].value == 0


class TestMux:
    def test_selects_every_input(self, api):
        inputs = [100 + i for i in range(16)]
        for i in range(16):
            assert api.value(mux(api, api.secret(i), *inputs)) == 100 + i
        assert api.is_satisfied()

    def test_non_power_of_two(self, api):
        assert api.value(mux(api, api.secret(2), 7, 8, 9)) == 9
        assert api.is_satisfied()

    def test_out_of_range_selector_fails(self, api):
        mux(api, api.secret(3), 7, 8, 9)
        assert not api.is_satisfied()

    def test_needs_inputs(self, api):
        with pytest.raises(ValueError):
            mux(api, 0)


class TestLogDerivTable:
    def test_lookup(self, api):
        table = LogDerivTable(api)
        for v in (5, 6, 7, 8):
            table.insert(api.secret(v))
        out = table.lookup(api.secret(2), api.secret(0))
        assert [o.value for o in out] == [7, 5]
        assert api.is_satisfied()

    def test_queries_checked_at_commit(self, api):
        table = LogDerivTable(api)
        table.insert(1)
        table.insert(2)
        table.lookup(api.secret(1))
        before = api.nb_constraints
        api.commit()
        assert api.nb_constraints == before + 2 + 2

    def test_out_of_range_index_fails(self, api):
        table = LogDerivTable(api)
        table.insert(1)
        table.lookup(api.secret(4))
        assert not api.is_satisfied()

    def test_tampered_result_fails(self):
        api = Builder(
            BuilderConfig(hint_overrides={"logderiv_lookup_hint": lambda mod, xs: [42]})
        )
        table = LogDerivTable(api)
        table.insert(1)
        table.insert(2)
        table.lookup(api.secret(0))
        assert not api.is_satisfied()
