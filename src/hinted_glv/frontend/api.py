"""Single-pass, witness-evaluating circuit builder.

Every ``Variable`` carries its concrete value in the native field, so the
circuit is built and solved in one go. Operations count constraints in an
R1CS-like cost model (linear combinations are free, each product, division,
selection, boolean check and equality costs one). A violated assertion does
not stop the build: it is recorded in ``Builder.failures`` and the circuit
reports itself unsatisfied.
"""

from __future__ import annotations

import logging
from typing import Callable, Protocol, Union

from hinted_glv.errors import HintError, UnsatisfiedConstraintError
from hinted_glv.frontend.hints import hint_name
from hinted_glv.types import BuilderConfig, HintFn

_logger = logging.getLogger(__name__)


class Variable:
    """A wire of the circuit with its assigned value."""

    __slots__ = ("index", "value")

    def __init__(self, index: int, value: int) -> None:
        self.index = index
        self.value = value

    def __repr__(self) -> str:
        return f"Variable(#{self.index}={self.value})"


Operand = Union[Variable, int]


class Circuit(Protocol):
    def define(self, api: Builder) -> None: ...


class Builder:
    """Constraint system API over the native field ``config.modulus``."""

    def __init__(self, config: BuilderConfig | None = None) -> None:
        self.config = config or BuilderConfig()
        self.nb_constraints = 0
        self.nb_variables = 0
        self.nb_hints = 0
        self.failures: list[str] = []
        self._deferred: list[Callable[[Builder], None]] = []
        self._committed = False

    @property
    def field(self) -> int:
        return self.config.modulus

    # -- values --

    def value(self, x: Operand) -> int:
        if isinstance(x, Variable):
            return x.value
        if isinstance(x, int):
            return x % self.field
        raise TypeError(f"expected Variable or int, got {type(x).__name__}")

    def signed_value(self, x: Operand) -> int:
        """Value in (-p/2, p/2]."""
        v = self.value(x)
        return v - self.field if v > self.field // 2 else v

    def _new(self, value: int) -> Variable:
        self.nb_variables += 1
        return Variable(self.nb_variables, value % self.field)

    def secret(self, value: int) -> Variable:
        """Allocate a witness input."""
        return self._new(value)

    def fail(self, message: str) -> None:
        _logger.warning("constraint not satisfied: %s", message)
        self.failures.append(message)
        if self.config.strict:
            raise UnsatisfiedConstraintError(message)

    # -- arithmetic --

    def add(self, a: Operand, b: Operand, *more: Operand) -> Variable:
        return self._new(sum(self.value(x) for x in (a, b, *more)))

    def sub(self, a: Operand, b: Operand, *more: Operand) -> Variable:
        return self._new(self.value(a) - sum(self.value(x) for x in (b, *more)))

    def neg(self, a: Operand) -> Variable:
        return self._new(-self.value(a))

    def mul(self, a: Operand, b: Operand, *more: Operand) -> Variable:
        acc = self.value(a)
        variable = isinstance(a, Variable)
        for x in (b, *more):
            if variable and isinstance(x, Variable):
                self.nb_constraints += 1
            variable = variable or isinstance(x, Variable)
            acc = acc * self.value(x) % self.field
        return self._new(acc)

    def div_unchecked(self, a: Operand, b: Operand) -> Variable:
        """a/b without asserting b != 0; 0/0 evaluates to 0."""
        num, den = self.value(a), self.value(b)
        if isinstance(b, Variable):
            self.nb_constraints += 1
        if den == 0:
            if num != 0:
                self.fail("div_unchecked: division of a non-zero value by zero")
            return self._new(0)
        return self._new(num * pow(den, -1, self.field))

    # -- selection --

    def assert_is_boolean(self, b: Operand) -> None:
        self.nb_constraints += 1
        if self.value(b) not in (0, 1):
            self.fail(f"assert_is_boolean: {self.value(b)} is not a bit")

    def select(self, b: Operand, x: Operand, y: Operand) -> Variable:
        """x if b == 1 else y."""
        self.assert_is_boolean(b)
        self.nb_constraints += 1
        return self._new(self.value(x) if self.value(b) == 1 else self.value(y))

    def lookup2(
        self,
        b0: Operand,
        b1: Operand,
        i0: Operand,
        i1: Operand,
        i2: Operand,
        i3: Operand,
    ) -> Variable:
        """Return i[b0 + 2*b1]."""
        self.assert_is_boolean(b0)
        self.assert_is_boolean(b1)
        self.nb_constraints += 2
        index = (self.value(b0) & 1) + 2 * (self.value(b1) & 1)
        return self._new(self.value((i0, i1, i2, i3)[index]))

    # -- binary decomposition --

    def to_binary(self, x: Operand, n: int | None = None) -> list[Variable]:
        """Little-endian ``n``-bit decomposition of x; fails if x >= 2^n."""
        nbits = self.field.bit_length()
        if n is None:
            n = nbits
        v = self.value(x)
        self.nb_constraints += n + 1
        if n >= nbits:
            # bits must encode the canonical representative
            self.nb_constraints += n
        if v >> n:
            self.fail(f"to_binary: value does not fit in {n} bits")
        return [self._new((v >> i) & 1) for i in range(n)]

    def from_binary(self, bits: list[Operand]) -> Variable:
        for b in bits:
            self.assert_is_boolean(b)
        return self._new(sum(self.value(b) << i for i, b in enumerate(bits)))

    # -- assertions --

    def assert_is_equal(self, a: Operand, b: Operand) -> None:
        self.nb_constraints += 1
        if self.value(a) != self.value(b):
            self.fail(f"assert_is_equal: {self.value(a)} != {self.value(b)}")

    def assert_is_different(self, a: Operand, b: Operand) -> None:
        """Assert a != b, proven with a hinted inverse of a - b."""
        self.nb_constraints += 1
        if self.value(a) == self.value(b):
            self.fail(f"assert_is_different: both sides are {self.value(a)}")

    def assert_is_less_or_equal(self, a: Operand, bound: int) -> None:
        self.nb_constraints += self.field.bit_length()
        if self.value(a) > bound:
            self.fail(f"assert_is_less_or_equal: {self.value(a)} > {bound}")

    def assert_binary_less_or_equal(self, bits: list[Operand], bound: int) -> None:
        """Assert the integer encoded by little-endian ``bits`` is <= bound."""
        self.nb_constraints += len(bits)
        value = sum(self.value(b) << i for i, b in enumerate(bits))
        if value > bound:
            self.fail(f"assert_binary_less_or_equal: {value} > {bound}")

    # -- hints --

    def resolve_hint(self, fn: HintFn) -> HintFn:
        return self.config.hint_overrides.get(hint_name(fn), fn)

    def new_hint(self, fn: HintFn, n_outputs: int, *inputs: Operand) -> list[Variable]:
        """Evaluate ``fn`` outside the circuit; the outputs are unconstrained."""
        name = hint_name(fn)
        values = [self.value(x) for x in inputs]
        outputs = self.resolve_hint(fn)(self.field, values)
        if len(outputs) != n_outputs:
            raise HintError(
                f"hint {name} returned {len(outputs)} outputs, expected {n_outputs}"
            )
        self.nb_hints += 1
        _logger.debug("hint %s: %d inputs -> %d outputs", name, len(values), n_outputs)
        return [self._new(o) for o in outputs]

    # -- lifecycle --

    def defer(self, callback: Callable[[Builder], None]) -> None:
        """Run ``callback`` once the circuit definition is complete."""
        self._deferred.append(callback)

    def commit(self) -> None:
        if self._committed:
            return
        self._committed = True
        for callback in self._deferred:
            callback(self)

    def is_satisfied(self) -> bool:
        self.commit()
        return not self.failures


def solve(circuit: Circuit, config: BuilderConfig | None = None) -> Builder:
    """Build ``circuit`` with its assignment and run the deferred checks."""
    api = Builder(config)
    circuit.define(api)
    api.commit()
    _logger.debug(
        "solved %s: %d constraints, %d failures",
        type(circuit).__name__,
        api.nb_constraints,
        len(api.failures),
    )
    return api
