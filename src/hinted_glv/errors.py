"""Exception hierarchy.

Configuration errors are raised as soon as the builder is wired to the
wrong curve or a hint is called with the wrong arity. An invalid witness is
not an error: the violated assertion is recorded on the builder and the
circuit reports itself unsatisfied.
"""

from __future__ import annotations


class HintedGLVError(Exception):
    """Base class for all errors raised by hinted_glv."""


class ConfigurationError(HintedGLVError):
    """The circuit was built against an unsupported curve or modulus."""


class HintError(ConfigurationError):
    """A hint was registered or invoked incorrectly."""


class UnsatisfiedConstraintError(HintedGLVError):
    """A constraint does not hold for the current witness (strict mode only)."""
