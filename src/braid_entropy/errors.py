"""Exception taxonomy for the entropy iteration.

Every fatal condition aborts the whole computation; no partial result
is returned.  Non-convergence is *not* an error; it is reported
through :attr:`IterationResult.converged` and, at the high-level
:func:`~braid_entropy.entropy.entropy` API, a ``warnings.warn``.

The concrete classes also derive from the matching builtin
(``ValueError`` / ``ArithmeticError``) so callers that only know the
builtins still catch them.
"""

from __future__ import annotations

__all__ = [
    "BraidEntropyError",
    "BadArgumentError",
    "BadLengthFlagError",
    "NegativeLengthError",
    "DegenerateLoopError",
    "NonConvergenceWarning",
]


class BraidEntropyError(Exception):
    """Base class for all errors raised by braid_entropy."""


class BadArgumentError(BraidEntropyError, ValueError):
    """Invalid input shape or parameter (odd length, several loops, …)."""


class BadLengthFlagError(BraidEntropyError, ValueError):
    """Unrecognised loop-length selector."""


class NegativeLengthError(BraidEntropyError, ArithmeticError):
    """A length metric returned a negative value (defect in the metric)."""


class DegenerateLoopError(BraidEntropyError, ArithmeticError):
    """The loop length collapsed to zero, so it cannot be renormalised."""


class NonConvergenceWarning(RuntimeWarning):
    """The iteration exhausted ``maxit`` without a converged streak."""
