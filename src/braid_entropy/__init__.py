"""braid-entropy: topological entropy of braids from loop stretching.

Iterates the piecewise-linear action of a braid on the Dynnikov
coordinates of a loop, renormalising every pass, and reads off the
asymptotic exponential growth rate of the loop length, i.e. the
topological entropy of the braid (for pseudo-Anosov braids).

The **growth estimator** (:func:`iterate_entropy`) is the numerical
core; :func:`entropy` wraps it with sensible defaults and the
basepoint multiloop, and :func:`ftbe` gives the finite-time braiding
exponent of braids built from trajectory data.
"""
from .errors import (
    BraidEntropyError, BadArgumentError, BadLengthFlagError,
    NegativeLengthError, DegenerateLoopError, NonConvergenceWarning,
)
from .config import SettingsRegistry, DEFAULT_SETTINGS
from .coords import LoopCoords, puncture_count, fundamental_loop
from .lengths import (
    LengthType, LENGTH_FUNCTIONS,
    intaxis, minlength, l2norm, intersection_numbers, loop_length,
)
from .update_rules import GeneratorAction, apply_braid_word, validate_word
from .entropy import (
    eqfuzzy, IterationResult, EntropyResult,
    iterate_entropy, default_maxit, entropy, ftbe,
)

__version__ = "0.1.0"

__all__ = [
    # Errors
    "BraidEntropyError", "BadArgumentError", "BadLengthFlagError",
    "NegativeLengthError", "DegenerateLoopError", "NonConvergenceWarning",
    # Settings
    "SettingsRegistry", "DEFAULT_SETTINGS",
    # Coordinate store
    "LoopCoords", "puncture_count", "fundamental_loop",
    # Length oracle
    "LengthType", "LENGTH_FUNCTIONS",
    "intaxis", "minlength", "l2norm", "intersection_numbers", "loop_length",
    # Generator action
    "GeneratorAction", "apply_braid_word", "validate_word",
    # Growth estimator
    "eqfuzzy", "IterationResult", "EntropyResult",
    "iterate_entropy", "default_maxit", "entropy", "ftbe",
]
