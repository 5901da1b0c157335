"""Topological entropy of a braid by iterated loop stretching.

The braid acts on a loop, the loop gets longer, and the exponential
growth rate of its length is the entropy.  To avoid overflow the
coordinates are renormalised by the previous length before every
pass, so each iteration directly yields the per-pass growth factor::

    u   ← u / L            discount ← discount / L
    u   ← β · u            (one full pass of the generator sequence)
    L   ← |u| − discount
    E_k ← ln L

The iteration stops once ``|E_k − E_{k−1}| < tol`` held ``nconv`` times
in a row, or after ``maxit`` passes.

Discount
--------
Only the ``intaxis`` length uses a discount: the loop crosses the real
axis ``n − 1`` times that do not grow with the braid.  When the initial
loop is the basepoint (fundamental) multiloop it carries one extra
puncture, so the discount drops by one more.  The discount is rescaled
by the same divisor as the coordinates, keeping ``discount / L``
meaningful across renormalisations.

Usage
-----
>>> from braid_entropy import entropy
>>> res = entropy([1, -2])            # σ1 σ2⁻¹ on 3 strands
>>> res.entropy                       # ≈ 0.962424 = ln((3 + √5) / 2)
>>> res.loop                          # projective loop, |loop| = 1

Low-level driver (injectable generator action, explicit debug level):

>>> from braid_entropy.entropy import iterate_entropy
>>> r = iterate_entropy([], [1, 0], maxit=5, nconvreq=1, tol=1e-9)
>>> r.iterations, r.entropy           # (2, 0.0)
"""

from __future__ import annotations

import logging
import math
import warnings
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence, Tuple, Union

import numpy as np

from .config import DEFAULT_SETTINGS, SettingsRegistry
from .coords import LoopCoords, fundamental_loop
from .errors import (
    BadArgumentError,
    DegenerateLoopError,
    NonConvergenceWarning,
)
from .lengths import LengthType, loop_length
from .update_rules import GeneratorAction, apply_braid_word, validate_word

logger = logging.getLogger(__name__)

__all__ = [
    "eqfuzzy",
    "IterationResult",
    "EntropyResult",
    "iterate_entropy",
    "default_maxit",
    "entropy",
    "ftbe",
]

LengthSpec = Union[LengthType, int, str]


def eqfuzzy(x: float, y: float, tol: float) -> bool:
    """``|x − y| < tol``."""
    return abs(x - y) < tol


# ═══════════════════════════════════════════════════════════════════
# Results
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class IterationResult:
    """Outcome of :func:`iterate_entropy`.

    ``iterations`` follows the historical convention: the index of the
    pass on which the streak completed, or ``maxit + 1`` when the budget
    ran out.  ``coords`` are the final (renormalised, transformed)
    coordinates in the flat ``[a…, b…]`` layout and ``length`` their
    discounted length.
    """

    entropy: float
    iterations: int
    coords: np.ndarray
    length: float
    converged: bool
    history: Tuple[float, ...] = ()


@dataclass(frozen=True)
class EntropyResult:
    """Entropy estimate for one braid, with the parameters that produced it."""

    entropy: float
    iterations: int
    n: int
    maxit: int = 0
    tol: float = 0.0
    nconv: int = 0
    length_type: LengthType = LengthType.L2
    converged: bool = True
    loop: Optional[np.ndarray] = field(default=None, repr=False)

    def __float__(self) -> float:
        return float(self.entropy)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-safe dict."""
        return {
            "entropy": float(self.entropy),
            "iterations": int(self.iterations),
            "n": int(self.n),
            "maxit": int(self.maxit),
            "tol": float(self.tol),
            "nconv": int(self.nconv),
            "length_type": self.length_type.name.lower(),
            "converged": bool(self.converged),
            "loop": None if self.loop is None else self.loop.tolist(),
        }

    def summary(self) -> str:
        """One-line human-readable description."""
        status = "converged" if self.converged else "NOT converged"
        return (f"entropy={self.entropy:.10g} ({status}, "
                f"{self.iterations} it / maxit={self.maxit}, "
                f"tol={self.tol:.1e}, nconv={self.nconv}, "
                f"length={self.length_type.name.lower()}, n={self.n})")


# ═══════════════════════════════════════════════════════════════════
# Core iteration
# ═══════════════════════════════════════════════════════════════════

def _check_length(value: float, it: int) -> float:
    if not value > 0:
        raise DegenerateLoopError(
            f"Loop length {value!r} at iteration {it} cannot be "
            "renormalised (must be positive).")
    return value


def _initial_discount(kind: LengthType, n: int, is_fundamental: bool) -> float:
    # intaxis discount is (# braid punctures − 1); the basepoint loop
    # has one puncture more than the braid.
    if kind is not LengthType.INTAXIS:
        return 0.0
    return n - (1.0 if is_fundamental else 0.0) - 1.0


def iterate_entropy(
    word: Sequence[int],
    coords: Sequence[float],
    maxit: int,
    nconvreq: int,
    tol: float,
    length_type: LengthSpec = LengthType.L2,
    is_fundamental: bool = False,
    *,
    action: GeneratorAction = apply_braid_word,
    debug_level: Optional[int] = None,
) -> IterationResult:
    """Iterate *word* on a loop until its log-growth rate settles.

    Parameters
    ----------
    word : sequence of int
        Generator sequence; ``+i`` is σ_i, ``−i`` is σ_i⁻¹.
    coords : array_like
        Flat even-length Dynnikov vector ``[a…, b…]`` (or one 1×N row).
        Not modified; the iteration works on a copy.
    maxit : int
        Maximum number of passes (≥ 1).
    nconvreq : int
        Consecutive passes that must agree within *tol* (≥ 1).
    tol : float
        Absolute tolerance on successive log-growth values.  ``0``
        means run exactly *maxit* passes.
    length_type : LengthType, int or str
        Length metric, fixed for the whole call.
    is_fundamental : bool
        *coords* is the basepoint multiloop (one extra puncture).
    action : callable
        Generator action ``action(word, n, a, b)`` mutating ``a``/``b``.
    debug_level : int, optional
        0 silent, 1 log broken streaks, 2 log every pass.  Defaults to
        ``DEFAULT_SETTINGS["debug.level"]``.

    Raises
    ------
    BadArgumentError
        Bad vector shape, generator out of range, or bad parameters.
    BadLengthFlagError
        Unsupported *length_type*.
    NegativeLengthError
        A length metric returned a negative value.
    DegenerateLoopError
        The discounted length reached zero.
    """
    if debug_level is None:
        debug_level = int(DEFAULT_SETTINGS["debug.level"])
    if int(maxit) < 1:
        raise BadArgumentError(f"maxit must be >= 1, got {maxit}")
    if int(nconvreq) < 1:
        raise BadArgumentError(f"nconvreq must be >= 1, got {nconvreq}")
    if not tol >= 0:
        raise BadArgumentError(f"tol must be >= 0, got {tol}")
    maxit, nconvreq = int(maxit), int(nconvreq)

    u = LoopCoords.from_flat(coords)
    n = u.n_punctures
    w = validate_word(word, n)
    kind = LengthType.coerce(length_type)

    discount = _initial_discount(kind, n, is_fundamental)

    current = _check_length(loop_length(u.a, u.b, kind) - discount, 0)

    nconv = 0
    entr = entr0 = -1.0
    history = []
    converged = False
    for it in range(1, maxit + 1):
        u.scale(current)
        discount /= current

        action(w, n, u.a, u.b)

        current = _check_length(loop_length(u.a, u.b, kind) - discount, it)
        entr = math.log(current)
        history.append(entr)

        if debug_level >= 2:
            logger.debug("  iteration %d  entr=%.10e  diff=%.4e",
                         it, entr, entr - entr0)

        if eqfuzzy(entr, entr0, tol):
            nconv += 1
            if nconv >= nconvreq:
                converged = True
                break
        elif nconv > 0:
            if debug_level >= 1:
                logger.info("Converged %d time(s) in a row (< %d)",
                            nconv, nconvreq)
            nconv = 0

        entr0 = entr
    else:
        it = maxit + 1

    return IterationResult(
        entropy=entr,
        iterations=it,
        coords=u.to_flat(),
        length=current,
        converged=converged,
        history=tuple(history),
    )


# ═══════════════════════════════════════════════════════════════════
# High-level API
# ═══════════════════════════════════════════════════════════════════

def default_maxit(n: int, tol: float,
                  settings: SettingsRegistry = DEFAULT_SETTINGS) -> int:
    """Iteration budget from the spectral gap of the psi braids.

    Each pass gains roughly ``coeff · n⁻³`` decimal digits for the
    lowest-entropy braids on *n* strands.
    """
    spgap = float(settings["entropy.spectral_gap_coeff"]) * n ** -3
    maxit = (int(math.ceil(-math.log10(tol) / spgap))
             + int(settings["entropy.maxit_margin"]))
    # at least one pass, even for tol > 1 on many strands
    return max(maxit, 1)


def _strand_count(w: np.ndarray, n: Optional[int]) -> int:
    if n is not None:
        return int(n)
    return int(np.max(np.abs(w))) + 1 if w.size else 0


def entropy(
    word: Sequence[int],
    n: Optional[int] = None,
    *,
    tol: Optional[float] = None,
    maxit: Optional[int] = None,
    nconv: Optional[int] = None,
    length: Optional[LengthSpec] = None,
    finite: bool = False,
    settings: SettingsRegistry = DEFAULT_SETTINGS,
    debug_level: Optional[int] = None,
) -> EntropyResult:
    """Topological entropy of the braid *word* on *n* strands.

    More precisely, the maximum growth rate of a loop under iteration
    of the braid.  If the iteration fails to converge (``tol > 0``) the
    braid is most likely finite-order, a :class:`NonConvergenceWarning`
    is issued and an entropy of zero is returned.

    Parameters
    ----------
    word : sequence of int
        Generator sequence.
    n : int, optional
        Number of strands; defaults to ``max|word| + 1``.
    tol : float, optional
        Absolute tolerance (default ``settings["entropy.tol"]``).
    maxit : int, optional
        Iteration budget; default from :func:`default_maxit`.
    nconv : int, optional
        Consecutive convergences required (default 3).
    length : {"intaxis", "minlength", "l2"} or 0/1/2, optional
        Loop length; only affects finite-iteration results.
    finite : bool
        Run exactly *maxit* passes without a convergence test.
    """
    w = np.asarray(word).reshape(-1)
    n = _strand_count(w, n)
    tol = float(settings["entropy.tol"] if tol is None else tol)
    nconv = int(settings["entropy.nconv"] if nconv is None else nconv)
    kind = LengthType.coerce(
        settings["entropy.length_type"] if length is None else length)
    if debug_level is None:
        debug_level = int(settings["debug.level"])

    # Trivial and 2-strand braids have zero entropy.
    if w.size == 0 or n < 3:
        return EntropyResult(entropy=0.0, iterations=0, n=n, tol=tol,
                             nconv=nconv, length_type=kind)

    w = validate_word(w, n)

    if finite:
        tol = 0.0
    if tol == 0 and (maxit is None or maxit <= 0):
        raise BadArgumentError(
            "Must specify either tolerance>0 or maximum iterations.")
    if maxit is None:
        maxit = default_maxit(n, tol, settings)

    if debug_level >= 1:
        logger.info("TOL = %.1e \t MAXIT = %d \t NCONV = %d \t LOOPLENGTH = %d",
                    tol, maxit, nconv, int(kind))

    u = fundamental_loop(n)
    res = iterate_entropy(w, u.to_flat(), maxit, nconv, tol, kind, True,
                          debug_level=debug_level)

    entr = res.entropy
    converged = res.converged
    if tol > 0:
        if not converged:
            warnings.warn(
                "Failed to converge to requested tolerance; braid is likely "
                "finite-order or has low entropy.  Returning zero entropy.",
                NonConvergenceWarning, stacklevel=2)
            entr = 0.0
        elif debug_level >= 1:
            logger.info("Converged %d time(s) in a row after %d iterations",
                        nconv, res.iterations)
    else:
        # Finite mode never expects convergence.
        converged = False

    return EntropyResult(
        entropy=entr,
        iterations=res.iterations,
        n=n,
        maxit=maxit,
        tol=tol,
        nconv=nconv,
        length_type=kind,
        converged=converged,
        loop=res.coords / np.linalg.norm(res.coords),
    )


_FTBE_METHODS: Dict[str, str] = {
    "proj": "proj",
    "entropy": "proj",
    "nonproj": "nonproj",
    "complexity": "nonproj",
}


def _raw_stretch(w: np.ndarray, n: int, kind: LengthType) -> float:
    """``ln(|β·l| − d) − ln(|l| − d)`` on unrenormalised coordinates."""
    u = fundamental_loop(n)
    discount = _initial_discount(kind, u.n_punctures, True)
    before = _check_length(loop_length(u.a, u.b, kind) - discount, 0)
    apply_braid_word(w, u.n_punctures, u.a, u.b)
    after = _check_length(loop_length(u.a, u.b, kind) - discount, 1)
    return math.log(after) - math.log(before)


def ftbe(
    word: Sequence[int],
    tcross: Sequence[float],
    n: Optional[int] = None,
    *,
    T: Optional[float] = None,
    base: Optional[float] = None,
    length: LengthSpec = LengthType.INTAXIS,
    method: str = "proj",
    debug_level: Optional[int] = None,
) -> float:
    """Finite Time Braiding Exponent of a braid built from trajectory data.

    ``E = (1/T) · ln(|β·l| / |l|)`` where ``l`` is the basepoint
    multiloop.

    Parameters
    ----------
    word : sequence of int
        Generator sequence.
    tcross : sequence of float
        Crossing time of each generator; non-decreasing.
    n : int, optional
        Number of strands; defaults to ``max|word| + 1``.
    T : float, optional
        Length of the time interval; defaults to
        ``max(tcross) − min(tcross)``.
    base : float, optional
        Logarithm base (natural log if omitted).
    length : LengthType, int or str
        Loop length, ``intaxis`` by default.
    method : {"proj", "nonproj"}
        ``"proj"`` (alias ``"entropy"``) measures the stretch with one
        renormalised pass of :func:`iterate_entropy`, which never
        overflows.  ``"nonproj"`` (alias ``"complexity"``) acts on the
        raw coordinates and takes the difference of logarithms; exact
        up to the logarithm, but the coordinates grow with the braid.
    """
    key = str(method).strip().lower()
    if key not in _FTBE_METHODS:
        raise BadArgumentError(
            f"Unknown ftbe method {method!r}. "
            f"Supported: {sorted(_FTBE_METHODS)}")
    method = _FTBE_METHODS[key]

    w = np.asarray(word).reshape(-1)
    t = np.asarray(tcross, dtype=float).reshape(-1)
    if t.size != w.size:
        raise BadArgumentError(
            f"Must have as many crossing times as generators "
            f"({t.size} != {w.size}).")
    if np.any(np.diff(t) < 0):
        raise BadArgumentError("Crossing times must be non-decreasing.")
    if base is not None and not (base > 0 and base != 1):
        raise BadArgumentError(
            f"base must be positive and different from 1, got {base}")
    if T is None:
        T = float(t.max() - t.min()) if t.size else 0.0
    if not T > 0:
        raise BadArgumentError(f"time interval T must be positive, got {T}")

    n = _strand_count(w, n)
    kind = LengthType.coerce(length)
    if w.size == 0 or n < 3:
        stretch = 0.0
    elif method == "nonproj":
        stretch = _raw_stretch(validate_word(w, n), n, kind)
    else:
        w = validate_word(w, n)
        res = iterate_entropy(w, fundamental_loop(n).to_flat(),
                              maxit=1, nconvreq=1, tol=0.0,
                              length_type=kind, is_fundamental=True,
                              debug_level=debug_level)
        stretch = res.entropy

    if base is not None:
        stretch = stretch / math.log(base)
    return stretch / T
