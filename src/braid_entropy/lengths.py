"""Loop lengths computed from Dynnikov coordinates.

Three measures of how long a loop is, all pure functions of the
coordinate halves ``a`` and ``b`` (each of length ``m = n - 2``):

intaxis      number of intersections with the real axis
             |b₀| + Σ|b_i| + |b_{n-1}| + |a_1| + |a_{n-2}| + Σ|a_{i+1} − a_i|
minlength    length of the tightened loop, punctures a unit apart
             Σ ν_i   (i = 1 … n-1)
l2norm       Euclidean norm of the coordinate vector

with the auxiliary quantities (Hall & Yurttas 2009)

    b₀      = −max_k ( |a_k| + b_k⁺ + Σ_{j<k} b_j )
    b_{n-1} = −b₀ − Σ_j b_j
    ν_i     = −2 b₀ − 2 Σ_{j<i} b_j

:func:`loop_length` is the single dispatch point used by the entropy
iteration.  It validates the selector and refuses negative results:
a negative length means a broken metric, not a numeric edge case.
"""

from __future__ import annotations

import enum
from typing import Callable, Dict, Union

import numpy as np

from .errors import BadLengthFlagError, NegativeLengthError

__all__ = [
    "LengthType",
    "intersection_numbers",
    "intaxis",
    "minlength",
    "l2norm",
    "LENGTH_FUNCTIONS",
    "loop_length",
]


class LengthType(enum.IntEnum):
    """Loop-length selector.  Values match the historical integer flags."""

    INTAXIS = 0
    MINLENGTH = 1
    L2 = 2

    @classmethod
    def coerce(cls, value: Union["LengthType", int, str]) -> "LengthType":
        """Accept a member, its integer flag, or its (case-free) name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            if key in _NAME_ALIASES:
                return _NAME_ALIASES[key]
            raise BadLengthFlagError(
                f"Unknown loop length {value!r}. "
                f"Supported: {sorted(_NAME_ALIASES)}")
        try:
            if isinstance(value, (bool, np.bool_)) or int(value) != value:
                raise ValueError(value)
            return cls(int(value))
        except (TypeError, ValueError, OverflowError):
            raise BadLengthFlagError(
                f"Unsupported loop length flag {value!r}. "
                "Supported flags: 0 (intaxis), 1 (minlength), 2 (l2).")


_NAME_ALIASES: Dict[str, LengthType] = {
    "intaxis": LengthType.INTAXIS,
    "minlength": LengthType.MINLENGTH,
    "l2": LengthType.L2,
    "l2norm": LengthType.L2,
}


# ── auxiliary quantities ─────────────────────────────────────────

def _b0(a: np.ndarray, b: np.ndarray) -> float:
    # Σ_{j<k} b_j for k = 1 … m
    cumb = np.concatenate([[0.0], np.cumsum(b)[:-1]])
    return float(-np.max(np.abs(a) + np.maximum(b, 0.0) + cumb))


def intersection_numbers(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Intersections ν_1 … ν_{n-1} with the vertical lines between punctures."""
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    if a.size == 0:
        return np.zeros(1)
    cumb = np.concatenate([[0.0], np.cumsum(b)])
    return -2.0 * _b0(a, b) - 2.0 * cumb


# ── metrics ──────────────────────────────────────────────────────

def intaxis(a: np.ndarray, b: np.ndarray) -> float:
    """Number of intersections of the loop with the real axis."""
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    if a.size == 0:
        return 0.0
    b0 = _b0(a, b)
    bn1 = -b0 - float(np.sum(b))
    return float(
        abs(b0) + np.sum(np.abs(b)) + abs(bn1)
        + abs(a[0]) + abs(a[-1]) + np.sum(np.abs(np.diff(a)))
    )


def minlength(a: np.ndarray, b: np.ndarray) -> float:
    """Minimal length of the loop, punctures a unit distance apart."""
    return float(np.sum(intersection_numbers(a, b)))


def l2norm(a: np.ndarray, b: np.ndarray) -> float:
    """Euclidean norm of the concatenated coordinates."""
    return float(np.sqrt(np.sum(np.square(a)) + np.sum(np.square(b))))


LENGTH_FUNCTIONS: Dict[LengthType, Callable[[np.ndarray, np.ndarray], float]] = {
    LengthType.INTAXIS: intaxis,
    LengthType.MINLENGTH: minlength,
    LengthType.L2: l2norm,
}
"""Metric lookup used by :func:`loop_length`."""


def loop_length(
    a: np.ndarray,
    b: np.ndarray,
    metric: Union[LengthType, int, str] = LengthType.L2,
) -> float:
    """Length of the loop ``(a, b)`` under *metric*.

    Raises
    ------
    BadLengthFlagError
        *metric* is not one of the three supported selectors.
    NegativeLengthError
        The metric returned a negative number.
    """
    kind = LengthType.coerce(metric)
    value = LENGTH_FUNCTIONS[kind](a, b)
    if value < 0:
        raise NegativeLengthError(
            f"Loop length must never be negative ({kind.name}: {value!r}).")
    return value
