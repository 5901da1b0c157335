"""Action of braid generators on Dynnikov coordinates.

The update rules are piecewise-linear in ``(a, b)``; with
``x⁺ = max(x, 0)`` and ``x⁻ = min(x, 0)`` the generator σ_i on a disk
with ``n`` punctures acts as follows (1-based indices).

σ_i, i = 1::

    b'_1 = a_1 + b_1⁺
    a'_1 = −b_1 + (b'_1)⁺

σ_i, i = n−1::

    b'_{n−2} = a_{n−2} + b_{n−2}⁻
    a'_{n−2} = −b_{n−2} + (b'_{n−2})⁻

σ_i, 1 < i < n−1, with c = a_{i−1} − a_i − b_i⁺ + b_{i−1}⁻::

    a'_{i−1} = a_{i−1} − b_{i−1}⁺ − (b_i⁺ + c)⁺
    b'_{i−1} = b_i + c⁻
    a'_i     = a_i − b_i⁻ − (b_{i−1}⁻ − c)⁻
    b'_i     = b_{i−1} − c⁻

σ_i⁻¹ is the mirror image: flip the sign of ``a`` on the way in and on
the way out (see :func:`_apply_inverse`).  Coordinates not listed are
unchanged.

References
----------
Dynnikov (2002); Thiffeault, *Chaos* 20, 017516 (2010);
Hall & Yurttas (2009).
"""

from __future__ import annotations

from typing import Protocol, Sequence

import numpy as np

from .errors import BadArgumentError

__all__ = [
    "GeneratorAction",
    "apply_braid_word",
    "validate_word",
]


class GeneratorAction(Protocol):
    """Anything that applies a full generator sequence to ``(a, b)`` in place."""

    def __call__(self, word: Sequence[int], n: int,
                 a: np.ndarray, b: np.ndarray) -> None:
        ...


def _pos(x: float) -> float:
    return x if x > 0 else 0.0


def _neg(x: float) -> float:
    return x if x < 0 else 0.0


def validate_word(word: Sequence[int], n: int) -> np.ndarray:
    """Return *word* as an int array, checking ``1 ≤ |g| ≤ n − 1``.

    Raises
    ------
    BadArgumentError
        A generator is zero, non-integral, or out of range for *n*.
    """
    w = np.asarray(word)
    if w.size == 0:
        return np.zeros(0, dtype=int)
    if n < 3:
        raise BadArgumentError(
            f"braid generators need at least 3 punctures, got {n}.")
    w = w.reshape(-1)
    if not np.all(np.equal(np.mod(w, 1), 0)):
        raise BadArgumentError("braid word must contain integers only.")
    w = w.astype(int)
    bad = w[(w == 0) | (np.abs(w) > n - 1)]
    if bad.size:
        raise BadArgumentError(
            f"generator(s) {bad.tolist()} out of range for "
            f"{n} punctures (need 1 <= |g| <= {n - 1}).")
    return w


def _apply_positive(i: int, n: int, a: np.ndarray, b: np.ndarray) -> None:
    if i == 1:
        bp = a[0] + _pos(b[0])
        a[0] = -b[0] + _pos(bp)
        b[0] = bp
    elif i == n - 1:
        k = n - 3
        bp = a[k] + _neg(b[k])
        a[k] = -b[k] + _neg(bp)
        b[k] = bp
    else:
        # a_{i-1} -> a[i-2], a_i -> a[i-1]
        j, k = i - 2, i - 1
        a1, a2, b1, b2 = float(a[j]), float(a[k]), float(b[j]), float(b[k])
        c = a1 - a2 - _pos(b2) + _neg(b1)
        a[j] = a1 - _pos(b1) - _pos(_pos(b2) + c)
        b[j] = b2 + _neg(c)
        a[k] = a2 - _neg(b2) - _neg(_neg(b1) - c)
        b[k] = b1 - _neg(c)


def _apply_inverse(i: int, n: int, a: np.ndarray, b: np.ndarray) -> None:
    if i == 1:
        bp = -a[0] + _pos(b[0])
        a[0] = b[0] - _pos(bp)
        b[0] = bp
    elif i == n - 1:
        k = n - 3
        bp = -a[k] + _neg(b[k])
        a[k] = b[k] - _neg(bp)
        b[k] = bp
    else:
        j, k = i - 2, i - 1
        a1, a2, b1, b2 = float(a[j]), float(a[k]), float(b[j]), float(b[k])
        d = a1 - a2 + _pos(b2) - _neg(b1)
        a[j] = a1 + _pos(b1) + _pos(_pos(b2) - d)
        b[j] = b2 - _pos(d)
        a[k] = a2 + _neg(b2) + _neg(_neg(b1) + d)
        b[k] = b1 + _pos(d)


def apply_braid_word(word: Sequence[int], n: int,
                     a: np.ndarray, b: np.ndarray) -> None:
    """Act with every generator of *word* on ``(a, b)``, left to right.

    ``a`` and ``b`` are float arrays of length ``n - 2`` and are
    overwritten.  Generators are assumed valid (see :func:`validate_word`).
    """
    for g in word:
        g = int(g)
        if g > 0:
            _apply_positive(g, n, a, b)
        elif g < 0:
            _apply_inverse(-g, n, a, b)
