"""Dynnikov coordinate storage for a (multi)loop.

A loop on a disk with ``n`` punctures is encoded by ``2(n - 2)`` real
numbers, split into two equal halves::

    u = [a_1, …, a_m, b_1, …, b_m]      m = n - 2

The formulas in :mod:`~braid_entropy.lengths` and
:mod:`~braid_entropy.update_rules` are written with 1-based indices
(``a_1 … a_m``); storage here is plain 0-based numpy, so ``a_k`` lives
at ``a[k - 1]``.

Usage
-----
>>> u = LoopCoords.from_flat([1, 2, 3, 4])
>>> u.a, u.b                 # (array([1., 2.]), array([3., 4.]))
>>> u.n_punctures            # 4
>>> u.to_flat()              # array([1., 2., 3., 4.])
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np

from .errors import BadArgumentError

__all__ = [
    "LoopCoords",
    "puncture_count",
    "fundamental_loop",
]

ArrayLike = Union[Sequence[float], np.ndarray]


def puncture_count(n_coords: int) -> int:
    """Number of punctures ``n = N/2 + 2`` for ``N`` Dynnikov coordinates."""
    if n_coords % 2 != 0:
        raise BadArgumentError(
            "loop argument should have even number of columns.")
    return n_coords // 2 + 2


@dataclass
class LoopCoords:
    """Mutable pair of half-vectors ``a``, ``b`` of equal length.

    Owned by exactly one estimation; the update rules write into
    ``a`` and ``b`` in place.
    """

    a: np.ndarray
    b: np.ndarray

    def __post_init__(self):
        self.a = np.array(self.a, dtype=float).reshape(-1)
        self.b = np.array(self.b, dtype=float).reshape(-1)
        if self.a.shape != self.b.shape:
            raise BadArgumentError(
                f"a and b must have the same length "
                f"({self.a.size} != {self.b.size})")

    @classmethod
    def from_flat(cls, vector: ArrayLike) -> "LoopCoords":
        """Split a flat ``[a…, b…]`` vector (or a single 1×N row).

        Raises
        ------
        BadArgumentError
            More than one row, rank > 2, or an odd number of entries.
        """
        u = np.array(vector, dtype=float)
        if u.ndim == 2:
            if u.shape[0] != 1:
                raise BadArgumentError("Only one loop at a time.")
            u = u[0]
        elif u.ndim != 1:
            raise BadArgumentError(
                f"loop argument must be a vector, got shape {u.shape}")
        if u.size % 2 != 0:
            raise BadArgumentError(
                "loop argument should have even number of columns.")
        m = u.size // 2
        return cls(u[:m], u[m:])

    def to_flat(self) -> np.ndarray:
        """Inverse of :meth:`from_flat`; returns a fresh ``[a…, b…]`` array."""
        return np.concatenate([self.a, self.b])

    @property
    def m(self) -> int:
        """Length of each half-vector."""
        return int(self.a.size)

    @property
    def n_punctures(self) -> int:
        return puncture_count(2 * self.m)

    def scale(self, divisor: float) -> None:
        """Divide every coordinate by *divisor* in place."""
        self.a /= divisor
        self.b /= divisor


def fundamental_loop(n: int) -> LoopCoords:
    """Basepoint multiloop for an *n*-strand braid.

    An extra puncture (the basepoint) is appended on the right, so the
    loop lives on ``n + 1`` punctures and has ``2(n - 1)`` coordinates
    with ``a = 0``, ``b = -1``.  The braid generators never move the
    basepoint.
    """
    if n < 2:
        raise BadArgumentError(f"need at least 2 strands, got {n}")
    return LoopCoords(np.zeros(n - 1), -np.ones(n - 1))
