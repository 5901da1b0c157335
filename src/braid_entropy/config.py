"""SettingsRegistry — the tunable defaults of the entropy iteration.

Every number that :func:`~braid_entropy.entropy.entropy` falls back to
when the caller leaves a parameter unset lives here.  The debug level
is one of them, so repeated or concurrent estimations never share a
mutable verbosity switch.

Usage
-----
>>> from braid_entropy.config import DEFAULT_SETTINGS
>>> DEFAULT_SETTINGS["entropy.nconv"]            # 3
>>> verbose = DEFAULT_SETTINGS.replace({"debug.level": 2}, name="verbose")
>>> from braid_entropy import entropy
>>> entropy([1, -2], settings=verbose).nconv   # 3

The command-line script builds its registry the same way from
``--set KEY=VALUE`` options.
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional, Union

__all__ = [
    "SettingsRegistry",
    "DEFAULT_SETTINGS",
]

Number = Union[int, float]


# ═══════════════════════════════════════════════════════════════════
# SettingsRegistry
# ═══════════════════════════════════════════════════════════════════

class SettingsRegistry:
    """Read-only table of dotted setting keys and their numeric values.

    Parameters
    ----------
    data : mapping of str to int or float
        ``{"section.name": value, ...}``; copied on construction.
    name : str, optional
        Label shown in ``repr`` (e.g. ``"default"``, ``"cli"``).
    """

    def __init__(self, data: Mapping[str, Number], *, name: str = "custom"):
        self._values: Dict[str, Number] = dict(data)
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def __getitem__(self, key: str) -> Number:
        return self._values[key]

    def __setitem__(self, key: str, value: Number):
        raise TypeError(
            f"cannot assign {key!r}: settings are read-only, "
            "derive a new registry with .replace()")

    def __repr__(self) -> str:
        return f"SettingsRegistry({self._name!r}, {len(self._values)} keys)"

    def replace(
        self,
        overrides: Mapping[str, Number],
        *,
        name: Optional[str] = None,
    ) -> "SettingsRegistry":
        """Copy of this registry with the values in *overrides* swapped in.

        Raises
        ------
        KeyError
            An override names a key this registry does not define.
        """
        unknown = sorted(set(overrides) - set(self._values))
        if unknown:
            raise KeyError(
                f"unknown setting(s) {unknown}; "
                f"known: {', '.join(sorted(self._values))}")
        values = dict(self._values)
        values.update(overrides)
        if name is None:
            name = f"{self._name}+"
        return SettingsRegistry(values, name=name)


# ═══════════════════════════════════════════════════════════════════
# DEFAULT_SETTINGS
# ═══════════════════════════════════════════════════════════════════

_DEFAULT_DATA: Dict[str, Number] = {

    # ── entropy — iteration defaults ────────────────────────────
    "entropy.tol": 1e-6,                # absolute tolerance on Δ log-growth
    "entropy.nconv": 3,                 # consecutive convergences required
    "entropy.length_type": 2,           # LengthType.L2

    # maxit = ceil(-log10(tol) / (coeff * n**-3)) + margin; the
    # coefficient is the spectral gap of the psi braids.
    "entropy.spectral_gap_coeff": 19.0,
    "entropy.maxit_margin": 30,

    # ── debug — diagnostics ─────────────────────────────────────
    # 0 silent, 1 broken convergence streaks, 2 every iteration
    "debug.level": 0,
}


DEFAULT_SETTINGS: SettingsRegistry = SettingsRegistry(
    _DEFAULT_DATA, name="default",
)
"""The default settings registry."""
