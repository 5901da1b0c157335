"""Tests for loop lengths (braid_entropy.lengths).

Reference loops (n = punctures, coordinates [a…, b…]):

* (0, 0, 1, 0),  n=4 — round loop around punctures 1, 2
* (0, 0, -1, -1), n=4 — basepoint multiloop of a 3-strand braid
* (1, 0),        n=3 — loop around 1 and 3, passing below 2
"""

import math

import numpy as np
import pytest

from braid_entropy.errors import BadLengthFlagError, NegativeLengthError
from braid_entropy.lengths import (
    LENGTH_FUNCTIONS,
    LengthType,
    intaxis,
    intersection_numbers,
    l2norm,
    loop_length,
    minlength,
)


def _ab(v):
    v = np.asarray(v, dtype=float)
    m = v.size // 2
    return v[:m], v[m:]


# ═══════════════════════════════════════════════════════════════════
# 1. Metrics on reference loops
# ═══════════════════════════════════════════════════════════════════

class TestIntersectionNumbers:

    def test_round_loop(self):
        nu = intersection_numbers(*_ab([0, 0, 1, 0]))
        np.testing.assert_array_equal(nu, [2, 0, 0])

    def test_basepoint_multiloop(self):
        nu = intersection_numbers(*_ab([0, 0, -1, -1]))
        np.testing.assert_array_equal(nu, [0, 2, 4])

    def test_count_is_n_minus_1(self):
        assert intersection_numbers(*_ab(np.zeros(10))).size == 6

    def test_never_negative(self):
        rng = np.random.default_rng(0)
        for _ in range(50):
            nu = intersection_numbers(*_ab(rng.integers(-5, 6, size=8)))
            assert np.all(nu >= 0)


class TestMetrics:

    @pytest.mark.parametrize("v,expected", [
        ([0, 0, 1, 0], 2.0),
        ([0, 0, -1, -1], 4.0),
        ([1, 0], 4.0),
        ([0, 0, 0, -1], 2.0),
    ])
    def test_intaxis(self, v, expected):
        assert intaxis(*_ab(v)) == pytest.approx(expected)

    @pytest.mark.parametrize("v,expected", [
        ([0, 0, 1, 0], 2.0),
        ([0, 0, -1, -1], 6.0),
        ([1, 0], 4.0),
    ])
    def test_minlength(self, v, expected):
        assert minlength(*_ab(v)) == pytest.approx(expected)

    def test_l2norm(self):
        assert l2norm(*_ab([3, 0, 0, 4])) == pytest.approx(5.0)
        assert l2norm(*_ab([0, 0, -1, -1])) == pytest.approx(math.sqrt(2))

    def test_empty_coordinates(self):
        a, b = np.zeros(0), np.zeros(0)
        assert intaxis(a, b) == 0.0
        assert minlength(a, b) == 0.0
        assert l2norm(a, b) == 0.0

    @pytest.mark.parametrize("fn", [intaxis, minlength, l2norm])
    def test_homogeneous(self, fn):
        a, b = _ab([1, -2, 3, 0.5])
        assert fn(2 * a, 2 * b) == pytest.approx(2 * fn(a, b))

    @pytest.mark.parametrize("fn", [intaxis, minlength, l2norm])
    def test_nonnegative(self, fn):
        rng = np.random.default_rng(1)
        for _ in range(50):
            assert fn(*_ab(rng.normal(size=6))) >= 0


# ═══════════════════════════════════════════════════════════════════
# 2. loop_length dispatch & validation
# ═══════════════════════════════════════════════════════════════════

class TestLengthType:

    def test_integer_flags(self):
        assert LengthType.coerce(0) is LengthType.INTAXIS
        assert LengthType.coerce(1) is LengthType.MINLENGTH
        assert LengthType.coerce(2) is LengthType.L2

    def test_names(self):
        assert LengthType.coerce("intaxis") is LengthType.INTAXIS
        assert LengthType.coerce("MinLength") is LengthType.MINLENGTH
        assert LengthType.coerce("l2norm") is LengthType.L2

    def test_member_passthrough(self):
        assert LengthType.coerce(LengthType.L2) is LengthType.L2

    def test_integral_numbers_accepted(self):
        assert LengthType.coerce(2.0) is LengthType.L2
        assert LengthType.coerce(np.int64(1)) is LengthType.MINLENGTH

    @pytest.mark.parametrize("bad", [5, -1, 3, "trains", None, 2.7, 0.5,
                                     True, False, float("nan")])
    def test_unknown_raises(self, bad):
        with pytest.raises(BadLengthFlagError):
            LengthType.coerce(bad)


class TestLoopLength:

    def test_dispatch(self):
        a, b = _ab([0, 0, -1, -1])
        assert loop_length(a, b, 0) == intaxis(a, b)
        assert loop_length(a, b, 1) == minlength(a, b)
        assert loop_length(a, b, 2) == l2norm(a, b)

    def test_pure(self):
        a, b = _ab([1, -2, 0.5, 3])
        for kind in LengthType:
            assert loop_length(a, b, kind) == loop_length(a, b, kind)
        np.testing.assert_array_equal(np.concatenate([a, b]), [1, -2, 0.5, 3])

    def test_unsupported_flag_raises(self):
        a, b = _ab([1, 0])
        with pytest.raises(BadLengthFlagError):
            loop_length(a, b, 5)

    @pytest.mark.parametrize("flag", [2.7, True, np.True_])
    def test_non_integral_or_boolean_flag_raises(self, flag):
        a, b = _ab([1, 0])
        with pytest.raises(BadLengthFlagError):
            loop_length(a, b, flag)

    def test_negative_metric_raises(self, monkeypatch):
        monkeypatch.setitem(LENGTH_FUNCTIONS, LengthType.L2, lambda a, b: -1e-12)
        a, b = _ab([1, 0])
        with pytest.raises(NegativeLengthError, match="never be negative"):
            loop_length(a, b, LengthType.L2)

    def test_negative_is_not_clamped(self, monkeypatch):
        monkeypatch.setitem(LENGTH_FUNCTIONS, LengthType.MINLENGTH,
                            lambda a, b: -3.0)
        a, b = _ab([1, 0])
        with pytest.raises(ArithmeticError):
            loop_length(a, b, "minlength")

    def test_zero_is_allowed(self):
        a, b = _ab([0, 0])
        assert loop_length(a, b, LengthType.L2) == 0.0
