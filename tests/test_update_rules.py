"""Tests for the generator action (braid_entropy.update_rules).

Covers:
1. Hand-computed images of reference loops
2. Group structure — inverses, braid relations, far commutativity
3. Word validation
"""

import numpy as np
import pytest

from braid_entropy.errors import BadArgumentError
from braid_entropy.update_rules import apply_braid_word, validate_word


def _act(word, v):
    """Apply *word* to the flat vector *v*; return the new flat vector."""
    v = np.array(v, dtype=float)
    m = v.size // 2
    a, b = v[:m].copy(), v[m:].copy()
    apply_braid_word(word, m + 2, a, b)
    return np.concatenate([a, b])


def _random_loops(m, count=20, seed=0):
    rng = np.random.default_rng(seed)
    return [rng.integers(-6, 7, size=2 * m).astype(float) for _ in range(count)]


# ═══════════════════════════════════════════════════════════════════
# 1. Reference images
# ═══════════════════════════════════════════════════════════════════

class TestReferenceImages:

    def test_sigma1_on_three_punctures(self):
        np.testing.assert_array_equal(_act([1], [0, -1]), [1, 0])

    def test_sigma1_fixes_round_loop(self):
        # loop around punctures 1, 2 is invariant under their exchange
        np.testing.assert_array_equal(_act([1], [0, 0, 1, 0]), [0, 0, 1, 0])
        np.testing.assert_array_equal(_act([-1], [0, 0, 1, 0]), [0, 0, 1, 0])

    def test_last_generator_fixes_round_loop(self):
        np.testing.assert_array_equal(_act([3], [0, 0, 0, -1]), [0, 0, 0, -1])

    def test_middle_generator(self):
        np.testing.assert_array_equal(_act([2], [1, 0, 0, 0]), [0, 1, 0, 0])
        np.testing.assert_array_equal(_act([-2], [0, 1, 0, 0]), [1, 0, 0, 0])
        np.testing.assert_array_equal(_act([2], [0, 0, -1, -1]), [0, 1, -2, 0])

    def test_fibonacci_growth(self):
        # σ1 σ2⁻¹ on 3 punctures: coordinates follow the Fibonacci numbers
        v = np.array([0.0, -1.0])
        seen = []
        for _ in range(3):
            v = _act([1, -2], v)
            seen.append(v.tolist())
        assert seen == [[1, -1], [3, -2], [8, -5]]

    def test_sigma1_squared_grows_linearly(self):
        v = _act([1, 1, 1, 1], [0, -1])
        np.testing.assert_array_equal(v, [1, 3])

    def test_empty_word_is_identity(self):
        np.testing.assert_array_equal(_act([], [1, 2, 3, 4]), [1, 2, 3, 4])

    def test_in_place(self):
        a, b = np.array([0.0]), np.array([-1.0])
        apply_braid_word([1], 3, a, b)
        assert (a[0], b[0]) == (1.0, 0.0)


# ═══════════════════════════════════════════════════════════════════
# 2. Group structure
# ═══════════════════════════════════════════════════════════════════

class TestGroupStructure:

    @pytest.mark.parametrize("gen", [1, 2, 3, 4])
    def test_inverse_cancels(self, gen):
        for v in _random_loops(3, seed=gen):
            np.testing.assert_allclose(_act([gen, -gen], v), v)
            np.testing.assert_allclose(_act([-gen, gen], v), v)

    @pytest.mark.parametrize("i", [1, 2, 3])
    def test_braid_relation(self, i):
        # σ_i σ_{i+1} σ_i = σ_{i+1} σ_i σ_{i+1} on 5 punctures
        for v in _random_loops(3, seed=10 + i):
            np.testing.assert_allclose(
                _act([i, i + 1, i], v), _act([i + 1, i, i + 1], v))

    def test_braid_relation_reference(self):
        v = [0, 0, 1, 0]
        np.testing.assert_array_equal(_act([1, 2, 1], v), [0, 0, -1, 1])
        np.testing.assert_array_equal(_act([2, 1, 2], v), [0, 0, -1, 1])

    def test_far_generators_commute(self):
        for v in _random_loops(3, seed=99):
            np.testing.assert_allclose(_act([1, 3], v), _act([3, 1], v))
            np.testing.assert_allclose(_act([-1, 4], v), _act([4, -1], v))

    def test_positively_homogeneous(self):
        for v in _random_loops(2, seed=7):
            np.testing.assert_allclose(
                _act([1, -2, 3], 2.5 * v), 2.5 * _act([1, -2, 3], v))


# ═══════════════════════════════════════════════════════════════════
# 3. validate_word
# ═══════════════════════════════════════════════════════════════════

class TestValidateWord:

    def test_valid(self):
        w = validate_word([1, -2, 3], 4)
        assert w.tolist() == [1, -2, 3]
        assert w.dtype.kind == "i"

    def test_integral_floats_accepted(self):
        assert validate_word([1.0, -2.0], 3).tolist() == [1, -2]

    def test_empty(self):
        assert validate_word([], 2).size == 0

    def test_zero_generator_raises(self):
        with pytest.raises(BadArgumentError, match="out of range"):
            validate_word([1, 0], 4)

    def test_out_of_range_raises(self):
        with pytest.raises(BadArgumentError, match="out of range"):
            validate_word([4], 4)

    def test_non_integer_raises(self):
        with pytest.raises(BadArgumentError, match="integers"):
            validate_word([1.5], 4)

    def test_too_few_punctures_raise(self):
        with pytest.raises(BadArgumentError, match="at least 3"):
            validate_word([1], 2)
