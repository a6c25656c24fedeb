"""
Tests for ProbabilityVector.

Core claims:
    - The alphabet is terminals, functions, then the constant marker, fixed
    - A written weight reads back exactly; the threshold never touches it
    - Values outside [0, 1] and foreign symbols are rejected
    - Sampling is reproducible from the rng state and returns None when
      every weight is zero
"""

import random

import pytest
from hypothesis import given
from hypothesis import strategies as st

from pptree.core.vector import ERC, ProbabilityVector, UnknownSymbolError


def make_vector(threshold=0.05):
    return ProbabilityVector(["A", "B"], ["+", "-"], threshold)


# ── Unit tests ───────────────────────────────────────────────────────────────

class TestAlphabet:
    def test_order_is_terminals_functions_marker(self):
        assert make_vector().symbols == ("A", "B", "+", "-", ERC)

    def test_marker_not_duplicated(self):
        v = ProbabilityVector(["A", ERC], ["+"])
        assert v.symbols == ("A", ERC, "+")

    def test_starts_at_zero(self):
        assert all(w == 0.0 for w in make_vector().weights.values())

    def test_none_sets_rejected(self):
        with pytest.raises(ValueError):
            ProbabilityVector(None, ["+"])

    def test_bad_threshold_rejected(self):
        with pytest.raises(ValueError):
            ProbabilityVector(["A"], [], 1.5)


class TestProbabilityOf:
    def test_set_then_get(self):
        v = make_vector()
        v.set_probability_of("A", 0.3)
        assert v.probability_of("A") == 0.3

    def test_stored_weight_not_floored(self):
        v = make_vector(threshold=0.05)
        v.set_probability_of("B", 0.01)
        assert v.probability_of("B") == 0.01
        assert v.thresholded("B") == 0.05

    def test_thresholded_above_floor(self):
        v = make_vector(threshold=0.05)
        v.set_probability_of("A", 0.4)
        assert v.thresholded("A") == 0.4

    def test_out_of_range_rejected(self):
        v = make_vector()
        with pytest.raises(ValueError):
            v.set_probability_of("A", 1.5)
        with pytest.raises(ValueError):
            v.set_probability_of("A", -0.1)

    def test_unknown_symbol_rejected(self):
        v = make_vector()
        with pytest.raises(UnknownSymbolError):
            v.probability_of("Z")
        with pytest.raises(UnknownSymbolError):
            v.set_probability_of("Z", 0.5)

    def test_unknown_symbol_is_value_error(self):
        assert issubclass(UnknownSymbolError, ValueError)

    def test_empty_symbol_rejected(self):
        with pytest.raises(ValueError):
            make_vector().probability_of("")

    def test_min_threshold_accessor(self):
        assert make_vector(0.2).get_min_threshold() == 0.2


class TestConstant:
    def test_unset_by_default(self):
        assert make_vector().get_constant() is None

    def test_set_constant_independent_of_weights(self):
        v = make_vector()
        v.set_constant(-42.5)
        assert v.get_constant() == -42.5
        assert v.probability_of(ERC) == 0.0


class TestSample:
    def test_all_zero_returns_none(self):
        assert make_vector().sample(random.Random(1)) is None

    def test_point_mass_always_drawn(self):
        v = make_vector()
        v.set_probability_of("-", 1.0)
        rng = random.Random(7)
        assert all(v.sample(rng) == "-" for _ in range(50))

    def test_zero_weight_never_drawn(self):
        v = make_vector()
        v.set_probability_of("A", 0.5)
        v.set_probability_of("+", 0.5)
        rng = random.Random(3)
        draws = {v.sample(rng) for _ in range(200)}
        assert draws <= {"A", "+"}
        assert draws == {"A", "+"}

    def test_unnormalized_weights_allowed(self):
        v = make_vector()
        v.set_probability_of("A", 0.1)
        v.set_probability_of("B", 0.1)
        rng = random.Random(0)
        assert v.sample(rng) in ("A", "B")

    def test_same_seed_same_draws(self):
        v = make_vector()
        for name in v.symbols:
            v.set_probability_of(name, 0.2)
        r1, r2 = random.Random(99), random.Random(99)
        assert [v.sample(r1) for _ in range(30)] == [v.sample(r2) for _ in range(30)]


class TestSerialization:
    def test_dict_round_trip(self):
        v = make_vector(0.1)
        v.set_probability_of("A", 0.25)
        v.set_probability_of("+", 0.75)
        v.set_constant(0.5)
        restored = ProbabilityVector.from_dict(v.to_dict())
        assert restored.weights == v.weights
        assert restored.constant == 0.5
        assert restored.min_threshold == 0.1
        assert restored.symbols == v.symbols

    def test_simplified_skips_zero_weights(self):
        v = make_vector()
        v.set_probability_of("A", 1.0)
        assert "A" in v.simplified()
        assert "B" not in v.simplified()

    def test_str_lists_every_symbol(self):
        text = str(make_vector())
        for name in ("A", "B", "+", "-", ERC):
            assert name in text


# ── Property-based tests ─────────────────────────────────────────────────────

class TestVectorProperties:

    @given(st.sampled_from(["A", "B", "+", "-", ERC]),
           st.floats(min_value=0.0, max_value=1.0))
    def test_write_read_is_lossless(self, symbol, value):
        v = make_vector(threshold=0.3)
        v.set_probability_of(symbol, value)
        assert v.probability_of(symbol) == value
        assert v.thresholded(symbol) == max(value, 0.3)

    @given(st.lists(st.floats(min_value=0.0, max_value=1.0), min_size=5, max_size=5),
           st.integers(min_value=0, max_value=2 ** 32))
    def test_draw_has_positive_weight(self, weights, seed):
        v = make_vector()
        for name, w in zip(v.symbols, weights):
            v.set_probability_of(name, w)
        drawn = v.sample(random.Random(seed))
        if sum(weights) == 0:
            assert drawn is None
        else:
            assert v.probability_of(drawn) > 0
