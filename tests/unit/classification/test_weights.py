"""Tests for bounded weight adaptation."""

import math

import pytest

from expense_ml.inference.classification import ModelWeights, WeightPolicy, adapt_weights


def _assert_valid(weights: ModelWeights, policy: WeightPolicy) -> None:
    assert math.isclose(weights.external + weights.local, 1.0)
    assert policy.min_weight - 1e-9 <= weights.external <= policy.max_weight + 1e-9
    assert policy.min_weight - 1e-9 <= weights.local <= policy.max_weight + 1e-9


class TestAdaptWeights:
    def test_external_correct_local_wrong(self) -> None:
        weights = adapt_weights(ModelWeights(0.6, 0.4), external_correct=True, local_correct=False)

        assert math.isclose(weights.external, 0.64)
        assert math.isclose(weights.local, 0.36)

    def test_both_correct(self) -> None:
        weights = adapt_weights(ModelWeights(0.6, 0.4), external_correct=True, local_correct=True)

        assert math.isclose(weights.external, 0.64 / 1.1)
        assert math.isclose(weights.local, 0.46 / 1.1)

    def test_both_wrong_keeps_ratio(self) -> None:
        weights = adapt_weights(ModelWeights(0.6, 0.4), external_correct=False, local_correct=False)

        assert math.isclose(weights.external, 0.6)
        assert math.isclose(weights.local, 0.4)

    def test_converges_to_max_weight(self) -> None:
        weights = ModelWeights(0.6, 0.4)
        for _ in range(200):
            weights = adapt_weights(weights, external_correct=False, local_correct=True)

        assert math.isclose(weights.local, 0.85)
        assert math.isclose(weights.external, 0.15)

    @pytest.mark.parametrize(
        "outcomes",
        [
            [(True, False)] * 50,
            [(False, True)] * 50,
            [(True, True), (False, False), (True, False), (False, True)] * 20,
        ],
    )
    def test_bounds_and_sum_hold_after_any_sequence(self, outcomes) -> None:
        policy = WeightPolicy()
        weights = ModelWeights(0.6, 0.4)
        for external_correct, local_correct in outcomes:
            weights = policy.adapt(weights, external_correct, local_correct)
            _assert_valid(weights, policy)


class TestClampAndNormalize:
    def test_already_valid(self) -> None:
        weights = WeightPolicy().clamp_and_normalize(0.5, 0.5)

        assert weights == ModelWeights(0.5, 0.5)

    def test_clamps_out_of_range(self) -> None:
        policy = WeightPolicy()
        weights = policy.clamp_and_normalize(0.95, 0.05)

        assert math.isclose(weights.external, 0.85)
        assert math.isclose(weights.local, 0.15)

    def test_bounds_not_summing_to_one(self) -> None:
        policy = WeightPolicy(learning_rate=0.1, min_weight=0.2, max_weight=0.7)

        weights = policy.clamp_and_normalize(0.9, 0.1)

        _assert_valid(weights, policy)
        assert math.isclose(weights.external, 0.7)


class TestWeightPolicyValidation:
    @pytest.mark.parametrize(("min_weight", "max_weight"), [(0.1, 0.4), (0.6, 0.9)])
    def test_rejects_bounds_without_a_valid_split(
        self, min_weight: float, max_weight: float
    ) -> None:
        with pytest.raises(ValueError, match="must contain 0.5"):
            WeightPolicy(learning_rate=0.1, min_weight=min_weight, max_weight=max_weight)

    def test_rejects_learning_rate_out_of_range(self) -> None:
        with pytest.raises(ValueError, match="learning_rate"):
            WeightPolicy(learning_rate=0.0)

    def test_asymmetric_bounds_stay_valid(self) -> None:
        policy = WeightPolicy(learning_rate=0.3, min_weight=0.1, max_weight=0.6)
        weights = ModelWeights(0.5, 0.5)

        for _ in range(30):
            weights = policy.adapt(weights, external_correct=True, local_correct=False)
            _assert_valid(weights, policy)

        assert math.isclose(weights.external, 0.6)
