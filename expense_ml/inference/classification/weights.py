"""Bounded exponential-moving-average weight adaptation.

Each participant moves towards 1 when it was right and towards 0 when it was
wrong, independently of the other one:

    correct: w' = w + lr * (1 - w)
    wrong:   w' = w - lr * w

The pair is then renormalised to sum to one and clamped to
[min_weight, max_weight]. Clamping can break the sum, so clamp + renormalise
is repeated until both constraints hold.
"""

from dataclasses import dataclass

from .result import ModelWeights

LEARNING_RATE = 0.1
MIN_WEIGHT = 0.15
MAX_WEIGHT = 0.85

_TOLERANCE = 1e-9
_MAX_PASSES = 10


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _ema_step(weight: float, correct: bool, learning_rate: float) -> float:
    if correct:
        return weight + learning_rate * (1.0 - weight)
    return weight - learning_rate * weight


def _within(value: float, low: float, high: float) -> bool:
    return low - _TOLERANCE <= value <= high + _TOLERANCE


@dataclass(frozen=True)
class WeightPolicy:
    learning_rate: float = LEARNING_RATE
    min_weight: float = MIN_WEIGHT
    max_weight: float = MAX_WEIGHT

    def __post_init__(self) -> None:
        if not 0.0 < self.learning_rate <= 1.0:
            msg = f"learning_rate must be in (0, 1], got {self.learning_rate}"
            raise ValueError(msg)
        # Otherwise no pair summing to one fits inside the bounds
        if not self.min_weight <= 0.5 <= self.max_weight:
            msg = (
                f"weight bounds [{self.min_weight}, {self.max_weight}] "
                "must contain 0.5"
            )
            raise ValueError(msg)

    def clamp_and_normalize(self, external: float, local: float) -> ModelWeights:
        """Enforce bounds and sum-to-one together."""
        low, high = self.min_weight, self.max_weight

        for _ in range(_MAX_PASSES):
            external = _clamp(external, low, high)
            local = _clamp(local, low, high)
            total = external + local
            external, local = external / total, local / total
            if _within(external, low, high) and _within(local, low, high):
                return ModelWeights(external=external, local=local)

        # Repeated passes only converge asymptotically when min + max != 1.
        # With two participants the feasible splits form an interval.
        feasible_low = max(low, 1.0 - high)
        feasible_high = min(high, 1.0 - low)
        external = _clamp(external, feasible_low, feasible_high)
        return ModelWeights(external=external, local=1.0 - external)

    def adapt(
        self,
        weights: ModelWeights,
        external_correct: bool,
        local_correct: bool,
    ) -> ModelWeights:
        """Return the weights after observing one user decision."""
        external = _ema_step(weights.external, external_correct, self.learning_rate)
        local = _ema_step(weights.local, local_correct, self.learning_rate)

        total = external + local
        if total <= 0.0:
            # Only reachable with learning_rate == 1 and both models wrong
            external, local = weights.external, weights.local
            total = external + local
        return self.clamp_and_normalize(external / total, local / total)


def adapt_weights(
    weights: ModelWeights,
    external_correct: bool,
    local_correct: bool,
    learning_rate: float = LEARNING_RATE,
    min_weight: float = MIN_WEIGHT,
    max_weight: float = MAX_WEIGHT,
) -> ModelWeights:
    policy = WeightPolicy(learning_rate, min_weight, max_weight)
    return policy.adapt(weights, external_correct, local_correct)
