"""Adaptive two-model ensemble.

Combines the external (pretrained) classifier with the user's own Naive Bayes
model and learns, from the user's final category choices, how much to trust
each of them.

Decision table used by ``combine_predictions``, evaluated in order:

1. both predict the same category  -> that category, fixed high confidence
2. both predict, categories differ -> higher confidence * weight wins,
                                      confidence = winner / sum of scores
3. only one predicts               -> its category, discounted confidence
4. neither predicts                -> default category, fallback confidence
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from expense_ml.data_models import ModelId

from .result import EnsemblePrediction, EnsembleStats, ModelPrediction, ModelWeights
from .weights import WeightPolicy

if TYPE_CHECKING:
    from expense_ml.config.settings import Settings
    from expense_ml.storage.protocols import PerformanceStore

    from .classifiers import ExternalClassifier, NaiveBayesClassifier

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "Other"


@dataclass(frozen=True)
class EnsembleConfig:
    """Fixed confidences and defaults of the combination policy."""

    # The external model exposes no score, so its predictions get a fixed one
    external_confidence: float = 0.8
    agreement_confidence: float = 0.95
    single_model_discount: float = 0.7
    fallback_confidence: float = 0.3
    default_category: str = DEFAULT_CATEGORY
    default_weights: ModelWeights = field(
        default_factory=lambda: ModelWeights(external=0.6, local=0.4)
    )

    @classmethod
    def from_settings(cls, settings: Settings) -> EnsembleConfig:
        return cls(
            external_confidence=settings.external_confidence,
            agreement_confidence=settings.agreement_confidence,
            single_model_discount=settings.single_model_discount,
            fallback_confidence=settings.fallback_confidence,
            default_category=settings.default_category,
            default_weights=ModelWeights(
                external=settings.default_external_weight,
                local=settings.default_local_weight,
            ),
        )


def fallback_prediction(
    weights: ModelWeights,
    config: EnsembleConfig,
    default_category: str | None = None,
    explanation: str = "No prediction available",
    resolved_by: str = "fallback",
) -> EnsemblePrediction:
    return EnsemblePrediction(
        final_category=default_category or config.default_category,
        confidence=config.fallback_confidence,
        external_prediction=None,
        local_prediction=None,
        weights=weights,
        explanation=explanation,
        resolved_by=resolved_by,
    )


def combine_predictions(
    external: ModelPrediction | None,
    local: ModelPrediction | None,
    weights: ModelWeights,
    config: EnsembleConfig | None = None,
    default_category: str | None = None,
) -> EnsemblePrediction:
    """Merge the participants' predictions into one decision."""
    config = config or EnsembleConfig()

    if external is not None and local is not None:
        external = replace(external, weight=weights.for_model(external.model_name))
        local = replace(local, weight=weights.for_model(local.model_name))

        if external.category == local.category:
            return EnsemblePrediction(
                final_category=external.category,
                confidence=config.agreement_confidence,
                external_prediction=external,
                local_prediction=local,
                weights=weights,
                explanation="Both models agree",
                resolved_by="agree",
            )

        external_score = external.confidence * external.weight
        local_score = local.confidence * local.weight
        total = external_score + local_score

        # Ties go to the user's own history
        if external_score > local_score:
            winner, winner_score = external, external_score
            explanation = "External model has higher weighted score"
            resolved_by = "external"
        else:
            winner, winner_score = local, local_score
            explanation = "Your history has higher weighted score"
            resolved_by = "local"

        return EnsemblePrediction(
            final_category=winner.category,
            confidence=winner_score / total if total > 0 else 0.0,
            external_prediction=external,
            local_prediction=local,
            weights=weights,
            explanation=explanation,
            resolved_by=resolved_by,
        )

    if external is not None:
        return EnsemblePrediction(
            final_category=external.category,
            confidence=external.confidence * config.single_model_discount,
            external_prediction=replace(external, weight=1.0),
            local_prediction=None,
            weights=weights,
            explanation="Only external model available (Naive Bayes needs more training)",
            resolved_by="external_only",
        )

    if local is not None:
        return EnsemblePrediction(
            final_category=local.category,
            confidence=local.confidence * config.single_model_discount,
            external_prediction=None,
            local_prediction=replace(local, weight=1.0),
            weights=weights,
            explanation="Only your history available (external model has no prediction)",
            resolved_by="local_only",
        )

    return fallback_prediction(weights, config, default_category)


class AdaptiveEnsemble:
    """Weighted ensemble of the external classifier and Naive Bayes.

    Usage:
        ensemble = AdaptiveEnsemble(external, naive_bayes, performance_store)

        prediction = await ensemble.predict("Netflix subscription")
        # ... user confirms or overrides the suggestion ...
        await ensemble.record_user_choice(text, prediction, "Bills")

    No public method raises: prediction degrades to the fallback decision,
    learning steps are logged and skipped.
    """

    def __init__(
        self,
        external: ExternalClassifier,
        naive_bayes: NaiveBayesClassifier,
        performance_store: PerformanceStore,
        policy: WeightPolicy | None = None,
        config: EnsembleConfig | None = None,
    ):
        self._external = external
        self._naive_bayes = naive_bayes
        self._performance = performance_store
        self.policy = policy or WeightPolicy()
        self.config = config or EnsembleConfig()

    async def predict(
        self,
        text: str,
        default_category: str | None = None,
    ) -> EnsemblePrediction:
        """Suggest a category for ``text``."""
        try:
            weights = await self.current_weights()

            # Both models only read, so they can run side by side
            external, local = await asyncio.gather(
                self._predict_external(text),
                self._predict_local(text),
            )

            prediction = combine_predictions(
                external, local, weights, self.config, default_category
            )
        except Exception:
            logger.exception("Error predicting for %r", text)
            return fallback_prediction(
                self.config.default_weights,
                self.config,
                default_category,
                explanation="Error occurred, using fallback",
                resolved_by="error",
            )

        logger.debug(
            "Predicted %r -> %s (confidence: %.2f, weights: E=%.2f, NB=%.2f, %s)",
            text,
            prediction.final_category,
            prediction.confidence,
            weights.external,
            weights.local,
            prediction.resolved_by,
        )
        return prediction

    async def record_user_choice(
        self,
        text: str,
        prior_prediction: EnsemblePrediction,
        chosen_category: str,
    ) -> None:
        """Learn from the category the user finally saved.

        Updates both performance records, adapts the weights and trains Naive
        Bayes. Each step is attempted even if an earlier one failed.
        """
        external_correct = _was_correct(prior_prediction.external_prediction, chosen_category)
        local_correct = _was_correct(prior_prediction.local_prediction, chosen_category)

        await self._update_performance(ModelId.EXTERNAL, external_correct)
        await self._update_performance(ModelId.LOCAL, local_correct)
        await self._adjust_weights(external_correct, local_correct)

        # The user's choice is the ground truth, whatever the models said
        try:
            await self._naive_bayes.train(text, chosen_category)
        except Exception:
            logger.exception("Error training Naive Bayes on %r", text)

        logger.debug(
            "Learning from %r -> %r (external: %s, NB: %s)",
            text,
            chosen_category,
            "correct" if external_correct else "wrong",
            "correct" if local_correct else "wrong",
        )

    async def current_weights(self) -> ModelWeights:
        """Persisted weights, falling back to the defaults per participant."""
        external_perf = await self._performance.get_performance(ModelId.EXTERNAL)
        local_perf = await self._performance.get_performance(ModelId.LOCAL)
        defaults = self.config.default_weights

        return ModelWeights(
            external=external_perf.current_weight if external_perf else defaults.external,
            local=local_perf.current_weight if local_perf else defaults.local,
        )

    async def get_ensemble_stats(self) -> EnsembleStats:
        defaults = self.config.default_weights
        try:
            external_perf = await self._performance.get_performance(ModelId.EXTERNAL)
            local_perf = await self._performance.get_performance(ModelId.LOCAL)
        except Exception:
            logger.exception("Error reading ensemble stats")
            external_perf = local_perf = None

        return EnsembleStats(
            external_weight=external_perf.current_weight if external_perf else defaults.external,
            local_weight=local_perf.current_weight if local_perf else defaults.local,
            external_accuracy=external_perf.accuracy if external_perf else 0.0,
            local_accuracy=local_perf.accuracy if local_perf else 0.0,
            external_predictions=external_perf.total_count if external_perf else 0,
            local_predictions=local_perf.total_count if local_perf else 0,
        )

    async def _predict_external(self, text: str) -> ModelPrediction | None:
        try:
            category = await asyncio.to_thread(self._external.classify, text)
        except Exception:
            logger.warning("External prediction failed for %r", text, exc_info=True)
            return None

        if not category:
            return None
        return ModelPrediction(
            model_name=ModelId.EXTERNAL,
            category=category,
            confidence=self.config.external_confidence,
        )

    async def _predict_local(self, text: str) -> ModelPrediction | None:
        try:
            top = await self._naive_bayes.top_prediction(text)
        except Exception:
            logger.warning("Naive Bayes prediction failed for %r", text, exc_info=True)
            return None

        if top is None:
            return None
        return ModelPrediction(
            model_name=ModelId.LOCAL,
            category=top.category,
            confidence=top.probability,
        )

    async def _update_performance(self, model_id: ModelId, correct: bool) -> None:
        try:
            if correct:
                await self._performance.increment_correct(model_id)
            else:
                await self._performance.increment_total(model_id)
        except Exception:
            logger.exception("Error updating performance of %s", model_id.value)

    async def _adjust_weights(self, external_correct: bool, local_correct: bool) -> None:
        try:
            old = await self.current_weights()
            new = self.policy.adapt(old, external_correct, local_correct)
            await self._performance.update_weight(ModelId.EXTERNAL, new.external)
            await self._performance.update_weight(ModelId.LOCAL, new.local)
        except Exception:
            logger.exception("Error adjusting ensemble weights")
            return

        logger.debug(
            "Weights updated: external %.2f -> %.2f, NB %.2f -> %.2f",
            old.external,
            new.external,
            old.local,
            new.local,
        )


def _was_correct(prediction: ModelPrediction | None, chosen_category: str) -> bool:
    return prediction is not None and prediction.category == chosen_category
