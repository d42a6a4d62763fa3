"""Multinomial Naive Bayes over word/category counters.

The classifier keeps no state of its own: every call reads the latest
counts from the store, so training done by one request is visible to the
next one immediately.

Scoring, for each trained category c and the token set T of the text:

    log P(T | c) = sum over t in T of ln((count(t, c) + alpha) / (total(c) + alpha * V))

with V the vocabulary size across all categories. The prior is uniform
(log prior 0), so category base rates are not modelled. Log scores are turned
into a distribution with the log-sum-exp trick.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from expense_ml.inference.classification.preprocessing import tokenize
from expense_ml.inference.classification.result import (
    CategoryPrediction,
    NaiveBayesStats,
)

if TYPE_CHECKING:
    from expense_ml.storage.protocols import WordCategoryStore

logger = logging.getLogger(__name__)

LAPLACE_ALPHA = 1.0


def normalize_log_probabilities(log_probs: dict[str, float]) -> list[CategoryPrediction]:
    """Convert per-category log scores into a sorted probability distribution."""
    if not log_probs:
        return []

    max_log_prob = max(log_probs.values())
    exp_probs = {c: math.exp(lp - max_log_prob) for c, lp in log_probs.items()}
    total = sum(exp_probs.values())

    predictions = [CategoryPrediction(c, p / total) for c, p in exp_probs.items()]
    predictions.sort(key=lambda p: p.probability, reverse=True)
    return predictions


class NaiveBayesClassifier:
    """Local classifier learning from the user's own category choices."""

    name = "naive_bayes"

    def __init__(self, store: WordCategoryStore, alpha: float = LAPLACE_ALPHA):
        self._store = store
        self.alpha = alpha

    async def train(self, text: str, category: str) -> None:
        """Count every token of ``text`` towards ``category``.

        Best effort: store failures are logged, never raised.
        """
        words = tokenize(text)
        if not words or not category:
            logger.debug("Nothing to train from %r -> %r", text, category)
            return

        try:
            for word in words:
                await self._store.increment_count(word, category)
        except Exception:
            logger.exception("Error training on %r", text)
            return

        logger.debug("Trained: %r -> %r (%d words)", text, category, len(words))

    async def predict(self, text: str) -> list[CategoryPrediction]:
        """Posterior over all trained categories, most likely first.

        Returns an empty list for texts without tokens, before any training,
        and when the store fails.
        """
        words = tokenize(text)
        if not words:
            logger.debug("No words to predict from: %r", text)
            return []

        try:
            categories = await self._store.get_all_categories()
            if not categories:
                logger.debug("No training data available yet")
                return []

            vocabulary_size = await self._store.get_vocabulary_size()
            log_probs = {
                category: await self._log_likelihood(words, category, vocabulary_size)
                for category in categories
            }
        except Exception:
            logger.exception("Error predicting for %r", text)
            return []

        predictions = normalize_log_probabilities(log_probs)
        logger.debug("Predicted for %r: %s", text, predictions[:2])
        return predictions

    async def top_prediction(self, text: str) -> CategoryPrediction | None:
        predictions = await self.predict(text)
        return predictions[0] if predictions else None

    async def _log_likelihood(
        self,
        words: set[str],
        category: str,
        vocabulary_size: int,
    ) -> float:
        log_prior = 0.0
        total_in_category = await self._store.get_total_count_for_category(category) or 0
        denominator = total_in_category + self.alpha * vocabulary_size

        log_likelihood = 0.0
        for word in words:
            word_count = await self._store.get_count(word, category) or 0
            log_likelihood += math.log((word_count + self.alpha) / denominator)

        return log_prior + log_likelihood

    async def get_model_stats(self) -> NaiveBayesStats:
        try:
            vocabulary_size = await self._store.get_vocabulary_size()
            categories = await self._store.get_all_categories()
            total_words = 0
            for category in categories:
                total_words += await self._store.get_total_count_for_category(category) or 0
        except Exception:
            logger.exception("Error reading Naive Bayes stats")
            return NaiveBayesStats(vocabulary_size=0, category_count=0, total_word_count=0)

        return NaiveBayesStats(
            vocabulary_size=vocabulary_size,
            category_count=len(categories),
            total_word_count=total_words,
        )

    async def is_trained(self) -> bool:
        try:
            return await self._store.get_vocabulary_size() > 0
        except Exception:
            logger.exception("Error checking Naive Bayes training state")
            return False

    async def top_words(self, category: str, limit: int = 10) -> list[tuple[str, int]]:
        """Most frequent words learned for ``category``."""
        try:
            rows = await self._store.get_top_words_for_category(category, limit)
        except Exception:
            logger.exception("Error reading top words for %r", category)
            return []
        return [(row.word, row.count) for row in rows]

    async def reset(self) -> None:
        """Forget everything learned so far."""
        try:
            await self._store.delete_all()
        except Exception:
            logger.exception("Error resetting Naive Bayes counters")
            return
        logger.info("Naive Bayes counters reset")
