"""Inference module: category classification and spending forecast."""

from __future__ import annotations

from .classification import (
    AdaptiveEnsemble,
    CategoryPrediction,
    EnsemblePrediction,
    EnsembleStats,
    NaiveBayesClassifier,
    NaiveBayesStats,
    tokenize,
)
from .forecast import ForecastEstimator, ForecastResult, daily_totals
from .shared import SharedInfrastructure

__all__ = [
    "AdaptiveEnsemble",
    "CategoryPrediction",
    "EnsemblePrediction",
    "EnsembleStats",
    "ForecastEstimator",
    "ForecastResult",
    "NaiveBayesClassifier",
    "NaiveBayesStats",
    "SharedInfrastructure",
    "daily_totals",
    "tokenize",
]
