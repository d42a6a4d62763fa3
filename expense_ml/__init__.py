"""Adaptive expense categorisation and spending forecast."""

__version__ = "0.1.0"

from expense_ml.inference import (  # noqa: E402
    AdaptiveEnsemble,
    EnsemblePrediction,
    ForecastEstimator,
    ForecastResult,
    NaiveBayesClassifier,
    SharedInfrastructure,
    tokenize,
)

__all__ = [
    "AdaptiveEnsemble",
    "EnsemblePrediction",
    "ForecastEstimator",
    "ForecastResult",
    "NaiveBayesClassifier",
    "SharedInfrastructure",
    "__version__",
    "tokenize",
]
