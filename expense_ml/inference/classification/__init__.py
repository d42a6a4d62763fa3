"""Expense category classification.

Components:
- tokenize: text normalisation shared by training and prediction
- NaiveBayesClassifier: local model trained from the user's choices
- ExternalClassifier adapters: pretrained model behind ``classify(text)``
- AdaptiveEnsemble: combines both and adapts their weights online
"""

from .classifiers import (
    ExternalClassifier,
    HuggingFaceExternalClassifier,
    NaiveBayesClassifier,
    NullExternalClassifier,
    load_external_classifier,
    normalize_log_probabilities,
)
from .ensemble import (
    AdaptiveEnsemble,
    EnsembleConfig,
    combine_predictions,
    fallback_prediction,
)
from .preprocessing import tokenize
from .result import (
    CategoryPrediction,
    EnsemblePrediction,
    EnsembleStats,
    ModelPrediction,
    ModelWeights,
    NaiveBayesStats,
)
from .weights import WeightPolicy, adapt_weights

__all__ = [
    # Orchestration
    "AdaptiveEnsemble",
    "EnsembleConfig",
    "WeightPolicy",
    "adapt_weights",
    "combine_predictions",
    "fallback_prediction",
    # Classifiers
    "ExternalClassifier",
    "HuggingFaceExternalClassifier",
    "NaiveBayesClassifier",
    "NullExternalClassifier",
    "load_external_classifier",
    "normalize_log_probabilities",
    "tokenize",
    # Result types
    "CategoryPrediction",
    "EnsemblePrediction",
    "EnsembleStats",
    "ModelPrediction",
    "ModelWeights",
    "NaiveBayesStats",
]
