from .external import (
    ExternalClassifier,
    HuggingFaceExternalClassifier,
    NullExternalClassifier,
    load_external_classifier,
)
from .naive_bayes import NaiveBayesClassifier, normalize_log_probabilities

__all__ = [
    "ExternalClassifier",
    "HuggingFaceExternalClassifier",
    "NaiveBayesClassifier",
    "NullExternalClassifier",
    "load_external_classifier",
    "normalize_log_probabilities",
]
