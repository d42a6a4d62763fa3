"""Classification result structures."""

from dataclasses import dataclass

from expense_ml.data_models import ModelId


@dataclass(frozen=True)
class CategoryPrediction:
    """Naive Bayes posterior for one category."""

    category: str
    probability: float


@dataclass(frozen=True)
class NaiveBayesStats:
    vocabulary_size: int
    category_count: int
    total_word_count: int


@dataclass(frozen=True)
class ModelPrediction:
    """Prediction from a single ensemble participant."""

    model_name: ModelId
    category: str
    confidence: float
    weight: float = 0.0


@dataclass(frozen=True)
class ModelWeights:
    """Weights snapshot; external + local sums to 1.0."""

    external: float
    local: float

    def for_model(self, model_id: ModelId) -> float:
        return self.external if model_id is ModelId.EXTERNAL else self.local


@dataclass(frozen=True)
class EnsemblePrediction:
    """Final ensemble decision with the per-model breakdown."""

    final_category: str
    confidence: float
    external_prediction: ModelPrediction | None
    local_prediction: ModelPrediction | None
    weights: ModelWeights
    explanation: str
    resolved_by: str  # "agree" | "external" | "local" | "external_only" | ...

    def prediction_for(self, model_id: ModelId) -> ModelPrediction | None:
        if model_id is ModelId.EXTERNAL:
            return self.external_prediction
        return self.local_prediction


@dataclass(frozen=True)
class EnsembleStats:
    """Ensemble statistics for display."""

    external_weight: float
    local_weight: float
    external_accuracy: float
    local_accuracy: float
    external_predictions: int
    local_predictions: int
