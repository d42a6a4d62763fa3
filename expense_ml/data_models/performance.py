"""Per-model ensemble performance domain model."""

from enum import Enum

from pydantic import BaseModel, Field


class ModelId(str, Enum):
    """The two fixed ensemble participants.

    Values match the model names used by existing stores.
    """

    EXTERNAL = "TFLite"
    LOCAL = "NaiveBayes"


class ModelPerformance(BaseModel):
    """Running correctness counters and current weight of one participant."""

    model_id: ModelId
    correct_count: int = Field(default=0, ge=0)
    total_count: int = Field(default=0, ge=0)
    current_weight: float = Field(default=0.5, ge=0.0, le=1.0)

    @property
    def accuracy(self) -> float:
        if self.total_count == 0:
            return 0.0
        return self.correct_count / self.total_count
