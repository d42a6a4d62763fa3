"""Pydantic domain models for ML storage."""

from .expense import Expense
from .performance import ModelId, ModelPerformance
from .word_count import WordCategoryCount

__all__ = [
    "Expense",
    "ModelId",
    "ModelPerformance",
    "WordCategoryCount",
]
