"""Database repositories for ML storage."""

from .performance import ModelPerformanceRepository
from .word_category import WordCategoryRepository

__all__ = [
    "ModelPerformanceRepository",
    "WordCategoryRepository",
]
