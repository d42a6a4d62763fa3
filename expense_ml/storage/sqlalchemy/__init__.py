"""SQLAlchemy persistence layer for ML storage."""

from .base import Base
from .engine import create_engine, create_session_maker
from .repositories import ModelPerformanceRepository, WordCategoryRepository
from .tables import ModelPerformanceTable, WordCategoryCountTable

__all__ = [
    # Engine
    "create_engine",
    "create_session_maker",
    # Tables
    "Base",
    "ModelPerformanceTable",
    "WordCategoryCountTable",
    # Repositories
    "ModelPerformanceRepository",
    "WordCategoryRepository",
]
