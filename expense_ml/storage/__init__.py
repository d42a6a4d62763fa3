"""ML storage layer.

This module provides:
- `protocols`: the store interfaces the classifiers depend on
- `memory`: in-memory implementations (tests, throwaway sessions)
- `sqlalchemy`: PostgreSQL/SQLite persistence layer (tables, repositories)

Note: Domain models are in `expense_ml.data_models`.
"""

from expense_ml.data_models import ModelId, ModelPerformance, WordCategoryCount

from .factory import RepositoryFactory
from .memory import InMemoryPerformanceStore, InMemoryWordCategoryStore
from .protocols import PerformanceStore, WordCategoryStore
from .sqlalchemy import (
    Base,
    ModelPerformanceRepository,
    ModelPerformanceTable,
    WordCategoryCountTable,
    WordCategoryRepository,
    create_engine,
    create_session_maker,
)

__all__ = [
    # Domain models (Pydantic)
    "ModelId",
    "ModelPerformance",
    "WordCategoryCount",
    # Protocols
    "PerformanceStore",
    "WordCategoryStore",
    # In-memory stores
    "InMemoryPerformanceStore",
    "InMemoryWordCategoryStore",
    # SQLAlchemy tables
    "Base",
    "ModelPerformanceTable",
    "WordCategoryCountTable",
    # Database
    "create_engine",
    "create_session_maker",
    # Repositories
    "ModelPerformanceRepository",
    "RepositoryFactory",
    "WordCategoryRepository",
]
