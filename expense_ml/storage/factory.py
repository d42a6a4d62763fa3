"""Repository factory for ML storage."""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from expense_ml.data_models import ModelId

from .sqlalchemy.repositories import ModelPerformanceRepository, WordCategoryRepository


class RepositoryFactory:
    """Factory for creating ML repositories from a session maker."""

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        default_weights: dict[ModelId, float] | None = None,
    ):
        self._session_maker = session_maker
        self._default_weights = default_weights

    @property
    def word_counts(self) -> WordCategoryRepository:
        """Get Naive Bayes counter repository."""
        return WordCategoryRepository(self._session_maker)

    @property
    def performance(self) -> ModelPerformanceRepository:
        """Get ensemble performance repository."""
        return ModelPerformanceRepository(self._session_maker, self._default_weights)
