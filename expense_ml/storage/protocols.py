"""Storage layer protocols."""

from typing import Protocol

from expense_ml.data_models import ModelId, ModelPerformance, WordCategoryCount


class WordCategoryStore(Protocol):
    """Durable (word, category) counter table used by Naive Bayes."""

    async def increment_count(self, word: str, category: str) -> None:
        """Atomically create the row with count=1, or add 1 to it."""
        ...

    async def get_count(self, word: str, category: str) -> int | None: ...

    async def get_total_count_for_category(self, category: str) -> int | None: ...

    async def get_all_categories(self) -> list[str]:
        """Distinct categories that have been trained."""
        ...

    async def get_vocabulary_size(self) -> int:
        """Distinct words across all categories."""
        ...

    async def get_top_words_for_category(
        self, category: str, limit: int = 10
    ) -> list[WordCategoryCount]: ...

    async def delete_all(self) -> None: ...


class PerformanceStore(Protocol):
    """Durable per-participant correctness counters and weights."""

    async def ensure_defaults(self) -> None:
        """Insert default records for both participants if absent."""
        ...

    async def get_performance(self, model_id: ModelId) -> ModelPerformance | None: ...

    async def get_all_performances(self) -> list[ModelPerformance]: ...

    async def update_weight(self, model_id: ModelId, weight: float) -> None: ...

    async def increment_correct(self, model_id: ModelId) -> None:
        """correct += 1 and total += 1."""
        ...

    async def increment_total(self, model_id: ModelId) -> None:
        """total += 1 only."""
        ...

    async def delete_all(self) -> None: ...
