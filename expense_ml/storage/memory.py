"""In-memory store implementations.

Used as test doubles and for throwaway sessions. Every mutation completes
without yielding to the event loop, so concurrent tasks cannot interleave
inside an increment.
"""

from collections import Counter

from expense_ml.data_models import ModelId, ModelPerformance, WordCategoryCount

DEFAULT_WEIGHTS: dict[ModelId, float] = {
    ModelId.EXTERNAL: 0.6,
    ModelId.LOCAL: 0.4,
}


class InMemoryWordCategoryStore:
    """Word/category counters kept in a Counter keyed by (word, category)."""

    def __init__(self) -> None:
        self._counts: Counter[tuple[str, str]] = Counter()

    async def increment_count(self, word: str, category: str) -> None:
        self._counts[(word, category)] += 1

    async def get_count(self, word: str, category: str) -> int | None:
        return self._counts.get((word, category))

    async def get_total_count_for_category(self, category: str) -> int | None:
        counts = [n for (_, c), n in self._counts.items() if c == category]
        if not counts:
            return None
        return sum(counts)

    async def get_all_categories(self) -> list[str]:
        return list(dict.fromkeys(c for _, c in self._counts))

    async def get_vocabulary_size(self) -> int:
        return len({w for w, _ in self._counts})

    async def get_top_words_for_category(
        self, category: str, limit: int = 10
    ) -> list[WordCategoryCount]:
        rows = [
            WordCategoryCount(word=w, category=c, count=n)
            for (w, c), n in self._counts.items()
            if c == category
        ]
        rows.sort(key=lambda r: (-r.count, r.word))
        return rows[:limit]

    async def delete_all(self) -> None:
        self._counts.clear()

    def has_word(self, word: str) -> bool:
        return any(w == word for w, _ in self._counts)

    def __len__(self) -> int:
        return len(self._counts)


class InMemoryPerformanceStore:
    """Participant performance records kept in a dict."""

    def __init__(self, default_weights: dict[ModelId, float] | None = None) -> None:
        self._default_weights = default_weights or DEFAULT_WEIGHTS
        self._records: dict[ModelId, ModelPerformance] = {}

    async def ensure_defaults(self) -> None:
        for model_id, weight in self._default_weights.items():
            if model_id not in self._records:
                self._records[model_id] = ModelPerformance(
                    model_id=model_id, current_weight=weight
                )

    async def get_performance(self, model_id: ModelId) -> ModelPerformance | None:
        record = self._records.get(model_id)
        return record.model_copy() if record else None

    async def get_all_performances(self) -> list[ModelPerformance]:
        return [r.model_copy() for r in self._records.values()]

    async def update_weight(self, model_id: ModelId, weight: float) -> None:
        record = self._records.get(model_id)
        if record is not None:
            record.current_weight = weight

    async def increment_correct(self, model_id: ModelId) -> None:
        record = self._records.get(model_id)
        if record is not None:
            record.correct_count += 1
            record.total_count += 1

    async def increment_total(self, model_id: ModelId) -> None:
        record = self._records.get(model_id)
        if record is not None:
            record.total_count += 1

    async def delete_all(self) -> None:
        self._records.clear()
