import logging

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from expense_ml.data_models import ModelId, ModelPerformance
from expense_ml.storage.sqlalchemy.tables import ModelPerformanceTable

from ._utils import dialect_insert

logger = logging.getLogger(__name__)


def _to_domain(row: ModelPerformanceTable) -> ModelPerformance:
    return ModelPerformance(
        model_id=ModelId(row.model_name),
        correct_count=row.correct_count,
        total_count=row.total_count,
        current_weight=row.current_weight,
    )


class ModelPerformanceRepository:
    """Repository for ensemble participant performance records."""

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        default_weights: dict[ModelId, float] | None = None,
    ):
        self._session_maker = session_maker
        self._default_weights = default_weights or {
            ModelId.EXTERNAL: 0.6,
            ModelId.LOCAL: 0.4,
        }

    async def ensure_defaults(self) -> None:
        """Insert both participants with default weights unless present."""
        async with self._session_maker() as session:
            insert = dialect_insert(session)
            for model_id, weight in self._default_weights.items():
                stmt = insert(ModelPerformanceTable).values(
                    model_name=model_id.value,
                    correct_count=0,
                    total_count=0,
                    current_weight=weight,
                )
                stmt = stmt.on_conflict_do_nothing(index_elements=["model_name"])
                await session.execute(stmt)
            await session.commit()
        logger.debug("Ensured default performance records")

    async def get_performance(self, model_id: ModelId) -> ModelPerformance | None:
        stmt = select(ModelPerformanceTable).where(
            ModelPerformanceTable.model_name == model_id.value
        )
        async with self._session_maker() as session:
            result = await session.execute(stmt)
            row = result.scalar_one_or_none()

        if row is None:
            return None
        return _to_domain(row)

    async def get_all_performances(self) -> list[ModelPerformance]:
        stmt = select(ModelPerformanceTable).order_by(ModelPerformanceTable.model_name)
        async with self._session_maker() as session:
            result = await session.execute(stmt)
            rows = result.scalars().all()
        return [_to_domain(row) for row in rows]

    async def update_weight(self, model_id: ModelId, weight: float) -> None:
        await self._update(model_id, current_weight=weight)

    async def increment_correct(self, model_id: ModelId) -> None:
        await self._update(
            model_id,
            correct_count=ModelPerformanceTable.correct_count + 1,
            total_count=ModelPerformanceTable.total_count + 1,
        )

    async def increment_total(self, model_id: ModelId) -> None:
        await self._update(
            model_id,
            total_count=ModelPerformanceTable.total_count + 1,
        )

    async def delete_all(self) -> None:
        async with self._session_maker() as session:
            await session.execute(delete(ModelPerformanceTable))
            await session.commit()

    async def _update(self, model_id: ModelId, **values) -> None:
        stmt = (
            update(ModelPerformanceTable)
            .where(ModelPerformanceTable.model_name == model_id.value)
            .values(**values)
        )
        async with self._session_maker() as session:
            await session.execute(stmt)
            await session.commit()
