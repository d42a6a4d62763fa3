from sqlalchemy import delete, distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from expense_ml.data_models import WordCategoryCount
from expense_ml.storage.sqlalchemy.tables import WordCategoryCountTable

from ._utils import dialect_insert


class WordCategoryRepository:
    """Repository for Naive Bayes word/category counters.

    Every method runs in its own short session so that concurrent callers
    never share one.
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self._session_maker = session_maker

    async def increment_count(self, word: str, category: str) -> None:
        """Insert the pair with count=1 or atomically add 1 to its count."""
        async with self._session_maker() as session:
            insert = dialect_insert(session)
            stmt = insert(WordCategoryCountTable).values(
                word=word,
                category=category,
                count=1,
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=["word", "category"],
                set_={"count": WordCategoryCountTable.count + 1},
            )
            await session.execute(stmt)
            await session.commit()

    async def get_count(self, word: str, category: str) -> int | None:
        stmt = select(WordCategoryCountTable.count).where(
            WordCategoryCountTable.word == word,
            WordCategoryCountTable.category == category,
        )
        async with self._session_maker() as session:
            result = await session.execute(stmt)
            return result.scalar_one_or_none()

    async def get_total_count_for_category(self, category: str) -> int | None:
        stmt = select(func.sum(WordCategoryCountTable.count)).where(
            WordCategoryCountTable.category == category
        )
        async with self._session_maker() as session:
            result = await session.execute(stmt)
            total = result.scalar()
        return int(total) if total is not None else None

    async def get_all_categories(self) -> list[str]:
        stmt = select(distinct(WordCategoryCountTable.category)).order_by(
            WordCategoryCountTable.category
        )
        async with self._session_maker() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def get_vocabulary_size(self) -> int:
        stmt = select(func.count(distinct(WordCategoryCountTable.word)))
        async with self._session_maker() as session:
            result = await session.execute(stmt)
            return result.scalar() or 0

    async def get_top_words_for_category(
        self, category: str, limit: int = 10
    ) -> list[WordCategoryCount]:
        stmt = (
            select(WordCategoryCountTable)
            .where(WordCategoryCountTable.category == category)
            .order_by(WordCategoryCountTable.count.desc(), WordCategoryCountTable.word)
            .limit(limit)
        )
        async with self._session_maker() as session:
            result = await session.execute(stmt)
            rows = result.scalars().all()

        return [
            WordCategoryCount(word=row.word, category=row.category, count=row.count)
            for row in rows
        ]

    async def delete_all(self) -> None:
        async with self._session_maker() as session:
            await session.execute(delete(WordCategoryCountTable))
            await session.commit()
