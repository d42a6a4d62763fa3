"""Test fixtures for the expense classification core."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from expense_ml.config.settings import Settings
from expense_ml.inference.classification import (
    AdaptiveEnsemble,
    NaiveBayesClassifier,
    NullExternalClassifier,
)
from expense_ml.storage import (
    InMemoryPerformanceStore,
    InMemoryWordCategoryStore,
    RepositoryFactory,
    create_engine,
    create_session_maker,
)
from expense_ml.storage.utils import create_tables

from tests.fakes import FakeExternalClassifier


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway SQLite file, no env file."""
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'expense_ml.db'}",
    )


@pytest.fixture
def word_store() -> InMemoryWordCategoryStore:
    return InMemoryWordCategoryStore()


@pytest_asyncio.fixture
async def performance_store() -> InMemoryPerformanceStore:
    store = InMemoryPerformanceStore()
    await store.ensure_defaults()
    return store


@pytest.fixture
def naive_bayes(word_store: InMemoryWordCategoryStore) -> NaiveBayesClassifier:
    return NaiveBayesClassifier(word_store)


@pytest.fixture
def external() -> FakeExternalClassifier:
    return FakeExternalClassifier()


@pytest.fixture
def ensemble(
    external: FakeExternalClassifier,
    naive_bayes: NaiveBayesClassifier,
    performance_store: InMemoryPerformanceStore,
) -> AdaptiveEnsemble:
    return AdaptiveEnsemble(external, naive_bayes, performance_store)


@pytest.fixture
def local_only_ensemble(
    naive_bayes: NaiveBayesClassifier,
    performance_store: InMemoryPerformanceStore,
) -> AdaptiveEnsemble:
    return AdaptiveEnsemble(NullExternalClassifier(), naive_bayes, performance_store)


@pytest_asyncio.fixture
async def async_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """SQLite engine on a temp file with the schema created.

    A file (not :memory:) so that every pooled connection sees the same data.
    """
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_maker(async_engine)


@pytest.fixture
def repos(session_maker: async_sessionmaker[AsyncSession]) -> RepositoryFactory:
    return RepositoryFactory(session_maker)
