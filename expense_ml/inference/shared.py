"""Shared infrastructure for the classification core.

Wires settings, the database, both stores, both classifiers and the ensemble
together once at startup. Stores are passed into the classifiers explicitly,
so tests can swap them for the in-memory implementations.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from expense_ml.data_models import ModelId
from expense_ml.storage import RepositoryFactory, create_engine, create_session_maker
from expense_ml.storage.utils import create_tables, describe_database_url

from .classification import (
    AdaptiveEnsemble,
    EnsembleConfig,
    NaiveBayesClassifier,
    WeightPolicy,
    load_external_classifier,
)
from .forecast import ForecastEstimator

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

    from expense_ml.config.settings import Settings
    from expense_ml.storage.protocols import PerformanceStore, WordCategoryStore

    from .classification import ExternalClassifier

logger = logging.getLogger(__name__)


@dataclass
class SharedInfrastructure:
    """Long-lived components shared by all requests.

    - naive_bayes / ensemble: the classification core
    - forecaster: stateless spending forecast
    - engine: database engine when backed by SQLAlchemy (None otherwise)
    """

    settings: Settings
    naive_bayes: NaiveBayesClassifier
    ensemble: AdaptiveEnsemble
    forecaster: ForecastEstimator
    engine: AsyncEngine | None = None

    @classmethod
    async def from_stores(
        cls,
        settings: Settings,
        word_store: WordCategoryStore,
        performance_store: PerformanceStore,
        external: ExternalClassifier,
        engine: AsyncEngine | None = None,
    ) -> SharedInfrastructure:
        """Build the core on top of already constructed stores."""
        await performance_store.ensure_defaults()

        naive_bayes = NaiveBayesClassifier(word_store, alpha=settings.laplace_alpha)
        ensemble = AdaptiveEnsemble(
            external=external,
            naive_bayes=naive_bayes,
            performance_store=performance_store,
            policy=WeightPolicy(
                learning_rate=settings.learning_rate,
                min_weight=settings.min_weight,
                max_weight=settings.max_weight,
            ),
            config=EnsembleConfig.from_settings(settings),
        )
        return cls(
            settings=settings,
            naive_bayes=naive_bayes,
            ensemble=ensemble,
            forecaster=ForecastEstimator(),
            engine=engine,
        )

    @classmethod
    async def create(
        cls,
        settings: Settings,
        external: ExternalClassifier | None = None,
    ) -> SharedInfrastructure:
        """Create the core backed by the configured database."""
        database_url = settings.resolved_database_url
        logger.info("Database: %s", describe_database_url(database_url))

        engine = create_engine(database_url, echo=settings.database_echo)
        await create_tables(engine)

        repos = RepositoryFactory(
            create_session_maker(engine),
            default_weights={
                ModelId.EXTERNAL: settings.default_external_weight,
                ModelId.LOCAL: settings.default_local_weight,
            },
        )

        if external is None:
            external = load_external_classifier(
                settings.external_model_name,
                device=settings.device,
                confidence_threshold=settings.external_confidence_threshold,
                label_map=settings.external_label_map,
            )

        return await cls.from_stores(
            settings,
            word_store=repos.word_counts,
            performance_store=repos.performance,
            external=external,
            engine=engine,
        )

    async def close(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()
