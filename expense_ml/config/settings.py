from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ._utils import resolve_env_file_path


class Settings(BaseSettings):
    """Expense classification service configuration."""

    log_level: str = "INFO"

    # Used as-is unless POSTGRES_HOST is set. The postgres configs are
    # unprefixed so they can be shared with other services on the same host.
    database_url: str = "sqlite+aiosqlite:///./expense_ml.db"
    postgres_host: str | None = Field(default=None, validation_alias="POSTGRES_HOST")
    postgres_port: int = Field(default=5432, validation_alias="POSTGRES_PORT")
    postgres_user: str = Field(default="postgres", validation_alias="POSTGRES_USER")
    postgres_password: str = Field(default="", validation_alias="POSTGRES_PASSWORD")
    postgres_db: str = Field(default="expense_ml", validation_alias="POSTGRES_DB")
    database_echo: bool = False

    @property
    def resolved_database_url(self) -> str:
        """Database URL, preferring PostgreSQL when a host is configured."""
        if not self.postgres_host:
            return self.database_url
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    # Naive Bayes
    laplace_alpha: float = Field(default=1.0, gt=0.0)

    # Adaptive ensemble
    learning_rate: float = Field(default=0.1, gt=0.0, le=1.0)
    min_weight: float = Field(default=0.15, gt=0.0, lt=1.0)
    max_weight: float = Field(default=0.85, gt=0.0, lt=1.0)
    default_external_weight: float = 0.6
    default_local_weight: float = 0.4
    external_confidence: float = Field(default=0.8, ge=0.0, le=1.0)
    agreement_confidence: float = Field(default=0.95, ge=0.0, le=1.0)
    single_model_discount: float = Field(default=0.7, ge=0.0, le=1.0)
    fallback_confidence: float = Field(default=0.3, ge=0.0, le=1.0)
    default_category: str = "Other"

    # External (neural) classifier. None disables it.
    external_model_name: str | None = None
    external_confidence_threshold: float = Field(default=0.60, ge=0.0, le=1.0)
    external_label_map: dict[str, str] = Field(default_factory=dict)
    device: str = "cpu"

    model_config = SettingsConfigDict(
        env_file=resolve_env_file_path(),
        env_file_encoding="utf-8",
        env_prefix="EXPENSE_ML_",
        extra="ignore",
    )

    @model_validator(mode="after")
    def _check_weight_bounds(self) -> "Settings":
        if self.min_weight >= self.max_weight:
            msg = "min_weight must be smaller than max_weight"
            raise ValueError(msg)
        # Two weights summing to one must both fit in [min_weight, max_weight]
        if self.min_weight > 0.5 or self.max_weight < 0.5:
            msg = "weight bounds must satisfy min_weight <= 0.5 <= max_weight"
            raise ValueError(msg)

        defaults = (self.default_external_weight, self.default_local_weight)
        if abs(sum(defaults) - 1.0) > 1e-9:
            msg = "default_external_weight + default_local_weight must equal 1.0"
            raise ValueError(msg)
        if not all(self.min_weight <= w <= self.max_weight for w in defaults):
            msg = "default weights must lie within [min_weight, max_weight]"
            raise ValueError(msg)
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def clear_settings_cache() -> None:
    get_settings.cache_clear()
