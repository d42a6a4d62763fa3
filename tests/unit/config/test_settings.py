"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from expense_ml.config._utils import resolve_env_file_path
from expense_ml.config.settings import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("POSTGRES_HOST", "EXPENSE_ML_DATABASE_URL", "EXPENSE_ML_LEARNING_RATE"):
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)

        assert settings.laplace_alpha == 1.0
        assert settings.learning_rate == 0.1
        assert (settings.min_weight, settings.max_weight) == (0.15, 0.85)
        assert settings.default_category == "Other"
        assert settings.external_model_name is None
        assert settings.resolved_database_url.startswith("sqlite+aiosqlite://")

    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EXPENSE_ML_LEARNING_RATE", "0.2")

        assert Settings(_env_file=None).learning_rate == 0.2

    def test_postgres_host_takes_precedence(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("POSTGRES_HOST", "db")
        monkeypatch.setenv("POSTGRES_PASSWORD", "secret")

        settings = Settings(_env_file=None)

        assert settings.resolved_database_url == (
            "postgresql+asyncpg://postgres:secret@db:5432/expense_ml"
        )

    def test_weight_bounds_must_be_ordered(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, min_weight=0.6, max_weight=0.4)

    def test_learning_rate_range(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, learning_rate=0.0)

    @pytest.mark.parametrize(("min_weight", "max_weight"), [(0.1, 0.4), (0.6, 0.9)])
    def test_weight_bounds_must_contain_half(self, min_weight: float, max_weight: float) -> None:
        with pytest.raises(ValidationError, match="0.5"):
            Settings(_env_file=None, min_weight=min_weight, max_weight=max_weight)

    def test_feasible_asymmetric_bounds(self) -> None:
        settings = Settings(
            _env_file=None,
            min_weight=0.1,
            max_weight=0.6,
            default_external_weight=0.5,
            default_local_weight=0.5,
        )

        assert (settings.min_weight, settings.max_weight) == (0.1, 0.6)

    def test_default_weights_must_sum_to_one(self) -> None:
        with pytest.raises(ValidationError, match="must equal 1.0"):
            Settings(_env_file=None, default_external_weight=0.6, default_local_weight=0.6)

    def test_default_weights_must_respect_bounds(self) -> None:
        with pytest.raises(ValidationError, match="within"):
            Settings(_env_file=None, default_external_weight=0.9, default_local_weight=0.1)


class TestResolveEnvFilePath:
    def test_explicit_env_file(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        env_file = tmp_path / "custom.env"
        env_file.write_text("EXPENSE_ML_LOG_LEVEL=DEBUG\n")
        monkeypatch.setenv("EXPENSE_ML_ENV_FILE", str(env_file))

        assert resolve_env_file_path() == env_file

    def test_missing_explicit_env_file_is_ignored(
        self, tmp_path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("EXPENSE_ML_ENV_FILE", str(tmp_path / "missing.env"))

        assert resolve_env_file_path() != tmp_path / "missing.env"

    def test_settings_read_env_file(self, tmp_path) -> None:
        env_file = tmp_path / "custom.env"
        env_file.write_text("EXPENSE_ML_DEFAULT_CATEGORY=Misc\n")

        assert Settings(_env_file=env_file).default_category == "Misc"
