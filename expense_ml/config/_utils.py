import os
from pathlib import Path

ENV_FILE_VAR = "EXPENSE_ML_ENV_FILE"
_ROOT_MARKERS = (".git", "pyproject.toml")


def find_project_root() -> Path:
    """Closest ancestor of this package holding a repository marker."""
    here = Path(__file__).resolve()
    for directory in here.parents:
        if any((directory / marker).exists() for marker in _ROOT_MARKERS):
            return directory
    # Installed without a checkout: fall back to the directory above the package
    return here.parents[2]


def resolve_env_file_path() -> Path | None:
    """Pick the .env file to load, if any.

    Candidates, first existing wins:
    1. $EXPENSE_ML_ENV_FILE (relative paths are taken from the project root)
    2. config/.env.dev
    3. config/.env
    """
    root = find_project_root()
    candidates: list[Path] = []

    override = os.environ.get(ENV_FILE_VAR)
    if override:
        path = Path(override)
        candidates.append(path if path.is_absolute() else root / path)

    config_dir = root / "config"
    candidates += [config_dir / ".env.dev", config_dir / ".env"]

    return next((path for path in candidates if path.is_file()), None)
