"""Public entry point for resolving configuration."""

from pathlib import Path
from typing import Any

import dotenv
from pydantic import ValidationError

from gemini_study.core.exceptions import ConfigurationError

from .schema import StudySettings


def resolve_config(
    *,
    env_file: str | Path | None = None,
    load_env: bool = True,
    **overrides: Any,
) -> StudySettings:
    """Resolve settings from the environment and overrides.

    Precedence: overrides > environment (including ``.env``) > defaults.

    Args:
        env_file: Path to a ``.env`` file. When None, the nearest ``.env``
            found from the working directory is used, if any.
        load_env: Set False to skip ``.env`` loading entirely.
        **overrides: Field values that take precedence over everything else.

    Raises:
        ConfigurationError: If any value fails validation.
    """
    if load_env:
        if env_file is not None and not Path(env_file).exists():
            raise ConfigurationError(f"Environment file not found: {env_file}")
        path = env_file if env_file is not None else dotenv.find_dotenv(usecwd=True)
        if path:
            # Variables already present in the process environment win
            dotenv.load_dotenv(dotenv_path=path, override=False)

    try:
        return StudySettings(**overrides)
    except ValidationError as e:
        fields = ", ".join(
            ".".join(str(p) for p in err["loc"]) or "<root>" for err in e.errors()
        )
        raise ConfigurationError(
            f"Invalid configuration values for: {fields}. Error: {e}"
        ) from e
