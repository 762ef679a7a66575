"""
Engine configuration for exprtree.

Configuration is loaded from the [engine] table of exprtree.toml.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from exprtree.core.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "exprtree.toml"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class EngineConfig(BaseModel):
    """Settings for a single pipeline run."""

    require_end: bool = Field(
        default=True,
        description="Reject tokens left over after the top-level expression",
    )
    max_bits: int | None = Field(
        default=None,
        ge=2,
        description="Signed integer width for literals and results; None is unbounded",
    )
    log_level: str = Field(default="WARNING", description="Logging level for the CLI")

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    def with_overrides(self, **overrides: Any) -> EngineConfig:
        """Return a copy with every non-None override applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        if not values:
            return self
        return EngineConfig.model_validate({**self.model_dump(), **values})


def load_config(path: Path | None = None) -> EngineConfig:
    """
    Load engine configuration from a TOML file.

    Args:
        path: Explicit config file. When omitted, exprtree.toml in the
            current directory is used if it exists, otherwise defaults.

    Returns:
        EngineConfig

    Raises:
        ConfigError: If an explicit file is missing, or any file is
            malformed or contains invalid settings.
    """
    if path is None:
        path = Path.cwd() / DEFAULT_CONFIG_FILE
        if not path.exists():
            logger.debug(f"No {DEFAULT_CONFIG_FILE} found, using defaults")
            return EngineConfig()

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}")
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    engine = data.get("engine", {})
    if not isinstance(engine, dict):
        raise ConfigError(f"[engine] in {path} must be a table")

    try:
        config = EngineConfig.model_validate(engine)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {path}: {e}") from e

    logger.debug(f"Loaded config from {path}: {config.model_dump()}")
    return config
