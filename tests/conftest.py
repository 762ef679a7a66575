"""Shared pytest fixtures for exprtree tests."""

import logging
from pathlib import Path

import pytest

from exprtree.core.config import EngineConfig


@pytest.fixture
def strict_config() -> EngineConfig:
    """Default settings: trailing tokens rejected, unbounded integers."""
    return EngineConfig()


@pytest.fixture
def int32_config() -> EngineConfig:
    """Settings emulating 32-bit signed integers."""
    return EngineConfig(max_bits=32)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Write an exprtree.toml with non-default engine settings."""
    path = tmp_path / "exprtree.toml"
    path.write_text(
        """
[engine]
require_end = false
max_bits = 16
log_level = "info"
"""
    )
    return path


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers the CLI installs so later tests never write to closed streams."""
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(logging.WARNING)
