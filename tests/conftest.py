"""Shared pytest fixtures for pyextglob tests."""
import os
from pathlib import Path
from typing import Any, Dict

import pytest
import yaml

from pyextglob.core.logger import set_global_logger
from pyextglob.infrastructure.cache_manager import PatternCache, set_global_cache
from pyextglob.infrastructure.config_manager import set_global_config


@pytest.fixture
def cache() -> PatternCache:
    """A fresh, injectable pattern cache."""
    return PatternCache()


@pytest.fixture
def sample_config() -> Dict[str, Any]:
    """Provide a sample pyextglob configuration."""
    return {
        "pyextglob": {
            "options": {
                "bash": True,
                "case_sensitive": False,
                "max_steps": 50000,
            },
            "logging": {
                "level": "DEBUG",
            },
            "rules": {
                "include": ["**/*.+(py|pyi)", "**/*.md"],
                "exclude": ["**/test_*", "build/**"],
            },
        }
    }


@pytest.fixture
def config_file(tmp_path: Path, sample_config: Dict[str, Any]) -> Path:
    """Create a configuration file."""
    config_path = tmp_path / "pyextglob.yaml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config, f)
    return config_path


@pytest.fixture
def clean_env(monkeypatch):
    """Remove PYEXTGLOB_* variables from the environment."""
    for key in list(os.environ):
        if key.startswith("PYEXTGLOB_"):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the process-wide cache, config and logger between tests."""
    yield
    set_global_cache(None)
    set_global_config(None)
    set_global_logger(None)
