"""
Pytest configuration and shared fixtures for modelrouter tests.
"""

import pytest
import sys
from pathlib import Path

# Add the project root to the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from modelrouter.catalog import ModelCatalog, ModelDescriptor, Tier, create_default_catalog
from modelrouter.config import RouterSettings
from modelrouter.routing import ModelRouter


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep MODELROUTER_* variables from the host out of the tests."""
    import os
    for key in list(os.environ):
        if key.startswith("MODELROUTER_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def catalog():
    """The built-in catalog."""
    return create_default_catalog()


@pytest.fixture
def router(catalog):
    """A router over the built-in catalog with default settings."""
    return ModelRouter(catalog=catalog, settings=RouterSettings())


@pytest.fixture
def make_model():
    """Factory for descriptors with sensible defaults."""
    def _make(name: str, **kwargs) -> ModelDescriptor:
        kwargs.setdefault("provider", "test")
        kwargs.setdefault("max_tokens", 1024)
        return ModelDescriptor(name=name, **kwargs)
    return _make


@pytest.fixture
def make_catalog():
    """Factory for catalogs from {tier: [models]} mappings."""
    def _make(tiers: dict[Tier, list[ModelDescriptor]]) -> ModelCatalog:
        return ModelCatalog(tiers)
    return _make


@pytest.fixture
def config_dir(tmp_path):
    """Create a temporary config directory."""
    config = tmp_path / "config"
    config.mkdir()
    return config
