"""
modelrouter - query-aware model routing for multi-provider assistants.

Decides which catalog model should serve a request and how the answer
should be structured.
"""

__version__ = "0.1.0"
__logo__ = "🧭"

from modelrouter.catalog import Capability, ModelCatalog, ModelDescriptor, Tier
from modelrouter.errors import (
    CalibrationError,
    CatalogError,
    ConfigError,
    NoSuitableModelError,
    RouterError,
)
from modelrouter.routing import ModelRouter, RoutingDecision, SearchRouter

__all__ = [
    "__version__",
    "Capability",
    "ModelCatalog",
    "ModelDescriptor",
    "Tier",
    "ModelRouter",
    "RoutingDecision",
    "SearchRouter",
    "RouterError",
    "CatalogError",
    "ConfigError",
    "CalibrationError",
    "NoSuitableModelError",
]
