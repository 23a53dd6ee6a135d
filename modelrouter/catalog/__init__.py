"""
Model catalog for modelrouter.

Static, read-only tables of model descriptors grouped by tier.
"""

from modelrouter.catalog.models import (
    Capability,
    ModelCatalog,
    ModelDescriptor,
    Tier,
    TIER_ORDER,
    sort_capabilities,
)
from modelrouter.catalog.defaults import DEFAULT_MODELS, create_default_catalog
from modelrouter.catalog.loader import catalog_from_dict, load_catalog, save_catalog

__all__ = [
    "Capability",
    "ModelCatalog",
    "ModelDescriptor",
    "Tier",
    "TIER_ORDER",
    "sort_capabilities",
    "DEFAULT_MODELS",
    "create_default_catalog",
    "catalog_from_dict",
    "load_catalog",
    "save_catalog",
]
