"""
Catalog loading from JSON.

The file maps tier names to lists of model entries:

    {
      "baseline": [{"name": "gpt-4o-mini", "provider": "openai", ...}],
      "standard": [...]
    }

Validation happens here, once, so a malformed catalog fails at startup.
"""

import json
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from modelrouter.catalog.models import ModelCatalog, ModelDescriptor, Tier
from modelrouter.errors import CatalogError


class ModelEntry(BaseModel):
    """Schema for one catalog entry."""
    name: str = Field(min_length=1)
    provider: str = Field(min_length=1)
    max_tokens: int = Field(gt=0)
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    supports_reasoning: bool = False
    supports_search: bool = False
    supports_computer_use: bool = False
    context_window: int = Field(gt=0)
    streaming_optimized: bool = False
    specialized_domains: list[str] = Field(default_factory=list)
    cost_tier: int = Field(ge=1, le=5)
    connection: dict[str, Any] = Field(default_factory=dict)

    def to_descriptor(self) -> ModelDescriptor:
        return ModelDescriptor(
            name=self.name,
            provider=self.provider,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            supports_reasoning=self.supports_reasoning,
            supports_search=self.supports_search,
            supports_computer_use=self.supports_computer_use,
            context_window=self.context_window,
            streaming_optimized=self.streaming_optimized,
            specialized_domains=tuple(self.specialized_domains),
            cost_tier=self.cost_tier,
            connection=self.connection,
        )


class CatalogFile(BaseModel):
    """Schema for a whole catalog file."""
    tiers: dict[Tier, list[ModelEntry]]


def catalog_from_dict(data: dict[str, Any]) -> ModelCatalog:
    """
    Build a catalog from parsed JSON data.

    Args:
        data: Mapping of tier name to model entries. A top-level
            ``{"tiers": {...}}`` wrapper is also accepted.

    Returns:
        A validated, immutable ModelCatalog.

    Raises:
        CatalogError: If the data does not describe a valid catalog.
    """
    if not isinstance(data, dict):
        raise CatalogError(f"Catalog must be a JSON object, got {type(data).__name__}")

    raw_tiers = data.get("tiers", data)
    try:
        parsed = CatalogFile.model_validate({"tiers": raw_tiers})
    except ValidationError as e:
        raise CatalogError(f"Invalid catalog: {e}") from e

    catalog = ModelCatalog({
        tier: [entry.to_descriptor() for entry in entries]
        for tier, entries in parsed.tiers.items()
    })
    if len(catalog) == 0:
        raise CatalogError("Catalog contains no models")
    return catalog


def load_catalog(path: Path | str) -> ModelCatalog:
    """
    Load and validate a catalog file.

    Args:
        path: Path to a JSON catalog file.

    Returns:
        The loaded ModelCatalog.

    Raises:
        CatalogError: If the file is missing, unparseable or invalid.
    """
    path = Path(path).expanduser()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise CatalogError(f"Catalog file not found: {path}") from None
    except json.JSONDecodeError as e:
        raise CatalogError(f"Catalog file {path} is not valid JSON: {e}") from e

    catalog = catalog_from_dict(data)
    logger.info(f"Loaded {len(catalog)} models from {path}")
    return catalog


def save_catalog(catalog: ModelCatalog, path: Path | str) -> None:
    """Write a catalog in the layout load_catalog() reads."""
    path = Path(path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(catalog.to_dict(), f, indent=2)
    logger.debug(f"Saved {len(catalog)} models to {path}")
