"""
Model catalog data structures.

A catalog is a read-only table of model descriptors grouped by tier. It is
built once (from the built-in table or a JSON file) and never mutated; a new
catalog replaces an old one as a whole.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping

from modelrouter.errors import CatalogError


class Tier(str, Enum):
    """Capability/cost classes of models."""
    BASELINE = "baseline"        # Simple, quick responses
    STANDARD = "standard"        # General tasks
    ADVANCED = "advanced"        # Complex reasoning
    SUPERIOR = "superior"        # Expert-level tasks
    SPECIALIZED = "specialized"  # Domain pools (math, search, computer use)


class Capability(str, Enum):
    """Abstract features a query may require."""
    REASONING = "REASONING"
    CODE = "CODE"
    KNOWLEDGE = "KNOWLEDGE"
    CREATIVITY = "CREATIVITY"
    LONG_CONTEXT = "LONG_CONTEXT"
    REALTIME = "REALTIME"
    MATH = "MATH"
    SEARCH = "SEARCH"
    COMPUTER_USE = "COMPUTER_USE"


# Catalog-wide scan order used as the last fallback
TIER_ORDER: tuple[Tier, ...] = (
    Tier.BASELINE,
    Tier.STANDARD,
    Tier.ADVANCED,
    Tier.SUPERIOR,
    Tier.SPECIALIZED,
)


def freeze(value: Any) -> Any:
    """Read-only deep copy: mappings become MappingProxyType, lists become tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    """Plain, JSON-friendly copy of a frozen value."""
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [thaw(item) for item in value]
    return value


def sort_capabilities(capabilities: Iterable[Capability]) -> list[Capability]:
    """Order capabilities by declaration order."""
    present = set(capabilities)
    return [cap for cap in Capability if cap in present]


@dataclass(frozen=True)
class ModelDescriptor:
    """A catalog entry. Immutable once loaded."""
    name: str
    provider: str
    max_tokens: int
    temperature: float = 0.7
    supports_reasoning: bool = False
    supports_search: bool = False
    supports_computer_use: bool = False
    context_window: int = 128_000
    streaming_optimized: bool = False
    specialized_domains: tuple[str, ...] = ()
    cost_tier: int = 1  # 1 = cheapest, 5 = most expensive
    # Provider connection settings, stored as a read-only deep copy
    connection: Mapping[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def __post_init__(self) -> None:
        if not self.name:
            raise CatalogError("Model name must not be empty")
        if not self.provider:
            raise CatalogError(f"Model {self.name} has no provider")
        if not 1 <= self.cost_tier <= 5:
            raise CatalogError(
                f"Model {self.name} has cost tier {self.cost_tier}, expected 1-5"
            )
        if self.context_window <= 0:
            raise CatalogError(f"Model {self.name} has a non-positive context window")
        if self.max_tokens <= 0:
            raise CatalogError(f"Model {self.name} has non-positive max_tokens")
        object.__setattr__(self, "specialized_domains", tuple(self.specialized_domains))
        object.__setattr__(self, "connection", freeze(self.connection))

    def has_domain(self, domain: str) -> bool:
        """Case-insensitive specialized-domain check."""
        wanted = domain.lower()
        return any(d.lower() == wanted for d in self.specialized_domains)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "provider": self.provider,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "supports_reasoning": self.supports_reasoning,
            "supports_search": self.supports_search,
            "supports_computer_use": self.supports_computer_use,
            "context_window": self.context_window,
            "streaming_optimized": self.streaming_optimized,
            "specialized_domains": list(self.specialized_domains),
            "cost_tier": self.cost_tier,
            "connection": thaw(self.connection),
        }


class ModelCatalog:
    """
    Read-only table of model descriptors grouped by tier.

    Pools are stored as tuples behind a MappingProxyType, so concurrent
    readers never observe a partially updated catalog.
    """

    def __init__(self, tiers: Mapping[Tier | str, Iterable[ModelDescriptor]]):
        pools: dict[Tier, tuple[ModelDescriptor, ...]] = {tier: () for tier in TIER_ORDER}
        for key, models in tiers.items():
            try:
                tier = Tier(key)
            except ValueError:
                raise CatalogError(f"Unknown tier: {key!r}") from None

            pool = tuple(models)
            seen: set[str] = set()
            for model in pool:
                if not isinstance(model, ModelDescriptor):
                    raise CatalogError(
                        f"Tier {tier.value} contains a non-descriptor entry: {model!r}"
                    )
                if model.name in seen:
                    raise CatalogError(f"Duplicate model {model.name} in tier {tier.value}")
                seen.add(model.name)
            pools[tier] = pool

        self._tiers = MappingProxyType(pools)

    def models_for_tier(self, tier: Tier) -> tuple[ModelDescriptor, ...]:
        """Models in a tier pool, in catalog order."""
        return self._tiers.get(Tier(tier), ())

    @property
    def tiers(self) -> Mapping[Tier, tuple[ModelDescriptor, ...]]:
        return self._tiers

    def all_models(self) -> Iterator[ModelDescriptor]:
        """Every model, walking tiers in TIER_ORDER."""
        for tier in TIER_ORDER:
            yield from self._tiers[tier]

    def find(self, name: str) -> ModelDescriptor | None:
        """First model with the given name."""
        for model in self.all_models():
            if model.name == name:
                return model
        return None

    def tier_of(self, name: str) -> Tier | None:
        for tier in TIER_ORDER:
            if any(m.name == name for m in self._tiers[tier]):
                return tier
        return None

    def __len__(self) -> int:
        return sum(len(pool) for pool in self._tiers.values())

    def __repr__(self) -> str:
        sizes = ", ".join(f"{t.value}={len(p)}" for t, p in self._tiers.items())
        return f"ModelCatalog({sizes})"

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        """Convert to the JSON catalog file layout."""
        return {
            tier.value: [model.to_dict() for model in pool]
            for tier, pool in self._tiers.items()
        }
