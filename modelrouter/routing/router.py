"""
Model router.

Composes the analyzer, tier selector, model selector, strategy lookup and
explanation formatter into one decision function:

    query + history -> analysis -> tier -> model -> strategy -> explanation

A router is an immutable value built from a catalog and settings. Routing
has no side effects, so one instance can serve any number of threads.
"""

from dataclasses import dataclass
from typing import Any, Iterable

from loguru import logger

from modelrouter.catalog.defaults import create_default_catalog
from modelrouter.catalog.loader import load_catalog
from modelrouter.catalog.models import Capability, ModelCatalog, ModelDescriptor, Tier
from modelrouter.config.schema import RouterSettings
from modelrouter.routing.classifier import QueryAnalysis, analyze_query
from modelrouter.routing.explain import generate_routing_explanation
from modelrouter.routing.history import calculate_context_length
from modelrouter.routing.search import SearchRoute, SearchRouter
from modelrouter.routing.selector import (
    TierThresholds,
    calculate_model_tier,
    find_best_model_for_tier,
)
from modelrouter.routing.strategy import get_response_strategy


# Confidence per tier decision branch
TIER_CONFIDENCE: dict[Tier, float] = {
    Tier.SUPERIOR: 0.95,
    Tier.SPECIALIZED: 0.9,
    Tier.ADVANCED: 0.9,
    Tier.STANDARD: 0.85,
    Tier.BASELINE: 0.8,
}
GREETING_CONFIDENCE = 0.95
FALLBACK_CONFIDENCE = 0.6


@dataclass(frozen=True)
class RoutingDecision:
    """Result of routing decision."""
    model: ModelDescriptor
    tier: Tier
    complexity: float
    task_type: str
    question_type: str
    capabilities: frozenset[Capability]
    response_strategy: str
    explanation: str
    confidence: float
    context_size: int
    fallback_used: bool = False
    fallback_reason: str = ""
    search: SearchRoute | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "model": self.model.name,
            "provider": self.model.provider,
            "tier": self.tier.value,
            "complexity": round(self.complexity, 4),
            "task_type": self.task_type,
            "question_type": self.question_type,
            "capabilities": sorted(c.value for c in self.capabilities),
            "response_strategy": self.response_strategy,
            "explanation": self.explanation,
            "confidence": self.confidence,
            "context_size": self.context_size,
            "fallback_used": self.fallback_used,
            "fallback_reason": self.fallback_reason,
            "search_provider": self.search.provider if self.search else None,
        }


class ModelRouter:
    """
    Routes requests to catalog models.

    Usage:
        router = ModelRouter()
        decision = router.route("Compare merge sort and quicksort")
        decision.model.name  # e.g. "claude-3-7-sonnet-20250219"
    """

    def __init__(
        self,
        catalog: ModelCatalog | None = None,
        settings: RouterSettings | None = None,
    ):
        self._settings = settings if settings is not None else RouterSettings()
        # An empty catalog is kept as is so routing fails loudly
        self._catalog = catalog if catalog is not None else create_default_catalog()
        cfg = self._settings.thresholds
        self._thresholds = TierThresholds(
            superior=cfg.superior,
            advanced=cfg.advanced,
            standard=cfg.standard,
        )
        self._search_router = SearchRouter(self._settings.search)

    @property
    def catalog(self) -> ModelCatalog:
        return self._catalog

    @property
    def settings(self) -> RouterSettings:
        return self._settings

    @property
    def thresholds(self) -> TierThresholds:
        return self._thresholds

    @property
    def search_router(self) -> SearchRouter:
        return self._search_router

    def with_catalog(self, catalog: ModelCatalog) -> "ModelRouter":
        """New router over a replacement catalog; this one is unchanged."""
        return ModelRouter(catalog=catalog, settings=self._settings)

    def with_settings(self, settings: RouterSettings) -> "ModelRouter":
        """New router with different settings over the same catalog."""
        return ModelRouter(catalog=self._catalog, settings=settings)

    def analyze(self, query: str) -> QueryAnalysis:
        """Run the analyzer with this router's settings."""
        return analyze_query(query, self._settings.long_context_words)

    def route(
        self,
        query: str,
        history: Iterable[Any] | None = None,
        context_size: int | None = None,
    ) -> RoutingDecision:
        """
        Route a query to the optimal model.

        Args:
            query: User query text.
            history: Prior messages (Message objects or dicts with "content").
            context_size: Explicit context requirement. Defaults to the
                history length plus the query length.

        Returns:
            RoutingDecision with the selected model and strategy.

        Raises:
            NoSuitableModelError: If no catalog model fits the context.
        """
        if context_size is None:
            context_size = calculate_context_length(history) + len(query)

        analysis = self.analyze(query)

        if analysis.is_greeting:
            tier = Tier.BASELINE
            question_type = "casual"
            base_confidence = GREETING_CONFIDENCE
        else:
            tier = calculate_model_tier(
                analysis.complexity, analysis.capabilities, self._thresholds
            )
            question_type = analysis.question_type
            base_confidence = TIER_CONFIDENCE[tier]

        selection = find_best_model_for_tier(
            self._catalog,
            tier,
            analysis.capabilities,
            context_size,
            analysis.task_type,
        )

        confidence = base_confidence
        if selection.fallback_used:
            confidence = min(base_confidence, FALLBACK_CONFIDENCE)

        search_route = None
        if Capability.SEARCH in analysis.capabilities:
            search_route = self._search_router.route(query, history)

        decision = RoutingDecision(
            model=selection.model,
            tier=selection.tier,
            complexity=analysis.complexity,
            task_type=analysis.task_type,
            question_type=question_type,
            capabilities=analysis.capabilities,
            response_strategy=get_response_strategy(question_type, analysis.task_type),
            explanation=generate_routing_explanation(
                selection.model,
                selection.tier,
                analysis.complexity,
                analysis.capabilities,
                analysis.task_type,
            ),
            confidence=confidence,
            context_size=context_size,
            fallback_used=selection.fallback_used,
            fallback_reason=selection.fallback_reason,
            search=search_route,
        )

        logger.debug(
            f"Routed to {decision.model.name} ({decision.tier.value}, "
            f"complexity={decision.complexity:.2f}, strategy={decision.response_strategy})"
        )
        return decision


def create_router_from_config(settings: RouterSettings) -> ModelRouter:
    """
    Create a ModelRouter from settings.

    Loads the catalog file named by settings.catalog_path, or the built-in
    catalog when none is set. Catalog problems surface here, at startup.

    Raises:
        CatalogError: If the catalog file is missing or invalid.
    """
    catalog_file = settings.catalog_file
    catalog = load_catalog(catalog_file) if catalog_file else create_default_catalog()
    return ModelRouter(catalog=catalog, settings=settings)
