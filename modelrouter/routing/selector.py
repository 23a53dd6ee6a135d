"""
Tier and model selection.

Tier selection is a fixed-order decision list over complexity and
capabilities. Model selection scores every model in the tier pool and
cascades to lower tiers, then the whole catalog, when the pool has no
model that can hold the requested context.
"""

from dataclasses import dataclass
from typing import Iterable

from loguru import logger

from modelrouter.catalog.models import Capability, ModelCatalog, ModelDescriptor, Tier
from modelrouter.errors import NoSuitableModelError


# Score returned for models whose context window is too small
DISQUALIFIED = -1

# Capabilities that route to the specialized pool
SPECIALIZED_CAPABILITIES = frozenset({
    Capability.MATH,
    Capability.COMPUTER_USE,
    Capability.SEARCH,
})

# Descent order when a pool cannot serve the request
FALLBACK_ORDER: tuple[Tier, ...] = (Tier.ADVANCED, Tier.STANDARD, Tier.BASELINE)


@dataclass(frozen=True)
class TierThresholds:
    """Complexity cutoffs (strictly greater than) for tier escalation."""
    superior: float = 0.8
    advanced: float = 0.6
    standard: float = 0.4


DEFAULT_THRESHOLDS = TierThresholds()


@dataclass(frozen=True)
class ModelSelection:
    """Outcome of model selection for one request."""
    model: ModelDescriptor
    tier: Tier  # Tier the model was taken from
    score: int
    fallback_used: bool = False
    fallback_reason: str = ""


def calculate_model_tier(
    complexity: float,
    capabilities: Iterable[Capability],
    thresholds: TierThresholds = DEFAULT_THRESHOLDS,
) -> Tier:
    """
    Map analyzer output to a tier.

    Checked in order, first match wins:
    1. complexity > superior cutoff -> SUPERIOR
    2. MATH, COMPUTER_USE or SEARCH required -> SPECIALIZED
    3. complexity > advanced cutoff or REASONING -> ADVANCED
    4. complexity > standard cutoff or CREATIVITY or CODE -> STANDARD
    5. Otherwise -> BASELINE
    """
    caps = frozenset(capabilities)

    if complexity > thresholds.superior:
        return Tier.SUPERIOR
    if caps & SPECIALIZED_CAPABILITIES:
        return Tier.SPECIALIZED
    if complexity > thresholds.advanced or Capability.REASONING in caps:
        return Tier.ADVANCED
    if (
        complexity > thresholds.standard
        or Capability.CREATIVITY in caps
        or Capability.CODE in caps
    ):
        return Tier.STANDARD
    return Tier.BASELINE


def calculate_model_score(
    model: ModelDescriptor,
    capabilities: Iterable[Capability],
    context_size: int,
    task_type: str,
) -> int:
    """
    Score a model for a request. Higher is better.

    Returns DISQUALIFIED if the context window is too small. Otherwise:
    2 for fitting the context, +2 per supported REASONING/SEARCH/COMPUTER_USE
    requirement, +3 for a specialized domain equal to the task type, +2 for
    streaming-optimized models when REALTIME is required.
    """
    if model.context_window < context_size:
        return DISQUALIFIED

    caps = frozenset(capabilities)
    score = 2

    if Capability.REASONING in caps and model.supports_reasoning:
        score += 2
    if Capability.SEARCH in caps and model.supports_search:
        score += 2
    if Capability.COMPUTER_USE in caps and model.supports_computer_use:
        score += 2

    if task_type and model.has_domain(task_type):
        score += 3

    if Capability.REALTIME in caps and model.streaming_optimized:
        score += 2

    return score


def _best_in_pool(
    pool: Iterable[ModelDescriptor],
    capabilities: frozenset[Capability],
    context_size: int,
    task_type: str,
) -> tuple[ModelDescriptor | None, int]:
    """Highest score, ties to the lower cost tier, full ties to catalog order."""
    best_model: ModelDescriptor | None = None
    best_score = DISQUALIFIED

    for model in pool:
        score = calculate_model_score(model, capabilities, context_size, task_type)
        if score == DISQUALIFIED:
            continue
        if (
            best_model is None
            or score > best_score
            or (score == best_score and model.cost_tier < best_model.cost_tier)
        ):
            best_model = model
            best_score = score

    return best_model, best_score


def _next_lower_tier(tier: Tier) -> Tier | None:
    """Next tier down the fallback ladder, or None below baseline."""
    if tier in (Tier.SUPERIOR, Tier.SPECIALIZED):
        return Tier.ADVANCED
    index = FALLBACK_ORDER.index(tier)
    if index + 1 < len(FALLBACK_ORDER):
        return FALLBACK_ORDER[index + 1]
    return None


def find_best_model_for_tier(
    catalog: ModelCatalog,
    tier: Tier,
    capabilities: Iterable[Capability],
    context_size: int,
    task_type: str = "",
) -> ModelSelection:
    """
    Select the best model for a tier, cascading on failure.

    Cascade:
    1. Best-scoring model in the requested pool
    2. Pool empty or every model too small -> next lower tier
       (ADVANCED -> STANDARD -> BASELINE)
    3. Below baseline -> first model anywhere in the catalog that fits
    4. Nothing fits -> NoSuitableModelError

    Raises:
        NoSuitableModelError: If no model can hold context_size.
    """
    caps = frozenset(capabilities)
    current: Tier | None = tier
    reasons: list[str] = []

    while current is not None:
        pool = catalog.models_for_tier(current)
        model, score = _best_in_pool(pool, caps, context_size, task_type)
        if model is not None:
            reason = "; ".join(reasons)
            if reasons:
                logger.warning(
                    f"Tier {tier.value} could not serve request, using {model.name} "
                    f"from {current.value} ({reason})"
                )
            return ModelSelection(
                model=model,
                tier=current,
                score=score,
                fallback_used=bool(reasons),
                fallback_reason=reason,
            )

        if pool:
            reasons.append(f"no {current.value} model fits context {context_size}")
        else:
            reasons.append(f"{current.value} tier is empty")
        current = _next_lower_tier(current)

    for fallback_tier in catalog.tiers:
        for model in catalog.models_for_tier(fallback_tier):
            if model.context_window >= context_size:
                reasons.append("using first catalog model that fits")
                reason = "; ".join(reasons)
                logger.warning(f"Catalog-wide fallback to {model.name} ({reason})")
                return ModelSelection(
                    model=model,
                    tier=fallback_tier,
                    score=calculate_model_score(model, caps, context_size, task_type),
                    fallback_used=True,
                    fallback_reason=reason,
                )

    raise NoSuitableModelError(context_size)
