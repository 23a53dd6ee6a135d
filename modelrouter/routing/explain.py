"""Human-readable routing explanations."""

from typing import Iterable

from modelrouter.catalog.models import Capability, ModelDescriptor, Tier, sort_capabilities


# Upper bounds (exclusive) of each complexity band
COMPLEXITY_BANDS: list[tuple[float, str]] = [
    (0.3, "simple"),
    (0.5, "moderate"),
    (0.7, "significant"),
    (0.9, "high"),
]


def complexity_level(complexity: float) -> str:
    """Label a complexity score."""
    for bound, label in COMPLEXITY_BANDS:
        if complexity < bound:
            return label
    return "very high"


def generate_routing_explanation(
    model: ModelDescriptor,
    tier: Tier,
    complexity: float,
    capabilities: Iterable[Capability],
    task_type: str,
) -> str:
    """
    Format the explanation for a routing decision.

    Example:
        "Selected gpt-4o-mini (openai) from the baseline tier for simple
        complexity general task. This model has a 128k context window with
        a cost tier of 1/5."
    """
    caps = sort_capabilities(capabilities)
    capabilities_text = ""
    if caps:
        capabilities_text = " requiring capabilities: " + ", ".join(c.value for c in caps)

    return (
        f"Selected {model.name} ({model.provider}) from the {tier.value} tier "
        f"for {complexity_level(complexity)} complexity {task_type} task"
        f"{capabilities_text}. "
        f"This model has a {model.context_window / 1000:g}k context window "
        f"with a cost tier of {model.cost_tier}/5."
    )
