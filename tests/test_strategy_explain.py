"""
Tests for response strategies and routing explanations.
"""

import pytest

from modelrouter.catalog import Capability, ModelDescriptor, Tier
from modelrouter.routing.explain import complexity_level, generate_routing_explanation
from modelrouter.routing.strategy import (
    DEFAULT_STRATEGY,
    QUESTION_STRATEGIES,
    get_response_strategy,
)


class TestResponseStrategy:
    """Tests for strategy lookup."""

    def test_question_type_takes_precedence(self):
        assert get_response_strategy("procedural", "coding") == "step_by_step_explanation"

    def test_task_type_used_when_question_has_none(self):
        assert get_response_strategy("general", "math") == "step_by_step_solution"
        assert get_response_strategy("general", "educational") == "conceptual_explanation"

    def test_default_strategy(self):
        assert get_response_strategy("general", "general") == DEFAULT_STRATEGY
        assert get_response_strategy("unknown", "unknown") == "balanced_response"

    @pytest.mark.parametrize("question_type", sorted(QUESTION_STRATEGIES))
    def test_every_question_type_has_strategy(self, question_type):
        assert get_response_strategy(question_type, "general") == QUESTION_STRATEGIES[question_type]


class TestComplexityLevel:
    """Tests for complexity band labels."""

    @pytest.mark.parametrize("complexity,expected", [
        (0.0, "simple"),
        (0.29, "simple"),
        (0.3, "moderate"),
        (0.5, "significant"),
        (0.7, "high"),
        (0.9, "very high"),
        (1.0, "very high"),
    ])
    def test_bands(self, complexity, expected):
        assert complexity_level(complexity) == expected


class TestRoutingExplanation:
    """Tests for explanation formatting."""

    @pytest.fixture
    def model(self):
        return ModelDescriptor(
            name="gpt-4o-mini", provider="openai", max_tokens=4096,
            context_window=128_000, cost_tier=1,
        )

    def test_without_capabilities(self, model):
        text = generate_routing_explanation(model, Tier.BASELINE, 0.1, frozenset(), "general")

        assert text == (
            "Selected gpt-4o-mini (openai) from the baseline tier for simple "
            "complexity general task. This model has a 128k context window "
            "with a cost tier of 1/5."
        )

    def test_capabilities_in_declaration_order(self, model):
        caps = {Capability.CODE, Capability.REASONING}
        text = generate_routing_explanation(model, Tier.ADVANCED, 0.75, caps, "coding")

        assert "requiring capabilities: REASONING, CODE." in text
        assert "high complexity coding task" in text
