"""
Tests for tier and model selection.

Tests:
- Tier decision list and threshold boundaries
- Model scoring and disqualification
- Tie-breaking by cost then catalog order
- Fallback cascade and catalog-wide fallback
"""

import pytest

from modelrouter.catalog import Capability, Tier
from modelrouter.errors import NoSuitableModelError
from modelrouter.routing.selector import (
    DISQUALIFIED,
    TierThresholds,
    calculate_model_score,
    calculate_model_tier,
    find_best_model_for_tier,
)


class TestCalculateModelTier:
    """Tests for the tier decision list."""

    @pytest.mark.parametrize("complexity,expected", [
        (0.0, Tier.BASELINE),
        (0.3, Tier.BASELINE),
        (0.39, Tier.BASELINE),
        (0.4, Tier.BASELINE),
        (0.41, Tier.STANDARD),
        (0.6, Tier.STANDARD),
        (0.61, Tier.ADVANCED),
        (0.8, Tier.ADVANCED),
        (0.81, Tier.SUPERIOR),
        (1.0, Tier.SUPERIOR),
    ])
    def test_complexity_boundaries(self, complexity, expected):
        assert calculate_model_tier(complexity, frozenset()) == expected

    @pytest.mark.parametrize("capability", [
        Capability.MATH, Capability.SEARCH, Capability.COMPUTER_USE,
    ])
    def test_specialized_capabilities(self, capability):
        assert calculate_model_tier(0.1, {capability}) == Tier.SPECIALIZED

    def test_superior_beats_specialized(self):
        assert calculate_model_tier(0.9, {Capability.SEARCH}) == Tier.SUPERIOR

    def test_specialized_beats_reasoning(self):
        caps = {Capability.SEARCH, Capability.REASONING}
        assert calculate_model_tier(0.2, caps) == Tier.SPECIALIZED

    def test_reasoning_is_advanced(self):
        assert calculate_model_tier(0.0, {Capability.REASONING}) == Tier.ADVANCED

    @pytest.mark.parametrize("capability", [Capability.CODE, Capability.CREATIVITY])
    def test_code_and_creativity_are_standard(self, capability):
        assert calculate_model_tier(0.0, {capability}) == Tier.STANDARD

    def test_knowledge_alone_is_baseline(self):
        assert calculate_model_tier(0.1, {Capability.KNOWLEDGE}) == Tier.BASELINE

    def test_custom_thresholds(self):
        thresholds = TierThresholds(superior=0.9, advanced=0.3, standard=0.1)
        assert calculate_model_tier(0.35, frozenset(), thresholds) == Tier.ADVANCED
        assert calculate_model_tier(0.85, frozenset(), thresholds) == Tier.ADVANCED


class TestCalculateModelScore:
    """Tests for model scoring."""

    def test_base_score(self, make_model):
        model = make_model("m", context_window=1000)
        assert calculate_model_score(model, frozenset(), 100, "general") == 2

    def test_too_small_is_disqualified(self, make_model):
        model = make_model("m", context_window=1000)
        assert calculate_model_score(model, frozenset(), 1001, "general") == DISQUALIFIED

    def test_exact_fit_is_admitted(self, make_model):
        model = make_model("m", context_window=1000)
        assert calculate_model_score(model, frozenset(), 1000, "general") == 2

    def test_supported_capabilities_add_points(self, make_model):
        model = make_model("m", supports_reasoning=True, supports_search=True)
        caps = {Capability.REASONING, Capability.SEARCH, Capability.COMPUTER_USE}
        assert calculate_model_score(model, caps, 10, "general") == 6

    def test_unrequested_support_adds_nothing(self, make_model):
        model = make_model("m", supports_reasoning=True)
        assert calculate_model_score(model, frozenset(), 10, "general") == 2

    def test_domain_match_is_case_insensitive(self, make_model):
        model = make_model("m", specialized_domains=("Math",))
        assert calculate_model_score(model, frozenset(), 10, "math") == 5

    def test_realtime_prefers_streaming(self, make_model):
        streaming = make_model("s", streaming_optimized=True)
        plain = make_model("p")
        caps = {Capability.REALTIME}
        assert calculate_model_score(streaming, caps, 10, "general") == 4
        assert calculate_model_score(plain, caps, 10, "general") == 2


class TestFindBestModel:
    """Tests for model selection within a tier."""

    def test_highest_score_wins(self, make_model, make_catalog):
        plain = make_model("plain")
        reasoner = make_model("reasoner", supports_reasoning=True, cost_tier=3)
        catalog = make_catalog({Tier.ADVANCED: [plain, reasoner]})

        selection = find_best_model_for_tier(
            catalog, Tier.ADVANCED, {Capability.REASONING}, 10, "analysis"
        )
        assert selection.model.name == "reasoner"
        assert selection.score == 4
        assert not selection.fallback_used

    def test_tie_goes_to_cheaper_model(self, make_model, make_catalog):
        pricey = make_model("pricey", cost_tier=3)
        cheap = make_model("cheap", cost_tier=2)
        catalog = make_catalog({Tier.STANDARD: [pricey, cheap]})

        selection = find_best_model_for_tier(catalog, Tier.STANDARD, frozenset(), 10)
        assert selection.model.name == "cheap"

    def test_full_tie_goes_to_catalog_order(self, make_model, make_catalog):
        first = make_model("first", cost_tier=2)
        second = make_model("second", cost_tier=2)
        catalog = make_catalog({Tier.STANDARD: [first, second]})

        selection = find_best_model_for_tier(catalog, Tier.STANDARD, frozenset(), 10)
        assert selection.model.name == "first"

    def test_selected_model_fits_context(self, catalog):
        for size in (10, 5_000, 150_000, 500_000, 1_000_000):
            selection = find_best_model_for_tier(catalog, Tier.BASELINE, frozenset(), size)
            assert selection.model.context_window >= size


class TestFallbackCascade:
    """Tests for the tier fallback cascade."""

    def test_empty_advanced_descends_to_standard(self, make_model, make_catalog):
        catalog = make_catalog({
            Tier.STANDARD: [make_model("standard-model")],
            Tier.BASELINE: [make_model("baseline-model")],
        })
        selection = find_best_model_for_tier(catalog, Tier.ADVANCED, frozenset(), 10)

        assert selection.model.name == "standard-model"
        assert selection.tier == Tier.STANDARD
        assert selection.fallback_used
        assert "advanced tier is empty" in selection.fallback_reason

    def test_descends_to_baseline(self, make_model, make_catalog):
        catalog = make_catalog({Tier.BASELINE: [make_model("baseline-model")]})
        selection = find_best_model_for_tier(catalog, Tier.ADVANCED, frozenset(), 10)

        assert selection.model.name == "baseline-model"
        assert selection.tier == Tier.BASELINE
        assert selection.fallback_used

    @pytest.mark.parametrize("tier", [Tier.SUPERIOR, Tier.SPECIALIZED])
    def test_top_tiers_fall_back_to_advanced(self, tier, make_model, make_catalog):
        catalog = make_catalog({
            Tier.ADVANCED: [make_model("advanced-model")],
            Tier.STANDARD: [make_model("standard-model")],
        })
        selection = find_best_model_for_tier(catalog, tier, frozenset(), 10)

        assert selection.model.name == "advanced-model"
        assert selection.tier == Tier.ADVANCED

    def test_all_disqualified_pool_descends(self, make_model, make_catalog):
        catalog = make_catalog({
            Tier.ADVANCED: [make_model("small", context_window=100)],
            Tier.STANDARD: [make_model("large", context_window=10_000)],
        })
        selection = find_best_model_for_tier(catalog, Tier.ADVANCED, frozenset(), 500)

        assert selection.model.name == "large"
        assert selection.fallback_used
        assert "no advanced model fits context 500" in selection.fallback_reason

    def test_catalog_wide_fallback(self, make_model, make_catalog):
        catalog = make_catalog({
            Tier.BASELINE: [make_model("small", context_window=100)],
            Tier.SPECIALIZED: [
                make_model("medium", context_window=1_000),
                make_model("huge", context_window=100_000),
            ],
        })
        selection = find_best_model_for_tier(catalog, Tier.BASELINE, frozenset(), 500)

        # First fit in catalog order, not best fit
        assert selection.model.name == "medium"
        assert selection.tier == Tier.SPECIALIZED
        assert selection.fallback_used
        assert "first catalog model" in selection.fallback_reason

    def test_nothing_fits_raises(self, make_model, make_catalog):
        catalog = make_catalog({Tier.BASELINE: [make_model("small", context_window=100)]})

        with pytest.raises(NoSuitableModelError) as exc_info:
            find_best_model_for_tier(catalog, Tier.SUPERIOR, frozenset(), 101)
        assert exc_info.value.context_size == 101

    def test_empty_catalog_raises(self, make_catalog):
        with pytest.raises(NoSuitableModelError):
            find_best_model_for_tier(make_catalog({}), Tier.BASELINE, frozenset(), 1)
