"""Built-in model catalog."""

from types import MappingProxyType
from typing import Mapping

from modelrouter.catalog.models import ModelCatalog, ModelDescriptor, Tier


_OPENAI = {
    "endpoint": "https://api.openai.com/v1/responses",
    "api_version": "2024-02-15",
    "response_format": "json",
}
_ANTHROPIC = {
    "endpoint": "https://api.anthropic.com/v1/messages",
    "api_version": "2023-06-01",
    "headers": {"anthropic-version": "2023-06-01"},
}
_GOOGLE = {
    "endpoint": "https://generativelanguage.googleapis.com/v1/models",
    "params": {"api_key_env": "GOOGLE_API_KEY"},
}
_PERPLEXITY = {"endpoint": "https://api.perplexity.ai/chat/completions"}
_XAI = {"endpoint": "https://api.x.ai/v1/chat/completions"}


DEFAULT_MODELS: Mapping[Tier, tuple[ModelDescriptor, ...]] = MappingProxyType({
    Tier.BASELINE: (
        ModelDescriptor(
            name="gpt-4o-mini", provider="openai", max_tokens=4096,
            context_window=128_000, streaming_optimized=True, cost_tier=1,
            connection=_OPENAI,
        ),
        ModelDescriptor(
            name="claude-3-5-haiku-latest", provider="anthropic", max_tokens=4096,
            context_window=200_000, streaming_optimized=True, cost_tier=1,
            connection=_ANTHROPIC,
        ),
        ModelDescriptor(
            name="gemini-2.0-flash-lite", provider="google", max_tokens=2048,
            context_window=128_000, streaming_optimized=True, cost_tier=1,
            connection=_GOOGLE,
        ),
    ),
    Tier.STANDARD: (
        ModelDescriptor(
            name="gpt-4o-latest", provider="openai", max_tokens=8192,
            supports_reasoning=True, supports_search=True,
            context_window=128_000, streaming_optimized=True, cost_tier=2,
            connection=_OPENAI,
        ),
        ModelDescriptor(
            name="claude-3-5-sonnet-latest", provider="anthropic", max_tokens=8192,
            supports_reasoning=True, context_window=200_000, cost_tier=2,
            connection=_ANTHROPIC,
        ),
        ModelDescriptor(
            name="gemini-2.0-flash", provider="google", max_tokens=8192,
            supports_search=True, context_window=128_000,
            streaming_optimized=True, cost_tier=2,
            connection=_GOOGLE,
        ),
        ModelDescriptor(
            name="sonar", provider="perplexity", max_tokens=4096, temperature=0.2,
            supports_search=True, context_window=128_000,
            specialized_domains=("search",), cost_tier=2,
            connection=_PERPLEXITY,
        ),
    ),
    Tier.ADVANCED: (
        ModelDescriptor(
            name="gpt-4.1", provider="openai", max_tokens=16384,
            supports_reasoning=True, supports_search=True, supports_computer_use=True,
            context_window=1_047_576, cost_tier=3,
            connection=_OPENAI,
        ),
        ModelDescriptor(
            name="claude-3-7-sonnet-20250219", provider="anthropic", max_tokens=8192,
            supports_reasoning=True, supports_computer_use=True,
            context_window=200_000, cost_tier=3,
            connection=_ANTHROPIC,
        ),
        ModelDescriptor(
            name="sonar-pro", provider="perplexity", max_tokens=4096, temperature=0.2,
            supports_search=True, context_window=200_000,
            specialized_domains=("search",), cost_tier=3,
            connection=_PERPLEXITY,
        ),
    ),
    Tier.SUPERIOR: (
        ModelDescriptor(
            name="o1", provider="openai", max_tokens=32768,
            supports_reasoning=True, supports_search=True, supports_computer_use=True,
            context_window=200_000, specialized_domains=("reasoning", "planning"),
            cost_tier=5, connection=_OPENAI,
        ),
        ModelDescriptor(
            name="gemini-2.5-pro-exp-03-25", provider="google", max_tokens=32768,
            supports_reasoning=True, supports_search=True,
            context_window=1_000_000, specialized_domains=("reasoning", "math"),
            cost_tier=4, connection=_GOOGLE,
        ),
        ModelDescriptor(
            name="grok-3-beta", provider="xai", max_tokens=16384,
            context_window=131_072, specialized_domains=("reasoning",),
            cost_tier=4, connection=_XAI,
        ),
        ModelDescriptor(
            name="sonar-reasoning-pro", provider="perplexity", max_tokens=8192,
            temperature=0.2, supports_reasoning=True, supports_search=True,
            context_window=128_000, specialized_domains=("search", "reasoning"),
            cost_tier=4, connection=_PERPLEXITY,
        ),
    ),
    Tier.SPECIALIZED: (
        ModelDescriptor(
            name="o3-mini-2025-01-31", provider="openai", max_tokens=16384,
            supports_reasoning=True, context_window=200_000,
            specialized_domains=("math", "science", "reasoning"),
            cost_tier=2, connection=_OPENAI,
        ),
        ModelDescriptor(
            name="gpt-4o-realtime-preview", provider="openai", max_tokens=4096,
            context_window=128_000, streaming_optimized=True,
            specialized_domains=("realtime", "streaming"),
            cost_tier=3, connection=_OPENAI,
        ),
        ModelDescriptor(
            name="gpt-4.5-preview", provider="openai", max_tokens=16384,
            supports_reasoning=True, context_window=128_000,
            specialized_domains=("creative", "open-ended"),
            cost_tier=4, connection=_OPENAI,
        ),
        ModelDescriptor(
            name="grok-3-mini-beta", provider="xai", max_tokens=8192,
            supports_reasoning=True, context_window=131_072,
            specialized_domains=("reasoning", "math"),
            cost_tier=1, connection=_XAI,
        ),
        ModelDescriptor(
            name="tavily-search", provider="tavily", max_tokens=4096,
            supports_search=True, context_window=4000,
            specialized_domains=("search",), cost_tier=1,
            connection={"endpoint": "https://api.tavily.com/search"},
        ),
    ),
})


def create_default_catalog() -> ModelCatalog:
    """Create the built-in catalog."""
    return ModelCatalog(DEFAULT_MODELS)
