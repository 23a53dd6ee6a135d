"""
Search provider sub-router.

Picks a search provider for search-flavored queries. Branches are checked
in a fixed order and each carries a constant confidence and explanation:

1. Image intent -> image provider
2. News/recency intent -> recency provider
3. Academic intent -> research provider
4. Local intent -> location provider
5. Entity lookup -> entity provider
6. Low search need -> default provider, reduced confidence
7. Otherwise -> default provider
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable

from loguru import logger

from modelrouter.config.schema import SearchConfig
from modelrouter.routing.history import extract_query_context


class SearchKind(str, Enum):
    """Search intents the sub-router distinguishes."""
    IMAGE = "image"
    NEWS = "news"
    ACADEMIC = "academic"
    LOCAL = "local"
    ENTITY = "entity"
    GENERAL = "general"


@dataclass(frozen=True)
class SearchRoute:
    """Result of search routing."""
    kind: SearchKind
    provider: str
    confidence: float
    explanation: str
    model: str | None = None
    max_results: int | None = None
    include_images: bool = False
    recent_only: bool = False


# Keywords per search intent, in branch order; matched as whole words or phrases
INTENT_KEYWORDS: dict[SearchKind, list[str]] = {
    SearchKind.IMAGE: ["image", "images", "picture", "pictures", "photo", "visual",
                       "look like", "appearance", "how does it look"],
    SearchKind.NEWS: ["news", "latest", "recent", "today", "yesterday", "week", "month",
                      "year", "update", "development"],
    SearchKind.ACADEMIC: ["paper", "papers", "study", "studies", "journal", "academic",
                          "science", "scientific", "publication"],
    SearchKind.LOCAL: ["near me", "nearby", "location", "local", "locally", "in my area",
                       "city", "region", "around me"],
    SearchKind.ENTITY: ["who is", "who was", "what is", "information about", "person",
                        "company", "organization", "product", "entity", "profile"],
}

SEARCH_NEED_KEYWORDS = [
    "search", "find", "look up", "locate", "discover",
    "who", "what", "when", "where", "why", "how",
    "latest", "recent", "current", "new", "today",
    "information", "details", "tell me about",
]


def _keyword_matcher(keywords: Iterable[str]) -> re.Pattern:
    alternatives = "|".join(re.escape(k) for k in keywords)
    return re.compile(rf"\b(?:{alternatives})\b")


_INTENT_MATCHERS = {kind: _keyword_matcher(kws) for kind, kws in INTENT_KEYWORDS.items()}

_WH_WORD = re.compile(r"\b(?:who|what|when|where|why|how)\b")
_QUESTION_LIKE = re.compile(r"^(?:explain|recipe)\b")


def is_interrogative(query: str) -> bool:
    """A WH-word is present and the query ends in a question mark."""
    text = query.strip().lower()
    return text.endswith("?") and bool(_WH_WORD.search(text))


def assess_search_need(query: str) -> float:
    """
    Estimate how much a query needs search, from 0.0 to 1.0.

    0.7 x keyword hit ratio (hits over min(word count, 10)) plus 0.3 for
    interrogative queries.
    """
    lower = query.lower()
    words = lower.split()
    if not words:
        return 0.0

    hits = sum(1 for keyword in SEARCH_NEED_KEYWORDS if keyword in lower)
    ratio = hits / min(len(words), 10)
    return min(ratio * 0.7 + (0.3 if is_interrogative(query) else 0.0), 1.0)


class SearchRouter:
    """
    Routes search-flavored queries to a search provider.

    Stateless apart from its configuration; safe to share between threads.
    """

    def __init__(self, config: SearchConfig | None = None):
        self.config = config or SearchConfig()

    def route(self, query: str, history: Iterable[Any] | None = None) -> SearchRoute:
        """
        Choose a search provider for a query.

        Args:
            query: The search query.
            history: Prior messages; only traced, intent comes from the query.

        Returns:
            SearchRoute with provider, confidence and explanation.
        """
        q = query.lower()
        providers = self.config.providers
        need = assess_search_need(query)
        question_like = is_interrogative(query) or bool(_QUESTION_LIKE.search(q))

        if _INTENT_MATCHERS[SearchKind.IMAGE].search(q):
            route = SearchRoute(
                kind=SearchKind.IMAGE,
                provider=providers.image,
                include_images=True,
                confidence=0.85,
                explanation="Image search requested, using image-capable provider",
            )
        elif _INTENT_MATCHERS[SearchKind.NEWS].search(q):
            route = SearchRoute(
                kind=SearchKind.NEWS,
                provider=providers.news,
                model=providers.recency_model,
                recent_only=True,
                confidence=0.9,
                explanation="News or recent information requested, using recency provider",
            )
        elif _INTENT_MATCHERS[SearchKind.ACADEMIC].search(q):
            route = SearchRoute(
                kind=SearchKind.ACADEMIC,
                provider=providers.academic,
                max_results=self.config.academic_max_results,
                confidence=0.85,
                explanation="Academic or research query detected, using research provider",
            )
        elif _INTENT_MATCHERS[SearchKind.LOCAL].search(q):
            route = SearchRoute(
                kind=SearchKind.LOCAL,
                provider=providers.local,
                confidence=0.8,
                explanation="Local information requested, using location-based provider",
            )
        elif _INTENT_MATCHERS[SearchKind.ENTITY].search(q):
            route = SearchRoute(
                kind=SearchKind.ENTITY,
                provider=providers.entity,
                confidence=0.85,
                explanation="Entity information requested, using entity lookup provider",
            )
        elif need < self.config.threshold and not question_like:
            route = SearchRoute(
                kind=SearchKind.GENERAL,
                provider=providers.general,
                confidence=0.5,
                explanation="Low search need detected; using default provider with low confidence",
            )
        else:
            route = SearchRoute(
                kind=SearchKind.GENERAL,
                provider=providers.general,
                model=providers.recency_model,
                confidence=0.75,
                explanation="Using default provider for general search query",
            )

        context = extract_query_context(history)
        logger.debug(
            f"Search route: {route.kind.value} -> {route.provider} "
            f"(need={need:.2f}, confidence={route.confidence}, context_chars={len(context)})"
        )
        return route
