"""
Query analyzer for model routing.

Pure functions that turn query text into routing signals:
1. Complexity score (capped feature sum)
2. Required capabilities (pattern table)
3. Question type and task type (ordered decision lists)
4. Precision gates: casual greetings, genuine search needs

Every rule table maps a tag to an ordered list of patterns and is evaluated
by the same first-match-wins fold, so each entry can be tested on its own.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Sequence

from modelrouter.catalog.models import Capability


# Capability detection patterns (case-insensitive, word-bounded)
CAPABILITY_PATTERNS: dict[Capability, list[str]] = {
    Capability.REASONING: [
        r"\breason(?:s|ed|ing)?\b",
        r"\banaly[sz](?:e|es|ed|ing|is)\b",
        r"\bevaluat(?:e|es|ed|ing|ion)\b",
        r"\bcompar(?:e|es|ed|ing|ison)\b",
        r"\bcritique\b",
        r"\bjudge\b",
        r"\bconclusions?\b",
        r"\bstrateg(?:y|ies)\b",
        r"\bpros and cons\b",
        r"\btrade-?offs?\b",
    ],
    Capability.CODE: [
        r"\bcod(?:e|es|ed|ing)\b",
        r"\bprogram(?:s|med|ming)?\b",
        r"\bfunctions?\b",
        r"\bdebug\w*",
        r"\bclass(?:es)?\b",
        r"\bapis?\b",
        r"\bdevelop\b",
        r"\balgorithms?\b",
        r"\breact\b",
        r"\bjavascript\b",
        r"\btypescript\b",
        r"\bpython\b",
        r"\bsql\b",
    ],
    Capability.MATH: [
        r"\bmath(?:s|ematics|ematical)?\b",
        r"\bcalculat(?:e|es|ed|ing|ion)\b",
        r"\bequations?\b",
        r"\bderivatives?\b",
        r"\bprove\b",
        r"\btheorems?\b",
        r"\bstatistics\b",
        r"\balgebra\b",
        r"\bintegrals?\b",
    ],
    Capability.CREATIVITY: [
        r"\bcreat(?:e|es|ed|ing)\b",
        r"\bgenerat(?:e|es|ed|ing)\b",
        r"\bwrit(?:e|es|ing)\b",
        r"\bdesign(?:s|ed|ing)?\b",
        r"\bstor(?:y|ies)\b",
        r"\bpoems?\b",
        r"\bcreative\b",
        r"\bimagine\b",
    ],
    Capability.KNOWLEDGE: [
        r"\bexplain\b",
        r"\bwhat is\b",
        r"\bdescribe\b",
        r"\bdefine\b",
        r"\bhistory\b",
        r"\bscience\b",
        r"\bfacts\b",
        r"\binformation\b",
    ],
    Capability.SEARCH: [
        r"\bsearch\b",
        r"\bfind online\b",
        r"\bcurrent\b",
        r"\blatest\b",
        r"\brecent\b",
        r"\bnews\b",
        r"\btoday\b",
        r"\bupdated\b",
    ],
    Capability.COMPUTER_USE: [
        r"\buse (?:the |my |a )?computer\b",
        r"\bcontrol (?:the |my )?browser\b",
        r"\bautomation\b",
        r"\binteract with\b",
        r"\bwebsites?\b",
        r"\bbrowse\b",
    ],
    Capability.LONG_CONTEXT: [
        r"\bdocuments?\b",
        r"\blong\b",
        r"\bextensive\b",
        r"\bthorough\b",
        r"\bcomprehensive\b",
        r"\bdetailed\b",
        r"\bcomplete\b",
    ],
    Capability.REALTIME: [
        r"\bquick\b",
        r"\bfast\b",
        r"\bimmediate\b",
        r"\binstant\b",
        r"\breal-?time\b",
        r"\bresponsive\b",
        r"\brapid\b",
    ],
}

# Question type decision list (first match wins)
QUESTION_TYPE_RULES: list[tuple[str, list[str]]] = [
    ("procedural", [r"\b(?:how|why|explain)\b"]),
    ("factual", [r"\b(?:what|who|where|when)\b"]),
    ("yes_no", [r"^(?:is|are|can|do|does)\b"]),
    ("analytical", [r"\b(?:compare|contrast|analy[sz]e|evaluate)\b"]),
    ("casual", [r"\b(?:hi|hello|hey)\b", r"\bhow are you\b"]),
    ("creative", [r"\b(?:create|write|generate|make)\b"]),
    ("coding", [r"\b(?:code|function|program)\b"]),
]

# Task type decision list (first match wins)
TASK_TYPE_RULES: list[tuple[str, list[str]]] = [
    ("coding", [r"\b(?:code|function|program|algorithm)\b", r"\bdebug\w*"]),
    ("analysis", [r"\b(?:analy[sz]e|compare|evaluate|assess)\b"]),
    ("creative", [r"\b(?:create|write|generate|design)\b"]),
    ("search", [r"\b(?:search|find|latest|current|updated)\b"]),
    ("math", [r"\b(?:math|calculate|equation|formula|solve)\b"]),
    ("educational", [r"\b(?:explain|describe)\b", r"\bwhat is\b", r"\btell me about\b"]),
]

DEFAULT_QUESTION_TYPE = "general"
DEFAULT_TASK_TYPE = "general"

GREETING_PATTERNS = [
    r"^(?:hi|hello|hey|greetings|good morning|good afternoon|good evening)(?: there)?!?$",
    r"^how are you(?: doing| today)?[?!]?$",
    r"^what'?s up[?!]?$",
    r"^yo!?$",
    r"^(?:hi|hello|hey),? (?:there )?(?:claude|assistant|ai)!?$",
]

# Queries that look like search but don't need fresh information
NON_SEARCH_PATTERNS = [
    r"\bwhat is the (?:meaning|definition|purpose) of\b",
    r"\bhow (?:do|does|can) .* work\b",
    r"\bexplain .* to me\b",
    r"\bteach me about\b",
    r"\bhow (?:do|to) (?:i|you) (?:code|program|implement|write code for)\b",
    r"\bwhat (?:do you think|is your opinion|are your thoughts)\b",
    r"\bhelp me (?:with|understand|learn)\b",
]

STRONG_SEARCH_INDICATORS = [
    "latest version",
    "current price",
    "recent studies",
    "new research",
    "upcoming event",
    "just announced",
    "breaking news",
]

# Complexity vocabularies
_QUESTION_WORDS = re.compile(r"\b(?:how|why|what|when|where|who)\b", re.IGNORECASE)
_TECHNICAL_TERMS = re.compile(
    r"\b(?:algorithm|function|process|system|analyze|evaluate|compare|implement|"
    r"architecture|framework|infrastructure|methodology)\b",
    re.IGNORECASE,
)
_CODE_TERMS = re.compile(
    r"\b(?:code|program|debug|function|api|class|method|algorithm)\b",
    re.IGNORECASE,
)
_STEP_WORDS = re.compile(
    r"\b(?:and|then|after|before|finally|first|second|third|next|last)\b",
    re.IGNORECASE,
)
_STRUCTURE_WORDS = re.compile(
    r"\b(?:if|else|while|for|switch|case|however|although|despite|"
    r"nevertheless|furthermore|moreover)\b",
    re.IGNORECASE,
)
_DOMAIN_TERMS = re.compile(
    r"\b(?:quantum|neural|genome|blockchain|cryptocurrency|theorem|philosophy|"
    r"molecular|theoretical|computational|statistical|mathematical)\b",
    re.IGNORECASE,
)


def _compile(patterns: Iterable[str]) -> tuple[re.Pattern, ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


_CAPABILITY_MATCHERS = {cap: _compile(p) for cap, p in CAPABILITY_PATTERNS.items()}
_QUESTION_MATCHERS = [(tag, _compile(p)) for tag, p in QUESTION_TYPE_RULES]
_TASK_MATCHERS = [(tag, _compile(p)) for tag, p in TASK_TYPE_RULES]
_GREETING_MATCHERS = _compile(GREETING_PATTERNS)
_NON_SEARCH_MATCHERS = _compile(NON_SEARCH_PATTERNS)


def matches_any(patterns: Sequence[re.Pattern], text: str) -> bool:
    """True if any compiled pattern matches somewhere in text."""
    return any(p.search(text) for p in patterns)


def first_match(
    rules: Sequence[tuple[str, Sequence[re.Pattern]]],
    text: str,
    default: str,
) -> str:
    """
    Evaluate an ordered rule table.

    Args:
        rules: (tag, patterns) pairs in priority order.
        text: Text to classify.
        default: Tag returned when no rule matches.

    Returns:
        The tag of the first rule with a matching pattern.
    """
    for tag, patterns in rules:
        if matches_any(patterns, text):
            return tag
    return default


@dataclass(frozen=True)
class QueryAnalysis:
    """Routing signals extracted from one query."""
    complexity: float
    capabilities: frozenset[Capability]
    task_type: str
    question_type: str
    is_greeting: bool = False
    search_suppressed: bool = False  # SEARCH matched but failed the precision gate


def assess_complexity(query: str) -> float:
    """
    Score how demanding a query is, from 0.0 to 1.0.

    Each feature is capped independently; the sum is scaled by 1/4
    and clamped.
    """
    factors = {
        "length": min(len(query) / 500, 0.8),
        "question_count": min(query.count("?") * 0.2, 0.6),
        "question_words": min(len(_QUESTION_WORDS.findall(query)) * 0.08, 0.4),
        "technical_terms": min(len(_TECHNICAL_TERMS.findall(query)) * 0.12, 0.6),
        "code_related": 0.25 if _CODE_TERMS.search(query) else 0.0,
        "multiple_steps": min(len(_STEP_WORDS.findall(query)) * 0.08, 0.4),
        "complex_structures": min(len(_STRUCTURE_WORDS.findall(query)) * 0.12, 0.5),
        "domain_specific": min(len(_DOMAIN_TERMS.findall(query)) * 0.15, 0.6),
    }
    return min(max(sum(factors.values()) / 4, 0.0), 1.0)


def detect_capabilities(query: str, long_context_words: int = 100) -> frozenset[Capability]:
    """Capabilities whose patterns match the query."""
    detected = {
        cap for cap, patterns in _CAPABILITY_MATCHERS.items()
        if matches_any(patterns, query)
    }
    if len(query.split()) > long_context_words:
        detected.add(Capability.LONG_CONTEXT)
    return frozenset(detected)


def is_casual_greeting(query: str) -> bool:
    """True for short stand-alone greetings like "Hi there!"."""
    text = query.strip()
    return any(p.match(text) for p in _GREETING_MATCHERS)


def is_genuine_search_query(query: str) -> bool:
    """
    Second check for SEARCH-flagged queries.

    General-knowledge phrasings ("how does X work", "explain X to me")
    don't need fresh information unless a strong current-information
    signal is also present.
    """
    lower = query.lower()
    if any(indicator in lower for indicator in STRONG_SEARCH_INDICATORS):
        return True
    return not matches_any(_NON_SEARCH_MATCHERS, lower)


def classify_question(query: str) -> str:
    """Classify the question type. Defined for every input."""
    if is_casual_greeting(query):
        return "casual"
    return first_match(_QUESTION_MATCHERS, query.lower(), DEFAULT_QUESTION_TYPE)


def determine_task_type(query: str) -> str:
    """Classify the task type. Independent of classify_question()."""
    return first_match(_TASK_MATCHERS, query.lower(), DEFAULT_TASK_TYPE)


def analyze_query(query: str, long_context_words: int = 100) -> QueryAnalysis:
    """
    Run the full analysis pipeline.

    Args:
        query: The user query.
        long_context_words: Word count above which LONG_CONTEXT is forced.

    Returns:
        QueryAnalysis for the query.
    """
    capabilities = detect_capabilities(query, long_context_words)
    suppressed = False
    if Capability.SEARCH in capabilities and not is_genuine_search_query(query):
        capabilities = capabilities - {Capability.SEARCH}
        suppressed = True

    return QueryAnalysis(
        complexity=assess_complexity(query),
        capabilities=capabilities,
        task_type=determine_task_type(query),
        question_type=classify_question(query),
        is_greeting=is_casual_greeting(query),
        search_suppressed=suppressed,
    )
