"""
Query-aware model routing.

Routes requests to catalog models based on query analysis:
- Complexity score and required capabilities
- Tier decision list (baseline -> superior, plus a specialized pool)
- Capability scoring with cost tie-break and fallback cascade
- Response strategy and explanation
- Search provider sub-routing and offline threshold calibration
"""

from modelrouter.routing.classifier import (
    QueryAnalysis,
    analyze_query,
    assess_complexity,
    classify_question,
    detect_capabilities,
    determine_task_type,
    is_casual_greeting,
    is_genuine_search_query,
)
from modelrouter.routing.selector import (
    DISQUALIFIED,
    ModelSelection,
    TierThresholds,
    calculate_model_score,
    calculate_model_tier,
    find_best_model_for_tier,
)
from modelrouter.routing.strategy import get_response_strategy
from modelrouter.routing.explain import complexity_level, generate_routing_explanation
from modelrouter.routing.search import SearchKind, SearchRoute, SearchRouter, assess_search_need
from modelrouter.routing.history import (
    Message,
    calculate_context_length,
    extract_query_context,
    message_content,
)
from modelrouter.routing.router import (
    FALLBACK_CONFIDENCE,
    ModelRouter,
    RoutingDecision,
    create_router_from_config,
)
from modelrouter.routing.calibration import (
    CalibrationResult,
    CalibrationSample,
    RouterCalibration,
)

__all__ = [
    "QueryAnalysis",
    "analyze_query",
    "assess_complexity",
    "classify_question",
    "detect_capabilities",
    "determine_task_type",
    "is_casual_greeting",
    "is_genuine_search_query",
    "DISQUALIFIED",
    "ModelSelection",
    "TierThresholds",
    "calculate_model_score",
    "calculate_model_tier",
    "find_best_model_for_tier",
    "get_response_strategy",
    "complexity_level",
    "generate_routing_explanation",
    "SearchKind",
    "SearchRoute",
    "SearchRouter",
    "assess_search_need",
    "FALLBACK_CONFIDENCE",
    "Message",
    "ModelRouter",
    "RoutingDecision",
    "calculate_context_length",
    "extract_query_context",
    "message_content",
    "create_router_from_config",
    "CalibrationResult",
    "CalibrationSample",
    "RouterCalibration",
]
