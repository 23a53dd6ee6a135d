"""Response strategy selection."""

# Question type -> strategy (takes precedence)
QUESTION_STRATEGIES: dict[str, str] = {
    "procedural": "step_by_step_explanation",
    "factual": "direct_answer",
    "yes_no": "binary_with_explanation",
    "analytical": "comparative_analysis",
    "casual": "conversational",
    "creative": "creative_generation",
    "coding": "code_with_explanation",
}

# Task type -> strategy (used when the question type has none)
TASK_STRATEGIES: dict[str, str] = {
    "coding": "code_with_explanation",
    "analysis": "analytical_framework",
    "creative": "creative_generation",
    "search": "search_and_synthesize",
    "math": "step_by_step_solution",
    "educational": "conceptual_explanation",
}

DEFAULT_STRATEGY = "balanced_response"


def get_response_strategy(question_type: str, task_type: str) -> str:
    """Pick a strategy: question type first, then task type, then the default."""
    strategy = QUESTION_STRATEGIES.get(question_type)
    if strategy:
        return strategy
    return TASK_STRATEGIES.get(task_type, DEFAULT_STRATEGY)
