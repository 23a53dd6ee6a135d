"""
Offline threshold calibration.

Sweeps the advanced-tier complexity cutoff over a fixed range. At each
candidate a fresh router is built, every labeled sample is routed, and the
candidate is scored:

    0.4 x distribution closeness + 0.3 x mean confidence + 0.3 x accuracy

The router is treated as a black box and never modified. Run this
out-of-band and put the winning value in the configuration.
"""

import json
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Sequence

from loguru import logger

from modelrouter.config.schema import CalibrationConfig, RouterSettings, TierThresholdsConfig
from modelrouter.errors import CalibrationError
from modelrouter.routing.router import ModelRouter, RoutingDecision


RouterFactory = Callable[[float], Any]  # threshold -> object with route(query, history)


@dataclass(frozen=True)
class CalibrationSample:
    """A labeled query."""
    query: str
    expected_model: str


@dataclass
class ThresholdEvaluation:
    """Measurements for one candidate threshold."""
    threshold: float
    model_distribution: dict[str, float]
    average_confidence: float
    accuracy: float
    score: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "threshold": self.threshold,
            "model_distribution": dict(self.model_distribution),
            "average_confidence": self.average_confidence,
            "accuracy": self.accuracy,
            "score": self.score,
        }


@dataclass
class CalibrationResult:
    """Outcome of a calibration sweep."""
    threshold: float
    score: float
    model_distribution: dict[str, float]
    average_confidence: float
    accuracy: float
    evaluations: list[ThresholdEvaluation] = field(default_factory=list)
    conclusive: bool = True  # False when every candidate scored the same

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "threshold": self.threshold,
            "score": self.score,
            "model_distribution": dict(self.model_distribution),
            "average_confidence": self.average_confidence,
            "accuracy": self.accuracy,
            "evaluations": [e.to_dict() for e in self.evaluations],
            "conclusive": self.conclusive,
        }


DEFAULT_SAMPLES: list[CalibrationSample] = [
    # Coding
    CalibrationSample("Write a TypeScript implementation of a B-tree", "gpt-4o-latest"),
    CalibrationSample("Debug this React component with memory leaks", "gpt-4o-latest"),
    # Creative
    CalibrationSample("Write a story about time travel", "gpt-4o-latest"),
    CalibrationSample("Generate innovative app ideas", "gpt-4o-latest"),
    # Search
    CalibrationSample("Find recent AI developments", "tavily-search"),
    CalibrationSample("Search the latest news on quantum computing", "tavily-search"),
    # Complex reasoning
    CalibrationSample("Design a distributed system architecture", "gpt-4o-latest"),
    CalibrationSample("Analyze microservices vs monoliths", "gpt-4.1"),
    # Complexity inside the sweep range, no capability override
    CalibrationSample(
        "How would you implement a distributed system architecture, and then migrate "
        "the framework if the statistical model changes? What about the infrastructure? "
        "Why does it matter?",
        "gpt-4.1",
    ),
    CalibrationSample(
        "How would I migrate the framework and then the infrastructure of the whole "
        "system, if the statistical model changes? However, what about the architecture?",
        "gpt-4o-latest",
    ),
    # Simple
    CalibrationSample("What time is it?", "gpt-4o-mini"),
    CalibrationSample("Hello there!", "gpt-4o-mini"),
]

DEFAULT_TARGET_DISTRIBUTION: dict[str, float] = {
    "gpt-4o-latest": 0.5,  # Coding, creative, design
    "tavily-search": 0.2,  # Search
    "gpt-4.1": 0.1,        # Analysis
    "gpt-4o-mini": 0.2,    # Simple
}


def distribution_closeness(
    achieved: dict[str, float],
    target: dict[str, float],
) -> float:
    """1 minus half the L1 distance over the target's models (1.0 = exact)."""
    diff = sum(abs(achieved.get(model, 0.0) - share) for model, share in target.items())
    return 1 - diff / 2


def load_samples(path: Path | str) -> tuple[list[CalibrationSample], dict[str, float] | None]:
    """
    Load samples (and optionally a target distribution) from JSON.

    Expected layout:
        {"samples": [{"query": "...", "expected_model": "..."}],
         "target_distribution": {"model": 0.5}}

    Raises:
        CalibrationError: If the file is missing or malformed.
    """
    path = Path(path).expanduser()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise CalibrationError(f"Failed to read samples {path}: {e}") from e

    try:
        samples = [
            CalibrationSample(query=item["query"], expected_model=item["expected_model"])
            for item in data["samples"]
        ]
        target = data.get("target_distribution")
        if target is not None:
            target = {str(k): float(v) for k, v in target.items()}
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise CalibrationError(f"Malformed samples file {path}: {e}") from e

    return samples, target


def default_router_factory(
    router: ModelRouter | None = None,
) -> RouterFactory:
    """Factory building routers that differ from `router` only in the advanced cutoff."""
    base = router or ModelRouter()

    def build(threshold: float) -> ModelRouter:
        return base.with_settings(base.settings.with_advanced_threshold(threshold))

    return build


class RouterCalibration:
    """
    Chooses the advanced-tier threshold from labeled samples.

    Each sample is routed independently, so with max_workers > 1 the
    samples of a candidate are routed on a thread pool. Results keep
    sample order either way.
    """

    def __init__(
        self,
        router_factory: RouterFactory | None = None,
        samples: Sequence[CalibrationSample] | None = None,
        target_distribution: dict[str, float] | None = None,
        config: CalibrationConfig | None = None,
        current_threshold: float | None = None,
    ):
        self.router_factory = router_factory or default_router_factory()
        self.samples = list(samples if samples is not None else DEFAULT_SAMPLES)
        self.target_distribution = dict(
            target_distribution if target_distribution is not None
            else DEFAULT_TARGET_DISTRIBUTION
        )
        self.config = config or CalibrationConfig()
        # Reported when the sweep cannot tell candidates apart
        self.current_threshold = (
            current_threshold if current_threshold is not None
            else TierThresholdsConfig().advanced
        )

    @classmethod
    def from_settings(
        cls,
        settings: RouterSettings,
        router: ModelRouter | None = None,
        samples: Sequence[CalibrationSample] | None = None,
        target_distribution: dict[str, float] | None = None,
    ) -> "RouterCalibration":
        """Build a calibration run from router settings."""
        base = router or ModelRouter(settings=settings)
        return cls(
            router_factory=default_router_factory(base),
            samples=samples,
            target_distribution=target_distribution,
            config=settings.calibration,
            current_threshold=base.settings.thresholds.advanced,
        )

    def calibrate(self) -> CalibrationResult:
        """
        Sweep all candidate thresholds and return the best.

        Ties keep the earliest (lowest) threshold. When every candidate ties,
        the samples do not discriminate between thresholds: the current
        threshold is reported and the result is marked inconclusive.

        Raises:
            CalibrationError: If there are no samples.
        """
        if not self.samples:
            raise CalibrationError("Calibration needs at least one sample")

        logger.info(
            f"Starting router calibration over {len(self.samples)} samples"
        )

        evaluations: list[ThresholdEvaluation] = []
        best: ThresholdEvaluation | None = None

        for threshold in self.config.thresholds():
            evaluation = self.evaluate_threshold(threshold)
            evaluation.score = self.calculate_score(evaluation)
            evaluations.append(evaluation)
            logger.debug(
                f"Threshold {threshold:.2f}: score={evaluation.score:.4f} "
                f"accuracy={evaluation.accuracy:.2f}"
            )
            if best is None or evaluation.score > best.score:
                best = evaluation

        if best is None:
            raise CalibrationError("Calibration failed to find optimal threshold")

        if len({e.score for e in evaluations}) < 2:
            logger.warning(
                f"All {len(evaluations)} thresholds scored {best.score:.4f}; "
                f"keeping current threshold {self.current_threshold}"
            )
            return CalibrationResult(
                threshold=self.current_threshold,
                score=best.score,
                model_distribution=best.model_distribution,
                average_confidence=best.average_confidence,
                accuracy=best.accuracy,
                evaluations=evaluations,
                conclusive=False,
            )

        logger.info(f"Calibration completed: threshold={best.threshold} score={best.score:.4f}")

        return CalibrationResult(
            threshold=best.threshold,
            score=best.score,
            model_distribution=best.model_distribution,
            average_confidence=best.average_confidence,
            accuracy=best.accuracy,
            evaluations=evaluations,
        )

    def evaluate_threshold(self, threshold: float) -> ThresholdEvaluation:
        """Route every sample with a router built for `threshold`."""
        router = self.router_factory(threshold)
        decisions = self._route_all(router)

        counts: dict[str, int] = {}
        for decision in decisions:
            name = _model_name(decision)
            counts[name] = counts.get(name, 0) + 1

        total = len(decisions)
        distribution = {name: count / total for name, count in counts.items()}
        average_confidence = sum(d.confidence for d in decisions) / total
        correct = sum(
            1 for decision, sample in zip(decisions, self.samples)
            if _model_name(decision) == sample.expected_model
        )

        return ThresholdEvaluation(
            threshold=threshold,
            model_distribution=distribution,
            average_confidence=average_confidence,
            accuracy=correct / total,
        )

    def calculate_score(self, evaluation: ThresholdEvaluation) -> float:
        """Weighted score of one evaluation."""
        cfg = self.config
        return (
            distribution_closeness(evaluation.model_distribution, self.target_distribution)
            * cfg.distribution_weight
            + evaluation.average_confidence * cfg.confidence_weight
            + evaluation.accuracy * cfg.accuracy_weight
        )

    def _route_all(self, router: Any) -> list[RoutingDecision]:
        queries = [sample.query for sample in self.samples]
        if self.config.max_workers > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                return list(executor.map(lambda q: router.route(q, []), queries))
        return [router.route(q, []) for q in queries]


def _model_name(decision: Any) -> str:
    model = decision.model
    return model if isinstance(model, str) else model.name
