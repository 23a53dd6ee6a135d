"""Configuration schema using Pydantic."""

from pathlib import Path

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings


class TierThresholdsConfig(BaseModel):
    """Complexity cutoffs of the tier decision list."""
    superior: float = Field(default=0.8, ge=0.0, le=1.0)  # Above -> superior
    advanced: float = Field(default=0.6, ge=0.0, le=1.0)  # Above -> advanced (calibrated)
    standard: float = Field(default=0.4, ge=0.0, le=1.0)  # Above -> standard


class SearchProvidersConfig(BaseModel):
    """Provider ids used by the search sub-router."""
    image: str = "bing"
    news: str = "perplexity"
    academic: str = "tavily"
    local: str = "serp"
    entity: str = "bing"
    general: str = "perplexity"
    recency_model: str = "sonar-reasoning-pro"  # Model for news/general searches


class SearchConfig(BaseModel):
    """Search sub-router configuration."""
    threshold: float = Field(default=0.6, ge=0.0, le=1.0)  # Search-need cutoff
    academic_max_results: int = Field(default=8, gt=0)
    providers: SearchProvidersConfig = Field(default_factory=SearchProvidersConfig)


class CalibrationConfig(BaseModel):
    """Threshold sweep used by the calibration harness."""
    start: float = 0.3
    stop: float = 0.9
    step: float = Field(default=0.05, gt=0.0)
    distribution_weight: float = 0.4
    confidence_weight: float = 0.3
    accuracy_weight: float = 0.3
    max_workers: int = Field(default=1, ge=1)  # >1 routes samples on a thread pool

    @model_validator(mode="after")
    def _check_range(self) -> "CalibrationConfig":
        if self.stop < self.start:
            raise ValueError("calibration stop must be >= start")
        return self

    def thresholds(self) -> list[float]:
        """Sweep values, generated from integer steps so repeated runs agree."""
        count = int(round((self.stop - self.start) / self.step))
        return [round(self.start + i * self.step, 4) for i in range(count + 1)]


class RouterSettings(BaseSettings):
    """Root configuration for modelrouter."""
    thresholds: TierThresholdsConfig = Field(default_factory=TierThresholdsConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    calibration: CalibrationConfig = Field(default_factory=CalibrationConfig)
    long_context_words: int = Field(default=100, gt=0)  # Word count forcing LONG_CONTEXT
    catalog_path: str = ""  # JSON catalog file; empty = built-in catalog

    @property
    def catalog_file(self) -> Path | None:
        """Expanded catalog path, or None for the built-in catalog."""
        if not self.catalog_path:
            return None
        return Path(self.catalog_path).expanduser()

    def with_advanced_threshold(self, value: float) -> "RouterSettings":
        """Copy of these settings with a different advanced cutoff."""
        thresholds = self.thresholds.model_copy(update={"advanced": value})
        return self.model_copy(update={"thresholds": thresholds})

    class Config:
        env_prefix = "MODELROUTER_"
        env_nested_delimiter = "__"
