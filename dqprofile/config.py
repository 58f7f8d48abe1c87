# dqprofile/config.py
"""
Thresholds, score weights and environment settings.

Scoring and issue detection take a QualityConfig explicitly; nothing in the
engine reads module-level state. Environment settings only affect the
outer layers (logging, worker count, LLM access).
"""
import os
import logging
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class ScoreWeights:
    completeness: float = 0.30
    consistency: float = 0.25
    accuracy: float = 0.25
    validity: float = 0.20


@dataclass(frozen=True)
class QualityThresholds:
    # Type inference: share of non-null values a bucket needs to win
    type_vote: float = 0.8

    # IQR fence multiplier
    iqr_multiplier: float = 1.5

    # Consistency
    consistency_null_pct: float = 50.0
    consistency_null_penalty: int = 10
    consistency_uniqueness_pct: float = 10.0
    consistency_uniqueness_penalty: int = 5

    # Accuracy (percentages)
    accuracy_outlier_high_pct: float = 10.0
    accuracy_outlier_high_penalty: int = 15
    accuracy_outlier_low_pct: float = 5.0
    accuracy_outlier_low_penalty: int = 5
    accuracy_duplicate_pct: float = 20.0
    accuracy_duplicate_penalty: int = 10

    # Validity
    validity_unknown_penalty: int = 10

    # Issue detection
    missing_values_pct: float = 20.0
    missing_values_high_pct: float = 50.0
    outlier_ratio: float = 0.05
    duplicate_ratio: float = 0.1
    low_uniqueness_pct: float = 5.0


@dataclass(frozen=True)
class QualityConfig:
    weights: ScoreWeights = field(default_factory=ScoreWeights)
    thresholds: QualityThresholds = field(default_factory=QualityThresholds)


DEFAULT_CONFIG = QualityConfig()


def env_int(name: str, default: int, minimum: int = 1) -> int:
    """Integer env var; unset, malformed or below `minimum` gives `default`."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logging.getLogger(__name__).warning("Ignoring %s=%r: not an integer", name, raw)
        return default
    if value < minimum:
        logging.getLogger(__name__).warning("Ignoring %s=%d: must be >= %d", name, value, minimum)
        return default
    return value


class Settings:
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    # 1 = profile columns sequentially
    DQ_MAX_WORKERS: int = env_int("DQ_MAX_WORKERS", 1)
    OPENAI_API_KEY: Optional[str] = os.getenv("OPENAI_API_KEY")
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")


settings = Settings()


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
