# dqprofile/scoring.py
import math
from dataclasses import dataclass
from typing import Dict

from .cells import safe_div
from .config import DEFAULT_CONFIG, QualityConfig, QualityThresholds, ScoreWeights
from .inference import DataType
from .profiling import ColumnProfile


@dataclass
class ScoreCard:
    overall: int
    completeness: int
    consistency: int
    accuracy: int
    validity: int


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def _clamp(score: float) -> int:
    return int(max(0, min(100, score)))


def completeness_score(column_metrics: Dict[str, ColumnProfile]) -> int:
    """100 minus the average null percentage across columns."""
    cols = list(column_metrics.values())
    if not cols:
        return 0
    avg_null = safe_div(sum(c.null_percentage for c in cols), len(cols))
    return _clamp(round_half_up(max(0.0, 100 - avg_null)))


def consistency_score(
    column_metrics: Dict[str, ColumnProfile],
    t: QualityThresholds = DEFAULT_CONFIG.thresholds,
) -> int:
    cols = list(column_metrics.values())
    if not cols:
        return 0

    score = 100
    for col in cols:
        # Mostly empty column
        if col.null_percentage > t.consistency_null_pct:
            score -= t.consistency_null_penalty
        # Few distinct values; booleans only ever have two
        if col.uniqueness < t.consistency_uniqueness_pct and col.data_type is not DataType.BOOLEAN:
            score -= t.consistency_uniqueness_penalty
    return _clamp(score)


def accuracy_score(
    column_metrics: Dict[str, ColumnProfile],
    t: QualityThresholds = DEFAULT_CONFIG.thresholds,
) -> int:
    cols = list(column_metrics.values())
    if not cols:
        return 0

    score = 100
    for col in cols:
        outlier_pct = safe_div(col.outliers, col.non_null_count) * 100
        if outlier_pct > t.accuracy_outlier_high_pct:
            score -= t.accuracy_outlier_high_penalty
        elif outlier_pct > t.accuracy_outlier_low_pct:
            score -= t.accuracy_outlier_low_penalty

        duplicate_pct = safe_div(col.duplicates, col.total_count) * 100
        if duplicate_pct > t.accuracy_duplicate_pct:
            score -= t.accuracy_duplicate_penalty
    return _clamp(score)


def validity_score(
    column_metrics: Dict[str, ColumnProfile],
    t: QualityThresholds = DEFAULT_CONFIG.thresholds,
) -> int:
    cols = list(column_metrics.values())
    if not cols:
        return 0

    score = 100
    for col in cols:
        if col.data_type is DataType.UNKNOWN:
            score -= t.validity_unknown_penalty
    return _clamp(score)


def overall_score(
    completeness: int,
    consistency: int,
    accuracy: int,
    validity: int,
    w: ScoreWeights = DEFAULT_CONFIG.weights,
) -> int:
    score = (
        w.completeness * completeness
        + w.consistency * consistency
        + w.accuracy * accuracy
        + w.validity * validity
    )
    return _clamp(round_half_up(score))


def compute_scores(
    column_metrics: Dict[str, ColumnProfile],
    config: QualityConfig = DEFAULT_CONFIG,
) -> ScoreCard:
    completeness = completeness_score(column_metrics)
    consistency = consistency_score(column_metrics, config.thresholds)
    accuracy = accuracy_score(column_metrics, config.thresholds)
    validity = validity_score(column_metrics, config.thresholds)
    return ScoreCard(
        overall=overall_score(completeness, consistency, accuracy, validity, config.weights),
        completeness=completeness,
        consistency=consistency,
        accuracy=accuracy,
        validity=validity,
    )
