# dqprofile/engine.py
"""
Data quality engine: profiles a list of records and assembles a QualityReport.

Stages run in order over one immutable snapshot:
column discovery -> type inference + column statistics -> scores -> issues.
The result depends only on the input rows and the QualityConfig.
"""
import json
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import pandas as pd

from .columns import Record, dataframe_to_records, discover_columns
from .config import DEFAULT_CONFIG, QualityConfig, settings
from .issues import Issue, detect_issues
from .profiling import ColumnProfile, profile_columns
from .scoring import compute_scores

logger = logging.getLogger(__name__)


@dataclass
class QualityReport:
    overall_score: int = 0
    completeness: int = 0
    consistency: int = 0
    accuracy: int = 0
    validity: int = 0
    column_metrics: Dict[str, ColumnProfile] = field(default_factory=dict)
    issues: List[Issue] = field(default_factory=list)
    total_rows: int = 0
    total_columns: int = 0

    def to_dict(self) -> dict:
        return {
            "overallScore": self.overall_score,
            "completeness": self.completeness,
            "consistency": self.consistency,
            "accuracy": self.accuracy,
            "validity": self.validity,
            "columnMetrics": {name: p.to_dict() for name, p in self.column_metrics.items()},
            "issues": [i.to_dict() for i in self.issues],
            "totalRows": self.total_rows,
            "totalColumns": self.total_columns,
        }

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, allow_nan=False)


def analyze_data_quality(
    records: Sequence[Record],
    config: QualityConfig = DEFAULT_CONFIG,
    max_workers: Optional[int] = None,
) -> QualityReport:
    """
    records: sequence of key -> value mappings; keys may differ per record
    returns: QualityReport (all zeros for an empty dataset)
    """
    if not records:
        logger.debug("Empty dataset, returning zero report")
        return QualityReport()

    if max_workers is None:
        max_workers = settings.DQ_MAX_WORKERS

    columns = discover_columns(records)
    logger.debug("Discovered %d columns over %d rows", len(columns), len(records))

    column_metrics = profile_columns(records, columns, config.thresholds, max_workers)
    scores = compute_scores(column_metrics, config)
    issues = detect_issues(column_metrics, config)

    logger.info(
        "Profiled rows=%d cols=%d score=%d issues=%d",
        len(records), len(columns), scores.overall, len(issues),
    )

    return QualityReport(
        overall_score=scores.overall,
        completeness=scores.completeness,
        consistency=scores.consistency,
        accuracy=scores.accuracy,
        validity=scores.validity,
        column_metrics=column_metrics,
        issues=issues,
        total_rows=len(records),
        total_columns=len(columns),
    )


def analyze_dataframe(
    df: pd.DataFrame,
    config: QualityConfig = DEFAULT_CONFIG,
    max_workers: Optional[int] = None,
) -> QualityReport:
    return analyze_data_quality(dataframe_to_records(df), config, max_workers)
