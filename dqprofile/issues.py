# dqprofile/issues.py
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List

from .cells import safe_div
from .config import DEFAULT_CONFIG, QualityConfig
from .inference import DataType
from .profiling import ColumnProfile


class IssueType(str, Enum):
    MISSING_VALUES = "missing_values"
    OUTLIERS = "outliers"
    DUPLICATES = "duplicates"
    LOW_UNIQUENESS = "low_uniqueness"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass
class Issue:
    """A single detected quality problem."""
    type: IssueType
    severity: Severity
    column: str
    message: str

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "severity": self.severity.value,
            "column": self.column,
            "message": self.message,
        }


def detect_issues(
    column_metrics: Dict[str, ColumnProfile],
    config: QualityConfig = DEFAULT_CONFIG,
) -> List[Issue]:
    """
    Check every column against the issue thresholds.

    Output order is column order, then rule order:
    missing values, outliers, duplicates, low uniqueness.
    """
    t = config.thresholds
    issues: List[Issue] = []

    for col in column_metrics.values():
        if col.null_percentage > t.missing_values_pct:
            issues.append(Issue(
                type=IssueType.MISSING_VALUES,
                severity=Severity.HIGH if col.null_percentage > t.missing_values_high_pct else Severity.MEDIUM,
                column=col.name,
                message=f'{col.null_percentage:.1f}% of values are missing in "{col.name}"',
            ))

        if col.outliers > 0 and safe_div(col.outliers, col.non_null_count) > t.outlier_ratio:
            issues.append(Issue(
                type=IssueType.OUTLIERS,
                severity=Severity.MEDIUM,
                column=col.name,
                message=f'{col.outliers} outliers detected in "{col.name}"',
            ))

        if col.duplicates > 0 and safe_div(col.duplicates, col.total_count) > t.duplicate_ratio:
            issues.append(Issue(
                type=IssueType.DUPLICATES,
                severity=Severity.MEDIUM,
                column=col.name,
                message=f'{col.duplicates} duplicate values found in "{col.name}"',
            ))

        if col.uniqueness < t.low_uniqueness_pct and col.data_type is not DataType.BOOLEAN:
            issues.append(Issue(
                type=IssueType.LOW_UNIQUENESS,
                severity=Severity.LOW,
                column=col.name,
                message=f'Low uniqueness ({col.uniqueness:.1f}%) in "{col.name}"',
            ))

    return issues
