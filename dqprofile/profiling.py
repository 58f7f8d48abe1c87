# dqprofile/profiling.py
import logging
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, Optional, Sequence

import pandas as pd

from .anomalies import count_outliers_iqr
from .cells import parse_numbers, safe_div, to_text
from .columns import Record, column_values
from .config import DEFAULT_CONFIG, QualityThresholds
from .duplicates import count_duplicate_values
from .inference import DataType, infer_data_type

logger = logging.getLogger(__name__)


@dataclass
class ColumnProfile:
    """Statistics for a single column."""
    name: str
    data_type: DataType
    total_count: int
    non_null_count: int
    null_count: int
    null_percentage: float
    unique_count: int
    uniqueness: float
    outliers: int
    duplicates: int
    min: Optional[float] = None
    max: Optional[float] = None
    mean: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "dataType": self.data_type.value,
            "totalCount": self.total_count,
            "nonNullCount": self.non_null_count,
            "nullCount": self.null_count,
            "nullPercentage": self.null_percentage,
            "uniqueCount": self.unique_count,
            "uniqueness": self.uniqueness,
            "outliers": self.outliers,
            "duplicates": self.duplicates,
            "min": self.min,
            "max": self.max,
            "mean": self.mean,
        }


def profile_column(
    name: str,
    column: pd.Series,
    total_count: int,
    thresholds: QualityThresholds = DEFAULT_CONFIG.thresholds,
) -> ColumnProfile:
    """
    column: normalized cells of `name`, one per row (None = absent)
    total_count: number of rows in the dataset
    """
    non_null = column[column.notna()]
    non_null_count = int(len(non_null))
    null_count = total_count - non_null_count

    data_type = infer_data_type(non_null, type_vote=thresholds.type_vote)

    unique_count = int(non_null.map(to_text).nunique()) if non_null_count else 0

    outliers = 0
    min_value = max_value = mean_value = None
    if data_type is DataType.NUMBER:
        numbers = parse_numbers(non_null)
        outliers = count_outliers_iqr(numbers, thresholds.iqr_multiplier)
        if len(numbers):
            min_value = float(numbers.min())
            max_value = float(numbers.max())
            # divide first so large values do not overflow the running sum
            mean = float((numbers / len(numbers)).sum())
            mean_value = mean if math.isfinite(mean) else None

    return ColumnProfile(
        name=name,
        data_type=data_type,
        total_count=total_count,
        non_null_count=non_null_count,
        null_count=null_count,
        null_percentage=safe_div(null_count, total_count) * 100,
        unique_count=unique_count,
        uniqueness=safe_div(unique_count, non_null_count) * 100,
        outliers=outliers,
        duplicates=count_duplicate_values(column),
        min=min_value,
        max=max_value,
        mean=mean_value,
    )


def profile_columns(
    records: Sequence[Record],
    columns: Sequence[str],
    thresholds: QualityThresholds = DEFAULT_CONFIG.thresholds,
    max_workers: int = 1,
) -> Dict[str, ColumnProfile]:
    """
    Profile every column; the result keeps the order of `columns`.

    Columns are independent of each other, so with max_workers > 1 they
    are profiled on a thread pool.
    """
    total = len(records)

    def _one(name: str) -> ColumnProfile:
        return profile_column(name, column_values(records, name), total, thresholds)

    if max_workers > 1 and len(columns) > 1:
        logger.debug("Profiling %d columns on %d workers", len(columns), max_workers)
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            profiles = list(executor.map(_one, columns))
    else:
        profiles = [_one(name) for name in columns]

    return {p.name: p for p in profiles}


def profile_dataframe(column_metrics: Dict[str, ColumnProfile]) -> pd.DataFrame:
    """Tabular view of the column profiles, one row per column."""
    cols = []
    for p in column_metrics.values():
        cols.append({
            "column": p.name,
            "dtype": p.data_type.value,
            "null_count": p.null_count,
            "null_pct": round(p.null_percentage, 1),
            "distinct_count": p.unique_count,
            "distinct_pct": round(p.uniqueness, 1),
            "outliers": p.outliers,
            "duplicates": p.duplicates,
            "min": p.min,
            "max": p.max,
            "mean": p.mean,
        })
    return pd.DataFrame(cols)
