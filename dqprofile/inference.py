# dqprofile/inference.py
"""
Majority-vote type inference.

Each non-null value falls into at most one bucket, checked in the order
boolean -> number -> date. The first bucket holding at least `type_vote`
(80% by default) of the values names the column type; otherwise it is text.
A few malformed cells therefore don't flip a numeric column to text.
"""
from enum import Enum
from typing import Tuple

import numpy as np
import pandas as pd

from .cells import numeric_mask, to_text

# Only numeric layouts: month names would make matching locale dependent.
DATE_FORMATS: Tuple[str, ...] = (
    "ISO8601",
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%d.%m.%Y",
)

BOOLEAN_LITERALS = ("true", "false")
MIN_DATE_LENGTH = 5


class DataType(str, Enum):
    BOOLEAN = "boolean"
    NUMBER = "number"
    DATE = "date"
    TEXT = "text"
    UNKNOWN = "unknown"


def date_mask(texts: pd.Series) -> np.ndarray:
    """True where the text matches one of DATE_FORMATS."""
    matched = np.zeros(len(texts), dtype=bool)
    if texts.empty:
        return matched
    for fmt in DATE_FORMATS:
        parsed = pd.to_datetime(texts, format=fmt, errors="coerce", utc=True)
        matched |= parsed.notna().to_numpy()
    return matched


def type_buckets(values: pd.Series) -> Tuple[int, int, int]:
    """(boolean, number, date) counts for a series of non-null values."""
    texts = values.map(to_text).astype(object).str.strip()

    is_bool = texts.isin(BOOLEAN_LITERALS).to_numpy()
    is_num = numeric_mask(texts) & ~is_bool

    candidates = ~is_bool & ~is_num & (texts.str.len() > MIN_DATE_LENGTH).to_numpy()
    date_count = int(date_mask(texts[candidates]).sum()) if candidates.any() else 0

    return int(is_bool.sum()), int(is_num.sum()), date_count


def infer_data_type(values: pd.Series, type_vote: float = 0.8) -> DataType:
    """
    values: non-null cells of a single column
    returns: the inferred DataType (UNKNOWN for an empty series)
    """
    if len(values) == 0:
        return DataType.UNKNOWN

    booleans, numbers, dates = type_buckets(values)
    threshold = len(values) * type_vote

    if booleans >= threshold:
        return DataType.BOOLEAN
    if numbers >= threshold:
        return DataType.NUMBER
    if dates >= threshold:
        return DataType.DATE
    return DataType.TEXT
