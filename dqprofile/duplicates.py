# dqprofile/duplicates.py
"""
Per-column repeated value counting.

Values are compared by their display text, and absent cells count as the
empty string, so a column with many missing values also reports many
duplicates. Issue thresholds are calibrated against that behaviour.
"""
import pandas as pd

from .cells import to_text


def _value_frequencies(column: pd.Series) -> pd.Series:
    """Frequency of every display text across all rows (absent -> "")."""
    return column.map(to_text).astype(object).value_counts(sort=False, dropna=False)


def count_duplicate_values(column: pd.Series) -> int:
    """
    Number of redundant repeats: each value seen f > 1 times adds f - 1.
    """
    if column.empty:
        return 0
    freq = _value_frequencies(column)
    repeated = freq[freq > 1]
    return int((repeated - 1).sum())


def duplicate_value_counts(column: pd.Series) -> pd.Series:
    """
    Repeated values and how often they occur, most frequent first.
    Index is the display text ("" for absent cells).
    """
    if column.empty:
        return pd.Series(dtype="int64")
    freq = _value_frequencies(column)
    return freq[freq > 1].sort_values(ascending=False, kind="stable")
