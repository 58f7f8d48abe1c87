# dqprofile/anomalies.py
from typing import Sequence, Tuple

import numpy as np

MIN_VALUES = 4


def iqr_bounds(values: Sequence[float], multiplier: float = 1.5) -> Tuple[float, float]:
    """
    Fences from order statistics (no interpolation):
    q1 = sorted[floor(0.25 * n)], q3 = sorted[floor(0.75 * n)].
    """
    arr = np.sort(np.asarray(values, dtype=float))
    n = len(arr)
    q1 = arr[int(n * 0.25)]
    q3 = arr[int(n * 0.75)]
    iqr = q3 - q1
    return float(q1 - multiplier * iqr), float(q3 + multiplier * iqr)


def outlier_mask(values: Sequence[float], multiplier: float = 1.5) -> np.ndarray:
    """
    Return a boolean array aligned with `values`:
    True = value lies strictly outside the IQR fences
    """
    arr = np.asarray(values, dtype=float)

    # Too few points for quartiles to mean anything
    if len(arr) < MIN_VALUES:
        return np.zeros(len(arr), dtype=bool)

    lower, upper = iqr_bounds(arr, multiplier)
    return (arr < lower) | (arr > upper)


def count_outliers_iqr(values: Sequence[float], multiplier: float = 1.5) -> int:
    return int(outlier_mask(values, multiplier).sum())
