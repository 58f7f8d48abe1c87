# dqprofile/cells.py
"""
Cell values as seen by the profiler.

Every incoming value is one of four kinds: absent, boolean, number or text.
None, NaN/NaT/pd.NA and the empty string are all absent. Values are
normalized once when a column is extracted; later stages only deal with
None, bool, int/float and str.
"""
from __future__ import annotations

import numbers
from decimal import Decimal
from enum import Enum

import numpy as np
import pandas as pd


class CellKind(str, Enum):
    ABSENT = "absent"
    BOOLEAN = "boolean"
    NUMBER = "number"
    TEXT = "text"


def cell_kind(value: object) -> CellKind:
    if value is None:
        return CellKind.ABSENT
    if isinstance(value, (bool, np.bool_)):
        return CellKind.BOOLEAN
    if isinstance(value, str):
        return CellKind.ABSENT if value == "" else CellKind.TEXT
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return CellKind.ABSENT
    if isinstance(value, (numbers.Real, Decimal)):
        return CellKind.NUMBER
    return CellKind.TEXT


def normalize_cell(value: object):
    """Map a raw value onto None / bool / int / float / str."""
    kind = cell_kind(value)
    if kind is CellKind.ABSENT:
        return None
    if kind is CellKind.BOOLEAN:
        return bool(value)
    if kind is CellKind.NUMBER:
        if isinstance(value, numbers.Integral):
            return int(value)
        return float(value)
    if isinstance(value, str):
        return value
    return str(value)


def to_text(value: object) -> str:
    """Display text of a normalized cell; absent becomes the empty string."""
    kind = cell_kind(value)
    if kind is CellKind.ABSENT:
        return ""
    if kind is CellKind.BOOLEAN:
        return "true" if value else "false"
    if kind is CellKind.NUMBER:
        if isinstance(value, numbers.Integral):
            return str(int(value))
        f = float(value)
        if f.is_integer() and abs(f) < 1e21:
            return str(int(f))
        return repr(f)
    return str(value)


def _coerce_numeric(texts: pd.Series) -> np.ndarray:
    parsed = pd.to_numeric(texts.str.strip(), errors="coerce")
    return parsed.astype(float).to_numpy()


def numeric_mask(texts: pd.Series) -> np.ndarray:
    """True where the text parses fully to a finite number."""
    if texts.empty:
        return np.zeros(0, dtype=bool)
    return np.isfinite(_coerce_numeric(texts))


def parse_numbers(values: pd.Series) -> np.ndarray:
    """Finite numbers among `values` (via their text); failures are dropped."""
    if values.empty:
        return np.zeros(0, dtype=float)
    arr = _coerce_numeric(values.map(to_text).astype(object))
    return arr[np.isfinite(arr)]


def safe_div(num: float, den: float) -> float:
    if den == 0:
        return 0.0
    return num / den
