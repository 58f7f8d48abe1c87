# dqprofile/columns.py
from typing import Any, Dict, List, Mapping, Sequence

import pandas as pd

from .cells import CellKind, cell_kind, normalize_cell

Record = Mapping[str, Any]


def discover_columns(records: Sequence[Record]) -> List[str]:
    """
    Column names in first-appearance order.

    A key is added the first time a non-absent value is seen under it;
    keys that are absent in every record are left out.
    """
    seen: Dict[str, None] = {}
    for row in records:
        for key, value in row.items():
            if key in seen:
                continue
            if cell_kind(value) is not CellKind.ABSENT:
                seen[key] = None
    return list(seen)


def column_values(records: Sequence[Record], name: str) -> pd.Series:
    """One normalized value per record, None where missing/absent."""
    return pd.Series(
        [normalize_cell(row.get(name)) for row in records],
        dtype=object,
        name=name,
    )


def dataframe_to_records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """Rows of `df` as records, NaN/NaT -> None and numpy scalars -> Python."""
    names = [str(c) for c in df.columns]
    return [
        {name: normalize_cell(value) for name, value in zip(names, row)}
        for row in df.itertuples(index=False, name=None)
    ]
