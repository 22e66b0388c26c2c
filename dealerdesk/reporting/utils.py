from decimal import Decimal
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence

import pandas as pd

from dealerdesk.core.pricing import ZERO, to_amount


def records_frame(
    records: Iterable[Mapping[str, Any]],
    columns: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    """Records -> DataFrame; requested columns always exist (possibly empty)."""
    frame = pd.DataFrame([dict(r) for r in records])
    for column in columns or []:
        if column not in frame.columns:
            frame[column] = None
    return frame


def safe_sum(df: pd.DataFrame, column: str) -> Decimal:
    if column not in df.columns:
        return ZERO
    return sum((to_amount(v) for v in df[column].tolist()), ZERO)


def safe_mean(df: pd.DataFrame, column: str) -> Decimal:
    if column not in df.columns or df.empty:
        return ZERO
    return safe_sum(df, column) / len(df)


def count_where(df: pd.DataFrame, column: str, value: Any) -> int:
    if column not in df.columns or df.empty:
        return 0
    return int((df[column] == value).sum())


def value_counts(df: pd.DataFrame, column: str) -> Dict[str, int]:
    if column not in df.columns or df.empty:
        return {}
    counts = df[column].dropna().astype(str).value_counts().sort_index()
    return {key: int(n) for key, n in counts.items()}
