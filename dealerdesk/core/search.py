from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd


def filter_records(
    records: Sequence[Dict[str, Any]],
    query: Optional[str],
    fields: Sequence[str],
) -> List[Dict[str, Any]]:
    """
    Case-insensitive substring search over a fixed set of fields.

    - empty query -> every record, original order
    - the query is literal text (no regex), not trimmed
    - None / missing values never match
    - pure: same input, same output
    """
    records = list(records)
    needle = (query or "").lower()

    if not needle or not records or not fields:
        return records

    frame = pd.DataFrame(
        [{f: r.get(f) for f in fields} for r in records],
        columns=list(fields),
    )

    mask = np.zeros(len(frame), dtype=bool)
    for column in fields:
        values = frame[column]
        text = values.where(values.notna(), "").astype(str).str.lower()
        mask |= text.str.contains(needle, regex=False).to_numpy(dtype=bool)

    return [records[i] for i in np.flatnonzero(mask)]
