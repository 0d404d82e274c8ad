from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from .matching import BUDGET_TIERS, WORKLOAD_COMPATIBILITY
from .models import CatalogMetadata, VendorRecord


def _distinct_tags(df: pd.DataFrame, column: str) -> list[str]:
    if df.empty or column not in df.columns:
        return []
    tags = df[column].explode().dropna()
    tags = tags[tags.astype(str).str.strip() != ""]
    return sorted(tags.unique().tolist())


def catalog_metadata(vendors: Sequence[VendorRecord]) -> CatalogMetadata:
    """Return the option lists a client needs to build a match request."""
    df = pd.DataFrame([v.model_dump() for v in vendors])
    return CatalogMetadata(
        needs=_distinct_tags(df, "focus_areas"),
        workloads=_distinct_tags(df, "workloads"),
        workload_sizes=list(WORKLOAD_COMPATIBILITY),
        budgets=list(BUDGET_TIERS),
    )
