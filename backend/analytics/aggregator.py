from __future__ import annotations

from collections import Counter
from typing import Any

from .store import BRIEF_SAVED, MATCH_SEARCH


def _top(counter: Counter[str], n: int = 10) -> list[dict[str, Any]]:
    return [{"name": name, "count": count} for name, count in counter.most_common(n)]


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    searches = [e for e in events if e["type"] == MATCH_SEARCH]
    briefs = [e for e in events if e["type"] == BRIEF_SAVED]
    total = len(searches)

    times = [s["response_time_ms"] for s in searches if "response_time_ms" in s]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    need_counter: Counter[str] = Counter(s.get("need", "unknown") for s in searches)
    workload_counter: Counter[str] = Counter(s.get("workload_size", "unknown") for s in searches)
    budget_counter: Counter[str] = Counter(s.get("budget", "unknown") for s in searches)

    # Vendors that came out on top of a search
    vendor_counter: Counter[str] = Counter(
        s["top_vendor"] for s in searches if s.get("top_vendor")
    )

    with_weak_points = sum(1 for s in searches if s.get("has_weak_points"))
    empty_results = sum(1 for s in searches if s.get("results_count", 0) == 0)

    return {
        "total_searches": total,
        "avg_response_time_ms": avg_time,
        "top_needs": _top(need_counter),
        "workload_size_usage": dict(workload_counter),
        "budget_usage": dict(budget_counter),
        "weak_points_rate": round(with_weak_points / total * 100, 1) if total else 0.0,
        "empty_result_rate": round(empty_results / total * 100, 1) if total else 0.0,
        "top_vendors": _top(vendor_counter),
        "briefs_saved": len(briefs),
    }
