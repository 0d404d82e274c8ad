from __future__ import annotations

from collections.abc import Sequence

from .models import MatchQuery, MatchResult, VendorRecord

BASE_SCORE = 55
EXACT_WORKLOAD_BONUS = 25
COMPATIBLE_WORKLOAD_BONUS = 15
MITIGATION_BONUS = 10
REGULATED_CERTIFICATION_BONUS = 8
MIN_SCORE = 0
MAX_SCORE = 100

BUDGET_BONUS: dict[str, int] = {"High": 5, "Medium": 3, "Low": 0}
BUDGET_TIERS: list[str] = ["Low", "Medium", "High"]

# Requested workload size -> vendor workload tags that satisfy it.
# Deliberately asymmetric: "Growth" is accepted by Enterprise and
# Digital Native requests but is not itself a table key.
WORKLOAD_COMPATIBILITY: dict[str, tuple[str, ...]] = {
    "Regulated": ("Regulated",),
    "Enterprise": ("Enterprise", "Growth", "Public Sector"),
    "Startup": ("Startup", "Digital Native", "SMB"),
    "Digital Native": ("Digital Native", "Growth"),
    "Public Sector": ("Public Sector", "Enterprise", "Regulated", "Government", "Public"),
}


def is_workload_compatible(workloads: Sequence[str], workload_size: str) -> bool:
    """Return True if any of the vendor's workload tags satisfies the request.

    Sizes missing from ``WORKLOAD_COMPATIBILITY`` fall back to an exact tag match.
    """
    accepted = WORKLOAD_COMPATIBILITY.get(workload_size, (workload_size,))
    return any(tag in workloads for tag in accepted)


def matched_mitigations(mitigates: Sequence[str], weak_points: str) -> list[str]:
    """Return the mitigation keywords found as substrings of the weak-points text."""
    text = (weak_points or "").lower()
    return [keyword for keyword in mitigates if keyword in text]


def _score_vendor(vendor: VendorRecord, query: MatchQuery, mitigations: list[str]) -> int:
    score = BASE_SCORE
    if query.workload_size in vendor.workloads:
        score += EXACT_WORKLOAD_BONUS
    else:
        score += COMPATIBLE_WORKLOAD_BONUS
    if mitigations:
        score += MITIGATION_BONUS
    score += BUDGET_BONUS.get(query.budget, 0)
    if query.workload_size == "Regulated" and vendor.certifications:
        score += REGULATED_CERTIFICATION_BONUS
    return max(MIN_SCORE, min(MAX_SCORE, score))


def query_cloud_vendors(
    catalog: Sequence[VendorRecord],
    query: MatchQuery,
) -> list[MatchResult]:
    """
    Filter, score and rank cloud vendors for a single match request.

    Vendors must list ``query.need`` in their focus areas and be workload
    compatible. Results are ordered by descending score; ties keep catalog
    order. No vendor qualifying yields an empty list.
    """
    results: list[MatchResult] = []
    for vendor in catalog:
        if query.need not in vendor.focus_areas:
            continue
        if not is_workload_compatible(vendor.workloads, query.workload_size):
            continue

        mitigations = matched_mitigations(vendor.mitigates, query.weak_points)
        results.append(MatchResult(
            **vendor.model_dump(),
            match_score=_score_vendor(vendor, query, mitigations),
            highlighted_mitigations=mitigations,
        ))

    # sorted() is stable, so equal scores stay in catalog order
    return sorted(results, key=lambda r: r.match_score, reverse=True)
