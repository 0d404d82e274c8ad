from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Category = Literal["cloud", "security", "support", "workos"]


class VendorRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1)
    category: Category
    name: str
    focus_areas: list[str] = Field(default_factory=list, alias="focusAreas")
    workloads: list[str] = Field(default_factory=list)
    mitigates: list[str] = Field(default_factory=list)
    segments: list[str] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)
    pricing_model: str | None = Field(default=None, alias="pricingModel")
    regional_coverage: str | None = Field(default=None, alias="regionalCoverage")
    differentiators: str | None = None
    strengths: str | None = None

    @field_validator(
        "focus_areas", "workloads", "mitigates", "segments", "certifications",
        mode="before",
    )
    @classmethod
    def _none_to_empty(cls, value):
        return [] if value is None else value


class MatchQuery(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    need: str = Field(..., min_length=1, description="Capability tag, e.g. Virtual Machine")
    workload_size: str = Field(..., min_length=1, alias="workloadSize")
    budget: str = Field(..., min_length=1, description="Low, Medium or High")
    weak_points: str = Field(
        default="",
        alias="weakPoints",
        description="Free-text pain points matched against vendor mitigations",
    )

    @field_validator("weak_points", mode="before")
    @classmethod
    def _none_to_blank(cls, value):
        return "" if value is None else value


class MatchResult(VendorRecord):
    match_score: int = Field(..., ge=0, le=100, alias="matchScore")
    highlighted_mitigations: list[str] = Field(
        default_factory=list, alias="highlightedMitigations"
    )


class MatchResponse(BaseModel):
    matches: list[MatchResult]


class Column(BaseModel):
    key: str
    label: str


class Collection(BaseModel):
    label: str
    description: str
    columns: list[Column]
    rows: list[VendorRecord] = Field(default_factory=list)


class CollectionsResponse(BaseModel):
    collections: dict[str, Collection]


class ProductsResponse(BaseModel):
    products: list[VendorRecord]


class CatalogMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    needs: list[str]
    workloads: list[str]
    workload_sizes: list[str] = Field(alias="workloadSizes")
    budgets: list[str]
