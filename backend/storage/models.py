from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Contact(BaseModel):
    name: str = ""
    email: str = ""
    company: str = ""


class User(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    email: str
    name: str | None = None
    company: str | None = None
    created_at: str | None = Field(default=None, alias="createdAt")


class BriefMatch(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    match_score: int = Field(..., alias="matchScore")


class CloudBriefRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    need: str = Field(..., min_length=1)
    workload_size: str = Field(..., min_length=1, alias="workloadSize")
    budget: str = Field(..., min_length=1)
    weak_points: str = Field(default="", alias="weakPoints")
    notes: str = ""
    matches: list[BriefMatch] = Field(default_factory=list)
    contact_name: str = Field(default="", alias="contactName")
    contact_email: str = Field(default="", alias="contactEmail")
    contact_company: str = Field(default="", alias="contactCompany")

    @field_validator(
        "weak_points", "notes", "contact_name", "contact_email", "contact_company",
        mode="before",
    )
    @classmethod
    def _none_to_blank(cls, value):
        return "" if value is None else value

    @field_validator("matches", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return [] if value is None else value

    @property
    def contact(self) -> Contact:
        return Contact(
            name=self.contact_name,
            email=self.contact_email,
            company=self.contact_company,
        )


class Brief(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    created_at: str = Field(..., alias="createdAt")
    need: str
    workload_size: str = Field(..., alias="workloadSize")
    budget: str
    weak_points: str = Field(default="", alias="weakPoints")
    notes: str = ""
    matches: list[BriefMatch] = Field(default_factory=list)
    user: User | None = None


class BriefResponse(BaseModel):
    brief: Brief


class BriefsResponse(BaseModel):
    briefs: list[Brief]


class UsersResponse(BaseModel):
    users: list[User]
