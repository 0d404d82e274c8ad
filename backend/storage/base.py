from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import datetime, timezone

from ..catalog.models import Collection, VendorRecord
from ..catalog.seed import COLLECTION_DEFINITIONS
from .models import Brief, BriefMatch, CloudBriefRequest, Contact, User

MAX_SAVED_MATCHES = 3


def new_id(prefix: str, length: int) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:length]}"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def normalize_email(contact: Contact | None) -> str | None:
    """Return the trimmed, lowercased email, or ``None`` when blank."""
    if contact is None:
        return None
    email = contact.email.strip().lower()
    return email or None


def clean(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


def trim_matches(matches: Iterable[BriefMatch]) -> list[BriefMatch]:
    """Keep the top matches in submitted order, reduced to id, name and score."""
    return [
        BriefMatch(id=m.id, name=m.name, match_score=m.match_score)
        for m in list(matches)[:MAX_SAVED_MATCHES]
    ]


def build_collections(records: Iterable[VendorRecord]) -> dict[str, Collection]:
    collections = {
        key: Collection(**meta, rows=[])
        for key, meta in COLLECTION_DEFINITIONS.items()
    }
    for record in sorted(records, key=lambda r: r.name):
        collection = collections.get(record.category)
        if collection is None:
            continue
        collection.rows.append(record)
    return collections


class Repository(ABC):
    """Storage-agnostic persistence for the catalog, briefs and users."""

    @abstractmethod
    def seed(self, records: Iterable[VendorRecord]) -> int:
        """Insert or overwrite catalog records by id. Returns the count written."""

    @abstractmethod
    def list_products(self) -> list[VendorRecord]:
        """All records ordered by category, then name."""

    @abstractmethod
    def list_cloud_vendors(self) -> list[VendorRecord]:
        """Cloud records in catalog (seed) order."""

    @abstractmethod
    def upsert_user(self, contact: Contact | None) -> User | None: ...

    @abstractmethod
    def save_brief(self, request: CloudBriefRequest) -> Brief: ...

    @abstractmethod
    def list_briefs(self, limit: int = 20) -> list[Brief]:
        """Most recent briefs first."""

    @abstractmethod
    def list_users(self) -> list[User]:
        """Most recently registered users first."""

    def fetch_collections(self) -> dict[str, Collection]:
        return build_collections(self.list_products())

    def close(self) -> None:
        return None
