from __future__ import annotations

import threading
from collections.abc import Iterable
from typing import Any

from ..catalog.models import VendorRecord
from .base import (
    Repository,
    clean,
    new_id,
    normalize_email,
    trim_matches,
    utc_now_iso,
)
from .models import Brief, CloudBriefRequest, Contact, User


class MemoryRepository(Repository):
    """In-process store. Contents are lost when the process exits."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._products: dict[str, VendorRecord] = {}
        self._users: dict[str, dict[str, Any]] = {}
        self._searches: list[dict[str, Any]] = []

    def seed(self, records: Iterable[VendorRecord]) -> int:
        count = 0
        with self._lock:
            for record in records:
                # dict keeps first-insertion order, so overwrites keep position
                self._products[record.id] = record.model_copy(deep=True)
                count += 1
        return count

    def list_products(self) -> list[VendorRecord]:
        with self._lock:
            records = list(self._products.values())
        return sorted(records, key=lambda r: (r.category, r.name))

    def list_cloud_vendors(self) -> list[VendorRecord]:
        with self._lock:
            return [r for r in self._products.values() if r.category == "cloud"]

    def _user_by_email(self, email: str) -> dict[str, Any] | None:
        for row in self._users.values():
            if row["email"] == email:
                return row
        return None

    def _upsert_user_locked(self, contact: Contact | None) -> User | None:
        email = normalize_email(contact)
        if email is None:
            return None

        row = self._user_by_email(email)
        if row is not None:
            row["name"] = clean(contact.name) or row["name"]
            row["company"] = clean(contact.company) or row["company"]
        else:
            row = {
                "id": new_id("user", 8),
                "email": email,
                "name": clean(contact.name),
                "company": clean(contact.company),
                "created_at": utc_now_iso(),
            }
            self._users[row["id"]] = row

        return User(
            id=row["id"],
            email=row["email"],
            name=row["name"],
            company=row["company"],
            created_at=row["created_at"],
        )

    def upsert_user(self, contact: Contact | None) -> User | None:
        with self._lock:
            return self._upsert_user_locked(contact)

    def save_brief(self, request: CloudBriefRequest) -> Brief:
        with self._lock:
            user = self._upsert_user_locked(request.contact)
            row = {
                "id": new_id("search", 10),
                "user_id": user.id if user else None,
                "need": request.need,
                "workload_size": request.workload_size,
                "budget": request.budget,
                "weak_points": request.weak_points or "",
                "notes": request.notes or "",
                "matches": trim_matches(request.matches),
                "created_at": utc_now_iso(),
            }
            self._searches.append(row)

        return Brief(
            id=row["id"],
            created_at=row["created_at"],
            need=row["need"],
            workload_size=row["workload_size"],
            budget=row["budget"],
            weak_points=row["weak_points"],
            notes=row["notes"],
            matches=row["matches"],
            user=user,
        )

    def list_briefs(self, limit: int = 20) -> list[Brief]:
        with self._lock:
            rows = list(reversed(self._searches))[:limit]
            users = {uid: dict(u) for uid, u in self._users.items()}

        briefs: list[Brief] = []
        for row in rows:
            user_row = users.get(row["user_id"]) if row["user_id"] else None
            briefs.append(Brief(
                id=row["id"],
                created_at=row["created_at"],
                need=row["need"],
                workload_size=row["workload_size"],
                budget=row["budget"],
                weak_points=row["weak_points"],
                notes=row["notes"],
                matches=row["matches"],
                user=User(
                    id=user_row["id"],
                    email=user_row["email"],
                    name=user_row["name"],
                    company=user_row["company"],
                    created_at=user_row["created_at"],
                ) if user_row else None,
            ))
        return briefs

    def list_users(self) -> list[User]:
        with self._lock:
            rows = list(reversed(list(self._users.values())))
        return [
            User(
                id=row["id"],
                email=row["email"],
                name=row["name"],
                company=row["company"],
                created_at=row["created_at"],
            )
            for row in rows
        ]
