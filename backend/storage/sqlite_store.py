from __future__ import annotations

import json
import logging
import sqlite3
import threading
from collections.abc import Iterable
from pathlib import Path
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
from .models import Brief, BriefMatch, CloudBriefRequest, Contact, User

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS products (
    id TEXT PRIMARY KEY,
    category TEXT NOT NULL,
    name TEXT NOT NULL,
    focus_areas TEXT DEFAULT '[]',
    workloads TEXT DEFAULT '[]',
    mitigates TEXT DEFAULT '[]',
    segments TEXT DEFAULT '[]',
    pricing_model TEXT,
    certifications TEXT DEFAULT '[]',
    regional_coverage TEXT,
    differentiators TEXT,
    strengths TEXT,
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,
    email TEXT UNIQUE NOT NULL,
    full_name TEXT,
    company TEXT,
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS searches (
    id TEXT PRIMARY KEY,
    user_id TEXT REFERENCES users(id) ON DELETE SET NULL,
    need TEXT NOT NULL,
    workload_size TEXT NOT NULL,
    budget TEXT NOT NULL,
    weak_points TEXT,
    notes TEXT,
    matches_json TEXT DEFAULT '[]',
    created_at TEXT NOT NULL
);
"""

UPSERT_PRODUCT_SQL = """
INSERT INTO products (
    id, category, name, focus_areas, workloads, mitigates, segments,
    pricing_model, certifications, regional_coverage, differentiators,
    strengths, created_at
) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
ON CONFLICT (id) DO UPDATE SET
    category = excluded.category,
    name = excluded.name,
    focus_areas = excluded.focus_areas,
    workloads = excluded.workloads,
    mitigates = excluded.mitigates,
    segments = excluded.segments,
    pricing_model = excluded.pricing_model,
    certifications = excluded.certifications,
    regional_coverage = excluded.regional_coverage,
    differentiators = excluded.differentiators,
    strengths = excluded.strengths
"""

_LIST_COLUMNS = ("focus_areas", "workloads", "mitigates", "segments", "certifications")


def normalize_json_array(value: Any) -> list:
    """Decode a stored JSON list. Missing, malformed or non-list values become ``[]``."""
    if not value:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, (str, bytes)):
        try:
            parsed = json.loads(value)
        except (TypeError, ValueError):
            logger.warning("Ignoring malformed JSON list in storage: %r", value)
            return []
        return parsed if isinstance(parsed, list) else []
    return []


def _product_from_row(row: sqlite3.Row) -> VendorRecord:
    data = {key: row[key] for key in row.keys() if key != "created_at"}
    for column in _LIST_COLUMNS:
        data[column] = normalize_json_array(data.get(column))
    return VendorRecord(**data)


class SQLiteRepository(Repository):
    """Embedded file-backed store built on ``sqlite3``."""

    def __init__(self, db_path: Path | str) -> None:
        self.db_path = str(db_path)
        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        # One shared connection; FastAPI runs sync endpoints in a thread pool.
        self._lock = threading.Lock()
        self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA foreign_keys = ON")

    def create_schema(self) -> None:
        with self._lock:
            self._conn.executescript(SCHEMA_SQL)
            self._conn.commit()
        logger.info("SQLite schema ready at %s", self.db_path)

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    # ── Catalog ──────────────────────────────────────────────────────────

    def seed(self, records: Iterable[VendorRecord]) -> int:
        now = utc_now_iso()
        params = [
            (
                r.id,
                r.category,
                r.name,
                json.dumps(r.focus_areas),
                json.dumps(r.workloads),
                json.dumps(r.mitigates),
                json.dumps(r.segments),
                r.pricing_model,
                json.dumps(r.certifications),
                r.regional_coverage,
                r.differentiators,
                r.strengths,
                now,
            )
            for r in records
        ]
        with self._lock, self._conn:
            self._conn.executemany(UPSERT_PRODUCT_SQL, params)
        return len(params)

    def list_products(self) -> list[VendorRecord]:
        with self._lock:
            rows = self._conn.execute(
                "SELECT * FROM products ORDER BY category ASC, name ASC"
            ).fetchall()
        return [_product_from_row(row) for row in rows]

    def list_cloud_vendors(self) -> list[VendorRecord]:
        with self._lock:
            rows = self._conn.execute(
                "SELECT * FROM products WHERE category = 'cloud' ORDER BY rowid ASC"
            ).fetchall()
        return [_product_from_row(row) for row in rows]

    # ── Users & briefs ───────────────────────────────────────────────────

    def _upsert_user(self, conn: sqlite3.Connection, contact: Contact | None) -> User | None:
        email = normalize_email(contact)
        if email is None:
            return None

        existing = conn.execute("SELECT * FROM users WHERE email = ?", (email,)).fetchone()
        if existing is not None:
            full_name = clean(contact.name) or existing["full_name"]
            company = clean(contact.company) or existing["company"]
            conn.execute(
                "UPDATE users SET full_name = ?, company = ? WHERE id = ?",
                (full_name, company, existing["id"]),
            )
            return User(
                id=existing["id"],
                email=existing["email"],
                name=full_name,
                company=company,
                created_at=existing["created_at"],
            )

        user = User(
            id=new_id("user", 8),
            email=email,
            name=clean(contact.name),
            company=clean(contact.company),
            created_at=utc_now_iso(),
        )
        conn.execute(
            "INSERT INTO users (id, email, full_name, company, created_at) VALUES (?, ?, ?, ?, ?)",
            (user.id, user.email, user.name, user.company, user.created_at),
        )
        return user

    def upsert_user(self, contact: Contact | None) -> User | None:
        with self._lock, self._conn:
            return self._upsert_user(self._conn, contact)

    def save_brief(self, request: CloudBriefRequest) -> Brief:
        matches = trim_matches(request.matches)
        created_at = utc_now_iso()
        brief_id = new_id("search", 10)

        # The connection context manager commits on success and rolls back on error.
        with self._lock, self._conn:
            user = self._upsert_user(self._conn, request.contact)
            self._conn.execute(
                """
                INSERT INTO searches (
                    id, user_id, need, workload_size, budget,
                    weak_points, notes, matches_json, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    brief_id,
                    user.id if user else None,
                    request.need,
                    request.workload_size,
                    request.budget,
                    request.weak_points or "",
                    request.notes or "",
                    json.dumps([m.model_dump(by_alias=True) for m in matches]),
                    created_at,
                ),
            )

        return Brief(
            id=brief_id,
            created_at=created_at,
            need=request.need,
            workload_size=request.workload_size,
            budget=request.budget,
            weak_points=request.weak_points or "",
            notes=request.notes or "",
            matches=matches,
            user=user,
        )

    def list_briefs(self, limit: int = 20) -> list[Brief]:
        with self._lock:
            rows = self._conn.execute(
                """
                SELECT s.*, u.email, u.full_name, u.company, u.created_at AS user_created_at
                FROM searches s
                LEFT JOIN users u ON s.user_id = u.id
                ORDER BY s.created_at DESC, s.rowid DESC
                LIMIT ?
                """,
                (limit,),
            ).fetchall()

        return [
            Brief(
                id=row["id"],
                created_at=row["created_at"],
                need=row["need"],
                workload_size=row["workload_size"],
                budget=row["budget"],
                weak_points=row["weak_points"] or "",
                notes=row["notes"] or "",
                matches=[
                    BriefMatch.model_validate(m)
                    for m in normalize_json_array(row["matches_json"])
                    if isinstance(m, dict)
                ],
                user=User(
                    id=row["user_id"],
                    email=row["email"],
                    name=row["full_name"],
                    company=row["company"],
                    created_at=row["user_created_at"],
                ) if row["email"] else None,
            )
            for row in rows
        ]

    def list_users(self) -> list[User]:
        with self._lock:
            rows = self._conn.execute(
                "SELECT id, email, full_name, company, created_at FROM users "
                "ORDER BY created_at DESC, rowid DESC"
            ).fetchall()
        return [
            User(
                id=row["id"],
                email=row["email"],
                name=row["full_name"],
                company=row["company"],
                created_at=row["created_at"],
            )
            for row in rows
        ]
