from __future__ import annotations

import sqlite3

import pytest

from backend.catalog.models import VendorRecord
from backend.catalog.seed import CLOUD_VENDORS, SEED_RECORDS
from backend.storage.config import (
    DEFAULT_STORAGE_CONFIG,
    PROJECT_ROOT,
    StorageConfig,
    _project_path,
)
from backend.storage.memory import MemoryRepository
from backend.storage.models import BriefMatch, CloudBriefRequest, Contact
from backend.storage.setup import build_repository, setup_repository
from backend.storage.sqlite_store import SQLiteRepository, normalize_json_array


def _brief(**overrides):
    data = {
        "need": "Virtual Machine",
        "workloadSize": "Growth",
        "budget": "High",
    }
    data.update(overrides)
    return CloudBriefRequest(**data)


# ── Catalog ──────────────────────────────────────────────────────────────


def test_cloud_vendors_in_seed_order(repo):
    assert [v.id for v in repo.list_cloud_vendors()] == ["aws", "azure", "gcp", "ibm", "do"]


def test_cloud_vendors_round_trip_fields(repo):
    stored = {v.id: v for v in repo.list_cloud_vendors()}
    for original in CLOUD_VENDORS:
        assert stored[original.id] == original


def test_list_products_sorted_by_category_then_name(repo):
    products = repo.list_products()
    assert len(products) == len(SEED_RECORDS)
    keys = [(p.category, p.name) for p in products]
    assert keys == sorted(keys)
    assert products[0].category == "cloud"
    assert products[-1].name == "Wiz"


def test_seed_is_idempotent(repo):
    repo.seed(SEED_RECORDS)
    assert len(repo.list_products()) == len(SEED_RECORDS)


def test_seed_overwrites_existing_record(repo):
    updated = CLOUD_VENDORS[0].model_copy(update={"name": "AWS", "mitigates": ["latency"]})
    repo.seed([updated])
    aws = repo.list_cloud_vendors()[0]
    assert aws.id == "aws"
    assert aws.name == "AWS"
    assert aws.mitigates == ["latency"]


def test_fetch_collections(repo):
    collections = repo.fetch_collections()
    assert set(collections) == {"cloud", "security", "support", "workos"}
    assert [r.name for r in collections["cloud"].rows] == sorted(v.name for v in CLOUD_VENDORS)
    assert len(collections["security"].rows) == 2
    assert collections["support"].rows == []
    assert collections["cloud"].columns[0].label == "Provider"


# ── Users ────────────────────────────────────────────────────────────────


def test_upsert_user_blank_email_returns_none(repo):
    assert repo.upsert_user(None) is None
    assert repo.upsert_user(Contact(name="Ann", email="   ")) is None
    assert repo.list_users() == []


def test_upsert_user_normalizes_email(repo):
    user = repo.upsert_user(Contact(name=" Ann ", email="  Ann@Example.COM ", company="Acme"))
    assert user.email == "ann@example.com"
    assert user.name == "Ann"
    assert user.id.startswith("user_")
    assert len(user.id) == len("user_") + 8


def test_upsert_user_updates_existing(repo):
    first = repo.upsert_user(Contact(name="Ann", email="ann@example.com", company="Acme"))
    second = repo.upsert_user(Contact(name="", email="ANN@example.com", company="Globex"))
    assert second.id == first.id
    assert second.name == "Ann"
    assert second.company == "Globex"
    users = repo.list_users()
    assert len(users) == 1
    assert users[0].company == "Globex"
    assert users[0].created_at


def test_list_users_newest_first(repo):
    repo.upsert_user(Contact(email="first@example.com"))
    repo.upsert_user(Contact(email="second@example.com"))
    assert [u.email for u in repo.list_users()] == ["second@example.com", "first@example.com"]


# ── Briefs ───────────────────────────────────────────────────────────────


def test_save_brief_trims_matches_and_links_user(repo):
    matches = [
        BriefMatch(id=f"v{i}", name=f"Vendor {i}", match_score=90 - i) for i in range(5)
    ]
    brief = repo.save_brief(_brief(
        weakPoints="cost",
        notes="call next week",
        matches=[m.model_dump(by_alias=True) for m in matches],
        contactName="Ann",
        contactEmail="Ann@Example.com",
        contactCompany="Acme",
    ))
    assert brief.id.startswith("search_")
    assert [m.id for m in brief.matches] == ["v0", "v1", "v2"]
    assert brief.user.email == "ann@example.com"
    assert brief.weak_points == "cost"

    stored = repo.list_briefs()
    assert len(stored) == 1
    assert stored[0].id == brief.id
    assert [m.match_score for m in stored[0].matches] == [90, 89, 88]
    assert stored[0].user.id == brief.user.id
    assert stored[0].notes == "call next week"


def test_save_brief_without_contact(repo):
    brief = repo.save_brief(_brief())
    assert brief.user is None
    assert brief.weak_points == ""
    assert brief.notes == ""
    assert repo.list_briefs()[0].user is None
    assert repo.list_users() == []


def test_list_briefs_newest_first_with_limit(repo):
    for need in ("Storage", "Security", "DevOps"):
        repo.save_brief(_brief(need=need))
    assert [b.need for b in repo.list_briefs()] == ["DevOps", "Security", "Storage"]
    assert [b.need for b in repo.list_briefs(limit=2)] == ["DevOps", "Security"]


def test_brief_extra_match_fields_are_dropped(repo):
    brief = repo.save_brief(_brief(matches=[{
        "id": "aws",
        "name": "Amazon Web Services",
        "matchScore": 85,
        "highlightedMitigations": ["cost"],
        "pricingModel": "Pay-as-you-go",
    }]))
    assert brief.matches[0].model_dump(by_alias=True) == {
        "id": "aws", "name": "Amazon Web Services", "matchScore": 85,
    }


# ── SQLite specifics ─────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, []),
        ("", []),
        ("[\"a\", \"b\"]", ["a", "b"]),
        ("{\"a\": 1}", []),
        ("not json", []),
        (["x"], ["x"]),
        (42, []),
    ],
)
def test_normalize_json_array(value, expected):
    assert normalize_json_array(value) == expected


def test_sqlite_null_lists_read_back_empty(sqlite_repo):
    conn = sqlite3.connect(sqlite_repo.db_path)
    conn.execute(
        "INSERT INTO products (id, category, name, focus_areas, workloads, mitigates, "
        "segments, certifications, created_at) VALUES (?, ?, ?, ?, NULL, ?, NULL, NULL, ?)",
        ("bare", "cloud", "Bare Cloud", "[\"Storage\"]", "broken", "2024-01-01T00:00:00+00:00"),
    )
    conn.commit()
    conn.close()

    bare = next(v for v in sqlite_repo.list_cloud_vendors() if v.id == "bare")
    assert bare.focus_areas == ["Storage"]
    assert bare.workloads == []
    assert bare.mitigates == []
    assert bare.certifications == []


def test_sqlite_persists_across_connections(tmp_path):
    path = tmp_path / "nested" / "store.db"
    first = SQLiteRepository(path)
    first.create_schema()
    first.seed(SEED_RECORDS)
    first.save_brief(_brief(contactEmail="ann@example.com"))
    first.close()

    second = SQLiteRepository(path)
    assert len(second.list_products()) == len(SEED_RECORDS)
    assert second.list_briefs()[0].user.email == "ann@example.com"
    second.close()


def test_sqlite_save_brief_rolls_back_on_failure(sqlite_repo):
    sqlite_repo._conn.execute("DROP TABLE searches")
    sqlite_repo._conn.commit()
    with pytest.raises(sqlite3.OperationalError):
        sqlite_repo.save_brief(_brief(contactEmail="ann@example.com"))
    assert sqlite_repo.list_users() == []


# ── Setup ────────────────────────────────────────────────────────────────


def test_build_repository_memory():
    assert isinstance(build_repository(StorageConfig(backend="memory")), MemoryRepository)


def test_build_repository_unknown_backend():
    with pytest.raises(ValueError, match="Unknown storage backend"):
        build_repository(StorageConfig(backend="postgres"))


def test_setup_repository_seeds_sqlite(tmp_path):
    repo = setup_repository(StorageConfig(backend="sqlite", db_path=tmp_path / "app.db"))
    assert isinstance(repo, SQLiteRepository)
    assert [v.id for v in repo.list_cloud_vendors()] == ["aws", "azure", "gcp", "ibm", "do"]
    repo.close()


def test_setup_repository_without_seed():
    repo = setup_repository(StorageConfig(backend="memory", seed_on_startup=False))
    assert repo.list_products() == []


def test_memory_seed_copies_records():
    repo = MemoryRepository()
    record = VendorRecord(id="x", category="cloud", name="X", focus_areas=["Storage"])
    repo.seed([record])
    record.focus_areas.append("DevOps")
    assert repo.list_cloud_vendors()[0].focus_areas == ["Storage"]


def test_brief_user_created_at_matches_registration(repo):
    brief = repo.save_brief(_brief(contactEmail="ann@example.com"))
    registered = repo.list_users()[0]
    assert brief.user.created_at == registered.created_at
    assert repo.list_briefs()[0].user.created_at == registered.created_at

    again = repo.save_brief(_brief(contactEmail="ANN@example.com", contactName="Ann"))
    assert again.user.created_at == registered.created_at


def test_default_db_path_is_absolute():
    assert DEFAULT_STORAGE_CONFIG.db_path.is_absolute()


def test_project_path_keeps_absolute_paths(tmp_path):
    assert _project_path(str(tmp_path / "x.db")) == tmp_path / "x.db"
    assert _project_path("data/x.db") == PROJECT_ROOT / "data" / "x.db"
    assert (PROJECT_ROOT / "backend" / "storage" / "config.py").exists()
