from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .analytics.aggregator import compute_analytics
from .analytics.store import BRIEF_SAVED, MATCH_SEARCH, get_events, record_event
from .catalog.matching import query_cloud_vendors
from .catalog.metadata import catalog_metadata
from .catalog.models import (
    CatalogMetadata,
    CollectionsResponse,
    MatchQuery,
    MatchResponse,
    ProductsResponse,
)
from .config import DEFAULT_SERVER_CONFIG
from .storage import setup as storage_setup
from .storage.base import Repository
from .storage.config import DEFAULT_STORAGE_CONFIG
from .storage.models import (
    BriefResponse,
    BriefsResponse,
    CloudBriefRequest,
    UsersResponse,
)

logger = logging.getLogger(__name__)

STORAGE_CONFIG = DEFAULT_STORAGE_CONFIG


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Explicit one-time setup; nothing downstream checks an "initialized" flag.
    app.state.repository = storage_setup.setup_repository(STORAGE_CONFIG)
    try:
        yield
    finally:
        app.state.repository.close()


app = FastAPI(title="Tech Finder API", version="1.0.0", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(DEFAULT_SERVER_CONFIG.cors_origins),
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_repository(request: Request) -> Repository:
    return request.app.state.repository


@app.exception_handler(Exception)
async def unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Unexpected server error"})


# ── Health ───────────────────────────────────────────────────────────────


@app.get("/health")
@app.get("/api/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# ── Catalog ──────────────────────────────────────────────────────────────


@app.get("/api/collections", response_model=CollectionsResponse)
def collections(repo: Repository = Depends(get_repository)) -> CollectionsResponse:
    return CollectionsResponse(collections=repo.fetch_collections())


@app.get("/api/products", response_model=ProductsResponse)
def products(repo: Repository = Depends(get_repository)) -> ProductsResponse:
    return ProductsResponse(products=repo.list_products())


@app.get("/api/metadata", response_model=CatalogMetadata)
def metadata(repo: Repository = Depends(get_repository)) -> CatalogMetadata:
    return catalog_metadata(repo.list_cloud_vendors())


@app.post("/api/cloud-matches", response_model=MatchResponse)
def cloud_matches(
    body: MatchQuery,
    repo: Repository = Depends(get_repository),
) -> MatchResponse:
    start_time = time.time()
    matches = query_cloud_vendors(repo.list_cloud_vendors(), body)

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    record_event(MATCH_SEARCH, {
        "need": body.need,
        "workload_size": body.workload_size,
        "budget": body.budget,
        "has_weak_points": bool(body.weak_points.strip()),
        "results_count": len(matches),
        "top_vendor": matches[0].id if matches else None,
        "response_time_ms": elapsed_ms,
    })
    return MatchResponse(matches=matches)


# ── Briefs & contacts ────────────────────────────────────────────────────


@app.get("/api/cloud-briefs", response_model=BriefsResponse)
def list_cloud_briefs(
    limit: int = Query(default=STORAGE_CONFIG.brief_list_limit, ge=1, le=100),
    repo: Repository = Depends(get_repository),
) -> BriefsResponse:
    return BriefsResponse(briefs=repo.list_briefs(limit))


@app.post("/api/cloud-briefs", response_model=BriefResponse, status_code=201)
def save_cloud_brief(
    body: CloudBriefRequest,
    repo: Repository = Depends(get_repository),
) -> BriefResponse:
    brief = repo.save_brief(body)
    record_event(BRIEF_SAVED, {
        "need": brief.need,
        "matches_saved": len(brief.matches),
        "has_contact": brief.user is not None,
    })
    logger.info("Saved brief %s (need=%s)", brief.id, brief.need)
    return BriefResponse(brief=brief)


@app.get("/api/users", response_model=UsersResponse)
def users(repo: Repository = Depends(get_repository)) -> UsersResponse:
    return UsersResponse(users=repo.list_users())


# ── Analytics ────────────────────────────────────────────────────────────


@app.get("/api/analytics")
def analytics() -> dict:
    return compute_analytics(get_events())


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    logger.info("Tech Finder API listening on port %d", DEFAULT_SERVER_CONFIG.port)
    uvicorn.run(app, host=DEFAULT_SERVER_CONFIG.host, port=DEFAULT_SERVER_CONFIG.port)
