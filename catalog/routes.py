"""
HTTP routes for the catalog API.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from catalog.config import get_settings
from catalog.db import BackendError, DbClient
from catalog.dependencies import get_db_client
from catalog.records import SectorGroup, TaxonomyEntry, clean_text
from catalog.schemas import (
    CatalogResponse,
    HealthResponse,
    ProfessionCountSchema,
    ProfileSummary,
    SearchResponse,
    SectorGroupSchema,
    SectorListResponse,
    SectorProfessionsResponse,
    SuggestionResponse,
    TaxonomyEntryPayload,
    TaxonomyEntryResponse,
)
from catalog.taxonomy import (
    build_catalog,
    filter_professions,
    list_sectors,
    professions_for_sector,
    resolve_active_sector,
    suggest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _backend_unavailable(exc: BackendError) -> HTTPException:
    logger.error("Backend unavailable: %s", exc)
    return HTTPException(status_code=503, detail="Backend unavailable")


def _group_schema(group: SectorGroup) -> SectorGroupSchema:
    return SectorGroupSchema(
        sector_name=group.sector_name,
        professions=[
            ProfessionCountSchema(name=p.name, count=p.count)
            for p in group.professions
        ],
        total=group.total,
    )


@router.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(status="ok")


@router.get("/categories", response_model=CatalogResponse)
def get_categories(
    sector: str | None = Query(None, description="Sector to open on load"),
    q: str | None = Query(None, description="Filter for the active sector"),
    db: DbClient = Depends(get_db_client),
):
    """
    Sector-grouped catalog of the professions in use, with the active sector
    resolved from ``sector`` (falling back to the first one).
    """
    settings = get_settings()
    try:
        profiles = db.fetch_professional_profiles()
        taxonomy = db.fetch_taxonomy()
    except BackendError as exc:
        raise _backend_unavailable(exc) from exc

    catalog = build_catalog(
        profiles, taxonomy, fallback_sector=settings.fallback_sector
    )
    active = resolve_active_sector(catalog, sector)
    return CatalogResponse(
        sectors=[_group_schema(group) for group in catalog],
        active_sector=active.sector_name if active else None,
        active_professions=[
            ProfessionCountSchema(name=p.name, count=p.count)
            for p in filter_professions(active, q)
        ],
        total_professionals=sum(group.total for group in catalog),
    )


@router.get("/suggest", response_model=SuggestionResponse)
def get_suggestions(
    q: str = Query("", max_length=128),
    limit: int | None = Query(None, ge=1, le=20),
    db: DbClient = Depends(get_db_client),
):
    settings = get_settings()
    if len(q) < settings.suggestion_min_length:
        return SuggestionResponse(query=q, suggestions=[])
    try:
        taxonomy = db.fetch_taxonomy()
    except BackendError as exc:
        raise _backend_unavailable(exc) from exc
    suggestions = suggest(
        q,
        taxonomy,
        limit=limit or settings.suggestion_limit,
        min_length=settings.suggestion_min_length,
    )
    return SuggestionResponse(query=q, suggestions=suggestions)


@router.get("/sectors", response_model=SectorListResponse)
def get_sectors(db: DbClient = Depends(get_db_client)):
    try:
        taxonomy = db.fetch_taxonomy()
    except BackendError as exc:
        raise _backend_unavailable(exc) from exc
    return SectorListResponse(sectors=list_sectors(taxonomy))


@router.get(
    "/sectors/{sector}/professions", response_model=SectorProfessionsResponse
)
def get_sector_professions(sector: str, db: DbClient = Depends(get_db_client)):
    try:
        taxonomy = db.fetch_taxonomy()
    except BackendError as exc:
        raise _backend_unavailable(exc) from exc
    if sector not in list_sectors(taxonomy):
        raise HTTPException(status_code=404, detail="Sector not found")
    return SectorProfessionsResponse(
        sector=sector, professions=professions_for_sector(taxonomy, sector)
    )


@router.post("/taxonomy", response_model=TaxonomyEntryResponse, status_code=201)
def add_taxonomy_entry(
    payload: TaxonomyEntryPayload, db: DbClient = Depends(get_db_client)
):
    """Register a custom profession under a sector."""
    entry = TaxonomyEntry.from_row(payload.model_dump())
    if entry is None:
        raise HTTPException(status_code=400, detail="Sector and profession required")
    try:
        existing = db.fetch_taxonomy()
        if any(e.sector == entry.sector and e.key == entry.key for e in existing):
            raise HTTPException(status_code=409, detail="Profession already listed")
        db.add_taxonomy_entry(entry)
    except BackendError as exc:
        raise _backend_unavailable(exc) from exc
    logger.info("Added profession %r to sector %r", entry.profession, entry.sector)
    return TaxonomyEntryResponse(sector=entry.sector, profession=entry.profession)


@router.get("/search", response_model=SearchResponse)
def search_professionals(
    category: str | None = Query(None, max_length=128),
    q: str | None = Query(None, max_length=128),
    limit: int = Query(100, ge=1, le=500),
    db: DbClient = Depends(get_db_client),
):
    category = clean_text(category)
    q = clean_text(q)
    try:
        profiles = db.search_profiles(category=category, query=q, limit=limit)
    except BackendError as exc:
        raise _backend_unavailable(exc) from exc
    return SearchResponse(
        category=category,
        query=q,
        profiles=[ProfileSummary(**p.as_dict()) for p in profiles],
        total=len(profiles),
    )
