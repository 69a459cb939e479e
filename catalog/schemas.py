"""
Pydantic schemas for the catalog API.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field


class ProfessionCountSchema(BaseModel):
    name: str
    count: int


class SectorGroupSchema(BaseModel):
    sector_name: str
    professions: list[ProfessionCountSchema]
    total: int


class CatalogResponse(BaseModel):
    sectors: list[SectorGroupSchema]
    active_sector: Optional[str] = None
    active_professions: list[ProfessionCountSchema]
    total_professionals: int


class SuggestionResponse(BaseModel):
    query: str
    suggestions: list[str]


class SectorListResponse(BaseModel):
    sectors: list[str]


class SectorProfessionsResponse(BaseModel):
    sector: str
    professions: list[str]


class TaxonomyEntryPayload(BaseModel):
    sector: str = Field(..., min_length=1, max_length=128)
    profession: str = Field(..., min_length=1, max_length=128)


class TaxonomyEntryResponse(BaseModel):
    sector: str
    profession: str


class ProfileSummary(BaseModel):
    id: Optional[str] = None
    username: Optional[str] = None
    full_name: Optional[str] = None
    profession: Optional[str] = None
    city: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None


class SearchResponse(BaseModel):
    category: Optional[str] = None
    query: Optional[str] = None
    profiles: list[ProfileSummary]
    total: int


class HealthResponse(BaseModel):
    status: Literal["ok"]
