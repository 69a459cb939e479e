"""
Data access for profile and taxonomy rows.

The marketplace keeps its data in a hosted Supabase project. Two remote
implementations are provided, one over the Postgres connection string
(SQLAlchemy) and one over the PostgREST HTTP API, plus an in-memory client
for development and tests.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Protocol

import requests
from sqlalchemy import Column, Integer, String, Text, create_engine, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from catalog.defaults import default_taxonomy
from catalog.records import ProfileRecord, TaxonomyEntry, clean_text

logger = logging.getLogger(__name__)

PROFESSIONAL_ROLE = "professional"
SEARCHABLE_ROLES = ("professional", "provider")
PROFILE_COLUMNS = "id,username,full_name,profession,avatar_url,city,bio,role"


class BackendError(RuntimeError):
    """Raised when the hosted backend cannot be read or written."""


class DbClient(Protocol):
    """Interface for database access."""

    def fetch_professional_profiles(self) -> list[ProfileRecord]:
        ...

    def fetch_taxonomy(self) -> list[TaxonomyEntry]:
        ...

    def add_taxonomy_entry(self, entry: TaxonomyEntry) -> TaxonomyEntry:
        ...

    def search_profiles(
        self,
        category: Optional[str] = None,
        query: Optional[str] = None,
        limit: int = 100,
    ) -> list[ProfileRecord]:
        ...


def _contains(haystack: Optional[str], needle: str) -> bool:
    return bool(haystack) and needle.lower() in haystack.lower()


def _like_pattern(value: str) -> str:
    """Substring ILIKE pattern with ``%``/``_`` matched literally (escape ``\\``)."""
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _postgrest_ilike(value: str) -> str:
    # Double-quoted so commas, dots and parentheses stay inside the value.
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'ilike."*{escaped}*"'


class InMemoryDbClient:
    """Simple in-memory database for development and tests."""

    def __init__(
        self,
        profiles: Optional[Iterable[ProfileRecord]] = None,
        taxonomy: Optional[Iterable[TaxonomyEntry]] = None,
        seed_defaults: bool = False,
    ):
        self.profiles: list[ProfileRecord] = list(profiles or [])
        self.taxonomy: list[TaxonomyEntry] = list(taxonomy or [])
        if seed_defaults and not self.taxonomy:
            self.taxonomy = default_taxonomy()

    def add_profile(self, profile: ProfileRecord) -> None:
        self.profiles.append(profile)

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        self.profiles.clear()
        self.taxonomy.clear()

    def fetch_professional_profiles(self) -> list[ProfileRecord]:
        return [
            p
            for p in self.profiles
            if p.role == PROFESSIONAL_ROLE and p.profession
        ]

    def fetch_taxonomy(self) -> list[TaxonomyEntry]:
        return list(self.taxonomy)

    def add_taxonomy_entry(self, entry: TaxonomyEntry) -> TaxonomyEntry:
        self.taxonomy.append(entry)
        return entry

    def search_profiles(
        self,
        category: Optional[str] = None,
        query: Optional[str] = None,
        limit: int = 100,
    ) -> list[ProfileRecord]:
        results: list[ProfileRecord] = []
        for profile in self.profiles:
            if profile.role not in SEARCHABLE_ROLES:
                continue
            if category and not _contains(profile.profession, category):
                continue
            if query and not (
                _contains(profile.profession, query)
                or _contains(profile.full_name, query)
            ):
                continue
            results.append(profile)
            if len(results) >= limit:
                break
        return results


class PostgresDbClient:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., the
    Supabase Postgres connection string, or SQLite for tests).
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("DATABASE_URL is required for PostgresDbClient")
        # Supabase hands out postgres:// URLs; SQLAlchemy wants postgresql://
        if database_url.startswith("postgres://"):
            database_url = database_url.replace("postgres://", "postgresql://", 1)
        self.engine = create_engine(
            database_url,
            future=True,
            pool_pre_ping=True,
            pool_recycle=1800,
        )
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)

    def _to_profile_record(self, row: "ProfileRow") -> ProfileRecord:
        return ProfileRecord.from_row(
            {
                "id": row.id,
                "username": row.username,
                "full_name": row.full_name,
                "profession": row.profession,
                "avatar_url": row.avatar_url,
                "city": row.city,
                "bio": row.bio,
                "role": row.role,
            }
        )

    def add_profile(self, profile: ProfileRecord) -> None:
        try:
            with self.Session() as session:
                session.add(
                    ProfileRow(
                        id=profile.id,
                        username=profile.username,
                        full_name=profile.full_name,
                        profession=profile.profession,
                        avatar_url=profile.avatar_url,
                        city=profile.city,
                        bio=profile.bio,
                        role=profile.role,
                    )
                )
                session.commit()
        except SQLAlchemyError as exc:
            raise BackendError(f"Failed to insert profile: {exc}") from exc

    def fetch_professional_profiles(self) -> list[ProfileRecord]:
        stmt = select(ProfileRow).where(
            ProfileRow.role == PROFESSIONAL_ROLE,
            ProfileRow.profession.is_not(None),
        )
        try:
            with self.Session() as session:
                rows = session.execute(stmt).scalars().all()
                return [self._to_profile_record(row) for row in rows]
        except SQLAlchemyError as exc:
            raise BackendError(f"Failed to load profiles: {exc}") from exc

    def fetch_taxonomy(self) -> list[TaxonomyEntry]:
        stmt = select(TaxonomyRow).order_by(TaxonomyRow.id.asc())
        try:
            with self.Session() as session:
                rows = session.execute(stmt).scalars().all()
        except SQLAlchemyError as exc:
            raise BackendError(f"Failed to load taxonomy: {exc}") from exc
        entries = (
            TaxonomyEntry.from_row({"profession": r.profession, "sector": r.sector})
            for r in rows
        )
        return [entry for entry in entries if entry is not None]

    def add_taxonomy_entry(self, entry: TaxonomyEntry) -> TaxonomyEntry:
        try:
            with self.Session() as session:
                session.add(
                    TaxonomyRow(profession=entry.profession, sector=entry.sector)
                )
                session.commit()
        except SQLAlchemyError as exc:
            raise BackendError(f"Failed to insert taxonomy entry: {exc}") from exc
        return entry

    def search_profiles(
        self,
        category: Optional[str] = None,
        query: Optional[str] = None,
        limit: int = 100,
    ) -> list[ProfileRecord]:
        stmt = select(ProfileRow).where(ProfileRow.role.in_(SEARCHABLE_ROLES))
        if category:
            stmt = stmt.where(
                ProfileRow.profession.ilike(_like_pattern(category), escape="\\")
            )
        if query:
            pattern = _like_pattern(query)
            stmt = stmt.where(
                or_(
                    ProfileRow.profession.ilike(pattern, escape="\\"),
                    ProfileRow.full_name.ilike(pattern, escape="\\"),
                )
            )
        stmt = stmt.limit(limit)
        try:
            with self.Session() as session:
                rows = session.execute(stmt).scalars().all()
                return [self._to_profile_record(row) for row in rows]
        except SQLAlchemyError as exc:
            raise BackendError(f"Failed to search profiles: {exc}") from exc


class SupabaseRestDbClient:
    """Reads and writes through the project's PostgREST endpoint."""

    def __init__(self, supabase_url: str, api_key: str, timeout: float = 10.0):
        if not supabase_url or not api_key:
            raise ValueError("SUPABASE_URL and SUPABASE_KEY are required")
        self.base_url = f"{supabase_url.rstrip('/')}/rest/v1"
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update(
            {
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            }
        )

    def _request(self, method: str, table: str, **kwargs) -> list[dict]:
        url = f"{self.base_url}/{table}"
        try:
            response = self.session.request(
                method, url, timeout=self.timeout, **kwargs
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.error("Supabase %s %s failed: %s", method, table, exc)
            raise BackendError(f"Supabase request to {table} failed: {exc}") from exc
        if not response.content:
            return []
        data = response.json()
        return data if isinstance(data, list) else [data]

    def fetch_professional_profiles(self) -> list[ProfileRecord]:
        rows = self._request(
            "GET",
            "profiles",
            params={
                "select": "profession",
                "profession": "not.is.null",
                "role": f"eq.{PROFESSIONAL_ROLE}",
            },
        )
        return [ProfileRecord.from_row(row) for row in rows]

    def fetch_taxonomy(self) -> list[TaxonomyEntry]:
        rows = self._request(
            "GET", "profession_taxonomy", params={"select": "sector,profession"}
        )
        entries = (TaxonomyEntry.from_row(row) for row in rows)
        return [entry for entry in entries if entry is not None]

    def add_taxonomy_entry(self, entry: TaxonomyEntry) -> TaxonomyEntry:
        self._request(
            "POST",
            "profession_taxonomy",
            json=entry.as_dict(),
            headers={"Prefer": "return=minimal"},
        )
        return entry

    def search_profiles(
        self,
        category: Optional[str] = None,
        query: Optional[str] = None,
        limit: int = 100,
    ) -> list[ProfileRecord]:
        params = {
            "select": PROFILE_COLUMNS,
            "role": f"in.({','.join(SEARCHABLE_ROLES)})",
            "limit": str(limit),
        }
        category = clean_text(category)
        query = clean_text(query)
        if category:
            params["profession"] = _postgrest_ilike(category)
        if query:
            match = _postgrest_ilike(query)
            params["or"] = f"(profession.{match},full_name.{match})"
        rows = self._request("GET", "profiles", params=params)
        return [ProfileRecord.from_row(row) for row in rows]


Base = declarative_base()


class ProfileRow(Base):
    __tablename__ = "profiles"

    id = Column(String, primary_key=True)
    username = Column(String, nullable=True, index=True)
    full_name = Column(String, nullable=True)
    profession = Column(String, nullable=True, index=True)
    avatar_url = Column(String, nullable=True)
    city = Column(String, nullable=True)
    bio = Column(Text, nullable=True)
    role = Column(String, nullable=True, index=True)


class TaxonomyRow(Base):
    __tablename__ = "profession_taxonomy"

    id = Column(Integer, primary_key=True, autoincrement=True)
    sector = Column(String, nullable=False, index=True)
    profession = Column(String, nullable=False)
