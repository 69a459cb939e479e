"""
Value types exchanged between the data-access layer and the aggregator.

Rows coming back from the hosted backend are loosely shaped dicts; they are
normalized here, once, so the rest of the package can rely on trimmed
strings and ``None`` for missing values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional


def clean_text(value: Any) -> Optional[str]:
    """Trim a free-text field; anything empty or non-string becomes None."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class ProfileRecord:
    profession: Optional[str] = None
    id: Optional[str] = None
    username: Optional[str] = None
    full_name: Optional[str] = None
    city: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    role: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ProfileRecord":
        raw_id = row.get("id")
        return cls(
            profession=clean_text(row.get("profession")),
            id=str(raw_id) if raw_id is not None else None,
            username=clean_text(row.get("username")),
            full_name=clean_text(row.get("full_name")),
            city=clean_text(row.get("city")),
            bio=clean_text(row.get("bio")),
            avatar_url=clean_text(row.get("avatar_url")),
            role=clean_text(row.get("role")),
        )

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "full_name": self.full_name,
            "profession": self.profession,
            "city": self.city,
            "bio": self.bio,
            "avatar_url": self.avatar_url,
            "role": self.role,
        }


@dataclass(frozen=True)
class TaxonomyEntry:
    profession: str
    sector: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Optional["TaxonomyEntry"]:
        """Build an entry from a raw row, or None if either field is unusable."""
        profession = clean_text(row.get("profession"))
        sector = clean_text(row.get("sector"))
        if not profession or not sector:
            return None
        return cls(profession=profession, sector=sector)

    @property
    def key(self) -> str:
        return self.profession.lower()

    def as_dict(self) -> dict:
        return {"profession": self.profession, "sector": self.sector}


@dataclass
class ProfessionCount:
    name: str
    count: int = 0

    def as_dict(self) -> dict:
        return {"name": self.name, "count": self.count}


@dataclass
class SectorGroup:
    sector_name: str
    professions: list[ProfessionCount] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(p.count for p in self.professions)

    def as_dict(self) -> dict:
        return {
            "sector_name": self.sector_name,
            "professions": [p.as_dict() for p in self.professions],
        }
