"""
Sector/profession catalog aggregation and suggestion lookups.

Everything here is a pure function of already-fetched collections: profiles
and taxonomy rows go in, a sorted catalog or a short list of labels comes
out. Dirty rows degrade to "no profession" or "no match" instead of raising.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional, Sequence

from catalog.records import (
    ProfessionCount,
    ProfileRecord,
    SectorGroup,
    TaxonomyEntry,
    clean_text,
)

logger = logging.getLogger(__name__)

FALLBACK_SECTOR = "Other"
DEFAULT_SUGGESTION_LIMIT = 5
MIN_QUERY_LENGTH = 2

Catalog = list[SectorGroup]


def _profession_of(profile: Any) -> Optional[str]:
    if isinstance(profile, ProfileRecord):
        return clean_text(profile.profession)
    if isinstance(profile, Mapping):
        return clean_text(profile.get("profession"))
    return clean_text(getattr(profile, "profession", None))


def _as_entry(item: Any) -> Optional[TaxonomyEntry]:
    if isinstance(item, TaxonomyEntry):
        return item
    if isinstance(item, Mapping):
        return TaxonomyEntry.from_row(item)
    return TaxonomyEntry.from_row(
        {
            "profession": getattr(item, "profession", None),
            "sector": getattr(item, "sector", None),
        }
    )


def _label_of(item: Any) -> Optional[str]:
    if isinstance(item, str):
        return clean_text(item)
    return _profession_of(item)


def iter_entries(taxonomy: Optional[Iterable[Any]]) -> Iterable[TaxonomyEntry]:
    for item in taxonomy or ():
        entry = _as_entry(item)
        if entry is not None:
            yield entry


def build_sector_lookup(taxonomy: Optional[Iterable[Any]]) -> dict[str, str]:
    """Map lowered profession -> sector. Later duplicates overwrite earlier ones."""
    return {entry.key: entry.sector for entry in iter_entries(taxonomy)}


def _sector_sort_key(group: SectorGroup, fallback_sector: str) -> tuple:
    name = group.sector_name
    return (name == fallback_sector, name.casefold(), name)


def build_catalog(
    profiles: Optional[Iterable[Any]],
    taxonomy: Optional[Iterable[Any]],
    fallback_sector: str = FALLBACK_SECTOR,
) -> Catalog:
    """
    Group profiles into sectors and count each profession label.

    Profiles are matched against the taxonomy on the lowered, trimmed label.
    Inside a sector the counts are keyed the same way and displayed with the
    spelling seen first, so "Astrologer" and " astrologer " add up to one
    entry named "Astrologer".
    Profiles without a profession are skipped. Sectors come back
    alphabetically with ``fallback_sector`` last.
    """
    lookup = build_sector_lookup(taxonomy)
    groups: dict[str, SectorGroup] = {}
    counts: dict[str, dict[str, ProfessionCount]] = {}
    skipped = 0

    for profile in profiles or ():
        label = _profession_of(profile)
        if not label:
            skipped += 1
            continue
        # Keyed case-insensitively so " astrologer " and "Astrologer" share one
        # entry; the first spelling seen is the one displayed.
        key = label.lower()
        sector = lookup.get(key, fallback_sector)
        group = groups.get(sector)
        if group is None:
            group = groups[sector] = SectorGroup(sector_name=sector)
            counts[sector] = {}
        entry = counts[sector].get(key)
        if entry is None:
            entry = counts[sector][key] = ProfessionCount(name=label)
            group.professions.append(entry)
        entry.count += 1

    catalog = sorted(
        groups.values(), key=lambda g: _sector_sort_key(g, fallback_sector)
    )
    logger.debug(
        "Built catalog: %d sectors, %d taxonomy keys, %d profiles skipped",
        len(catalog),
        len(lookup),
        skipped,
    )
    return catalog


def resolve_active_sector(
    catalog: Sequence[SectorGroup], requested_sector_name: Optional[str] = None
) -> Optional[SectorGroup]:
    """Return the requested sector if present, else the first one (or None)."""
    if not catalog:
        return None
    if requested_sector_name:
        for group in catalog:
            if group.sector_name == requested_sector_name:
                return group
    return catalog[0]


def suggest(
    query: Optional[str],
    taxonomy: Optional[Iterable[Any]],
    limit: int = DEFAULT_SUGGESTION_LIMIT,
    min_length: int = MIN_QUERY_LENGTH,
) -> list[str]:
    """
    Profession labels containing ``query``, in taxonomy order, deduplicated.

    ``taxonomy`` may hold entries, rows or plain label strings; only the
    profession label is needed.
    """
    if not isinstance(query, str) or len(query) < min_length or limit <= 0:
        return []
    needle = query.lower()
    results: list[str] = []
    seen: set[str] = set()
    for item in taxonomy or ():
        label = _label_of(item)
        if not label or needle not in label.lower() or label in seen:
            continue
        seen.add(label)
        results.append(label)
        if len(results) >= limit:
            break
    return results


def list_sectors(taxonomy: Optional[Iterable[Any]]) -> list[str]:
    seen: dict[str, None] = {}
    for entry in iter_entries(taxonomy):
        seen.setdefault(entry.sector, None)
    return list(seen)


def professions_for_sector(
    taxonomy: Optional[Iterable[Any]], sector: Optional[str]
) -> list[str]:
    if not sector:
        return []
    return [entry.profession for entry in iter_entries(taxonomy) if entry.sector == sector]


def filter_professions(
    group: Optional[SectorGroup], term: Optional[str] = None
) -> list[ProfessionCount]:
    """Professions of ``group`` whose name contains ``term`` (case-insensitive)."""
    if group is None:
        return []
    needle = (term or "").strip().lower()
    if not needle:
        return list(group.professions)
    return [p for p in group.professions if needle in p.name.lower()]
