"""
Print the current sector catalog, or suggestions for a query.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from catalog.config import get_settings
from catalog.db import BackendError
from catalog.dependencies import get_db_client
from catalog.suggestions import SuggestionSession
from catalog.taxonomy import build_catalog, resolve_active_sector

logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(description="Inspect the profession catalog")
    parser.add_argument("-s", "--sector", type=str, default=None, help="Sector to show")
    parser.add_argument(
        "-q",
        "--query",
        type=str,
        default=None,
        help="Print suggestions for this text instead of the catalog",
    )
    parser.add_argument("-n", "--limit", type=int, default=None)
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(name)s %(levelname)s %(asctime)s %(message)s",
        datefmt="%m/%d/%Y %I:%M:%S %p",
    )

    settings = get_settings()
    db = get_db_client()
    try:
        if args.query is not None:
            session = SuggestionSession.from_settings(db.fetch_taxonomy, settings)
            if args.limit:
                session.limit = args.limit
            for label in asyncio.run(session.lookup(args.query)) or []:
                print(label)
            return 0
        taxonomy = db.fetch_taxonomy()
        profiles = db.fetch_professional_profiles()
    except BackendError as exc:
        logger.exception("Could not read the backend: %s", exc)
        return 1

    catalog = build_catalog(profiles, taxonomy, fallback_sector=settings.fallback_sector)
    if not catalog:
        print("No professionals yet.")
        return 0

    groups = [resolve_active_sector(catalog, args.sector)] if args.sector else catalog
    for group in groups:
        print(f"{group.sector_name} ({group.total})")
        for profession in group.professions:
            print(f"  {profession.name}: {profession.count}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
