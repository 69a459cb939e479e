"""
Seed the configured backend with the starter profession taxonomy.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from catalog.db import BackendError
from catalog.defaults import default_taxonomy
from catalog.dependencies import get_db_client

logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed the profession taxonomy")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only report which entries would be inserted",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(name)s %(levelname)s %(asctime)s %(message)s",
        datefmt="%m/%d/%Y %I:%M:%S %p",
    )

    db = get_db_client()
    try:
        existing = {(e.sector, e.key) for e in db.fetch_taxonomy()}
        missing = [
            entry
            for entry in default_taxonomy()
            if (entry.sector, entry.key) not in existing
        ]
        logger.info("%d of the starter entries are missing", len(missing))
        if args.dry_run:
            for entry in missing:
                logger.info("Would insert %s / %s", entry.sector, entry.profession)
            return 0
        for entry in missing:
            db.add_taxonomy_entry(entry)
    except BackendError as exc:
        logger.exception("Seeding failed: %s", exc)
        return 1

    logger.info("Inserted %d taxonomy entries", len(missing))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
