"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

import logging

from catalog.config import get_settings
from catalog.db import (
    DbClient,
    InMemoryDbClient,
    PostgresDbClient,
    SupabaseRestDbClient,
)

logger = logging.getLogger(__name__)

_db_client: DbClient | None = None


def get_db_client() -> DbClient:
    """
    Return a singleton DB client so connections are shared across requests.
    """
    global _db_client
    if _db_client:
        return _db_client

    settings = get_settings()
    if settings.use_in_memory_backends:
        _db_client = InMemoryDbClient(seed_defaults=settings.seed_defaults)
    elif settings.database_url:
        _db_client = PostgresDbClient(settings.database_url)
    elif settings.supabase_url and settings.supabase_key:
        _db_client = SupabaseRestDbClient(
            settings.supabase_url,
            settings.supabase_key,
            timeout=settings.request_timeout_seconds,
        )
    else:
        logger.warning("No backend configured, falling back to in-memory data")
        _db_client = InMemoryDbClient(seed_defaults=settings.seed_defaults)
    return _db_client


def reset_db_client() -> None:
    global _db_client
    _db_client = None
