"""
Search-as-you-type lookups with stale-response suppression.

Each keystroke issues a numbered ticket. A lookup waits out the quiet
period, then checks whether a newer ticket was issued meanwhile; only the
latest ticket's result is ever handed back to the caller.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable, Optional, Union

from catalog.config import Settings, get_settings
from catalog.taxonomy import DEFAULT_SUGGESTION_LIMIT, MIN_QUERY_LENGTH, suggest

logger = logging.getLogger(__name__)

TaxonomyLoader = Callable[[], Union[Iterable[Any], Awaitable[Iterable[Any]]]]


@dataclass(frozen=True)
class SuggestionTicket:
    seq: int
    query: str


class SuggestionSession:
    """Per-view suggestion state: the latest issued ticket and its result."""

    def __init__(
        self,
        load_taxonomy: TaxonomyLoader,
        *,
        limit: int = DEFAULT_SUGGESTION_LIMIT,
        min_length: int = MIN_QUERY_LENGTH,
        quiet_period_ms: int = 300,
    ):
        self._load_taxonomy = load_taxonomy
        self.limit = limit
        self.min_length = min_length
        self.quiet_period = max(quiet_period_ms, 0) / 1000.0
        self._seq = 0
        self.latest: Optional[SuggestionTicket] = None
        self.suggestions: list[str] = []

    @classmethod
    def from_settings(
        cls, load_taxonomy: TaxonomyLoader, settings: Optional[Settings] = None
    ) -> "SuggestionSession":
        settings = settings or get_settings()
        return cls(
            load_taxonomy,
            limit=settings.suggestion_limit,
            min_length=settings.suggestion_min_length,
            quiet_period_ms=settings.suggestion_quiet_period_ms,
        )

    def issue(self, query: str) -> SuggestionTicket:
        self._seq += 1
        self.latest = SuggestionTicket(seq=self._seq, query=query)
        return self.latest

    def is_current(self, ticket: SuggestionTicket) -> bool:
        return self.latest is not None and ticket.seq == self.latest.seq

    def apply(self, ticket: SuggestionTicket, results: list[str]) -> bool:
        """Store ``results`` if ``ticket`` is still the latest one."""
        if not self.is_current(ticket):
            logger.debug(
                "Dropping stale suggestions for %r (seq %d)", ticket.query, ticket.seq
            )
            return False
        self.suggestions = list(results)
        return True

    async def _taxonomy(self) -> Iterable[Any]:
        loaded = self._load_taxonomy()
        if inspect.isawaitable(loaded):
            loaded = await loaded
        return loaded

    async def lookup(self, query: str) -> Optional[list[str]]:
        """
        Debounced lookup for ``query``.

        Returns the suggestions, or None when a newer query superseded this
        one before its result was ready.
        """
        ticket = self.issue(query)
        if len(query or "") < self.min_length:
            self.apply(ticket, [])
            return []
        if self.quiet_period:
            await asyncio.sleep(self.quiet_period)
        if not self.is_current(ticket):
            return None
        taxonomy = await self._taxonomy()
        results = suggest(query, taxonomy, limit=self.limit, min_length=self.min_length)
        if not self.apply(ticket, results):
            return None
        return results
