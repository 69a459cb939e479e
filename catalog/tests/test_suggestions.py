import asyncio
import unittest
from unittest.mock import patch

from catalog.config import Settings
from catalog.suggestions import SuggestionSession

TAXONOMY = [
    {"profession": "Plumber", "sector": "Home Services"},
    {"profession": "Painter", "sector": "Home Services"},
    {"profession": "Pharmacist", "sector": "Health & Medical"},
]


class SuggestionSessionTests(unittest.IsolatedAsyncioTestCase):
    async def test_lookup_returns_suggestions(self):
        session = SuggestionSession(lambda: TAXONOMY, quiet_period_ms=0)
        results = await session.lookup("pl")
        self.assertEqual(results, ["Plumber"])
        self.assertEqual(session.suggestions, ["Plumber"])

    async def test_short_query_clears_without_loading(self):
        calls = []

        def loader():
            calls.append(1)
            return TAXONOMY

        session = SuggestionSession(loader, quiet_period_ms=0)
        session.suggestions = ["Plumber"]
        self.assertEqual(await session.lookup("p"), [])
        self.assertEqual(session.suggestions, [])
        self.assertEqual(calls, [])

    async def test_superseded_lookup_is_dropped(self):
        session = SuggestionSession(lambda: TAXONOMY, quiet_period_ms=20)
        first = asyncio.create_task(session.lookup("pa"))
        await asyncio.sleep(0)
        second = asyncio.create_task(session.lookup("ph"))
        self.assertIsNone(await first)
        self.assertEqual(await second, ["Pharmacist"])
        self.assertEqual(session.suggestions, ["Pharmacist"])

    async def test_stale_result_arriving_late_is_ignored(self):
        release = asyncio.Event()

        async def slow_loader():
            await release.wait()
            return TAXONOMY

        session = SuggestionSession(slow_loader, quiet_period_ms=0)
        slow = asyncio.create_task(session.lookup("pa"))
        await asyncio.sleep(0)
        newer = session.issue("pl")
        session.apply(newer, ["Plumber"])
        release.set()
        self.assertIsNone(await slow)
        self.assertEqual(session.suggestions, ["Plumber"])

    async def test_limit_is_respected(self):
        session = SuggestionSession(lambda: TAXONOMY, limit=1, quiet_period_ms=0)
        self.assertEqual(await session.lookup("er"), ["Plumber"])


class SuggestionSessionSettingsTests(unittest.TestCase):
    def test_from_settings_uses_configured_values(self):
        settings = Settings(
            suggestion_limit=2,
            suggestion_min_length=3,
            suggestion_quiet_period_ms=120,
        )
        session = SuggestionSession.from_settings(lambda: TAXONOMY, settings)
        self.assertEqual(session.limit, 2)
        self.assertEqual(session.min_length, 3)
        self.assertAlmostEqual(session.quiet_period, 0.12)

    def test_from_settings_defaults_to_cached_settings(self):
        settings = Settings(suggestion_quiet_period_ms=50)
        with patch("catalog.suggestions.get_settings", return_value=settings):
            session = SuggestionSession.from_settings(lambda: TAXONOMY)
        self.assertAlmostEqual(session.quiet_period, 0.05)


class SuggestionTicketTests(unittest.TestCase):
    def test_only_latest_ticket_applies(self):
        session = SuggestionSession(lambda: TAXONOMY)
        old = session.issue("pa")
        new = session.issue("pai")
        self.assertGreater(new.seq, old.seq)
        self.assertFalse(session.apply(old, ["Painter", "Pharmacist"]))
        self.assertEqual(session.suggestions, [])
        self.assertTrue(session.apply(new, ["Painter"]))
        self.assertEqual(session.suggestions, ["Painter"])


if __name__ == "__main__":
    unittest.main()
