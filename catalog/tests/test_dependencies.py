import unittest
from unittest.mock import patch

from catalog import dependencies
from catalog.db import InMemoryDbClient, PostgresDbClient, SupabaseRestDbClient


def _settings(**overrides):
    values = {
        "use_in_memory_backends": False,
        "seed_defaults": True,
        "database_url": None,
        "supabase_url": None,
        "supabase_key": None,
        "request_timeout_seconds": 5.0,
    }
    values.update(overrides)
    return type("Settings", (), values)()


class GetDbClientTests(unittest.TestCase):
    def setUp(self):
        dependencies.reset_db_client()

    def tearDown(self):
        dependencies.reset_db_client()

    @patch("catalog.dependencies.get_settings")
    def test_in_memory_is_seeded(self, mock_settings):
        mock_settings.return_value = _settings(use_in_memory_backends=True)
        db = dependencies.get_db_client()
        self.assertIsInstance(db, InMemoryDbClient)
        self.assertIn("Home Services", {e.sector for e in db.fetch_taxonomy()})
        self.assertIs(dependencies.get_db_client(), db)

    @patch("catalog.dependencies.get_settings")
    def test_database_url_selects_sqlalchemy(self, mock_settings):
        mock_settings.return_value = _settings(
            database_url="sqlite+pysqlite:///:memory:"
        )
        self.assertIsInstance(dependencies.get_db_client(), PostgresDbClient)

    @patch("catalog.dependencies.get_settings")
    def test_supabase_credentials_select_rest_client(self, mock_settings):
        mock_settings.return_value = _settings(
            supabase_url="https://proj.supabase.co", supabase_key="key"
        )
        db = dependencies.get_db_client()
        self.assertIsInstance(db, SupabaseRestDbClient)
        self.assertEqual(db.timeout, 5.0)

    @patch("catalog.dependencies.get_settings")
    def test_unconfigured_falls_back_to_memory(self, mock_settings):
        mock_settings.return_value = _settings(seed_defaults=False)
        db = dependencies.get_db_client()
        self.assertIsInstance(db, InMemoryDbClient)
        self.assertEqual(db.fetch_taxonomy(), [])


if __name__ == "__main__":
    unittest.main()
