import unittest

from catalog.db import PostgresDbClient
from catalog.records import ProfileRecord, TaxonomyEntry
from catalog.taxonomy import build_catalog


class PostgresDbClientTests(unittest.TestCase):
    """
    Uses SQLite via SQLAlchemy URL for fast/local testing of the Postgres client logic.
    """

    @classmethod
    def setUpClass(cls):
        cls.db = PostgresDbClient("sqlite+pysqlite:///:memory:")
        for profile in (
            ProfileRecord(id="1", profession="Plumber", full_name="Mario Rossi", role="professional"),
            ProfileRecord(id="2", profession="plumber", full_name="Luigi Rossi", role="provider"),
            ProfileRecord(id="3", profession=None, full_name="No Job", role="professional"),
            ProfileRecord(id="4", profession="Dentist", full_name="Tooth Fairy", role="reviewer"),
            ProfileRecord(id="5", profession="Chef", full_name="Ann Cook", role="professional"),
            ProfileRecord(id="6", profession="Nail_Tech", full_name="Jo Kim", role="provider"),
        ):
            cls.db.add_profile(profile)
        cls.db.add_taxonomy_entry(TaxonomyEntry(profession="plumber", sector="Home Services"))
        cls.db.add_taxonomy_entry(TaxonomyEntry(profession="Chef", sector="Events & Hospitality"))

    def test_fetch_professional_profiles(self):
        profiles = self.db.fetch_professional_profiles()
        self.assertEqual({p.id for p in profiles}, {"1", "5"})

    def test_fetch_taxonomy_keeps_insert_order(self):
        taxonomy = self.db.fetch_taxonomy()
        self.assertEqual(
            [e.profession for e in taxonomy], ["plumber", "Chef"]
        )

    def test_catalog_from_rows(self):
        catalog = build_catalog(
            self.db.fetch_professional_profiles(), self.db.fetch_taxonomy()
        )
        self.assertEqual(
            [g.sector_name for g in catalog], ["Events & Hospitality", "Home Services"]
        )

    def test_search_by_category_is_case_insensitive(self):
        results = self.db.search_profiles(category="PLUMB")
        self.assertEqual({p.id for p in results}, {"1", "2"})

    def test_search_by_query_matches_name_or_profession(self):
        self.assertEqual([p.id for p in self.db.search_profiles(query="ann")], ["5"])
        self.assertEqual(self.db.search_profiles(query="tooth"), [])

    def test_search_treats_like_wildcards_literally(self):
        self.assertEqual(self.db.search_profiles(query="%"), [])
        self.assertEqual([p.id for p in self.db.search_profiles(query="_")], ["6"])
        self.assertEqual(
            [p.id for p in self.db.search_profiles(category="nail_t")], ["6"]
        )

    def test_requires_database_url(self):
        with self.assertRaises(ValueError):
            PostgresDbClient("")


if __name__ == "__main__":
    unittest.main()
