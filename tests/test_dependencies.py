import unittest

from app.config import Settings
from app.dependencies import AppServices
from app.services.api_keys import ApiKeyStorage
from app.services.history import HistoryRepository
from app.services.preference_store import PreferenceStore
from app.services.preferences import AppPreferences


class TestAppServices(unittest.TestCase):
    def setUp(self):
        store = PreferenceStore()
        self.services = AppServices(
            settings=Settings(REDIS_URL=""),
            store=store,
            history=HistoryRepository(store),
            preferences=AppPreferences(store),
            api_keys=ApiKeyStorage(store),
        )

    def test_one_gemini_service_per_key(self):
        first = self.services.gemini_for("key-a")
        self.assertIs(self.services.gemini_for("key-a"), first)
        self.assertEqual(first.api_key, "key-a")

        other = self.services.gemini_for("key-b")
        self.assertIsNot(other, first)
        self.assertEqual(len(self.services.gemini_services), 2)

    def test_reset_drops_cached_services(self):
        first = self.services.gemini_for("key-a")
        self.services.reset_gemini()
        self.assertEqual(self.services.gemini_services, {})
        self.assertIsNot(self.services.gemini_for("key-a"), first)


if __name__ == '__main__':
    unittest.main()
