from __future__ import annotations

import unittest

from app.repositories.memory_store import InMemoryOnboardingStore
from app.services.integration_service import IntegrationRequestError, IntegrationService
from db.models.integration import IntegrationStatus


class TestIntegrationService(unittest.TestCase):
    def setUp(self) -> None:
        self.store = InMemoryOnboardingStore()
        self.service = IntegrationService(self.store)

    def test_connect_defaults_name_from_catalog(self) -> None:
        record = self.service.connect(user_id="u1", integration_type="google-ads")

        self.assertEqual(record.id, 1)
        self.assertEqual(record.name, "Google Ads")
        self.assertEqual(record.status, IntegrationStatus.CONNECTED)
        self.assertEqual(record.config, {})

    def test_connect_unknown_type_uses_type_as_name(self) -> None:
        record = self.service.connect(user_id="u1", integration_type="pinterest-ads")
        self.assertEqual(record.name, "pinterest-ads")

    def test_connect_keeps_explicit_name_and_config(self) -> None:
        record = self.service.connect(
            user_id="u1",
            integration_type="tiktok-ads",
            name="EU account",
            config={"account_id": "123"},
        )
        self.assertEqual(record.name, "EU account")
        self.assertEqual(record.config, {"account_id": "123"})

    def test_connect_requires_type(self) -> None:
        for integration_type in ("", "   "):
            with self.subTest(integration_type=integration_type):
                with self.assertRaises(IntegrationRequestError):
                    self.service.connect(user_id="u1", integration_type=integration_type)

    def test_disconnect_hides_integration_from_list(self) -> None:
        first = self.service.connect(user_id="u1", integration_type="google-ads")
        second = self.service.connect(user_id="u1", integration_type="facebook-ads")

        self.assertTrue(self.service.disconnect(user_id="u1", integration_id=first.id))

        active = self.service.list_active("u1")
        self.assertEqual([item.id for item in active], [second.id])
        self.assertEqual(self.store.get_integration(first.id).status, IntegrationStatus.DISCONNECTED)

    def test_disconnect_unknown_or_foreign_integration_returns_false(self) -> None:
        record = self.service.connect(user_id="u1", integration_type="google-ads")

        self.assertFalse(self.service.disconnect(user_id="u1", integration_id=999))
        self.assertFalse(self.service.disconnect(user_id="u2", integration_id=record.id))
        self.assertEqual(self.store.get_integration(record.id).status, IntegrationStatus.CONNECTED)

    def test_list_is_most_recent_first_and_per_user(self) -> None:
        first = self.service.connect(user_id="u1", integration_type="google-ads")
        second = self.service.connect(user_id="u1", integration_type="linkedin-ads")
        self.service.connect(user_id="u2", integration_type="snapchat-ads")

        self.assertEqual([item.id for item in self.service.list_active("u1")], [second.id, first.id])


if __name__ == "__main__":
    unittest.main()
