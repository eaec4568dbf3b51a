import os
import unittest
from unittest import mock

from pydantic import ValidationError

from storefront.core.config import Settings, get_settings


class SettingsTests(unittest.TestCase):
    def test_missing_project_id_fails_fast(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ValidationError):
                Settings(_env_file=None)

    def test_reads_environment(self):
        env = {
            "FIREBASE_PROJECT_ID": "shop-prod",
            "GOOGLE_APPLICATION_CREDENTIALS": "/etc/keys/sa.json",
            "FIREBASE_WEB_API_KEY": "web-key",
            "STOREFRONT_USE_IN_MEMORY_BACKENDS": "true",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            settings = get_settings()

        self.assertEqual(settings.firebase_project_id, "shop-prod")
        self.assertEqual(settings.firebase_credentials_path, "/etc/keys/sa.json")
        self.assertEqual(settings.firebase_web_api_key, "web-key")
        self.assertTrue(settings.use_in_memory_backends)
        self.assertEqual(settings.api_prefix, "/api")


if __name__ == "__main__":
    unittest.main()
