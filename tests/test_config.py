import os
import unittest
from unittest.mock import patch

from pydantic import ValidationError

from httpmeta.config import Settings, get_settings


class SettingsTests(unittest.TestCase):
    def test_defaults(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)
        self.assertEqual(settings.forwarded_for_header, 'x-forwarded-for')
        self.assertEqual(settings.accept_header, 'accept')
        self.assertTrue(settings.trust_forwarded_for)

    def test_environment_overrides(self) -> None:
        env = {
            'HTTPMETA_FORWARDED_FOR_HEADER': ' X-Real-Forwarded-For ',
            'HTTPMETA_ACCEPT_HEADER': 'Accept-Encoding',
            'HTTPMETA_TRUST_FORWARDED_FOR': 'false',
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings(_env_file=None)
        self.assertEqual(settings.forwarded_for_header, 'x-real-forwarded-for')
        self.assertEqual(settings.accept_header, 'accept-encoding')
        self.assertFalse(settings.trust_forwarded_for)

    def test_empty_header_name_is_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(_env_file=None, accept_header='  ')

    def test_get_settings_is_cached(self) -> None:
        self.assertIs(get_settings(), get_settings())


if __name__ == '__main__':
    unittest.main()
