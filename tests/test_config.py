"""
Tests for settings: Google credential lookup order and validate_config().
"""
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

SRC_DIR = os.path.join(os.path.dirname(__file__), '..', 'src')
sys.path.insert(0, os.path.abspath(SRC_DIR))

import config


CREDENTIAL_VARS = (
    'GOOGLE_SHEETS_CREDENTIALS_FILE',
    'GOOGLE_SHEETS_CREDENTIALS_JSON',
    'K_SERVICE',
    'KUBERNETES_SERVICE_HOST',
)


class TestResolveCredentials(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.root = Path(self.tmp.name)
        clean_env = {k: v for k, v in os.environ.items() if k not in CREDENTIAL_VARS}
        self.env = patch.dict(os.environ, clean_env, clear=True)
        self.env.start()
        self.root_patch = patch.object(config, 'PROJECT_ROOT', self.root)
        self.root_patch.start()

    def tearDown(self):
        self.root_patch.stop()
        self.env.stop()
        self.tmp.cleanup()

    def test_explicit_file_relative_to_project(self):
        (self.root / 'keys').mkdir()
        (self.root / 'keys' / 'sa.json').write_text('{}')
        os.environ['GOOGLE_SHEETS_CREDENTIALS_FILE'] = 'keys/sa.json'

        self.assertEqual(config.resolve_credentials(), str(self.root / 'keys' / 'sa.json'))

    def test_default_file_in_config_folder(self):
        (self.root / 'config').mkdir()
        (self.root / 'config' / 'credentials.json').write_text('{}')
        os.environ['GOOGLE_SHEETS_CREDENTIALS_FILE'] = 'missing.json'

        self.assertEqual(config.resolve_credentials(),
                         str(self.root / 'config' / 'credentials.json'))

    def test_json_variable_is_written_to_temp_file(self):
        os.environ['GOOGLE_SHEETS_CREDENTIALS_JSON'] = '{"type": "service_account"}'

        path = config.resolve_credentials()

        self.assertEqual(Path(path).read_text(), '{"type": "service_account"}')

    def test_cloud_run_uses_default_credentials(self):
        os.environ['K_SERVICE'] = 'status-portal'
        self.assertIsNone(config.resolve_credentials())

    def test_kubernetes_uses_default_credentials(self):
        os.environ['KUBERNETES_SERVICE_HOST'] = '10.0.0.1'
        self.assertIsNone(config.resolve_credentials())

    def test_nothing_configured_raises(self):
        with self.assertRaises(ValueError):
            config.resolve_credentials()


class TestValidateConfig(unittest.TestCase):

    def test_collects_every_problem(self):
        with patch.object(config, 'GOOGLE_API_KEY', None), \
             patch.object(config, 'GOOGLE_SHEET_ID', ''), \
             patch.object(config, 'CUSTOMER_COLUMNS', {'dni': ''}), \
             patch.object(config, 'get_credentials_path', side_effect=ValueError("No Google Sheets credentials found")):
            with self.assertRaises(ValueError) as ctx:
                config.validate_config()

        message = str(ctx.exception)
        self.assertIn("GOOGLE_API_KEY", message)
        self.assertIn("GOOGLE_SHEET_ID", message)
        self.assertIn("'dni'", message)
        self.assertIn("No Google Sheets credentials found", message)

    def test_missing_key_file_is_reported(self):
        with patch.object(config, 'GOOGLE_API_KEY', 'key'), \
             patch.object(config, 'GOOGLE_SHEET_ID', 'sheet'), \
             patch.object(config, 'get_credentials_path', return_value='/nonexistent/sa.json'):
            with self.assertRaises(ValueError) as ctx:
                config.validate_config()

        self.assertIn('/nonexistent/sa.json', str(ctx.exception))

    def test_valid_with_default_credentials(self):
        with patch.object(config, 'GOOGLE_API_KEY', 'key'), \
             patch.object(config, 'GOOGLE_SHEET_ID', 'sheet'), \
             patch.object(config, 'get_credentials_path', return_value=None):
            self.assertTrue(config.validate_config())


class TestLogDir(unittest.TestCase):

    def test_relative_dir_is_created_under_project(self):
        with tempfile.TemporaryDirectory() as tmp, \
             patch.object(config, 'PROJECT_ROOT', Path(tmp)), \
             patch.dict(os.environ, {'LOG_DIR': 'var/log'}):
            path = config._log_dir()
            self.assertEqual(path, str(Path(tmp) / 'var' / 'log'))
            self.assertTrue(Path(path).is_dir())


if __name__ == '__main__':
    unittest.main()
