from __future__ import annotations

import logging
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from ghclone import config
from ghclone.logs import configure_logging


class LoadConfigTests(unittest.TestCase):
    def test_defaults_without_environment(self) -> None:
        loaded = config.load_config({})
        self.assertEqual(loaded.api_url, "https://api.github.com")
        self.assertIsNone(loaded.token)
        self.assertEqual(loaded.http_timeout, 30.0)
        self.assertIsNone(loaded.log_file)

    def test_environment_overrides(self) -> None:
        loaded = config.load_config(
            {
                "GITHUB_TOKEN": " secret ",
                "GHCLONE_API_URL": "https://ghe.example.com/api/v3/",
                "GHCLONE_HTTP_TIMEOUT": "5",
            }
        )
        self.assertEqual(loaded.token, "secret")
        self.assertEqual(loaded.api_url, "https://ghe.example.com/api/v3")
        self.assertEqual(loaded.http_timeout, 5.0)

    def test_blank_token_and_bad_timeout_fall_back(self) -> None:
        loaded = config.load_config({"GITHUB_TOKEN": "  ", "GHCLONE_HTTP_TIMEOUT": "soon"})
        self.assertIsNone(loaded.token)
        self.assertEqual(loaded.http_timeout, 30.0)
        self.assertEqual(config.load_config({"GHCLONE_HTTP_TIMEOUT": "-1"}).http_timeout, 30.0)

    def test_verbose_uses_per_user_log_dir(self) -> None:
        with mock.patch("ghclone.config.user_log_dir", return_value="/tmp/ghclone-logs"):
            loaded = config.load_config({}, verbose=True)
        self.assertEqual(loaded.log_file, Path("/tmp/ghclone-logs") / "ghclone.log")

    def test_explicit_log_file_wins_over_verbose(self) -> None:
        loaded = config.load_config({}, log_file=Path("debug.log"), verbose=True)
        self.assertEqual(loaded.log_file, Path("debug.log"))


class ConfigureLoggingTests(unittest.TestCase):
    def tearDown(self) -> None:
        configure_logging(None)

    def test_without_file_installs_null_handler(self) -> None:
        logger = configure_logging(None)
        self.assertEqual([type(handler) for handler in logger.handlers], [logging.NullHandler])
        self.assertFalse(logger.propagate)

    def test_file_handler_writes_records(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "nested" / "ghclone.log"
            configure_logging(log_path)
            logging.getLogger("ghclone.github").info("listing alice")
            configure_logging(None)

            self.assertIn("listing alice", log_path.read_text(encoding="utf-8"))


if __name__ == "__main__":
    unittest.main()
