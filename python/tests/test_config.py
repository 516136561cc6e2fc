"""Tests for success.config module."""

import unittest
from unittest.mock import patch

from success.config import BASE_URL, DEFAULT_TIMEOUT_S, TRIAL, ClientConfig


class TestClientConfig(unittest.TestCase):
    def test_defaults(self) -> None:
        with patch("success.config.socket.gethostname", return_value="cron-box"):
            cfg = ClientConfig()
        self.assertEqual(cfg.base_url, "https://venditan-success.appspot.com/expect")
        self.assertEqual(cfg.base_url, BASE_URL)
        self.assertEqual(cfg.token, TRIAL)
        self.assertEqual(TRIAL, "trial")
        self.assertEqual(cfg.source, "cron-box")
        self.assertEqual(cfg.timeout, DEFAULT_TIMEOUT_S)
        self.assertEqual(cfg.transport, "auto")

    def test_unknown_transport(self) -> None:
        with self.assertRaises(ValueError):
            ClientConfig(source="h", transport="curl")

    def test_frozen(self) -> None:
        cfg = ClientConfig(source="h")
        with self.assertRaises(AttributeError):
            cfg.token = "other"


class TestFromEnv(unittest.TestCase):
    def test_empty_env_keeps_defaults(self) -> None:
        with patch("success.config.socket.gethostname", return_value="cron-box"):
            cfg = ClientConfig.from_env({})
        self.assertEqual(cfg, ClientConfig(source="cron-box"))

    def test_reads_all_variables(self) -> None:
        cfg = ClientConfig.from_env({
            "SUCCESS_BASE_URL": "https://staging.example.com/expect",
            "SUCCESS_TOKEN": "tok-123",
            "SUCCESS_SOURCE": "batch-7",
            "SUCCESS_TIMEOUT": "2.5",
            "SUCCESS_TRANSPORT": " URLLIB ",
        })
        self.assertEqual(cfg.base_url, "https://staging.example.com/expect")
        self.assertEqual(cfg.token, "tok-123")
        self.assertEqual(cfg.source, "batch-7")
        self.assertEqual(cfg.timeout, 2.5)
        self.assertEqual(cfg.transport, "urllib")

    def test_blank_values_ignored(self) -> None:
        cfg = ClientConfig.from_env({"SUCCESS_TOKEN": "", "SUCCESS_SOURCE": "h"})
        self.assertEqual(cfg.token, TRIAL)

    def test_bad_transport(self) -> None:
        with self.assertRaisesRegex(ValueError, "SUCCESS_TRANSPORT"):
            ClientConfig.from_env({"SUCCESS_SOURCE": "h", "SUCCESS_TRANSPORT": "carrier-pigeon"})

    def test_bad_timeout(self) -> None:
        with self.assertRaisesRegex(ValueError, "SUCCESS_TIMEOUT"):
            ClientConfig.from_env({"SUCCESS_SOURCE": "h", "SUCCESS_TIMEOUT": "soon"})

    def test_reads_process_environment_by_default(self) -> None:
        with patch.dict("os.environ", {"SUCCESS_TOKEN": "from-os", "SUCCESS_SOURCE": "h"}):
            cfg = ClientConfig.from_env()
        self.assertEqual(cfg.token, "from-os")


if __name__ == "__main__":
    unittest.main()
