"""Tests for settings loading and history-path resolution.

Validates precedence of explicit options, environment, and settings file.
Ensures malformed settings are safely ignored.
"""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from dirnav import config


class ConfigBehaviorTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name)
        self.config_path = self.root / "config.json"
        self.default_history = self.root / "data" / "history.json"
        patches = [
            mock.patch("dirnav.config.CONFIG_PATH", self.config_path),
            mock.patch("dirnav.config.DEFAULT_HISTORY_PATH", self.default_history),
            mock.patch.dict("os.environ", {}, clear=False),
        ]
        for patcher in patches:
            patcher.start()
            self.addCleanup(patcher.stop)
        os.environ.pop(config.HISTORY_FILE_ENV, None)

    def test_defaults_without_settings_file(self) -> None:
        settings = config.resolve_settings()
        self.assertEqual(settings.history_path, self.default_history)
        self.assertEqual(settings.max_entries, config.DEFAULT_MAX_ENTRIES)

    def test_settings_file_values_are_used(self) -> None:
        custom = self.root / "custom.json"
        self.config_path.write_text(
            f'{{"history_file": "{custom}", "max_entries": 12}}\n',
            encoding="utf-8",
        )

        settings = config.resolve_settings()

        self.assertEqual(settings.history_path, custom)
        self.assertEqual(settings.max_entries, 12)

    def test_environment_overrides_settings_file(self) -> None:
        self.config_path.write_text('{"history_file": "/from/config.json"}\n', encoding="utf-8")
        env_path = self.root / "env.json"
        with mock.patch.dict("os.environ", {config.HISTORY_FILE_ENV: str(env_path)}):
            settings = config.resolve_settings()
        self.assertEqual(settings.history_path, env_path)

    def test_explicit_arguments_override_everything(self) -> None:
        self.config_path.write_text('{"max_entries": 12}\n', encoding="utf-8")
        explicit = self.root / "explicit.json"
        with mock.patch.dict("os.environ", {config.HISTORY_FILE_ENV: "/from/env.json"}):
            settings = config.resolve_settings(explicit, max_entries=3)
        self.assertEqual(settings.history_path, explicit)
        self.assertEqual(settings.max_entries, 3)

    def test_invalid_settings_values_fall_back(self) -> None:
        self.config_path.write_text('{"history_file": 42, "max_entries": true}\n', encoding="utf-8")

        settings = config.resolve_settings()

        self.assertEqual(settings.history_path, self.default_history)
        self.assertEqual(settings.max_entries, config.DEFAULT_MAX_ENTRIES)

    def test_malformed_settings_file_is_ignored_with_warning(self) -> None:
        self.config_path.write_text("[1, 2", encoding="utf-8")
        with self.assertLogs("dirnav.config", level="WARNING"):
            self.assertEqual(config.load_config(), {})

        self.config_path.write_text("[1, 2]", encoding="utf-8")
        with self.assertLogs("dirnav.config", level="WARNING"):
            self.assertEqual(config.load_config(), {})

    def test_coerce_max_entries(self) -> None:
        self.assertEqual(config.coerce_max_entries(5), 5)
        self.assertIsNone(config.coerce_max_entries(0))
        self.assertIsNone(config.coerce_max_entries(-3))
        self.assertIsNone(config.coerce_max_entries(False))
        self.assertIsNone(config.coerce_max_entries("5"))


if __name__ == "__main__":
    unittest.main()
