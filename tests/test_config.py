"""Tests for config persistence and input sanitization.

Ensures malformed config data is safely normalized on load.
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from kilo.runtime import config
from kilo.runtime.config import EditorSettings


class ConfigBehaviorTests(unittest.TestCase):
    def test_missing_config_yields_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("kilo.runtime.config.CONFIG_PATH", Path(tmp) / "missing.json"):
                self.assertEqual(config.load_settings(), EditorSettings())

    def test_malformed_json_yields_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text("{not json", encoding="utf-8")
            with mock.patch("kilo.runtime.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})
                self.assertEqual(config.load_settings(), EditorSettings())

    def test_non_object_json_yields_empty_config(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text("[1, 2]\n", encoding="utf-8")
            with mock.patch("kilo.runtime.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})

    def test_valid_values_are_loaded(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("kilo.runtime.config.CONFIG_PATH", config_path):
                config.save_config({"geometry": "cursor-query", "escape_timeout_ms": 250, "log_level": "debug"})
                settings = config.load_settings()

        self.assertEqual(settings, EditorSettings(geometry="cursor-query", escape_timeout_ms=250, log_level="DEBUG"))

    def test_invalid_values_are_sanitized(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("kilo.runtime.config.CONFIG_PATH", config_path):
                config.save_config({"geometry": "magic", "escape_timeout_ms": True, "log_level": "chatty"})
                settings = config.load_settings()

        self.assertEqual(settings, EditorSettings())

    def test_escape_timeout_is_clamped(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("kilo.runtime.config.CONFIG_PATH", config_path):
                config.save_config({"escape_timeout_ms": 60_000})
                self.assertEqual(config.load_settings().escape_timeout_ms, 1000)
                config.save_config({"escape_timeout_ms": -5})
                self.assertEqual(config.load_settings().escape_timeout_ms, 1)

    def test_save_geometry_keeps_other_keys(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "config.json"
            with mock.patch("kilo.runtime.config.CONFIG_PATH", config_path):
                config.save_config({"log_level": "INFO"})
                config.save_geometry("cursor-query")
                config.save_geometry("bogus")
                saved = config.load_config()

        self.assertEqual(saved, {"log_level": "INFO", "geometry": "cursor-query"})

    def test_save_config_ignores_unwritable_location(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            blocker = Path(tmp) / "file"
            blocker.write_text("", encoding="utf-8")
            with mock.patch("kilo.runtime.config.CONFIG_PATH", blocker / "config.json"):
                config.save_config({"geometry": "ioctl"})


if __name__ == "__main__":
    unittest.main()
