"""
Unit tests for AppConfig loading.
"""
import logging
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from kumoxi_quiz.config import ROOT_DIR, AppConfig, setup_logging

ENV_KEYS = ("KUMOXI_QUESTION_BANK", "KUMOXI_STORAGE_PATH", "KUMOXI_LOG_LEVEL")


class TestAppConfig(unittest.TestCase):
    """Defaults, config.toml and environment overrides."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.dir = Path(self.temp_dir.name)
        self.env = patch.dict(os.environ, {})
        self.env.start()
        for key in ENV_KEYS:
            os.environ.pop(key, None)

    def tearDown(self):
        self.env.stop()
        self.temp_dir.cleanup()

    def _write(self, content: str) -> Path:
        path = self.dir / "config.toml"
        path.write_text(content, encoding="utf-8")
        return path

    def test_defaults_without_file(self):
        cfg = AppConfig.load(self.dir / "missing.toml")

        self.assertEqual(cfg.questions_per_session, 7)
        self.assertEqual(cfg.leaderboard_size, 10)
        self.assertAlmostEqual(cfg.feedback_delay_seconds, 1.2)
        self.assertEqual(cfg.leaderboard_key, "kumoxi_quiz_leaderboard")
        self.assertEqual(cfg.category_label, "Angola Tech")

    def test_values_from_toml(self):
        path = self._write(
            """
[app]
title = "Teste"
category_label = "Geral"

[quiz]
questions_per_session = 5
leaderboard_size = 3
feedback_delay_seconds = 0.5

[storage]
storage_path = "tmp/store.json"
leaderboard_key = "other_key"

[logging]
level = "DEBUG"
"""
        )

        cfg = AppConfig.load(path)

        self.assertEqual(cfg.app_title, "Teste")
        self.assertEqual(cfg.category_label, "Geral")
        self.assertEqual(cfg.questions_per_session, 5)
        self.assertEqual(cfg.leaderboard_size, 3)
        self.assertAlmostEqual(cfg.feedback_delay_seconds, 0.5)
        self.assertEqual(cfg.storage_path, ROOT_DIR / "tmp" / "store.json")
        self.assertEqual(cfg.leaderboard_key, "other_key")
        self.assertEqual(cfg.log_level, "DEBUG")

    def test_broken_toml_falls_back_to_defaults(self):
        path = self._write("[quiz\nquestions_per_session = ")
        cfg = AppConfig.load(path)
        self.assertEqual(cfg.questions_per_session, 7)

    def test_environment_overrides_file(self):
        path = self._write('[logging]\nlevel = "DEBUG"\n')
        absolute = str(self.dir / "store.json")
        os.environ["KUMOXI_STORAGE_PATH"] = absolute
        os.environ["KUMOXI_LOG_LEVEL"] = "WARNING"
        os.environ["KUMOXI_QUESTION_BANK"] = "bank/other.json"

        cfg = AppConfig.load(path)

        self.assertEqual(cfg.storage_path, Path(absolute))
        self.assertEqual(cfg.log_level, "WARNING")
        self.assertEqual(cfg.question_bank_path, ROOT_DIR / "bank" / "other.json")

    def test_setup_logging_uses_configured_level(self):
        with patch("kumoxi_quiz.config.logging.basicConfig") as basic:
            setup_logging(AppConfig(log_level="debug"))
            self.assertEqual(basic.call_args.kwargs["level"], logging.DEBUG)

            setup_logging(AppConfig(log_level="nonsense"))
            self.assertEqual(basic.call_args.kwargs["level"], logging.INFO)


if __name__ == "__main__":
    unittest.main()
