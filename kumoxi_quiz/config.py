"""
config.py
=========

Central place for every setting the app uses.
app.py and tools/leaderboard_admin.py both read their settings through
AppConfig so that the quiz, the storage file and the logging level stay in
sync.

Precedence (lowest to highest):
    dataclass defaults -> config.toml -> environment variables
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import toml

logger = logging.getLogger(__name__)


# ------------------------------------------------------------
# Base paths
# ------------------------------------------------------------

ROOT_DIR = Path(__file__).resolve().parent.parent
BANK_DIR = ROOT_DIR / "bank"
DATA_DIR = ROOT_DIR / "data"
CONFIG_PATH = ROOT_DIR / "config.toml"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# ------------------------------------------------------------
# AppConfig
# ------------------------------------------------------------

@dataclass
class AppConfig:
    """
    Application settings.

    - quiz rules (questions per session, leaderboard size, feedback delay)
    - display labels
    - question bank / key-value store paths
    - logging level
    """

    # ---------- app ----------
    app_title: str = "Kumoxi Quiz"
    category_label: str = "Angola Tech"

    # ---------- quiz ----------
    questions_per_session: int = 7
    leaderboard_size: int = 10
    feedback_delay_seconds: float = 1.2
    celebration_ratio: float = 0.5

    # ---------- storage ----------
    question_bank_path: Path = BANK_DIR / "questions.json"
    storage_path: Path = DATA_DIR / "local_storage.json"
    leaderboard_key: str = "kumoxi_quiz_leaderboard"

    # ---------- logging ----------
    log_level: str = "INFO"

    # ============================================================
    # Loading
    # ============================================================

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "AppConfig":
        """
        Build the config from config.toml (if readable) and the environment.
        A missing or broken config.toml falls back to defaults.
        """
        cfg = cls()
        data = _read_toml(Path(path) if path is not None else CONFIG_PATH)

        app = _table(data, "app")
        quiz = _table(data, "quiz")
        storage = _table(data, "storage")
        log_cfg = _table(data, "logging")

        if "title" in app:
            cfg.app_title = str(app["title"])
        if "category_label" in app:
            cfg.category_label = str(app["category_label"])

        if "questions_per_session" in quiz:
            cfg.questions_per_session = int(quiz["questions_per_session"])
        if "leaderboard_size" in quiz:
            cfg.leaderboard_size = int(quiz["leaderboard_size"])
        if "feedback_delay_seconds" in quiz:
            cfg.feedback_delay_seconds = float(quiz["feedback_delay_seconds"])
        if "celebration_ratio" in quiz:
            cfg.celebration_ratio = float(quiz["celebration_ratio"])

        if "question_bank_path" in storage:
            cfg.question_bank_path = _resolve(storage["question_bank_path"])
        if "storage_path" in storage:
            cfg.storage_path = _resolve(storage["storage_path"])
        if "leaderboard_key" in storage:
            cfg.leaderboard_key = str(storage["leaderboard_key"])

        if "level" in log_cfg:
            cfg.log_level = str(log_cfg["level"])

        cfg._apply_env()
        return cfg

    def _apply_env(self) -> None:
        bank = os.environ.get("KUMOXI_QUESTION_BANK")
        if bank:
            self.question_bank_path = _resolve(bank)

        storage = os.environ.get("KUMOXI_STORAGE_PATH")
        if storage:
            self.storage_path = _resolve(storage)

        level = os.environ.get("KUMOXI_LOG_LEVEL")
        if level:
            self.log_level = level


# ============================================================
# Logging
# ============================================================

def setup_logging(config: AppConfig) -> None:
    """Configure root logging from the config (unknown levels -> INFO)."""
    level = getattr(logging, config.log_level.upper(), logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)


# ============================================================
# Internal helpers
# ============================================================

def _read_toml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        return toml.load(path)
    except (toml.TomlDecodeError, OSError) as e:
        logger.warning(f"Ignoring unreadable config file {path}: {e}")
        return {}


def _table(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = data.get(name)
    return value if isinstance(value, dict) else {}


def _resolve(value: Any) -> Path:
    """Relative paths are taken from the project root."""
    p = Path(str(value))
    return p if p.is_absolute() else ROOT_DIR / p
