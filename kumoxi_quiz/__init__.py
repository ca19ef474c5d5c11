"""
kumoxi_quiz package
======================

Internal logic of the Kumoxi Quiz app.

Main parts:
- settings (config)
- data models (models)
- question bank loading and sampling (question_bank)
- local key-value persistence (storage)
- Hall of Fame persistence and ranking (leaderboard)
- the quiz state machine (controller)
- UI components (ui)

app.py only handles Streamlit wiring; all game logic is called from here.
"""

from .config import AppConfig, setup_logging
from .controller import QuizController, result_message
from .leaderboard import LeaderboardStore, insert_entry
from .models import GameState, LeaderboardEntry, Phase, Question, Session
from .question_bank import load_question_bank, sample_questions
from .storage import JsonFileStore, MemoryStore

__all__ = [
    "AppConfig",
    "setup_logging",
    "QuizController",
    "result_message",
    "LeaderboardStore",
    "insert_entry",
    "GameState",
    "LeaderboardEntry",
    "Phase",
    "Question",
    "Session",
    "load_question_bank",
    "sample_questions",
    "JsonFileStore",
    "MemoryStore",
]
