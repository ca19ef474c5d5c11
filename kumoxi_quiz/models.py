"""
models.py
======================

Data models shared by the quiz controller, the storage layer and the UI.

- Question         : one immutable multiple-choice question from the bank
- LeaderboardEntry : one persisted row of the Hall of Fame
- PendingAdvance   : token for the delayed "next question" continuation
- Session          : one play-through, from name entry to final result
- GameState        : everything the UI renders (phase + session + leaderboard)

Every model is a frozen dataclass. The controller never mutates a state in
place, it builds a new one with dataclasses.replace().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


# ----------------------------------------------------------------------
#  Phase
# ----------------------------------------------------------------------
class Phase(str, Enum):
    """Which page the UI shows."""

    START = "START"
    QUIZ = "QUIZ"
    RESULT = "RESULT"
    LEADERBOARD = "LEADERBOARD"


# ----------------------------------------------------------------------
#  Question
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class Question:
    text: str
    options: Tuple[str, ...]
    answer: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Question":
        """
        Build a Question from one bank record.

        Expected keys: question (str), options (list of >= 2 str),
        answer (str, must be one of options).
        Raises ValueError when the record does not match.
        """
        if not isinstance(data, dict):
            raise ValueError("question record must be an object")

        text = data.get("question")
        options = data.get("options")
        answer = data.get("answer")

        if not isinstance(text, str) or not text.strip():
            raise ValueError("'question' must be a non-empty string")
        if not isinstance(options, list) or len(options) < 2:
            raise ValueError("'options' must be a list with at least 2 entries")
        if not all(isinstance(o, str) for o in options):
            raise ValueError("every option must be a string")
        if not isinstance(answer, str) or answer not in options:
            raise ValueError("'answer' must equal one of the options")

        return cls(text=text, options=tuple(options), answer=answer)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "question": self.text,
            "options": list(self.options),
            "answer": self.answer,
        }

    def is_correct(self, option: str) -> bool:
        """Exact string match against the answer."""
        return option == self.answer


# ----------------------------------------------------------------------
#  LeaderboardEntry
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class LeaderboardEntry:
    name: str
    score: int
    total: int
    category: str
    date: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LeaderboardEntry":
        """Raises ValueError for records that are not a valid entry."""
        if not isinstance(data, dict):
            raise ValueError("leaderboard entry must be an object")

        name = data.get("name")
        score = data.get("score")
        total = data.get("total")

        if not isinstance(name, str):
            raise ValueError("'name' must be a string")
        # bool is an int subclass; reject it explicitly
        for key, value in (("score", score), ("total", total)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"'{key}' must be an integer")

        return cls(
            name=name,
            score=score,
            total=total,
            category=str(data.get("category", "")),
            date=str(data.get("date", "")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "score": self.score,
            "total": self.total,
            "category": self.category,
            "date": self.date,
        }


# ----------------------------------------------------------------------
#  Session
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class PendingAdvance:
    """
    The scheduled "move on" after an answer.

    token          : unique per scheduled advance; a fired timer must present it
    question_index : index the advance was scheduled for
    due_at         : clock value (controller clock) when it may fire
    """

    token: int
    question_index: int
    due_at: float


@dataclass(frozen=True)
class Session:
    player_name: str
    questions: Tuple[Question, ...]
    current_index: int = 0
    score: int = 0
    selected_option: Optional[str] = None
    is_correct: Optional[bool] = None
    pending: Optional[PendingAdvance] = None

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def current_question(self) -> Optional[Question]:
        if 0 <= self.current_index < len(self.questions):
            return self.questions[self.current_index]
        return None

    @property
    def is_last_question(self) -> bool:
        return self.current_index >= len(self.questions) - 1

    @property
    def has_answered(self) -> bool:
        return self.selected_option is not None


# ----------------------------------------------------------------------
#  GameState
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class GameState:
    phase: Phase = Phase.START
    session: Optional[Session] = None
    leaderboard: Tuple[LeaderboardEntry, ...] = field(default_factory=tuple)
    # last issued PendingAdvance token
    timer_seq: int = 0
    # short user-facing message for the START page (e.g. empty bank)
    notice: Optional[str] = None
