"""
Shared builders for the test suite.
"""
import random
from datetime import date
from typing import List, Optional

from kumoxi_quiz.config import AppConfig
from kumoxi_quiz.controller import AdvanceTimerFired, QuizController, SelectOption, SubmitName
from kumoxi_quiz.leaderboard import LeaderboardStore
from kumoxi_quiz.models import GameState, LeaderboardEntry, Phase, Question
from kumoxi_quiz.storage import MemoryStore


class FakeClock:
    """Manually advanced clock for PendingAdvance.due_at."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_questions(count: int) -> List[Question]:
    return [
        Question(text=f"{i}+{i}?", options=(str(i * 2 + 1), str(i * 2)), answer=str(i * 2))
        for i in range(count)
    ]


def make_entry(name: str, score: int, total: int = 7) -> LeaderboardEntry:
    return LeaderboardEntry(name=name, score=score, total=total, category="Angola Tech", date="19/10/2026")


def make_controller(
    bank: List[Question],
    store: Optional[LeaderboardStore] = None,
    clock: Optional[FakeClock] = None,
    seed: int = 1234,
) -> QuizController:
    return QuizController(
        bank,
        store or LeaderboardStore(MemoryStore()),
        AppConfig(),
        rng=random.Random(seed),
        clock=clock or FakeClock(),
        today=lambda: date(2026, 10, 19),
    )


def wrong_option(question: Question) -> str:
    return next(o for o in question.options if o != question.answer)


def answer_current(controller: QuizController, state: GameState, correct: bool) -> GameState:
    """Select an option for the current question and let its timer fire."""
    question = state.session.current_question
    option = question.answer if correct else wrong_option(question)
    state = controller.transition(state, SelectOption(option))
    return controller.transition(state, AdvanceTimerFired(state.session.pending.token))


def play_game(controller: QuizController, name: str, correct_answers: int) -> GameState:
    """Boot, start and play a whole game answering the first N correctly."""
    state = controller.transition(controller.boot(), SubmitName(name))
    answered = 0
    while state.phase is Phase.QUIZ:
        state = answer_current(controller, state, correct=answered < correct_answers)
        answered += 1
    return state
