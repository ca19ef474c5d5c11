"""
controller.py
======================

Quiz session controller.

The whole game is a state machine over GameState:

    START ──SubmitName──▶ QUIZ ──(last AdvanceTimerFired)──▶ RESULT
      │  ▲                 │ ▲                                 │
      │  └──────Back───┐   └─┘ SelectOption / AdvanceTimerFired│
      ▼                │                                       │
    LEADERBOARD ───────┘              START ◀──PlayAgain───────┘

transition(state, event) never mutates `state`; it returns the next state
(or the very same object when the event does not apply). The only write
is persisting the leaderboard when a game finishes.

The post-answer delay is a PendingAdvance token stored on the session.
The render layer waits until `due_at`, then feeds AdvanceTimerFired(token)
back in. A token that no longer matches the session is ignored.
"""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, replace
from datetime import date
from typing import Callable, MutableMapping, Optional, Sequence, Tuple, Union

from .config import AppConfig
from .leaderboard import LeaderboardStore
from .models import (
    GameState,
    LeaderboardEntry,
    PendingAdvance,
    Phase,
    Question,
    Session,
)
from .question_bank import sample_questions

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
#  Events
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class SubmitName:
    name: str


@dataclass(frozen=True)
class ViewLeaderboard:
    pass


@dataclass(frozen=True)
class SelectOption:
    option: str


@dataclass(frozen=True)
class AdvanceTimerFired:
    token: int


@dataclass(frozen=True)
class PlayAgain:
    pass


@dataclass(frozen=True)
class Back:
    pass


Event = Union[SubmitName, ViewLeaderboard, SelectOption, AdvanceTimerFired, PlayAgain, Back]


# ----------------------------------------------------------------------
#  Tier messages
# ----------------------------------------------------------------------
TOP_TIER = "Tu és o Boss do Ecossistema! 👑"
HIGH_TIER = "Ganda Mambo! Conheces bem a banda! 🔥"
MID_TIER = "Nada mal, estamos juntos! 👊"
LOW_TIER = "Eish... tens de ir mais aos eventos! 😅"

EMPTY_BANK_NOTICE = "Não há perguntas disponíveis de momento. Tenta mais tarde."

DATE_FORMAT = "%d/%m/%Y"


def result_message(score: int, total: int) -> str:
    """Pick exactly one tier message from the final percentage."""
    if total <= 0:
        return LOW_TIER
    percentage = score * 100 / total
    if percentage == 100:
        return TOP_TIER
    if percentage >= 70:
        return HIGH_TIER
    if percentage >= 50:
        return MID_TIER
    return LOW_TIER


# ----------------------------------------------------------------------
#  Controller
# ----------------------------------------------------------------------
class QuizController:
    """
    Owns the question bank and the leaderboard store; turns events into
    new GameStates.

    bank        : all available questions (read-only)
    leaderboard : LeaderboardStore used at boot and at game end
    config      : AppConfig (session size, delay, category label, ...)
    rng         : random.Random used for sampling (inject a seeded one in tests)
    clock       : monotonic clock used for PendingAdvance.due_at
    today       : returns the date written into new leaderboard entries
    """

    def __init__(
        self,
        bank: Sequence[Question],
        leaderboard: LeaderboardStore,
        config: Optional[AppConfig] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
        today: Callable[[], date] = date.today,
    ):
        self.bank: Tuple[Question, ...] = tuple(bank)
        self.leaderboard = leaderboard
        self.config = config or AppConfig()
        self.rng = rng or random.Random()
        self.clock = clock
        self.today = today

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------
    def boot(self, clear_leaderboard: bool = False) -> GameState:
        """
        Initial state. With clear_leaderboard the stored leaderboard is
        wiped and not loaded; otherwise it is loaded.
        """
        if clear_leaderboard:
            self.leaderboard.clear()
            entries: Tuple[LeaderboardEntry, ...] = ()
        else:
            entries = tuple(self.leaderboard.load())
        logger.info(f"Controller booted with {len(self.bank)} questions, {len(entries)} leaderboard entries")
        return GameState(phase=Phase.START, leaderboard=entries)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    def transition(self, state: GameState, event: Event) -> GameState:
        handler = _HANDLERS.get((state.phase, type(event)))
        if handler is None:
            logger.debug(f"Ignoring {type(event).__name__} in phase {state.phase.value}")
            return state
        return handler(self, state, event)

    def seconds_until_advance(self, state: GameState) -> Optional[float]:
        """Remaining delay of the pending advance, or None when nothing is pending."""
        session = state.session
        if state.phase is not Phase.QUIZ or session is None or session.pending is None:
            return None
        return max(0.0, session.pending.due_at - self.clock())

    # ------------------------------------------------------------------
    # START
    # ------------------------------------------------------------------
    def _on_submit_name(self, state: GameState, event: SubmitName) -> GameState:
        name = (event.name or "").strip()
        if not name:
            logger.debug("Empty player name submitted; staying on START")
            return state

        questions = sample_questions(self.bank, self.config.questions_per_session, self.rng)
        if not questions:
            logger.warning("Cannot start a session: question bank is empty")
            return replace(state, notice=EMPTY_BANK_NOTICE)

        logger.info(f"Session started for '{name}' with {len(questions)} questions")
        return replace(
            state,
            phase=Phase.QUIZ,
            session=Session(player_name=name, questions=tuple(questions)),
            notice=None,
        )

    def _on_view_leaderboard(self, state: GameState, event: ViewLeaderboard) -> GameState:
        # reload so entries finished in other sessions show up
        entries = tuple(self.leaderboard.load())
        return replace(state, phase=Phase.LEADERBOARD, leaderboard=entries, notice=None)

    # ------------------------------------------------------------------
    # QUIZ
    # ------------------------------------------------------------------
    def _on_select_option(self, state: GameState, event: SelectOption) -> GameState:
        session = state.session
        if session is None:
            return state
        if session.has_answered:
            logger.debug("Option already selected for this question; ignoring")
            return state

        question = session.current_question
        if question is None:
            logger.error(f"No active question at index {session.current_index}")
            return state
        if event.option not in question.options:
            logger.debug(f"Ignoring unknown option {event.option!r}")
            return state

        correct = question.is_correct(event.option)
        token = state.timer_seq + 1
        pending = PendingAdvance(
            token=token,
            question_index=session.current_index,
            due_at=self.clock() + self.config.feedback_delay_seconds,
        )
        session = replace(
            session,
            selected_option=event.option,
            is_correct=correct,
            score=session.score + 1 if correct else session.score,
            pending=pending,
        )
        return replace(state, session=session, timer_seq=token)

    def _on_timer_fired(self, state: GameState, event: AdvanceTimerFired) -> GameState:
        session = state.session
        pending = session.pending if session is not None else None
        if (
            pending is None
            or pending.token != event.token
            or pending.question_index != session.current_index
        ):
            logger.debug(f"Stale advance timer {event.token}; ignoring")
            return state

        if not session.is_last_question:
            session = replace(
                session,
                current_index=session.current_index + 1,
                selected_option=None,
                is_correct=None,
                pending=None,
            )
            return replace(state, session=session)

        return self._finish(state, replace(session, pending=None))

    def _finish(self, state: GameState, session: Session) -> GameState:
        # session.score already counts the last answer
        entry = LeaderboardEntry(
            name=session.player_name,
            score=session.score,
            total=session.total,
            category=self.config.category_label,
            date=self.today().strftime(DATE_FORMAT),
        )
        updated = self.leaderboard.record(entry)
        logger.info(f"Session finished for '{entry.name}': {entry.score}/{entry.total}")
        return replace(
            state,
            phase=Phase.RESULT,
            session=session,
            leaderboard=tuple(updated),
        )

    # ------------------------------------------------------------------
    # RESULT / LEADERBOARD
    # ------------------------------------------------------------------
    def _on_play_again(self, state: GameState, event: PlayAgain) -> GameState:
        return replace(state, phase=Phase.START, session=None, notice=None)

    def _on_back(self, state: GameState, event: Back) -> GameState:
        return replace(state, phase=Phase.START)


_HANDLERS = {
    (Phase.START, SubmitName): QuizController._on_submit_name,
    (Phase.START, ViewLeaderboard): QuizController._on_view_leaderboard,
    (Phase.QUIZ, SelectOption): QuizController._on_select_option,
    (Phase.QUIZ, AdvanceTimerFired): QuizController._on_timer_fired,
    (Phase.RESULT, PlayAgain): QuizController._on_play_again,
    (Phase.LEADERBOARD, Back): QuizController._on_back,
}


# ----------------------------------------------------------------------
#  Helpers for the render layer
# ----------------------------------------------------------------------
def should_celebrate(score: int, total: int, ratio: float) -> bool:
    """Final-score celebration: strictly above `ratio` of the total."""
    return total > 0 and score / total > ratio


def is_truthy_flag(value: Optional[str]) -> bool:
    """Launch-parameter parsing ("1", "true", "yes", "on")."""
    if value is None:
        return False
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def pop_launch_flag(params: MutableMapping[str, str], name: str) -> bool:
    """
    Consume a boolean launch parameter: read it, remove it from `params`
    and report whether it was truthy. A second call returns False.
    """
    if name not in params:
        return False
    value = params.get(name)
    del params[name]
    return is_truthy_flag(value)


def run_pending_advance(
    controller: QuizController,
    state: GameState,
    sleep: Callable[[float], None] = time.sleep,
) -> GameState:
    """
    Wait out the pending post-answer delay, then fire its token.
    Returns `state` unchanged when nothing is pending.
    """
    wait = controller.seconds_until_advance(state)
    if wait is None:
        return state
    token = state.session.pending.token
    sleep(wait)
    return controller.transition(state, AdvanceTimerFired(token))
