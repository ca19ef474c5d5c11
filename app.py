"""
app.py
======================

Kumoxi Quiz (Streamlit) entry point.

Pages:
- START       : name entry + link to the Hall of Fame
- QUIZ        : 7 random questions with instant feedback
- RESULT      : final score, tier message, Hall of Fame
- LEADERBOARD : Hall of Fame only

Assumptions:
- bank/questions.json holds the question bank (KUMOXI_QUESTION_BANK overrides)
- the leaderboard is stored in data/local_storage.json (KUMOXI_STORAGE_PATH
  overrides); it is created on the first finished game
- opening the app with ?reset_leaderboard=1 wipes the leaderboard once

Run with:
    streamlit run app.py
"""

from __future__ import annotations

import logging
from typing import List

import streamlit as st

from kumoxi_quiz.config import AppConfig, setup_logging
from kumoxi_quiz.controller import (
    Back,
    Event,
    PlayAgain,
    QuizController,
    SelectOption,
    SubmitName,
    ViewLeaderboard,
    pop_launch_flag,
    result_message,
    run_pending_advance,
    should_celebrate,
)
from kumoxi_quiz.leaderboard import LeaderboardStore
from kumoxi_quiz.models import GameState, Phase, Question
from kumoxi_quiz.question_bank import load_question_bank
from kumoxi_quiz.storage import JsonFileStore
from kumoxi_quiz.ui import (
    celebrate,
    inject_theme,
    render_leaderboard_page,
    render_quiz_page,
    render_result_page,
    render_start_page,
)

logger = logging.getLogger(__name__)

RESET_PARAM = "reset_leaderboard"


# ----------------------------------------------------------------------
#  Config / bank (shared by every browser session)
# ----------------------------------------------------------------------
@st.cache_resource(show_spinner=False)
def load_config() -> AppConfig:
    config = AppConfig.load()
    setup_logging(config)
    return config


@st.cache_resource(show_spinner=False)
def load_bank(path: str) -> List[Question]:
    """Missing or unreadable bank -> empty list (the START page says so)."""
    try:
        return load_question_bank(path)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Question bank unavailable: {e}")
        return []


# ----------------------------------------------------------------------
#  Per-session controller / state
# ----------------------------------------------------------------------
def get_controller() -> QuizController:
    """Keep one QuizController per browser session."""
    if "controller" not in st.session_state:
        config = load_config()
        store = LeaderboardStore(
            JsonFileStore(config.storage_path),
            key=config.leaderboard_key,
            limit=config.leaderboard_size,
        )
        bank = load_bank(str(config.question_bank_path))
        st.session_state["controller"] = QuizController(bank, store, config)
    return st.session_state["controller"]  # type: ignore[return-value]


def consume_reset_flag() -> bool:
    """Read ?reset_leaderboard once and drop it from the URL."""
    return pop_launch_flag(st.query_params, RESET_PARAM)


def get_state() -> GameState:
    if "game_state" not in st.session_state:
        controller = get_controller()
        st.session_state["game_state"] = controller.boot(clear_leaderboard=consume_reset_flag())
    return st.session_state["game_state"]  # type: ignore[return-value]


def dispatch(event: Event) -> GameState:
    state = get_controller().transition(get_state(), event)
    st.session_state["game_state"] = state
    return state


# ----------------------------------------------------------------------
#  Pages
# ----------------------------------------------------------------------
def render_start() -> None:
    state = get_state()
    ui_result = render_start_page(state, get_controller().config)

    if ui_result["submitted_name"] is not None:
        new_state = dispatch(SubmitName(ui_result["submitted_name"]))
        if new_state is not state:
            st.rerun()
    elif ui_result["view_leaderboard"]:
        dispatch(ViewLeaderboard())
        st.rerun()


def render_quiz() -> None:
    controller = get_controller()
    state = get_state()
    ui_result = render_quiz_page(state, controller.config)

    if ui_result["selected_option"] is not None:
        dispatch(SelectOption(ui_result["selected_option"]))
        st.rerun()

    session = state.session
    if controller.seconds_until_advance(state) is None:
        return

    token = session.pending.token
    if session.is_correct and st.session_state.get("celebrated_token") != token:
        st.session_state["celebrated_token"] = token
        celebrate()

    # any click reruns the script and abandons this wait
    st.session_state["game_state"] = run_pending_advance(controller, state)
    st.rerun()


def render_result() -> None:
    controller = get_controller()
    state = get_state()
    session = state.session
    score = session.score if session is not None else 0
    total = session.total if session is not None else 0

    # one celebration per finished game
    if (
        should_celebrate(score, total, controller.config.celebration_ratio)
        and st.session_state.get("celebrated_result") != state.timer_seq
    ):
        st.session_state["celebrated_result"] = state.timer_seq
        celebrate()

    ui_result = render_result_page(state, result_message(score, total))
    if ui_result["play_again"]:
        dispatch(PlayAgain())
        st.rerun()


def render_leaderboard() -> None:
    ui_result = render_leaderboard_page(get_state())
    if ui_result["back"]:
        dispatch(Back())
        st.rerun()


# ----------------------------------------------------------------------
#  Main
# ----------------------------------------------------------------------
def main() -> None:
    config = load_config()
    st.set_page_config(
        page_title=config.app_title,
        page_icon="🇦🇴",
        layout="centered",
    )
    inject_theme()

    phase = get_state().phase

    if phase is Phase.QUIZ:
        render_quiz()
    elif phase is Phase.RESULT:
        render_result()
    elif phase is Phase.LEADERBOARD:
        render_leaderboard()
    else:
        render_start()


if __name__ == "__main__":
    main()
