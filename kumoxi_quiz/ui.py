"""
ui.py
======================

Streamlit UI components, one render function per phase.

This module only deals with "how it looks" and "what the user clicked".
Game rules live in controller.py; app.py wires the two together.

Every render_* function returns a dict describing the user's action on this
run, e.g. {"selected_option": "4"} or {"play_again": True}.
"""

from __future__ import annotations

import html
from typing import Any, Dict, Optional, Sequence, Tuple

import pandas as pd
import streamlit as st

from .config import AppConfig
from .models import GameState, LeaderboardEntry

# ----------------------------------------------------------------------
#  Themes (Angola flag colours)
# ----------------------------------------------------------------------


THEMES: Dict[str, Dict[str, str]] = {
    "angola": {
        "bg": "#0d0d0d",
        "text": "#f5f5f7",
        "muted": "#a1a1aa",
        "surface": "#1c1c1e",
        "border": "#3a3a3c",
        "primary": "#C8102E",
        "accent": "#FFCD00",
    },
    "light": {
        "bg": "#ffffff",
        "text": "#1c1c1e",
        "muted": "#6e6e73",
        "surface": "#f2f2f7",
        "border": "#d1d1d6",
        "primary": "#C8102E",
        "accent": "#b38f00",
    },
}

DEFAULT_THEME = "angola"


# ----------------------------------------------------------------------
#  CSS
# ----------------------------------------------------------------------
def _generate_css(theme: Dict[str, str]) -> str:
    """Global CSS for the selected theme."""

    return f"""
    <style>
    .stApp {{
        background: {theme['bg']};
        color: {theme['text']};
    }}

    .kq-title {{
        font-weight: 800;
        font-size: 2.2rem;
        text-align: center;
        color: {theme['accent']};
        margin-bottom: 0.2rem;
    }}

    .kq-subtitle {{
        text-align: center;
        color: {theme['muted']};
        margin-bottom: 1.5rem;
    }}

    .kq-stats {{
        display: flex;
        justify-content: space-between;
        font-size: 0.9rem;
        margin-bottom: 0.3rem;
    }}

    .kq-muted {{
        color: {theme['muted']};
    }}

    .kq-question-box {{
        background: {theme['surface']};
        padding: 1rem;
        border-radius: 12px;
        border: 1px solid {theme['border']};
        font-size: 1.2rem;
        line-height: 1.6;
        margin: 0.75rem 0;
    }}

    .kq-score {{
        font-size: 3rem;
        font-weight: 800;
        text-align: center;
        color: {theme['primary']};
    }}

    .kq-message {{
        text-align: center;
        font-size: 1.2rem;
        color: {theme['accent']};
        margin-bottom: 1.5rem;
    }}

    .kq-section {{
        text-transform: uppercase;
        letter-spacing: 1px;
        font-size: 0.9rem;
        color: {theme['muted']};
        margin: 1.5rem 0 0.5rem 0;
    }}
    </style>
    """


def _ensure_theme() -> str:
    """Make sure session_state holds a valid theme key and return it."""
    theme_key = st.session_state.get("theme", DEFAULT_THEME)
    if theme_key not in THEMES:
        theme_key = DEFAULT_THEME
    st.session_state["theme"] = theme_key
    return theme_key


def inject_theme() -> str:
    theme_key = _ensure_theme()
    st.markdown(_generate_css(THEMES[theme_key]), unsafe_allow_html=True)
    return theme_key


def render_theme_selector() -> None:
    theme_key = _ensure_theme()
    options = list(THEMES.keys())
    selected = st.radio(
        "Tema",
        options,
        index=options.index(theme_key),
        horizontal=True,
        label_visibility="collapsed",
        format_func=lambda k: k.capitalize(),
    )
    st.session_state["theme"] = selected


def celebrate() -> None:
    st.balloons()


# ----------------------------------------------------------------------
#  Leaderboard table
# ----------------------------------------------------------------------
LEADERBOARD_COLUMNS = ["#", "Nome", "Pontuação", "Categoria", "Data"]


def leaderboard_frame(entries: Sequence[LeaderboardEntry]) -> pd.DataFrame:
    """Leaderboard as a DataFrame in display order (rank starts at 1)."""
    rows = [
        {
            "#": idx,
            "Nome": e.name,
            "Pontuação": f"{e.score}/{e.total}",
            "Categoria": e.category,
            "Data": e.date,
        }
        for idx, e in enumerate(entries, start=1)
    ]
    return pd.DataFrame(rows, columns=LEADERBOARD_COLUMNS)


def _render_leaderboard_table(
    entries: Sequence[LeaderboardEntry],
    highlight: Optional[Tuple[str, int]] = None,
) -> None:
    if not entries:
        st.info("Ainda não há resultados. Sê o primeiro!")
        return

    df = leaderboard_frame(entries)

    if highlight is None:
        st.dataframe(df, hide_index=True, use_container_width=True)
        return

    # rows matching the current player's name and score
    name, score = highlight
    marked = [e.name == name and e.score == score for e in entries]

    def _style_row(row: pd.Series):
        style = "background-color: rgba(255, 205, 0, 0.15)" if marked[row.name] else ""
        return [style] * len(row)

    st.dataframe(df.style.apply(_style_row, axis=1), hide_index=True, use_container_width=True)


# ----------------------------------------------------------------------
#  START
# ----------------------------------------------------------------------
def render_start_page(state: GameState, config: AppConfig) -> Dict[str, Any]:
    """
    Name form + "view leaderboard" button.

    Returns:
        {
          "submitted_name": Optional[str],  # raw text when the form was submitted
          "view_leaderboard": bool,
        }
    """
    submitted_name: Optional[str] = None

    st.markdown(f"<div class='kq-title'>{html.escape(config.app_title)}</div>", unsafe_allow_html=True)
    st.markdown(
        "<div class='kq-subtitle'>Desafia o teu conhecimento sobre o "
        "Ecossistema Tecnológico de Angola!</div>",
        unsafe_allow_html=True,
    )

    if state.notice:
        st.warning(state.notice)

    with st.form("kq_start_form"):
        name = st.text_input("Nome", placeholder="Teu nome, Soba...", label_visibility="collapsed")
        if st.form_submit_button("Começar Desafio 🚀", use_container_width=True):
            submitted_name = name
            if not name.strip():
                st.error("Escreve o teu nome para começar.")

    view_leaderboard = st.button("🏆 Ver Hall of Fame", use_container_width=True)

    render_theme_selector()

    return {
        "submitted_name": submitted_name,
        "view_leaderboard": view_leaderboard,
    }


# ----------------------------------------------------------------------
#  QUIZ
# ----------------------------------------------------------------------
def render_quiz_page(state: GameState, config: AppConfig) -> Dict[str, Any]:
    """
    Counter, progress bar, question and option buttons.

    Options are disabled once one is selected; the selected option is
    marked correct/incorrect and the right answer is revealed.

    Returns:
        {"selected_option": Optional[str]}
    """
    session = state.session
    question = session.current_question if session is not None else None
    if question is None:
        st.error("Nenhuma pergunta ativa.")
        return {"selected_option": None}

    selected_option: Optional[str] = None
    position = session.current_index + 1

    st.markdown(
        "<div class='kq-stats'>"
        f"<span>Questão {position}/{session.total}</span>"
        f"<span class='kq-muted'>{html.escape(config.category_label)}</span>"
        "</div>",
        unsafe_allow_html=True,
    )
    st.progress(position / session.total)

    st.markdown(f"<div class='kq-question-box'>{html.escape(question.text)}</div>", unsafe_allow_html=True)

    answered = session.has_answered
    for idx, option in enumerate(question.options):
        label = option
        if answered:
            if option == session.selected_option:
                label = f"{'✅' if session.is_correct else '❌'} {option}"
            elif option == question.answer:
                label = f"✅ {option}"

        if st.button(
            label,
            key=f"kq_option_{session.current_index}_{idx}",
            disabled=answered,
            use_container_width=True,
        ):
            selected_option = option

    if answered:
        if session.is_correct:
            st.success("Certo! 🎉")
        else:
            st.error(f"Errado! A resposta certa é: {question.answer}")

    return {"selected_option": selected_option}


# ----------------------------------------------------------------------
#  RESULT
# ----------------------------------------------------------------------
def render_result_page(state: GameState, message: str) -> Dict[str, Any]:
    """
    Final score, tier message and Hall of Fame.

    Returns:
        {"play_again": bool}
    """
    session = state.session
    name = session.player_name if session is not None else ""
    score = session.score if session is not None else 0
    total = session.total if session is not None else 0

    st.markdown("<div class='kq-subtitle'>Resultado Final</div>", unsafe_allow_html=True)
    st.markdown(f"<div class='kq-title'>{html.escape(name)}</div>", unsafe_allow_html=True)
    st.markdown(f"<div class='kq-score'>{score} / {total}</div>", unsafe_allow_html=True)
    st.markdown(f"<div class='kq-message'>{html.escape(message)}</div>", unsafe_allow_html=True)

    st.markdown("<div class='kq-section'>🏆 Hall of Fame</div>", unsafe_allow_html=True)
    _render_leaderboard_table(state.leaderboard, highlight=(name, score))

    play_again = st.button("Jogar Novamente", use_container_width=True)
    return {"play_again": play_again}


# ----------------------------------------------------------------------
#  LEADERBOARD
# ----------------------------------------------------------------------
def render_leaderboard_page(state: GameState) -> Dict[str, Any]:
    """
    Returns:
        {"back": bool}
    """
    st.markdown("<div class='kq-title'>🏆 Hall of Fame</div>", unsafe_allow_html=True)
    _render_leaderboard_table(state.leaderboard)

    back = st.button("⬅ Voltar", use_container_width=True)
    return {"back": back}
