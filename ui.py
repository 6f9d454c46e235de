"""
UI components and visualization helpers.
"""

import pandas as pd
import plotly.express as px
import streamlit as st

from config import (
    COLOR_SEQUENCE,
    EMPTY_SUBMISSION,
    ILLEGAL_SELECTION,
    INVALID_CONFIG,
    INVALID_OPERATION,
    INVALID_WORD,
    LETTERS,
    NO_ACTIVE_ROUND,
    NOT_CONFIGURED,
    OUT_OF_TURN,
    WRONG_PHASE,
)
from models import ActionResult, GameState, RoundContext
from scoring import standings, winners

ERROR_MESSAGES = {
    EMPTY_SUBMISSION: "No hay nada que enviar todavía.",
    INVALID_WORD: "Palabra no válida.",
    INVALID_OPERATION: "Operación no válida: la división debe ser exacta y nunca entre cero.",
    ILLEGAL_SELECTION: "Selección no permitida: número, operación y número, en ese orden.",
    NO_ACTIVE_ROUND: "No hay ninguna ronda en juego.",
    NOT_CONFIGURED: "La partida no está configurada.",
    OUT_OF_TURN: "No es el turno de ese jugador.",
    INVALID_CONFIG: "Revisa la configuración: 2-4 jugadores con nombre y valores dentro de los límites.",
    WRONG_PHASE: "Esa acción no está disponible ahora.",
}


def report(result: ActionResult, success: str = "") -> None:
    """Show the outcome of an action."""
    if result.error is not None:
        st.warning(ERROR_MESSAGES.get(result.error, result.error))
    elif success:
        st.success(success)


def render_letter_pool(ctx: RoundContext) -> None:
    cols = st.columns(len(ctx.letter_pool))
    for col, letter in zip(cols, ctx.letter_pool):
        col.markdown(f"## {letter}")


def render_number_pool(ctx: RoundContext) -> None:
    st.metric("Número objetivo", ctx.target)
    cols = st.columns(len(ctx.number_pool))
    for col, number in zip(cols, ctx.number_pool):
        col.markdown(f"## {number}")


def render_pool(ctx: RoundContext) -> None:
    if ctx.type == LETTERS:
        render_letter_pool(ctx)
    else:
        render_number_pool(ctx)


def render_scoreboard(state: GameState) -> None:
    """Cumulative scores, plus this round's points where already known."""
    st.markdown("#### Marcador")
    rows = []
    for p in state.config.players:
        rows.append(
            {
                "Jugador": p.name,
                "Ronda": state.round_scores.get(p.id),
                "Total": p.score,
            }
        )
    df = pd.DataFrame(rows)
    st.dataframe(df, use_container_width=True, hide_index=True)


def render_answers(state: GameState) -> None:
    st.markdown("#### Respuestas")
    rows = []
    for p in state.config.players:
        rows.append(
            {
                "Jugador": p.name,
                "Respuesta": state.answers.get(p.id, "—"),
                "Puntos": state.round_scores.get(p.id, 0),
            }
        )
    st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)


def render_score_history(state: GameState) -> None:
    """Cumulative score per player after each finished round."""
    if not state.history:
        return
    names = {p.id: p.name for p in state.config.players}
    totals = {pid: 0 for pid in names}
    rows = []
    for entry in state.history:
        for pid in names:
            totals[pid] += entry["scores"].get(pid, 0)
            rows.append({"Ronda": entry["round"], "Jugador": names[pid], "Puntos": totals[pid]})

    df = pd.DataFrame(rows)
    fig = px.line(
        df,
        x="Ronda",
        y="Puntos",
        color="Jugador",
        markers=True,
        color_discrete_sequence=COLOR_SEQUENCE,
    )
    fig.update_layout(
        xaxis=dict(dtick=1),
        height=320,
        margin=dict(l=10, r=10, t=30, b=10),
    )
    st.plotly_chart(fig, use_container_width=True)


def render_standings(state: GameState) -> None:
    players = state.config.players
    top = winners(players)
    if len(top) == 1:
        st.success(f"¡Felicidades {top[0].name}! Has ganado con {top[0].score} puntos.")
    else:
        st.info("Empate entre " + ", ".join(p.name for p in top) + f" con {top[0].score} puntos.")

    rows = [{"Puesto": rank, "Jugador": p.name, "Puntos": p.score} for rank, p in standings(players)]
    st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)
