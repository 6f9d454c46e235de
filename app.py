"""
Main Streamlit application.
"""

import logging
import random

import streamlit as st

import game_logic
from config import (
    ACTIVE,
    COMPLETED,
    GAME_TYPES,
    INITIATED,
    LETTERS,
    LETTERS_DURATION_RANGE,
    LOG_LEVEL,
    MAX_PLAYERS,
    MAX_ROUNDS,
    MIN_PLAYERS,
    MIN_ROUNDS,
    MIXED,
    NUMBERS,
    NUMBERS_DURATION_RANGE,
    OPERATORS,
    SEED,
    SNAPSHOT_PATH,
    STARTED,
)
from models import GameConfig, Player, default_config
from solver import best_solution
from store import SnapshotStore
from timer import Countdown
from ui import (
    render_answers,
    render_pool,
    render_score_history,
    render_scoreboard,
    render_standings,
    report,
)

logger = logging.getLogger(__name__)

GAME_TYPE_NAMES = {LETTERS: "Letras", NUMBERS: "Números", MIXED: "Mixta"}


def _session():
    """Per-browser-session objects: state, random source, store, countdown."""
    if "store" not in st.session_state:
        store = SnapshotStore(SNAPSHOT_PATH)
        st.session_state["store"] = store
        st.session_state["game_state"] = store.load()
        st.session_state["rng"] = random.Random(int(SEED) if SEED else None)
        st.session_state["countdown"] = Countdown()
        st.session_state["last_result"] = None
    return st.session_state


def _act(action, *args, success: str = "") -> None:
    """Run a game_logic action as a widget callback and persist the state."""
    ss = st.session_state
    result = action(ss["game_state"], *args)
    ss["last_result"] = (result, success if result.ok else "")
    ss["store"].save(ss["game_state"])


def _start_round() -> None:
    ss = st.session_state
    _act(game_logic.start_round, ss["rng"])
    state = ss["game_state"]
    if state.round_state == STARTED:
        ss["countdown"].start(game_logic.round_duration(state), state.round_index)


def _submit_word(player_id: str, key: str) -> None:
    _act(game_logic.submit_word, player_id, st.session_state.get(key, ""), success="¡Palabra válida!")


# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

def render_setup() -> None:
    st.subheader("Nueva partida")
    defaults = default_config()
    count = st.number_input("Jugadores", MIN_PLAYERS, MAX_PLAYERS, len(defaults.players))
    names = []
    for i in range(int(count)):
        names.append(st.text_input(f"Jugador {i + 1}", value=f"Jugador {i + 1}", key=f"name_{i}"))
    rounds = st.slider("Rondas", MIN_ROUNDS, MAX_ROUNDS, defaults.rounds)
    game_type = st.selectbox(
        "Tipo de partida", GAME_TYPES, index=GAME_TYPES.index(defaults.game_type),
        format_func=GAME_TYPE_NAMES.get,
    )
    letters_duration = st.slider("Segundos por ronda de letras", *LETTERS_DURATION_RANGE, defaults.letters_duration)
    numbers_duration = st.slider("Segundos por ronda de números", *NUMBERS_DURATION_RANGE, defaults.numbers_duration)

    if st.button("Empezar partida"):
        ss = st.session_state
        config = GameConfig(
            players=[Player(id=str(i + 1), name=name) for i, name in enumerate(names)],
            rounds=rounds,
            game_type=game_type,
            letters_duration=letters_duration,
            numbers_duration=numbers_duration,
        )
        result = game_logic.configure(ss["game_state"], config)
        if result.ok:
            result = game_logic.start_game(ss["game_state"], ss["rng"])
            ss["store"].save(ss["game_state"])
            st.rerun()
        report(result)


# ---------------------------------------------------------------------------
# Round phases
# ---------------------------------------------------------------------------

@st.fragment(run_every=1)
def render_countdown() -> None:
    ss = st.session_state
    countdown = ss["countdown"]
    remaining = countdown.remaining()
    if remaining is not None:
        st.progress(remaining / max(1, game_logic.round_duration(ss["game_state"])), text=f"{remaining:.0f} s")
    fired = countdown.poll()
    if fired is not None:
        _act(game_logic.time_elapsed, fired)
        st.rerun()


def render_letters_turn(state, player) -> None:
    key = f"word_{state.round_index}_{player.id}"
    st.text_input("Tu palabra", key=key)
    st.button("Validar palabra", on_click=_submit_word, args=(player.id, key))


def render_numbers_turn(state, player) -> None:
    work = state.work
    selected = {work.first, work.second}
    st.write("**Números disponibles:**")
    cols = st.columns(max(1, len(work.tokens)))
    for col, token in zip(cols, work.tokens):
        col.button(
            f"[{token.value}]" if token.id in selected else str(token.value),
            key=f"tok_{token.id}",
            on_click=_act,
            args=(game_logic.select_number, token.id),
        )

    op_cols = st.columns(len(OPERATORS))
    for col, op in zip(op_cols, OPERATORS):
        col.button(op, key=f"op_{op}", on_click=_act, args=(game_logic.select_operator, op))

    a = work.token(work.first) if work.first else None
    b = work.token(work.second) if work.second else None
    st.code(f"{a.value if a else '?'} {work.operator or '?'} {b.value if b else '?'}")

    c1, c2, c3, c4, c5 = st.columns(5)
    c1.button("Calcular", on_click=_act, args=(game_logic.apply_operation,))
    c2.button("Limpiar", on_click=_act, args=(game_logic.clear_current_work,))
    c3.button("Reiniciar", on_click=_act, args=(game_logic.reset_current_work,))
    c4.button(
        "Confirmar solución",
        on_click=_act,
        args=(game_logic.confirm_solution, player.id),
        kwargs={"success": "Solución registrada."},
    )
    c5.button("Pasar", on_click=_act, args=(game_logic.skip_turn, player.id))

    if work.log:
        st.write("**Operaciones:**")
        for line in work.log:
            st.write(line)


def render_board(state) -> None:
    config = state.config
    st.subheader(f"Ronda {state.round_index} de {config.rounds} · {GAME_TYPE_NAMES[state.round_type]}")

    if state.round_state == INITIATED:
        st.button("Comenzar ronda", on_click=_start_round)
        return

    render_pool(state.round)

    if state.round_state == STARTED:
        render_countdown()
        st.button("¡Empezar ya!", on_click=_act, args=(game_logic.activate_round,))
    elif state.round_state == ACTIVE:
        player = game_logic.current_player(state)
        st.markdown(f"### Turno de {player.name}")
        if state.round_type == LETTERS:
            render_letters_turn(state, player)
        else:
            render_numbers_turn(state, player)
    elif state.round_state == COMPLETED:
        render_answers(state)
        if state.round_type != LETTERS:
            value, steps = best_solution(state.round.number_pool, state.round.target)
            st.caption("Mejor solución posible: " + " → ".join(steps) + f" ({value})")
        label = "Siguiente ronda" if state.round_index < config.rounds else "Ver resultados"
        st.button(label, on_click=_act, args=(game_logic.advance_round, st.session_state["rng"]))


def render_results(state) -> None:
    st.subheader("Resultados finales")
    render_standings(state)
    render_score_history(state)
    col_again, col_setup = st.columns(2)
    with col_again:
        st.button("Jugar otra vez", on_click=_act, args=(game_logic.reset_game, st.session_state["rng"]))
    with col_setup:
        if st.button("Nueva configuración"):
            st.session_state["store"].clear()
            st.session_state.clear()
            st.rerun()


def run_app() -> None:
    """Run the main Streamlit application."""
    st.set_page_config(page_title="Letras y Números", layout="wide")
    st.title("Letras y Números")

    ss = _session()
    state = ss["game_state"]

    if ss["last_result"] is not None:
        result, success = ss["last_result"]
        report(result, success)
        ss["last_result"] = None

    if state.config is None:
        render_setup()
        return
    if state.game_over:
        render_results(state)
        return

    board_col, score_col = st.columns([2, 1])
    with board_col:
        render_board(state)
    with score_col:
        render_scoreboard(state)
        render_score_history(state)


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL)
    run_app()
