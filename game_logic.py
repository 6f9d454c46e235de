"""
Core game logic: the round/game state machine.

Every operation takes the GameState explicitly, mutates it in place and
returns an ActionResult. Rejected actions leave the state untouched and
carry the rejection kind in `error`.
"""

import logging
import random
from typing import FrozenSet, Optional

import arithmetic
from config import (
    ACTIVE,
    COMPLETED,
    EMPTY_SUBMISSION,
    GAME_TYPES,
    INITIATED,
    INVALID_CONFIG,
    LETTERS,
    LETTERS_DURATION_RANGE,
    MAX_PLAYERS,
    MAX_ROUNDS,
    MIN_PLAYERS,
    MIN_ROUNDS,
    MIXED,
    NO_ACTIVE_ROUND,
    NOT_CONFIGURED,
    NUMBERS,
    NUMBERS_DURATION_RANGE,
    OUT_OF_TURN,
    STARTED,
    WRONG_PHASE,
)
from generators import generate_letters, generate_numbers, shuffled
from models import ActionResult, GameConfig, GameState, Player, RoundContext, WorkingSet
from scoring import letters_score, numbers_score
from words import check_word, load_dictionary, normalize

logger = logging.getLogger(__name__)


def _reject(kind: str, action: str) -> ActionResult:
    logger.debug("%s rejected: %s", action, kind)
    return ActionResult(ok=False, error=kind)


# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

def validate_config(config: GameConfig) -> Optional[str]:
    """Return None if `config` can start a game, otherwise INVALID_CONFIG."""
    players = config.players or []
    ids = [p.id for p in players]
    if not MIN_PLAYERS <= len(players) <= MAX_PLAYERS:
        return INVALID_CONFIG
    if len(set(ids)) != len(ids) or any(not p.name.strip() for p in players):
        return INVALID_CONFIG
    if not MIN_ROUNDS <= config.rounds <= MAX_ROUNDS:
        return INVALID_CONFIG
    if config.game_type not in GAME_TYPES:
        return INVALID_CONFIG
    lo, hi = LETTERS_DURATION_RANGE
    if not lo <= config.letters_duration <= hi:
        return INVALID_CONFIG
    lo, hi = NUMBERS_DURATION_RANGE
    if not lo <= config.numbers_duration <= hi:
        return INVALID_CONFIG
    return None


def round_type_for(game_type: str, round_index: int) -> str:
    """Mixed games open with letters and alternate from there."""
    if game_type == MIXED:
        return LETTERS if round_index % 2 == 1 else NUMBERS
    return game_type


def round_duration(state: GameState) -> int:
    """Countdown length, in seconds, for the current round type."""
    if state.round_type == NUMBERS:
        return state.config.numbers_duration
    return state.config.letters_duration


def _prepare_round(state: GameState, rng: random.Random) -> None:
    """Put the current round back in `initiated` with a fresh turn order."""
    state.round_state = INITIATED
    state.round_type = round_type_for(state.config.game_type, state.round_index)
    state.round = None
    state.round_scores = {}
    state.answers = {}
    state.work = WorkingSet()
    state.turn_order = shuffled([p.id for p in state.config.players], rng)
    state.turn_index = 0
    state.timer_fired_round = None


def configure(state: GameState, config: GameConfig) -> ActionResult:
    error = validate_config(config)
    if error is not None:
        return _reject(error, "configure")
    state.config = config.clone()
    state.round_index = 1
    state.round_type = None
    state.round_state = INITIATED
    state.round = None
    state.turn_order = []
    state.turn_index = 0
    state.round_scores = {}
    state.answers = {}
    state.work = WorkingSet()
    state.history = []
    state.game_over = False
    state.timer_fired_round = None
    logger.info(
        "Configured %d players, %d rounds, %s game",
        len(config.players), config.rounds, config.game_type,
    )
    return ActionResult(ok=True)


def _restart(state: GameState, rng: random.Random) -> None:
    for p in state.config.players:
        p.score = 0
    state.round_index = 1
    state.history = []
    state.game_over = False
    _prepare_round(state, rng)


def start_game(state: GameState, rng: random.Random) -> ActionResult:
    if state.config is None:
        return _reject(NOT_CONFIGURED, "start_game")
    _restart(state, rng)
    logger.info("Game started, round 1 is %s", state.round_type)
    return ActionResult(ok=True)


def reset_game(state: GameState, rng: random.Random) -> ActionResult:
    """Back to round 1 with zeroed scores, keeping the roster and settings."""
    if state.config is None:
        return _reject(NOT_CONFIGURED, "reset_game")
    _restart(state, rng)
    logger.info("Game reset")
    return ActionResult(ok=True)


# ---------------------------------------------------------------------------
# Round phases
# ---------------------------------------------------------------------------

def start_round(state: GameState, rng: random.Random) -> ActionResult:
    """Generate the round content and start the reveal countdown."""
    if state.config is None:
        return _reject(NOT_CONFIGURED, "start_round")
    if state.game_over:
        return _reject(NO_ACTIVE_ROUND, "start_round")
    if state.round_state != INITIATED:
        return _reject(WRONG_PHASE, "start_round")
    if state.round_type is None:
        _prepare_round(state, rng)

    ctx = RoundContext(index=state.round_index, type=state.round_type)
    if state.round_type == LETTERS:
        ctx.letter_pool = generate_letters(rng)
    else:
        ctx.number_pool, ctx.target = generate_numbers(rng)
        arithmetic.reset_working_set(state.work, ctx.number_pool)

    state.round = ctx
    state.round_scores = {}
    state.answers = {}
    state.round_state = STARTED
    logger.info(
        "Round %d (%s) started: %s",
        state.round_index, state.round_type,
        ctx.letter_pool if state.round_type == LETTERS else (ctx.number_pool, ctx.target),
    )
    return ActionResult(ok=True)


def activate_round(state: GameState) -> ActionResult:
    """End the reveal phase and start accepting player input."""
    if state.config is None:
        return _reject(NOT_CONFIGURED, "activate_round")
    if state.round_state != STARTED:
        return _reject(WRONG_PHASE, "activate_round")
    state.round_state = ACTIVE
    logger.info("Round %d active, first turn: %s", state.round_index, state.turn_order[0])
    return ActionResult(ok=True)


def time_elapsed(state: GameState, round_index: Optional[int] = None) -> ActionResult:
    """
    Countdown callback. Acts at most once per round; duplicate or stale
    notifications are ignored.
    """
    if state.config is None:
        return _reject(NOT_CONFIGURED, "time_elapsed")
    if round_index is not None and round_index != state.round_index:
        return _reject(WRONG_PHASE, "time_elapsed")
    if state.timer_fired_round == state.round_index:
        return _reject(WRONG_PHASE, "time_elapsed")
    result = activate_round(state)
    if result.ok:
        state.timer_fired_round = state.round_index
    return result


def advance_round(state: GameState, rng: random.Random) -> ActionResult:
    """
    Fold the round scores into the players' totals, then either finish the
    game or move to the next round in `initiated`.
    """
    if state.config is None:
        return _reject(NOT_CONFIGURED, "advance_round")
    if state.game_over:
        return _reject(NO_ACTIVE_ROUND, "advance_round")
    if state.round_state != COMPLETED:
        return _reject(WRONG_PHASE, "advance_round")

    folded = {}
    for p in state.config.players:
        points = state.round_scores.get(p.id, 0)
        p.score += points
        folded[p.id] = points
    state.history.append({"round": state.round_index, "type": state.round_type, "scores": folded})
    state.round_scores = {}

    if state.round_index >= state.config.rounds:
        state.game_over = True
        logger.info("Game over after %d rounds", state.round_index)
        return ActionResult(ok=True)

    state.round_index += 1
    _prepare_round(state, rng)
    logger.info("Advanced to round %d (%s)", state.round_index, state.round_type)
    return ActionResult(ok=True)


# ---------------------------------------------------------------------------
# Turns
# ---------------------------------------------------------------------------

def current_player(state: GameState) -> Optional[Player]:
    if state.config is None or state.round_state != ACTIVE:
        return None
    if state.turn_index >= len(state.turn_order):
        return None
    return state.config.player(state.turn_order[state.turn_index])


def _check_turn(state: GameState, round_type: Optional[str], player_id: Optional[str] = None) -> Optional[str]:
    if state.config is None:
        return NOT_CONFIGURED
    if state.game_over or state.round is None or state.round_state != ACTIVE:
        return NO_ACTIVE_ROUND
    if round_type is not None and state.round_type != round_type:
        return WRONG_PHASE
    if player_id is not None and player_id != state.turn_order[state.turn_index]:
        return OUT_OF_TURN
    return None


def _end_turn(state: GameState) -> None:
    state.turn_index += 1
    if state.turn_index >= len(state.turn_order):
        state.round_state = COMPLETED
        arithmetic.clear_selection(state.work)
        logger.info("Round %d completed: %s", state.round_index, state.round_scores)
    elif state.round_type == NUMBERS:
        arithmetic.reset_working_set(state.work, state.round.number_pool)


def submit_word(
    state: GameState,
    player_id: str,
    word: str,
    dictionary: Optional[FrozenSet[str]] = None,
) -> ActionResult:
    """
    Score the current player's word and pass the turn. An illegal word still
    uses up the turn (scoring 0); an empty one is rejected outright.
    """
    error = _check_turn(state, LETTERS, player_id)
    if error is not None:
        return _reject(error, "submit_word")
    if dictionary is None:
        dictionary = load_dictionary()

    error = check_word(word, state.round.letter_pool, dictionary)
    if error == EMPTY_SUBMISSION:
        return _reject(error, "submit_word")

    valid = error is None
    points = letters_score(word, valid)
    state.round_scores[player_id] = points
    state.answers[player_id] = normalize(word)
    logger.info("Player %s played %r: %s, %d points", player_id, normalize(word), valid, points)
    _end_turn(state)
    return ActionResult(ok=valid, error=error, points=points)


def select_number(state: GameState, token_id: str) -> ActionResult:
    error = _check_turn(state, NUMBERS) or arithmetic.select_number(state.work, token_id)
    if error is not None:
        return _reject(error, "select_number")
    return ActionResult(ok=True)


def select_operator(state: GameState, op: str) -> ActionResult:
    error = _check_turn(state, NUMBERS) or arithmetic.select_operator(state.work, op)
    if error is not None:
        return _reject(error, "select_operator")
    return ActionResult(ok=True)


def apply_operation(state: GameState) -> ActionResult:
    error = _check_turn(state, NUMBERS)
    if error is not None:
        return _reject(error, "apply_operation")
    result = arithmetic.apply_operation(state.work, state.round.target)
    if result.exact:
        logger.info("Exact match on %d", result.value)
    return result


def submit_arithmetic_operation(state: GameState, first_id: str, op: str, second_id: str) -> ActionResult:
    error = _check_turn(state, NUMBERS)
    if error is not None:
        return _reject(error, "submit_arithmetic_operation")
    result = arithmetic.perform(state.work, first_id, op, second_id, state.round.target)
    if result.exact:
        logger.info("Exact match on %d", result.value)
    return result


def clear_current_work(state: GameState) -> ActionResult:
    """Drop the current selection, keeping tokens and operation log."""
    error = _check_turn(state, NUMBERS)
    if error is not None:
        return _reject(error, "clear_current_work")
    arithmetic.clear_selection(state.work)
    return ActionResult(ok=True)


def reset_current_work(state: GameState) -> ActionResult:
    """Throw away everything the current player has done this turn."""
    error = _check_turn(state, NUMBERS)
    if error is not None:
        return _reject(error, "reset_current_work")
    arithmetic.reset_working_set(state.work, state.round.number_pool)
    return ActionResult(ok=True)


def confirm_solution(state: GameState, player_id: str) -> ActionResult:
    """Score the current player's last result against the target and pass the turn."""
    error = _check_turn(state, NUMBERS, player_id)
    if error is not None:
        return _reject(error, "confirm_solution")
    result = state.work.last_result
    if result is None:
        return _reject(EMPTY_SUBMISSION, "confirm_solution")

    points = numbers_score(state.round.target, result)
    state.round_scores[player_id] = points
    state.answers[player_id] = " → ".join(state.work.log)
    logger.info("Player %s settled on %d (target %d): %d points", player_id, result, state.round.target, points)
    _end_turn(state)
    return ActionResult(ok=True, value=result, points=points, exact=result == state.round.target)


def skip_turn(state: GameState, player_id: str) -> ActionResult:
    """
    Pass a numbers turn before making any operation; the player gets no
    score entry this round.
    """
    error = _check_turn(state, NUMBERS, player_id)
    if error is None and state.work.last_result is not None:
        error = WRONG_PHASE
    if error is not None:
        return _reject(error, "skip_turn")
    logger.info("Player %s skipped", player_id)
    _end_turn(state)
    return ActionResult(ok=True)
