"""Tests for store.py and the GameState snapshot round-trip."""

import random

import game_logic
from config import INITIATED, NUMBERS
from models import GameConfig, GameState, Player
from store import SnapshotStore


def _make_started_state():
    state = GameState()
    config = GameConfig(players=[Player("a", "Ana"), Player("b", "Bea")], rounds=2, game_type=NUMBERS)
    rng = random.Random(5)
    game_logic.configure(state, config)
    game_logic.start_game(state, rng)
    game_logic.start_round(state, rng)
    game_logic.activate_round(state)
    return state


class TestSnapshotStore:

    def test_save_and_load_verbatim(self, tmp_path):
        store = SnapshotStore(str(tmp_path / "game.json"))
        state = _make_started_state()
        store.save(state)
        loaded = store.load()
        assert loaded == state

    def test_restored_state_keeps_playing(self, tmp_path):
        store = SnapshotStore(str(tmp_path / "game.json"))
        state = _make_started_state()
        store.save(state)
        loaded = store.load()
        player = game_logic.current_player(loaded)
        tokens = loaded.work.tokens
        assert game_logic.submit_arithmetic_operation(loaded, tokens[0].id, "+", tokens[1].id).ok
        assert game_logic.confirm_solution(loaded, player.id).ok

    def test_missing_file_is_unconfigured(self, tmp_path):
        state = SnapshotStore(str(tmp_path / "none.json")).load()
        assert state.config is None
        assert state.round_state == INITIATED

    def test_corrupt_file_is_unconfigured(self, tmp_path):
        path = tmp_path / "game.json"
        path.write_text("{not json", encoding="utf-8")
        assert SnapshotStore(str(path)).load().config is None

    def test_non_object_is_unconfigured(self, tmp_path):
        path = tmp_path / "game.json"
        path.write_text("[1, 2]", encoding="utf-8")
        assert SnapshotStore(str(path)).load().config is None

    def test_malformed_fields_are_unconfigured(self, tmp_path):
        path = tmp_path / "game.json"
        path.write_text('{"config": {"players": ["Ana", "Bea"]}, "round": 5}', encoding="utf-8")
        assert SnapshotStore(str(path)).load().config is None

    def test_clear(self, tmp_path):
        path = tmp_path / "game.json"
        store = SnapshotStore(str(path))
        store.save(GameState())
        store.clear()
        assert not path.exists()


class TestFromDict:

    def test_missing_config(self):
        state = GameState.from_dict({"round_index": 3})
        assert state.config is None
        assert state.round_index == 3

    def test_empty_player_list_means_not_configured(self):
        assert GameState.from_dict({"config": {"players": []}}).config is None

    def test_defaults_for_missing_fields(self):
        state = GameState.from_dict({"config": {"players": [{"id": "1", "name": "Ana"}]}})
        assert state.config.players[0].score == 0
        assert state.config.rounds == 3
        assert state.work.tokens == []

    def test_incomplete_tokens_are_dropped(self):
        state = GameState.from_dict({"work": {"tokens": [{"id": "n0", "value": 4}, {"id": "n1"}, 7]}})
        assert [t.id for t in state.work.tokens] == ["n0"]

    def test_config_that_is_not_an_object(self):
        assert GameState.from_dict({"config": "broken"}).config is None

    def test_clone_is_independent(self):
        state = _make_started_state()
        copy = state.clone()
        copy.config.players[0].score = 99
        copy.work.tokens.pop()
        assert state.config.players[0].score == 0
        assert len(state.work.tokens) == 6
