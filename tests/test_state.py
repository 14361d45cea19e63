"""Tests for game initialization and configuration."""

import json

from models import Difficulty
from state import DEFAULT_CONFIG, get_game_summary, initialize_game, load_config


class TestLoadConfig:
    def test_missing_file_uses_defaults(self, tmp_path):
        config = load_config(str(tmp_path / "missing.json"))
        assert config == DEFAULT_CONFIG

    def test_invalid_json_uses_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        assert load_config(str(path)) == DEFAULT_CONFIG

    def test_partial_board_override(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"max_turns": 5, "boards": {"easy": {"rows": 6}}}))
        config = load_config(str(path))
        assert config["max_turns"] == 5
        assert config["boards"]["easy"]["rows"] == 6
        assert config["boards"]["easy"]["cols"] == DEFAULT_CONFIG["boards"]["easy"]["cols"]

    def test_defaults_not_mutated(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"boards": {"easy": {"rows": 3}}}))
        load_config(str(path))
        assert DEFAULT_CONFIG["boards"]["easy"]["rows"] != 3


class TestInitializeGame:
    def test_new_game(self, game):
        assert game.turn == 1
        assert game.phase == 'play'
        assert game.gems_collected == 0
        assert game.log == []
        assert not game.is_over()

    def test_config_controls_board(self):
        config = load_config()
        config["boards"]["hard"]["rows"] = 7
        config["starting_shields"] = 2
        game = initialize_game(1, Difficulty.HARD, config=config)
        assert game.board.rows == 7
        assert game.board.cpu_shields == 2
        assert game.difficulty == Difficulty.HARD

    def test_unique_ids(self):
        assert initialize_game(1).game_id != initialize_game(1).game_id


def test_game_summary(game):
    summary = get_game_summary(game)
    assert summary['game_id'] == game.game_id
    assert summary['phase'] == 'play'
    assert summary['difficulty'] == 'medium'
    assert summary['agent']['row'] == game.board.cpu_row
    assert summary['gems_remaining'] == game.board.remaining_gems()
    assert len(summary['board']) == game.board.rows
