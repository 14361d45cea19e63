"""
Game state management for the sliding gem game.
Wraps a board with turn tracking, score, phase and an event log.

Phases: 'play' while moves remain, then 'won' (every gem collected),
'trapped' (no legal move), 'dead' (mine struck without a shield) or
'timeout' (turn cap reached).
"""

from __future__ import annotations
import copy
import json
import os
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from board import BoardModel
from map_gen import BOARD_PROFILES, board_to_rows, generate_board
from models import Difficulty

CONFIG_PATH = os.path.join(os.path.dirname(__file__), 'config.json')

DEFAULT_CONFIG: Dict[str, Any] = {
    'max_turns': 60,
    'starting_shields': 0,
    'boards': BOARD_PROFILES,
}

FINAL_PHASES = ('won', 'trapped', 'dead', 'timeout')


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load config.json merged over the defaults.

    Board profiles are merged per difficulty, so a file may override a
    single density without restating the rest.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    try:
        with open(path or CONFIG_PATH, 'r') as f:
            loaded = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError):
        # Use defaults if config file is missing or invalid
        return config

    for key, value in loaded.items():
        if key == 'boards' and isinstance(value, dict):
            for tier, profile in value.items():
                config['boards'].setdefault(tier, {}).update(profile)
        else:
            config[key] = value
    return config


@dataclass
class GameState:
    """A single-agent game: the board, the tier it is played at, and progress."""
    game_id: str
    board: BoardModel
    difficulty: Difficulty = Difficulty.MEDIUM
    turn: int = 1
    phase: str = 'play'
    gems_collected: int = 0
    shields_collected: int = 0
    max_turns: int = 60
    log: List[Dict[str, Any]] = field(default_factory=list)

    def is_over(self) -> bool:
        return self.phase in FINAL_PHASES


def initialize_game(seed: int, difficulty: Difficulty = Difficulty.MEDIUM,
                    config: Optional[Dict[str, Any]] = None) -> GameState:
    """
    Initialize a new game on a generated board.

    Args:
        seed: Random seed for board generation (required)
        difficulty: Tier for both board generation and the CPU strategy
        config: Loaded configuration; read from config.json when omitted

    Returns:
        New GameState ready for play
    """
    config = config or load_config()
    profile = config['boards'].get(difficulty.value, BOARD_PROFILES[difficulty.value])

    board = generate_board(
        seed,
        difficulty,
        profile=profile,
        starting_shields=config.get('starting_shields', 0),
    )

    return GameState(
        game_id=str(uuid.uuid4()),
        board=board,
        difficulty=difficulty,
        max_turns=config.get('max_turns', 60),
    )


def get_game_summary(game_state: GameState) -> Dict[str, Any]:
    """
    Get a summary of the current game state for API responses.

    Args:
        game_state: Current game state

    Returns:
        Dictionary with game summary information
    """
    board = game_state.board
    return {
        'game_id': game_state.game_id,
        'turn': game_state.turn,
        'phase': game_state.phase,
        'difficulty': game_state.difficulty.value,
        'gems_collected': game_state.gems_collected,
        'gems_remaining': board.remaining_gems(),
        'agent': {
            'row': board.cpu_row,
            'col': board.cpu_col,
            'shields': board.cpu_shields,
        },
        'board_size': (board.rows, board.cols),
        'board': board_to_rows(board),
    }
