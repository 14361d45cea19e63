"""
Decision engine for the CPU agent.

choose_direction() is a pure function of the board snapshot and the
difficulty tier: it only issues simulated slides and returns the next
direction, or None when no legal move exists.

    EASY   -> immediate reward of one slide (greedy.py)
    MEDIUM -> breadth-first search to the nearest gem (pathfinding.py)
    HARD   -> quadrant clusters with recursive lookahead (lookahead.py)
"""

from __future__ import annotations

import random
from typing import Callable, Dict, Optional

from board import BoardModel
from greedy import play_easy
from lookahead import play_hard
from models import Difficulty, Direction
from pathfinding import play_medium

Strategy = Callable[[BoardModel, Optional[random.Random]], Optional[Direction]]

STRATEGIES: Dict[Difficulty, Strategy] = {
    Difficulty.EASY: play_easy,
    Difficulty.MEDIUM: play_medium,
    Difficulty.HARD: play_hard,
}


def choose_direction(board: BoardModel, difficulty: Difficulty,
                     rng: Optional[random.Random] = None) -> Optional[Direction]:
    """
    Select the next slide for the CPU agent.

    Args:
        board: Current board; never modified
        difficulty: Tier selecting the strategy (unknown tiers play medium)
        rng: Random source for the random safe-move fallback

    Returns:
        Direction to slide in, or None if the agent is trapped
    """
    strategy = STRATEGIES.get(difficulty, play_medium)
    return strategy(board, rng)
