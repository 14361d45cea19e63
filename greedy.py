"""
Immediate-reward strategy for the easy tier.

Every direction gets exactly one slide query and is scored on what that
single slide picks up.
"""

from __future__ import annotations

import random
from typing import Dict, Optional

from board import BoardModel
from models import Direction
from safety import has_moved, is_fatal, random_safe_move

GEM_SCORE = 100
SHIELD_SCORE = 50
EXPLORATION_BONUS = 10
DISQUALIFIED = -1000


def evaluate_easy_direction(board: BoardModel, d: Direction) -> int:
    """Score one direction by its immediate rewards."""
    res = board.slide(board.cpu_row, board.cpu_col, d)

    if is_fatal(res, board.cpu_shields) or not has_moved(res, board.cpu_row, board.cpu_col):
        return DISQUALIFIED

    score = res.gems * GEM_SCORE + res.shields * SHIELD_SCORE
    if res.gems == 0 and res.shields == 0:
        score += EXPLORATION_BONUS
    return score


def score_directions(board: BoardModel) -> Dict[Direction, int]:
    return {d: evaluate_easy_direction(board, d) for d in Direction}


def play_easy(board: BoardModel, rng: Optional[random.Random] = None) -> Optional[Direction]:
    """Take the best-scoring direction, or a random safe one if none scores."""
    best_dir = None
    best_score = -1

    for d, score in score_directions(board).items():
        if score > best_score:
            best_score = score
            best_dir = d

    if best_dir is None or best_score <= 0:
        return random_safe_move(board, rng)
    return best_dir
