"""
Safety checks and the last-resort move picker shared by every strategy.
"""

from __future__ import annotations

import random
from typing import List, Optional

from board import BoardModel
from models import Direction, SlideResult


def is_fatal(res: SlideResult, shields: int) -> bool:
    """A slide is fatal when it strikes a mine with no shield to absorb it."""
    return res.hit_mine and shields == 0


def has_moved(res: SlideResult, r: int, c: int) -> bool:
    return res.row != r or res.col != c


def consume_shield(shields: int, res: SlideResult) -> Optional[int]:
    """
    Shield count after a slide: collected shields are added first, then
    one is spent if a mine was struck. Returns None when the mine would
    be fatal.
    """
    remaining = shields + res.shields
    if res.hit_mine:
        if remaining > 0:
            remaining -= 1
        else:
            return None
    return remaining


def random_safe_move(board: BoardModel, rng: Optional[random.Random] = None) -> Optional[Direction]:
    """
    Pick uniformly among item-collecting safe moves, else among any safe
    displacing move. Returns None when the agent is trapped.
    """
    rng = rng or random.Random()
    safe_moves: List[Direction] = []
    item_moves: List[Direction] = []

    for d in Direction:
        res = board.slide(board.cpu_row, board.cpu_col, d)
        if is_fatal(res, board.cpu_shields) or not has_moved(res, board.cpu_row, board.cpu_col):
            continue
        safe_moves.append(d)
        if res.gems > 0 or res.shields > 0:
            item_moves.append(d)

    if item_moves:
        return rng.choice(item_moves)
    if safe_moves:
        return rng.choice(safe_moves)
    return None
