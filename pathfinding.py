"""
Shortest-path strategy for the medium tier.

Breadth-first search over slide transitions. A search branch remembers the
first slide it took; when any branch reaches a gem, that first slide is the
move returned, even if the gem is several slides away.
"""

from __future__ import annotations

import random
from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterable, List, Optional, Set, Tuple

from board import BoardModel
from models import Direction
from safety import consume_shield, is_fatal, random_safe_move

PROBE_DISTANCE = 3


@dataclass
class SearchNode:
    """A BFS state. Nodes with equal (row, col, shields) are the same state."""
    row: int
    col: int
    shields: int
    first_dir: Optional[Direction]

    def key(self) -> Tuple[int, int, int]:
        return (self.row, self.col, self.shields)


def leads_to_gem(board: BoardModel, r: int, c: int, d: Direction, distance: int = PROBE_DISTANCE) -> bool:
    """Look a few cells ahead for a gem before any wall, stop cell or mine."""
    for _ in range(distance):
        r += d.dx
        c += d.dy
        if not board.in_bounds(r, c) or board.grid[r][c].wall:
            break
        cell = board.grid[r][c]
        if cell.gem:
            return True
        if cell.stop or cell.mine:
            break
    return False


def get_promising_directions(board: BoardModel) -> List[Direction]:
    return [d for d in Direction if leads_to_gem(board, board.cpu_row, board.cpu_col, d)]


def _expand(board: BoardModel, queue: Deque[SearchNode], visited: Set[Tuple[int, int, int]]) -> Optional[Direction]:
    """Run BFS until a gem-collecting slide is found or the frontier empties."""
    # Simulated slides never use up shield cells, so the count is capped to keep
    # the state space finite.
    shield_cap = board.max_shields()
    while queue:
        curr = queue.popleft()

        for d in Direction:
            res = board.slide(curr.row, curr.col, d)

            # The committed first slide must be safe on the shields held before it
            if curr.first_dir is None and is_fatal(res, curr.shields):
                continue
            next_shields = consume_shield(curr.shields, res)
            if next_shields is None:
                continue
            if res.row == curr.row and res.col == curr.col and res.gems == 0:
                continue

            first_move = curr.first_dir if curr.first_dir is not None else d

            if res.gems > 0:
                return first_move

            node = SearchNode(res.row, res.col, min(next_shields, shield_cap), first_move)
            if node.key() not in visited:
                visited.add(node.key())
                queue.append(node)

    return None


def bfs_to_gem(board: BoardModel, start_directions: Iterable[Direction],
               rng: Optional[random.Random] = None) -> Optional[Direction]:
    """
    BFS seeded with one slide per start direction.

    A seed that already collects a gem wins immediately. If the search
    finds nothing, falls back to an unrestricted BFS from the agent.
    """
    queue: Deque[SearchNode] = deque()
    visited: Set[Tuple[int, int, int]] = set()

    for start_dir in start_directions:
        first_step = board.slide(board.cpu_row, board.cpu_col, start_dir)

        if is_fatal(first_step, board.cpu_shields):
            continue

        start_shields = consume_shield(board.cpu_shields, first_step)
        node = SearchNode(first_step.row, first_step.col, start_shields, start_dir)
        queue.append(node)
        visited.add(node.key())

        if first_step.gems > 0:
            return start_dir

    found = _expand(board, queue, visited)
    if found is not None:
        return found
    return full_bfs(board, rng)


def full_bfs(board: BoardModel, rng: Optional[random.Random] = None) -> Optional[Direction]:
    """BFS from the agent over every direction, then a random safe move."""
    start = SearchNode(board.cpu_row, board.cpu_col, board.cpu_shields, None)
    queue: Deque[SearchNode] = deque([start])
    visited = {start.key()}

    found = _expand(board, queue, visited)
    if found is not None:
        return found
    return random_safe_move(board, rng)


def play_medium(board: BoardModel, rng: Optional[random.Random] = None) -> Optional[Direction]:
    promising = get_promising_directions(board)
    if promising:
        return bfs_to_gem(board, promising, rng)
    return full_bfs(board, rng)
