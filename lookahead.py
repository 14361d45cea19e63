"""
Clustered lookahead strategy for the hard tier.

Targets (gems and shields) are grouped into quadrants around the agent.
Each quadrant nominates the direction that best approaches it, and the
nominees are compared with a depth-limited recursive search where each
further slide is worth 0.9 of the one before it.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Tuple

from board import BoardModel
from models import Direction, SlideResult
from safety import consume_shield, has_moved, is_fatal, random_safe_move

HARD_DEPTH = 4
DECAY = 0.9
GEM_VALUE = 100.0
SHIELD_VALUE = 10.0
ITEM_PROBE_DISTANCE = 2

QUADRANTS = ("NW", "NE", "SW", "SE")


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _cell_key(r: int, c: int) -> int:
    return r * 1000 + c


def _immediate_value(res: SlideResult) -> float:
    return res.gems * GEM_VALUE + res.shields * SHIELD_VALUE


@dataclass
class TargetCluster:
    """Targets that fall in one quadrant around the agent."""
    quadrant: str
    targets: List[Tuple[int, int]] = field(default_factory=list)

    def add_target(self, r: int, c: int) -> None:
        self.targets.append((r, c))

    def is_empty(self) -> bool:
        return not self.targets

    def center(self) -> Tuple[int, int]:
        """Integer centroid of the targets."""
        if not self.targets:
            return (0, 0)
        total_r = sum(t[0] for t in self.targets)
        total_c = sum(t[1] for t in self.targets)
        return (total_r // len(self.targets), total_c // len(self.targets))

    def average_distance(self, r: int, c: int) -> float:
        return sum(math.hypot(tr - r, tc - c) for tr, tc in self.targets) / len(self.targets)

    def evaluate_direction(self, r: int, c: int, d: Direction) -> float:
        """
        How well a slide ending at (r, c) in direction d approaches the cluster.

        Closeness contributes 100 / average distance; heading toward the
        centroid adds 50 when both axes agree and 25 when one does.
        """
        if not self.targets:
            return 0.0

        avg_distance = self.average_distance(r, c)
        center_r, center_c = self.center()
        dx = _sign(center_r - r)
        dy = _sign(center_c - c)

        alignment = 0.0
        if d.dx == dx and d.dy == dy:
            alignment = 50.0
        elif d.dx == dx or d.dy == dy:
            alignment = 25.0

        if avg_distance == 0:
            return math.inf
        return 100.0 / avg_distance + alignment


def cluster_targets(board: BoardModel) -> List[TargetCluster]:
    """Split gems and shields into quadrants around the agent; ties go south/east."""
    clusters = {quad: TargetCluster(quad) for quad in QUADRANTS}

    for r, c in board.targets():
        if r < board.cpu_row:
            quad = "NW" if c < board.cpu_col else "NE"
        else:
            quad = "SW" if c < board.cpu_col else "SE"
        clusters[quad].add_target(r, c)

    return [clusters[quad] for quad in QUADRANTS if not clusters[quad].is_empty()]


def evaluate_cluster(board: BoardModel, cluster: TargetCluster) -> Optional[Direction]:
    """Best safe, displacing direction for approaching a cluster."""
    best_score = -math.inf
    best_dir = None

    for d in Direction:
        res = board.slide(board.cpu_row, board.cpu_col, d)
        if is_fatal(res, board.cpu_shields):
            continue
        if not has_moved(res, board.cpu_row, board.cpu_col):
            continue

        score = cluster.evaluate_direction(res.row, res.col, d) + res.gems * 100.0 + res.shields * 10.0
        if score > best_score:
            best_score = score
            best_dir = d

    return best_dir


def get_promising_directions_from(board: BoardModel, r: int, c: int) -> List[Direction]:
    """
    Directions with a gem or shield within a short probe.

    When nothing is in sight, every direction whose slide avoids mines and
    actually moves is returned instead.
    """
    promising = []
    for d in Direction:
        nr, nc = r + d.dx, c + d.dy
        for _ in range(ITEM_PROBE_DISTANCE):
            if not board.in_bounds(nr, nc) or board.grid[nr][nc].wall:
                break
            if board.grid[nr][nc].gem or board.grid[nr][nc].shield:
                promising.append(d)
                break
            nr += d.dx
            nc += d.dy

    if not promising:
        for d in Direction:
            res = board.slide(r, c, d)
            if not res.hit_mine and has_moved(res, r, c):
                promising.append(d)

    return promising


def evaluate_move_score(board: BoardModel, res: SlideResult, depth: int,
                        shields: int, visited: FrozenSet[int] = frozenset()) -> float:
    """
    Value of a slide plus the decayed value of the best continuation.

    Args:
        board: Board to search
        res: The slide being valued
        depth: Plies left, counting this slide; depth 0 is worth nothing
        shields: Shields held before this slide
        visited: Cell keys already seen on this path

    Returns:
        Immediate value + 0.9 * best future value
    """
    if depth == 0:
        return 0.0

    score = _immediate_value(res)
    shields_after = consume_shield(shields, res) or 0
    path = visited | {_cell_key(res.row, res.col)}

    future = 0.0
    for d in get_promising_directions_from(board, res.row, res.col):
        nxt = board.slide(res.row, res.col, d)
        if consume_shield(shields_after, nxt) is None:
            continue
        if _cell_key(nxt.row, nxt.col) in path and nxt.gems == 0:
            continue
        future = max(future, evaluate_move_score(board, nxt, depth - 1, shields_after, path))

    return score + future * DECAY


def score_clusters(board: BoardModel, depth: int = HARD_DEPTH) -> List[Tuple[TargetCluster, Direction, float]]:
    """Each cluster's candidate direction with its lookahead score, in quadrant order."""
    start = frozenset({_cell_key(board.cpu_row, board.cpu_col)})
    scored = []
    for cluster in cluster_targets(board):
        d = evaluate_cluster(board, cluster)
        if d is None:
            continue
        res = board.slide(board.cpu_row, board.cpu_col, d)
        scored.append((cluster, d, evaluate_move_score(board, res, depth, board.cpu_shields, start)))
    return scored


def recursive_score(board: BoardModel, r: int, c: int, shields: int, depth: int,
                    visited: FrozenSet[int]) -> float:
    """Best decayed value over every safe continuation from (r, c)."""
    if depth == 0:
        return 0.0

    max_score = 0.0
    for d in Direction:
        res = board.slide(r, c, d)
        next_shields = consume_shield(shields, res)
        if next_shields is None:
            continue

        key = _cell_key(res.row, res.col)
        if key in visited and res.gems == 0:
            continue

        future = recursive_score(board, res.row, res.col, next_shields, depth - 1, visited | {key})
        max_score = max(max_score, _immediate_value(res) + future * DECAY)

    return max_score


def play_hard_unclustered(board: BoardModel, rng: Optional[random.Random] = None) -> Optional[Direction]:
    """Lookahead over all four directions from the agent, ignoring clusters."""
    best_score = -math.inf
    best_dir = None
    start_key = _cell_key(board.cpu_row, board.cpu_col)

    for d in Direction:
        res = board.slide(board.cpu_row, board.cpu_col, d)
        if is_fatal(res, board.cpu_shields):
            continue
        if not has_moved(res, board.cpu_row, board.cpu_col) and res.gems == 0:
            continue

        shields = consume_shield(board.cpu_shields, res)
        key = _cell_key(res.row, res.col)
        score = _immediate_value(res) + recursive_score(
            board, res.row, res.col, shields, HARD_DEPTH - 1, frozenset({start_key, key})
        )

        if score > best_score:
            best_score = score
            best_dir = d

    if best_dir is not None:
        return best_dir
    return random_safe_move(board, rng)


def play_hard(board: BoardModel, rng: Optional[random.Random] = None) -> Optional[Direction]:
    best_dir = None
    best_score = -math.inf

    for _cluster, d, score in score_clusters(board):
        if score > best_score:
            best_score = score
            best_dir = d

    if best_dir is not None:
        return best_dir
    return play_hard_unclustered(board, rng)
