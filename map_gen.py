"""
Board generation module for the sliding gem game.
Walls come from Perlin noise ridges; items, hazards and the agent are placed
with a seeded numpy generator. Boards are retried until a gem is reachable.
"""

from collections import deque
from typing import Dict, List, Optional, Set, Tuple

import numpy as np
from noise import pnoise2

from board import BoardModel
from models import Cell, Difficulty, Direction
from safety import consume_shield

BOARD_PROFILES: Dict[str, Dict] = {
    'easy': {
        'rows': 8, 'cols': 8, 'wall_threshold': 0.30,
        'gem_density': 0.12, 'shield_density': 0.03,
        'mine_density': 0.02, 'stop_density': 0.05,
    },
    'medium': {
        'rows': 10, 'cols': 10, 'wall_threshold': 0.26,
        'gem_density': 0.10, 'shield_density': 0.03,
        'mine_density': 0.05, 'stop_density': 0.05,
    },
    'hard': {
        'rows': 12, 'cols': 12, 'wall_threshold': 0.22,
        'gem_density': 0.08, 'shield_density': 0.03,
        'mine_density': 0.08, 'stop_density': 0.04,
    },
}

CELL_CHARS = {
    '#': 'wall',
    'G': 'gem',
    'S': 'shield',
    'M': 'mine',
    'O': 'stop',
}


def generate_walls(rows: int, cols: int, seed: int, threshold: float,
                   frequency: float = 4.0) -> np.ndarray:
    """
    Boolean wall mask from Perlin noise.

    Args:
        rows, cols: Board size
        seed: Noise base
        threshold: Walls where |noise| exceeds this (lower = more walls)
        frequency: Noise frequency (lower = larger wall clusters)

    Returns:
        Array of shape (rows, cols), True where a wall stands
    """
    values = np.array([
        [
            pnoise2((r + 0.5) / frequency, (c + 0.5) / frequency, octaves=2,
                    persistence=0.6, lacunarity=2.5, base=seed % 256)
            for c in range(cols)
        ]
        for r in range(rows)
    ])
    return np.abs(values) > threshold


def _build_board(seed: int, profile: Dict, starting_shields: int) -> BoardModel:
    rows, cols = profile['rows'], profile['cols']
    walls = generate_walls(rows, cols, seed, profile['wall_threshold'])
    board = BoardModel(rows=rows, cols=cols, cpu_shields=starting_shields)

    free: List[Tuple[int, int]] = []
    for r in range(rows):
        for c in range(cols):
            if walls[r, c]:
                board.grid[r][c].wall = True
            else:
                free.append((r, c))

    rng = np.random.default_rng(seed & 0xFFFFFFFF)
    order = [free[i] for i in rng.permutation(len(free))]
    if not order:
        # Solid noise: open a single cell for the agent
        board.grid[0][0].wall = False
        order = [(0, 0)]

    board.cpu_row, board.cpu_col = order[0]
    remaining = order[1:]

    total = len(free)
    counts = [
        ('gem', max(1, int(total * profile['gem_density']))),
        ('shield', int(total * profile['shield_density'])),
        ('mine', int(total * profile['mine_density'])),
        ('stop', int(total * profile['stop_density'])),
    ]
    for flag, count in counts:
        placed, remaining = remaining[:count], remaining[count:]
        for r, c in placed:
            setattr(board.grid[r][c], flag, True)

    return board


def count_reachable_gems(board: BoardModel) -> int:
    """
    Number of distinct gem cells the agent can pass over by safe slides.

    Breadth-first over (row, col, shields); shield counts are capped at what
    the board could ever supply so the search stays finite.
    """
    shield_cap = board.max_shields()
    start = (board.cpu_row, board.cpu_col, board.cpu_shields)
    queue = deque([start])
    seen = {start}
    gems: Set[Tuple[int, int]] = set()

    while queue:
        r, c, shields = queue.popleft()
        for d in Direction:
            res = board.slide(r, c, d)
            next_shields = consume_shield(shields, res)
            if next_shields is None:
                continue

            steps = abs(res.row - r) + abs(res.col - c)
            for k in range(1, steps + 1):
                cr, cc = r + k * d.dx, c + k * d.dy
                if board.grid[cr][cc].gem:
                    gems.add((cr, cc))

            state = (res.row, res.col, min(next_shields, shield_cap))
            if state not in seen:
                seen.add(state)
                queue.append(state)

    return len(gems)


def generate_board(seed: int, difficulty: Difficulty = Difficulty.MEDIUM,
                   profile: Optional[Dict] = None, starting_shields: int = 0,
                   max_attempts: int = 10) -> BoardModel:
    """
    Generate a board for a difficulty tier.

    Args:
        seed: Random seed (same seed, same board)
        difficulty: Tier whose profile is used when none is given
        profile: Size and densities; see BOARD_PROFILES
        starting_shields: Shields the agent starts with
        max_attempts: Derived seeds to try before giving up on reachability

    Returns:
        BoardModel with at least one reachable gem when one could be found
    """
    profile = profile or BOARD_PROFILES[difficulty.value]

    board = None
    for attempt in range(max_attempts):
        board = _build_board(seed + attempt, profile, starting_shields)
        if count_reachable_gems(board) > 0:
            return board

    print(f"Warning: no reachable gem after {max_attempts} attempts (seed {seed})")
    return board


def board_from_rows(lines: List[str], shields: int = 0) -> BoardModel:
    """
    Build a board from ASCII rows.

    '#' wall, 'G' gem, 'S' shield, 'M' mine, 'O' stop, 'A' agent, '.' empty.
    """
    rows = len(lines)
    cols = len(lines[0]) if lines else 0
    board = BoardModel(rows=rows, cols=cols, cpu_shields=shields)

    for r, line in enumerate(lines):
        if len(line) != cols:
            raise ValueError(f"Row {r} has {len(line)} cells, expected {cols}")
        for c, ch in enumerate(line):
            if ch == 'A':
                board.cpu_row, board.cpu_col = r, c
            elif ch in CELL_CHARS:
                setattr(board.grid[r][c], CELL_CHARS[ch], True)
            elif ch != '.':
                raise ValueError(f"Unknown cell character {ch!r} at ({r}, {c})")

    return board


def board_to_rows(board: BoardModel) -> List[str]:
    """Inverse of board_from_rows."""
    lines = []
    for r in range(board.rows):
        chars = []
        for c in range(board.cols):
            cell: Cell = board.grid[r][c]
            if (r, c) == (board.cpu_row, board.cpu_col):
                chars.append('A')
            elif cell.wall:
                chars.append('#')
            elif cell.mine:
                chars.append('M')
            elif cell.gem:
                chars.append('G')
            elif cell.shield:
                chars.append('S')
            elif cell.stop:
                chars.append('O')
            else:
                chars.append('.')
        lines.append(''.join(chars))
    return lines


def print_board_stats(board: BoardModel) -> None:
    """Print counts of each cell kind."""
    counts = {name: 0 for name in CELL_CHARS.values()}
    for row in board.grid:
        for cell in row:
            for name in counts:
                if getattr(cell, name):
                    counts[name] += 1

    print("\n" + "=" * 40)
    print("BOARD STATISTICS")
    print("=" * 40)
    print(f"Size: {board.rows}x{board.cols}")
    for name, count in counts.items():
        print(f"{name:8}: {count:3d}")
    print(f"Reachable gems: {count_reachable_gems(board)}")
    print("=" * 40)


if __name__ == "__main__":
    for difficulty in Difficulty:
        print(f"\nTesting {difficulty.value} board (seed 42)")
        board = generate_board(42, difficulty)
        print("\n".join(board_to_rows(board)))
        print_board_stats(board)
