"""
Board model for the sliding gem game.

A board is a rectangular grid of cells plus the CPU agent's position and
shield count. Movement uses inertia: a slide carries the agent cell by cell
until it reaches a wall, the grid edge, a stop cell or a mine.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import List, Tuple

from models import Cell, Direction, SlideResult


@dataclass
class BoardModel:
    """Grid of cells with the agent's position and shield count."""
    rows: int
    cols: int
    grid: List[List[Cell]] = field(default_factory=list)
    cpu_row: int = 0
    cpu_col: int = 0
    cpu_shields: int = 0

    def __post_init__(self):
        if not self.grid:
            self.grid = [[Cell() for _ in range(self.cols)] for _ in range(self.rows)]

    def in_bounds(self, r: int, c: int) -> bool:
        """Check if a cell is inside the grid."""
        return 0 <= r < self.rows and 0 <= c < self.cols

    def cell_at(self, r: int, c: int) -> Cell:
        return self.grid[r][c]

    def slide(self, r: int, c: int, direction: Direction, simulate: bool = True) -> SlideResult:
        """
        Slide from (r, c) in a direction until something stops the move.

        Items on every entered cell are collected. A mine ends the slide on
        the mine cell, a stop cell ends it on the stop cell, and walls or the
        grid edge end it on the last open cell.

        Args:
            r, c: Starting cell
            direction: Direction to slide in
            simulate: When True the grid is left untouched; otherwise
                collected items and the struck mine are removed.

        Returns:
            SlideResult with the resting cell and what was encountered
        """
        gems = 0
        shields = 0
        hit_mine = False

        while True:
            nr, nc = r + direction.dx, c + direction.dy
            if not self.in_bounds(nr, nc) or self.grid[nr][nc].wall:
                break

            r, c = nr, nc
            cell = self.grid[r][c]

            if cell.gem:
                gems += 1
                if not simulate:
                    cell.gem = False
            if cell.shield:
                shields += 1
                if not simulate:
                    cell.shield = False
            if cell.mine:
                hit_mine = True
                if not simulate:
                    cell.mine = False
                break
            if cell.stop:
                break

        return SlideResult(row=r, col=c, gems=gems, shields=shields, hit_mine=hit_mine)

    def targets(self) -> List[Tuple[int, int]]:
        """All cells holding a gem or a shield, in row-major order."""
        return [
            (r, c)
            for r in range(self.rows)
            for c in range(self.cols)
            if self.grid[r][c].gem or self.grid[r][c].shield
        ]

    def remaining_gems(self) -> int:
        return sum(1 for row in self.grid for cell in row if cell.gem)

    def copy(self) -> BoardModel:
        """Deep copy, so callers can experiment without touching the original."""
        return copy.deepcopy(self)

    def max_shields(self) -> int:
        """Most shields the agent could ever hold: current plus every shield on the board."""
        return self.cpu_shields + sum(1 for row in self.grid for cell in row if cell.shield)
