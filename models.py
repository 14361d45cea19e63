# Models for board elements of the sliding gem game

from dataclasses import dataclass
from enum import Enum


@dataclass
class Cell:
    """Static properties of a single grid cell."""
    wall: bool = False  # Blocks movement; a slide stops before it
    gem: bool = False  # Collectible worth points
    shield: bool = False  # Collectible that absorbs one mine
    mine: bool = False  # Hazard: consumes a shield or ends the game
    stop: bool = False  # Halts a slide on this cell

    @property
    def is_empty(self) -> bool:
        return not (self.wall or self.gem or self.shield or self.mine or self.stop)


class Direction(Enum):
    """Compass directions; dx moves along rows, dy along columns."""
    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class SlideResult:
    """
    Outcome of a single slide.

    Holds the resting cell, the gems and shields picked up on the way,
    and whether a mine was struck.
    """
    row: int
    col: int
    gems: int = 0
    shields: int = 0
    hit_mine: bool = False
