import random
from typing import Any, Dict, Optional

from engine import choose_direction
from models import Difficulty, Direction, SlideResult
from state import GameState

DIRECTION_ALIASES = {
    'w': Direction.UP,
    's': Direction.DOWN,
    'a': Direction.LEFT,
    'd': Direction.RIGHT,
    'north': Direction.UP,
    'south': Direction.DOWN,
    'west': Direction.LEFT,
    'east': Direction.RIGHT,
}


class MoveValidationError(Exception):
    """Exception raised when a move fails validation."""
    pass


def log_event(game_state: GameState, event: str, **kwargs) -> None:
    """
    Add an event to the game state log.

    Args:
        game_state: Current game state
        event: Description of the event
        **kwargs: Additional event data to include
    """
    log_entry = {
        'turn': game_state.turn,
        'phase': game_state.phase,
        'event': event,
        **kwargs
    }
    game_state.log.append(log_entry)


def parse_direction(name: Any) -> Direction:
    """Accept 'UP', 'up', 'w', 'north' and similar spellings."""
    if not isinstance(name, str) or not name.strip():
        raise MoveValidationError("Direction must be a non-empty string")
    key = name.strip().lower()
    if key in DIRECTION_ALIASES:
        return DIRECTION_ALIASES[key]
    try:
        return Direction[key.upper()]
    except KeyError:
        raise MoveValidationError(f"Invalid direction: {name}")


def parse_difficulty(name: Any) -> Difficulty:
    try:
        return Difficulty(str(name).strip().lower())
    except ValueError:
        raise MoveValidationError(f"Invalid difficulty: {name}")


def validate_move(game_state: GameState, direction: Direction) -> bool:
    """Validate that a move may be played now."""
    if game_state.is_over():
        raise MoveValidationError(f"Game is over ({game_state.phase})")
    if not isinstance(direction, Direction):
        raise MoveValidationError(f"Not a direction: {direction!r}")
    return True


def resolve_move(game_state: GameState, direction: Direction) -> SlideResult:
    """
    Play a real slide and update the game.

    Collected items are removed from the board. A struck mine consumes a
    shield (collected shields count) or kills the agent.

    Returns:
        The SlideResult of the move
    """
    validate_move(game_state, direction)
    board = game_state.board
    start = (board.cpu_row, board.cpu_col)

    res = board.slide(board.cpu_row, board.cpu_col, direction, simulate=False)
    board.cpu_row, board.cpu_col = res.row, res.col
    board.cpu_shields += res.shields
    game_state.gems_collected += res.gems
    game_state.shields_collected += res.shields

    if res.hit_mine:
        if board.cpu_shields > 0:
            board.cpu_shields -= 1
            log_event(game_state, 'shield_absorbed_mine', position=(res.row, res.col))
        else:
            game_state.phase = 'dead'

    log_event(
        game_state,
        'move',
        direction=direction.name,
        start=start,
        end=(res.row, res.col),
        gems=res.gems,
        shields=res.shields,
        hit_mine=res.hit_mine,
    )

    if game_state.phase == 'play':
        if board.remaining_gems() == 0:
            game_state.phase = 'won'
        elif game_state.turn >= game_state.max_turns:
            game_state.phase = 'timeout'
    game_state.turn += 1

    if game_state.is_over():
        log_event(game_state, 'game_over', gems_collected=game_state.gems_collected)
    return res


def cpu_turn(game_state: GameState, rng: Optional[random.Random] = None) -> Dict[str, Any]:
    """
    Let the engine pick and play the CPU's move.

    When the engine finds no legal move the game ends as 'trapped'.
    """
    if game_state.is_over():
        raise MoveValidationError(f"Game is over ({game_state.phase})")
    direction = choose_direction(game_state.board, game_state.difficulty, rng)

    if direction is None:
        game_state.phase = 'trapped'
        log_event(game_state, 'trapped', position=(game_state.board.cpu_row, game_state.board.cpu_col))
        return {'direction': None, 'result': None}

    res = resolve_move(game_state, direction)
    return {'direction': direction, 'result': res}
