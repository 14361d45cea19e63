"""
CLI play mode for the sliding gem game.

Play the board yourself with W/A/S/D, ask the engine for a hint, or
watch it play at a chosen difficulty. ASCII renderer, full game loop.

Usage: python play_cli.py
"""

import random

from engine import choose_direction
from map_gen import board_to_rows
from models import Difficulty
from moves import MoveValidationError, cpu_turn, parse_difficulty, parse_direction, resolve_move
from state import GameState, initialize_game

CELL_LEGEND = "A=agent  #=wall  G=gem  S=shield  M=mine  O=stop"


# ---------------------------------------------------------------------------
# ASCII Renderer
# ---------------------------------------------------------------------------


def render_board(game: GameState):
    """Print the board with a column header and the agent's status."""
    board = game.board
    print()
    print("     " + "".join(str(c % 10) for c in range(board.cols)))
    print("    " + "-" * (board.cols + 2))
    for r, line in enumerate(board_to_rows(board)):
        print(f" {r:2d} |{line}|")
    print("    " + "-" * (board.cols + 2))
    print(f"  Turn {game.turn}  Gems {game.gems_collected} "
          f"(left {board.remaining_gems()})  Shields {board.cpu_shields}")
    print()


def print_outcome(game: GameState):
    messages = {
        'won': "Every gem collected!",
        'trapped': "The agent is trapped: no legal move remains.",
        'dead': "Boom. A mine with no shield left.",
        'timeout': "Out of turns.",
    }
    print("\n=== GAME OVER ===")
    print(messages.get(game.phase, game.phase))
    print(f"Gems collected: {game.gems_collected} in {game.turn - 1} moves")


# ---------------------------------------------------------------------------
# Game loops
# ---------------------------------------------------------------------------


def play_human(game: GameState, rng: random.Random):
    print("Move with w/a/s/d, 'h' for a hint, 'q' to quit.")
    while not game.is_over():
        render_board(game)
        raw = input("> ").strip().lower()
        if raw == 'q':
            return
        if raw == 'h':
            hint = choose_direction(game.board, game.difficulty, rng)
            print(f"Hint: {hint.name if hint else 'no legal move'}")
            continue
        try:
            res = resolve_move(game, parse_direction(raw))
        except MoveValidationError as e:
            print(f"  {e}")
            continue
        if res.gems or res.shields:
            print(f"  +{res.gems} gems, +{res.shields} shields")
        if res.hit_mine:
            print("  Mine!")
    render_board(game)
    print_outcome(game)


def watch_cpu(game: GameState, rng: random.Random):
    while not game.is_over():
        render_board(game)
        outcome = cpu_turn(game, rng)
        direction = outcome['direction']
        print(f"CPU ({game.difficulty.value}) slides {direction.name if direction else '-'}")
    render_board(game)
    print_outcome(game)


def main():
    print("=== GEM SLIDE ===")
    print(CELL_LEGEND)

    raw = input("Difficulty [easy/medium/hard] (medium): ").strip() or Difficulty.MEDIUM.value
    try:
        difficulty = parse_difficulty(raw)
    except MoveValidationError as e:
        print(e)
        return

    raw_seed = input("Seed (random): ").strip()
    seed = int(raw_seed) if raw_seed.isdigit() else random.randint(0, 10_000)
    rng = random.Random(seed)
    game = initialize_game(seed, difficulty)
    print(f"Seed {seed}")

    mode = input("Play yourself or watch the CPU? [p/w] (p): ").strip().lower()
    if mode == 'w':
        watch_cpu(game, rng)
    else:
        play_human(game, rng)


if __name__ == "__main__":
    main()
