"""Shared test fixtures and helpers."""

import random

import pytest

from map_gen import board_from_rows
from models import Difficulty
from state import GameState, initialize_game

# --- Standard layouts ---

# 5x5, agent in the middle, one gem two cells to the east
SINGLE_GEM_ROWS = [
    ".....",
    ".....",
    "..A.G",
    ".....",
    ".....",
]

# Agent boxed in by walls except for a mine to the east
TRAPPED_BY_MINE_ROWS = [
    "###",
    "#AM",
    "###",
]


# --- Fixtures ---


@pytest.fixture
def rng():
    """Deterministic RNG seeded at 42."""
    return random.Random(42)


@pytest.fixture
def single_gem_board():
    return board_from_rows(SINGLE_GEM_ROWS)


@pytest.fixture
def game():
    """Fresh medium game (seed=42)."""
    return initialize_game(seed=42, difficulty=Difficulty.MEDIUM)


@pytest.fixture
def api_client():
    """Flask test client."""
    from app import app

    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


# --- Helper functions ---


def make_game(rows, shields=0, difficulty=Difficulty.MEDIUM, max_turns=60):
    """Wrap an ASCII layout in a GameState."""
    return GameState(
        game_id="test",
        board=board_from_rows(rows, shields=shields),
        difficulty=difficulty,
        max_turns=max_turns,
    )


def create_api_game(client, seed=42, difficulty="medium"):
    """Create a new game via API, return game_id."""
    resp = client.post("/api/game/new", json={"seed": seed, "difficulty": difficulty})
    assert resp.status_code == 200
    return resp.json["game_id"]
