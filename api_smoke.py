#!/usr/bin/env python3
"""
Smoke run against a live server: create a game and let the CPU play it out.

Usage: python api_smoke.py [base_url] [difficulty]
"""

import sys
from typing import Any, Dict, Optional

import requests


class ApiSmokeRunner:
    """Drives a running game server through one full CPU game."""

    def __init__(self, base_url: str = 'http://127.0.0.1:5000/api'):
        self.base_url = base_url.rstrip('/')
        self.session = requests.Session()
        self.game_id: Optional[str] = None

    def create_game(self, seed: int = 42, difficulty: str = 'medium') -> bool:
        """Create a new game."""
        try:
            url = f"{self.base_url}/game/new"
            print(f"Creating new {difficulty} game with seed {seed}...")
            response = self.session.post(url, json={"seed": seed, "difficulty": difficulty})

            if response.status_code == 200:
                self.game_id = response.json().get('game_id')
                print(f"Game created successfully with ID: {self.game_id}")
                return True
            print(f"Failed to create game: {response.status_code} - {response.text}")
            return False

        except requests.RequestException as e:
            print(f"Error creating game: {e}")
            return False

    def get_game_state(self) -> Optional[Dict[str, Any]]:
        """Get the current game state."""
        if not self.game_id:
            return None

        try:
            response = self.session.get(f"{self.base_url}/game/{self.game_id}/state")
            if response.status_code == 200:
                return response.json()
            print(f"Failed to get game state: {response.status_code} - {response.text}")
            return None

        except requests.RequestException as e:
            print(f"Error getting game state: {e}")
            return None

    def cpu_move(self) -> Optional[Dict[str, Any]]:
        """Ask the server to play one CPU move."""
        if not self.game_id:
            return None

        try:
            response = self.session.post(f"{self.base_url}/game/{self.game_id}/cpu")
            if response.status_code == 200:
                return response.json()
            print(f"Failed to play CPU move: {response.status_code} - {response.text}")
            return None

        except requests.RequestException as e:
            print(f"Error playing CPU move: {e}")
            return None

    def play_out(self, max_moves: int = 200) -> Optional[Dict[str, Any]]:
        """Play CPU moves until the game ends; returns the final state."""
        state = self.get_game_state()
        moves = 0
        while state and state['phase'] == 'play' and moves < max_moves:
            outcome = self.cpu_move()
            if outcome is None:
                return None
            state = outcome['state']
            moves += 1
            print(f"  move {moves}: {outcome['direction']} -> "
                  f"({state['agent']['row']}, {state['agent']['col']}) "
                  f"gems={state['gems_collected']}")
        return state


def main():
    base_url = sys.argv[1] if len(sys.argv) > 1 else 'http://127.0.0.1:5000/api'
    difficulty = sys.argv[2] if len(sys.argv) > 2 else 'medium'

    print("API Smoke Run")
    print("=" * 40)

    runner = ApiSmokeRunner(base_url)
    if not runner.create_game(difficulty=difficulty):
        print("✗ Could not create a game")
        return

    final_state = runner.play_out()
    if final_state:
        print(f"✓ Game finished: {final_state['phase']}, "
              f"{final_state['gems_collected']} gems in {final_state['turn'] - 1} moves")
    else:
        print("✗ Game did not finish cleanly")


if __name__ == "__main__":
    main()
