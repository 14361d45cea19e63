from flask import Flask, request, jsonify
from flask_cors import CORS
from state import initialize_game, get_game_summary, GameState
from moves import resolve_move, cpu_turn, parse_direction, parse_difficulty, MoveValidationError
from engine import choose_direction
from models import Difficulty, SlideResult
from typing import Any, Dict, Optional

app = Flask(__name__)
CORS(app)  # Enable CORS for all routes
games: Dict[str, GameState] = {}  # In-memory storage for game states


def serialize_slide(res: Optional[SlideResult]) -> Optional[Dict[str, Any]]:
    if res is None:
        return None
    return {
        'row': res.row,
        'col': res.col,
        'gems': res.gems,
        'shields': res.shields,
        'hit_mine': res.hit_mine,
    }


@app.route('/api/game/new', methods=['POST'])
def new_game():
    """Create a new game with the provided seed and difficulty."""
    try:
        data = request.get_json(silent=True)
        if data is None:
            return jsonify({'error': 'Invalid JSON data'}), 400

        seed = data.get('seed', 42)  # Default seed if none provided

        # Validate seed is an integer
        try:
            seed = int(seed)
        except (ValueError, TypeError):
            return jsonify({'error': 'Seed must be an integer'}), 400

        try:
            difficulty = parse_difficulty(data.get('difficulty', Difficulty.MEDIUM.value))
        except MoveValidationError as e:
            return jsonify({'error': str(e)}), 400

        game_state = initialize_game(seed, difficulty)
        games[game_state.game_id] = game_state

        return jsonify({'game_id': game_state.game_id})

    except Exception as e:
        return jsonify({'error': f'Failed to create game: {str(e)}'}), 500


@app.route('/api/game/<game_id>/state', methods=['GET'])
def get_game_state(game_id: str):
    """Retrieve the current game state for the given game ID."""
    try:
        if game_id not in games:
            return jsonify({'error': 'Game not found'}), 404

        return jsonify(get_game_summary(games[game_id]))

    except Exception as e:
        return jsonify({'error': f'Failed to retrieve game state: {str(e)}'}), 500


@app.route('/api/game/<game_id>/move', methods=['POST'])
def submit_move(game_id: str):
    """Play a slide chosen by the client."""
    try:
        if game_id not in games:
            return jsonify({'error': 'Game not found'}), 404

        game_state = games[game_id]

        data = request.get_json(silent=True)
        if data is None:
            return jsonify({'error': 'Invalid JSON data'}), 400
        if 'direction' not in data:
            return jsonify({'error': 'Move must have a direction field'}), 400

        try:
            direction = parse_direction(data['direction'])
            res = resolve_move(game_state, direction)
        except MoveValidationError as e:
            return jsonify({'error': str(e)}), 400

        return jsonify({
            'game_id': game_id,
            'direction': direction.name,
            'result': serialize_slide(res),
            'state': get_game_summary(game_state),
        })

    except Exception as e:
        return jsonify({'error': f'Failed to process move: {str(e)}'}), 500


@app.route('/api/game/<game_id>/cpu', methods=['POST'])
def play_cpu_move(game_id: str):
    """Let the engine choose and play the next slide."""
    try:
        if game_id not in games:
            return jsonify({'error': 'Game not found'}), 404

        game_state = games[game_id]

        try:
            outcome = cpu_turn(game_state)
        except MoveValidationError as e:
            return jsonify({'error': str(e)}), 400

        direction = outcome['direction']
        return jsonify({
            'game_id': game_id,
            'direction': direction.name if direction else None,
            'result': serialize_slide(outcome['result']),
            'state': get_game_summary(game_state),
        })

    except Exception as e:
        return jsonify({'error': f'Failed to play CPU move: {str(e)}'}), 500


@app.route('/api/game/<game_id>/hint', methods=['GET'])
def get_hint(game_id: str):
    """Suggest a direction without playing it."""
    try:
        if game_id not in games:
            return jsonify({'error': 'Game not found'}), 404

        game_state = games[game_id]

        difficulty = game_state.difficulty
        if 'difficulty' in request.args:
            try:
                difficulty = parse_difficulty(request.args['difficulty'])
            except MoveValidationError as e:
                return jsonify({'error': str(e)}), 400

        direction = choose_direction(game_state.board, difficulty)
        return jsonify({
            'game_id': game_id,
            'difficulty': difficulty.value,
            'direction': direction.name if direction else None,
        })

    except Exception as e:
        return jsonify({'error': f'Failed to compute hint: {str(e)}'}), 500


@app.route('/api/game/<game_id>/log', methods=['GET'])
def get_game_log(game_id: str):
    """Retrieve the full game log for analysis."""
    try:
        # Validate game_id exists
        if game_id not in games:
            return jsonify({'error': 'Game not found'}), 404

        game_state = games[game_id]

        log_response = {
            'game_id': game_id,
            'turn': game_state.turn,
            'phase': game_state.phase,
            'log': game_state.log
        }

        return jsonify(log_response)

    except Exception as e:
        return jsonify({'error': f'Failed to retrieve game log: {str(e)}'}), 500


if __name__ == '__main__':
    app.run(debug=True)
