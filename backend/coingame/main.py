from flask import Blueprint, current_app, jsonify
from coingame import get_coordinator
from coingame.errors import StorageUnavailable

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the coin game server!'})

@main.route('/api/state', methods=['GET'])
def get_state():
    """
    Returns player positions, the sorted leaderboard and every coin.
    """
    try:
        state = get_coordinator().snapshot()
    except StorageUnavailable as exc:
        current_app.logger.error(f"[state-failed] {exc}")
        return jsonify({'error': 'Game storage is unavailable'}), 503
    return jsonify(state), 200
