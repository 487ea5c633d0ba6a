from flask import Blueprint, jsonify, current_app
from arenahub.store import StoreHealth

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'status': 'ArenaHub Backend is running'})


@main.route('/health')
def health():
    service = current_app.extensions['leaderboard']
    state = service.store.health()
    if state is not StoreHealth.OK:
        current_app.logger.warning("[health] store unavailable")
        return jsonify({'success': False, 'store': state.value}), 503
    return jsonify({'success': True, 'store': state.value})
