from flask import Blueprint, jsonify, request, current_app
from arenahub.errors import (
    InvalidSignatureFormat,
    LeaderboardError,
    StoreUnavailable,
    TimestampExpired,
    ValidationError,
)
from arenahub.store import ProfileStats
from arenahub.services.leaderboard.service import describe_rejection
from arenahub.socketio_events import notify_leaderboard_update


leaderboard = Blueprint('leaderboard', __name__)


def _service():
    return current_app.extensions['leaderboard']


@leaderboard.errorhandler(LeaderboardError)
def handle_leaderboard_error(exc: LeaderboardError):
    if isinstance(exc, StoreUnavailable):
        current_app.logger.error(f"[store-error] op={exc.operation} details={exc.details}")
    else:
        extra = ''
        if isinstance(exc, TimestampExpired):
            extra = f" skew_ms={exc.skew_ms}"
        elif isinstance(exc, InvalidSignatureFormat):
            extra = f" details={exc.details}"
        current_app.logger.info(
            f"[rejected] path={request.path} status={exc.status_code} reason={describe_rejection(exc)}{extra}"
        )
    return jsonify(exc.to_dict()), exc.status_code


@leaderboard.route('/submit-score', methods=['POST'])
def submit_score():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    result = _service().submit(data)
    notify_leaderboard_update(result.record.game, 'submission')
    return jsonify(result.to_dict())


@leaderboard.route('/leaderboard', methods=['GET'])
@leaderboard.route('/leaderboard/<string:game>', methods=['GET'])
def get_leaderboard(game=None):
    service = _service()
    game = service.normalize_game(game or request.args.get('game'))
    try:
        rows = service.leaderboard(game, request.args.get('limit'))
    except StoreUnavailable as exc:
        # Reads degrade to an empty board rather than failing
        current_app.logger.warning(f"[store-degraded] op={exc.operation} game={game}")
        return jsonify({'success': True, 'game': game, 'leaderboard': [], 'degraded': True})
    return jsonify({'success': True, 'game': game, 'leaderboard': rows})


@leaderboard.route('/profile/<string:address>', methods=['GET'])
def get_profile(address):
    address = address.strip().lower()
    if not address:
        raise ValidationError('Invalid address')
    try:
        profile = _service().profile(address)
    except StoreUnavailable as exc:
        current_app.logger.warning(f"[store-degraded] op={exc.operation} address={address}")
        return jsonify({'success': True, 'profile': ProfileStats(address=address).to_dict(), 'degraded': True})
    return jsonify({'success': True, 'profile': profile.to_dict()})


@leaderboard.route('/admin/reset', methods=['POST'])
def admin_reset():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    service = _service()
    game = service.normalize_game(data.get('game') or request.args.get('game'))
    password = data.get('password') or request.headers.get('X-Admin-Password')
    reset_at = service.reset(game, password)
    notify_leaderboard_update(game, 'reset')
    return jsonify({'success': True, 'game': game, 'resetAt': reset_at})


@leaderboard.route('/admin/last-reset', methods=['GET'])
def last_reset():
    service = _service()
    game = service.normalize_game(request.args.get('game'))
    reset_at, formatted = service.last_reset_info(game)
    return jsonify({'success': True, 'game': game, 'resetAt': reset_at, 'formatted': formatted})
