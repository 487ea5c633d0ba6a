from flask_socketio import join_room, leave_room, emit
from arenahub import socketio


def room_for(game: str) -> str:
    return f"leaderboard:{game}"


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_join_leaderboard(data):
    game = (data or {}).get('game')
    if not game:
        emit('error', {'message': 'game is required'})
        return
    room = room_for(game)
    join_room(room)
    emit('joined', {'room': room})


def handle_leave_leaderboard(data):
    game = (data or {}).get('game')
    if not game:
        emit('error', {'message': 'game is required'})
        return
    room = room_for(game)
    leave_room(room)
    emit('left', {'room': room})


def handle_ping(data):
    emit('pong', data or {})


def notify_leaderboard_update(game: str, reason: str) -> None:
    socketio.emit('leaderboard_update', {'game': game, 'reason': reason}, to=room_for(game), namespace='/ws')


def register_socketio_handlers():
    socketio.on_event('connect', handle_connect, namespace='/ws')
    socketio.on_event('join_leaderboard', handle_join_leaderboard, namespace='/ws')
    socketio.on_event('leave_leaderboard', handle_leave_leaderboard, namespace='/ws')
    socketio.on_event('ping', handle_ping, namespace='/ws')
