import os


def _origins(raw):
    return [o.strip() for o in raw.split(',') if o.strip()]


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///arenahub.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Ledger backend: 'sql' (SQLAlchemy tables) or 'memory' (process-local)
    LEADERBOARD_STORE = os.environ.get('LEADERBOARD_STORE', 'sql')
    DEFAULT_GAME = os.environ.get('DEFAULT_GAME', 'roninoid')
    # Signed submissions older or newer than this are rejected (ms)
    REPLAY_WINDOW_MS = int(os.environ.get('REPLAY_WINDOW_MS', '300000'))
    MAX_SCORE = int(os.environ.get('MAX_SCORE', '10000000'))
    LEADERBOARD_MAX_LIMIT = int(os.environ.get('LEADERBOARD_MAX_LIMIT', '100'))
    DISPLAY_NAME_MAX_LENGTH = int(os.environ.get('DISPLAY_NAME_MAX_LENGTH', '64'))
    # Admin secret: plain value or a bcrypt hash (see `flask hash-admin-password`)
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD')
    ADMIN_PASSWORD_HASH = os.environ.get('ADMIN_PASSWORD_HASH')
    CORS_ORIGINS = _origins(os.environ.get(
        'CORS_ORIGINS',
        'http://localhost:5173,http://127.0.0.1:5173,http://localhost:5174,http://127.0.0.1:5174',
    ))
