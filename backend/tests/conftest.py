import os
import sys
import time
import pytest

# Ensure the backend root (containing the `arenahub` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from eth_account import Account
from eth_account.messages import encode_defunct

from arenahub import create_app, db, socketio
from arenahub.services.leaderboard.signature import build_challenge


ADMIN_PASSWORD = 'letmein'
PLAYER_KEY = '0x' + '11' * 32
OTHER_KEY = '0x' + '22' * 32


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LEADERBOARD_STORE = 'sql'
    DEFAULT_GAME = 'roninoid'
    REPLAY_WINDOW_MS = 300000
    MAX_SCORE = 10000000
    LEADERBOARD_MAX_LIMIT = 100
    DISPLAY_NAME_MAX_LENGTH = 64
    ADMIN_PASSWORD = ADMIN_PASSWORD
    ADMIN_PASSWORD_HASH = None
    CORS_ORIGINS = ['http://localhost:5173']


class MemoryTestConfig(TestConfig):
    LEADERBOARD_STORE = 'memory'


def now_ms():
    return int(time.time() * 1000)


class Wallet:
    """Test signer producing the same personal-sign signatures a browser wallet would."""

    def __init__(self, key):
        self.account = Account.from_key(key)
        self.address = self.account.address

    def sign(self, score, timestamp):
        signed = Account.sign_message(encode_defunct(text=build_challenge(score, timestamp)), private_key=self.account.key)
        return '0x' + bytes(signed.signature).hex()

    def payload(self, score, timestamp=None, game='roninoid', **extra):
        timestamp = now_ms() if timestamp is None else timestamp
        body = {
            'address': self.address,
            'score': score,
            'timestamp': timestamp,
            'signature': self.sign(score, timestamp),
            'game': game,
        }
        body.update(extra)
        return body


@pytest.fixture(params=[TestConfig, MemoryTestConfig], ids=['sql', 'memory'])
def flask_app(request):
    application = create_app(request.param)
    with application.app_context():
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def sql_app():
    application = create_app(TestConfig)
    with application.app_context():
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def service(flask_app):
    return flask_app.extensions['leaderboard']


@pytest.fixture()
def wallet():
    return Wallet(PLAYER_KEY)


@pytest.fixture()
def other_wallet():
    return Wallet(OTHER_KEY)


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass
