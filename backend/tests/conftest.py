import os
import sys
import pytest

# Ensure the backend root (containing the `duel` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

import chess

from duel import create_app, socketio
from duel.services.session import ChessRules, SessionCoordinator


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ORIGINS = ['http://localhost:3000']
    SOCKETIO_NAMESPACE = '/'
    SESSION_ROOM = 'game-room'
    INITIAL_FEN = chess.STARTING_FEN
    DEFAULT_PROMOTION = 'q'
    SOCKETIO_ASYNC_MODE = 'threading'
    LOG_LEVEL = 'DEBUG'
    PORT = 5000


@pytest.fixture()
def initial_fen():
    """Starting position; override with ``pytest.mark.parametrize('initial_fen', ...)``."""
    return chess.STARTING_FEN


@pytest.fixture()
def flask_app(initial_fen):
    config_class = type('PositionConfig', (TestConfig,), {'INITIAL_FEN': initial_fen})
    application = create_app(config_class)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def connect(flask_app):
    """Factory for Socket.IO test clients; all are disconnected at teardown."""
    opened = []

    def _connect():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        opened.append(test_client)
        return test_client

    yield _connect
    for test_client in opened:
        if test_client.is_connected():
            test_client.disconnect()


@pytest.fixture()
def coordinator():
    return SessionCoordinator(ChessRules())


@pytest.fixture()
def rules():
    return ChessRules()
