import os

import chess

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Comma-separated list of origins allowed to open the socket
    CORS_ORIGINS = [o.strip() for o in os.environ.get('CORS_ORIGINS', 'http://localhost:3000').split(',') if o.strip()]
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    # Every seated connection is placed in this room for broadcasts
    SESSION_ROOM = os.environ.get('SESSION_ROOM', 'game-room')
    # Position each fresh session starts from
    INITIAL_FEN = os.environ.get('INITIAL_FEN') or chess.STARTING_FEN
    # Piece used when a pawn reaches the last rank without an explicit choice
    DEFAULT_PROMOTION = os.environ.get('DEFAULT_PROMOTION', 'q')
    # Handlers serialize on a threading lock, so the server runs in threading mode
    SOCKETIO_ASYNC_MODE = os.environ.get('SOCKETIO_ASYNC_MODE', 'threading')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    PORT = int(os.environ.get('PORT', '5000'))
