from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(
        flask_app,
        cors_allowed_origins=allowed_origins,
        async_mode=flask_app.config.get('SOCKETIO_ASYNC_MODE', 'threading'),
    )

    # One session per app; handlers look it up instead of sharing a module global
    from duel.services.session import SessionCoordinator
    flask_app.extensions['duel'] = SessionCoordinator.from_config(flask_app.config)

    from duel.routes import main
    flask_app.register_blueprint(main)

    # Register Socket.IO event handlers
    # Importing here ensures the handlers bind to the initialized socketio instance
    from duel.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=flask_app.config.get('SOCKETIO_NAMESPACE', '/'))

    return flask_app
