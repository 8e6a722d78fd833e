from flask import current_app, request
from flask_socketio import emit, join_room
from duel import socketio
from duel.protocol import Audience, SeatAssigned, parse_inbound
from typing import Any


def handle_connect(auth=None):
    current_app.logger.info(f"[connect] conn={_get_sid()}")


def handle_disconnect(reason=None):
    current_app.logger.info(f"[disconnect] conn={_get_sid()} reason={reason}")
    _handle('disconnect')


def handle_join(data=None):
    _handle('join')


def handle_move(data=None):
    _handle('move', data)


def handle_new_game(data=None):
    _handle('new-game')


def handle_error(exc):
    # Failures stay per-request: log and tell the sender only
    current_app.logger.exception(f"[error] conn={_get_sid()} event handler failed: {exc}")
    emit('error', {'message': 'internal error'}, to=_get_sid())


# ---- Dispatch helpers ----

def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore

def _handle(name: str, payload: Any = None) -> None:
    coordinator = current_app.extensions['duel']
    sid = _get_sid()
    event = parse_inbound(name, payload)
    # Handle and broadcast one event fully before the next one starts
    with coordinator.lock:
        outbound = coordinator.dispatch(sid, event)
        _deliver(sid, outbound)

def _deliver(sid: str, outbound) -> None:
    namespace = current_app.config.get('SOCKETIO_NAMESPACE', '/')
    room = current_app.config.get('SESSION_ROOM', 'game-room')
    for event in outbound:
        if isinstance(event, SeatAssigned):
            # Must be in the room before the room-wide events that follow
            join_room(room, sid=sid, namespace=namespace)
        if event.audience is Audience.SENDER:
            socketio.emit(event.name, *event.args(), to=sid, namespace=namespace)
        else:
            socketio.emit(event.name, *event.args(), to=room, namespace=namespace)
        current_app.logger.debug(f"[emit] {event!r}")


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on the configured namespace."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('join', handle_join, namespace=namespace)
    socketio.on_event('move', handle_move, namespace=namespace)
    socketio.on_event('new-game', handle_new_game, namespace=namespace)
    socketio.on_error_default(handle_error)
