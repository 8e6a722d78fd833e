import threading
from typing import List

import chess

from duel.protocol import Disconnect, InboundEvent, Join, MakeMove, NewGame, OutboundEvent
from .lifecycle import ConnectionLifecycle
from .pipeline import MovePipeline
from .rules import ChessRules
from .seats import SeatAssignment
from .store import SessionStore
from .turns import TurnController


class SessionCoordinator:
    """One session and the components that act on it.

    Built per Flask app; socket handlers reach it through
    ``current_app.extensions['duel']``.
    """

    def __init__(self, rules: ChessRules):
        self.store = SessionStore(rules)
        self.seats = SeatAssignment(self.store)
        self.turns = TurnController()
        self.pipeline = MovePipeline(self.store, self.turns)
        self.lifecycle = ConnectionLifecycle(self.store, self.seats)
        # Held by the transport for the whole handle-and-broadcast of one event
        self.lock = threading.RLock()

    @classmethod
    def from_config(cls, config) -> 'SessionCoordinator':
        rules = ChessRules(
            initial_fen=config.get('INITIAL_FEN') or chess.STARTING_FEN,
            default_promotion=config.get('DEFAULT_PROMOTION', 'q'),
        )
        return cls(rules)

    def dispatch(self, connection_id: str, event: InboundEvent) -> List[OutboundEvent]:
        if isinstance(event, Join):
            return self.lifecycle.arrive(connection_id)
        if isinstance(event, MakeMove):
            return self.pipeline.submit(connection_id, event.payload).events()
        if isinstance(event, NewGame):
            return self.lifecycle.reset()
        if isinstance(event, Disconnect):
            return self.lifecycle.depart(connection_id)
        raise TypeError(f"unhandled inbound event: {event!r}")
