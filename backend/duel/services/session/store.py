import logging
from typing import Optional

from duel.models import Seat, SeatRecord, Session, SessionSnapshot, Status
from .rules import ChessRules, MoveVerdict


logger = logging.getLogger(__name__)


class SessionStore:
    """Sole owner of the session record.

    Other components read through :meth:`get` and mutate only through the
    methods below, so what gets broadcast is always what is stored.
    """

    def __init__(self, rules: ChessRules):
        self.rules = rules
        self._session = Session(board=rules.initial_position())

    def get(self) -> SessionSnapshot:
        s = self._session
        return SessionSnapshot(
            position=self.rules.serialize(s.board),
            board=s.board.copy(),
            seats=dict(s.seats),
            turn_color=s.turn_color,
            status=s.status,
        )

    def reset(self) -> None:
        self._session = Session(board=self.rules.initial_position())
        logger.info("[reset] fresh session position=%s", self.rules.serialize(self._session.board))

    def apply_move(self, verdict: MoveVerdict) -> None:
        s = self._session
        if not verdict.accepted or verdict.new_position is None:
            raise RuntimeError('cannot commit a rejected move')
        if s.status is not Status.ACTIVE:
            raise RuntimeError(f'cannot commit a move while session is {s.status.value}')
        # Board, turn and status change together; nothing is visible in between
        s.board = verdict.new_position
        s.turn_color = s.turn_color.other
        s.status = Status.OVER if verdict.terminal else Status.ACTIVE

    def seat(self, connection_id: str, color: Seat) -> None:
        s = self._session
        taken = {r.seat_color for r in s.seats.values()}
        if color in taken or s.seat_count >= 2:
            raise RuntimeError(f'seat {color.value} is not available')
        s.seats[connection_id] = SeatRecord(seat_color=color, connection_id=connection_id)

    def unseat(self, connection_id: str) -> Optional[Seat]:
        record = self._session.seats.pop(connection_id, None)
        return record.seat_color if record else None

    def set_status(self, status: Status) -> None:
        if status is Status.ACTIVE and self._session.seat_count != 2:
            raise RuntimeError('a session needs both seats filled to be active')
        self._session.status = status
