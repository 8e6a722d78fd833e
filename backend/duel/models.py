from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

import chess


class Seat(str, Enum):
    FIRST = 'first'    # plays white
    SECOND = 'second'  # plays black

    @property
    def other(self) -> 'Seat':
        return Seat.SECOND if self is Seat.FIRST else Seat.FIRST


class Status(str, Enum):
    WAITING = 'waiting'
    ACTIVE = 'active'
    OVER = 'over'


class Rejection(str, Enum):
    """Per-request failures. Reported to the sender only, never fatal."""
    SESSION_FULL = 'SessionFull'
    NOT_STARTED = 'NotStarted'
    NOT_YOUR_TURN = 'NotYourTurn'
    UNKNOWN_SEAT = 'UnknownSeat'
    INVALID_MOVE = 'InvalidMove'


@dataclass(frozen=True)
class SeatRecord:
    seat_color: Seat
    connection_id: str


@dataclass
class Session:
    board: chess.Board
    seats: Dict[str, SeatRecord] = field(default_factory=dict)
    turn_color: Seat = Seat.FIRST
    status: Status = Status.WAITING

    @property
    def seat_count(self) -> int:
        return len(self.seats)


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only copy of the session handed out by the store."""
    position: str
    board: chess.Board
    seats: Dict[str, SeatRecord]
    turn_color: Seat
    status: Status

    @property
    def seat_count(self) -> int:
        return len(self.seats)

    def seat_of(self, connection_id: str) -> Optional[Seat]:
        record = self.seats.get(connection_id)
        return record.seat_color if record else None

    def occupied(self):
        return {r.seat_color for r in self.seats.values()}

    def to_dict(self):
        return {
            'boardPosition': self.position,
            'turnColor': self.turn_color.value,
            'seatCount': self.seat_count,
            'status': self.status.value,
            'seats': sorted(s.value for s in self.occupied()),
        }
