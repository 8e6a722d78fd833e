"""Socket.IO event vocabulary.

Inbound events are parsed into a closed set of request types; outbound
events are small classes that know their wire name, who receives them and
what they carry. The transport layer only ever deals in these types.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from duel.models import Rejection, Seat, SessionSnapshot, Status


class Audience(str, Enum):
    SENDER = 'sender'
    ROOM = 'room'


# ---- Inbound ----

@dataclass(frozen=True)
class Join:
    pass


@dataclass(frozen=True)
class MakeMove:
    payload: Any = None


@dataclass(frozen=True)
class NewGame:
    pass


@dataclass(frozen=True)
class Disconnect:
    pass


InboundEvent = Union[Join, MakeMove, NewGame, Disconnect]

INBOUND_NAMES = {
    'join': Join,
    'move': MakeMove,
    'new-game': NewGame,
    'disconnect': Disconnect,
}


def parse_inbound(name: str, payload: Any = None) -> InboundEvent:
    if name not in INBOUND_NAMES:
        raise ValueError(f"unknown inbound event: {name!r}")
    if name == 'move':
        return MakeMove(payload)
    return INBOUND_NAMES[name]()


# ---- Outbound ----

class OutboundEvent:
    name: str = ''
    audience: Audience = Audience.ROOM

    def args(self) -> List[Any]:
        """Positional arguments passed to ``emit`` after the event name."""
        return []

    def __repr__(self):
        return f"<{type(self).__name__} {self.name} -> {self.audience.value} {self.args()!r}>"


class SessionFull(OutboundEvent):
    name = 'session-full'
    audience = Audience.SENDER


class SeatAssigned(OutboundEvent):
    name = 'seat-assigned'
    audience = Audience.SENDER

    def __init__(self, seat: Seat, snapshot: SessionSnapshot):
        self.seat = seat
        self.snapshot = snapshot

    def args(self):
        return [{
            'seatColor': self.seat.value,
            'boardPosition': self.snapshot.position,
            'turnColor': self.snapshot.turn_color.value,
            'seatCount': self.snapshot.seat_count,
            'status': self.snapshot.status.value,
        }]


class SessionStart(OutboundEvent):
    name = 'session-start'

    def __init__(self, snapshot: SessionSnapshot):
        self.snapshot = snapshot

    def args(self):
        return [{
            'boardPosition': self.snapshot.position,
            'turnColor': self.snapshot.turn_color.value,
        }]


class _CountEvent(OutboundEvent):
    def __init__(self, seat_count: int, status: Status):
        self.seat_count = seat_count
        self.status = status

    def args(self):
        return [{'seatCount': self.seat_count, 'status': self.status.value}]


class SeatCountUpdate(_CountEvent):
    name = 'seat-count-update'


class ParticipantDeparted(_CountEvent):
    name = 'participant-departed'


class MoveMade(OutboundEvent):
    name = 'move-made'

    def __init__(self, move: Dict[str, Any], snapshot: SessionSnapshot,
                 in_check: bool, is_checkmate: bool, is_draw: bool):
        self.move = move
        self.snapshot = snapshot
        self.in_check = in_check
        self.is_checkmate = is_checkmate
        self.is_draw = is_draw

    def args(self):
        return [{
            'move': self.move,
            'boardPosition': self.snapshot.position,
            'turnColor': self.snapshot.turn_color.value,
            'terminal': self.snapshot.status is Status.OVER,
            'inCheck': self.in_check,
            'isCheckmate': self.is_checkmate,
            'isDraw': self.is_draw,
        }]


class MoveRejected(OutboundEvent):
    name = 'move-rejected'
    audience = Audience.SENDER

    def __init__(self, reason: Rejection):
        self.reason = reason

    def args(self):
        return [self.reason.value]


class SessionOver(OutboundEvent):
    name = 'session-over'

    def __init__(self, result: str, reason: str, detail: Optional[str] = None):
        # result: first | second | draw; reason: checkmate | draw | other
        self.result = result
        self.reason = reason
        self.detail = detail

    def args(self):
        return [{'result': self.result, 'reason': self.reason, 'detail': self.detail}]


class SessionReset(OutboundEvent):
    name = 'session-reset'
