import logging
from typing import List

from duel.models import Rejection, Status
from duel.protocol import (
    OutboundEvent,
    ParticipantDeparted,
    SeatAssigned,
    SeatCountUpdate,
    SessionFull,
    SessionReset,
    SessionStart,
)
from .seats import SeatAssignment
from .store import SessionStore


logger = logging.getLogger(__name__)


class ConnectionLifecycle:
    """Arrival, departure and reset handling for connections."""

    def __init__(self, store: SessionStore, seats: SeatAssignment):
        self.store = store
        self.seats = seats

    def arrive(self, connection_id: str) -> List[OutboundEvent]:
        rejoining = self.store.get().seat_of(connection_id) is not None
        seat = self.seats.assign(connection_id)
        if seat is Rejection.SESSION_FULL:
            return [SessionFull()]

        events: List[OutboundEvent] = []
        snapshot = self.store.get()
        if rejoining:
            # Nothing changed for the room; only the sender is re-told its seat
            return [SeatAssigned(seat, snapshot)]
        starting = snapshot.seat_count == 2 and snapshot.status is Status.WAITING
        if starting:
            self.store.set_status(Status.ACTIVE)
            snapshot = self.store.get()
            logger.info("[session-start] turn=%s", snapshot.turn_color.value)

        events.append(SeatAssigned(seat, snapshot))
        if starting:
            events.append(SessionStart(snapshot))
        events.append(SeatCountUpdate(snapshot.seat_count, snapshot.status))
        return events

    def depart(self, connection_id: str) -> List[OutboundEvent]:
        seat = self.seats.release(connection_id)
        if seat is None:
            return []

        snapshot = self.store.get()
        if snapshot.seat_count == 0:
            self.store.reset()
            return []

        # The remaining participant keeps their color; a finished game stays finished
        if snapshot.status is Status.ACTIVE:
            self.store.set_status(Status.WAITING)
            snapshot = self.store.get()
        logger.info("[depart] conn=%s seat=%s remaining=%s status=%s",
                    connection_id, seat.value, snapshot.seat_count, snapshot.status.value)
        return [ParticipantDeparted(snapshot.seat_count, snapshot.status)]

    def reset(self) -> List[OutboundEvent]:
        self.store.reset()
        return [SessionReset()]
