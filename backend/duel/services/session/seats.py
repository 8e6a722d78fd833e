import logging
from typing import Optional, Union

from duel.models import Rejection, Seat
from .store import SessionStore


logger = logging.getLogger(__name__)


class SeatAssignment:
    def __init__(self, store: SessionStore):
        self.store = store

    def assign(self, connection_id: str) -> Union[Seat, Rejection]:
        """Seat a connection, or reject it when both seats are taken.

        An empty session hands out ``first``; after that the free color is
        used, so a vacated seat is refilled with the color it had. Once both
        seats are taken every join is rejected, including one from a
        connection that already holds a seat.
        """
        snapshot = self.store.get()
        if snapshot.seat_count >= 2:
            logger.info("[session-full] conn=%s", connection_id)
            return Rejection.SESSION_FULL
        current = snapshot.seat_of(connection_id)
        if current is not None:
            return current

        occupied = snapshot.occupied()
        color = Seat.FIRST if Seat.FIRST not in occupied else Seat.SECOND
        self.store.seat(connection_id, color)
        logger.info("[seat] conn=%s color=%s", connection_id, color.value)
        return color

    def release(self, connection_id: str) -> Optional[Seat]:
        color = self.store.unseat(connection_id)
        if color is not None:
            logger.info("[seat-release] conn=%s color=%s", connection_id, color.value)
        return color
