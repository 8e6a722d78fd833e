from typing import Optional

from duel.models import Rejection, SessionSnapshot, Status


class TurnController:
    def authorize(self, connection_id: str, snapshot: SessionSnapshot) -> Optional[Rejection]:
        """Return ``None`` when the connection may move now, else the reason it may not."""
        if snapshot.status is not Status.ACTIVE:
            return Rejection.NOT_STARTED
        seat = snapshot.seat_of(connection_id)
        if seat is None:
            return Rejection.UNKNOWN_SEAT
        if seat is not snapshot.turn_color:
            return Rejection.NOT_YOUR_TURN
        return None
