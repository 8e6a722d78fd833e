import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

from duel.models import Rejection, Seat, SessionSnapshot
from duel.protocol import MoveMade, MoveRejected, OutboundEvent, SessionOver
from .rules import MoveVerdict
from .store import SessionStore
from .turns import TurnController


logger = logging.getLogger(__name__)


class Classification(str, Enum):
    IN_PROGRESS = 'in_progress'
    CHECKMATE = 'checkmate'
    DRAW = 'draw'
    OTHER = 'other'


@dataclass(frozen=True)
class MoveOutcome:
    rejection: Optional[Rejection] = None
    mover: Optional[Seat] = None
    verdict: Optional[MoveVerdict] = None
    snapshot: Optional[SessionSnapshot] = None
    classification: Optional[Classification] = None

    @property
    def accepted(self) -> bool:
        return self.rejection is None

    @property
    def terminal(self) -> bool:
        return self.classification not in (None, Classification.IN_PROGRESS)

    @property
    def result(self) -> Optional[str]:
        """``first``/``second`` for a checkmate, ``draw`` for any other ending."""
        if not self.terminal:
            return None
        if self.classification is Classification.CHECKMATE:
            return self.mover.value
        return 'draw'

    def events(self) -> List[OutboundEvent]:
        if not self.accepted:
            return [MoveRejected(self.rejection)]
        v = self.verdict
        events: List[OutboundEvent] = [
            MoveMade(v.move, self.snapshot, in_check=v.is_check,
                     is_checkmate=v.is_checkmate, is_draw=v.is_draw),
        ]
        if self.terminal:
            events.append(SessionOver(self.result, self.classification.value, v.termination))
        return events


def classify(verdict: MoveVerdict) -> Classification:
    if not verdict.terminal:
        return Classification.IN_PROGRESS
    if verdict.is_checkmate:
        return Classification.CHECKMATE
    if verdict.is_draw:
        return Classification.DRAW
    return Classification.OTHER


class MovePipeline:
    def __init__(self, store: SessionStore, turns: TurnController):
        self.store = store
        self.turns = turns

    def submit(self, connection_id: str, move_request: Any) -> MoveOutcome:
        """Authorize, validate and commit one move.

        State changes only after the rules engine accepts the move, so a
        rejected request never consumes a turn.
        """
        snapshot = self.store.get()
        rejection = self.turns.authorize(connection_id, snapshot)
        if rejection is not None:
            logger.info("[move-rejected] conn=%s reason=%s", connection_id, rejection.value)
            return MoveOutcome(rejection=rejection)

        mover = snapshot.seat_of(connection_id)
        verdict = self.store.rules.apply_move(snapshot.board, move_request)
        if not verdict.accepted:
            logger.info("[move-rejected] conn=%s reason=%s detail=%s",
                        connection_id, Rejection.INVALID_MOVE.value, verdict.reason)
            return MoveOutcome(rejection=Rejection.INVALID_MOVE, mover=mover, verdict=verdict)

        self.store.apply_move(verdict)
        outcome = MoveOutcome(
            mover=mover,
            verdict=verdict,
            snapshot=self.store.get(),
            classification=classify(verdict),
        )
        logger.info("[move] conn=%s seat=%s san=%s outcome=%s",
                    connection_id, mover.value, verdict.move.get('san'), outcome.classification.value)
        if outcome.terminal:
            logger.info("[session-over] result=%s reason=%s detail=%s",
                        outcome.result, outcome.classification.value, verdict.termination)
        return outcome
