"""Session and turn synchronization.

Pure domain logic for the single two-seat chess session: seat assignment,
turn checks, the move pipeline and connection lifecycle. Nothing here knows
about Socket.IO; handlers receive outbound event objects and the transport
layer decides how to deliver them.
"""

from .coordinator import SessionCoordinator
from .rules import ChessRules, MoveVerdict

__all__ = ['SessionCoordinator', 'ChessRules', 'MoveVerdict']
