"""Chess rules adapter.

Everything chess-specific lives here: square parsing, promotion handling,
legality and terminal detection. Callers only see a :class:`MoveVerdict`.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import chess


PROMOTION_PIECES = {
    'q': chess.QUEEN,
    'r': chess.ROOK,
    'b': chess.BISHOP,
    'n': chess.KNIGHT,
}


@dataclass(frozen=True)
class MoveVerdict:
    accepted: bool
    reason: Optional[str] = None
    new_position: Optional[chess.Board] = None
    move: Dict[str, Any] = field(default_factory=dict)
    is_check: bool = False
    is_checkmate: bool = False
    is_draw: bool = False
    termination: Optional[str] = None

    @property
    def terminal(self) -> bool:
        return self.termination is not None

    @classmethod
    def rejected(cls, reason: str) -> 'MoveVerdict':
        return cls(accepted=False, reason=reason)


class ChessRules:
    def __init__(self, initial_fen: str = chess.STARTING_FEN, default_promotion: str = 'q'):
        # The first seat always moves first
        if chess.Board(initial_fen).turn != chess.WHITE:
            raise ValueError("initial position must have white to move")
        if default_promotion.lower() not in PROMOTION_PIECES:
            raise ValueError(f"unsupported default promotion piece: {default_promotion!r}")
        self.initial_fen = initial_fen
        self.default_promotion = PROMOTION_PIECES[default_promotion.lower()]

    def initial_position(self) -> chess.Board:
        return chess.Board(self.initial_fen)

    def serialize(self, position: chess.Board) -> str:
        return position.fen()

    def apply_move(self, position: chess.Board, move_request: Any) -> MoveVerdict:
        """Try ``move_request`` against ``position`` without touching it.

        ``move_request`` is a mapping with ``from``/``to`` square names and an
        optional ``promotionPiece`` letter (``promotion`` is accepted too).
        Malformed requests are rejected the same way as illegal moves.
        """
        move = self._parse(position, move_request)
        if isinstance(move, str):
            return MoveVerdict.rejected(move)
        if not position.is_legal(move):
            return MoveVerdict.rejected('illegal move')

        description = self._describe(position, move)
        board = position.copy()
        board.push(move)

        termination, is_draw = self._termination(board)
        return MoveVerdict(
            accepted=True,
            new_position=board,
            move=description,
            is_check=board.is_check(),
            is_checkmate=board.is_checkmate(),
            is_draw=is_draw,
            termination=termination,
        )

    def _parse(self, position: chess.Board, move_request: Any):
        # Returns a chess.Move, or a rejection reason string
        if not isinstance(move_request, Mapping):
            return 'move must be an object'
        src, dst = move_request.get('from'), move_request.get('to')
        if not isinstance(src, str) or not isinstance(dst, str):
            return 'from and to are required'
        try:
            from_square = chess.parse_square(src.strip().lower())
            to_square = chess.parse_square(dst.strip().lower())
        except ValueError:
            return 'unknown square'

        requested = move_request.get('promotionPiece')
        if requested in (None, ''):
            requested = move_request.get('promotion')
        if requested in (None, ''):
            promotion = self.default_promotion
        elif isinstance(requested, str) and requested.lower() in PROMOTION_PIECES:
            promotion = PROMOTION_PIECES[requested.lower()]
        else:
            return 'unknown promotion piece'

        piece = position.piece_at(from_square)
        promotes = (
            piece is not None
            and piece.piece_type == chess.PAWN
            and chess.square_rank(to_square) in (0, 7)
        )
        return chess.Move(from_square, to_square, promotion=promotion if promotes else None)

    @staticmethod
    def _termination(board: chess.Board):
        # Repetition and fifty-move draws count once reached, not when claimable
        outcome = board.outcome()
        if outcome is not None:
            return outcome.termination.name.lower(), outcome.winner is None
        if board.is_repetition(3):
            return 'threefold_repetition', True
        if board.is_fifty_moves():
            return 'fifty_moves', True
        return None, False

    @staticmethod
    def _describe(position: chess.Board, move: chess.Move) -> Dict[str, Any]:
        piece = position.piece_at(move.from_square)
        if position.is_en_passant(move):
            captured = chess.PAWN
        else:
            target = position.piece_at(move.to_square)
            captured = target.piece_type if target else None
        return {
            'from': chess.square_name(move.from_square),
            'to': chess.square_name(move.to_square),
            'san': position.san(move),
            'uci': move.uci(),
            'color': 'w' if position.turn == chess.WHITE else 'b',
            'piece': chess.piece_symbol(piece.piece_type),
            'promotion': chess.piece_symbol(move.promotion) if move.promotion else None,
            'captured': chess.piece_symbol(captured) if captured else None,
        }
