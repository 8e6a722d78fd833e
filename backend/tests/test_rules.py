import chess
import pytest

from duel.services.session import ChessRules


def play(rules, board, *uci_moves):
    verdict = None
    for uci in uci_moves:
        verdict = rules.apply_move(board, {'from': uci[:2], 'to': uci[2:4]})
        assert verdict.accepted, uci
        board = verdict.new_position
    return board, verdict


def test_initial_position_serializes_to_start_fen(rules):
    assert rules.serialize(rules.initial_position()) == chess.STARTING_FEN


def test_legal_move_does_not_touch_input_board(rules):
    board = rules.initial_position()
    verdict = rules.apply_move(board, {'from': 'e2', 'to': 'e4'})
    assert verdict.accepted
    assert board.fen() == chess.STARTING_FEN
    assert verdict.new_position.piece_at(chess.E4) == chess.Piece(chess.PAWN, chess.WHITE)
    assert verdict.move['san'] == 'e4'
    assert verdict.move['uci'] == 'e2e4'
    assert verdict.move['color'] == 'w'
    assert verdict.move['promotion'] is None
    assert not verdict.terminal


@pytest.mark.parametrize('request_payload', [
    None,
    'e2e4',
    {'from': 'e2'},
    {'from': 'e2', 'to': 4},
    {'from': 'z9', 'to': 'e4'},
    {'from': 'e2', 'to': 'e4', 'promotion': 'x'},
])
def test_malformed_requests_are_rejected(rules, request_payload):
    verdict = rules.apply_move(rules.initial_position(), request_payload)
    assert not verdict.accepted
    assert verdict.reason
    assert verdict.new_position is None


def test_illegal_move_is_rejected(rules):
    verdict = rules.apply_move(rules.initial_position(), {'from': 'e2', 'to': 'e5'})
    assert not verdict.accepted
    assert verdict.reason == 'illegal move'


def test_empty_square_is_rejected(rules):
    verdict = rules.apply_move(rules.initial_position(), {'from': 'e4', 'to': 'e5'})
    assert not verdict.accepted


def test_check_is_reported(rules):
    _, verdict = play(rules, rules.initial_position(), 'e2e4', 'f7f5', 'd1h5')
    assert verdict.is_check
    assert not verdict.is_checkmate
    assert not verdict.terminal


def test_fools_mate(rules):
    _, verdict = play(rules, rules.initial_position(), 'f2f3', 'e7e5', 'g2g4', 'd8h4')
    assert verdict.is_checkmate
    assert verdict.is_check
    assert not verdict.is_draw
    assert verdict.termination == 'checkmate'
    assert verdict.move['color'] == 'b'


def test_capture_is_described(rules):
    _, verdict = play(rules, rules.initial_position(), 'e2e4', 'd7d5', 'e4d5')
    assert verdict.move['captured'] == 'p'
    assert verdict.move['san'] == 'exd5'


def test_promotion_defaults_to_queen(rules):
    board = chess.Board('8/P6k/8/8/8/8/8/K7 w - - 0 1')
    verdict = rules.apply_move(board, {'from': 'a7', 'to': 'a8'})
    assert verdict.accepted
    assert verdict.new_position.piece_at(chess.A8) == chess.Piece(chess.QUEEN, chess.WHITE)
    assert verdict.move['promotion'] == 'q'


def test_promotion_piece_can_be_chosen(rules):
    board = chess.Board('8/P6k/8/8/8/8/8/K7 w - - 0 1')
    verdict = rules.apply_move(board, {'from': 'a7', 'to': 'a8', 'promotion': 'N'})
    assert verdict.accepted
    assert verdict.new_position.piece_at(chess.A8) == chess.Piece(chess.KNIGHT, chess.WHITE)


def test_promotion_ignored_for_ordinary_move(rules):
    verdict = rules.apply_move(rules.initial_position(), {'from': 'e2', 'to': 'e4', 'promotion': 'q'})
    assert verdict.accepted
    assert verdict.move['promotion'] is None


def test_under_promotion_with_promotion_piece(rules):
    board = chess.Board('8/P6k/8/8/8/8/8/K7 w - - 0 1')
    verdict = rules.apply_move(board, {'from': 'a7', 'to': 'a8', 'promotionPiece': 'n'})
    assert verdict.accepted
    assert verdict.new_position.piece_at(chess.A8) == chess.Piece(chess.KNIGHT, chess.WHITE)
    assert verdict.move['promotion'] == 'n'


def test_promotion_piece_takes_precedence(rules):
    board = chess.Board('8/P6k/8/8/8/8/8/K7 w - - 0 1')
    verdict = rules.apply_move(board, {'from': 'a7', 'to': 'a8', 'promotionPiece': 'b', 'promotion': 'r'})
    assert verdict.new_position.piece_at(chess.A8) == chess.Piece(chess.BISHOP, chess.WHITE)


def test_unknown_promotion_piece_is_rejected(rules):
    board = chess.Board('8/P6k/8/8/8/8/8/K7 w - - 0 1')
    verdict = rules.apply_move(board, {'from': 'a7', 'to': 'a8', 'promotionPiece': 'k'})
    assert not verdict.accepted


def test_custom_default_promotion():
    rules = ChessRules(default_promotion='r')
    board = chess.Board('8/P6k/8/8/8/8/8/K7 w - - 0 1')
    verdict = rules.apply_move(board, {'from': 'a7', 'to': 'a8'})
    assert verdict.new_position.piece_at(chess.A8) == chess.Piece(chess.ROOK, chess.WHITE)


def test_stalemate_is_a_draw(rules):
    board = chess.Board('7k/4Q3/6K1/8/8/8/8/8 w - - 0 1')
    verdict = rules.apply_move(board, {'from': 'e7', 'to': 'f7'})
    assert verdict.accepted
    assert verdict.is_draw
    assert not verdict.is_checkmate
    assert verdict.termination == 'stalemate'


def test_insufficient_material_is_a_draw(rules):
    board = chess.Board('7k/8/8/8/8/8/1r6/K7 w - - 0 1')
    verdict = rules.apply_move(board, {'from': 'a1', 'to': 'b2'})
    assert verdict.is_draw
    assert verdict.termination == 'insufficient_material'


def test_threefold_repetition_ends_only_when_reached(rules):
    shuffle = ['g1f3', 'g8f6', 'f3g1', 'f6g8']
    board, verdict = play(rules, rules.initial_position(), *shuffle, *shuffle[:3])
    assert not verdict.terminal
    board, verdict = play(rules, board, shuffle[3])
    assert verdict.is_draw
    assert verdict.termination == 'threefold_repetition'


def test_fivefold_repetition_is_a_draw(rules):
    shuffle = ['g1f3', 'g8f6', 'f3g1', 'f6g8']
    _, verdict = play(rules, rules.initial_position(), *(shuffle * 4))
    assert verdict.is_draw
    assert verdict.termination == 'fivefold_repetition'


def test_fifty_move_rule_is_a_draw(rules):
    board = chess.Board('7k/8/8/8/8/8/8/R6K w - - 99 80')
    verdict = rules.apply_move(board, {'from': 'a1', 'to': 'a2'})
    assert verdict.accepted
    assert verdict.is_draw
    assert not verdict.is_checkmate
    assert verdict.termination == 'fifty_moves'


def test_fifty_move_clock_below_limit_continues(rules):
    board = chess.Board('7k/8/8/8/8/8/8/R6K w - - 98 80')
    verdict = rules.apply_move(board, {'from': 'a1', 'to': 'a2'})
    assert not verdict.terminal


def test_seventy_five_move_rule_is_a_draw(rules):
    board = chess.Board('7k/8/8/8/8/8/8/R6K w - - 149 100')
    verdict = rules.apply_move(board, {'from': 'a1', 'to': 'a2'})
    assert verdict.is_draw
    assert verdict.termination == 'seventyfive_moves'


def test_invalid_configuration_fails_fast():
    with pytest.raises(ValueError):
        ChessRules(initial_fen='not a fen')
    with pytest.raises(ValueError):
        ChessRules(default_promotion='k')
