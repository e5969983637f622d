"""
测试RuleEngine类的功能

测试走法形状、攻击判定、合法性验证、走法生成和终局检测等功能。
"""

import pytest

from chess_arena.src.chess_engine.rules_engine import ChessBoard, RuleEngine, WHITE, BLACK
from chess_arena.src.chess_engine.utils import KingNotFoundError


class TestShapeRules:
    """各棋子走法形状的测试"""

    def setup_method(self):
        """每个测试方法前的设置"""
        self.rule_engine = RuleEngine()

    def test_knight_shape(self):
        """测试马的L形走法"""
        board = ChessBoard("4k3/8/8/8/3N4/8/8/4K3")

        assert self.rule_engine.is_shape_legal(board, (4, 3), (2, 2))
        assert self.rule_engine.is_shape_legal(board, (4, 3), (5, 5))
        assert not self.rule_engine.is_shape_legal(board, (4, 3), (3, 3))
        assert not self.rule_engine.is_shape_legal(board, (4, 3), (2, 6))
        assert len(self.rule_engine.legal_destinations(board, (4, 3))) == 8

    def test_knight_jumps_over_pieces(self):
        """测试马可以越过棋子"""
        board = ChessBoard()
        assert self.rule_engine.is_shape_legal(board, (7, 6), (5, 5))
        assert self.rule_engine.is_shape_legal(board, (0, 1), (2, 2))

    def test_rook_shape_and_blocking(self):
        """测试车的直线走法与路径阻挡"""
        board = ChessBoard("4k3/8/8/8/R2p4/8/8/4K3")

        assert self.rule_engine.is_shape_legal(board, (4, 0), (4, 2))
        assert self.rule_engine.is_shape_legal(board, (4, 0), (4, 3))  # 吃子
        assert not self.rule_engine.is_shape_legal(board, (4, 0), (4, 4))  # 被阻挡
        assert self.rule_engine.is_shape_legal(board, (4, 0), (0, 0))
        assert not self.rule_engine.is_shape_legal(board, (4, 0), (3, 1))  # 斜走

    def test_bishop_shape_and_blocking(self):
        """测试象的斜线走法与路径阻挡"""
        board = ChessBoard("4k3/8/8/8/8/2p5/8/B3K3")

        assert self.rule_engine.is_shape_legal(board, (7, 0), (6, 1))
        assert self.rule_engine.is_shape_legal(board, (7, 0), (5, 2))  # 吃子
        assert not self.rule_engine.is_shape_legal(board, (7, 0), (4, 3))  # 被阻挡
        assert not self.rule_engine.is_shape_legal(board, (7, 0), (6, 0))  # 直走

    def test_queen_shape(self):
        """测试后的直线和斜线走法"""
        board = ChessBoard("4k3/8/8/8/3Q4/8/8/4K3")

        assert self.rule_engine.is_shape_legal(board, (4, 3), (4, 7))
        assert self.rule_engine.is_shape_legal(board, (4, 3), (0, 3))
        assert self.rule_engine.is_shape_legal(board, (4, 3), (1, 6))
        assert not self.rule_engine.is_shape_legal(board, (4, 3), (2, 4))

    def test_king_shape(self):
        """测试王只能走一格"""
        board = ChessBoard("4k3/8/8/8/8/8/8/4K3")

        assert self.rule_engine.is_shape_legal(board, (7, 4), (6, 3))
        assert self.rule_engine.is_shape_legal(board, (7, 4), (7, 5))
        # 不支持王车易位
        assert not self.rule_engine.is_shape_legal(board, (7, 4), (7, 6))

    def test_pawn_forward_moves(self):
        """测试兵的前进走法"""
        board = ChessBoard()

        # 白兵向第0行方向走
        assert self.rule_engine.is_shape_legal(board, (6, 4), (5, 4))
        assert self.rule_engine.is_shape_legal(board, (6, 4), (4, 4))
        assert not self.rule_engine.is_shape_legal(board, (6, 4), (7, 4))
        assert not self.rule_engine.is_shape_legal(board, (6, 4), (3, 4))

        # 黑兵向第7行方向走
        assert self.rule_engine.is_shape_legal(board, (1, 3), (2, 3))
        assert self.rule_engine.is_shape_legal(board, (1, 3), (3, 3))
        assert not self.rule_engine.is_shape_legal(board, (1, 3), (0, 3))

    def test_pawn_double_step_only_from_start(self):
        """测试兵只能在起始行走两步"""
        board = ChessBoard("4k3/8/8/8/8/4P3/8/4K3")
        assert self.rule_engine.is_shape_legal(board, (5, 4), (4, 4))
        assert not self.rule_engine.is_shape_legal(board, (5, 4), (3, 4))

    def test_pawn_blocked(self):
        """测试兵不能向前吃子，两步时中间格必须为空"""
        board = ChessBoard("4k3/8/8/8/8/4p3/4P3/4K3")

        assert not self.rule_engine.is_shape_legal(board, (6, 4), (5, 4))
        assert not self.rule_engine.is_shape_legal(board, (6, 4), (4, 4))

    def test_pawn_diagonal_capture(self):
        """测试兵斜走只能吃子"""
        board = ChessBoard("4k3/8/8/8/8/3p4/4P3/4K3")

        assert self.rule_engine.is_shape_legal(board, (6, 4), (5, 3))
        assert not self.rule_engine.is_shape_legal(board, (6, 4), (5, 5))
        # 黑兵同样只能斜向前吃子
        assert self.rule_engine.is_shape_legal(board, (5, 3), (6, 4))

    def test_cannot_capture_own_piece(self):
        """测试不能吃己方棋子"""
        board = ChessBoard()
        assert not self.rule_engine.is_shape_legal(board, (7, 0), (6, 0))
        assert not self.rule_engine.is_shape_legal(board, (7, 3), (6, 4))

    def test_empty_square_and_null_move(self):
        """测试空格和原地不动"""
        board = ChessBoard()
        assert not self.rule_engine.is_shape_legal(board, (4, 4), (3, 4))
        assert not self.rule_engine.is_shape_legal(board, (6, 4), (6, 4))
        assert not self.rule_engine.is_shape_legal(board, (6, 4), (8, 4))


class TestAttackDetection:
    """攻击判定的测试"""

    def setup_method(self):
        self.rule_engine = RuleEngine()

    def test_pawn_attacks_follow_direction(self):
        """测试兵按前进方向斜向攻击"""
        board = ChessBoard("4k3/4p3/8/8/8/8/4P3/K7")

        # 白兵 e2 攻击 d3 和 f3
        assert self.rule_engine.is_attacked(board, (5, 3), WHITE)
        assert self.rule_engine.is_attacked(board, (5, 5), WHITE)
        assert not self.rule_engine.is_attacked(board, (7, 3), WHITE)
        assert not self.rule_engine.is_attacked(board, (5, 4), WHITE)

        # 黑兵 e7 攻击 d6 和 f6
        assert self.rule_engine.is_attacked(board, (2, 3), BLACK)
        assert self.rule_engine.is_attacked(board, (2, 5), BLACK)
        assert not self.rule_engine.is_attacked(board, (2, 4), BLACK)

    def test_sliding_attacks_stop_at_first_piece(self):
        """测试直线和斜线攻击被第一个棋子挡住"""
        board = ChessBoard("4k3/8/8/8/8/8/8/R3K3")
        assert self.rule_engine.is_attacked(board, (0, 0), WHITE)

        blocked = ChessBoard("4k3/8/8/8/n7/8/8/R3K3")
        assert not self.rule_engine.is_attacked(blocked, (0, 0), WHITE)
        assert self.rule_engine.is_attacked(blocked, (4, 0), WHITE)

        bishop = ChessBoard("4k3/8/8/8/8/8/6B1/4K3")
        assert self.rule_engine.is_attacked(bishop, (1, 1), WHITE)
        assert not self.rule_engine.is_attacked(bishop, (1, 6), WHITE)

    def test_knight_and_king_attacks(self):
        """测试马和王的攻击"""
        board = ChessBoard("4k3/8/8/8/8/5n2/8/4K3")
        assert self.rule_engine.is_attacked(board, (7, 4), BLACK)
        assert self.rule_engine.is_attacked(board, (1, 4), BLACK)  # 黑王相邻格
        assert not self.rule_engine.is_attacked(board, (2, 4), BLACK)

    def test_attack_ignores_turn_and_pins(self):
        """测试攻击判定不考虑攻击方自己的王是否安全"""
        # 黑车被钉在黑王前，仍然攻击整条横线
        board = ChessBoard("4k3/4r3/8/8/8/8/8/4Q1K1")
        assert self.rule_engine.is_attacked(board, (1, 0), BLACK)


class TestLegality:
    """完整合法性验证的测试"""

    def setup_method(self):
        self.rule_engine = RuleEngine()

    def test_wrong_owner_is_illegal(self):
        """测试不能走对方的棋子"""
        board = ChessBoard()
        assert self.rule_engine.is_legal(board, (6, 4), (4, 4), WHITE)
        assert not self.rule_engine.is_legal(board, (6, 4), (4, 4), BLACK)
        assert not self.rule_engine.is_legal(board, (4, 4), (3, 4), WHITE)

    def test_pinned_piece_cannot_move(self):
        """测试被钉住的棋子不能离开钉线"""
        board = ChessBoard("4r1k1/8/8/8/8/8/4B3/4K3")

        assert self.rule_engine.is_shape_legal(board, (6, 4), (5, 3))
        assert not self.rule_engine.is_legal(board, (6, 4), (5, 3), WHITE)
        assert self.rule_engine.legal_destinations(board, (6, 4)) == []

    def test_king_cannot_move_into_check(self):
        """测试王不能走到被攻击的格子"""
        board = ChessBoard("4k3/8/8/8/8/8/r7/4K3")

        assert not self.rule_engine.is_legal(board, (7, 4), (6, 4), WHITE)
        assert self.rule_engine.is_legal(board, (7, 4), (7, 3), WHITE)

    def test_must_resolve_check(self):
        """测试被将军时只能应将"""
        board = ChessBoard("4k3/8/8/8/8/8/3P4/r3K3")

        assert self.rule_engine.is_in_check(board, WHITE)
        assert not self.rule_engine.is_legal(board, (6, 3), (5, 3), WHITE)
        moves = self.rule_engine.generate_legal_moves(board, WHITE)
        assert {m.to_coordinate_notation() for m in moves} == {"e1e2", "e1f2"}

    def test_is_legal_does_not_mutate_board(self):
        """测试合法性验证不修改棋盘"""
        board = ChessBoard("4r1k1/8/8/8/8/8/4B3/4K3")
        before = board.to_matrix()

        self.rule_engine.is_legal(board, (6, 4), (5, 3), WHITE)
        self.rule_engine.generate_legal_moves(board, WHITE)

        assert (board.to_matrix() == before).all()

    def test_missing_king_is_fatal(self):
        """测试找不到行棋方的王时抛出异常"""
        board = ChessBoard("4k3/8/8/8/8/8/4P3/8")

        with pytest.raises(KingNotFoundError) as exc_info:
            self.rule_engine.is_legal(board, (6, 4), (5, 4), WHITE)
        assert exc_info.value.side == 'white'

        with pytest.raises(KingNotFoundError):
            self.rule_engine.is_in_check(board, WHITE)


class TestMoveGeneration:
    """走法生成的测试"""

    def setup_method(self):
        self.rule_engine = RuleEngine()
        self.board = ChessBoard()

    def test_initial_legal_moves(self):
        """测试初始局面每方20个合法走法"""
        white_moves = self.rule_engine.generate_legal_moves(self.board, WHITE)
        black_moves = self.rule_engine.generate_legal_moves(self.board, BLACK)

        assert len(white_moves) == 20
        assert len(black_moves) == 20

        notations = {m.to_coordinate_notation() for m in white_moves}
        assert {"e2e4", "e2e3", "g1f3", "b1c3"} <= notations
        assert all(m.captured_piece is None for m in white_moves)

    def test_generation_order_is_deterministic(self):
        """测试按起始格再按目标格的行优先顺序"""
        moves = self.rule_engine.generate_legal_moves(self.board, WHITE)

        assert moves[0].to_coordinate_notation() == "a2a4"
        assert moves[1].to_coordinate_notation() == "a2a3"
        keys = [(m.from_pos, m.to_pos) for m in moves]
        assert keys == sorted(keys)

    def test_generated_moves_are_legal(self):
        """测试生成的走法都合法且不会落到己方棋子上"""
        board = ChessBoard("r3k2r/ppp2ppp/2n5/3qp3/4P3/2N2N2/PPP2PPP/R2QK2R")

        for player in (WHITE, BLACK):
            for move in self.rule_engine.generate_legal_moves(board, player):
                assert board.get_piece_at(move.from_pos) == move.piece
                assert not board.is_own_piece(move.to_pos, player)
                assert self.rule_engine.is_legal(board, move.from_pos, move.to_pos, player)

                after = board.move_piece(move.from_pos, move.to_pos)
                assert not self.rule_engine.is_in_check(after, player)

    def test_captured_piece_recorded(self):
        """测试被吃棋子取自走法前的棋盘"""
        board = ChessBoard("4k3/8/8/3p4/4P3/8/8/4K3")
        moves = self.rule_engine.generate_legal_moves(board, WHITE)

        captures = [m for m in moves if m.is_capture]
        assert len(captures) == 1
        assert captures[0].to_coordinate_notation() == "e4d5"
        assert captures[0].captured_piece == ChessBoard.BLACK_PAWN

    def test_legal_destinations(self):
        """测试单个棋子的合法目标格"""
        assert self.rule_engine.legal_destinations(self.board, (6, 4)) == [(4, 4), (5, 4)]
        assert self.rule_engine.legal_destinations(self.board, (0, 1)) == [(2, 0), (2, 2)]
        assert self.rule_engine.legal_destinations(self.board, (4, 4)) == []


class TestGameStatus:
    """将军、将死和逼和判定的测试"""

    def setup_method(self):
        self.rule_engine = RuleEngine()

    def test_back_rank_checkmate(self):
        """测试底线将死"""
        board = ChessBoard("R5k1/5ppp/8/8/8/8/8/6K1")

        assert self.rule_engine.is_in_check(board, BLACK)
        assert self.rule_engine.is_checkmate(board, BLACK)
        assert not self.rule_engine.is_stalemate(board, BLACK)
        assert self.rule_engine.generate_legal_moves(board, BLACK) == []

        status = self.rule_engine.get_game_status(board, BLACK)
        assert status['checkmate']
        assert status['game_over']
        assert status['winner'] == 'white'
        assert status['end_reason'] == 'checkmate'

    def test_stalemate(self):
        """测试逼和"""
        board = ChessBoard("7k/5Q2/6K1/8/8/8/8/8")

        assert not self.rule_engine.is_in_check(board, BLACK)
        assert self.rule_engine.is_stalemate(board, BLACK)
        assert not self.rule_engine.is_checkmate(board, BLACK)

        status = self.rule_engine.get_game_status(board, BLACK)
        assert status['stalemate']
        assert status['winner'] == 'draw'
        assert status['end_reason'] == 'stalemate'

    def test_check_with_escape(self):
        """测试被将军但可以应将"""
        board = ChessBoard("4k3/8/8/8/8/8/8/4R1K1")

        assert self.rule_engine.is_in_check(board, BLACK)
        assert not self.rule_engine.is_checkmate(board, BLACK)

        status = self.rule_engine.get_game_status(board, BLACK)
        assert status['in_check']
        assert not status['game_over']
        assert status['winner'] is None
        assert status['legal_moves_count'] > 0

    def test_initial_position_status(self):
        """测试初始局面状态"""
        status = self.rule_engine.get_game_status(ChessBoard(), WHITE)

        assert status['side_to_move'] == 'white'
        assert not status['in_check']
        assert status['legal_moves_count'] == 20
