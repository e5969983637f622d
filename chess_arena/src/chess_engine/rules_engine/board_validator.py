"""
棋局合法性验证器

提供棋盘结构、棋子数量和棋子位置的验证功能。
"""

from typing import List, Tuple, Dict, Any

import numpy as np

from .chess_board import ChessBoard, BOARD_SIZE, WHITE, BLACK


class BoardValidator:
    """
    棋局合法性验证器

    用于检查从外部载入的棋盘是否满足对局进行中的不变量。
    """

    def __init__(self):
        """初始化验证器"""
        self.max_pawns = 8
        self.max_pieces = 16

        self.piece_names = {
            1: "白兵", 2: "白马", 3: "白象", 4: "白车", 5: "白后", 6: "白王",
            -1: "黑兵", -2: "黑马", -3: "黑象", -4: "黑车", -5: "黑后", -6: "黑王"
        }

    def validate_board_structure(self, board: ChessBoard) -> Tuple[bool, List[str]]:
        """
        验证棋盘基本结构

        Args:
            board: 要验证的棋盘

        Returns:
            Tuple[bool, List[str]]: (是否合法, 错误信息列表)
        """
        errors = []

        if board.board.shape != (BOARD_SIZE, BOARD_SIZE):
            errors.append(f"棋盘尺寸错误: {board.board.shape}, 应为(8, 8)")
            return False, errors

        if not np.issubdtype(board.board.dtype, np.integer):
            errors.append(f"棋盘数据类型错误: {board.board.dtype}, 应为int")

        unknown = {int(p) for p in np.unique(board.board)} - set(ChessBoard.FEN_PIECES) - {0}
        if unknown:
            errors.append(f"未知的棋子编码: {sorted(unknown)}")

        return len(errors) == 0, errors

    def validate_piece_counts(self, board: ChessBoard) -> Tuple[bool, List[str]]:
        """
        验证棋子数量

        每方恰有一个王，兵不超过8个，棋子总数不超过16个。
        """
        errors = []

        for player, king in ((WHITE, ChessBoard.WHITE_KING), (BLACK, ChessBoard.BLACK_KING)):
            counts = board.count_pieces(player)

            king_count = counts.get(king, 0)
            if king_count != 1:
                errors.append(f"{self.piece_names[king]}数量错误: {king_count}, 应为1")

            pawn = ChessBoard.PAWN * player
            pawn_count = counts.get(pawn, 0)
            if pawn_count > self.max_pawns:
                errors.append(f"{self.piece_names[pawn]}数量超限: {pawn_count} > {self.max_pawns}")

            total = sum(counts.values())
            if total > self.max_pieces:
                side = "白方" if player == WHITE else "黑方"
                errors.append(f"{side}棋子总数超限: {total} > {self.max_pieces}")

        return len(errors) == 0, errors

    def validate_piece_positions(self, board: ChessBoard) -> Tuple[bool, List[str]]:
        """验证棋子位置：兵不能停留在任一方的底线 (到达即升变)"""
        errors = []

        for row in (0, BOARD_SIZE - 1):
            for col in range(BOARD_SIZE):
                piece = int(board.board[row, col])
                if ChessBoard.piece_type(piece) == ChessBoard.PAWN:
                    errors.append(f"{self.piece_names[piece]}位置错误: ({row}, {col}), 兵不能位于底线")

        return len(errors) == 0, errors

    def full_validation(self, board: ChessBoard) -> Tuple[bool, List[str]]:
        """
        完整的棋局验证

        Returns:
            Tuple[bool, List[str]]: (是否合法, 所有错误信息列表)
        """
        is_valid, all_errors = self.validate_board_structure(board)
        if not is_valid:
            return False, all_errors

        for validation_func in (self.validate_piece_counts, self.validate_piece_positions):
            _, errors = validation_func(board)
            all_errors.extend(errors)

        return len(all_errors) == 0, all_errors

    def get_validation_report(self, board: ChessBoard) -> Dict[str, Any]:
        """
        获取详细的验证报告

        Returns:
            Dict[str, Any]: 验证报告
        """
        report = {
            'overall_valid': True,
            'total_errors': 0,
            'validations': {}
        }

        validation_tests = {
            'structure': self.validate_board_structure,
            'piece_counts': self.validate_piece_counts,
            'piece_positions': self.validate_piece_positions
        }

        for test_name, test_func in validation_tests.items():
            is_valid, errors = test_func(board)
            report['validations'][test_name] = {
                'valid': is_valid,
                'errors': errors,
                'error_count': len(errors)
            }

            if not is_valid:
                report['overall_valid'] = False
                report['total_errors'] += len(errors)

        return report
