"""
国际象棋规则引擎

实现各棋子的走法形状验证、格子受攻击判定、完整合法性验证、
合法走法生成和终局状态检测。
"""

from typing import List, Tuple, Dict, Any

from .chess_board import ChessBoard, BOARD_SIZE, WHITE, BLACK, opponent, player_name
from .move import Move
from ..utils.exceptions import KingNotFoundError
from ..utils.logger import LoggerMixin


class RuleEngine(LoggerMixin):
    """
    国际象棋规则引擎

    所有方法都是纯函数：只读取传入的棋盘，从不修改它。
    不支持王车易位、吃过路兵和低升变。
    """

    def __init__(self):
        """初始化规则引擎"""
        self.knight_moves = [
            (2, 1), (2, -1), (-2, 1), (-2, -1),
            (1, 2), (1, -2), (-1, 2), (-1, -2)
        ]
        self.king_moves = [
            (dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if (dr, dc) != (0, 0)
        ]
        self.orthogonal_directions = [(1, 0), (-1, 0), (0, 1), (0, -1)]
        self.diagonal_directions = [(1, 1), (1, -1), (-1, 1), (-1, -1)]

        # 兵的前进方向和起始行
        self.pawn_direction = {WHITE: -1, BLACK: 1}
        self.pawn_start_row = {WHITE: 6, BLACK: 1}

    # ==================== 形状验证 ====================

    def is_shape_legal(self, board: ChessBoard, from_pos: Tuple[int, int],
                       to_pos: Tuple[int, int]) -> bool:
        """
        检查走法是否符合棋子的移动形状

        不考虑轮到哪一方，也不考虑王的安全。

        Args:
            board: 当前棋盘
            from_pos: 起始位置
            to_pos: 目标位置

        Returns:
            bool: 形状是否合法
        """
        if not (board.in_bounds(from_pos) and board.in_bounds(to_pos)):
            return False

        piece = board.get_piece_at(from_pos)
        if piece == ChessBoard.EMPTY:
            return False

        target = board.get_piece_at(to_pos)
        # 不能吃己方棋子
        if target != ChessBoard.EMPTY and (target > 0) == (piece > 0):
            return False

        row_diff = to_pos[0] - from_pos[0]
        col_diff = to_pos[1] - from_pos[1]
        abs_row, abs_col = abs(row_diff), abs(col_diff)

        if abs_row == 0 and abs_col == 0:
            return False

        piece_type = ChessBoard.piece_type(piece)

        if piece_type == ChessBoard.PAWN:
            return self._is_pawn_shape_legal(board, piece, from_pos, to_pos)
        elif piece_type == ChessBoard.KNIGHT:
            return (abs_row, abs_col) in ((2, 1), (1, 2))
        elif piece_type == ChessBoard.BISHOP:
            return abs_row == abs_col and not self._is_path_blocked(board, from_pos, to_pos)
        elif piece_type == ChessBoard.ROOK:
            return (abs_row == 0) != (abs_col == 0) and not self._is_path_blocked(board, from_pos, to_pos)
        elif piece_type == ChessBoard.QUEEN:
            straight = (abs_row == 0) != (abs_col == 0)
            diagonal = abs_row == abs_col
            return (straight or diagonal) and not self._is_path_blocked(board, from_pos, to_pos)
        elif piece_type == ChessBoard.KING:
            return abs_row <= 1 and abs_col <= 1

        return False

    def _is_pawn_shape_legal(self, board: ChessBoard, piece: int,
                             from_pos: Tuple[int, int], to_pos: Tuple[int, int]) -> bool:
        """兵：向前一步、起始行向前两步、斜前方一步吃子"""
        player = ChessBoard.piece_owner(piece)
        direction = self.pawn_direction[player]
        row_diff = to_pos[0] - from_pos[0]
        col_diff = to_pos[1] - from_pos[1]
        target = board.get_piece_at(to_pos)

        if col_diff == 0:
            # 不能向前吃子
            if target != ChessBoard.EMPTY:
                return False
            if row_diff == direction:
                return True
            if (row_diff == 2 * direction and
                    from_pos[0] == self.pawn_start_row[player] and
                    board.is_empty((from_pos[0] + direction, from_pos[1]))):
                return True
            return False

        if abs(col_diff) == 1 and row_diff == direction:
            # 斜走只能吃子
            return board.is_enemy_piece(to_pos, player)

        return False

    def _is_path_blocked(self, board: ChessBoard, from_pos: Tuple[int, int],
                         to_pos: Tuple[int, int]) -> bool:
        """检查起点和终点之间 (不含两端) 是否有棋子"""
        row_step = (to_pos[0] > from_pos[0]) - (to_pos[0] < from_pos[0])
        col_step = (to_pos[1] > from_pos[1]) - (to_pos[1] < from_pos[1])

        row, col = from_pos[0] + row_step, from_pos[1] + col_step
        while (row, col) != tuple(to_pos):
            if board.board[row, col] != ChessBoard.EMPTY:
                return True
            row += row_step
            col += col_step

        return False

    # ==================== 攻击判定 ====================

    def is_attacked(self, board: ChessBoard, square: Tuple[int, int], by_player: int) -> bool:
        """
        检查指定格子是否受到某一方的攻击

        只按各棋子的吃子几何判断，不考虑轮到谁走，也不考虑攻击方自己的王是否安全。

        Args:
            board: 棋盘
            square: 目标格子
            by_player: 攻击方

        Returns:
            bool: 是否受到攻击
        """
        row, col = square

        def owned(pos: Tuple[int, int], piece_type: int) -> bool:
            piece = board.get_piece_at(pos)
            return (piece != ChessBoard.EMPTY and
                    ChessBoard.piece_owner(piece) == by_player and
                    ChessBoard.piece_type(piece) == piece_type)

        # 马
        for dr, dc in self.knight_moves:
            if owned((row + dr, col + dc), ChessBoard.KNIGHT):
                return True

        # 兵：攻击方的兵位于目标格后方 (按攻击方前进方向) 的两个斜格
        pawn_row = row - self.pawn_direction[by_player]
        for dc in (-1, 1):
            if owned((pawn_row, col + dc), ChessBoard.PAWN):
                return True

        # 王
        for dr, dc in self.king_moves:
            if owned((row + dr, col + dc), ChessBoard.KING):
                return True

        # 车/后 直线
        if self._ray_hits(board, square, by_player, self.orthogonal_directions,
                          (ChessBoard.ROOK, ChessBoard.QUEEN)):
            return True

        # 象/后 斜线
        if self._ray_hits(board, square, by_player, self.diagonal_directions,
                          (ChessBoard.BISHOP, ChessBoard.QUEEN)):
            return True

        return False

    def _ray_hits(self, board: ChessBoard, square: Tuple[int, int], by_player: int,
                  directions: List[Tuple[int, int]], attacker_types: Tuple[int, ...]) -> bool:
        """沿射线向外走，遇到第一个棋子即停止，判断它是否为指定类型的攻击方棋子"""
        for dr, dc in directions:
            row, col = square[0] + dr, square[1] + dc
            while 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE:
                piece = int(board.board[row, col])
                if piece != ChessBoard.EMPTY:
                    if (ChessBoard.piece_owner(piece) == by_player and
                            ChessBoard.piece_type(piece) in attacker_types):
                        return True
                    break
                row += dr
                col += dc
        return False

    # ==================== 合法性验证 ====================

    def is_legal(self, board: ChessBoard, from_pos: Tuple[int, int],
                 to_pos: Tuple[int, int], player: int) -> bool:
        """
        验证走法是否完全合法

        形状合法，且走完后己方的王不受攻击。

        Args:
            board: 当前棋盘 (不会被修改)
            from_pos: 起始位置
            to_pos: 目标位置
            player: 行棋方

        Returns:
            bool: 是否合法
        """
        if not board.is_own_piece(from_pos, player):
            return False

        if not self.is_shape_legal(board, from_pos, to_pos):
            return False

        # 在副本上模拟走法
        new_board = board.move_piece(from_pos, to_pos)
        king_pos = self._require_king(new_board, player)

        return not self.is_attacked(new_board, king_pos, opponent(player))

    def _require_king(self, board: ChessBoard, player: int) -> Tuple[int, int]:
        king_pos = board.find_king(player)
        if king_pos is None:
            self.log_error(f"棋盘上找不到{player_name(player)}方的王: {board.to_fen()}")
            raise KingNotFoundError(player_name(player))
        return king_pos

    # ==================== 走法生成 ====================

    def generate_legal_moves(self, board: ChessBoard, player: int) -> List[Move]:
        """
        生成指定玩家的所有合法走法

        按起始格行优先、再按目标格行优先的顺序，结果是确定的。

        Args:
            board: 当前棋盘
            player: 玩家 (1: 白方, -1: 黑方)

        Returns:
            List[Move]: 合法走法列表，被吃棋子取自走法前的棋盘
        """
        legal_moves = []

        for from_pos, piece in board.get_all_pieces(player):
            for to_row in range(BOARD_SIZE):
                for to_col in range(BOARD_SIZE):
                    to_pos = (to_row, to_col)
                    if to_pos == from_pos:
                        continue
                    if self.is_legal(board, from_pos, to_pos, player):
                        target = board.get_piece_at(to_pos)
                        legal_moves.append(Move(
                            from_pos=from_pos,
                            to_pos=to_pos,
                            piece=piece,
                            captured_piece=target if target != ChessBoard.EMPTY else None
                        ))

        return legal_moves

    def legal_destinations(self, board: ChessBoard, from_pos: Tuple[int, int]) -> List[Tuple[int, int]]:
        """
        获取指定格子上棋子的所有合法目标格

        用于界面高亮，行棋方取自该棋子的颜色。空格返回空列表。
        """
        piece = board.get_piece_at(from_pos)
        if piece == ChessBoard.EMPTY:
            return []

        player = ChessBoard.piece_owner(piece)
        return [
            (row, col)
            for row in range(BOARD_SIZE)
            for col in range(BOARD_SIZE)
            if (row, col) != tuple(from_pos) and self.is_legal(board, from_pos, (row, col), player)
        ]

    # ==================== 终局检测 ====================

    def is_in_check(self, board: ChessBoard, player: int) -> bool:
        """检查指定玩家的王是否受到攻击"""
        king_pos = self._require_king(board, player)
        return self.is_attacked(board, king_pos, opponent(player))

    def is_checkmate(self, board: ChessBoard, player: int) -> bool:
        """被将军且没有合法走法"""
        if not self.is_in_check(board, player):
            return False
        return len(self.generate_legal_moves(board, player)) == 0

    def is_stalemate(self, board: ChessBoard, player: int) -> bool:
        """没有被将军但没有合法走法"""
        if self.is_in_check(board, player):
            return False
        return len(self.generate_legal_moves(board, player)) == 0

    def get_game_status(self, board: ChessBoard, player: int) -> Dict[str, Any]:
        """
        获取指定行棋方的局面状态

        Args:
            board: 棋盘
            player: 行棋方

        Returns:
            Dict: 局面状态信息
        """
        in_check = self.is_in_check(board, player)
        legal_moves = self.generate_legal_moves(board, player)
        no_moves = len(legal_moves) == 0

        status = {
            'side_to_move': player_name(player),
            'in_check': in_check,
            'checkmate': in_check and no_moves,
            'stalemate': not in_check and no_moves,
            'game_over': no_moves,
            'legal_moves_count': len(legal_moves),
            'winner': None,
            'end_reason': None
        }

        if no_moves:
            if in_check:
                status['winner'] = player_name(opponent(player))
                status['end_reason'] = 'checkmate'
            else:
                status['winner'] = 'draw'
                status['end_reason'] = 'stalemate'

        return status
