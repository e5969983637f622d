"""
国际象棋棋盘数据结构

定义棋盘的表示、访问和格式转换功能。棋盘本身只是数据，
走法规则由 RuleEngine 负责。
"""

import json
from typing import List, Optional, Tuple, Dict, Sequence

import numpy as np

# 玩家 (白方在下方，先行)
WHITE = 1
BLACK = -1

BOARD_SIZE = 8


def opponent(player: int) -> int:
    """返回对方玩家"""
    return -player


def player_name(player: int) -> str:
    """玩家名称: 1 -> 'white', -1 -> 'black'"""
    if player == WHITE:
        return 'white'
    if player == BLACK:
        return 'black'
    raise ValueError(f"无效的玩家: {player}")


def player_from_name(name: str) -> int:
    """'white' / 'black' -> 1 / -1"""
    if name == 'white':
        return WHITE
    if name == 'black':
        return BLACK
    raise ValueError(f"无效的玩家名称: {name}")


class ChessBoard:
    """
    国际象棋棋盘类

    8x8 的整数矩阵，正数为白方棋子，负数为黑方棋子，0 为空格。
    第0行是黑方底线，第7行是白方底线。所有变换都返回新棋盘，不修改原棋盘。
    """

    EMPTY = 0
    # 棋子类型
    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    # 白方棋子 (正数)
    WHITE_PAWN = 1
    WHITE_KNIGHT = 2
    WHITE_BISHOP = 3
    WHITE_ROOK = 4
    WHITE_QUEEN = 5
    WHITE_KING = 6

    # 黑方棋子 (负数)
    BLACK_PAWN = -1
    BLACK_KNIGHT = -2
    BLACK_BISHOP = -3
    BLACK_ROOK = -4
    BLACK_QUEEN = -5
    BLACK_KING = -6

    # FEN记法中的棋子符号
    FEN_PIECES = {
        1: 'P', 2: 'N', 3: 'B', 4: 'R', 5: 'Q', 6: 'K',
        -1: 'p', -2: 'n', -3: 'b', -4: 'r', -5: 'q', -6: 'k'
    }

    # 棋子显示符号
    PIECE_SYMBOLS = {
        0: '·', 1: '♙', 2: '♘', 3: '♗', 4: '♖', 5: '♕', 6: '♔',
        -1: '♟', -2: '♞', -3: '♝', -4: '♜', -5: '♛', -6: '♚'
    }

    INITIAL_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"

    def __init__(self, fen: Optional[str] = None):
        """
        初始化棋盘

        Args:
            fen: FEN格式的棋子布局，如果为None则创建初始局面
        """
        self.board = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=int)
        self.from_fen(fen or self.INITIAL_FEN)

    # ==================== 棋子编码 ====================

    @classmethod
    def piece_to_symbol(cls, piece: int) -> str:
        """棋子编码 -> FEN字母"""
        try:
            return cls.FEN_PIECES[int(piece)]
        except KeyError:
            raise ValueError(f"无效的棋子编码: {piece}") from None

    @classmethod
    def symbol_to_piece(cls, symbol: str) -> int:
        """FEN字母 -> 棋子编码"""
        for piece, char in cls.FEN_PIECES.items():
            if char == symbol:
                return piece
        raise ValueError(f"无效的棋子符号: {symbol}")

    @staticmethod
    def piece_type(piece: int) -> int:
        return abs(int(piece))

    @staticmethod
    def piece_owner(piece: int) -> int:
        """棋子所属玩家，空格返回0"""
        if piece > 0:
            return WHITE
        if piece < 0:
            return BLACK
        return 0

    # ==================== 构造与转换 ====================

    @classmethod
    def empty(cls) -> 'ChessBoard':
        """创建空棋盘"""
        return cls("8/8/8/8/8/8/8/8")

    @classmethod
    def from_matrix(cls, matrix: np.ndarray) -> 'ChessBoard':
        """
        从矩阵创建棋盘对象

        Args:
            matrix: 8x8的棋盘矩阵

        Returns:
            ChessBoard: 棋盘对象
        """
        matrix = np.asarray(matrix, dtype=int)
        if matrix.shape != (BOARD_SIZE, BOARD_SIZE):
            raise ValueError(f"棋盘尺寸错误: {matrix.shape}, 应为(8, 8)")
        board = cls.empty()
        board.board = matrix.copy()
        return board

    def to_matrix(self) -> np.ndarray:
        return self.board.copy()

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Optional[str]]]) -> 'ChessBoard':
        """
        从FEN字母/None组成的二维列表创建棋盘

        这是对局存储使用的棋盘格式。
        """
        if len(rows) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in rows):
            raise ValueError("棋盘必须是8x8")
        matrix = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=int)
        for r, row in enumerate(rows):
            for c, symbol in enumerate(row):
                if symbol is not None:
                    matrix[r, c] = cls.symbol_to_piece(symbol)
        return cls.from_matrix(matrix)

    def to_rows(self) -> List[List[Optional[str]]]:
        """转换为FEN字母/None组成的二维列表"""
        return [
            [self.FEN_PIECES[int(piece)] if piece != 0 else None for piece in row]
            for row in self.board
        ]

    def to_fen(self) -> str:
        """
        转换为FEN格式 (仅棋子布局部分)

        Returns:
            str: 如 "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
        """
        fen_parts = []

        for row in self.board:
            fen_row = ""
            empty_count = 0

            for piece in row:
                if piece == 0:
                    empty_count += 1
                else:
                    if empty_count > 0:
                        fen_row += str(empty_count)
                        empty_count = 0
                    fen_row += self.FEN_PIECES[int(piece)]

            if empty_count > 0:
                fen_row += str(empty_count)

            fen_parts.append(fen_row)

        return "/".join(fen_parts)

    def from_fen(self, fen: str):
        """
        从FEN格式加载棋子布局

        只读取第一个字段，其余字段 (行棋方、易位权等) 被忽略。

        Args:
            fen: FEN格式字符串
        """
        parts = fen.split()
        if not parts:
            raise ValueError("无效的FEN格式")

        rows = parts[0].split("/")
        if len(rows) != BOARD_SIZE:
            raise ValueError("FEN格式应包含8行")

        board = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=int)

        for i, row in enumerate(rows):
            col = 0
            for char in row:
                if char.isdigit():
                    col += int(char)
                else:
                    if col >= BOARD_SIZE:
                        raise ValueError(f"第{i+1}行列数超出范围")
                    board[i, col] = self.symbol_to_piece(char)
                    col += 1
            if col != BOARD_SIZE:
                raise ValueError(f"第{i+1}行应有8列，实际为{col}")

        self.board = board

    def to_json(self) -> str:
        return json.dumps({'board': self.to_rows()}, ensure_ascii=False)

    @classmethod
    def from_json(cls, json_str: str) -> 'ChessBoard':
        return cls.from_rows(json.loads(json_str)['board'])

    def copy(self) -> 'ChessBoard':
        """创建棋盘的副本"""
        return ChessBoard.from_matrix(self.board)

    # ==================== 访问 ====================

    @staticmethod
    def in_bounds(pos: Tuple[int, int]) -> bool:
        row, col = pos
        return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE

    def get_piece_at(self, pos: Tuple[int, int]) -> int:
        """
        获取指定位置的棋子

        Args:
            pos: 位置坐标 (行, 列)

        Returns:
            int: 棋子编码，越界或空格返回0
        """
        if self.in_bounds(pos):
            return int(self.board[pos[0], pos[1]])
        return self.EMPTY

    def is_empty(self, pos: Tuple[int, int]) -> bool:
        return self.get_piece_at(pos) == self.EMPTY

    def is_enemy_piece(self, pos: Tuple[int, int], player: int) -> bool:
        """检查指定位置是否为敌方棋子"""
        piece = self.get_piece_at(pos)
        return piece != 0 and (piece > 0) != (player > 0)

    def is_own_piece(self, pos: Tuple[int, int], player: int) -> bool:
        """检查指定位置是否为己方棋子"""
        piece = self.get_piece_at(pos)
        return piece != 0 and (piece > 0) == (player > 0)

    def find_king(self, player: int) -> Optional[Tuple[int, int]]:
        """
        找到指定玩家的王的位置

        Args:
            player: 玩家

        Returns:
            Optional[Tuple[int, int]]: 王的位置，如果找不到返回None
        """
        king_piece = self.WHITE_KING if player > 0 else self.BLACK_KING
        positions = np.argwhere(self.board == king_piece)
        if len(positions) == 0:
            return None
        row, col = positions[0]
        return (int(row), int(col))

    def get_all_pieces(self, player: Optional[int] = None) -> List[Tuple[Tuple[int, int], int]]:
        """
        获取所有棋子的位置和类型，按行优先顺序

        Args:
            player: 指定玩家，None表示获取所有棋子

        Returns:
            List[Tuple[Tuple[int, int], int]]: [(位置, 棋子), ...]
        """
        pieces = []
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                piece = int(self.board[row, col])
                if piece != 0:
                    if player is None or (piece > 0) == (player > 0):
                        pieces.append(((row, col), piece))
        return pieces

    def count_pieces(self, player: Optional[int] = None) -> Dict[int, int]:
        """
        统计棋子数量

        Returns:
            Dict[int, int]: {棋子: 数量}
        """
        counts = {}
        for _, piece in self.get_all_pieces(player):
            counts[piece] = counts.get(piece, 0) + 1
        return counts

    # ==================== 变换 ====================

    def move_piece(self, from_pos: Tuple[int, int], to_pos: Tuple[int, int]) -> 'ChessBoard':
        """
        移动棋子，返回新的棋盘 (不处理升变)

        目标格上原有的棋子被移除。
        """
        new_board = self.copy()
        new_board.board[to_pos[0], to_pos[1]] = new_board.board[from_pos[0], from_pos[1]]
        new_board.board[from_pos[0], from_pos[1]] = self.EMPTY
        return new_board

    def apply_move(self, from_pos: Tuple[int, int], to_pos: Tuple[int, int]) -> 'ChessBoard':
        """
        执行走法，返回新的棋盘

        兵到达对方底线时强制升变为同色的后。
        """
        new_board = self.move_piece(from_pos, to_pos)
        piece = new_board.get_piece_at(to_pos)
        if piece == self.WHITE_PAWN and to_pos[0] == 0:
            new_board.board[to_pos[0], to_pos[1]] = self.WHITE_QUEEN
        elif piece == self.BLACK_PAWN and to_pos[0] == BOARD_SIZE - 1:
            new_board.board[to_pos[0], to_pos[1]] = self.BLACK_QUEEN
        return new_board

    # ==================== 显示 ====================

    def to_visual_string(self) -> str:
        """
        转换为可视化字符串

        Returns:
            str: 带坐标的棋盘字符串
        """
        lines = []
        for row in range(BOARD_SIZE):
            symbols = " ".join(self.PIECE_SYMBOLS[int(piece)] for piece in self.board[row])
            lines.append(f"{8 - row} {symbols}")
        lines.append("  a b c d e f g h")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.to_visual_string()

    def __repr__(self) -> str:
        return f"ChessBoard('{self.to_fen()}')"

    def __eq__(self, other) -> bool:
        if not isinstance(other, ChessBoard):
            return False
        return np.array_equal(self.board, other.board)

    def __hash__(self) -> int:
        return hash(self.board.tobytes())
