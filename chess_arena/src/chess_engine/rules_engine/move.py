"""
国际象棋走法数据结构

定义走法的表示和转换功能。
"""

from dataclasses import dataclass
from typing import Optional, Tuple

FILES = 'abcdefgh'


def square_name(pos: Tuple[int, int]) -> str:
    """
    将格子坐标转换为代数记法

    Args:
        pos: 位置坐标 (行, 列)，第0行为黑方底线

    Returns:
        str: 如 (6, 4) -> "e2"
    """
    row, col = pos
    if not (0 <= row <= 7 and 0 <= col <= 7):
        raise ValueError(f"无效的位置坐标: {pos}")
    return f"{FILES[col]}{8 - row}"


def parse_square(name: str) -> Tuple[int, int]:
    """
    将代数记法转换为格子坐标

    Args:
        name: 如 "e2"

    Returns:
        Tuple[int, int]: (行, 列)
    """
    name = name.strip().lower()
    if len(name) != 2 or name[0] not in FILES or name[1] not in '12345678':
        raise ValueError(f"无效的格子记法: {name}")
    return (8 - int(name[1]), FILES.index(name[0]))


@dataclass(frozen=True, eq=False)
class Move:
    """
    国际象棋走法类

    表示一个走法，包含起始位置、目标位置、棋子信息等。记录后不可修改。
    """
    from_pos: Tuple[int, int]             # 起始位置 (行, 列)
    to_pos: Tuple[int, int]               # 目标位置 (行, 列)
    piece: int                            # 移动的棋子
    captured_piece: Optional[int] = None  # 被吃掉的棋子
    timestamp: Optional[float] = None     # 记录时间 (秒)

    def __post_init__(self):
        """初始化后验证数据有效性"""
        for pos in [self.from_pos, self.to_pos]:
            row, col = pos
            if not (0 <= row <= 7 and 0 <= col <= 7):
                raise ValueError(f"无效的位置坐标: {pos}")
        if self.piece == 0:
            raise ValueError("走法必须指定移动的棋子")

    @property
    def is_capture(self) -> bool:
        return self.captured_piece is not None

    def to_coordinate_notation(self) -> str:
        """
        转换为坐标记法

        Returns:
            str: 坐标记法字符串，如 "e2e4"
        """
        return f"{square_name(self.from_pos)}{square_name(self.to_pos)}"

    @classmethod
    def from_coordinate_notation(cls, notation: str, piece: int,
                                 captured_piece: Optional[int] = None) -> 'Move':
        """
        从坐标记法创建Move对象

        Args:
            notation: 坐标记法字符串，如 "e2e4"
            piece: 移动的棋子
            captured_piece: 被吃掉的棋子

        Returns:
            Move: Move对象
        """
        notation = notation.strip()
        if len(notation) != 4:
            raise ValueError(f"无效的坐标记法: {notation}")

        return cls(
            from_pos=parse_square(notation[:2]),
            to_pos=parse_square(notation[2:]),
            piece=piece,
            captured_piece=captured_piece
        )

    def with_timestamp(self, timestamp: float) -> 'Move':
        """返回带记录时间的副本"""
        return Move(self.from_pos, self.to_pos, self.piece, self.captured_piece, timestamp)

    def __str__(self) -> str:
        return self.to_coordinate_notation()

    def __repr__(self) -> str:
        return (f"Move(from_pos={self.from_pos}, to_pos={self.to_pos}, "
                f"piece={self.piece}, captured_piece={self.captured_piece})")

    def __eq__(self, other) -> bool:
        """相等性比较，不考虑记录时间"""
        if not isinstance(other, Move):
            return False
        return (self.from_pos == other.from_pos and
                self.to_pos == other.to_pos and
                self.piece == other.piece and
                self.captured_piece == other.captured_piece)

    def __hash__(self) -> int:
        return hash((self.from_pos, self.to_pos, self.piece, self.captured_piece))

    def to_dict(self) -> dict:
        """
        转换为字典

        棋子以FEN字母表示，与对局存储格式一致。
        """
        from .chess_board import ChessBoard

        return {
            'from': {'row': self.from_pos[0], 'col': self.from_pos[1]},
            'to': {'row': self.to_pos[0], 'col': self.to_pos[1]},
            'piece': ChessBoard.piece_to_symbol(self.piece),
            'capturedPiece': (ChessBoard.piece_to_symbol(self.captured_piece)
                              if self.captured_piece is not None else None),
            'timestamp': self.timestamp
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Move':
        """从字典创建Move对象"""
        from .chess_board import ChessBoard

        captured = data.get('capturedPiece')
        return cls(
            from_pos=(int(data['from']['row']), int(data['from']['col'])),
            to_pos=(int(data['to']['row']), int(data['to']['col'])),
            piece=ChessBoard.symbol_to_piece(data['piece']),
            captured_piece=ChessBoard.symbol_to_piece(captured) if captured else None,
            timestamp=data.get('timestamp')
        )
