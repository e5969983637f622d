"""
对局状态

定义对局状态值、难度、状态和胜负枚举，以及与存储格式之间的转换。
对局状态是不可变的值，每次走法都产生新的状态。
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple, Dict, Any

from ..rules_engine import (
    ChessBoard, Move, BoardValidator, WHITE, BLACK, player_name, player_from_name
)
from ..utils.exceptions import GameStateError


class Difficulty(Enum):
    """脚本对手难度"""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class GameStatus(Enum):
    """对局状态枚举"""
    ACTIVE = "active"           # 对局进行中
    FINISHED = "finished"       # 已结束
    ABANDONED = "abandoned"     # 已放弃 (由外部设置)


class Winner(Enum):
    """对局结果"""
    WHITE = "white"
    BLACK = "black"
    DRAW = "draw"

    @classmethod
    def from_player(cls, player: int) -> 'Winner':
        return cls.WHITE if player == WHITE else cls.BLACK


@dataclass(frozen=True)
class CapturedPieces:
    """
    被吃棋子记录

    按吃子方分开，只追加不删除。
    """
    white: Tuple[int, ...] = ()     # 白方吃掉的棋子
    black: Tuple[int, ...] = ()     # 黑方吃掉的棋子

    def add(self, capturer: int, piece: int) -> 'CapturedPieces':
        """返回追加了一个被吃棋子的新记录"""
        if capturer == WHITE:
            return replace(self, white=self.white + (piece,))
        return replace(self, black=self.black + (piece,))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'white': [ChessBoard.piece_to_symbol(p) for p in self.white],
            'black': [ChessBoard.piece_to_symbol(p) for p in self.black]
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CapturedPieces':
        return cls(
            white=tuple(ChessBoard.symbol_to_piece(s) for s in data.get('white', [])),
            black=tuple(ChessBoard.symbol_to_piece(s) for s in data.get('black', []))
        )


@dataclass(frozen=True)
class GameState:
    """
    对局状态

    is_check 总是相对于当前行棋方 (current_turn) 计算；
    status 为 FINISHED 时 winner 必须已设置。
    """
    board: ChessBoard = field(default_factory=ChessBoard)
    current_turn: int = WHITE
    difficulty: Difficulty = Difficulty.MEDIUM
    status: GameStatus = GameStatus.ACTIVE
    captured_pieces: CapturedPieces = field(default_factory=CapturedPieces)
    move_history: Tuple[Move, ...] = ()
    is_check: bool = False
    winner: Optional[Winner] = None

    def __post_init__(self):
        if self.current_turn not in (WHITE, BLACK):
            raise GameStateError(f"当前行棋方无效: {self.current_turn}")

        # 接受存储格式中的字符串取值，统一转换为枚举
        try:
            object.__setattr__(self, 'difficulty', Difficulty(self.difficulty))
            object.__setattr__(self, 'status', GameStatus(self.status))
            if self.winner is not None:
                object.__setattr__(self, 'winner', Winner(self.winner))
        except ValueError as e:
            raise GameStateError("对局状态取值无效", str(e)) from e

        if self.status == GameStatus.FINISHED and self.winner is None:
            raise GameStateError("对局已结束但未设置胜负")

    @property
    def is_active(self) -> bool:
        return self.status == GameStatus.ACTIVE

    @property
    def last_move(self) -> Optional[Move]:
        return self.move_history[-1] if self.move_history else None

    def to_dict(self) -> Dict[str, Any]:
        """
        转换为存储格式的字典

        棋盘为FEN字母/None组成的二维列表，键名与对局存储表一致。
        """
        return {
            'board': self.board.to_rows(),
            'currentTurn': player_name(self.current_turn),
            'difficulty': self.difficulty.value,
            'status': self.status.value,
            'capturedPieces': self.captured_pieces.to_dict(),
            'moveHistory': [move.to_dict() for move in self.move_history],
            'isCheck': self.is_check,
            'winner': self.winner.value if self.winner else None
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GameState':
        """
        从存储格式的字典重建对局状态

        Raises:
            GameStateError: 数据格式错误或棋盘不满足对局不变量
        """
        try:
            board = ChessBoard.from_rows(data['board'])
            state = cls(
                board=board,
                current_turn=player_from_name(data['currentTurn']),
                difficulty=Difficulty(data['difficulty']),
                status=GameStatus(data['status']),
                captured_pieces=CapturedPieces.from_dict(data.get('capturedPieces', {})),
                move_history=tuple(Move.from_dict(m) for m in data.get('moveHistory', [])),
                is_check=bool(data.get('isCheck', False)),
                winner=Winner(data['winner']) if data.get('winner') else None
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise GameStateError("无法解析对局数据", str(e)) from e

        is_valid, errors = BoardValidator().full_validation(board)
        if not is_valid:
            raise GameStateError("棋盘不合法", "; ".join(errors))

        return state
