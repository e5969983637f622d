"""
国际象棋规则引擎

人机对弈的规则核心：棋盘表示、走法合法性 (含王的安全)、合法走法生成、
将军/将死/逼和判定，以及按难度分层的脚本对手走法选择。
"""

__version__ = "0.1.0"
__author__ = "Chess Arena Team"

from .rules_engine import ChessBoard, Move, RuleEngine, BoardValidator, WHITE, BLACK
from .game_interface import (
    GameState, GameStatus, Difficulty, Winner, CapturedPieces,
    GameStateMachine, OpponentPolicy,
    create_initial_state, apply_player_move, apply_opponent_move, generate_legal_moves
)
from .config import ConfigManager, EngineConfig, SystemConfig
from .utils import (
    setup_logger, get_logger, ChessEngineError,
    NotActiveError, WrongTurnError, IllegalMoveError, GameStateError
)

__all__ = [
    "__version__", "__author__",
    "ChessBoard", "Move", "RuleEngine", "BoardValidator", "WHITE", "BLACK",
    "GameState", "GameStatus", "Difficulty", "Winner", "CapturedPieces",
    "GameStateMachine", "OpponentPolicy",
    "create_initial_state", "apply_player_move", "apply_opponent_move", "generate_legal_moves",
    "ConfigManager", "EngineConfig", "SystemConfig",
    "setup_logger", "get_logger", "ChessEngineError",
    "NotActiveError", "WrongTurnError", "IllegalMoveError", "GameStateError"
]
