"""
国际象棋规则引擎模块

包含棋盘表示、走法验证、攻击判定、走法生成等核心功能。
"""

from .chess_board import ChessBoard, WHITE, BLACK, opponent, player_name, player_from_name
from .move import Move, square_name, parse_square
from .board_validator import BoardValidator
from .rule_engine import RuleEngine

__all__ = [
    'ChessBoard', 'Move', 'BoardValidator', 'RuleEngine',
    'WHITE', 'BLACK', 'opponent', 'player_name', 'player_from_name',
    'square_name', 'parse_square'
]
