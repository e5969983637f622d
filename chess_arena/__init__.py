"""
国际象棋人机对弈 (Chess Arena)

一个带脚本对手的国际象棋对弈系统，核心是纯函数式的规则引擎。
"""

__version__ = "0.1.0"
__author__ = "Chess Arena Team"
__description__ = "国际象棋人机对弈 - 规则引擎与按难度分层的脚本对手"

from chess_arena.src import chess_engine

__all__ = [
    "chess_engine",
    "__version__",
    "__author__",
    "__description__",
]
