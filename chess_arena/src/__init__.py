"""
Chess Arena 源代码模块

包含主要子系统：
- chess_engine: 国际象棋规则引擎与脚本对手
"""

from . import chess_engine

__all__ = [
    "chess_engine",
]
