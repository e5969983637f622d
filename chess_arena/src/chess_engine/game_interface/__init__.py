"""
对局接口模块

包含对局状态、状态机和脚本对手策略。
"""

from .game_state import GameState, GameStatus, Difficulty, Winner, CapturedPieces
from .opponent_policy import OpponentPolicy, CENTER_SQUARES
from .state_machine import (
    GameStateMachine,
    create_initial_state, apply_player_move, apply_opponent_move, generate_legal_moves
)

__all__ = [
    # 对局状态
    'GameState',
    'GameStatus',
    'Difficulty',
    'Winner',
    'CapturedPieces',

    # 状态机与对手
    'GameStateMachine',
    'OpponentPolicy',
    'CENTER_SQUARES',

    # 函数接口
    'create_initial_state',
    'apply_player_move',
    'apply_opponent_move',
    'generate_legal_moves'
]
