"""
脚本对手走法选择策略

按难度分层的一步启发式选择，不做任何搜索。
"""

import random
from typing import List, Optional, Sequence

from ..rules_engine import Move
from ..utils.logger import LoggerMixin
from .game_state import Difficulty

# 中心四格 (第3-4行, 第3-4列)
CENTER_SQUARES = frozenset({(3, 3), (3, 4), (4, 3), (4, 4)})


class OpponentPolicy(LoggerMixin):
    """
    难度分层的走法选择器

    - easy: 在所有合法走法中均匀随机
    - medium: 有吃子走法时只在吃子走法中随机，否则在全部走法中随机
    - hard: 依次优先吃子走法、落在中心四格的走法，都没有时在全部走法中随机

    某一层没有符合条件的走法时落到下一层。
    """

    def __init__(self, rng: Optional[random.Random] = None):
        """
        初始化选择器

        Args:
            rng: 随机数源，测试时可传入固定种子的 random.Random
        """
        self.rng = rng or random.Random()

    @staticmethod
    def capturing_moves(moves: Sequence[Move]) -> List[Move]:
        return [move for move in moves if move.captured_piece is not None]

    @staticmethod
    def center_moves(moves: Sequence[Move]) -> List[Move]:
        return [move for move in moves if tuple(move.to_pos) in CENTER_SQUARES]

    def select_move(self, moves: Sequence[Move], difficulty: Difficulty) -> Move:
        """
        按难度选择一个走法

        Args:
            moves: 脚本方的全部合法走法
            difficulty: 难度

        Returns:
            Move: 选中的走法
        """
        if not moves:
            raise ValueError("没有可供选择的走法")

        candidates = list(moves)
        tier = 'random'

        if difficulty in (Difficulty.MEDIUM, Difficulty.HARD):
            captures = self.capturing_moves(moves)
            if captures:
                candidates, tier = captures, 'capture'
            elif difficulty == Difficulty.HARD:
                centre = self.center_moves(moves)
                if centre:
                    candidates, tier = centre, 'center'

        move = self.rng.choice(candidates)
        self.log_debug(f"难度 {difficulty.value} 选择层 {tier}, 候选 {len(candidates)} 个, 走法 {move}")
        return move
