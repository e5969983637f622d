"""
对局状态机

负责轮次交替、将军/将死/逼和判定以及吃子和走法历史记录。
每个操作接收一个对局状态并返回新的状态，从不修改传入的状态；
走法要么完整生效，要么抛出异常，不存在中间状态。
"""

import time
from dataclasses import replace
from typing import Callable, List, Optional, Tuple, Union

from ..rules_engine import ChessBoard, Move, RuleEngine, BLACK, opponent, player_name, player_from_name
from ..utils.exceptions import NotActiveError, WrongTurnError, IllegalMoveError
from ..utils.logger import LoggerMixin
from .game_state import GameState, GameStatus, Difficulty, Winner
from .opponent_policy import OpponentPolicy


class GameStateMachine(LoggerMixin):
    """
    对局状态机

    调用方需保证对同一局对局同一时刻只有一个调用在进行，
    并且总是基于最新提交的状态调用。
    """

    def __init__(self, rule_engine: Optional[RuleEngine] = None,
                 policy: Optional[OpponentPolicy] = None,
                 scripted_side: Union[int, str] = BLACK,
                 clock: Callable[[], float] = time.time):
        """
        初始化状态机

        Args:
            rule_engine: 规则引擎
            policy: 脚本对手走法选择器
            scripted_side: 由脚本对手控制的一方
            clock: 走法记录时间来源
        """
        self.rule_engine = rule_engine or RuleEngine()
        self.policy = policy or OpponentPolicy()
        if isinstance(scripted_side, str):
            scripted_side = player_from_name(scripted_side)
        self.scripted_side = scripted_side
        self.clock = clock

    def create_initial_state(self, difficulty: Union[Difficulty, str] = Difficulty.MEDIUM) -> GameState:
        """
        创建新对局：标准初始局面，白方先行

        Args:
            difficulty: 难度，整局不变

        Returns:
            GameState: 初始对局状态
        """
        difficulty = Difficulty(difficulty)
        state = GameState(board=ChessBoard(), difficulty=difficulty)
        self.log_info(f"创建新对局，难度: {difficulty.value}")
        return state

    def generate_legal_moves(self, board: ChessBoard, side: Union[int, str]) -> List[Move]:
        """生成指定一方的全部合法走法"""
        if isinstance(side, str):
            side = player_from_name(side)
        return self.rule_engine.generate_legal_moves(board, side)

    def apply_player_move(self, state: GameState, from_pos: Tuple[int, int],
                          to_pos: Tuple[int, int]) -> GameState:
        """
        执行玩家走法

        Args:
            state: 当前对局状态
            from_pos: 起始位置
            to_pos: 目标位置

        Returns:
            GameState: 新的对局状态

        Raises:
            NotActiveError: 对局未在进行中
            WrongTurnError: 起始格上不是当前行棋方的棋子
            IllegalMoveError: 走法不合法
        """
        from_pos, to_pos = tuple(from_pos), tuple(to_pos)

        if state.status != GameStatus.ACTIVE:
            self.log_warning(f"拒绝走法 {from_pos}->{to_pos}: 对局状态 {state.status.value}")
            raise NotActiveError(state.status.value)

        side = state.current_turn
        if not state.board.is_own_piece(from_pos, side):
            self.log_warning(f"拒绝走法 {from_pos}->{to_pos}: 不是{player_name(side)}方的棋子")
            raise WrongTurnError(from_pos, player_name(side))

        if not self.rule_engine.is_legal(state.board, from_pos, to_pos, side):
            self.log_warning(f"拒绝走法 {from_pos}->{to_pos}: 非法")
            raise IllegalMoveError(from_pos, to_pos, "形状不合法、路径被阻挡或会使己方王被攻击")

        captured = state.board.get_piece_at(to_pos)
        move = Move(
            from_pos=from_pos,
            to_pos=to_pos,
            piece=state.board.get_piece_at(from_pos),
            captured_piece=captured if captured != ChessBoard.EMPTY else None
        )
        return self._commit(state, move)

    def apply_opponent_move(self, state: GameState) -> GameState:
        """
        执行脚本对手的走法

        不是脚本方的回合或对局未在进行中时，原样返回状态。
        脚本方没有合法走法时，不改动棋盘直接结束对局。

        Args:
            state: 当前对局状态

        Returns:
            GameState: 新的对局状态
        """
        if state.status != GameStatus.ACTIVE or state.current_turn != self.scripted_side:
            return state

        moves = self.rule_engine.generate_legal_moves(state.board, self.scripted_side)
        if not moves:
            in_check = self.rule_engine.is_in_check(state.board, self.scripted_side)
            return self._finish(replace(state, is_check=in_check), in_check)

        move = self.policy.select_move(moves, state.difficulty)
        return self._commit(state, move)

    def legal_destinations(self, state: GameState, from_pos: Tuple[int, int]) -> List[Tuple[int, int]]:
        """当前行棋方指定棋子的合法目标格，用于界面高亮"""
        if not state.is_active or not state.board.is_own_piece(from_pos, state.current_turn):
            return []
        return self.rule_engine.legal_destinations(state.board, from_pos)

    def _commit(self, state: GameState, move: Move) -> GameState:
        """提交一步已验证的走法并重新计算对方的将军/将死/逼和"""
        mover = state.current_turn
        new_board = state.board.apply_move(move.from_pos, move.to_pos)

        captured_pieces = state.captured_pieces
        if move.captured_piece is not None:
            captured_pieces = captured_pieces.add(mover, move.captured_piece)

        next_turn = opponent(mover)
        in_check = self.rule_engine.is_in_check(new_board, next_turn)

        new_state = replace(
            state,
            board=new_board,
            current_turn=next_turn,
            captured_pieces=captured_pieces,
            move_history=state.move_history + (move.with_timestamp(self.clock()),),
            is_check=in_check
        )
        self.log_debug(f"{player_name(mover)}: {move}{' +' if in_check else ''}")

        if not self.rule_engine.generate_legal_moves(new_board, next_turn):
            return self._finish(new_state, in_check)

        return new_state

    def _finish(self, state: GameState, in_check: bool) -> GameState:
        """当前行棋方无子可动：被将军则对方获胜，否则和棋"""
        if in_check:
            winner = Winner.from_player(opponent(state.current_turn))
        else:
            winner = Winner.DRAW
        self.log_info(f"对局结束，结果: {winner.value}")
        return replace(state, status=GameStatus.FINISHED, winner=winner)


_default_machine: Optional[GameStateMachine] = None


def _machine() -> GameStateMachine:
    global _default_machine
    if _default_machine is None:
        _default_machine = GameStateMachine()
    return _default_machine


def create_initial_state(difficulty: Union[Difficulty, str] = Difficulty.MEDIUM) -> GameState:
    """使用默认状态机创建新对局"""
    return _machine().create_initial_state(difficulty)


def apply_player_move(state: GameState, from_pos: Tuple[int, int], to_pos: Tuple[int, int]) -> GameState:
    """使用默认状态机执行玩家走法"""
    return _machine().apply_player_move(state, from_pos, to_pos)


def apply_opponent_move(state: GameState) -> GameState:
    """使用默认状态机 (黑方为脚本方) 执行脚本对手走法"""
    return _machine().apply_opponent_move(state)


def generate_legal_moves(board: ChessBoard, side: Union[int, str]) -> List[Move]:
    """生成指定一方的全部合法走法"""
    return _machine().generate_legal_moves(board, side)
