"""
异常定义

定义国际象棋规则引擎的各种异常类型。
"""


class ChessEngineError(Exception):
    """
    规则引擎基础异常

    所有引擎相关异常的基类。
    """

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__

    def __str__(self):
        return f"[{self.error_code}] {self.message}"


class MoveRejectedError(ChessEngineError):
    """
    走法被拒绝

    调用方违反对局协议时抛出的异常基类，均为确定性错误，不可重试。
    """
    pass


class NotActiveError(MoveRejectedError):
    """
    对局未进行异常

    当对已结束或已放弃的对局提交走法时抛出。
    """

    def __init__(self, status: str):
        super().__init__(f"对局未在进行中: {status}", "NOT_ACTIVE")
        self.status = status


class WrongTurnError(MoveRejectedError):
    """
    非当前回合异常

    当起始格上不是当前行棋方的棋子时抛出。
    """

    def __init__(self, from_pos, current_turn: str):
        super().__init__(f"起始格 {from_pos} 上没有{current_turn}方的棋子", "WRONG_TURN")
        self.from_pos = from_pos
        self.current_turn = current_turn


class IllegalMoveError(MoveRejectedError):
    """
    非法走法异常

    走法形状不合法、路径被阻挡或会使己方王被攻击时抛出。
    """

    def __init__(self, from_pos, to_pos, reason: str = ""):
        message = f"非法走法: {from_pos} -> {to_pos}"
        if reason:
            message += f" - {reason}"
        super().__init__(message, "ILLEGAL_MOVE")
        self.from_pos = from_pos
        self.to_pos = to_pos
        self.reason = reason


class GameStateError(ChessEngineError):
    """
    游戏状态异常

    当游戏状态无效或不一致时抛出。
    """

    def __init__(self, state_description: str, reason: str = ""):
        message = f"游戏状态错误: {state_description}"
        if reason:
            message += f" - {reason}"
        super().__init__(message, "GAME_STATE_ERROR")
        self.state_description = state_description
        self.reason = reason


class KingNotFoundError(GameStateError):
    """
    找不到王

    只可能由上游逻辑错误引起，属于致命的内部错误。
    """

    def __init__(self, side: str):
        super().__init__(f"棋盘上找不到{side}方的王", "违反每方恰有一个王的不变量")
        self.side = side


class ConfigurationError(ChessEngineError):
    """
    配置错误异常

    当配置参数无效时抛出。
    """

    def __init__(self, config_name: str, reason: str = ""):
        message = f"配置错误 - {config_name}"
        if reason:
            message += f": {reason}"
        super().__init__(message, "CONFIG_ERROR")
        self.config_name = config_name
        self.reason = reason
