"""
工具模块

包含日志、异常处理和其他通用工具。
"""

from .logger import setup_logger, configure_from_system_config, get_logger, LoggerMixin
from .exceptions import (
    ChessEngineError, MoveRejectedError, NotActiveError, WrongTurnError,
    IllegalMoveError, GameStateError, KingNotFoundError, ConfigurationError
)

__all__ = [
    'setup_logger', 'configure_from_system_config', 'get_logger', 'LoggerMixin',
    'ChessEngineError', 'MoveRejectedError', 'NotActiveError', 'WrongTurnError',
    'IllegalMoveError', 'GameStateError', 'KingNotFoundError', 'ConfigurationError'
]
