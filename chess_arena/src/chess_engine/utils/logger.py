"""
日志系统

所有记录器都挂在 chess_arena 之下，由命令行入口按系统配置统一设置。
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

ROOT_LOGGER = 'chess_arena'

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logger(
    name: str = ROOT_LOGGER,
    level: str = 'INFO',
    log_file: Optional[str] = None,
    log_dir: str = 'logs/chess_engine',
    max_size: int = 10,  # MB
    backup_count: int = 5,
    console_output: bool = True
) -> logging.Logger:
    """
    设置日志记录器

    同名记录器只配置一次，重复调用直接返回已有的记录器。

    Args:
        name: 日志记录器名称
        level: 日志级别
        log_file: 日志文件名，None表示不写文件
        log_dir: 日志目录
        max_size: 日志文件最大大小(MB)
        backup_count: 备份文件数量
        console_output: 是否输出到控制台

    Returns:
        logging.Logger: 配置好的日志记录器
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    log_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(log_level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = []
    if console_output:
        handlers.append(logging.StreamHandler(sys.stdout))

    if log_file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            filename=log_path / log_file,
            maxBytes=max_size * 1024 * 1024,
            backupCount=backup_count,
            encoding='utf-8'
        ))

    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    # 没有任何输出时避免 "No handlers" 警告
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger


def configure_from_system_config(system_config) -> logging.Logger:
    """
    按系统配置设置根记录器

    Args:
        system_config: SystemConfig 对象

    Returns:
        logging.Logger: chess_arena 根记录器
    """
    return setup_logger(
        name=ROOT_LOGGER,
        level=system_config.log_level,
        log_file=system_config.log_file or None,
        log_dir=system_config.log_dir,
        max_size=system_config.log_max_size,
        backup_count=system_config.log_backup_count,
        console_output=system_config.console_output
    )


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """获取日志记录器"""
    return logging.getLogger(name)


class LoggerMixin:
    """
    日志记录器混入类

    记录器名称为 chess_arena.<类名>。
    """

    @property
    def logger(self) -> logging.Logger:
        return get_logger(f'{ROOT_LOGGER}.{self.__class__.__name__}')

    def log_info(self, message: str, *args, **kwargs):
        self.logger.info(message, *args, **kwargs)

    def log_warning(self, message: str, *args, **kwargs):
        self.logger.warning(message, *args, **kwargs)

    def log_error(self, message: str, *args, **kwargs):
        self.logger.error(message, *args, **kwargs)

    def log_debug(self, message: str, *args, **kwargs):
        self.logger.debug(message, *args, **kwargs)
