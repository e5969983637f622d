"""
引擎配置数据结构

定义各种配置类和默认参数。
"""

from dataclasses import dataclass
from typing import Optional

DIFFICULTIES = ('easy', 'medium', 'hard')
SIDES = ('white', 'black')


@dataclass
class EngineConfig:
    """规则引擎与脚本对手配置"""
    scripted_side: str = 'black'            # 由脚本对手控制的一方
    default_difficulty: str = 'medium'      # 新对局的默认难度
    random_seed: Optional[int] = None       # 对手随机数种子，None表示不固定


@dataclass
class SystemConfig:
    """系统配置"""
    # 日志配置
    log_level: str = 'INFO'                 # 日志级别
    log_file: str = ''                      # 日志文件，空表示不写文件
    log_dir: str = 'logs'                   # 日志目录
    log_max_size: int = 10                  # 日志文件最大大小(MB)
    log_backup_count: int = 5               # 日志备份数量
    console_output: bool = False            # 是否输出到控制台


# 默认配置实例
DEFAULT_ENGINE_CONFIG = EngineConfig()
DEFAULT_SYSTEM_CONFIG = SystemConfig()
