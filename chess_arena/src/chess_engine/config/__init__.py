"""
配置管理模块

包含引擎配置和系统配置。
"""

from .config_manager import ConfigManager
from .engine_config import EngineConfig, SystemConfig, DIFFICULTIES, SIDES

__all__ = ['ConfigManager', 'EngineConfig', 'SystemConfig', 'DIFFICULTIES', 'SIDES']
