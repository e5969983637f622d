"""
基础测试模块

测试项目的基本功能和导入。
"""

import pytest
from pathlib import Path

project_root = Path(__file__).parent.parent.parent


def test_project_import():
    """测试项目主模块是否可以正常导入"""
    try:
        import chess_arena
        assert chess_arena.__version__ == "0.1.0"
        assert chess_arena.__author__ == "Chess Arena Team"
    except ImportError as e:
        pytest.fail(f"无法导入chess_arena模块: {e}")


def test_submodules_import():
    """测试子模块是否可以正常导入"""
    try:
        from chess_arena.src import chess_engine
        from chess_arena.src.chess_engine import rules_engine, game_interface, config, utils

        assert chess_engine.__version__ == "0.1.0"
        assert hasattr(rules_engine, 'RuleEngine')
        assert hasattr(game_interface, 'GameStateMachine')
        assert hasattr(config, 'ConfigManager')
        assert hasattr(utils, 'setup_logger')

    except ImportError as e:
        pytest.fail(f"无法导入子模块: {e}")


def test_public_api_exports():
    """测试包顶层导出的接口"""
    from chess_arena.src import chess_engine

    for name in ('ChessBoard', 'Move', 'RuleEngine', 'GameState', 'GameStateMachine',
                 'OpponentPolicy', 'create_initial_state', 'apply_player_move',
                 'apply_opponent_move', 'generate_legal_moves'):
        assert hasattr(chess_engine, name), f"缺少导出: {name}"


def test_main_entry_points():
    """测试主入口文件是否存在"""
    file_path = project_root / "chess_arena/main.py"
    assert file_path.exists(), "主入口文件 chess_arena/main.py 不存在"


def test_directory_structure():
    """测试项目目录结构是否正确"""
    expected_dirs = [
        "chess_arena",
        "chess_arena/src",
        "chess_arena/src/chess_engine",
        "chess_arena/src/chess_engine/rules_engine",
        "chess_arena/src/chess_engine/game_interface",
        "chess_arena/src/chess_engine/config",
        "chess_arena/src/chess_engine/utils",
        "chess_arena/tests",
    ]

    for dir_path in expected_dirs:
        full_path = project_root / dir_path
        assert full_path.exists(), f"目录 {dir_path} 不存在"
        assert full_path.is_dir(), f"{dir_path} 不是目录"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
