"""
命令行界面测试
"""

import sys

import pytest
from click.testing import CliRunner

from chess_arena.main import cli, main
from chess_arena.src.chess_engine.utils import ConfigurationError


class TestCLI:
    """命令行界面的测试"""

    def setup_method(self):
        self.runner = CliRunner()

    def invoke(self, tmp_path, *args, **kwargs):
        return self.runner.invoke(cli, ['--config-dir', str(tmp_path / 'configs'), *args], **kwargs)

    def test_info(self, tmp_path):
        result = self.invoke(tmp_path, 'info')

        assert result.exit_code == 0
        assert "Chess Arena" in result.output
        assert (tmp_path / 'configs' / 'engine_config.yaml').exists()

    def test_moves_initial_position(self, tmp_path):
        """测试列出初始局面的合法走法"""
        result = self.invoke(tmp_path, 'moves')

        assert result.exit_code == 0
        assert "e2e4" in result.output
        assert "g1f3" in result.output
        assert "(20)" in result.output

    def test_moves_checkmate(self, tmp_path):
        result = self.invoke(tmp_path, 'moves', '--fen', 'R5k1/5ppp/8/8/8/8/8/6K1', '--side', 'black')

        assert result.exit_code == 0
        assert "(0)" in result.output
        assert "将死" in result.output

    def test_moves_invalid_fen(self, tmp_path):
        """测试无效FEN作为参数错误报告"""
        result = self.invoke(tmp_path, 'moves', '--fen', '8/8/8')

        assert result.exit_code == 2
        assert not isinstance(result.exception, ValueError)
        assert "--fen" in result.output
        assert "FEN格式应包含8行" in result.output

    def test_invalid_engine_config(self, tmp_path):
        """测试配置文件取值无效时报告配置错误"""
        config_dir = tmp_path / 'configs'
        config_dir.mkdir()
        (config_dir / 'engine_config.yaml').write_text("scripted_side: red\n", encoding='utf-8')

        result = self.invoke(tmp_path, 'play')

        assert isinstance(result.exception, ConfigurationError)
        assert result.exception.error_code == "CONFIG_ERROR"
        assert result.exception.config_name == 'engine'

    def test_main_reports_config_error(self, tmp_path, monkeypatch, capsys):
        """测试主入口把配置错误输出为错误信息并以状态码1退出"""
        config_dir = tmp_path / 'configs'
        config_dir.mkdir()
        (config_dir / 'engine_config.yaml').write_text("default_difficulty: extreme\n", encoding='utf-8')
        monkeypatch.setattr(sys, 'argv', ['chess-arena', '--config-dir', str(config_dir), 'info'])

        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 1
        assert "CONFIG_ERROR" in capsys.readouterr().out

    def test_play_and_quit(self, tmp_path):
        """测试对弈：非法输入重新提示，合法走法后脚本对手应对，最后放弃"""
        result = self.invoke(
            tmp_path, 'play', '--difficulty', 'hard', '--seed', '3',
            input="e2e5\nzz\nmoves\ne2e4\nquit\n"
        )

        assert result.exit_code == 0
        assert "ILLEGAL_MOVE" in result.output
        assert "无效的坐标记法" in result.output
        assert "g1f3" in result.output
        assert "上一步" in result.output
        assert "对局已放弃" in result.output

    def test_play_wrong_turn(self, tmp_path):
        result = self.invoke(tmp_path, 'play', input="e7e5\nquit\n")

        assert result.exit_code == 0
        assert "WRONG_TURN" in result.output

    def test_play_rejects_unknown_difficulty(self, tmp_path):
        result = self.invoke(tmp_path, 'play', '--difficulty', 'impossible')
        assert result.exit_code != 0
