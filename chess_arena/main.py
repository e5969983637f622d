#!/usr/bin/env python3
"""
Chess Arena 主入口文件

提供命令行界面：在终端与脚本对手对弈、列出局面的合法走法。
命令行只是规则引擎的一个调用方，持有对局状态并负责串行提交走法。
"""

import random
import sys
from dataclasses import replace
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from chess_arena import __version__, __description__
from chess_arena.src.chess_engine.config import ConfigManager, DIFFICULTIES
from chess_arena.src.chess_engine.game_interface import (
    GameState, GameStatus, GameStateMachine, OpponentPolicy, Winner
)
from chess_arena.src.chess_engine.rules_engine import (
    ChessBoard, RuleEngine, parse_square, player_name, player_from_name, opponent
)
from chess_arena.src.chess_engine.utils import (
    configure_from_system_config, ChessEngineError, ConfigurationError, MoveRejectedError
)

console = Console()


def print_banner():
    """打印项目横幅"""
    banner_text = Text()
    banner_text.append("♔ Chess Arena ♚\n", style="bold blue")
    banner_text.append(f"版本: {__version__}\n", style="green")
    banner_text.append(__description__, style="white")

    console.print(Panel(banner_text, title="国际象棋人机对弈", title_align="center",
                        border_style="blue", padding=(1, 2)))


def render_state(state: GameState):
    """打印棋盘和对局信息"""
    console.print(Panel(state.board.to_visual_string(), border_style="cyan", expand=False))

    captured = state.captured_pieces
    white_captures = " ".join(ChessBoard.PIECE_SYMBOLS[p] for p in captured.white) or "-"
    black_captures = " ".join(ChessBoard.PIECE_SYMBOLS[p] for p in captured.black) or "-"
    console.print(f"白方吃子: {white_captures}    黑方吃子: {black_captures}")

    if state.last_move:
        console.print(f"上一步: [bold]{state.last_move}[/bold]")
    if state.is_check and state.is_active:
        console.print("[bold red]将军！[/bold red]")


def print_moves(machine: GameStateMachine, state: GameState):
    """打印当前行棋方的全部合法走法"""
    moves = machine.generate_legal_moves(state.board, state.current_turn)
    console.print(" ".join(move.to_coordinate_notation() for move in moves))


def print_result(state: GameState, human_side: int):
    """打印对局结果"""
    if state.status == GameStatus.ABANDONED:
        console.print("[yellow]对局已放弃[/yellow]")
    elif state.winner == Winner.DRAW:
        console.print("[bold yellow]逼和，和棋！[/bold yellow]")
    elif state.winner == Winner.from_player(human_side):
        console.print("[bold green]将死，你赢了！[/bold green]")
    else:
        console.print("[bold magenta]将死，脚本对手获胜！[/bold magenta]")


@click.group()
@click.version_option(version=__version__, prog_name="Chess Arena")
@click.option('--config-dir', type=click.Path(file_okay=False), default=None, help='配置文件目录')
@click.pass_context
def cli(ctx: click.Context, config_dir: Optional[str]):
    """国际象棋人机对弈 - 规则引擎与按难度分层的脚本对手"""
    ctx.ensure_object(dict)
    manager = ConfigManager(config_dir) if config_dir else ConfigManager()
    for config_name in ('engine', 'system'):
        if not manager.validate_config(config_name):
            raise ConfigurationError(config_name, f"{manager.config_dir} 中的配置取值无效")
    configure_from_system_config(manager.get_system_config())
    ctx.obj['engine_config'] = manager.get_engine_config()


@cli.command()
@click.option('--difficulty', type=click.Choice(list(DIFFICULTIES)), default=None, help='对手难度')
@click.option('--seed', type=int, default=None, help='对手随机数种子')
@click.pass_context
def play(ctx: click.Context, difficulty: Optional[str], seed: Optional[int]):
    """在终端与脚本对手对弈"""
    engine_config = ctx.obj['engine_config']
    difficulty = difficulty or engine_config.default_difficulty
    seed = seed if seed is not None else engine_config.random_seed

    machine = GameStateMachine(
        policy=OpponentPolicy(random.Random(seed)),
        scripted_side=engine_config.scripted_side
    )
    human_side = opponent(machine.scripted_side)
    state = machine.create_initial_state(difficulty)

    print_banner()
    console.print(f"你执{'白' if human_side > 0 else '黑'}棋，难度: [bold]{difficulty}[/bold]")
    console.print("输入走法如 [bold]e2e4[/bold]；输入 [bold]moves[/bold] 查看合法走法，[bold]quit[/bold] 放弃对局")

    while state.is_active:
        if state.current_turn == machine.scripted_side:
            state = machine.apply_opponent_move(state)
            continue

        render_state(state)
        command = click.prompt(f"{player_name(human_side)}", type=str).strip().lower()

        if command in ('quit', 'exit'):
            state = replace(state, status=GameStatus.ABANDONED)
            break
        if command == 'moves':
            print_moves(machine, state)
            continue

        try:
            if len(command) != 4:
                raise ValueError(f"无效的坐标记法: {command}")
            from_pos, to_pos = parse_square(command[:2]), parse_square(command[2:])
        except ValueError as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            continue

        try:
            state = machine.apply_player_move(state, from_pos, to_pos)
        except MoveRejectedError as e:
            console.print(f"[red]{escape(str(e))}[/red]")

    render_state(state)
    print_result(state, human_side)


@cli.command()
@click.option('--fen', type=str, default=ChessBoard.INITIAL_FEN, help='FEN格式的棋子布局')
@click.option('--side', type=click.Choice(['white', 'black']), default='white', help='行棋方')
def moves(fen: str, side: str):
    """列出局面中指定一方的全部合法走法"""
    try:
        board = ChessBoard(fen)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint='--fen') from e
    player = player_from_name(side)
    engine = RuleEngine()

    console.print(board.to_visual_string())
    status = engine.get_game_status(board, player)

    table = Table(title=f"{side} 合法走法 ({status['legal_moves_count']})")
    table.add_column("走法")
    table.add_column("棋子")
    table.add_column("吃子")
    for move in engine.generate_legal_moves(board, player):
        table.add_row(
            move.to_coordinate_notation(),
            ChessBoard.PIECE_SYMBOLS[move.piece],
            ChessBoard.PIECE_SYMBOLS[move.captured_piece] if move.captured_piece else ""
        )
    console.print(table)

    if status['checkmate']:
        console.print(f"[bold red]将死，{status['winner']} 获胜[/bold red]")
    elif status['stalemate']:
        console.print("[bold yellow]逼和[/bold yellow]")
    elif status['in_check']:
        console.print("[red]被将军[/red]")


@cli.command()
def info():
    """显示系统信息"""
    print_banner()


def main():
    """主入口函数"""
    try:
        cli(obj={})
    except KeyboardInterrupt:
        console.print("\n[yellow]程序被用户中断[/yellow]")
        sys.exit(0)
    except ChessEngineError as e:
        console.print(f"[red]发生错误: {escape(str(e))}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
