"""CLI rendering and input helpers for Connect-4."""

from __future__ import annotations

import logging
from typing import List, Optional

import numpy as np
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from c4arena.agents import Agent, GreedyAgent, HumanAgent, SearchAgent
from c4arena.arena import play_game, play_match
from c4arena.engine import EMPTY, Connect4Config, Stone, is_legal_move, legal_moves, to_debug_string

app = typer.Typer(no_args_is_help=True)
console = Console()

AGENT_CHOICES = ("human", "greedy", "minimax", "alphabeta")


def render_board(cfg: Connect4Config, board: np.ndarray) -> str:
    """Rich markup for the board, top row first; playable cells show their index."""

    lines: List[str] = []
    for r in range(cfg.height - 1, -1, -1):
        cells = []
        for c in range(cfg.width):
            index = r * cfg.width + c
            value = int(board[index])
            if value == EMPTY and is_legal_move(cfg, board, index):
                cells.append(f"[white]{index:<3}[/]")
            elif value == EMPTY:
                cells.append("[white].[/]  ")
            elif value == Stone.RED:
                cells.append("[bold red]X[/]  ")
            else:
                cells.append("[bold blue]O[/]  ")
        lines.append("".join(cells).rstrip())
    return "\n".join(lines)


def _parse_index(raw: str) -> Optional[int]:
    raw = raw.strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def prompt_for_human_move(cfg: Connect4Config, board: np.ndarray, color: Stone, name: str) -> int:
    legal = sorted(legal_moves(cfg, board))
    prompt = f"{name} ({color.symbol}) to move. Position {legal}: "

    while True:
        index = _parse_index(input(prompt))
        if index is None:
            console.print("Enter one of the positions shown on the board.")
            continue
        if index not in legal:
            console.print("Illegal move: occupied, floating or off the board.")
            continue
        return index


def _setup_logging(verbose: int) -> None:
    if verbose <= 0:
        return
    level = logging.INFO if verbose == 1 else logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _make_config(width: int, height: int) -> Connect4Config:
    cfg = Connect4Config(width=width, height=height)
    try:
        cfg.validate()
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    return cfg


def build_agent(choice: str, name: str, depth: int) -> Agent:
    if choice == "human":
        return HumanAgent(name, prompt_for_human_move)
    if choice == "greedy":
        return GreedyAgent(f"Greedy {name}")
    if choice == "minimax":
        return SearchAgent(f"MinMax {name}", max_depth=depth, pruning=False)
    if choice == "alphabeta":
        return SearchAgent(f"AlphaBeta {name}", max_depth=depth)
    raise typer.BadParameter(f"agent must be one of {', '.join(AGENT_CHOICES)}")


def _print_move(cfg: Connect4Config, board: np.ndarray, color: Stone, index: int) -> None:
    console.print(f"{color.name} -> {index}")
    console.print(render_board(cfg, board))
    console.print("")


@app.command()
def play(
    red: str = typer.Option("human", help="Agent for RED (moves first): human|greedy|minimax|alphabeta."),
    blue: str = typer.Option("alphabeta", help="Agent for BLUE: human|greedy|minimax|alphabeta."),
    depth: int = typer.Option(8, min=1, help="Search depth (plies) for minimax/alphabeta agents."),
    depth_red: Optional[int] = typer.Option(None, min=1, help="Search depth for RED."),
    depth_blue: Optional[int] = typer.Option(None, min=1, help="Search depth for BLUE."),
    width: int = typer.Option(7, help="Board width."),
    height: int = typer.Option(4, help="Board height."),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="-v for search stats, -vv for root scores."),
) -> None:
    """Play a single game."""

    _setup_logging(verbose)
    cfg = _make_config(width, height)
    red_agent = build_agent(red, "RED", depth_red if depth_red is not None else depth)
    blue_agent = build_agent(blue, "BLUE", depth_blue if depth_blue is not None else depth)

    console.print(render_board(cfg, np.zeros((cfg.size,), dtype=np.int8)))
    console.print("")
    outcome = play_game(cfg, red_agent, blue_agent, on_move=_print_move)

    if outcome.winner is None:
        console.print(f"...it's a DRAW @ {to_debug_string(cfg, outcome.board)}")
    else:
        console.print(f"...and the winner is: {outcome.winner.name} @ {to_debug_string(cfg, outcome.board)}")


@app.command()
def match(
    red: str = typer.Option("greedy", help="First agent (RED in even games): greedy|minimax|alphabeta."),
    blue: str = typer.Option("alphabeta", help="Second agent: greedy|minimax|alphabeta."),
    games: int = typer.Option(10, min=1, help="Number of games; colors alternate every game."),
    depth: int = typer.Option(6, min=1, help="Search depth (plies) for minimax/alphabeta agents."),
    depth_red: Optional[int] = typer.Option(None, min=1, help="Search depth for the first agent."),
    depth_blue: Optional[int] = typer.Option(None, min=1, help="Search depth for the second agent."),
    width: int = typer.Option(7, help="Board width."),
    height: int = typer.Option(4, help="Board height."),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="-v for per-game results."),
) -> None:
    """Play a series of games between two computer agents."""

    if "human" in (red, blue):
        raise typer.BadParameter("matches are for computer agents only")
    _setup_logging(verbose)
    cfg = _make_config(width, height)
    first = build_agent(red, "A", depth_red if depth_red is not None else depth)
    second = build_agent(blue, "B", depth_blue if depth_blue is not None else depth)

    summary = play_match(cfg, first, second, games=games)

    table = Table(title=f"{summary.games} games on {cfg.width}x{cfg.height}")
    table.add_column("agent")
    table.add_column("wins", justify="right")
    for name, wins in summary.wins.items():
        table.add_row(name, str(wins))
    table.add_row("draws", str(summary.draws))
    console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
