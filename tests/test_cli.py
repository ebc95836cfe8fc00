from typer.testing import CliRunner

from c4arena.cli import app, build_agent, render_board
from c4arena.agents import GreedyAgent, HumanAgent, SearchAgent
from c4arena.engine import Connect4Config, board_from_rows, new_board

CFG = Connect4Config()

runner = CliRunner()


def test_render_empty_board_shows_bottom_row_indices():
    text = render_board(CFG, new_board(CFG))
    lines = text.splitlines()
    assert len(lines) == 4
    assert "[white]0  [/]" in lines[-1]
    assert "[white]6  [/]" in lines[-1]
    assert "[white]7" not in text


def test_render_stones_and_playable_cells():
    board = board_from_rows(CFG, [".......", ".......", ".......", "XO....."])
    text = render_board(CFG, board)
    assert "[bold red]X[/]" in text
    assert "[bold blue]O[/]" in text
    assert "[white]7  [/]" in text
    assert "[white]8  [/]" in text


def test_build_agent():
    assert isinstance(build_agent("greedy", "RED", 3), GreedyAgent)
    assert isinstance(build_agent("human", "RED", 3), HumanAgent)
    minimax = build_agent("minimax", "RED", 3)
    assert isinstance(minimax, SearchAgent) and not minimax.pruning
    alphabeta = build_agent("alphabeta", "BLUE", 5)
    assert isinstance(alphabeta, SearchAgent) and alphabeta.pruning and alphabeta.max_depth == 5


def test_play_greedy_vs_greedy():
    result = runner.invoke(app, ["play", "--red", "greedy", "--blue", "greedy"])
    assert result.exit_code == 0, result.output
    assert "winner is: RED" in result.output


def test_play_search_vs_greedy():
    result = runner.invoke(app, ["play", "--red", "alphabeta", "--blue", "greedy", "--depth", "3", "-v"])
    assert result.exit_code == 0, result.output


def test_play_rejects_unknown_agent():
    result = runner.invoke(app, ["play", "--red", "oracle", "--blue", "greedy"])
    assert result.exit_code != 0


def test_play_rejects_bad_board_shape():
    result = runner.invoke(app, ["play", "--red", "greedy", "--blue", "greedy", "--width", "2", "--height", "2"])
    assert result.exit_code != 0


def test_match():
    result = runner.invoke(app, ["match", "--red", "greedy", "--blue", "greedy", "--games", "2"])
    assert result.exit_code == 0, result.output
    assert "Greedy A" in result.output
    assert "Greedy B" in result.output
    assert "draws" in result.output


def test_match_rejects_human():
    result = runner.invoke(app, ["match", "--red", "human", "--blue", "greedy"])
    assert result.exit_code != 0
