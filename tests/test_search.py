import numpy as np
import pytest

from c4arena.engine import Connect4Config, Stone, board_from_rows, is_winning, legal_moves, new_board, place
from c4arena.evaluation import score
from c4arena.search import INFINITY, WIN_SCORE, SearchStats, alphabeta, choose_move, minimax

CFG = Connect4Config()

# RED to move, wins at 0 (bottom-left corner).
IMMEDIATE_WIN = [
    ".......",
    ".......",
    "....O..",
    ".XXXOO.",
]

# RED to move, BLUE threatens 0; every other move loses at once.
MUST_BLOCK = [
    ".......",
    ".......",
    "..XX...",
    ".OOOX..",
]

DRAWN = [
    "OOXXOOX",
    "XXOOXXO",
    "OOXXOOX",
    "XXOOXXO",
]


def _random_positions(seed, count):
    rng = np.random.default_rng(seed)
    positions = []
    while len(positions) < count:
        board = new_board(CFG)
        color = Stone.RED
        for _ in range(int(rng.integers(2, 18))):
            moves = legal_moves(CFG, board)
            place(CFG, board, moves[int(rng.integers(len(moves)))], color)
            if is_winning(CFG, board, color):
                break
            color = color.opponent()
        else:
            positions.append((board, color))
    return positions


@pytest.mark.parametrize("depth", [1, 2])
def test_takes_immediate_win(depth):
    board = board_from_rows(CFG, IMMEDIATE_WIN)
    result = choose_move(CFG, board, Stone.RED, depth)
    assert result.move == 0
    assert result.score == WIN_SCORE


@pytest.mark.parametrize("depth", [1, 2, 3, 4])
def test_immediate_win_scores_win_sentinel(depth):
    board = board_from_rows(CFG, IMMEDIATE_WIN)
    assert choose_move(CFG, board, Stone.RED, depth).score == WIN_SCORE


@pytest.mark.parametrize("depth", [2, 3, 4])
def test_blocks_forced_loss(depth):
    board = board_from_rows(CFG, MUST_BLOCK)
    result = choose_move(CFG, board, Stone.RED, depth)
    assert result.move == 0
    assert result.score > -WIN_SCORE


def test_full_width_scores_every_other_move_as_lost():
    board = board_from_rows(CFG, MUST_BLOCK)
    result = choose_move(CFG, board, Stone.RED, 2, pruning=False)
    assert set(result.root_scores) == set(legal_moves(CFG, board))
    assert all(v == -WIN_SCORE for m, v in result.root_scores.items() if m != 0)


def test_depth_one_cannot_see_the_threat():
    board = board_from_rows(CFG, MUST_BLOCK)
    result = choose_move(CFG, board, Stone.RED, 1)
    # Horizon effect: one ply only looks at the position value.
    assert result.score > -WIN_SCORE


@pytest.mark.parametrize("pruning", [True, False])
def test_empty_board_regression(pruning):
    results = [choose_move(CFG, new_board(CFG), Stone.RED, 4, pruning=pruning) for _ in range(3)]
    assert {(r.move, r.score) for r in results} == {(3, 0)}


def test_search_leaves_board_untouched():
    for board, color in _random_positions(seed=3, count=10):
        before = board.copy()
        choose_move(CFG, board, color, 4)
        assert np.array_equal(board, before)
        choose_move(CFG, board, color, 3, pruning=False)
        assert np.array_equal(board, before)


@pytest.mark.parametrize("depth", [1, 2, 3, 4, 5])
def test_pruning_matches_full_width_on_empty_board(depth):
    pruned = choose_move(CFG, new_board(CFG), Stone.RED, depth, pruning=True)
    full = choose_move(CFG, new_board(CFG), Stone.RED, depth, pruning=False)
    assert (pruned.move, pruned.score) == (full.move, full.score)


def test_pruning_matches_full_width_on_random_positions():
    positions = _random_positions(seed=42, count=25)
    positions.append((board_from_rows(CFG, IMMEDIATE_WIN), Stone.RED))
    positions.append((board_from_rows(CFG, MUST_BLOCK), Stone.RED))
    for board, color in positions:
        for depth in (1, 2, 3, 4):
            pruned = choose_move(CFG, board, color, depth, pruning=True)
            full = choose_move(CFG, board, color, depth, pruning=False)
            assert (pruned.move, pruned.score) == (full.move, full.score)


def test_pruning_saves_work():
    pruned = choose_move(CFG, new_board(CFG), Stone.RED, 4, pruning=True)
    full = choose_move(CFG, new_board(CFG), Stone.RED, 4, pruning=False)
    assert pruned.stats.cutoffs > 0
    assert full.stats.cutoffs == 0
    assert pruned.stats.nodes < full.stats.nodes


def test_stats_are_accumulated_into_caller_object():
    stats = SearchStats()
    result = choose_move(CFG, new_board(CFG), Stone.RED, 2, stats=stats)
    assert result.stats is stats
    assert stats.nodes > 0


def test_depth_is_clamped_to_empty_cells():
    rows = list(DRAWN)
    rows[0] = "OOXXO.."
    board = board_from_rows(CFG, rows)
    before = board.copy()
    result = choose_move(CFG, board, Stone.RED, 10)
    assert result.depth == 2
    assert result.move in (26, 27)
    assert np.array_equal(board, before)


def test_drawn_board_is_scored_by_evaluator():
    board = board_from_rows(CFG, DRAWN)
    assert legal_moves(CFG, board) == []
    expected = score(CFG, board, Stone.RED)
    assert alphabeta(CFG, board, Stone.RED, 3, -INFINITY, INFINITY, SearchStats()) == expected
    assert minimax(CFG, board, Stone.RED, 3, SearchStats()) == expected
    assert abs(expected) < WIN_SCORE


def test_node_after_opponent_win_returns_loss_sentinel():
    board = board_from_rows(CFG, [".......", "X......", "X......", "X..OOOO"])
    assert alphabeta(CFG, board, Stone.RED, 0, -INFINITY, INFINITY, SearchStats()) == -WIN_SCORE
    assert minimax(CFG, board, Stone.RED, 2, SearchStats()) == -WIN_SCORE


def test_rejects_full_board():
    with pytest.raises(ValueError):
        choose_move(CFG, board_from_rows(CFG, DRAWN), Stone.RED, 4)


def test_rejects_decided_board():
    board = board_from_rows(CFG, [".......", "X......", "X......", "X..OOOO"])
    with pytest.raises(ValueError):
        choose_move(CFG, board, Stone.RED, 4)


def test_rejects_non_positive_depth():
    with pytest.raises(ValueError):
        choose_move(CFG, new_board(CFG), Stone.RED, 0)


def test_works_on_other_board_shapes():
    cfg = Connect4Config(width=5, height=5)
    result = choose_move(cfg, new_board(cfg), Stone.BLUE, 3)
    assert result.move in legal_moves(cfg, new_board(cfg))
    pruned = choose_move(cfg, new_board(cfg), Stone.BLUE, 3, pruning=True)
    full = choose_move(cfg, new_board(cfg), Stone.BLUE, 3, pruning=False)
    assert (pruned.move, pruned.score) == (full.move, full.score)
