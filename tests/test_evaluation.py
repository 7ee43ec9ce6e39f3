"""
Tests for position evaluation.
"""
import pytest
from wallgame.ai.evaluation import (
    EvaluationWeights,
    bounded_fill,
    centrality,
    connectivity,
    evaluate_state,
    game_progress,
    territory_potential,
)
from wallgame.core.board import Board
from wallgame.core.game import new_game
from wallgame.core.moves import Orientation

H = Orientation.HORIZONTAL
V = Orientation.VERTICAL


def movement_game(**kwargs):
    kwargs.setdefault('max_walls', 10)
    game = new_game(board_size=5, **kwargs)
    p0 = [(2, 3), (0, 0), (4, 0), (0, 4)]
    p1 = [(4, 4), (3, 4), (4, 3), (1, 4)]
    for a, b in zip(p0, p1):
        game.apply_placement(0, *a)
        game.apply_placement(1, *b)
    return game


def test_bounded_fill_stops_at_cap():
    """Test an open area is reported as not closed once the cap is hit."""
    board = Board(5)
    board.place_piece(2, 2, 0)

    size, closed = bounded_fill(board, 2, 2, cap=6)

    assert size == 6
    assert closed == False


def test_bounded_fill_closed_pocket():
    """Test a walled pocket is measured exactly."""
    board = Board(5)
    board.place_piece(0, 0, 0)
    board.set_wall(0, 2, H)
    board.set_wall(1, 0, V)
    board.set_wall(1, 1, V)

    assert bounded_fill(board, 0, 0, cap=20) == (2, True)


def test_bounded_fill_pocket_exactly_at_cap():
    """Test a sealed pocket the size of the cap still counts as closed."""
    board = Board(5)
    board.place_piece(0, 0, 0)
    for x, y, orientation in [(0, 2, H), (1, 2, H), (2, 0, V), (2, 1, V)]:
        board.set_wall(x, y, orientation)

    assert bounded_fill(board, 0, 0, cap=4) == (4, True)
    assert bounded_fill(board, 0, 0, cap=3) == (3, False)


def test_territory_potential_counts_pockets_only():
    """Test open surroundings add nothing and pockets add their size."""
    board = Board(5)
    board.place_piece(0, 0, 0)
    board.place_piece(4, 4, 0)
    board.set_wall(0, 2, H)
    board.set_wall(1, 0, V)
    board.set_wall(1, 1, V)

    assert territory_potential(board, [(4, 4)], cap=6) == 0
    assert territory_potential(board, [(0, 0), (4, 4)], cap=6) == 2

    # Scored territory is not counted again
    board.territory[0, 0] = 0
    board.territory[1, 0] = 0
    assert territory_potential(board, [(0, 0)], cap=6) == 0


def test_centrality_prefers_middle():
    board = Board(5)
    assert centrality(board, [(2, 2)]) == 4
    assert centrality(board, [(0, 0)]) == 0
    assert centrality(board, [(2, 2)]) > centrality(board, [(1, 0)])


def test_connectivity_counts_close_pairs():
    assert connectivity([(0, 0), (1, 1), (4, 4)]) == 1
    assert connectivity([(0, 0), (0, 2), (2, 0)]) == 2
    assert connectivity([]) == 0


def test_game_progress():
    """Test progress is the share of the wall budget already used."""
    game = movement_game()
    assert game_progress(game) == 0.0

    for x in range(5):
        game.board.set_wall(x, 1, H)
    assert game_progress(game) == pytest.approx(0.25)

    unlimited = movement_game(max_walls=None)
    for x in range(4):
        unlimited.board.set_wall(x, 1, H)
    assert game_progress(unlimited) == pytest.approx(0.1)

    assert game_progress(movement_game(max_walls=0)) == 1.0


def test_own_score_raises_value():
    """Test each point of own score is worth the score weight."""
    game = movement_game()
    before = evaluate_state(game, 0)

    game.players[0].score = 3

    assert evaluate_state(game, 0) - before == pytest.approx(30.0)


def test_opponent_score_lowers_value():
    """Test opponent score counts against the player."""
    game = movement_game()
    before = evaluate_state(game, 0)

    game.players[1].score = 2

    assert before - evaluate_state(game, 0) == pytest.approx(20.0)


def test_surrendered_opponent_is_ignored():
    game = movement_game()
    game.players[1].score = 5
    before = evaluate_state(game, 0)

    game.players[1].surrendered = True

    assert evaluate_state(game, 0) > before


def test_mobility_is_rewarded():
    """Test blocking own steps makes the position worse."""
    game = movement_game()
    weights = EvaluationWeights(territory_potential=0.0, centrality=0.0,
                                connectivity=0.0, opponent_potential=0.0)
    before = evaluate_state(game, 0, weights)

    game.board.set_wall(2, 3, V)

    assert before - evaluate_state(game, 0, weights) == pytest.approx(2.0)


def test_evaluation_does_not_modify_game():
    game = movement_game()
    before = game.key()

    evaluate_state(game, 0)
    evaluate_state(game, 1)

    assert game.key() == before
