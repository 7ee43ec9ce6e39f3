"""
Tests for state encoding utilities.
"""
import pytest
import torch
from wallgame.ai.models.state_encoding import (
    NUM_CHANNELS,
    action_space_size,
    decode_action,
    encode_action,
    encode_game_state,
    get_legal_moves_mask,
)
from wallgame.core.game import new_game
from wallgame.core.move_generator import legal_moves
from wallgame.core.moves import Movement, Orientation, Placement


def movement_game():
    game = new_game(board_size=5, max_walls=10)
    p0 = [(2, 3), (0, 0), (4, 0), (0, 4)]
    p1 = [(4, 4), (3, 4), (4, 3), (1, 4)]
    for a, b in zip(p0, p1):
        game.apply_placement(0, *a)
        game.apply_placement(1, *b)
    return game


def test_encode_game_state_empty_board():
    """Test state encoding on empty board."""
    game = new_game(board_size=5)

    state = encode_game_state(game, 0)

    assert state.shape == (NUM_CHANNELS, 5, 5)
    assert state.dtype == torch.float32
    assert torch.all(state == 0)


def test_encode_game_state_with_pieces():
    """Test piece planes are relative to the perspective player."""
    game = movement_game()

    mine = encode_game_state(game, 0)
    theirs = encode_game_state(game, 1)

    # (x, y) = (2, 3) is row 3, column 2
    assert mine[0, 3, 2] == 1.0
    assert mine[1, 3, 2] == 0.0
    assert mine[1, 4, 4] == 1.0
    assert torch.sum(mine[0]) == 4
    assert torch.sum(mine[1]) == 4

    assert torch.equal(mine[0], theirs[1])
    assert torch.equal(mine[1], theirs[0])

    # Movement phase plane
    assert torch.all(mine[6] == 1.0)


def test_encode_walls_and_territory():
    """Test wall and territory planes."""
    game = movement_game()
    for x, y, orientation in [(2, 2, 'horizontal'), (2, 2, 'vertical'), (3, 2, 'vertical')]:
        game.board.set_wall(x, y, Orientation(orientation))
    game.apply_movement(0, 2, 3, 2, 2)
    game.apply_wall(0, 2, 3, Orientation.HORIZONTAL)

    state = encode_game_state(game, 0)
    other = encode_game_state(game, 1)

    assert state[2, 2, 2] == 1.0
    assert torch.sum(state[2]) == 1
    assert other[3, 2, 2] == 1.0
    assert state[4, 2, 2] == 1.0
    assert state[4, 3, 2] == 1.0
    assert state[5, 2, 2] == 1.0
    assert state[5, 2, 3] == 1.0
    assert torch.sum(state[4]) == 2
    assert torch.sum(state[5]) == 2


def test_action_space_size():
    assert action_space_size(5) == 125
    assert action_space_size(9) == 405


@pytest.mark.parametrize("move,index", [
    (Placement(0, 0), 0),
    (Placement(3, 1), 8),
    (Movement(0, 0, 0, 1), 25 + 1),
    (Movement(2, 3, 1, 3), 25 + 17 * 4 + 2),
    (Movement(4, 4, 4, 3), 25 + 24 * 4 + 0),
])
def test_encode_action(move, index):
    """Test moves map to fixed action indices."""
    assert encode_action(move, 5) == index
    assert decode_action(index, 5) == move


def test_get_legal_moves_mask():
    """Test the mask marks exactly the legal moves."""
    game = movement_game()

    mask = get_legal_moves_mask(game, 0)
    moves = legal_moves(game, 0)

    assert mask.shape == (125,)
    assert mask.dtype == torch.bool
    assert mask.sum().item() == len(moves)
    for move in moves:
        assert mask[encode_action(move, 5)]
    assert not mask[:25].any()


def test_placement_mask():
    game = new_game(board_size=5)
    game.apply_placement(0, 1, 0)

    mask = get_legal_moves_mask(game, 1)

    assert mask[:25].sum().item() == 24
    assert not mask[1]
    assert not mask[25:].any()
