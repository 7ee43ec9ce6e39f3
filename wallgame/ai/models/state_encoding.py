"""
State encoding utilities for learning agents.

Converts a game position into a stack of feature planes, and moves into
flat action indices, for consumption by neural network code.
"""
import numpy as np
import torch

from ...core.board import EMPTY, NO_OWNER
from ...core.move_generator import legal_moves
from ...core.moves import Movement, Phase, Placement
from ...core.rules import DIRECTIONS


NUM_CHANNELS = 7


def encode_game_state(game, player_id):
    """
    Encode a position into a 7-channel tensor from one player's view.

    Args:
        game: Game instance
        player_id: Perspective player

    Returns:
        torch.Tensor: Shape (7, N, N) with channels:
            - Channel 0: Own pieces
            - Channel 1: Opponent pieces (all opponents)
            - Channel 2: Own territory
            - Channel 3: Opponent territory
            - Channel 4: Wall on the top edge of the cell
            - Channel 5: Wall on the left edge of the cell
            - Channel 6: Phase plane (1 in movement phase, 0 in placement)
    """
    board = game.board
    size = board.size
    state = np.zeros((NUM_CHANNELS, size, size), dtype=np.float32)

    state[0] = (board.cells == player_id).astype(np.float32)
    state[1] = ((board.cells != EMPTY) & (board.cells != player_id)).astype(np.float32)
    state[2] = (board.territory == player_id).astype(np.float32)
    state[3] = ((board.territory != NO_OWNER) & (board.territory != player_id)).astype(np.float32)
    state[4] = board.horizontal_walls[:size, :].astype(np.float32)
    state[5] = board.vertical_walls[:, :size].astype(np.float32)
    state[6].fill(1.0 if game.phase == Phase.MOVEMENT else 0.0)

    return torch.tensor(state, dtype=torch.float32)


def action_space_size(board_size):
    """One slot per cell for placements plus four per cell for steps."""
    cells = board_size * board_size
    return cells + cells * len(DIRECTIONS)


def encode_action(move, board_size):
    """
    Convert a move to its action index.

    Placements occupy ``[0, N*N)``; a step from cell c in direction d maps
    to ``N*N + c*4 + d`` with directions ordered up, down, left, right.
    """
    if isinstance(move, Placement):
        return move.y * board_size + move.x
    cell = move.from_y * board_size + move.from_x
    direction = DIRECTIONS.index((move.to_x - move.from_x, move.to_y - move.from_y))
    return board_size * board_size + cell * len(DIRECTIONS) + direction


def decode_action(action_idx, board_size):
    """
    Convert an action index back to a move.

    Returns:
        Placement or Movement
    """
    cells = board_size * board_size
    if action_idx < cells:
        return Placement(action_idx % board_size, action_idx // board_size)
    cell, direction = divmod(action_idx - cells, len(DIRECTIONS))
    from_x, from_y = cell % board_size, cell // board_size
    dx, dy = DIRECTIONS[direction]
    return Movement(from_x, from_y, from_x + dx, from_y + dy)


def get_legal_moves_mask(game, player_id):
    """
    Create boolean mask for legal moves.

    Returns:
        torch.Tensor: Shape (action_space_size,) where True = legal move
    """
    size = game.board.size
    mask = torch.zeros(action_space_size(size), dtype=torch.bool)
    for move in legal_moves(game, player_id):
        mask[encode_action(move, size)] = True
    return mask
