"""
Validity predicates for the wall game.

Every check here is read-only. The game object calls them before it
touches any state, which is what keeps a rejected action from leaving
partial changes behind.
"""
from .moves import Orientation, Phase, RejectReason, WallPlacement
from .player import MAX_PIECES


DIRECTIONS = (
    (0, -1),  # up
    (0, 1),   # down
    (-1, 0),  # left
    (1, 0),   # right
)


def is_trapped(board, x, y):
    """A piece is trapped when its cell belongs to an owned territory."""
    return board.territory_owner(x, y) is not None


def can_step(board, from_x, from_y, to_x, to_y):
    """
    Check a single step on the board, ignoring whose piece it is.

    The destination must be on the board, empty, exactly one orthogonal
    step away, and not cut off by a wall.
    """
    if not board.in_bounds(to_x, to_y):
        return False
    if not board.is_empty(to_x, to_y):
        return False
    if abs(to_x - from_x) + abs(to_y - from_y) != 1:
        return False
    return not board.wall_between(from_x, from_y, to_x, to_y)


def piece_destinations(board, x, y):
    """
    Cells the piece at (x, y) may step to, in up/down/left/right order.

    Trapped pieces have no destinations.
    """
    if is_trapped(board, x, y):
        return []
    destinations = []
    for dx, dy in DIRECTIONS:
        nx, ny = x + dx, y + dy
        if can_step(board, x, y, nx, ny):
            destinations.append((nx, ny))
    return destinations


def adjacent_wall_segments(x, y):
    """
    The four segments surrounding cell (x, y): top, bottom, left, right.
    """
    return [
        WallPlacement(x, y, Orientation.HORIZONTAL),
        WallPlacement(x, y + 1, Orientation.HORIZONTAL),
        WallPlacement(x, y, Orientation.VERTICAL),
        WallPlacement(x + 1, y, Orientation.VERTICAL),
    ]


def segment_reject_reason(board, x, y, orientation):
    """
    Check a wall segment against the lattice alone.

    Only interior segments may be walled; the board edge is already a wall.

    Returns:
        RejectReason or None if the segment can be raised
    """
    if not board.segment_in_range(x, y, orientation):
        return RejectReason.OUT_OF_BOUNDS
    if board.is_boundary_segment(x, y, orientation):
        return RejectReason.BOUNDARY_WALL
    if board.has_wall(x, y, orientation):
        return RejectReason.WALL_EXISTS
    return None


def _turn_reject_reason(game, player_id, phase):
    if game.is_terminal():
        return RejectReason.GAME_OVER
    if game.phase != phase:
        return RejectReason.WRONG_PHASE
    if not 0 <= player_id < len(game.players):
        return RejectReason.NOT_YOUR_TURN
    if game.players[player_id].surrendered:
        return RejectReason.SURRENDERED
    if game.current_player != player_id:
        return RejectReason.NOT_YOUR_TURN
    return None


def placement_reject_reason(game, player_id, x, y):
    reason = _turn_reject_reason(game, player_id, Phase.PLACEMENT)
    if reason is not None:
        return reason
    if len(game.players[player_id].pieces) >= MAX_PIECES:
        return RejectReason.PIECE_LIMIT
    if not game.board.in_bounds(x, y):
        return RejectReason.OUT_OF_BOUNDS
    if not game.board.is_empty(x, y):
        return RejectReason.OCCUPIED
    return None


def movement_reject_reason(game, player_id, from_x, from_y, to_x, to_y):
    reason = _turn_reject_reason(game, player_id, Phase.MOVEMENT)
    if reason is not None:
        return reason
    if game.has_moved:
        return RejectReason.ALREADY_MOVED
    board = game.board
    if not (board.in_bounds(from_x, from_y) and board.in_bounds(to_x, to_y)):
        return RejectReason.OUT_OF_BOUNDS
    if board.owner_at(from_x, from_y) != player_id:
        return RejectReason.NOT_YOUR_PIECE
    if is_trapped(board, from_x, from_y):
        return RejectReason.PIECE_TRAPPED
    if abs(to_x - from_x) + abs(to_y - from_y) != 1:
        return RejectReason.NOT_ADJACENT
    if not board.is_empty(to_x, to_y):
        return RejectReason.OCCUPIED
    if board.wall_between(from_x, from_y, to_x, to_y):
        return RejectReason.WALL_BLOCKED
    return None


def wall_reject_reason(game, player_id, x, y, orientation):
    reason = _turn_reject_reason(game, player_id, Phase.MOVEMENT)
    if reason is not None:
        return reason
    if not game.players[player_id].has_wall_budget():
        return RejectReason.NO_WALLS_LEFT
    reason = segment_reject_reason(game.board, x, y, orientation)
    if reason is not None:
        return reason
    if not game.has_moved or game.last_moved is None:
        return RejectReason.MUST_MOVE_FIRST
    if WallPlacement(x, y, Orientation(orientation)) not in adjacent_wall_segments(*game.last_moved):
        return RejectReason.WALL_NOT_ADJACENT
    return None
