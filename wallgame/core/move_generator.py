"""
Legal move enumeration.
"""
from .moves import Movement, Phase, Placement
from .player import MAX_PIECES
from .rules import adjacent_wall_segments, piece_destinations, segment_reject_reason


def legal_moves(game, player_id):
    """
    Enumerate every legal move for a player in the current phase.

    Placement phase: one Placement per empty cell, in board-scan order,
    while the player has fewer than four pieces. Movement phase: for each
    untrapped piece, up to four single steps in up/down/left/right order.
    Turn order is not considered, so this also serves opponent modelling.

    Args:
        game: Game instance
        player_id (int): Player to enumerate moves for

    Returns:
        list: Placement or Movement instances; empty if the player cannot act
    """
    player = game.players[player_id]
    if player.surrendered:
        return []

    if game.phase == Phase.PLACEMENT:
        if len(player.pieces) >= MAX_PIECES:
            return []
        return [Placement(x, y) for x, y in game.board.get_empty_cells()]

    moves = []
    for x, y in player.pieces:
        for to_x, to_y in piece_destinations(game.board, x, y):
            moves.append(Movement(x, y, to_x, to_y))
    return moves


def mobility(board, pieces):
    """Total number of single steps available to a set of pieces."""
    return sum(len(piece_destinations(board, x, y)) for x, y in pieces)


def has_any_step(board, pieces):
    for x, y in pieces:
        if piece_destinations(board, x, y):
            return True
    return False


def wall_segments_around(board, x, y):
    """
    Legal wall segments around a cell, ignoring turn state and budget.

    Order is top, bottom, left, right.
    """
    return [wall for wall in adjacent_wall_segments(x, y)
            if segment_reject_reason(board, wall.x, wall.y, wall.orientation) is None]


def wall_options(game, player_id):
    """
    Walls the player may raise right now.

    Only available after a step this turn; the candidates surround the cell
    the piece moved to. Empty when the wall budget is exhausted.
    """
    if not game.has_moved or game.last_moved is None:
        return []
    if game.current_player != player_id:
        return []
    if not game.players[player_id].has_wall_budget():
        return []
    return wall_segments_around(game.board, *game.last_moved)
