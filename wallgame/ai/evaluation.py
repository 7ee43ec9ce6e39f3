"""
Heuristic evaluation of wall game positions.

Scores a position from one player's point of view as a weighted sum of
features. Score dominates; the positional features steer the search while
territory is still undecided. As walls accumulate the weight shifts from
position toward raw score.
"""
from collections import deque
from dataclasses import dataclass

from ..core.move_generator import mobility
from ..core.rules import is_trapped


DEFAULT_POTENTIAL_CAP = 20


@dataclass
class EvaluationWeights:
    """Feature weights for ``evaluate_state``."""

    score: float = 10.0
    mobility: float = 2.0
    territory_potential: float = 5.0
    centrality: float = 1.0
    connectivity: float = 1.0
    opponent_mobility: float = 1.0
    opponent_potential: float = 2.0
    # Multipliers applied at full game progress
    late_score_boost: float = 1.0
    late_position_damping: float = 0.5


DEFAULT_WEIGHTS = EvaluationWeights()


def bounded_fill(board, x, y, cap=DEFAULT_POTENTIAL_CAP):
    """
    Flood fill from a piece through empty cells, stopping at ``cap`` cells.

    The piece's own cell counts toward the size.

    Returns:
        tuple: (size, closed) where ``closed`` is True when the fill ran out
        of cells without exceeding the cap
    """
    seen = {(x, y)}
    queue = deque([(x, y)])
    while queue:
        cx, cy = queue.popleft()
        for nx, ny in board.neighbors(cx, cy):
            if (nx, ny) in seen or not board.is_empty(nx, ny):
                continue
            seen.add((nx, ny))
            if len(seen) > cap:
                return cap, False
            queue.append((nx, ny))
    return len(seen), True


def territory_potential(board, pieces, cap=DEFAULT_POTENTIAL_CAP):
    """
    Estimate how much area a player's free pieces could still claim.

    Only pockets count: a piece whose empty surroundings are closed off
    before the cap is reached adds the pocket size. Open areas add nothing,
    and trapped pieces add nothing since their territory is already scored.
    """
    total = 0
    for x, y in pieces:
        if is_trapped(board, x, y):
            continue
        size, closed = bounded_fill(board, x, y, cap)
        if closed:
            total += size
    return total


def centrality(board, pieces):
    """Higher for pieces near the middle of the board."""
    center = (board.size - 1) / 2.0
    reach = board.size - 1
    return sum(reach - (abs(x - center) + abs(y - center)) for x, y in pieces)


def connectivity(pieces):
    """Number of piece pairs within two steps of each other."""
    count = 0
    for i, (x1, y1) in enumerate(pieces):
        for x2, y2 in pieces[i + 1:]:
            if abs(x1 - x2) + abs(y1 - y2) <= 2:
                count += 1
    return count


def game_progress(game):
    """Fraction of the available walls already built, in [0, 1]."""
    if game.config.max_walls is None:
        budget = game.board.interior_segment_count()
    else:
        budget = min(game.config.max_walls * len(game.players),
                     game.board.interior_segment_count())
    if budget <= 0:
        return 1.0
    return min(1.0, game.board.wall_count() / budget)


def evaluate_state(game, player_id, weights=DEFAULT_WEIGHTS, cap=DEFAULT_POTENTIAL_CAP):
    """
    Evaluate a position for one player.

    Args:
        game: Game instance (real or simulated)
        player_id (int): Perspective player
        weights (EvaluationWeights): Feature weights
        cap (int): Flood fill bound per piece, further capped at a quarter
            of the board area

    Returns:
        float: Larger is better for ``player_id``
    """
    board = game.board
    cap = min(cap, max(2, board.size * board.size // 4))
    me = game.players[player_id]
    progress = game_progress(game)
    score_weight = weights.score * (1.0 + weights.late_score_boost * progress)
    position_weight = 1.0 - weights.late_position_damping * progress

    value = score_weight * me.score
    value += weights.mobility * mobility(board, me.pieces)
    value += position_weight * (
        weights.territory_potential * territory_potential(board, me.pieces, cap)
        + weights.centrality * centrality(board, me.pieces)
        + weights.connectivity * connectivity(me.pieces)
    )

    for other in game.players:
        if other.id == player_id or other.surrendered:
            continue
        value -= score_weight * other.score
        value -= weights.opponent_mobility * mobility(board, other.pieces)
        value -= position_weight * weights.opponent_potential * territory_potential(
            board, other.pieces, cap)

    return value
