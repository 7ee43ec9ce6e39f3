"""
Random agent for the wall game.
"""
import random

from ...core.move_generator import legal_moves, wall_options
from ...core.moves import Placement


class RandomAgent:
    """
    An agent that plays random legal moves.

    This is the simplest possible agent - it selects uniformly at random
    from all available legal steps, then from all legal walls.
    """

    def __init__(self, player_id, seed=None):
        """
        Initialize the random agent.

        Args:
            player_id (int): Seat this agent plays for
            seed (int, optional): Random seed for reproducible behavior
        """
        self.player_id = player_id
        self.rng = random.Random(seed)

    def select_action(self, game):
        return self.choose_move(game)

    def choose_move(self, game):
        """
        Select a random legal move from the current game state.

        Returns:
            Placement, Movement, or None if no legal moves
        """
        moves = legal_moves(game, self.player_id)

        if not moves:
            return None

        return self.rng.choice(moves)

    def choose_wall(self, game):
        options = wall_options(game, self.player_id)
        if not options:
            return None
        return self.rng.choice(options)

    def play_turn(self, game):
        """Play a whole turn; see ``MinimaxAgent.play_turn``."""
        move = self.choose_move(game)
        if move is None:
            game.pass_turn(self.player_id)
            return None, None
        game.apply_move(self.player_id, move)
        if isinstance(move, Placement):
            return move, None

        wall = self.choose_wall(game)
        if wall is None:
            game.pass_turn(self.player_id)
        else:
            game.apply_wall(self.player_id, wall.x, wall.y, wall.orientation)
        return move, wall
