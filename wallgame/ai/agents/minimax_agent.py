"""
Minimax agent for the wall game.
"""
import random
import time
from dataclasses import dataclass
from typing import Optional

from ...core.move_generator import legal_moves, wall_options
from ...core.moves import Phase, Placement
from ...core.player import Difficulty
from ..evaluation import DEFAULT_POTENTIAL_CAP, DEFAULT_WEIGHTS, evaluate_state


DIFFICULTY_DEPTH = {
    Difficulty.EASY: 1,
    Difficulty.MEDIUM: 2,
    Difficulty.HARD: 3,
}


@dataclass
class SearchStats:
    """Statistics from the last search."""

    nodes: int = 0
    cutoffs: int = 0
    depth_reached: int = 0
    elapsed_ms: float = 0.0
    best_value: Optional[float] = None


def simulate_move(game, player_id, move):
    """
    Apply a move for a player on an independent copy of the game.

    The copy is handed to ``player_id`` first, so opponents can be
    simulated out of turn order. The original game is never touched.

    Returns:
        Game or None: The new state, or None if the rules rejected the move
    """
    state = game.clone()
    state.set_turn(player_id)
    if not state.apply_move(player_id, move):
        return None
    return state


class MinimaxAgent:
    """
    An agent that searches the move tree with minimax and alpha-beta pruning.

    The agent's own moves form the maximizing layers. All opponents share a
    single minimizing layer: at a min node every opponent's legal moves are
    children. This is a deliberate simplification of an n-player search.

    Walls are not expanded inside the tree. After the chosen step has been
    played, ``choose_wall`` picks the wall separately.
    """

    def __init__(self, player_id, difficulty=Difficulty.MEDIUM, depth=None,
                 iterative_deepening=None, use_pruning=True, time_limit=None,
                 random_walls=False, weights=DEFAULT_WEIGHTS,
                 potential_cap=DEFAULT_POTENTIAL_CAP, placement_depth=1, seed=None):
        """
        Initialize the minimax agent.

        Args:
            player_id (int): Seat this agent plays for
            difficulty (Difficulty): Sets the default depth
            depth (int, optional): Explicit search depth, overrides difficulty
            iterative_deepening (bool, optional): Search depths 1..depth in
                turn; defaults to True for hard difficulty
            use_pruning (bool): Alpha-beta pruning; False runs plain minimax
            time_limit (float, optional): Seconds after which no new depth
                is started during iterative deepening
            random_walls (bool): Pick walls uniformly at random instead of
                by evaluation
            weights (EvaluationWeights): Evaluation weights
            potential_cap (int): Flood fill bound for territory potential
            placement_depth (int): Depth cap while pieces are still being
                placed; every empty cell is a candidate there
            seed (int, optional): Random seed for wall selection
        """
        self.player_id = player_id
        self.difficulty = Difficulty(difficulty)
        self.depth = depth if depth is not None else DIFFICULTY_DEPTH[self.difficulty]
        if iterative_deepening is None:
            iterative_deepening = self.difficulty == Difficulty.HARD
        self.iterative_deepening = iterative_deepening
        self.use_pruning = use_pruning
        self.time_limit = time_limit
        self.random_walls = random_walls
        self.weights = weights
        self.potential_cap = potential_cap
        self.placement_depth = placement_depth
        self.rng = random.Random(seed)
        self.last_stats = SearchStats()

    def select_action(self, game):
        return self.choose_move(game)

    def evaluate(self, game):
        return evaluate_state(game, self.player_id, self.weights, self.potential_cap)

    def choose_move(self, game):
        """
        Select the best move for this agent's player.

        Args:
            game: Game instance; never modified

        Returns:
            Placement, Movement, or None if the player has no legal move
        """
        self.last_stats = SearchStats()
        start = time.perf_counter()

        moves = legal_moves(game, self.player_id)
        if not moves:
            self.last_stats.elapsed_ms = (time.perf_counter() - start) * 1000.0
            return None

        deadline = None
        if self.time_limit is not None:
            deadline = start + self.time_limit

        max_depth = self._depth_for(game, self.depth)
        best_move, best_value = None, None
        depths = range(1, max_depth + 1) if self.iterative_deepening else [max_depth]
        for depth in depths:
            result = self._search_root(game, moves, depth, deadline)
            if result is None:
                break
            best_move, best_value = result
            self.last_stats.depth_reached = depth
            if deadline is not None and time.perf_counter() >= deadline:
                break

        if best_move is None:
            # Deadline hit before any depth completed; depth 1 always runs to the end
            best_move, best_value = self._search_root(game, moves, 1, None)
            self.last_stats.depth_reached = 1

        self.last_stats.best_value = best_value
        self.last_stats.elapsed_ms = (time.perf_counter() - start) * 1000.0
        return best_move

    def _depth_for(self, game, depth):
        if game.phase == Phase.PLACEMENT:
            return max(1, min(depth, self.placement_depth))
        return depth

    def search_value(self, game, depth):
        """Minimax value of the position for this agent at a fixed depth."""
        depth = self._depth_for(game, depth)
        moves = legal_moves(game, self.player_id)
        if not moves:
            return self._minimax(game, depth, True, float('-inf'), float('inf'))
        _, value = self._search_root(game, moves, depth, None)
        return value

    def _search_root(self, game, moves, depth, deadline):
        """
        Score every top-level move; the first move with the highest value wins.

        Returns:
            tuple: (move, value), or None if the deadline cut this depth short
        """
        best_move = None
        best_value = float('-inf')
        alpha = float('-inf')

        for move in moves:
            if deadline is not None and depth > 1 and time.perf_counter() >= deadline:
                return None
            child = simulate_move(game, self.player_id, move)
            if child is None:
                continue
            value = self._minimax(child, depth - 1, False, alpha, float('inf'))
            if best_move is None or value > best_value:
                best_move, best_value = move, value
            if self.use_pruning:
                alpha = max(alpha, value)

        return best_move, best_value

    def _children(self, state, maximizing):
        if maximizing:
            movers = [self.player_id]
        else:
            movers = [player.id for player in state.players
                      if player.id != self.player_id and player.active]
        for mover in movers:
            for move in legal_moves(state, mover):
                child = simulate_move(state, mover, move)
                if child is not None:
                    yield child

    def _minimax(self, state, depth, maximizing, alpha, beta):
        self.last_stats.nodes += 1

        if depth == 0 or state.is_terminal():
            return self.evaluate(state)

        searched_any = False
        if maximizing:
            best = float('-inf')
            for child in self._children(state, True):
                searched_any = True
                value = self._minimax(child, depth - 1, False, alpha, beta)
                best = max(best, value)
                if self.use_pruning:
                    alpha = max(alpha, value)
                    if beta <= alpha:
                        self.last_stats.cutoffs += 1
                        break
        else:
            best = float('inf')
            for child in self._children(state, False):
                searched_any = True
                value = self._minimax(child, depth - 1, True, alpha, beta)
                best = min(best, value)
                if self.use_pruning:
                    beta = min(beta, value)
                    if beta <= alpha:
                        self.last_stats.cutoffs += 1
                        break

        if not searched_any:
            # Side to move has nothing to do and passes
            return self._minimax(state, depth - 1, not maximizing, alpha, beta)
        return best

    def choose_wall(self, game):
        """
        Select a wall to build after this agent's step.

        Each legal wall around the moved piece is tried on a copy of the game
        and the best-evaluated one is kept; ties go to the first candidate.

        Returns:
            WallPlacement or None if no wall can be built
        """
        options = wall_options(game, self.player_id)
        if not options:
            return None
        if self.random_walls:
            return self.rng.choice(options)

        best_wall, best_value = None, float('-inf')
        for wall in options:
            state = game.clone()
            if not state.apply_wall(self.player_id, wall.x, wall.y, wall.orientation):
                continue
            value = self.evaluate(state)
            if best_wall is None or value > best_value:
                best_wall, best_value = wall, value
        return best_wall

    def play_turn(self, game):
        """
        Play this agent's whole turn on the game.

        Returns:
            tuple: (move, wall); move is None when the agent had to pass and
            wall is None when no wall followed the step
        """
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


def agent_for_player(game, player_id, seed=None):
    """Build a minimax agent at the difficulty configured for a seat."""
    return MinimaxAgent(player_id, difficulty=game.players[player_id].difficulty, seed=seed)


def choose_move(game, player_id, difficulty=Difficulty.MEDIUM):
    """
    Pick a move for a player without modifying the game.

    Returns:
        Placement, Movement, or None when the player must pass
    """
    return MinimaxAgent(player_id, difficulty=difficulty).choose_move(game)


def choose_wall(game, player_id, difficulty=Difficulty.MEDIUM):
    """
    Pick the wall to follow a step already played this turn.

    Returns:
        WallPlacement or None when no wall can be built
    """
    return MinimaxAgent(player_id, difficulty=difficulty).choose_wall(game)
