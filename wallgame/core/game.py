"""
Game implementation for the wall game.
"""
from collections import deque

from .board import Board
from .config import GameConfig
from .move_generator import has_any_step, legal_moves, wall_options
from .moves import Movement, MoveResult, Orientation, Phase, Placement, RejectReason
from .player import Player, PlayerConfig
from .rules import (
    is_trapped,
    movement_reject_reason,
    piece_destinations,
    placement_reject_reason,
    wall_reject_reason,
)
from .territory import update_territory


class Game:
    """
    Manages a wall game session.

    Owns the board, the player records and the per-turn state. Every
    change goes through the ``apply_*`` methods, which either apply an
    action completely or reject it without touching anything.
    """

    def __init__(self, config=None):
        """
        Initialize a new game.

        Args:
            config (GameConfig, optional): Game configuration; defaults to a
                two-player 9x9 game

        Raises:
            ValueError: If the configuration is invalid
        """
        self.config = (config or GameConfig()).validate()
        self.board = Board(self.config.board_size)
        self.players = [Player.from_config(i, player_config, self.config.max_walls)
                        for i, player_config in enumerate(self.config.players)]
        self.phase = Phase.PLACEMENT
        self.current_player = 0
        self.turn_count = 1

        # Per-turn transient state
        self.selected_piece = None
        self.has_moved = False
        self.last_moved = None

        if self.config.allow_undo:
            self._history = deque(maxlen=self.config.max_undo_steps)
        else:
            self._history = None

    @property
    def board_size(self):
        return self.board.size

    @property
    def is_over(self):
        return self.is_terminal()

    def active_players(self):
        return [player for player in self.players if player.active]

    # ------------------------------------------------------------------
    # Cloning and snapshots
    # ------------------------------------------------------------------

    def clone(self, keep_history=False):
        """
        Return an independent copy of the game.

        The board arrays and player records are copied, so nothing done to
        the copy is visible here. History is dropped unless requested;
        search states never need it.
        """
        game = Game.__new__(Game)
        game.config = self.config
        game.board = self.board.copy()
        game.players = [player.copy() for player in self.players]
        game.phase = self.phase
        game.current_player = self.current_player
        game.turn_count = self.turn_count
        game.selected_piece = self.selected_piece
        game.has_moved = self.has_moved
        game.last_moved = self.last_moved
        if keep_history and self._history is not None:
            game._history = deque((snapshot.clone() for snapshot in self._history),
                                  maxlen=self._history.maxlen)
        else:
            game._history = None
        return game

    def key(self):
        """Hashable value identifying the full game position."""
        return (self.board.key(), tuple(player.key() for player in self.players),
                self.phase, self.current_player, self.turn_count,
                self.selected_piece, self.has_moved, self.last_moved)

    def _record(self):
        if self._history is not None:
            self._history.append(self.clone())

    def can_undo(self):
        return bool(self._history)

    def undo(self):
        """
        Restore the position saved before the last successful action.

        Returns:
            MoveResult: Rejected when undo is disabled or history is empty
        """
        if not self.config.allow_undo:
            return MoveResult.rejected(RejectReason.UNDO_DISABLED)
        if not self._history:
            return MoveResult.rejected(RejectReason.NO_HISTORY)

        snapshot = self._history.pop()
        self.board = snapshot.board
        self.players = snapshot.players
        self.phase = snapshot.phase
        self.current_player = snapshot.current_player
        self.turn_count = snapshot.turn_count
        self.selected_piece = snapshot.selected_piece
        self.has_moved = snapshot.has_moved
        self.last_moved = snapshot.last_moved
        return MoveResult.ok()

    # ------------------------------------------------------------------
    # Turn order
    # ------------------------------------------------------------------

    def _clear_turn_flags(self):
        self.selected_piece = None
        self.has_moved = False
        self.last_moved = None

    def set_turn(self, player_id):
        """Give the turn to a specific player with fresh turn flags. Used by search."""
        self._clear_turn_flags()
        self.current_player = player_id

    def _advance_turn(self):
        """Hand the turn to the next player who has not surrendered."""
        self._clear_turn_flags()
        count = len(self.players)
        index = self.current_player
        for _ in range(count):
            index = (index + 1) % count
            if index == 0:
                self.turn_count += 1
            if self.players[index].active:
                self.current_player = index
                return

    def _check_phase_transition(self):
        if self.phase != Phase.PLACEMENT:
            return
        active = self.active_players()
        if active and all(player.has_all_pieces for player in active):
            self.phase = Phase.MOVEMENT

    # ------------------------------------------------------------------
    # Rule engine
    # ------------------------------------------------------------------

    def apply_placement(self, player_id, x, y):
        """
        Place a new piece for a player.

        Args:
            player_id (int): Player placing the piece; must be on turn
            x (int): Column
            y (int): Row

        Returns:
            MoveResult: Accepted, or rejected with the reason
        """
        reason = placement_reject_reason(self, player_id, x, y)
        if reason is not None:
            return MoveResult.rejected(reason)

        self._record()
        self.board.place_piece(x, y, player_id)
        self.players[player_id].pieces.append((x, y))
        self._advance_turn()
        self._check_phase_transition()
        return MoveResult.ok()

    def apply_movement(self, player_id, from_x, from_y, to_x, to_y):
        """
        Step one of the player's pieces to an adjacent cell.

        The turn does not end here: a wall placement (or a pass) follows.

        Returns:
            MoveResult: Accepted, or rejected with the reason
        """
        reason = movement_reject_reason(self, player_id, from_x, from_y, to_x, to_y)
        if reason is not None:
            return MoveResult.rejected(reason)

        self._record()
        self.board.move_piece(from_x, from_y, to_x, to_y)
        pieces = self.players[player_id].pieces
        pieces[pieces.index((from_x, from_y))] = (to_x, to_y)
        self.selected_piece = None
        self.has_moved = True
        self.last_moved = (to_x, to_y)
        return MoveResult.ok()

    def apply_wall(self, player_id, x, y, orientation):
        """
        Raise a wall segment next to the piece moved this turn.

        Rebuilds the territory map and scores, then ends the turn.

        Args:
            player_id (int): Player building the wall
            x (int): Segment column index
            y (int): Segment row index
            orientation (Orientation or str): 'horizontal' or 'vertical'

        Returns:
            MoveResult: Accepted, or rejected with the reason
        """
        try:
            orientation = Orientation(orientation)
        except ValueError:
            return MoveResult.rejected(RejectReason.BAD_ORIENTATION)
        reason = wall_reject_reason(self, player_id, x, y, orientation)
        if reason is not None:
            return MoveResult.rejected(reason)

        self._record()
        self.board.set_wall(x, y, orientation)
        player = self.players[player_id]
        if player.walls_left is not None:
            player.walls_left -= 1
        update_territory(self.board, self.players)
        self._advance_turn()
        return MoveResult.ok()

    def apply_move(self, player_id, move):
        """Dispatch a Placement or Movement to the matching rule."""
        if isinstance(move, Placement):
            return self.apply_placement(player_id, move.x, move.y)
        if isinstance(move, Movement):
            return self.apply_movement(player_id, move.from_x, move.from_y,
                                       move.to_x, move.to_y)
        raise TypeError(f"Unknown move type: {type(move).__name__}")

    def pass_turn(self, player_id):
        """
        End the current player's movement turn without (further) action.

        Used when no piece can move, or when no wall follows a step.
        """
        if self.is_terminal():
            return MoveResult.rejected(RejectReason.GAME_OVER)
        if self.phase != Phase.MOVEMENT:
            return MoveResult.rejected(RejectReason.WRONG_PHASE)
        if self.current_player != player_id:
            return MoveResult.rejected(RejectReason.NOT_YOUR_TURN)

        self._record()
        self._advance_turn()
        return MoveResult.ok()

    def surrender(self, player_id):
        """Withdraw a player from the game."""
        if self.is_terminal():
            return MoveResult.rejected(RejectReason.GAME_OVER)
        if not 0 <= player_id < len(self.players):
            return MoveResult.rejected(RejectReason.NOT_YOUR_TURN)
        if self.players[player_id].surrendered:
            return MoveResult.rejected(RejectReason.SURRENDERED)

        self._record()
        self.players[player_id].surrendered = True
        if self.current_player == player_id:
            self._advance_turn()
        self._check_phase_transition()
        return MoveResult.ok()

    def select_piece(self, player_id, x, y):
        """Mark one of the current player's pieces as selected."""
        if self.phase != Phase.MOVEMENT:
            return MoveResult.rejected(RejectReason.WRONG_PHASE)
        if self.current_player != player_id:
            return MoveResult.rejected(RejectReason.NOT_YOUR_TURN)
        if self.has_moved:
            return MoveResult.rejected(RejectReason.ALREADY_MOVED)
        if not self.board.in_bounds(x, y):
            return MoveResult.rejected(RejectReason.OUT_OF_BOUNDS)
        if self.board.owner_at(x, y) != player_id:
            return MoveResult.rejected(RejectReason.NOT_YOUR_PIECE)
        if is_trapped(self.board, x, y):
            return MoveResult.rejected(RejectReason.PIECE_TRAPPED)
        self.selected_piece = (x, y)
        return MoveResult.ok()

    def deselect_piece(self):
        self.selected_piece = None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_trapped(self, x, y):
        return is_trapped(self.board, x, y)

    def legal_moves(self, player_id):
        return legal_moves(self, player_id)

    def legal_destinations(self, x, y):
        """Cells the piece at (x, y) may step to."""
        if not self.board.in_bounds(x, y) or self.board.is_empty(x, y):
            return []
        return piece_destinations(self.board, x, y)

    def wall_options(self, player_id):
        return wall_options(self, player_id)

    def is_terminal(self):
        """
        Check whether the game has ended.

        Over when at most one player is still in the game, or, in the
        movement phase, when no active player has a piece that can step.
        """
        active = self.active_players()
        if len(active) <= 1:
            return True
        if self.phase == Phase.PLACEMENT:
            return False
        return not any(has_any_step(self.board, player.pieces) for player in active)

    def scores(self):
        return [player.score for player in self.players]

    def winners(self):
        """
        Players tied at the top score among those still in the game.

        Returns:
            list: Player ids
        """
        active = self.active_players()
        if not active:
            return []
        best = max(player.score for player in active)
        return [player.id for player in active if player.score == best]

    @property
    def winner(self):
        """
        Get the winner of a finished game.

        Returns:
            int or None: Sole winner's id, or None if ongoing or tied
        """
        if not self.is_terminal():
            return None
        winners = self.winners()
        return winners[0] if len(winners) == 1 else None


def new_game(board_size=9, player_configs=None, max_walls=15, allow_undo=True,
             max_undo_steps=10):
    """
    Create a game from plain configuration values.

    Args:
        board_size (int): Side length of the board
        player_configs (list, optional): PlayerConfig per seat; two humans
            by default
        max_walls (int or None): Wall budget per player, None for unlimited
        allow_undo (bool): Whether undo is permitted
        max_undo_steps (int): Undo depth

    Returns:
        Game: Fresh game in the placement phase
    """
    if player_configs is None:
        player_configs = [PlayerConfig.human('Player 1'), PlayerConfig.human('Player 2')]
    config = GameConfig(board_size=board_size, players=list(player_configs),
                        max_walls=max_walls, allow_undo=allow_undo,
                        max_undo_steps=max_undo_steps)
    return Game(config)
