"""
Game configuration.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from .player import MAX_PIECES, PlayerConfig


MIN_BOARD_SIZE = 4
MAX_BOARD_SIZE = 15
MIN_PLAYERS = 2
MAX_PLAYERS = 4


def _default_players():
    return [PlayerConfig.human('Player 1'), PlayerConfig.human('Player 2')]


@dataclass
class GameConfig:
    """
    Configuration for one game.

    Attributes:
        board_size: Side length N of the square board
        players: Seat configurations, in turn order
        max_walls: Wall budget per player (None = unlimited)
        allow_undo: Whether undo is permitted
        max_undo_steps: Number of snapshots kept for undo
    """

    board_size: int = 9
    players: List[PlayerConfig] = field(default_factory=_default_players)
    max_walls: Optional[int] = 15
    allow_undo: bool = True
    max_undo_steps: int = 10

    def validate(self):
        """
        Check the configuration.

        Raises:
            ValueError: If any value is out of range
        """
        if not MIN_BOARD_SIZE <= self.board_size <= MAX_BOARD_SIZE:
            raise ValueError(
                f"board_size must be between {MIN_BOARD_SIZE} and {MAX_BOARD_SIZE}, "
                f"got {self.board_size}")
        if not MIN_PLAYERS <= len(self.players) <= MAX_PLAYERS:
            raise ValueError(
                f"expected {MIN_PLAYERS}-{MAX_PLAYERS} players, got {len(self.players)}")
        if self.max_walls is not None and self.max_walls < 0:
            raise ValueError(f"max_walls must be non-negative, got {self.max_walls}")
        if self.max_undo_steps < 1:
            raise ValueError(f"max_undo_steps must be at least 1, got {self.max_undo_steps}")
        if len(self.players) * MAX_PIECES > self.board_size * self.board_size:
            raise ValueError("board too small for the number of players")
        return self
