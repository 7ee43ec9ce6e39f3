"""
Player records and per-player configuration.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


MAX_PIECES = 4

DEFAULT_COLORS = ('red', 'blue', 'green', 'yellow')


class Controller(str, Enum):
    """Who drives a player."""

    HUMAN = 'human'
    AI = 'ai'


class Difficulty(str, Enum):
    """AI difficulty levels."""

    EASY = 'easy'
    MEDIUM = 'medium'
    HARD = 'hard'


@dataclass
class PlayerConfig:
    """
    Configuration for a single player.

    Attributes:
        name: Display name
        controller: Human or AI
        difficulty: Search difficulty, only meaningful for AI players
        color: Color tag for the host UI (None = pick by seat)
    """

    name: str
    controller: Controller = Controller.HUMAN
    difficulty: Difficulty = Difficulty.MEDIUM
    color: Optional[str] = None

    @classmethod
    def human(cls, name: str, color: Optional[str] = None) -> 'PlayerConfig':
        return cls(name=name, controller=Controller.HUMAN, color=color)

    @classmethod
    def ai(cls, name: str, difficulty: Difficulty = Difficulty.MEDIUM,
           color: Optional[str] = None) -> 'PlayerConfig':
        return cls(name=name, controller=Controller.AI,
                   difficulty=Difficulty(difficulty), color=color)

    @property
    def is_ai(self) -> bool:
        return self.controller == Controller.AI


@dataclass
class Player:
    """
    Mutable per-game record of a player.

    Pieces are stored as (x, y) tuples in placement order. ``walls_left``
    is None when the wall budget is unlimited.
    """

    id: int
    name: str
    controller: Controller
    difficulty: Difficulty
    color: str
    pieces: List[Tuple[int, int]] = field(default_factory=list)
    walls_left: Optional[int] = None
    score: int = 0
    surrendered: bool = False

    @classmethod
    def from_config(cls, player_id: int, config: PlayerConfig,
                    max_walls: Optional[int]) -> 'Player':
        color = config.color or DEFAULT_COLORS[player_id % len(DEFAULT_COLORS)]
        return cls(id=player_id, name=config.name, controller=config.controller,
                   difficulty=config.difficulty, color=color,
                   walls_left=max_walls)

    @property
    def active(self) -> bool:
        return not self.surrendered

    @property
    def has_all_pieces(self) -> bool:
        return len(self.pieces) >= MAX_PIECES

    def has_wall_budget(self) -> bool:
        return self.walls_left is None or self.walls_left > 0

    def copy(self) -> 'Player':
        """Return an independent copy (piece list is copied, tuples are immutable)."""
        return Player(id=self.id, name=self.name, controller=self.controller,
                      difficulty=self.difficulty, color=self.color,
                      pieces=list(self.pieces), walls_left=self.walls_left,
                      score=self.score, surrendered=self.surrendered)

    def key(self):
        return (self.id, tuple(self.pieces), self.walls_left, self.score,
                self.surrendered)
