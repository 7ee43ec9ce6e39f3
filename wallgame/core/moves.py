"""
Move types and action results for the wall game.

Moves are small immutable value objects. Rule engine operations report
their outcome through ``MoveResult`` instead of raising, so a rejected
move is just another return value for the caller to inspect.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class Phase(str, Enum):
    """Game phases."""

    PLACEMENT = 'placement'
    MOVEMENT = 'movement'


class Orientation(str, Enum):
    """Wall segment orientation."""

    HORIZONTAL = 'horizontal'
    VERTICAL = 'vertical'


@dataclass(frozen=True)
class Placement:
    """Drop a new piece on an empty cell."""

    x: int
    y: int


@dataclass(frozen=True)
class Movement:
    """Step a piece one cell orthogonally."""

    from_x: int
    from_y: int
    to_x: int
    to_y: int


@dataclass(frozen=True)
class WallPlacement:
    """
    A wall segment.

    Horizontal segment (x, y) lies on the top edge of cell (x, y), i.e.
    between (x, y-1) and (x, y). Vertical segment (x, y) lies on the left
    edge of cell (x, y), i.e. between (x-1, y) and (x, y).
    """

    x: int
    y: int
    orientation: Orientation


Move = Union[Placement, Movement]


class RejectReason(str, Enum):
    """Why the rule engine refused an action."""

    GAME_OVER = 'game is over'
    WRONG_PHASE = 'action not allowed in this phase'
    NOT_YOUR_TURN = 'not this player\'s turn'
    SURRENDERED = 'player has surrendered'
    PIECE_LIMIT = 'player already has all pieces on the board'
    OUT_OF_BOUNDS = 'position is off the board'
    OCCUPIED = 'cell is occupied'
    NOT_YOUR_PIECE = 'no piece of this player at source cell'
    PIECE_TRAPPED = 'piece is inside owned territory'
    NOT_ADJACENT = 'destination is not one orthogonal step away'
    WALL_BLOCKED = 'a wall blocks the way'
    ALREADY_MOVED = 'player already moved this turn'
    MUST_MOVE_FIRST = 'a piece must be moved before building a wall'
    NO_WALLS_LEFT = 'wall budget exhausted'
    WALL_EXISTS = 'wall segment already present'
    BOUNDARY_WALL = 'walls cannot be placed on the board edge'
    WALL_NOT_ADJACENT = 'wall must touch the piece that just moved'
    BAD_ORIENTATION = 'unknown wall orientation'
    UNDO_DISABLED = 'undo is disabled'
    NO_HISTORY = 'nothing to undo'


class MoveResult:
    """
    Outcome of a rule engine action.

    Truthy when the action was applied, falsy when it was rejected, so
    callers written against a plain ``bool`` keep working.
    """

    __slots__ = ('reason',)

    def __init__(self, reason: Optional[RejectReason] = None):
        self.reason = reason

    @classmethod
    def ok(cls) -> 'MoveResult':
        return cls()

    @classmethod
    def rejected(cls, reason: RejectReason) -> 'MoveResult':
        return cls(reason)

    @property
    def accepted(self) -> bool:
        return self.reason is None

    def __bool__(self):
        return self.accepted

    def __eq__(self, other):
        if isinstance(other, MoveResult):
            return self.reason == other.reason
        if isinstance(other, bool):
            return self.accepted == other
        return NotImplemented

    def __hash__(self):
        return hash(self.reason)

    def __repr__(self):
        if self.accepted:
            return "MoveResult(ok)"
        return f"MoveResult(rejected={self.reason.name})"
