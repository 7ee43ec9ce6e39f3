"""
Board implementation for the wall game.
"""
import numpy as np

from .moves import Orientation


EMPTY = -1
NO_OWNER = -1


class Board:
    """
    Represents an NxN wall game board.

    Arrays are indexed ``[row, col]``, i.e. ``[y, x]``; the public methods
    take ``(x, y)``.

    - cells: -1 for an empty cell, otherwise the index of the player whose
      piece stands there
    - horizontal_walls: shape (N+1, N); ``[y, x]`` is the segment on the top
      edge of cell (x, y). Rows 0 and N are the board edge.
    - vertical_walls: shape (N, N+1); ``[y, x]`` is the segment on the left
      edge of cell (x, y). Columns 0 and N are the board edge.
    - territory: -1 for no owner, otherwise the owning player's index
    """

    def __init__(self, size=9):
        """
        Initialize an empty board.

        Args:
            size (int): Side length of the board
        """
        self.size = size
        self.cells = np.full((size, size), EMPTY, dtype=np.int8)
        self.horizontal_walls = np.zeros((size + 1, size), dtype=bool)
        self.vertical_walls = np.zeros((size, size + 1), dtype=bool)
        self.territory = np.full((size, size), NO_OWNER, dtype=np.int8)

    def copy(self):
        """Return a board that shares no arrays with this one."""
        board = Board.__new__(Board)
        board.size = self.size
        board.cells = self.cells.copy()
        board.horizontal_walls = self.horizontal_walls.copy()
        board.vertical_walls = self.vertical_walls.copy()
        board.territory = self.territory.copy()
        return board

    def in_bounds(self, x, y):
        return 0 <= x < self.size and 0 <= y < self.size

    def is_empty(self, x, y):
        return self.cells[y, x] == EMPTY

    def owner_at(self, x, y):
        """Player index of the piece at (x, y), or None."""
        value = int(self.cells[y, x])
        return None if value == EMPTY else value

    def territory_owner(self, x, y):
        """Owner of the territory containing (x, y), or None."""
        value = int(self.territory[y, x])
        return None if value == NO_OWNER else value

    def place_piece(self, x, y, player):
        """
        Put a piece on the board.

        Returns:
            bool: True if the piece was placed, False if the cell is
            off the board or occupied
        """
        if not self.in_bounds(x, y) or not self.is_empty(x, y):
            return False
        self.cells[y, x] = player
        return True

    def move_piece(self, from_x, from_y, to_x, to_y):
        """Relocate the piece at the source cell. No rule checks."""
        self.cells[to_y, to_x] = self.cells[from_y, from_x]
        self.cells[from_y, from_x] = EMPTY

    def wall_between(self, x1, y1, x2, y2):
        """
        Check whether a wall separates two orthogonally adjacent cells.

        The board edge counts as a wall: stepping off the board is always
        blocked.
        """
        if not (self.in_bounds(x1, y1) and self.in_bounds(x2, y2)):
            return True
        if x1 == x2:
            return bool(self.horizontal_walls[max(y1, y2), x1])
        return bool(self.vertical_walls[y1, max(x1, x2)])

    def segment_in_range(self, x, y, orientation):
        """Whether (x, y) indexes an existing segment of the wall lattice."""
        if orientation == Orientation.HORIZONTAL:
            return 0 <= x < self.size and 0 <= y <= self.size
        return 0 <= x <= self.size and 0 <= y < self.size

    def is_boundary_segment(self, x, y, orientation):
        """Whether the segment lies on the outer edge of the board."""
        if orientation == Orientation.HORIZONTAL:
            return y == 0 or y == self.size
        return x == 0 or x == self.size

    def has_wall(self, x, y, orientation):
        if orientation == Orientation.HORIZONTAL:
            return bool(self.horizontal_walls[y, x])
        return bool(self.vertical_walls[y, x])

    def set_wall(self, x, y, orientation):
        """Raise a wall segment. Walls are never removed."""
        if orientation == Orientation.HORIZONTAL:
            self.horizontal_walls[y, x] = True
        else:
            self.vertical_walls[y, x] = True

    def wall_count(self):
        """Number of interior wall segments raised so far."""
        return (int(self.horizontal_walls[1:-1, :].sum())
                + int(self.vertical_walls[:, 1:-1].sum()))

    def interior_segment_count(self):
        """Total number of interior wall segments on this board."""
        return 2 * self.size * (self.size - 1)

    def get_empty_cells(self):
        """
        All empty cells in board-scan order (row by row).

        Returns:
            list: (x, y) tuples
        """
        empty = []
        for y in range(self.size):
            for x in range(self.size):
                if self.cells[y, x] == EMPTY:
                    empty.append((x, y))
        return empty

    def neighbors(self, x, y):
        """
        Cells reachable from (x, y) in one step without crossing a wall.

        Ignores occupancy. Order is up, down, left, right.
        """
        result = []
        for dx, dy in ((0, -1), (0, 1), (-1, 0), (1, 0)):
            nx, ny = x + dx, y + dy
            if not self.wall_between(x, y, nx, ny):
                result.append((nx, ny))
        return result

    def key(self):
        """Hashable snapshot of every array."""
        return (self.size, self.cells.tobytes(), self.horizontal_walls.tobytes(),
                self.vertical_walls.tobytes(), self.territory.tobytes())
