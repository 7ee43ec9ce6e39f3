"""
Territory detection.

After every wall placement the board is partitioned into regions: maximal
sets of cells that can reach each other without crossing a wall or the
board edge. Pieces do not split regions; they sit inside them. A closed
region holding pieces of exactly one player becomes that player's
territory and is worth one point per cell. Regions with no pieces, or
with pieces of several players, stay neutral.

The map is rebuilt from scratch each time. Walls are only ever added, so
regions only ever shrink and an owned region stays owned.
"""
from collections import deque

from .board import EMPTY, NO_OWNER


def find_regions(board):
    """
    Partition the board into connected regions with a breadth-first fill.

    Returns:
        list: Regions in board-scan order of their first cell; each region
        is a list of (x, y) tuples
    """
    size = board.size
    seen = [[False] * size for _ in range(size)]
    regions = []

    for y in range(size):
        for x in range(size):
            if seen[y][x]:
                continue
            seen[y][x] = True
            region = []
            queue = deque([(x, y)])
            while queue:
                cx, cy = queue.popleft()
                region.append((cx, cy))
                for nx, ny in board.neighbors(cx, cy):
                    if not seen[ny][nx]:
                        seen[ny][nx] = True
                        queue.append((nx, ny))
            regions.append(region)

    return regions


def is_enclosed(board, region):
    """
    Check that no cell of the region has an open edge leading outside it.

    Regions produced by ``find_regions`` are maximal, so this always holds
    for them; it is kept as an explicit check on the region boundary.
    """
    members = set(region)
    for x, y in region:
        for neighbor in board.neighbors(x, y):
            if neighbor not in members:
                return False
    return True


def region_owner(board, region):
    """
    Decide who owns a region.

    Returns:
        int or None: The single player with pieces inside, or None when
        the region is empty or contested
    """
    present = set()
    for x, y in region:
        value = board.cells[y, x]
        if value != EMPTY:
            present.add(int(value))
            if len(present) > 1:
                return None
    if len(present) == 1:
        return present.pop()
    return None


def update_territory(board, players):
    """
    Recompute the territory map and every player's score.

    Args:
        board: Board whose ``territory`` array is rewritten in place
        players: Player records whose ``score`` is rewritten in place

    Returns:
        list: (owner, region) pairs for every owned region
    """
    board.territory.fill(NO_OWNER)
    for player in players:
        player.score = 0

    owned = []
    for region in find_regions(board):
        if not is_enclosed(board, region):
            continue
        owner = region_owner(board, region)
        if owner is None:
            continue
        for x, y in region:
            board.territory[y, x] = owner
        players[owner].score += len(region)
        owned.append((owner, region))

    return owned
