from typing import Optional, Tuple

# Wall bitmask constants
TOP    = 0b0001
RIGHT  = 0b0010
BOTTOM = 0b0100
LEFT   = 0b1000

# All walls present by default (T|R|B|L) = 15
ALL_WALLS = TOP | RIGHT | BOTTOM | LEFT

# Direction helpers
DX = {TOP: 0, BOTTOM: 0, RIGHT: 1, LEFT: -1}
DY = {TOP: -1, BOTTOM: 1, RIGHT: 0, LEFT: 0}
OPPOSITE = {TOP: BOTTOM, BOTTOM: TOP, RIGHT: LEFT, LEFT: RIGHT}

# Scan order used by every neighbor query
DIRECTION_ORDER = (TOP, RIGHT, BOTTOM, LEFT)

# Player-facing move names
MOVES = {"up": TOP, "right": RIGHT, "down": BOTTOM, "left": LEFT}


class Cell:
    """
    One grid unit. Holds only durable state: the wall bitmask and the
    predecessor link written by the solvers.
    """

    __slots__ = ('x', 'y', 'walls', 'predecessor')

    def __init__(self, x: int, y: int):
        self.x = x
        self.y = y
        self.walls = ALL_WALLS
        self.predecessor: Optional['Cell'] = None

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def has_wall(self, direction: int) -> bool:
        return (self.walls & direction) != 0

    @property
    def top(self) -> bool:
        return self.has_wall(TOP)

    @property
    def right(self) -> bool:
        return self.has_wall(RIGHT)

    @property
    def bottom(self) -> bool:
        return self.has_wall(BOTTOM)

    @property
    def left(self) -> bool:
        return self.has_wall(LEFT)

    def direction_to(self, other: 'Cell') -> int:
        """
        Returns the direction bit pointing from this cell to an adjacent one.
        Raises ValueError if the two cells are not orthogonal neighbors.
        """
        dx = other.x - self.x
        dy = other.y - self.y
        if dx == 1 and dy == 0:
            return RIGHT
        if dx == -1 and dy == 0:
            return LEFT
        if dy == 1 and dx == 0:
            return BOTTOM
        if dy == -1 and dx == 0:
            return TOP
        raise ValueError(f"Cells {self.position} and {other.position} are not adjacent")

    def wall_towards(self, other: 'Cell') -> bool:
        return self.has_wall(self.direction_to(other))

    def __repr__(self):
        return f"Cell({self.x}, {self.y})"
