import random
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple, Union


class Position(NamedTuple):
    row: int
    col: int

    def key(self) -> str:
        return position_key(self.row, self.col)


class Direction(Enum):
    UP = 'U'
    DOWN = 'D'
    LEFT = 'L'
    RIGHT = 'R'


# (d_col, d_row); rows grow downward like screen coordinates
DELTAS = {
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
}


def parse_direction(value: Union[str, Direction, None]) -> Optional[Direction]:
    """Return the Direction for 'U'/'D'/'L'/'R', or None for anything else."""
    if isinstance(value, Direction):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Direction(value)
    except ValueError:
        return None


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def step(position: Position, direction: Direction, width: int, height: int) -> Position:
    """Move one cell, clamping each axis independently into the board."""
    d_col, d_row = DELTAS[direction]
    return Position(
        clamp(position.row + d_row, 0, height - 1),
        clamp(position.col + d_col, 0, width - 1),
    )


def random_point(width: int, height: int, rng: Optional[random.Random] = None) -> Position:
    rng = rng or random
    return Position(rng.randrange(height), rng.randrange(width))


def permutation(n: int, rng: Optional[random.Random] = None) -> List[int]:
    """A uniformly random ordering of range(n)."""
    rng = rng or random
    cells = list(range(n))
    rng.shuffle(cells)
    return cells


def position_key(row: int, col: int) -> str:
    return f"{row},{col}"


def parse_position_key(key: str) -> Tuple[int, int]:
    row, col = key.split(',')
    return int(row), int(col)
