import logging
import random
import threading
from typing import Dict, Optional

from .geometry import permutation, position_key

logger = logging.getLogger(__name__)

COIN_VALUES = (1, 2, 5, 10)


def coin_value(rank: int) -> int:
    """Value of the coin placed at the given rank of a batch."""
    if rank < 50:
        return 1
    if rank < 75:
        return 2
    if rank < 95:
        return 5
    return 10


class CoinField:
    """The uncollected coins on the board, keyed by "row,col".

    Every method takes the field's own lock, so a reader never sees a
    half-built batch and a coin can only be collected once.
    """

    def __init__(self, width: int, height: int, num_coins: int,
                 rng: Optional[random.Random] = None):
        self.width = width
        self.height = height
        self.num_coins = min(num_coins, width * height)
        self._rng = rng or random.Random()
        self._coins: Dict[str, int] = {}
        self._lock = threading.Lock()

    def repopulate(self) -> None:
        cells = permutation(self.width * self.height, self._rng)[:self.num_coins]
        batch = {
            position_key(cell // self.width, cell % self.width): coin_value(rank)
            for rank, cell in enumerate(cells)
        }
        with self._lock:
            self._coins = batch
        logger.info(f"[coins-placed] count={len(batch)}")

    def collect_at(self, row: int, col: int) -> Optional[int]:
        with self._lock:
            return self._coins.pop(position_key(row, col), None)

    def place(self, row: int, col: int, value: int) -> None:
        """Put a single coin on the board, replacing any coin already there."""
        if value not in COIN_VALUES:
            raise ValueError(f"Coin value must be one of {COIN_VALUES}, got {value}")
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise ValueError(f"Cell {row},{col} is off the board")
        with self._lock:
            self._coins[position_key(row, col)] = value

    def is_empty(self) -> bool:
        with self._lock:
            return not self._coins

    def snapshot(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._coins)

    def __len__(self) -> int:
        with self._lock:
            return len(self._coins)
