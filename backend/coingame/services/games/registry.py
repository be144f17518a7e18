import random
import threading
from typing import Dict, List, Optional, Tuple

from coingame.errors import InvalidName, NameTaken, UnknownPlayer
from .geometry import Position, random_point

# also the width of the player.name column
MAX_PLAYER_NAME_LENGTH = 32


class Player:
    __slots__ = ('name', 'position', 'score')

    def __init__(self, name: str, position: Position, score: int = 0):
        self.name = name
        self.position = position
        self.score = score


def validate_name(name: str, max_length: int) -> None:
    if len(name) == 0 or len(name) > max_length:
        raise InvalidName(name, max_length)


class PlayerRegistry:
    """Registered players, their positions and scores.

    Players are kept in registration order; that order breaks leaderboard
    ties. Players are never removed.
    """

    def __init__(self, width: int, height: int,
                 max_name_length: int = MAX_PLAYER_NAME_LENGTH,
                 rng: Optional[random.Random] = None):
        self.width = width
        self.height = height
        self.max_name_length = max_name_length
        self._rng = rng or random.Random()
        self._players: Dict[str, Player] = {}
        self._lock = threading.Lock()

    def register(self, name: str) -> Player:
        validate_name(name, self.max_name_length)
        with self._lock:
            if name in self._players:
                raise NameTaken(name)
            player = Player(name, random_point(self.width, self.height, self._rng))
            self._players[name] = player
            return Player(player.name, player.position, player.score)

    def position_of(self, name: str) -> Position:
        with self._lock:
            return self._get(name).position

    def update_position(self, name: str, row: int, col: int) -> None:
        with self._lock:
            self._get(name).position = Position(row, col)

    def add_score(self, name: str, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"Score increments must be non-negative, got {amount}")
        with self._lock:
            self._get(name).score += amount

    def score_of(self, name: str) -> int:
        with self._lock:
            return self._get(name).score

    def snapshot(self) -> List[Tuple[str, Position]]:
        with self._lock:
            return [(p.name, p.position) for p in self._players.values()]

    def ranked_scores(self) -> List[Tuple[str, int]]:
        with self._lock:
            scores = [(p.name, p.score) for p in self._players.values()]
        # sorted() is stable, so equal scores stay in registration order
        return sorted(scores, key=lambda item: item[1], reverse=True)

    def _get(self, name: str) -> Player:
        player = self._players.get(name)
        if player is None:
            raise UnknownPlayer(name)
        return player

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._players

    def __len__(self) -> int:
        with self._lock:
            return len(self._players)
