import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, Optional, Union

from .geometry import Direction, parse_direction, step
from .projector import project_state

logger = logging.getLogger(__name__)


@contextmanager
def _in_memory(operation: str):
    yield


class GameCoordinator:
    """Owns the registry and the coin field and is their only writer.

    Registration, moves and snapshots all run under one lock, so a coin
    is collected by at most one mover, a refill never races a collection,
    and a snapshot never shows a half-applied move.
    """

    def __init__(self, registry, coin_field, unit_of_work=None):
        self.registry = registry
        self.coin_field = coin_field
        # groups the store calls of one move; the SQL store commits once at the end
        self._unit_of_work = unit_of_work or _in_memory
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config, rng=None) -> 'GameCoordinator':
        """Build the coordinator and its stores for an app config."""
        width = int(config.get('BOARD_WIDTH', 64))
        height = int(config.get('BOARD_HEIGHT', 64))
        num_coins = int(config.get('NUM_COINS', 100))
        if config.get('GAME_STORE', 'memory') == 'sql':
            from .sql_store import SqlCoinField, SqlPlayerRegistry, unit_of_work
            registry = SqlPlayerRegistry(width, height, rng=rng)
            coin_field = SqlCoinField(width, height, num_coins, rng=rng)
            return cls(registry, coin_field, unit_of_work=unit_of_work)
        from .coin_field import CoinField
        from .registry import PlayerRegistry
        registry = PlayerRegistry(width, height, rng=rng)
        coin_field = CoinField(width, height, num_coins, rng=rng)
        return cls(registry, coin_field)

    def start(self) -> None:
        with self._lock:
            if self.coin_field.is_empty():
                self.coin_field.repopulate()

    def register_player(self, candidate_name: str) -> str:
        with self._lock:
            player = self.registry.register(candidate_name)
        logger.info(f"[player-registered] name={player.name} position={player.position.key()}")
        return player.name

    def apply_move(self, name: str, direction: Union[str, Direction]) -> Optional[int]:
        """Move a player one cell and collect any coin where they land.

        Returns the value of the collected coin, or None. Unrecognised
        directions are ignored; an unregistered name raises UnknownPlayer.
        """
        parsed = parse_direction(direction)
        if parsed is None:
            logger.debug(f"[move-ignored] name={name} direction={direction!r}")
            return None

        with self._lock, self._unit_of_work('apply_move'):
            current = self.registry.position_of(name)
            target = step(current, parsed, self.coin_field.width, self.coin_field.height)
            value = self.coin_field.collect_at(target.row, target.col)
            if value is not None:
                self.registry.add_score(name, value)
            self.registry.update_position(name, target.row, target.col)
            if self.coin_field.is_empty():
                logger.info(f"[coins-exhausted] name={name}")
                self.coin_field.repopulate()
        return value

    def reset_coins(self) -> None:
        with self._lock:
            self.coin_field.repopulate()

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return project_state(self.registry, self.coin_field)
