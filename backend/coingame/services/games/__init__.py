"""Game domain services: board geometry, coins, players, coordination.

Pure(ish) domain logic imported by the Socket.IO handlers and HTTP
routes, keeping transport concerns separated from core game mechanics.
"""

from .coin_field import CoinField
from .coordinator import GameCoordinator
from .geometry import Direction, Position
from .projector import project_state
from .registry import PlayerRegistry

__all__ = [
    'CoinField',
    'Direction',
    'GameCoordinator',
    'PlayerRegistry',
    'Position',
    'project_state',
]
