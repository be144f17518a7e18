"""SQL-backed registry and coin field.

Drop-in replacements for PlayerRegistry and CoinField that keep the game
in the Flask-SQLAlchemy database instead of process memory. Every
database failure rolls the session back and surfaces as
StorageUnavailable, so callers can retry the whole operation. Must be
used inside an application context.
"""

import logging
import random
import threading
from contextlib import contextmanager
from typing import Dict, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from coingame import db
from coingame.errors import NameTaken, StorageUnavailable, UnknownPlayer
from coingame.models import CoinRecord, PlayerRecord
from .coin_field import COIN_VALUES, coin_value
from .geometry import Position, permutation, random_point
from .registry import MAX_PLAYER_NAME_LENGTH, Player, validate_name

logger = logging.getLogger(__name__)


@contextmanager
def _storage(operation: str):
    try:
        yield
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error(f"[storage-error] operation={operation} error={exc}")
        raise StorageUnavailable(operation, exc) from exc


_local = threading.local()


@contextmanager
def unit_of_work(operation: str):
    """Run several store calls as one transaction with a single commit.

    Inside the block the Sql* methods only flush. Any failure rolls back
    every change made in the block, so the caller can retry it whole.
    """
    depth = getattr(_local, 'depth', 0)
    _local.depth = depth + 1
    try:
        with _storage(operation):
            try:
                yield
            except Exception:
                db.session.rollback()
                raise
            if depth == 0:
                db.session.commit()
    finally:
        _local.depth = depth


def _commit() -> None:
    if getattr(_local, 'depth', 0):
        db.session.flush()
    else:
        db.session.commit()


class SqlPlayerRegistry:

    def __init__(self, width: int, height: int, rng: Optional[random.Random] = None):
        self.width = width
        self.height = height
        self._rng = rng or random.Random()
        self._lock = threading.Lock()

    def register(self, name: str) -> Player:
        validate_name(name, MAX_PLAYER_NAME_LENGTH)
        position = random_point(self.width, self.height, self._rng)
        with self._lock, _storage('register'):
            if PlayerRecord.query.filter_by(name=name).first() is not None:
                raise NameTaken(name)
            db.session.add(PlayerRecord(name=name, row=position.row, col=position.col, score=0))
            try:
                db.session.commit()
            except IntegrityError as exc:
                # another process won the unique constraint
                db.session.rollback()
                raise NameTaken(name) from exc
        return Player(name, position)

    def position_of(self, name: str) -> Position:
        with _storage('position_of'):
            return self._get(name).position

    def update_position(self, name: str, row: int, col: int) -> None:
        with self._lock, _storage('update_position'):
            record = self._get(name)
            record.row = row
            record.col = col
            _commit()

    def add_score(self, name: str, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"Score increments must be non-negative, got {amount}")
        with self._lock, _storage('add_score'):
            record = self._get(name)
            record.score = record.score + amount
            _commit()

    def score_of(self, name: str) -> int:
        with _storage('score_of'):
            return self._get(name).score

    def snapshot(self) -> List[Tuple[str, Position]]:
        with _storage('snapshot'):
            records = PlayerRecord.query.order_by(PlayerRecord.id).all()
            return [(r.name, r.position) for r in records]

    def ranked_scores(self) -> List[Tuple[str, int]]:
        with _storage('ranked_scores'):
            records = PlayerRecord.query.order_by(
                PlayerRecord.score.desc(), PlayerRecord.id.asc()
            ).all()
            return [(r.name, r.score) for r in records]

    def _get(self, name: str) -> PlayerRecord:
        record = PlayerRecord.query.filter_by(name=name).first()
        if record is None:
            raise UnknownPlayer(name)
        return record

    def __contains__(self, name: str) -> bool:
        with _storage('contains'):
            return PlayerRecord.query.filter_by(name=name).first() is not None

    def __len__(self) -> int:
        with _storage('count_players'):
            return PlayerRecord.query.count()


class SqlCoinField:

    def __init__(self, width: int, height: int, num_coins: int,
                 rng: Optional[random.Random] = None):
        self.width = width
        self.height = height
        self.num_coins = min(num_coins, width * height)
        self._rng = rng or random.Random()
        self._lock = threading.Lock()

    def repopulate(self) -> None:
        cells = permutation(self.width * self.height, self._rng)[:self.num_coins]
        with self._lock, _storage('repopulate'):
            CoinRecord.query.delete()
            db.session.add_all([
                CoinRecord(row=cell // self.width, col=cell % self.width, value=coin_value(rank))
                for rank, cell in enumerate(cells)
            ])
            _commit()
        logger.info(f"[coins-placed] count={len(cells)}")

    def collect_at(self, row: int, col: int) -> Optional[int]:
        with self._lock, _storage('collect_at'):
            record = CoinRecord.query.filter_by(row=row, col=col).first()
            if record is None:
                return None
            value = record.value
            db.session.delete(record)
            _commit()
            return value

    def place(self, row: int, col: int, value: int) -> None:
        if value not in COIN_VALUES:
            raise ValueError(f"Coin value must be one of {COIN_VALUES}, got {value}")
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise ValueError(f"Cell {row},{col} is off the board")
        with self._lock, _storage('place'):
            record = CoinRecord.query.filter_by(row=row, col=col).first()
            if record is None:
                db.session.add(CoinRecord(row=row, col=col, value=value))
            else:
                record.value = value
            _commit()

    def is_empty(self) -> bool:
        with _storage('is_empty'):
            return CoinRecord.query.first() is None

    def snapshot(self) -> Dict[str, int]:
        with _storage('coin_snapshot'):
            return {c.key: c.value for c in CoinRecord.query.order_by(CoinRecord.id).all()}

    def __len__(self) -> int:
        with _storage('count_coins'):
            return CoinRecord.query.count()
