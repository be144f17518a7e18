from coingame import db
from coingame.services.games.geometry import Position, position_key
from coingame.services.games.registry import MAX_PLAYER_NAME_LENGTH


class PlayerRecord(db.Model):
    __tablename__ = 'player'
    # id order is registration order; leaderboard ties fall back to it
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(MAX_PLAYER_NAME_LENGTH), unique=True, nullable=False, index=True)
    row = db.Column(db.Integer, nullable=False)
    col = db.Column(db.Integer, nullable=False)
    score = db.Column(db.Integer, default=0, nullable=False)

    @property
    def position(self):
        return Position(self.row, self.col)


class CoinRecord(db.Model):
    __tablename__ = 'coin'
    __table_args__ = (db.UniqueConstraint('row', 'col', name='uq_coin_cell'),)
    id = db.Column(db.Integer, primary_key=True)
    row = db.Column(db.Integer, nullable=False)
    col = db.Column(db.Integer, nullable=False)
    value = db.Column(db.Integer, nullable=False)

    @property
    def key(self):
        return position_key(self.row, self.col)
