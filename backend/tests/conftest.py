import os
import random
import sys
import pytest

# Ensure the backend root (containing the `coingame` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from coingame import create_app, db, get_coordinator, socketio
from coingame.services.games import CoinField, GameCoordinator, PlayerRegistry


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    BOARD_WIDTH = 64
    BOARD_HEIGHT = 64
    NUM_COINS = 100
    GAME_STORE = 'memory'
    SOCKETIO_NAMESPACE = '/'
    PORT = 3000


class SqlTestConfig(TestConfig):
    GAME_STORE = 'sql'


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig, rng=random.Random(1234))
    with application.app_context():
        yield application


@pytest.fixture()
def sql_app():
    application = create_app(SqlTestConfig, rng=random.Random(1234))
    with application.app_context():
        import coingame.models  # noqa: F401
        db.create_all()
        get_coordinator().start()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/')
    except Exception:
        pass


@pytest.fixture()
def coordinator():
    """An in-memory coordinator with an empty coin field."""
    rng = random.Random(42)
    registry = PlayerRegistry(64, 64, 32, rng=rng)
    coin_field = CoinField(64, 64, 100, rng=rng)
    return GameCoordinator(registry, coin_field)
