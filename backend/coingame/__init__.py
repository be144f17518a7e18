from flask import Flask, current_app
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import json
import click
from config import Config
from coingame.errors import StorageUnavailable

db = SQLAlchemy()
migrate = Migrate()
allowed_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
socketio = SocketIO(cors_allowed_origins=allowed_origins, async_mode=None)

EXTENSION_KEY = 'coin_game'


def get_coordinator():
    """The GameCoordinator owned by the current app."""
    return current_app.extensions[EXTENSION_KEY]


def create_app(config_class=Config, rng=None):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, origins=allowed_origins)

    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from coingame.main import main
    flask_app.register_blueprint(main)

    from coingame.services.games import GameCoordinator
    coordinator = GameCoordinator.from_config(flask_app.config, rng=rng)
    flask_app.extensions[EXTENSION_KEY] = coordinator

    from coingame.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=flask_app.config.get('SOCKETIO_NAMESPACE', '/'))

    with flask_app.app_context():
        try:
            coordinator.start()
        except StorageUnavailable as exc:
            # the schema comes from `flask db upgrade` or `flask db-reset`
            flask_app.logger.warning(f"[coins-not-placed] {exc}")

    @click.command('db-reset')
    def db_reset_command():
        """Drops and recreates the game tables, then places a fresh coin batch."""
        import coingame.models  # noqa: F401
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            get_coordinator().reset_coins()
            print('Database has been reset and seeded with coins!')

    @click.command('reset-coins')
    def reset_coins_command():
        """Replaces every coin on the board with a fresh batch."""
        with flask_app.app_context():
            get_coordinator().reset_coins()
            flask_app.logger.info('[coins-reset] requested from CLI')
            print('Coins have been reset!')

    @click.command('show-state')
    def show_state_command():
        """Prints the current game state as JSON."""
        with flask_app.app_context():
            print(json.dumps(get_coordinator().snapshot(), indent=2))

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(reset_coins_command)
    flask_app.cli.add_command(show_state_command)

    return flask_app
