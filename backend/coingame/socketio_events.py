from flask_socketio import emit
from flask import current_app, request
from coingame import socketio, get_coordinator
from coingame.errors import InvalidName, NameTaken, StorageUnavailable, UnknownPlayer
from typing import Dict


# Socket id -> registered player name. A socket that is not here has not
# been welcomed yet and may only send `name`.
_sid_to_name: Dict[str, str] = {}


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _broadcast_state() -> None:
    try:
        state = get_coordinator().snapshot()
    except StorageUnavailable as exc:
        current_app.logger.error(f"[state-skip] {exc}")
        return
    socketio.emit('state', state, namespace=request.namespace)


def handle_connect(auth=None):
    current_app.logger.debug(f"[connect] sid={_get_sid()}")


def handle_disconnect(reason=None):
    # The player stays on the board; only the session mapping goes away
    name = _sid_to_name.pop(_get_sid(), None)
    if name:
        current_app.logger.info(f"[player-left] name={name}")


def handle_name(data):
    sid = _get_sid()
    if sid in _sid_to_name:
        return
    if not isinstance(data, str):
        emit('badname', data)
        return
    name = data.strip()
    try:
        get_coordinator().register_player(name)
    except (InvalidName, NameTaken) as exc:
        current_app.logger.info(f"[badname] name={name!r} reason={exc}")
        emit('badname', name)
        return
    except StorageUnavailable as exc:
        current_app.logger.error(f"[player-join-failed] name={name!r} {exc}")
        emit('unavailable', {'message': 'Game storage is unavailable, try again'})
        return
    _sid_to_name[sid] = name
    current_app.logger.info(f"[player-join] name={name} sid={sid}")
    emit('welcome')
    _broadcast_state()


def handle_move(direction):
    name = _sid_to_name.get(_get_sid())
    if not name:
        return
    try:
        get_coordinator().apply_move(name, direction)
    except UnknownPlayer as exc:
        current_app.logger.warning(f"[move-unknown] {exc}")
        return
    except StorageUnavailable as exc:
        current_app.logger.error(f"[move-failed] name={name} {exc}")
        emit('unavailable', {'message': 'Game storage is unavailable, try again'})
        return
    _broadcast_state()


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register the game's Socket.IO event handlers on the given namespace."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('name', handle_name, namespace=namespace)
    socketio.on_event('move', handle_move, namespace=namespace)
