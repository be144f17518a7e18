from typing import Any, Dict


def project_state(registry, coin_field) -> Dict[str, Any]:
    """Return the client-facing view of the game.

    Only the parts the client renders: each player's position, the
    leaderboard already sorted so the client can walk it in order, and
    every coin with its value. Containers are fresh copies, safe to
    serialize after the caller releases its lock.
    """
    return {
        'positions': [[name, position.key()] for name, position in registry.snapshot()],
        'scores': [[name, score] for name, score in registry.ranked_scores()],
        'coins': coin_field.snapshot(),
    }
