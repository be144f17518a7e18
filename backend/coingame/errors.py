"""
coingame.errors: exception hierarchy for the game coordinator.

Name errors are recoverable and go back to the requesting session only.
Move errors are logged and never reach a client. Storage errors are
transient and safe to retry.
"""

from typing import Optional


class CoinGameError(Exception):
    """Base exception for all coin game errors."""
    pass


class InvalidName(CoinGameError):
    """Raised when a player name is empty or too long."""

    def __init__(self, name: str, max_length: int):
        self.name = name
        self.max_length = max_length
        super().__init__(
            f"Player name must be 1 to {max_length} characters, got {len(name)}"
        )


class NameTaken(CoinGameError):
    """Raised when a player name has already been registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Player name '{name}' is already taken")


class UnknownPlayer(CoinGameError):
    """Raised when a move is requested for a name that was never registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No player named '{name}'")


class StorageUnavailable(CoinGameError):
    """Raised when the backing store cannot complete an operation.

    The whole coordinator operation may be retried.
    """

    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        self.operation = operation
        self.cause = cause
        message = f"Storage unavailable during {operation}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
