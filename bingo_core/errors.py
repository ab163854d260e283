from __future__ import annotations

from typing import Optional


class BingoError(Exception):
    """Base class for music bingo errors."""


class StoreError(BingoError):
    """The game store could not be reached or returned an unusable response."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status


class NotYetPlayedError(BingoError):
    """A card cell was clicked before its song was played."""

    def __init__(self, title: str):
        super().__init__("That song has not been played yet!")
        self.title = title


class UnknownPatternError(BingoError, ValueError):
    pass
