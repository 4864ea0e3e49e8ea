"""
Type definitions used across layers
"""

from enum import StrEnum


class GameType(StrEnum):
    CHESS = "chess"
    CHECKERS = "checkers"
    HEARTS = "hearts"


class Status(StrEnum):
    WAITING = "waiting"
    ACTIVE = "active"
    COMPLETED = "completed"


class Color(StrEnum):
    """Seat colors. The 2-player board games use the first two, Hearts uses the last four."""

    WHITE = "white"
    BLACK = "black"
    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
