"""Database layer for fitloop."""

from .engine import get_db_path, init_db
from .repositories import (
    SessionContextRepository,
    UserProfileRepository,
    WorkoutRepository,
)

__all__ = [
    "get_db_path",
    "init_db",
    "SessionContextRepository",
    "UserProfileRepository",
    "WorkoutRepository",
]
