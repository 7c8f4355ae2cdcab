"""CLI commands for fitloop."""

from .init import init
from .log import log_workout
from .profile import profile
from .progress import progress
from .prompt import prompt
from .serve import serve
from .session import session

__all__ = [
    "init",
    "log_workout",
    "profile",
    "progress",
    "prompt",
    "serve",
    "session",
]
