"""Shared router helpers."""

from pathlib import Path

from fastapi import Request


def get_db_path(request: Request) -> Path:
    """Get the database path from app state."""
    return request.app.state.db_path
