"""Shared CLI utilities."""

import asyncio
from functools import wraps
from pathlib import Path

import click

from ..config import Config
from ..db import get_db_path
from ..db.repositories import UserProfileRepository
from ..models.user_profile import UserProfile


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def get_config(ctx: click.Context) -> Config:
    """Get the Config stored on the root context."""
    ctx.ensure_object(dict)
    if "config" not in ctx.obj:
        ctx.obj["config"] = Config.from_env()
    return ctx.obj["config"]


def get_db(ctx: click.Context) -> Path:
    """Get the database path for the configured data directory."""
    return get_db_path(get_config(ctx).data_dir)


def ensure_initialized(ctx: click.Context) -> Path:
    """Ensure the database is initialized and return its path."""
    db_path = get_db(ctx)
    if not db_path.exists():
        click.echo(
            click.style("Error: ", fg="red")
            + "Project not initialized. Run 'fitloop init' first."
        )
        ctx.exit(1)
    return db_path


async def require_profile(ctx: click.Context, db_path: Path) -> UserProfile:
    """Load the latest profile or exit with an error."""
    profile = await UserProfileRepository(db_path).get_latest()
    if profile is None:
        echo_error("No profile found. Run 'fitloop profile setup' first.")
        ctx.exit(1)
    return profile


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    # Calculate column widths
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = []
    lines.append("".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers)))
    lines.append("".join("-" * w + " " * padding for w in widths))
    for row in rows:
        lines.append(
            "".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row))
        )

    return "\n".join(line.rstrip() for line in lines)
