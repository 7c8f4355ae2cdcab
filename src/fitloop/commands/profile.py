"""Profile management commands."""

import click

from ..clients.manual import ManualInputClient
from ..db.repositories import UserProfileRepository
from ..models.user_profile import UserProfile
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    require_profile,
)


@click.group()
def profile():
    """Create and view your profile."""
    pass


@profile.command("setup")
@click.option("--name", help="Your name (skips the questionnaire with --goals/--environment)")
@click.option("--goals", help="What you want from training")
@click.option("--environment", help="Where and with what you train")
@click.pass_context
@async_command
async def setup(ctx: click.Context, name: str | None, goals: str | None, environment: str | None):
    """Create or update your profile.

    Runs an interactive questionnaire unless --name, --goals and
    --environment are all given.
    """
    db_path = ensure_initialized(ctx)
    repo = UserProfileRepository(db_path)
    existing = await repo.get_latest()

    if name and goals and environment:
        new_profile = UserProfile(name=name, goals=goals, environment=environment)
        try:
            new_profile.validate()
        except ValueError as e:
            echo_error(str(e))
            ctx.exit(1)
    else:
        client = ManualInputClient()
        new_profile = await client.collect_profile(existing)

    if existing:
        new_profile.id = existing.id
        await repo.update(new_profile)
        echo_success(f"Profile updated for {new_profile.name}")
    else:
        new_profile.id = await repo.create(new_profile)
        echo_success(f"Profile created for {new_profile.name}")


@profile.command("show")
@click.pass_context
@async_command
async def show(ctx: click.Context):
    """Show the current profile."""
    db_path = ensure_initialized(ctx)
    current = await require_profile(ctx, db_path)

    click.echo()
    click.echo(click.style("Profile", bold=True))
    click.echo("=" * 50)
    click.echo(current.get_summary())
    if current.updated_at:
        echo_info(f"Last updated {current.updated_at.strftime('%Y-%m-%d %H:%M')}")
