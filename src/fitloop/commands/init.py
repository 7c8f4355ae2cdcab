"""Initialize project command."""

import click

from ..db import init_db
from .base import async_command, echo_info, echo_success, get_config, get_db


@click.command()
@click.pass_context
@async_command
async def init(ctx: click.Context):
    """Initialize the fitloop data directory and database.

    This creates the data directory and initializes the SQLite database
    with the required schema.
    """
    config = get_config(ctx)
    echo_info(f"Initializing fitloop in {config.data_dir}")

    db_path = get_db(ctx)
    await init_db(db_path)
    echo_success("Database initialized")

    click.echo()
    click.echo("fitloop is ready to use!")
    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Create your profile:")
    click.echo("     fitloop profile setup")
    click.echo()
    click.echo("  2. Generate your first meta-prompt:")
    click.echo("     fitloop prompt generate --output prompt.md")
    click.echo()
    click.echo("  3. Log workouts as you go:")
    click.echo('     fitloop log "Dumbbell Squat" 45 10 3 --difficulty moderate')
