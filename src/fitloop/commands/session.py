"""Session cycle commands."""

import logging

import click

from ..db.repositories import SessionContextRepository
from ..logging import session_extra
from ..models.session import SESSIONS_PER_CYCLE
from ..services.session_cycle import (
    advance,
    get_session_exercises,
    get_session_title,
    normalize_session_number,
)
from .base import async_command, echo_success, echo_warning, ensure_initialized, get_config

logger = logging.getLogger(__name__)


@click.group()
def session():
    """Track your position in the 8-session cycle."""
    pass


@session.command("status")
@click.pass_context
@async_command
async def status(ctx: click.Context):
    """Show the current cycle position and the next workout."""
    db_path = ensure_initialized(ctx)
    config = get_config(ctx)
    context = await SessionContextRepository(db_path).get_or_create(config.user_id)

    click.echo()
    click.echo(click.style(context.get_position_display(), bold=True))
    click.echo("=" * 50)
    click.echo(f"Last activity: {context.last_activity.strftime('%Y-%m-%d %H:%M')}")

    click.echo()
    click.echo(click.style("Next Workout:", bold=True))
    click.echo(f"  {get_session_title(context.session_number)}")
    for ex in get_session_exercises(context.session_number):
        weight = f"{ex.weight:g} {ex.unit}".strip() if ex.weight else "bodyweight"
        click.echo(f"  - {ex.name}: {ex.sets} x {ex.target_reps} @ {weight}")

    click.echo()
    click.echo(click.style("Cycle Overview:", bold=True))
    current = normalize_session_number(context.session_number)
    for number in range(1, SESSIONS_PER_CYCLE + 1):
        prefix = ">" if number == current else " "
        status_icon = ""
        if number < current:
            status_icon = click.style(" [done]", fg="green")
        elif number == current:
            status_icon = click.style(" [next]", fg="yellow")
        click.echo(f"  {prefix} Session {number}: {get_session_title(number)}{status_icon}")


@session.command("advance")
@click.pass_context
@async_command
async def advance_session(ctx: click.Context):
    """Mark the current session complete and move to the next one."""
    db_path = ensure_initialized(ctx)
    config = get_config(ctx)
    repo = SessionContextRepository(db_path)
    context = await repo.get_or_create(config.user_id)

    position = advance(context.cycle_number, context.session_number)
    updated = await repo.update(
        config.user_id,
        cycle_number=position.cycle_number,
        session_number=position.session_number,
    )
    logger.info(
        "Advanced session",
        extra=session_extra(config.user_id, updated.cycle_number, updated.session_number),
    )

    if updated.cycle_number > context.cycle_number:
        echo_success(f"Cycle {context.cycle_number} complete! Starting cycle {updated.cycle_number}.")
    echo_success(
        f"Next: {updated.get_position_display()} - {get_session_title(updated.session_number)}"
    )


@session.command("reset")
@click.pass_context
@async_command
async def reset(ctx: click.Context):
    """Go back to cycle 1, session 1."""
    db_path = ensure_initialized(ctx)
    config = get_config(ctx)

    echo_warning("This resets your cycle position (workout history is kept).")
    if not click.confirm("Reset to cycle 1, session 1?"):
        return

    await SessionContextRepository(db_path).reset(config.user_id)
    echo_success("Position: Cycle 1, Session 1")
