"""Prompt generation commands."""

import logging
from pathlib import Path

import click

from ..db.repositories import SessionContextRepository, WorkoutRepository
from ..logging import session_extra
from ..services.prompt_composer import PromptComposer, extract_metadata
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    get_config,
    require_profile,
)

logger = logging.getLogger(__name__)


def _write_or_echo(text: str, output: Path | None) -> None:
    if output:
        output.write_text(text, encoding="utf-8")
        echo_success(f"Prompt written to {output}")
    else:
        click.echo(text)


@click.group()
def prompt():
    """Generate prompts to paste into your AI assistant."""
    pass


@prompt.command("generate")
@click.option("--language", "-l", default=None, help="Response language: en or ja")
@click.option(
    "--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Write to a file"
)
@click.option("--enrich", is_flag=True, help="Append an analysis of your workout history")
@click.pass_context
@async_command
async def generate(ctx: click.Context, language: str | None, output: Path | None, enrich: bool):
    """Generate the meta-prompt for your next session."""
    db_path = ensure_initialized(ctx)
    config = get_config(ctx)
    profile = await require_profile(ctx, db_path)

    context = await SessionContextRepository(db_path).get_or_create(config.user_id)
    history = await WorkoutRepository(db_path).list_for_user(config.user_id)

    composer = PromptComposer()
    text = composer.generate_full_prompt(
        profile, context, language or config.language, history=history
    )
    if enrich:
        text = composer.enrich_with_learning_data(text, history)

    logger.info(
        "Generated meta-prompt",
        extra=session_extra(config.user_id, context.cycle_number, context.session_number),
    )
    _write_or_echo(text, output)


@prompt.command("training")
@click.option(
    "--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Write to a file"
)
@click.pass_context
@async_command
async def training(ctx: click.Context, output: Path | None):
    """Generate the compact training prompt for today's session."""
    db_path = ensure_initialized(ctx)
    config = get_config(ctx)
    profile = await require_profile(ctx, db_path)

    context = await SessionContextRepository(db_path).get_or_create(config.user_id)
    _write_or_echo(PromptComposer().generate_training_prompt(profile, context), output)


@prompt.command("import")
@click.argument("kind", type=click.Choice(["training", "measurement"]))
@click.argument("source", type=click.File("r", encoding="utf-8"))
def import_prompt(kind: str, source):
    """Build a prompt that structures raw logs as JSON.

    SOURCE is a text file with your notes, or - for stdin.
    """
    click.echo(PromptComposer.generate_import_prompt(kind, source.read()))


@prompt.command("extract")
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option("--apply", "apply_", is_flag=True, help="Move your session to the prompt's next session")
@click.pass_context
@async_command
async def extract(ctx: click.Context, source, apply_: bool):
    """Read the metadata block from a previously generated prompt.

    SOURCE is a file containing the prompt text, or - for stdin.
    """
    metadata = extract_metadata(source.read())
    if metadata is None:
        echo_error("No metadata block found.")
        ctx.exit(1)

    click.echo(click.style(f"Session {metadata.session_number}: {metadata.session_name}", bold=True))
    click.echo(f"Date: {metadata.date}")
    click.echo(f"Cycle progress: {metadata.cycle_progress}")
    click.echo(f"Next session: {metadata.next_session}")
    click.echo()
    click.echo("Exercises:")
    for ex in metadata.exercises:
        last = ""
        if ex.last_performance:
            lp = ex.last_performance
            last = f" (last: {lp.weight:g} x {lp.reps} x {lp.sets})"
        click.echo(f"  - {ex.name}: {ex.target_weight:g} x {ex.target_reps} x {ex.target_sets}{last}")

    if metadata.recommendations:
        click.echo()
        click.echo("Recommendations:")
        for rec in metadata.recommendations:
            click.echo(f"  - {rec}")

    if apply_:
        db_path = ensure_initialized(ctx)
        config = get_config(ctx)
        repo = SessionContextRepository(db_path)
        current = await repo.get_or_create(config.user_id)
        cycle = current.cycle_number
        if metadata.next_session < metadata.session_number:
            cycle += 1
        await repo.update(config.user_id, cycle_number=cycle, session_number=metadata.next_session)
        click.echo()
        echo_info(f"Session moved to cycle {cycle}, session {metadata.next_session}")
