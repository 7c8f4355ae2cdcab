"""CLI entry point for fitloop."""

import click

from . import __version__
from .commands import init, log_workout, profile, progress, prompt, serve, session
from .commands.base import get_config
from .logging import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="fitloop")
@click.pass_context
def main(ctx: click.Context):
    """fitloop: adaptive training meta-prompts for your AI assistant.

    Generates a self-updating "meta-prompt" for your next workout, tracks
    your place in an 8-session cycle and analyzes your workout history.

    Example usage:

        # Initialize the project
        fitloop init

        # Create your profile
        fitloop profile setup

        # Generate the prompt for your next session
        fitloop prompt generate --output prompt.md

        # Log a workout and move on
        fitloop log "Dumbbell Bench Press" 30 10 3 --difficulty easy
        fitloop session advance
    """
    config = get_config(ctx)
    setup_logging(config.log_format, config.log_level)


# Register commands
main.add_command(init)
main.add_command(profile)
main.add_command(log_workout)
main.add_command(prompt)
main.add_command(session)
main.add_command(progress)
main.add_command(serve)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
