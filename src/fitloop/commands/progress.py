"""Progress analysis commands."""

from datetime import datetime

import click

from ..db.repositories import WorkoutRepository
from ..services.progress_analysis import ProgressAnalyzer
from .base import async_command, echo_info, ensure_initialized, format_table, get_config


@click.group()
def progress():
    """Analyze your workout history."""
    pass


@progress.command("exercise")
@click.argument("name")
@click.pass_context
@async_command
async def exercise(ctx: click.Context, name: str):
    """Show personal record, trend and recent history for an exercise."""
    db_path = ensure_initialized(ctx)
    config = get_config(ctx)
    history = await WorkoutRepository(db_path).list_for_exercise(config.user_id, name)
    result = ProgressAnalyzer().exercise_progress(history, name)

    click.echo()
    click.echo(click.style(name, bold=True))
    click.echo("=" * 50)

    if not result.history:
        echo_info("No workouts logged for this exercise yet.")
        return

    pr = result.personal_record
    click.echo(f"Personal record: {pr.weight:g} x {pr.reps} ({pr.date.strftime('%Y-%m-%d')})")
    click.echo(f"Trend: {result.trend.value}")
    click.echo()

    rows = [
        [
            r.timestamp.strftime("%Y-%m-%d"),
            f"{r.weight:g}",
            str(r.reps),
            str(r.sets),
            r.difficulty.value,
        ]
        for r in result.history[:10]
    ]
    click.echo(format_table(["Date", "Weight", "Reps", "Sets", "Difficulty"], rows))


@progress.command("recommend")
@click.argument("name")
@click.pass_context
@async_command
async def recommend(ctx: click.Context, name: str):
    """Recommend the next working weight for an exercise."""
    db_path = ensure_initialized(ctx)
    config = get_config(ctx)
    history = await WorkoutRepository(db_path).list_for_exercise(config.user_id, name)
    rec = ProgressAnalyzer().recommend_weight(name, history)

    click.echo()
    click.echo(click.style(f"{name}: {rec.recommended_weight}", bold=True))
    click.echo(f"  {rec.reasoning}")
    click.echo(f"  Confidence: {rec.confidence:.0%}")
    click.echo(
        f"  Alternatives: {rec.alternatives.conservative} (conservative), "
        f"{rec.alternatives.aggressive} (aggressive)"
    )


@progress.command("insights")
@click.option("--since", type=click.DateTime(), help="Only include workouts on or after this date")
@click.option("--until", type=click.DateTime(), help="Only include workouts on or before this date")
@click.pass_context
@async_command
async def insights(ctx: click.Context, since: datetime | None, until: datetime | None):
    """Summarize frequency, streak and muscle balance."""
    db_path = ensure_initialized(ctx)
    config = get_config(ctx)
    workouts = await WorkoutRepository(db_path).list_for_user(config.user_id)

    time_range = None
    if since or until:
        time_range = (since or datetime.min, until or datetime.max)

    result = ProgressAnalyzer().analyze_progress(workouts, time_range)

    click.echo()
    click.echo(click.style(f"Overall: {result.overall_progress.value}", bold=True))
    click.echo("=" * 50)
    click.echo(f"Workouts per week: {result.consistency.workouts_per_week}")
    click.echo(f"Streak: {result.consistency.streak}")
    click.echo()
    click.echo(
        f"Balance: upper {result.muscle_balance.upper_body:.0f}% / "
        f"lower {result.muscle_balance.lower_body:.0f}% / "
        f"core {result.muscle_balance.core:.0f}%"
    )

    for title, items in (
        ("Strengths", result.strengths),
        ("Areas for improvement", result.areas_for_improvement),
        ("Recommendations", result.recommendations),
    ):
        if items:
            click.echo()
            click.echo(click.style(f"{title}:", bold=True))
            for item in items:
                click.echo(f"  - {item}")
