"""Workout logging command."""

from datetime import datetime

import click

from ..db.repositories import WorkoutRepository
from ..models.workout import Difficulty, WorkoutRecord
from ..services.progress_analysis import ProgressAnalyzer
from .base import async_command, echo_error, echo_info, echo_success, ensure_initialized, get_config


@click.command("log")
@click.argument("exercise")
@click.argument("weight", type=float)
@click.argument("reps", type=int)
@click.argument("sets", type=int)
@click.option(
    "--difficulty",
    "-d",
    type=click.Choice([d.value for d in Difficulty]),
    default=Difficulty.MODERATE.value,
    help="How hard it felt (default: moderate)",
)
@click.option("--notes", "-n", default=None, help="Optional notes")
@click.option("--user", "user_id", default=None, help="User ID (default: FITLOOP_USER_ID)")
@click.pass_context
@async_command
async def log_workout(
    ctx: click.Context,
    exercise: str,
    weight: float,
    reps: int,
    sets: int,
    difficulty: str,
    notes: str | None,
    user_id: str | None,
):
    """Record a completed exercise.

    Examples:

        fitloop log "Dumbbell Bench Press" 30 10 3

        fitloop log "Dumbbell Squat" 45 12 3 --difficulty easy
    """
    db_path = ensure_initialized(ctx)
    user_id = user_id or get_config(ctx).user_id

    try:
        record = WorkoutRecord(
            exercise_name=exercise,
            weight=weight,
            reps=reps,
            sets=sets,
            difficulty=Difficulty(difficulty),
            timestamp=datetime.now(),
            user_id=user_id,
            notes=notes,
        )
    except ValueError as e:
        echo_error(str(e))
        ctx.exit(1)

    repo = WorkoutRepository(db_path)
    await repo.add(record)
    echo_success(f"Logged {exercise}: {weight:g} x {reps} x {sets} ({difficulty})")

    history = await repo.list_for_exercise(user_id, exercise)
    recommendation = ProgressAnalyzer().recommend_weight(exercise, history)
    echo_info(
        f"Next time: {recommendation.recommended_weight} "
        f"({recommendation.reasoning})"
    )
